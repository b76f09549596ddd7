"""
Selection of proctor pairs and supervisors.

Selection functions only read the ledger. Callers charge workload and record
pair history once a choice is accepted.
"""

import random
from collections import Counter
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .models import AllocationLedger, Invigilator, pair_key

MAX_PAIR_ATTEMPTS = 1000


def group_by_school(invigilators: Iterable[Invigilator]) -> Dict[str, List[Invigilator]]:
    """Group invigilators by school, keeping input order inside each group."""
    grouped: Dict[str, List[Invigilator]] = {}
    for inv in invigilators:
        grouped.setdefault(inv.school, []).append(inv)
    return grouped


def least_loaded(candidates: Iterable[Invigilator],
                 workload: Dict[str, int]) -> Optional[Invigilator]:
    """Minimum-workload invigilator; ties go to the first one encountered."""
    best = None
    for inv in candidates:
        if best is None or workload[inv.id] < workload[best.id]:
            best = inv
    return best


def find_supervisor(invigilators: List[Invigilator],
                    workload: Dict[str, int],
                    excluded_schools: Set[str] = frozenset()) -> Optional[Invigilator]:
    """
    Pick the least-loaded invigilator whose school is not excluded.

    When every school is excluded the constraint is relaxed and the
    least-loaded invigilator overall is returned. None is only possible for
    an empty invigilator list.
    """
    eligible = [inv for inv in invigilators if inv.school not in excluded_schools]
    if eligible:
        return least_loaded(eligible, workload)
    return least_loaded(invigilators, workload)


class PairAllocator:
    """
    Chooses two proctors from different schools for a room.

    Selection runs in three phases: a bounded randomized search over school
    pairs, an exhaustive scan of cross-school pairs sorted by workload, and a
    last resort that reuses a known pair. `phase_counts` records which phase
    produced each pair.
    """

    def __init__(self, invigilators: List[Invigilator],
                 rng: Optional[random.Random] = None,
                 max_attempts: int = MAX_PAIR_ATTEMPTS):
        self.invigilators = list(invigilators)
        self.by_school = group_by_school(self.invigilators)
        self.schools = list(self.by_school)
        self.rng = rng if rng is not None else random.Random()
        self.max_attempts = max_attempts
        self.phase_counts = Counter()

    def find_pair(self, ledger: AllocationLedger) -> Tuple[Invigilator, Invigilator]:
        pair = self._random_pair(ledger)
        if pair is not None:
            self.phase_counts['random'] += 1
            return pair

        ranked = sorted(self.invigilators, key=lambda inv: ledger.workload[inv.id])

        pair = self._unused_pair(ranked, ledger)
        if pair is not None:
            self.phase_counts['exhaustive'] += 1
            return pair

        self.phase_counts['reused'] += 1
        first = ranked[0]
        second = next((inv for inv in ranked if inv.school != first.school), ranked[1])
        return first, second

    def _random_pair(self, ledger: AllocationLedger) -> Optional[Tuple[Invigilator, Invigilator]]:
        schools = list(self.schools)
        for _ in range(self.max_attempts):
            self.rng.shuffle(schools)
            first = least_loaded(self.by_school[schools[0]], ledger.workload)
            second = least_loaded(self.by_school[schools[1]], ledger.workload)
            if pair_key(first.id, second.id) not in ledger.pair_history:
                return first, second
        return None

    @staticmethod
    def _unused_pair(ranked: List[Invigilator],
                     ledger: AllocationLedger) -> Optional[Tuple[Invigilator, Invigilator]]:
        for i, first in enumerate(ranked):
            for second in ranked[i + 1:]:
                if first.school == second.school:
                    continue
                if pair_key(first.id, second.id) not in ledger.pair_history:
                    return first, second
        return None
