"""
Schedule generation across sessions, in flat and cluster-based modes.
"""

import random
from dataclasses import replace
from typing import List, Optional, Set

from .allocator import MAX_PAIR_ATTEMPTS, PairAllocator, find_supervisor, group_by_school
from .models import AllocationLedger, Assignment, Invigilator, RoomCluster

FLAT_BLOCK_SIZE = 5


class ScheduleGenerator:
    """
    Builds the assignment list for one set of invigilators.

    Every call to `generate` or `generate_with_clusters` is an independent run
    with a fresh ledger; the ledger of the latest run stays available on
    `self.ledger` for inspection.
    """

    def __init__(self,
                 invigilators: List[Invigilator],
                 num_sessions: int,
                 rng: Optional[random.Random] = None,
                 max_attempts: int = MAX_PAIR_ATTEMPTS,
                 session_label: str = 'Session {number}'):
        self.invigilators = list(invigilators)
        self.num_sessions = num_sessions
        self.rng = rng if rng is not None else random.Random()
        self.max_attempts = max_attempts
        self.session_label = session_label

        self.ledger: Optional[AllocationLedger] = None
        self.pair_allocator: Optional[PairAllocator] = None
        self.degenerate_fallbacks = 0
        self._by_id = {inv.id: inv for inv in self.invigilators}

    def generate(self, num_rooms: int) -> List[Assignment]:
        """
        Flat mode: rooms 1..num_rooms, supervisors rotating every 5 rooms.

        Raises:
            ValueError: If fewer than 2 schools or too few invigilators
        """
        self._check_preconditions(num_rooms)
        self._start_run()

        schedules: List[Assignment] = []
        for session in range(1, self.num_sessions + 1):
            session_name = self._session_name(session)

            for room in range(1, num_rooms + 1):
                gt1, gt2 = self.pair_allocator.find_pair(self.ledger)
                self.ledger.record_pair(gt1, gt2)

                gt3 = None
                if room % FLAT_BLOCK_SIZE == 1 or room == 1:
                    window = schedules[-FLAT_BLOCK_SIZE:]
                    excluded = {gt1.school, gt2.school}
                    for previous in window:
                        excluded.update(previous.proctor_schools)
                    gt3 = find_supervisor(self.invigilators, self.ledger.workload, excluded)
                    if gt3 is not None:
                        self.ledger.workload[gt3.id] += 1
                elif schedules:
                    gt3 = self._by_id.get(schedules[-1].gt3_id)

                if gt3 is None:
                    gt3 = self._degenerate_supervisor()

                schedules.append(Assignment.create(session, session_name, room, gt1, gt2, gt3))

        return schedules

    def generate_with_clusters(self, clusters: List[RoomCluster]) -> List[Assignment]:
        """
        Cluster mode: one supervisor per cluster per session.

        Output is sorted by session then room number.

        Raises:
            ValueError: If the cluster list is empty, fewer than 2 schools
                exist or there are too few invigilators
        """
        if not clusters:
            raise ValueError("At least one room cluster is required for cluster-based scheduling")

        total_rooms = sum(cluster.room_count for cluster in clusters)
        self._check_preconditions(total_rooms)
        self._start_run()

        schedules: List[Assignment] = []
        for session in range(1, self.num_sessions + 1):
            session_name = self._session_name(session)
            for cluster in clusters:
                provisional = self.fill_cluster(cluster, session, session_name)
                schedules.extend(self.correct_cluster_supervisor(provisional))

        schedules.sort(key=lambda s: (s.session_number, s.room_number))
        return schedules

    def fill_cluster(self, cluster: RoomCluster, session: int,
                     session_name: str) -> List[Assignment]:
        """Assign proctor pairs to every room of a cluster under a provisional supervisor."""
        gt3 = find_supervisor(self.invigilators, self.ledger.workload)
        if gt3 is not None:
            self.ledger.workload[gt3.id] += 1
        else:
            gt3 = self._degenerate_supervisor()

        filled = []
        for room in cluster.rooms:
            gt1, gt2 = self.pair_allocator.find_pair(self.ledger)
            self.ledger.record_pair(gt1, gt2)
            filled.append(Assignment.create(session, session_name, room, gt1, gt2, gt3))
        return filled

    def correct_cluster_supervisor(self, cluster_schedules: List[Assignment]) -> List[Assignment]:
        """
        Replace a cluster's supervisor if it shares a school with any proctor.

        Runs once. The replacement is accepted only if its school is free of
        the cluster's proctor schools; otherwise the input is returned as is.
        """
        if not cluster_schedules:
            return cluster_schedules

        used_schools: Set[str] = set()
        for schedule in cluster_schedules:
            used_schools.update(schedule.proctor_schools)

        current_id = cluster_schedules[0].gt3_id
        current = self._by_id.get(current_id)
        if current is None or current.school not in used_schools:
            return cluster_schedules

        better = find_supervisor(self.invigilators, self.ledger.workload, used_schools)
        if better is None or better.school in used_schools:
            return cluster_schedules

        self.ledger.workload[current.id] -= 1
        self.ledger.workload[better.id] += 1
        return [
            replace(schedule, gt3_id=better.id, gt3_name=better.name, gt3_school=better.school)
            for schedule in cluster_schedules
        ]

    # Private helper methods
    def _check_preconditions(self, num_rooms: int) -> None:
        schools = group_by_school(self.invigilators)
        if len(schools) < 2:
            raise ValueError("At least 2 schools are required to assign invigilators")

        required = num_rooms * 2
        if len(self.invigilators) < required:
            raise ValueError(
                f"At least {required} invigilators are required. "
                f"Currently only {len(self.invigilators)} are available"
            )

    def _start_run(self) -> None:
        self.ledger = AllocationLedger.for_invigilators(self.invigilators)
        self.pair_allocator = PairAllocator(self.invigilators, self.rng, self.max_attempts)
        self._by_id = {inv.id: inv for inv in self.invigilators}
        self.degenerate_fallbacks = 0

    def _session_name(self, session: int) -> str:
        return self.session_label.format(number=session)

    def _degenerate_supervisor(self) -> Invigilator:
        # Unreachable with a non-empty invigilator list.
        self.degenerate_fallbacks += 1
        return self.invigilators[0]
