import random

from invigilation_scheduler.allocator import (
    PairAllocator,
    find_supervisor,
    group_by_school,
    least_loaded,
)
from invigilation_scheduler.models import AllocationLedger, pair_key

from conftest import build_invigilators


def test_group_by_school_keeps_input_order(invigilators):
    grouped = group_by_school(invigilators)

    assert list(grouped) == ['School A', 'School B', 'School C', 'School D']
    assert [inv.id for inv in grouped['School B']] == ['b0', 'b1', 'b2', 'b3', 'b4']


def test_least_loaded_breaks_ties_by_first_encountered(invigilators):
    workload = {inv.id: 1 for inv in invigilators}
    workload['a3'] = 0
    workload['b1'] = 0

    assert least_loaded(invigilators, workload).id == 'a3'
    assert least_loaded([], workload) is None


def test_find_supervisor_skips_excluded_schools(invigilators):
    workload = {inv.id: 0 for inv in invigilators}

    supervisor = find_supervisor(invigilators, workload, {'School A', 'School B'})

    assert supervisor.id == 'c0'


def test_find_supervisor_relaxes_when_all_schools_excluded(invigilators):
    workload = {inv.id: 2 for inv in invigilators}
    workload['d4'] = 1
    excluded = {inv.school for inv in invigilators}

    assert find_supervisor(invigilators, workload, excluded).id == 'd4'


def test_find_supervisor_empty_pool():
    assert find_supervisor([], {}) is None


def test_pair_allocator_random_phase_picks_cross_school_pair(invigilators, rng):
    ledger = AllocationLedger.for_invigilators(invigilators)
    allocator = PairAllocator(invigilators, rng)

    gt1, gt2 = allocator.find_pair(ledger)

    assert gt1.school != gt2.school
    assert gt1.id.endswith('0') and gt2.id.endswith('0')
    assert allocator.phase_counts['random'] == 1


def test_pair_allocator_does_not_mutate_ledger(invigilators, rng):
    ledger = AllocationLedger.for_invigilators(invigilators)
    allocator = PairAllocator(invigilators, rng)

    allocator.find_pair(ledger)

    assert set(ledger.workload.values()) == {0}
    assert ledger.pair_history == set()


def test_pair_allocator_falls_back_to_exhaustive_scan():
    invigilators = build_invigilators(2, 2)
    ledger = AllocationLedger.for_invigilators(invigilators)
    ledger.pair_history.add(pair_key('a0', 'b0'))
    allocator = PairAllocator(invigilators, random.Random(5), max_attempts=10)

    gt1, gt2 = allocator.find_pair(ledger)

    assert (gt1.id, gt2.id) == ('a0', 'b1')
    assert allocator.phase_counts['exhaustive'] == 1
    assert allocator.phase_counts['random'] == 0


def test_exhaustive_scan_prefers_low_workload():
    invigilators = build_invigilators(2, 2)
    ledger = AllocationLedger.for_invigilators(invigilators)
    ledger.pair_history.add(pair_key('a0', 'b0'))
    ledger.workload.update({'a0': 3, 'a1': 1, 'b0': 0, 'b1': 2})
    ledger.pair_history.add(pair_key('a1', 'b0'))
    allocator = PairAllocator(invigilators, random.Random(5), max_attempts=10)

    gt1, gt2 = allocator.find_pair(ledger)

    assert (gt1.id, gt2.id) == ('a1', 'b1')
    assert allocator.phase_counts['exhaustive'] == 1


def test_pair_allocator_reuses_pair_when_history_is_exhausted():
    invigilators = build_invigilators(2, 2)
    ledger = AllocationLedger.for_invigilators(invigilators)
    for a in ('a0', 'a1'):
        for b in ('b0', 'b1'):
            ledger.pair_history.add(pair_key(a, b))
    ledger.workload['a0'] = 1
    allocator = PairAllocator(invigilators, random.Random(5), max_attempts=10)

    gt1, gt2 = allocator.find_pair(ledger)

    assert (gt1.id, gt2.id) == ('a1', 'b0')
    assert allocator.phase_counts['reused'] == 1


def test_seeded_allocators_are_reproducible(invigilators):
    picks = []
    for _ in range(2):
        ledger = AllocationLedger.for_invigilators(invigilators)
        allocator = PairAllocator(invigilators, random.Random(99))
        run = []
        for _ in range(15):
            gt1, gt2 = allocator.find_pair(ledger)
            ledger.record_pair(gt1, gt2)
            run.append((gt1.id, gt2.id))
        picks.append(run)

    assert picks[0] == picks[1]


def test_record_pair_updates_history_and_workload(invigilators):
    ledger = AllocationLedger.for_invigilators(invigilators)

    ledger.record_pair(invigilators[6], invigilators[0])

    assert ledger.pair_history == {('a0', 'b1')}
    assert ledger.workload['a0'] == 1
    assert ledger.workload['b1'] == 1
