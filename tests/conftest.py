import random

import matplotlib
matplotlib.use('Agg')

import pytest

from invigilation_scheduler.models import Assignment, Invigilator, RoomLayout

SCHOOL_NAMES = ['School A', 'School B', 'School C', 'School D', 'School E']


def build_invigilators(num_schools, per_school):
    """Invigilators listed school by school, ids 'a0', 'a1', ..., 'b0', ..."""
    invigilators = []
    for s in range(num_schools):
        prefix = 'abcde'[s]
        for i in range(per_school):
            invigilators.append(Invigilator(
                id=f'{prefix}{i}',
                name=f'Teacher {prefix.upper()}{i}',
                school=SCHOOL_NAMES[s],
            ))
    return invigilators


def make_assignment(room, gt1, gt2, gt3, session=1):
    return Assignment.create(session, f'Session {session}', room, gt1, gt2, gt3)


def two_floor_layout():
    return [
        RoomLayout(room, 'Floor 1' if room <= 5 else 'Floor 2', 'Block A')
        for room in range(1, 11)
    ]


@pytest.fixture
def invigilators():
    return build_invigilators(4, 5)


@pytest.fixture
def two_school_invigilators():
    return build_invigilators(2, 10)


@pytest.fixture
def rng():
    return random.Random(1234)
