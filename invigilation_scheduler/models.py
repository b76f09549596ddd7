"""
Data model for invigilation scheduling runs.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

PREFERRED_ROLES = ('GT1', 'GT2', 'GT3', 'Flexible')


@dataclass(frozen=True)
class Invigilator:
    """
    A person who can be assigned to watch an exam room.

    Attributes:
        id: Unique identity within a scheduling run
        name: Display name
        school: School the invigilator comes from
        preferred_role: Optional role tag collected from input data.
            It is stored for reporting only and never affects allocation.
    """
    id: str
    name: str
    school: str
    preferred_role: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.school})"


@dataclass
class RoomLayout:
    room_number: int
    floor: str
    building: str = ''


@dataclass
class RoomCluster:
    """A group of co-located rooms sharing one supervisor per session."""
    cluster_id: int
    floor: str
    building: str
    rooms: List[int] = field(default_factory=list)

    @property
    def room_count(self) -> int:
        return len(self.rooms)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.floor, self.building)


@dataclass
class Assignment:
    """One schedule entry: the three role slots of a room in a session."""
    session_number: int
    session_name: str
    room_number: int
    gt1_id: str
    gt1_name: str
    gt1_school: str
    gt2_id: str
    gt2_name: str
    gt2_school: str
    gt3_id: str
    gt3_name: str
    gt3_school: str

    @classmethod
    def create(cls, session_number: int, session_name: str, room_number: int,
               gt1: Invigilator, gt2: Invigilator,
               gt3: Invigilator) -> 'Assignment':
        return cls(
            session_number=session_number,
            session_name=session_name,
            room_number=room_number,
            gt1_id=gt1.id, gt1_name=gt1.name, gt1_school=gt1.school,
            gt2_id=gt2.id, gt2_name=gt2.name, gt2_school=gt2.school,
            gt3_id=gt3.id, gt3_name=gt3.name, gt3_school=gt3.school,
        )

    @property
    def proctor_schools(self) -> Tuple[str, str]:
        return (self.gt1_school, self.gt2_school)

    def role_ids(self) -> Tuple[str, str, str]:
        return (self.gt1_id, self.gt2_id, self.gt3_id)


@dataclass
class WorkloadEntry:
    invigilator_id: str
    name: str
    school: str
    workload: int


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class AllocationLedger:
    """
    Mutable state owned by a single generation run.

    Attributes:
        workload: Invigilator id -> role slots held so far
        pair_history: Unordered proctor pairs already used together
    """
    workload: Dict[str, int] = field(default_factory=dict)
    pair_history: Set[Tuple[str, str]] = field(default_factory=set)

    @classmethod
    def for_invigilators(cls, invigilators: List[Invigilator]) -> 'AllocationLedger':
        return cls(workload={inv.id: 0 for inv in invigilators})

    def record_pair(self, gt1: Invigilator, gt2: Invigilator) -> None:
        """Register an accepted proctor pair and charge both proctors."""
        self.pair_history.add(pair_key(gt1.id, gt2.id))
        self.workload[gt1.id] += 1
        self.workload[gt2.id] += 1


def pair_key(first_id: str, second_id: str) -> Tuple[str, str]:
    """Order-independent key for a proctor pair."""
    return tuple(sorted((first_id, second_id)))
