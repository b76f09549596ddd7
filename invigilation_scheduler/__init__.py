"""
Invigilation Scheduler Package

Assigns invigilators drawn from several schools to exam rooms across
sessions, keeping proctor pairs cross-school, supervisors away from the
schools they oversee, and workload balanced.
"""

from .allocator import PairAllocator, find_supervisor, group_by_school
from .clustering import build_clusters, validate_room_layouts
from .generator import ScheduleGenerator
from .models import (
    Assignment,
    Invigilator,
    RoomCluster,
    RoomLayout,
    ValidationResult,
    WorkloadEntry,
)
from .scheduler import InvigilationScheduler
from .validation import calculate_workload, summarize_workload, validate_schedule
from .utils import (
    validate_invigilator_file,
    validate_room_layout_file
)

__version__ = '1.0.0'
__author__ = 'Invigilation Scheduling Team'

__all__ = [
    'InvigilationScheduler',
    'ScheduleGenerator',
    'PairAllocator',
    'find_supervisor',
    'group_by_school',
    'build_clusters',
    'validate_room_layouts',
    'validate_schedule',
    'calculate_workload',
    'summarize_workload',
    'Assignment',
    'Invigilator',
    'RoomCluster',
    'RoomLayout',
    'ValidationResult',
    'WorkloadEntry',
    'validate_invigilator_file',
    'validate_room_layout_file'
]
