import random
from typing import Any, Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import pandas as pd

from .allocator import MAX_PAIR_ATTEMPTS, group_by_school
from .clustering import build_clusters, validate_room_layouts
from .generator import ScheduleGenerator
from .models import Invigilator, RoomCluster, RoomLayout
from .utils import read_invigilators, read_room_layouts, write_schedule_file
from .validation import (
    calculate_workload,
    count_same_school_pairs,
    summarize_workload,
    validate_schedule,
    workload_to_dataframe,
)

MIN_INVIGILATORS = 20
MIN_ROOMS, MAX_ROOMS = 5, 50
MIN_SESSIONS, MAX_SESSIONS = 1, 10


class InvigilationScheduler:
    """
    A scheduler for assigning invigilators from several schools to exam rooms.

    This class handles reading invigilator and room layout data, running the
    allocation across sessions, and reporting on the resulting schedule.
    """

    def __init__(self,
                 num_rooms: int = 10,
                 num_sessions: int = 2,
                 seed: Optional[int] = None,
                 max_attempts: int = MAX_PAIR_ATTEMPTS,
                 session_label: str = 'Session {number}'
                 ):
        """
        Initialize the scheduler with its configuration.

        Args:
            num_rooms: Number of exam rooms per session (5-50)
            num_sessions: Number of sessions (1-10)
            seed: Seed for the pair allocator's random source, None for a live one
            max_attempts: Randomized attempts per pair before the exhaustive scan
            session_label: Format string for session names, with a {number} field
        """
        if not MIN_ROOMS <= num_rooms <= MAX_ROOMS:
            raise ValueError(f"num_rooms must be between {MIN_ROOMS} and {MAX_ROOMS}, got {num_rooms}")
        if not MIN_SESSIONS <= num_sessions <= MAX_SESSIONS:
            raise ValueError(
                f"num_sessions must be between {MIN_SESSIONS} and {MAX_SESSIONS}, got {num_sessions}"
            )
        if max_attempts < 1:
            raise ValueError("max_attempts must be positive")

        self.num_rooms = num_rooms
        self.num_sessions = num_sessions
        self.seed = seed
        self.max_attempts = max_attempts
        self.session_label = session_label

        # Data storage
        self.invigilators: List[Invigilator] = []
        self.room_layouts: List[RoomLayout] = []
        self.clusters: List[RoomCluster] = []

        self.generator = None
        self.solution = None

    def read_invigilator_file(self, filename: str) -> None:
        """
        Read invigilators from an Excel file.

        Args:
            filename: Path to the Excel file with Name, School and Preferred Role columns
        """
        print(f"Reading invigilators from {filename}...")
        self.load_invigilators(read_invigilators(filename))
        print(f"[{len(self.invigilators)} invigilators, "
              f"{len(group_by_school(self.invigilators))} schools]")

    def read_room_layout_file(self, filename: str) -> None:
        """
        Read a room layout from an Excel file and build room clusters.

        Args:
            filename: Path to the Excel file with Room, Floor and Building columns
        """
        print(f"Reading room layout from {filename}...")
        self.load_room_layouts(read_room_layouts(filename))
        print(f"[{len(self.room_layouts)} rooms, {len(self.clusters)} clusters]")

    def load_invigilators(self, invigilators: Sequence[Invigilator]) -> None:
        invigilators = list(invigilators)
        if len(invigilators) < MIN_INVIGILATORS:
            raise ValueError(
                f"At least {MIN_INVIGILATORS} invigilators are required. "
                f"Only {len(invigilators)} were supplied"
            )
        ids = [inv.id for inv in invigilators]
        if len(set(ids)) != len(ids):
            raise ValueError("Invigilator identities must be unique")
        self.invigilators = invigilators
        self.solution = None

    def load_room_layouts(self, room_layouts: Sequence[RoomLayout]) -> None:
        room_layouts = list(room_layouts)
        validate_room_layouts(room_layouts, self.num_rooms)
        clusters = build_clusters(room_layouts)
        if not clusters:
            raise ValueError("No room clusters could be built from this layout")
        self.room_layouts = room_layouts
        self.clusters = clusters
        self.solution = None

    def clear_room_layouts(self) -> None:
        """Return to flat scheduling with a fixed room count."""
        self.room_layouts = []
        self.clusters = []
        self.solution = None

    def summarize_invigilator_info(self) -> Dict[str, Any]:
        """
        Summarize the loaded invigilators and room configuration.

        Returns:
            Dictionary containing summary statistics
        """
        if not self.invigilators:
            raise ValueError("No invigilators loaded. Please run read_invigilator_file first.")

        by_school = group_by_school(self.invigilators)
        return {
            'total_invigilators': len(self.invigilators),
            'schools': {school: len(group) for school, group in by_school.items()},
            'num_rooms': self.num_rooms,
            'num_sessions': self.num_sessions,
            'required_invigilators': self._rooms_per_session() * 2,
            'total_slots': self._rooms_per_session() * self.num_sessions * 3,
            'clusters': [
                {
                    'cluster_id': c.cluster_id,
                    'floor': c.floor,
                    'building': c.building,
                    'rooms': list(c.rooms),
                } for c in self.clusters
            ],
        }

    def print_summary(self) -> None:
        """Print a formatted summary of the loaded data."""
        summary = self.summarize_invigilator_info()

        print("\nINVIGILATION DATA SUMMARY")
        print("=" * 50)
        print(f"Total Invigilators: {summary['total_invigilators']} "
              f"(at least {summary['required_invigilators']} needed)")
        print(f"Rooms: {summary['num_rooms']}  Sessions: {summary['num_sessions']}")
        print(f"Role slots to fill: {summary['total_slots']}")

        print("\nINVIGILATORS BY SCHOOL")
        print("-" * 50)
        for school, count in summary['schools'].items():
            print(f"  {school}: {count}")

        if summary['clusters']:
            print("\nROOM CLUSTERS")
            print("-" * 50)
            for cluster in summary['clusters']:
                location = cluster['floor']
                if cluster['building']:
                    location = f"{cluster['building']}, {location}"
                rooms = ', '.join(str(r) for r in cluster['rooms'])
                print(f"Cluster {cluster['cluster_id']} ({location}): rooms {rooms}")

    def schedule(self) -> Dict[str, Any]:
        """
        Run the complete scheduling process.

        Uses cluster mode when a room layout was loaded, flat mode otherwise.

        Returns:
            Solution dictionary with schedules, validation and workload
        """
        if not self.invigilators:
            raise ValueError("No data loaded. Please run read_invigilator_file first.")

        print("\nStarting scheduling process...")

        rng = random.Random(self.seed)
        self.generator = ScheduleGenerator(
            self.invigilators,
            self.num_sessions,
            rng=rng,
            max_attempts=self.max_attempts,
            session_label=self.session_label,
        )

        if self.clusters:
            print(f"Generating cluster-based schedule for {len(self.clusters)} clusters...")
            schedules = self.generator.generate_with_clusters(self.clusters)
        else:
            print(f"Generating schedule for {self.num_rooms} rooms...")
            schedules = self.generator.generate(self.num_rooms)

        print("Validating schedule...")
        validation = validate_schedule(schedules)
        workload = calculate_workload(schedules, self.invigilators)

        self.solution = {
            'mode': 'cluster' if self.clusters else 'flat',
            'schedules': schedules,
            'validation': validation,
            'workload': workload,
            'statistics': self._statistics(schedules, workload),
        }
        print(f"{len(schedules)} assignments generated "
              f"({'valid' if validation.valid else 'INVALID'})")
        return self.solution

    def write_solution_to_file(self, filename: str = 'invigilation_schedule.xlsx') -> None:
        """
        Write the solution to an Excel file.

        Args:
            filename: Output filename for the schedule
        """
        if self.solution is None:
            print("No solution to write.")
            return

        write_schedule_file(filename, self.solution['schedules'], self.solution['workload'])
        print(f"\nSchedule saved to '{filename}'")

    def print_solution(self) -> None:
        """Print the solution in a readable format."""
        if self.solution is None:
            print("No solution available.")
            return

        stats = self.solution['statistics']
        validation = self.solution['validation']

        print("\nWORKLOAD ANALYSIS")
        print("=" * 80)
        print(f"Assignments: {stats['assignments']}  Mode: {self.solution['mode']}")
        print(f"Workload min/max/avg: {stats['min']} / {stats['max']} / {stats['mean']:.1f}")
        print(f"Same-school proctor pairs: {stats['same_school_pairs']}")

        print("\nInvigilator          | School          | Workload")
        print("-" * 50)
        for entry in self.solution['workload']:
            print(f"{entry.name:20} | {entry.school:15} | {entry.workload:8}")

        print(f"\nValidation: {'PASSED' if validation.valid else 'FAILED'}")
        for error in validation.errors:
            print(f"  ERROR: {error}")
        for warning in validation.warnings:
            print(f"  WARNING: {warning}")

    def visualize_workload(self) -> None:
        """
        Visualize workload per invigilator as a bar chart, coloured by school.
        """
        if self.solution is None:
            print("No solution to visualize.")
            return

        workload_df = workload_to_dataframe(self.solution['workload'])
        schools = list(pd.unique(workload_df['School']))
        cmap = plt.get_cmap('tab10')
        colors = [cmap(schools.index(s) % 10) for s in workload_df['School']]

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.bar(range(len(workload_df)), workload_df['Workload'], color=colors, alpha=0.8)
        ax.axhline(workload_df['Workload'].mean(), color='gray', linestyle='--', alpha=0.7)

        ax.set_xticks(range(len(workload_df)))
        ax.set_xticklabels(workload_df['Invigilator'], rotation=45, ha='right')
        ax.set_xlabel('Invigilator')
        ax.set_ylabel('Role slots')
        ax.set_title('Invigilator Workload')
        handles = [plt.Rectangle((0, 0), 1, 1, color=cmap(i % 10)) for i in range(len(schools))]
        ax.legend(handles, schools, title='School')
        plt.tight_layout()

        plt.show()

    # Private helper methods
    def _rooms_per_session(self) -> int:
        if self.clusters:
            return sum(c.room_count for c in self.clusters)
        return self.num_rooms

    @staticmethod
    def _statistics(schedules, workload) -> Dict[str, Any]:
        stats = summarize_workload(workload)
        stats['assignments'] = len(schedules)
        stats['same_school_pairs'] = count_same_school_pairs(schedules)
        return stats
