"""
Rule checks and workload reporting for finished schedules.
"""

from collections import Counter
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from .models import Assignment, Invigilator, ValidationResult, WorkloadEntry, pair_key

MAX_WORKLOAD_SPREAD = 2


def validate_schedule(schedules: Sequence[Assignment]) -> ValidationResult:
    """
    Scan a schedule for rule violations.

    Same-school and identical proctors in a room are errors. Repeated proctor
    pairs and a workload spread above MAX_WORKLOAD_SPREAD are warnings.

    Args:
        schedules: Finished assignment list

    Returns:
        ValidationResult with valid set when no errors were found
    """
    errors = []
    warnings = []

    for schedule in schedules:
        if schedule.gt1_school == schedule.gt2_school:
            errors.append(
                f"{schedule.session_name}, Room {schedule.room_number}: "
                f"GT1 and GT2 are from the same school ({schedule.gt1_school})"
            )
        if schedule.gt1_id == schedule.gt2_id:
            errors.append(
                f"{schedule.session_name}, Room {schedule.room_number}: "
                f"GT1 and GT2 are the same invigilator"
            )

    names = {}
    pair_counts = Counter()
    for schedule in schedules:
        names.setdefault(schedule.gt1_id, schedule.gt1_name)
        names.setdefault(schedule.gt2_id, schedule.gt2_name)
        pair_counts[pair_key(schedule.gt1_id, schedule.gt2_id)] += 1

    for (first_id, second_id), count in pair_counts.items():
        if count > 1:
            warnings.append(
                f"Pair {names[first_id]} - {names[second_id]} invigilates together {count} times"
            )

    loads = list(_count_roles(schedules).values())
    if loads:
        max_load = max(loads)
        min_load = min(loads)
        if max_load - min_load > MAX_WORKLOAD_SPREAD:
            warnings.append(
                f"Workload imbalance: {max_load - min_load} slots "
                f"(max: {max_load}, min: {min_load})"
            )

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def calculate_workload(schedules: Sequence[Assignment],
                       invigilators: Sequence[Invigilator]) -> List[WorkloadEntry]:
    """
    Count role slots per invigilator, including those who were never assigned.

    Returns:
        One entry per invigilator, sorted by descending workload. Ties keep
        the invigilator input order.
    """
    counts = _count_roles(schedules)
    entries = [
        WorkloadEntry(inv.id, inv.name, inv.school, counts.get(inv.id, 0))
        for inv in invigilators
    ]
    return sorted(entries, key=lambda entry: -entry.workload)


def summarize_workload(workload: Sequence[WorkloadEntry]) -> Dict[str, float]:
    """Minimum, maximum, mean and spread of a workload report."""
    if not workload:
        return {'invigilators': 0, 'min': 0, 'max': 0, 'mean': 0.0, 'spread': 0}

    loads = np.array([entry.workload for entry in workload])
    return {
        'invigilators': len(workload),
        'min': int(loads.min()),
        'max': int(loads.max()),
        'mean': round(float(loads.mean()), 1),
        'spread': int(loads.max() - loads.min()),
    }


def count_same_school_pairs(schedules: Sequence[Assignment]) -> int:
    return sum(1 for s in schedules if s.gt1_school == s.gt2_school)


def schedule_to_dataframe(schedules: Sequence[Assignment]) -> pd.DataFrame:
    """Tabular view of a schedule for printing and export."""
    return pd.DataFrame(
        [{
            'Session': s.session_name,
            'Room': s.room_number,
            'GT1': s.gt1_name,
            'GT1 School': s.gt1_school,
            'GT2': s.gt2_name,
            'GT2 School': s.gt2_school,
            'GT3': s.gt3_name,
            'GT3 School': s.gt3_school,
        } for s in schedules],
        columns=['Session', 'Room', 'GT1', 'GT1 School', 'GT2', 'GT2 School', 'GT3', 'GT3 School'],
    )


def workload_to_dataframe(workload: Sequence[WorkloadEntry]) -> pd.DataFrame:
    return pd.DataFrame(
        [{'Invigilator': w.name, 'School': w.school, 'Workload': w.workload} for w in workload],
        columns=['Invigilator', 'School', 'Workload'],
    )


def _count_roles(schedules: Sequence[Assignment]) -> Counter:
    counts = Counter()
    for schedule in schedules:
        for invigilator_id in schedule.role_ids():
            if invigilator_id:
                counts[invigilator_id] += 1
    return counts
