"""
Spreadsheet helpers for the Invigilation Scheduler.
"""

import pandas as pd
from typing import List, Sequence, Tuple

from .models import PREFERRED_ROLES, Assignment, Invigilator, RoomLayout, WorkloadEntry
from .validation import schedule_to_dataframe, workload_to_dataframe

INVIGILATOR_COLUMNS = ['Name', 'School']
ROOM_LAYOUT_COLUMNS = ['Room', 'Floor']

SAMPLE_SCHOOLS = ['School A', 'School B', 'School C', 'School D']
SAMPLE_NAMES = [
    'Alice Nguyen', 'Bao Tran', 'Chi Le', 'Dung Pham', 'Em Hoang',
    'Giang Do', 'Hai Vu', 'Hoa Bui', 'Khanh Dang', 'Lan Mai',
    'Long Duong', 'Minh Vo', 'Nam Truong', 'Oanh Ly', 'Phuc Phan',
    'Quynh Chu', 'Son Dinh', 'Thu Ha', 'Tuan Cao', 'Uyen La',
]


def validate_invigilator_file(filename: str) -> Tuple[bool, List[str]]:
    """
    Validate that the invigilator workbook has the required columns.

    Args:
        filename: Path to the Excel file

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    return _validate_first_sheet(filename, INVIGILATOR_COLUMNS, 'Invigilator')


def validate_room_layout_file(filename: str) -> Tuple[bool, List[str]]:
    """
    Validate that the room layout workbook has the required columns.

    Args:
        filename: Path to the Excel file

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    return _validate_first_sheet(filename, ROOM_LAYOUT_COLUMNS, 'Room layout')


def _validate_first_sheet(filename: str, required_cols: List[str],
                          label: str) -> Tuple[bool, List[str]]:
    errors = []

    try:
        df = pd.read_excel(filename, sheet_name=0)

        missing_cols = [col for col in required_cols if col not in df.columns]
        if missing_cols:
            errors.append(f"{label} sheet missing columns: {', '.join(missing_cols)}")
        elif df.empty:
            errors.append(f"{label} sheet contains no rows")

    except FileNotFoundError:
        errors.append(f"File not found: {filename}")
    except Exception as e:
        errors.append(f"Error reading file: {str(e)}")

    return len(errors) == 0, errors


def read_invigilators(filename: str) -> List[Invigilator]:
    """
    Read invigilators from the first sheet of an Excel file.

    Identities are assigned in row order. Unknown preferred roles are dropped.

    Raises:
        ValueError: If a row has no name or school, or the sheet is empty
    """
    df = pd.read_excel(filename, sheet_name=0, dtype=str).fillna('')
    return invigilators_from_records(df.to_dict('records'))


def invigilators_from_records(records: Sequence[dict]) -> List[Invigilator]:
    invigilators = []
    for index, row in enumerate(records):
        name = str(row.get('Name', '')).strip()
        school = str(row.get('School', '')).strip()
        if not name or not school:
            raise ValueError(f"Row {index + 1}: missing 'Name' or 'School'")

        role = str(row.get('Preferred Role', '') or '').strip()
        invigilators.append(Invigilator(
            id=f"invigilator-{index}",
            name=name,
            school=school,
            preferred_role=role if role in PREFERRED_ROLES else None,
        ))

    if not invigilators:
        raise ValueError("Invigilator sheet contains no rows")
    return invigilators


def read_room_layouts(filename: str) -> List[RoomLayout]:
    """
    Read the room layout from the first sheet of an Excel file.

    Raises:
        ValueError: If a row has no room number or floor, or the sheet is empty
    """
    df = pd.read_excel(filename, sheet_name=0, dtype=str).fillna('')
    return room_layouts_from_records(df.to_dict('records'))


def room_layouts_from_records(records: Sequence[dict]) -> List[RoomLayout]:
    layouts = []
    for index, row in enumerate(records):
        room = str(row.get('Room', '')).strip()
        floor = str(row.get('Floor', '')).strip()
        if not room or not floor:
            raise ValueError(f"Row {index + 1}: missing 'Room' or 'Floor'")

        try:
            value = float(room)
        except ValueError:
            raise ValueError(f"Row {index + 1}: invalid room number '{room}'")
        if not value.is_integer():
            raise ValueError(f"Row {index + 1}: invalid room number '{room}'")
        room_number = int(value)

        layouts.append(RoomLayout(
            room_number=room_number,
            floor=floor,
            building=str(row.get('Building', '') or '').strip(),
        ))

    if not layouts:
        raise ValueError("Room layout sheet contains no rows")
    return layouts


def write_schedule_file(filename: str,
                        schedules: Sequence[Assignment],
                        workload: Sequence[WorkloadEntry]) -> None:
    """
    Write schedule, workload and per-session statistics to one workbook.
    """
    schedule_df = schedule_to_dataframe(schedules)
    workload_df = workload_to_dataframe(workload)
    stats_df = (schedule_df.groupby('Session', sort=False)
                .size()
                .reset_index(name='Rooms'))

    with pd.ExcelWriter(filename, engine='openpyxl') as writer:
        schedule_df.to_excel(writer, sheet_name='Schedule', index=False)
        workload_df.to_excel(writer, sheet_name='Workload', index=False)
        stats_df.to_excel(writer, sheet_name='Statistics', index=False)


def create_sample_invigilator_file(filename: str = 'sample_invigilators.xlsx') -> None:
    """Write a 20-invigilator template spread over four schools."""
    rows = []
    for index, name in enumerate(SAMPLE_NAMES):
        rows.append({
            'Name': name,
            'School': SAMPLE_SCHOOLS[index % len(SAMPLE_SCHOOLS)],
            'Preferred Role': PREFERRED_ROLES[index] if index < len(PREFERRED_ROLES) else '',
        })
    pd.DataFrame(rows).to_excel(filename, sheet_name='Invigilators', index=False)


def create_sample_room_layout_file(filename: str = 'sample_room_layout.xlsx') -> None:
    """Write a 10-room template split over two floors of one building."""
    rows = [
        {'Room': room, 'Floor': 'Floor 1' if room <= 5 else 'Floor 2', 'Building': 'Block A'}
        for room in range(1, 11)
    ]
    pd.DataFrame(rows).to_excel(filename, sheet_name='Room Layout', index=False)
