# invigilation_scheduler/__main__.py

"""
Main script for running the Invigilation Scheduler.

Usage:
    python -m invigilation_scheduler [options]
"""

import argparse
import sys
from .scheduler import InvigilationScheduler
from .utils import (
    create_sample_invigilator_file,
    create_sample_room_layout_file,
    validate_invigilator_file,
    validate_room_layout_file,
)


def build_parser():
    parser = argparse.ArgumentParser(
        description='Invigilation Scheduler - Assign invigilators from several schools to exam rooms'
    )

    parser.add_argument('input_file',
                        nargs='?',
                        help='Excel file containing the invigilator list')

    parser.add_argument('-l', '--room-layout',
                        help='Excel file with the room layout (enables cluster-based scheduling)')

    parser.add_argument('-o', '--output',
                        default='invigilation_schedule.xlsx',
                        help='Output filename for the schedule (default: invigilation_schedule.xlsx)')

    parser.add_argument('-r', '--rooms',
                        type=int,
                        default=10,
                        help='Number of exam rooms, 5-50 (default: 10)')

    parser.add_argument('-s', '--sessions',
                        type=int,
                        default=2,
                        help='Number of exam sessions, 1-10 (default: 2)')

    parser.add_argument('--seed',
                        type=int,
                        default=None,
                        help='Random seed for reproducible schedules')

    parser.add_argument('--validate-only',
                        action='store_true',
                        help='Only validate the input files without scheduling')

    parser.add_argument('--sample',
                        action='store_true',
                        help='Write sample invigilator and room layout templates and exit')

    return parser


def main(argv=None):
    """Main function to run the scheduler from command line."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.sample:
        create_sample_invigilator_file()
        create_sample_room_layout_file()
        print("Sample files written: sample_invigilators.xlsx, sample_room_layout.xlsx")
        return 0

    if not args.input_file:
        parser.error('input_file is required unless --sample is given')

    # Validate input files
    checks = [(args.input_file, validate_invigilator_file)]
    if args.room_layout:
        checks.append((args.room_layout, validate_room_layout_file))

    for filename, validate in checks:
        print(f"Validating input file: {filename}")
        is_valid, errors = validate(filename)
        if not is_valid:
            print("Input file validation failed:")
            for error in errors:
                print(f"  - {error}")
            return 1

    print("Input file validation successful.")

    if args.validate_only:
        return 0

    try:
        scheduler = InvigilationScheduler(
            num_rooms=args.rooms,
            num_sessions=args.sessions,
            seed=args.seed
        )

        # Read input data
        scheduler.read_invigilator_file(args.input_file)
        if args.room_layout:
            scheduler.read_room_layout_file(args.room_layout)

        scheduler.print_summary()

        scheduler.schedule()
        scheduler.print_solution()
        scheduler.write_solution_to_file(args.output)

    except Exception as e:
        print(f"\nError during scheduling: {str(e)}")
        import traceback
        traceback.print_exc()
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
