"""CLI entry point for the Head TA assignment engine."""

import argparse
import logging
import sys
from datetime import date

from hta_directory.core.config import Settings
from hta_directory.core.db import init_db
from hta_directory.core.semester import (
    get_current_semester,
    get_next_semester,
    get_semester_range,
    parse_semester,
)
from hta_directory.pipeline.coverage import find_missing_assignments
from hta_directory.pipeline.eligibility import can_assign_ta
from hta_directory.pipeline.orchestrator import assign_head_ta, export_suggestions_json
from hta_directory.pipeline.suggestions import suggest_assignments
from hta_directory.pipeline.workload import calculate_workload
from hta_directory.store.sqlite import SQLiteAssignmentStore


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Head TA directory - semester calendar and TA assignment engine",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- semester ---
    semester_parser = subparsers.add_parser("semester", help="Show current/next semester")
    semester_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        help="Reference date YYYY-MM-DD (default: today)",
    )
    semester_parser.add_argument("--next", action="store_true", help="Show the following semester")
    semester_parser.add_argument(
        "--range",
        nargs=2,
        metavar=("START", "END"),
        help='List semesters between two terms, e.g. --range "Fall 2023" "Fall 2025"',
    )
    semester_parser.add_argument(
        "--include-summer",
        action="store_true",
        help="Include summer terms in --range output",
    )
    _add_common(semester_parser)

    # --- workload ---
    workload_parser = subparsers.add_parser("workload", help="Show a head TA's weekly hours")
    workload_parser.add_argument("--user", required=True, help="User ID")
    workload_parser.add_argument("--semester", help='Limit to one semester, e.g. "Fall 2024"')
    _add_common(workload_parser)

    # --- check ---
    check_parser = subparsers.add_parser("check", help="Check whether a TA can be assigned")
    check_parser.add_argument("--user", required=True, help="User ID")
    check_parser.add_argument("--offering", required=True, help="Course offering ID")
    check_parser.add_argument("--hours", type=int, help="Proposed hours per week")
    _add_common(check_parser)

    # --- assign ---
    assign_parser = subparsers.add_parser("assign", help="Assign a TA if eligible")
    assign_parser.add_argument("--user", required=True, help="User ID")
    assign_parser.add_argument("--offering", required=True, help="Course offering ID")
    assign_parser.add_argument("--hours", type=int, help="Hours per week")
    _add_common(assign_parser)

    # --- suggest ---
    suggest_parser = subparsers.add_parser("suggest", help="Suggest head TAs for an offering")
    suggest_parser.add_argument("--offering", required=True, help="Course offering ID")
    suggest_parser.add_argument("--limit", type=int, help="Maximum suggestions")
    suggest_parser.add_argument("--export", choices=["json"], help="Export results to format (json)")
    _add_common(suggest_parser)

    # --- missing ---
    missing_parser = subparsers.add_parser("missing", help="List offerings without a head TA")
    missing_parser.add_argument(
        "--include-past",
        action="store_true",
        help="Include offerings from past semesters",
    )
    _add_common(missing_parser)

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str) -> Settings:
    """Load settings, falling back to defaults when the default file is absent."""
    try:
        return Settings.from_yaml(path)
    except FileNotFoundError:
        if path != "config/settings.yaml":
            raise
        logging.getLogger(__name__).debug("No %s - using default settings", path)
        return Settings()


def cmd_semester(args: argparse.Namespace) -> None:
    """Handle semester subcommand."""
    if args.range:
        start = parse_semester(args.range[0])
        end = parse_semester(args.range[1])
        for s in get_semester_range(
            start.year, start.season, end.year, end.season, args.include_summer,
        ):
            print(f"{s.display}: {s.start_date} - {s.end_date}")
        return

    current = get_current_semester(args.date)
    semester = get_next_semester(current) if args.next else current
    print(f"{semester.display}: {semester.start_date} - {semester.end_date}")


def cmd_workload(args: argparse.Namespace, store: SQLiteAssignmentStore, settings: Settings) -> None:
    """Handle workload subcommand."""
    year = season = None
    if args.semester:
        semester = parse_semester(args.semester)
        year, season = semester.year, semester.season
    workload = calculate_workload(store, args.user, year, season, settings.limits)
    print(f"{args.user}: {workload.total_hours_per_week} hours/week "
          f"across {workload.course_count} assignments")
    for a in workload.assignments:
        hours = a.hours_per_week if a.hours_per_week is not None else settings.limits.default_hours_per_week
        print(f"  {a.course_number} ({a.semester}): {hours} h/week")


def cmd_check(args: argparse.Namespace, store: SQLiteAssignmentStore, settings: Settings) -> None:
    """Handle check subcommand."""
    verdict = can_assign_ta(store, args.user, args.offering, args.hours, settings.limits)
    status = "OK" if verdict.can_assign else "REJECTED"
    print(f"{status}: {verdict.current_hours}/{verdict.max_hours} hours this semester")
    for reason in verdict.reasons:
        print(f"  - {reason}")


def cmd_assign(args: argparse.Namespace, store: SQLiteAssignmentStore, settings: Settings) -> None:
    """Handle assign subcommand."""
    outcome = assign_head_ta(store, args.user, args.offering, args.hours, settings)
    if outcome.assignment is not None:
        a = outcome.assignment
        print(f"Assigned {a.user_id} to {a.course_number} ({a.semester}), "
              f"{a.hours_per_week} h/week")
        return
    print("Not assigned:")
    for reason in outcome.verdict.reasons:
        print(f"  - {reason}")


def cmd_suggest(args: argparse.Namespace, store: SQLiteAssignmentStore, settings: Settings) -> None:
    """Handle suggest subcommand."""
    suggestions = suggest_assignments(store, args.offering, args.limit, settings)
    if args.export == "json":
        print(export_suggestions_json(suggestions))
        return
    if not suggestions:
        print("No suggestions available.")
        return
    for i, s in enumerate(suggestions, start=1):
        print(f"{i}. {s.user_name} (score {s.score:.0f}, suggest {s.suggested_hours} h/week, "
              f"currently {s.current_hours}/{s.max_hours})")
        for reason in s.reasons:
            print(f"     - {reason}")


def cmd_missing(args: argparse.Namespace, store: SQLiteAssignmentStore) -> None:
    """Handle missing subcommand."""
    missing = find_missing_assignments(store, include_past=args.include_past)
    if not missing:
        print("Every offering has a head TA.")
        return
    for m in missing:
        professor = m.professor_name or "no professor"
        print(f"  {m.semester}: {m.course_number} {m.course_name} ({professor}, "
              f"created {m.days_since_created} days ago)")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "semester":
        try:
            cmd_semester(args)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        return

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    conn = init_db(settings.database.path)
    store = SQLiteAssignmentStore(conn)
    try:
        if args.command == "workload":
            cmd_workload(args, store, settings)
        elif args.command == "check":
            cmd_check(args, store, settings)
        elif args.command == "assign":
            cmd_assign(args, store, settings)
        elif args.command == "suggest":
            cmd_suggest(args, store, settings)
        elif args.command == "missing":
            cmd_missing(args, store)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
