"""
Debate Leaderboard Service

Runs the full pipeline: workbook -> students -> leaderboard -> weekly
snapshot -> position changes, and shapes the result for callers that
want a limited or history-free view.

Usage:
    python -m debate_rank.service                 # build and print the top debaters
    python -m debate_rank.service baseline        # capture this week's baseline snapshot
    python -m debate_rank.service --limit all --csv data/leaderboard.csv

    Programmatic usage:
        from debate_rank.service import build_leaderboard_response
        response = build_leaderboard_response(students, tracker, limit=20, include_history=True)
"""

import sys
from pathlib import Path

# Enable both `python debate_rank/service.py` and `python -m debate_rank.service` execution modes.
_project_root = str(Path(__file__).parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import argparse
from datetime import datetime

from debate_rank.config import (
    CLI_TOP_N,
    DEFAULT_LEADERBOARD_LIMIT,
    SNAPSHOTS_FOLDER,
    STUDENTS_JSON_PATH,
    WORKBOOK_PATH,
)
from debate_rank.history.store import FileSnapshotStore, SnapshotError
from debate_rank.history.tracker import HistoryTracker, calculate_position_changes
from debate_rank.ingestion.spreadsheet import (
    IngestionError,
    export_students_json,
    load_students_json,
    read_tournament_rows,
)
from debate_rank.models import LeaderboardEntry, Student
from debate_rank.scoring.aggregator import build_students
from debate_rank.scoring.leaderboard import generate_leaderboard, leaderboard_to_dataframe
from debate_rank.utils import atomic_write_csv, parse_limit, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def load_students(
    workbook_path: Path | None = None,
    students_json_path: Path | None = None,
) -> list[Student]:
    """
    Parse the workbook into students and refresh the JSON cache.

    Falls back to the cached JSON if the workbook can't be read.

    Raises:
        IngestionError: If neither the workbook nor the cache is usable
    """
    try:
        rows = read_tournament_rows(workbook_path)
    except IngestionError as e:
        logger.error(f"Error converting workbook: {e}")
        logger.info("Falling back to cached student data")
        return load_students_json(students_json_path)

    students = build_students(rows)
    export_students_json(students, students_json_path)
    return students


def apply_history(
    leaderboard: list[LeaderboardEntry],
    tracker: HistoryTracker,
) -> tuple[list[LeaderboardEntry], dict | None]:
    """
    Save this week's snapshot and attach position changes.

    A failed save is logged; the previous snapshot is still looked up so a
    read-only store keeps week-over-week movement.

    Returns:
        (leaderboard with changes, previous snapshot or None)

    Raises:
        SnapshotError: If the previous snapshot cannot be read or is malformed
    """
    try:
        tracker.save_snapshot(leaderboard)
    except SnapshotError as e:
        logger.warning(f"Could not save this week's snapshot: {e}")
    previous = tracker.get_previous_snapshot()
    return calculate_position_changes(leaderboard, previous), previous


def build_leaderboard_response(
    students: list[Student],
    tracker: HistoryTracker | None = None,
    limit=DEFAULT_LEADERBOARD_LIMIT,
    include_history: bool = False,
) -> dict:
    """
    Build the leaderboard payload.

    History is best-effort: if the snapshot store fails the ranked
    leaderboard is still returned, without position changes.

    Args:
        students: Student records
        tracker: History tracker (None skips snapshots entirely)
        limit: Number of entries to return, or "all"
        include_history: Attach position-change fields to entries

    Returns:
        {"success": True, "data": {"leaderboard", "totalDebaters", "lastUpdated",
        and with include_history: "previousSnapshotDate", "hasPositionChanges"}}

    Raises:
        ValueError: If students is None or limit is invalid
    """
    max_entries = parse_limit(limit)
    leaderboard = generate_leaderboard(students)

    previous = None
    entries = leaderboard
    if tracker is not None:
        try:
            entries, previous = apply_history(leaderboard, tracker)
        except SnapshotError as e:
            logger.warning(f"Leaderboard history unavailable: {e}")
            entries = leaderboard

    top = entries if max_entries is None else entries[:max_entries]

    data = {
        'leaderboard': [entry.to_dict(include_history=include_history) for entry in top],
        'totalDebaters': len(leaderboard),
        'lastUpdated': datetime.now().isoformat(),
    }
    if include_history:
        data['previousSnapshotDate'] = previous.get('date') if previous else None
        data['hasPositionChanges'] = previous is not None

    return {'success': True, 'data': data}


def create_baseline_snapshot(students: list[Student], tracker: HistoryTracker) -> bool:
    """Capture the current leaderboard as this week's snapshot, replacing any existing one."""
    leaderboard = generate_leaderboard(students)
    return tracker.save_snapshot(
        leaderboard,
        force=True,
        description="Baseline snapshot - current state of the spreadsheet",
    )


def format_entry(entry: LeaderboardEntry) -> list[str]:
    lines = [
        f"Rank {entry.rank}: {entry.student_name} ({entry.school})",
        f"Total Points: {entry.total_points}",
    ]
    if entry.is_new:
        lines.append("Movement: new")
    elif entry.position_change is not None:
        lines.append(f"Movement: {entry.position_change:+d} ({entry.points_gained:+d} pts)")

    lines.append("Top achievements:")
    for item in entry.breakdown[:3]:
        lines.append(f"  - {item.achievement} at {item.tournament}")
        lines.append(f"    {item.base_points} x {item.multiplier} = {item.total_points} pts")
    return lines


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Debate achievements leaderboard")
    parser.add_argument("command", nargs="?", choices=("run", "baseline"), default="run")
    parser.add_argument("--workbook", type=Path, default=WORKBOOK_PATH)
    parser.add_argument("--students-json", type=Path, default=STUDENTS_JSON_PATH)
    parser.add_argument("--snapshots", type=Path, default=SNAPSHOTS_FOLDER)
    parser.add_argument("--limit", default=str(CLI_TOP_N), help="Entries to print, or 'all'")
    parser.add_argument("--csv", type=Path, default=None, help="Also export the full leaderboard to CSV")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """CLI entry point."""
    args = parse_args(argv)

    logger.info("=" * 60)
    logger.info("Debate Leaderboard")
    logger.info("=" * 60)

    try:
        max_entries = parse_limit(args.limit)
        students = load_students(args.workbook, args.students_json)
    except (IngestionError, ValueError) as e:
        logger.error(f"Cannot build leaderboard: {e}")
        return 1

    tracker = HistoryTracker(FileSnapshotStore(args.snapshots))

    if args.command == "baseline":
        try:
            create_baseline_snapshot(students, tracker)
        except SnapshotError as e:
            logger.error(f"Error creating baseline snapshot: {e}")
            return 1
        logger.info("Baseline captured; weekly tracking is active")
        return 0

    leaderboard = generate_leaderboard(students)
    try:
        leaderboard, previous = apply_history(leaderboard, tracker)
        if previous:
            logger.info(f"Compared against snapshot from {previous.get('date')}")
    except SnapshotError as e:
        logger.warning(f"Leaderboard history unavailable: {e}")

    if args.csv:
        atomic_write_csv(leaderboard_to_dataframe(leaderboard), args.csv, index=False)
        logger.info(f"Exported leaderboard to {args.csv}")

    shown = leaderboard if max_entries is None else leaderboard[:max_entries]
    print(f"=== TOP {len(shown)} DEBATERS ===\n")
    for entry in shown:
        print("\n".join(format_entry(entry)))
        print()

    logger.info(f"Ranked {len(leaderboard)} debaters from {len(students)} students")
    return 0


if __name__ == "__main__":
    sys.exit(main())
