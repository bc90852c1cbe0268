"""
Leaderboard History Tracker

Keeps one leaderboard snapshot per week (keyed by the week's Sunday) and
compares the current leaderboard against the most recent earlier week.

A week's snapshot is written once; later saves in the same week are
no-ops. Position changes are positive when a student moved up.

Usage:
    tracker = HistoryTracker(FileSnapshotStore())
    tracker.save_snapshot(leaderboard)
    previous = tracker.get_previous_snapshot()
    leaderboard = calculate_position_changes(leaderboard, previous)
"""

from datetime import date, datetime, timedelta
from typing import Callable

from debate_rank.history.store import SnapshotError, SnapshotStore
from debate_rank.models import LeaderboardEntry, student_key
from debate_rank.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

WEEK_KEY_FORMAT = "%Y-%m-%d"


def week_start(now: datetime | None = None) -> datetime:
    """Return the most recent Sunday on or before `now`, at local midnight."""
    now = now or datetime.now()
    days_since_sunday = (now.weekday() + 1) % 7  # Monday=0 .. Sunday=6
    sunday = now - timedelta(days=days_since_sunday)
    return sunday.replace(hour=0, minute=0, second=0, microsecond=0)


def week_key(moment: datetime | date) -> str:
    return moment.strftime(WEEK_KEY_FORMAT)


def parse_week_key(key: str) -> datetime | None:
    try:
        return datetime.strptime(key, WEEK_KEY_FORMAT)
    except ValueError:
        return None


def snapshot_projection(leaderboard: list[LeaderboardEntry]) -> list[dict]:
    """Reduce leaderboard entries to what a snapshot keeps."""
    return [
        {
            'studentName': entry.student_name,
            'school': entry.school,
            'rank': entry.rank,
            'totalPoints': entry.total_points,
        }
        for entry in leaderboard
    ]


class HistoryTracker:
    """
    Weekly snapshot persistence and lookup.

    Args:
        store: Snapshot store keyed by week
        clock: Returns the current local time (injectable for tests)
    """

    def __init__(self, store: SnapshotStore, clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self.clock = clock

    def current_week(self) -> datetime:
        return week_start(self.clock())

    def save_snapshot(
        self,
        leaderboard: list[LeaderboardEntry],
        force: bool = False,
        description: str | None = None,
    ) -> bool:
        """
        Save this week's snapshot unless one already exists.

        Args:
            leaderboard: Ranked leaderboard to capture
            force: Overwrite an existing snapshot for this week (baseline capture)
            description: Optional note stored with the snapshot

        Returns:
            True if a snapshot was written, False if this week already had one

        Raises:
            SnapshotError: If the store cannot be read or written
        """
        now = self.clock()
        sunday = week_start(now)
        key = week_key(sunday)

        if not force and self.store.exists(key):
            logger.info(f"Snapshot already exists for {key}")
            return False

        snapshot = {
            'date': sunday.isoformat(),
            'timestamp': now.isoformat(),
            'leaderboard': snapshot_projection(leaderboard),
        }
        if description:
            snapshot['description'] = description

        # Another request may have written it while we built ours
        if not force and self.store.exists(key):
            logger.info(f"Snapshot for {key} was written concurrently; keeping it")
            return False

        self.store.write(key, snapshot)
        logger.info(f"Saved leaderboard snapshot for {key} ({len(leaderboard)} students)")
        return True

    def get_previous_snapshot(self) -> dict | None:
        """
        Return the most recent snapshot from before the current week.

        Raises:
            SnapshotError: If the store cannot be read
        """
        current = self.current_week()

        for key in sorted(self.store.list_all(), reverse=True):
            snapshot_date = parse_week_key(key)
            if snapshot_date is None:
                logger.warning(f"Ignoring snapshot with unrecognized key: {key}")
                continue
            if snapshot_date < current:
                return self.store.read(key)

        return None

    def list_snapshots(self) -> list[dict]:
        """All stored snapshots, newest first, as {key, date, displayDate}."""
        snapshots = []
        for key in sorted(self.store.list_all(), reverse=True):
            snapshot_date = parse_week_key(key)
            if snapshot_date is None:
                continue
            snapshots.append({'key': key, 'date': snapshot_date, 'displayDate': key})
        return snapshots

    def load_snapshot(self, key: str) -> dict | None:
        """Load one snapshot by week key, or None if there is none."""
        if not self.store.exists(key):
            return None
        return self.store.read(key)


def calculate_position_changes(
    leaderboard: list[LeaderboardEntry],
    previous_snapshot: dict | None,
) -> list[LeaderboardEntry]:
    """
    Attach week-over-week movement to each entry.

    Students are matched on name and school. Entries without a match (or
    when there is no previous snapshot) are marked new.

    Returns:
        New entries with position_change, is_new, and for returning
        students previous_rank, previous_points and points_gained
    """
    if not previous_snapshot:
        return [entry.with_changes(position_change=None, is_new=True) for entry in leaderboard]

    try:
        previous_positions = {
            student_key(row.get('studentName'), row.get('school')): (row['rank'], row['totalPoints'])
            for row in previous_snapshot['leaderboard']
        }
    except (KeyError, TypeError, AttributeError) as e:
        raise SnapshotError(f"Malformed previous snapshot: {e}") from e

    for key, values in previous_positions.items():
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in values):
            raise SnapshotError(f"Malformed previous snapshot: non-integer rank or points for {key}")

    changed = []
    for entry in leaderboard:
        previous = previous_positions.get(entry.key)
        if previous is None:
            changed.append(entry.with_changes(position_change=None, is_new=True))
            continue

        previous_rank, previous_points = previous
        changed.append(entry.with_changes(
            position_change=previous_rank - entry.rank,
            is_new=False,
            previous_rank=previous_rank,
            previous_points=previous_points,
            points_gained=entry.total_points - previous_points,
        ))

    return changed
