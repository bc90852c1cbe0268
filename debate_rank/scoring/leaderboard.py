"""
Leaderboard Generator

Sums scored achievements per student, drops students without points, and
assigns competition ranks ("1224": tied totals share the rank of the first
tied position, the next total resumes at its own position).

Usage:
    from debate_rank.scoring.leaderboard import generate_leaderboard
    leaderboard = generate_leaderboard(students)
"""

from datetime import datetime
from typing import Iterable

import pandas as pd

from debate_rank.models import LeaderboardEntry, ScoredAchievement, Student
from debate_rank.scoring.points import calculate_achievement_points
from debate_rank.utils import MONTH_YEAR_RE, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

MONTH_NUMBERS = {
    'Jan': 1, 'Feb': 2, 'Mar': 3, 'Apr': 4, 'May': 5, 'Jun': 6,
    'Jul': 7, 'Aug': 8, 'Sep': 9, 'Oct': 10, 'Nov': 11, 'Dec': 12,
    'January': 1, 'February': 2, 'March': 3, 'April': 4, 'June': 6,
    'July': 7, 'August': 8, 'September': 9, 'October': 10, 'November': 11, 'December': 12,
}


def parse_achievement_date(date_str: str | None) -> datetime | None:
    """
    Parse a free-form tournament date into a comparable datetime.

    "June 8-10, 2024" and "Jan 25-26, 2025" resolve to the first of that
    month (unknown month names fall back to January). Anything else goes
    through pandas' generic parser.

    Returns:
        datetime, or None if the date is missing or unparseable
    """
    if not date_str:
        return None

    match = MONTH_YEAR_RE.search(date_str)
    if match:
        month, year = match.groups()
        try:
            return datetime(int(year), MONTH_NUMBERS.get(month, 1), 1)
        except ValueError:
            return None

    parsed = pd.to_datetime(date_str, errors='coerce')
    if pd.isna(parsed):
        return None
    return parsed.to_pydatetime().replace(tzinfo=None)


def sort_breakdown(breakdown: Iterable[ScoredAchievement]) -> list[ScoredAchievement]:
    """
    Sort scored achievements latest first.

    Dated items are reordered among the dated positions; undated or
    unparseable items stay in their original positions. Same-month items
    keep their input order.
    """
    items = list(breakdown)
    dates = [parse_achievement_date(item.date) for item in items]

    dated_slots = [i for i, d in enumerate(dates) if d is not None]
    latest_first = sorted(dated_slots, key=lambda i: dates[i], reverse=True)

    result = list(items)
    for slot, source in zip(dated_slots, latest_first):
        result[slot] = items[source]
    return result


def calculate_student_points(student: Student) -> LeaderboardEntry:
    """
    Score every achievement of a student.

    Zero-point achievements are left out of the breakdown.

    Returns:
        Unranked LeaderboardEntry (rank 0)
    """
    breakdown = []
    total_points = 0

    for achievement in student.achievements:
        points = calculate_achievement_points(achievement, achievement.tournament)
        if points.total_points <= 0:
            continue

        breakdown.append(ScoredAchievement(
            tournament=achievement.tournament,
            date=achievement.date,
            achievement=achievement.description,
            type=achievement.type,
            base_points=points.base_points,
            multiplier=points.multiplier,
            total_points=points.total_points,
        ))
        total_points += points.total_points

    return LeaderboardEntry(
        student_name=student.name,
        school=student.school,
        total_points=total_points,
        breakdown=tuple(sort_breakdown(breakdown)),
    )


def assign_ranks(entries: list[LeaderboardEntry]) -> list[LeaderboardEntry]:
    """
    Assign competition ranks to entries already sorted by points, descending.

    [100, 100, 90] -> ranks [1, 1, 3]
    """
    ranked = []
    current_rank = 1
    previous_points = None

    for index, entry in enumerate(entries):
        if entry.total_points != previous_points:
            current_rank = index + 1
        ranked.append(entry.with_changes(rank=current_rank))
        previous_points = entry.total_points

    return ranked


def generate_leaderboard(students: Iterable[Student]) -> list[LeaderboardEntry]:
    """
    Generate the ranked leaderboard.

    Args:
        students: Student records with their achievements

    Returns:
        Entries with points > 0, sorted by total points descending and ranked

    Raises:
        ValueError: If students is None
    """
    if students is None:
        raise ValueError("Student data is required to generate a leaderboard")

    scored = [calculate_student_points(student) for student in students]
    entries = [entry for entry in scored if entry.total_points > 0]
    entries.sort(key=lambda e: e.total_points, reverse=True)

    leaderboard = assign_ranks(entries)
    logger.info(f"Generated leaderboard: {len(leaderboard)} ranked of {len(scored)} students")
    return leaderboard


def leaderboard_to_dataframe(leaderboard: list[LeaderboardEntry]) -> pd.DataFrame:
    """
    Flatten the leaderboard into one row per student for CSV export.

    Returns:
        DataFrame with columns: rank, student_name, school, total_points,
        achievements, position_change, is_new, points_gained
    """
    columns = [
        'rank', 'student_name', 'school', 'total_points',
        'achievements', 'position_change', 'is_new', 'points_gained',
    ]
    rows = [
        {
            'rank': entry.rank,
            'student_name': entry.student_name,
            'school': entry.school,
            'total_points': entry.total_points,
            'achievements': len(entry.breakdown),
            'position_change': entry.position_change,
            'is_new': entry.is_new,
            'points_gained': entry.points_gained,
        }
        for entry in leaderboard
    ]
    return pd.DataFrame(rows, columns=columns)
