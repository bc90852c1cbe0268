"""
Achievement Text Parser

Turns the two free-text cells of a tournament row into structured
achievements:

Team achievements cell - category groups:

    Champions:
    Ada L. (ABC) & Ben T. (XYZ)
    Semifinalists:
    Cara M. (ABC)

Speaker awards cell - one award per line:

    1st Best Speaker: Ada L. (ABC)
    Finals Best Speaker: Ben T. (XYZ) & Cara M. (ABC)

Lines that don't follow these shapes are skipped, never raised.
"""

from enum import Enum

from debate_rank.models import AchievementType, ParsedAchievement
from debate_rank.utils import STUDENT_RE, clean_text, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class LineKind(Enum):
    BLANK = "blank"
    CATEGORY = "category"
    STUDENT = "student"
    OTHER = "other"


class TeamParserState(Enum):
    AWAITING_CATEGORY = "awaiting_category"
    IN_CATEGORY = "in_category"


def parse_student_entry(text: str) -> tuple[str, str] | None:
    """
    Extract (name, school) from a "Name (School)" entry.

    Returns:
        Tuple of trimmed (name, school), or None if the entry doesn't match
    """
    match = STUDENT_RE.search(text)
    if not match:
        return None

    name = match.group(1).strip()
    school = match.group(2).strip()
    if not name or not school:
        return None
    return name, school


def parse_student_entries(text: str) -> list[tuple[str, str]]:
    """Parse one or more '&'-separated "Name (School)" entries, dropping bad segments."""
    segments = text.split('&') if '&' in text else [text]
    students = []

    for segment in segments:
        entry = parse_student_entry(segment.strip())
        if entry is None:
            logger.debug(f"Could not parse student entry: {segment.strip()!r}")
            continue
        students.append(entry)

    return students


def classify_team_line(line: str) -> LineKind:
    """
    Classify one line of the team achievements cell.

    A line with a colon is a category header unless it also reads as a
    student entry, in which case the student reading wins.
    """
    line = line.strip()
    if not line:
        return LineKind.BLANK
    if STUDENT_RE.search(line):
        return LineKind.STUDENT
    if ':' in line:
        return LineKind.CATEGORY
    return LineKind.OTHER


def parse_team_achievements(text) -> list[ParsedAchievement]:
    """
    Parse a team achievements cell.

    Args:
        text: Raw cell content (None or blank yields nothing)

    Returns:
        One ParsedAchievement per credited student, in cell order
    """
    text = clean_text(text)
    achievements = []
    state = TeamParserState.AWAITING_CATEGORY
    category = ''

    for raw_line in text.splitlines():
        line = raw_line.strip()
        kind = classify_team_line(line)

        if kind is LineKind.BLANK:
            continue

        if kind is LineKind.CATEGORY:
            category = line.split(':', 1)[0].strip()
            state = TeamParserState.IN_CATEGORY
            continue

        if kind is LineKind.OTHER:
            logger.debug(f"Skipping non-student line: {line[:50]!r}")
            continue

        if state is TeamParserState.AWAITING_CATEGORY:
            logger.debug(f"Skipping student line before any category: {line[:50]!r}")
            continue

        for name, school in parse_student_entries(line):
            achievements.append(ParsedAchievement(name, school, category, AchievementType.TEAM))

    return achievements


def parse_speaker_awards(text) -> list[ParsedAchievement]:
    """
    Parse a speaker awards cell.

    Each line is "Description: Name (School)", optionally with several
    '&'-separated students sharing the award.

    Args:
        text: Raw cell content (None or blank yields nothing)

    Returns:
        One ParsedAchievement per credited student, in cell order
    """
    text = clean_text(text)
    achievements = []

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        if ':' not in line:
            logger.debug(f"Skipping speaker award without a colon: {line[:50]!r}")
            continue

        description, student_part = line.split(':', 1)
        description = description.strip()
        student_part = student_part.strip()

        for name, school in parse_student_entries(student_part):
            achievements.append(ParsedAchievement(name, school, description, AchievementType.SPEAKER))

    return achievements


def parse_tournament_row(team_text, speaker_text) -> list[ParsedAchievement]:
    """Parse both achievement cells of one tournament row, team results first."""
    return parse_team_achievements(team_text) + parse_speaker_awards(speaker_text)
