"""
Student Aggregator

Builds the per-run student registry from tournament rows. Students are
identified by "name|school"; every reference after the first appends to the
same record. Identical achievements are not de-duplicated: a result
reported twice counts twice.
"""

from typing import Iterable

from debate_rank.ingestion.achievement_parser import parse_tournament_row
from debate_rank.models import Achievement, AchievementType, Student, TournamentRow, student_key
from debate_rank.utils import clean_text, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class StudentRegistry:
    """Registry of students for a single parse-and-score pass."""

    def __init__(self):
        self._students: dict[str, Student] = {}

    def __len__(self) -> int:
        return len(self._students)

    def __contains__(self, key: str) -> bool:
        return key in self._students

    def add_or_get_student(self, name: str, school: str) -> Student:
        """Return the student for (name, school), creating it on first reference."""
        name = clean_text(name)
        school = clean_text(school)
        key = student_key(name, school)

        student = self._students.get(key)
        if student is None:
            student = Student(name=name, school=school)
            self._students[key] = student
        return student

    def add_achievement(
        self,
        student: Student,
        tournament: str,
        date: str,
        description: str,
        achievement_type: AchievementType,
    ) -> Achievement:
        achievement = Achievement(
            tournament=clean_text(tournament),
            date=clean_text(date),
            type=achievement_type,
            description=clean_text(description),
        )
        student.achievements.append(achievement)
        return achievement

    def add_tournament_row(self, tournament, date, team_text, speaker_text) -> int:
        """
        Parse one tournament row into the registry.

        Rows without a tournament name are skipped.

        Returns:
            Number of achievements added
        """
        tournament = clean_text(tournament)
        if not tournament:
            return 0

        parsed = parse_tournament_row(team_text, speaker_text)
        for entry in parsed:
            student = self.add_or_get_student(entry.student_name, entry.school)
            self.add_achievement(student, tournament, date, entry.description, entry.type)

        logger.debug(f"{tournament}: {len(parsed)} achievements")
        return len(parsed)

    def students(self, sort: bool = True) -> list[Student]:
        """Return registered students, alphabetically by name unless sort=False."""
        students = list(self._students.values())
        if sort:
            students.sort(key=lambda s: (s.name.casefold(), s.school.casefold()))
        return students


def build_students(rows: Iterable[TournamentRow]) -> list[Student]:
    """
    Build the student list from tournament rows.

    Args:
        rows: Tournament rows in workbook order

    Returns:
        Students sorted by name, each with achievements in row order
    """
    registry = StudentRegistry()
    row_count = 0
    achievement_count = 0

    for row in rows:
        row_count += 1
        achievement_count += registry.add_tournament_row(
            row.tournament, row.date, row.team_achievements, row.speaker_awards
        )

    logger.info(f"Parsed {row_count} tournament rows: {achievement_count} achievements, {len(registry)} students")
    return registry.students()
