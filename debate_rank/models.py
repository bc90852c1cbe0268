"""Data models for the debate achievement leaderboard."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional


class AchievementType(str, Enum):
    """Kind of result recorded for a student at a tournament."""
    TEAM = "team"
    SPEAKER = "speaker"


@dataclass(frozen=True)
class TournamentRow:
    """Raw cell text for one tournament, as supplied by the workbook."""
    tournament: str
    date: str
    team_achievements: str = ''
    speaker_awards: str = ''


@dataclass(frozen=True)
class ParsedAchievement:
    """One student credited with one result, as read from a tournament row."""
    student_name: str
    school: str
    description: str
    type: AchievementType


@dataclass(frozen=True)
class Achievement:
    """A recognized result attributed to a student at one tournament."""
    tournament: str
    date: str  # Free-form, e.g. "June 8-10, 2024"
    type: AchievementType
    description: str

    def to_dict(self) -> dict:
        return {
            'tournament': self.tournament,
            'date': self.date,
            'type': self.type.value,
            'description': self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Achievement":
        return cls(
            tournament=data.get('tournament') or '',
            date=data.get('date') or '',
            type=AchievementType(data.get('type', AchievementType.TEAM.value)),
            description=data.get('description') or '',
        )


@dataclass
class Student:
    """A debater identified by name and school, with achievements in row order."""
    name: str
    school: str
    achievements: List[Achievement] = field(default_factory=list)

    @property
    def key(self) -> str:
        return student_key(self.name, self.school)

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'school': self.school,
            'achievements': [a.to_dict() for a in self.achievements],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Student":
        """
        Build a Student from its JSON form.

        Older exports stored `first_name` + `last_initial` instead of `name`;
        those are joined back into a single display name.
        """
        name = data.get('name')
        if name is None:
            parts = [data.get('first_name') or '', data.get('last_initial') or '']
            name = ' '.join(p.strip() for p in parts if p and p.strip())

        return cls(
            name=name.strip(),
            school=(data.get('school') or '').strip(),
            achievements=[Achievement.from_dict(a) for a in data.get('achievements') or []],
        )


@dataclass(frozen=True)
class ScoredAchievement:
    """An achievement with its points resolved."""
    tournament: str
    date: str
    achievement: str
    type: AchievementType
    base_points: int
    multiplier: int
    total_points: int

    def to_dict(self) -> dict:
        return {
            'tournament': self.tournament,
            'date': self.date,
            'achievement': self.achievement,
            'type': self.type.value,
            'basePoints': self.base_points,
            'multiplier': self.multiplier,
            'totalPoints': self.total_points,
        }


@dataclass(frozen=True)
class LeaderboardEntry:
    """One ranked row of the leaderboard."""
    student_name: str
    school: str
    total_points: int
    breakdown: tuple = ()  # ScoredAchievement, latest first
    rank: int = 0
    position_change: Optional[int] = None
    is_new: Optional[bool] = None
    previous_rank: Optional[int] = None
    previous_points: Optional[int] = None
    points_gained: Optional[int] = None

    @property
    def key(self) -> str:
        return student_key(self.student_name, self.school)

    def with_changes(self, **changes) -> "LeaderboardEntry":
        return replace(self, **changes)

    def to_dict(self, include_history: bool = True) -> dict:
        data = {
            'student': {'name': self.student_name, 'school': self.school},
            'totalPoints': self.total_points,
            'breakdown': [b.to_dict() for b in self.breakdown],
            'rank': self.rank,
        }
        if not include_history or self.is_new is None:
            return data

        data['positionChange'] = self.position_change
        data['isNew'] = self.is_new
        if not self.is_new:
            data['previousRank'] = self.previous_rank
            data['previousPoints'] = self.previous_points
            data['pointsGained'] = self.points_gained
        return data


def student_key(name: str, school: str) -> str:
    """Identity key shared by the registry and the history comparison."""
    return f"{(name or '').strip()}|{(school or '').strip()}"
