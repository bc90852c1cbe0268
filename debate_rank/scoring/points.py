"""
Achievement Scorer

Maps an achievement description to base points and applies the
major-tournament multiplier.

Team results use a priority table (champion > finals > semis > quarters >
octos > double octos); the first keyword found anywhere in the description
decides. Speaker awards check special awards (best speaker, FBS, OBS)
before ranked places (1st..10th).
"""

import re
from typing import NamedTuple

from debate_rank.config import (
    MAJOR_MULTIPLIER,
    SPECIAL_SPEAKER_AWARDS,
    SPEAKER_RANKING_PATTERNS,
    STANDARD_MULTIPLIER,
    TEAM_ACHIEVEMENT_PATTERNS,
)
from debate_rank.models import Achievement, AchievementType
from debate_rank.scoring.classifier import is_major_tournament

# Ranked place token, then "best" or "speaker" somewhere after it
_SPEAKER_RANK_RES = tuple(
    (re.compile(rf"\b{re.escape(token)}\b.*(?:best|speaker)", re.IGNORECASE), points)
    for tokens, points in SPEAKER_RANKING_PATTERNS
    for token in tokens
)


class PointsResult(NamedTuple):
    base_points: int
    multiplier: int
    total_points: int


def score_team_achievement(description: str) -> int:
    """Return base points for a team result, 0 if unrecognized."""
    lowered = (description or '').lower()

    for keywords, points in TEAM_ACHIEVEMENT_PATTERNS:
        if any(keyword in lowered for keyword in keywords):
            return points

    return 0


def score_speaker_award(description: str) -> int:
    """Return base points for a speaker award, 0 if unrecognized."""
    description = description or ''
    lowered = description.lower()

    for award, points in SPECIAL_SPEAKER_AWARDS:
        if award in lowered:
            return points

    for pattern, points in _SPEAKER_RANK_RES:
        if pattern.search(description):
            return points

    return 0


def score_description(description: str, achievement_type: AchievementType) -> int:
    if achievement_type is AchievementType.TEAM:
        return score_team_achievement(description)
    return score_speaker_award(description)


def calculate_achievement_points(achievement: Achievement, tournament: str | None = None) -> PointsResult:
    """
    Calculate points for a single achievement.

    Args:
        achievement: The achievement to score
        tournament: Tournament name to classify (defaults to the achievement's own)

    Returns:
        PointsResult with base points, multiplier (1 or 2) and their product
    """
    if tournament is None:
        tournament = achievement.tournament

    base_points = score_description(achievement.description, achievement.type)
    multiplier = MAJOR_MULTIPLIER if is_major_tournament(tournament) else STANDARD_MULTIPLIER
    return PointsResult(base_points, multiplier, base_points * multiplier)
