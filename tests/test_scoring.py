"""
Tests for tournament classification and achievement points.
"""

import pytest

from debate_rank.models import Achievement, AchievementType
from debate_rank.scoring.classifier import is_major_tournament
from debate_rank.scoring.points import (
    PointsResult,
    calculate_achievement_points,
    score_speaker_award,
    score_team_achievement,
)


class TestIsMajorTournament:
    """Tests for is_major_tournament."""

    @pytest.mark.parametrize("name", [
        "WSDC",
        "ASDC",
        "WSDC 2024",
        "ASDC 2023",
        "wsdc 2025",
        "WSDC '24",
        "  WSDC 2024  ",
    ])
    def test_major(self, name):
        assert is_major_tournament(name) is True

    @pytest.mark.parametrize("name", [
        "Novice WSDC 2025",
        "Pre-WSDC Training",
        "Greater Bay Area WSDC 2024",
        "WSDC Format Tournament",
        "Mock WSDC",
        "ASDC Qualifier",
        "ASDC Style Tournament",
        "World Schools Debating Championship",
        "WSDC 1999",
        "WSDC 24",
    ])
    def test_not_major(self, name):
        assert is_major_tournament(name) is False

    def test_bare_token_is_case_sensitive(self):
        assert is_major_tournament("wsdc") is False

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_empty(self, name):
        assert is_major_tournament(name) is False


class TestScoreTeamAchievement:
    """Tests for score_team_achievement."""

    @pytest.mark.parametrize("description,points", [
        ("Champions", 30),
        ("Tournament Winner", 30),
        ("Grand Finalists", 25),
        ("GF", 25),
        ("Semifinalists", 20),
        ("Semi-Finalist", 20),
        ("Quarterfinalists", 15),
        ("QF", 15),
        ("Octofinalists", 10),
        ("Octos", 10),
    ])
    def test_known_results(self, description, points):
        assert score_team_achievement(description) == points

    def test_first_match_in_priority_order_wins(self):
        # "finals" and "champion" both appear; the champion tier is checked first
        assert score_team_achievement("Finals Champion") == 30

    def test_double_octofinal_hits_octofinal_tier_first(self):
        assert score_team_achievement("Double Octofinalists") == 10

    def test_unrecognized(self):
        assert score_team_achievement("Participation") == 0

    def test_empty(self):
        assert score_team_achievement("") == 0


class TestScoreSpeakerAward:
    """Tests for score_speaker_award."""

    @pytest.mark.parametrize("description", [
        "Best Speaker",
        "Overall Best Speaker",
        "Finals Best Speaker",
        "FBS",
        "OBS",
        "Final's Best Speaker",
    ])
    def test_special_awards(self, description):
        assert score_speaker_award(description) == 10

    def test_special_award_checked_before_rank(self):
        assert score_speaker_award("5th Best Speaker") == 10

    @pytest.mark.parametrize("description,points", [
        ("1st Speaker", 10),
        ("2nd Speaker", 9),
        ("Third Speaker", 8),
        ("4th best", 7),
        ("5 speaker", 6),
        ("Sixth Speaker", 5),
        ("7th Speaker", 4),
        ("8th Speaker", 3),
        ("Ninth Speaker", 2),
        ("10th Speaker", 1),
    ])
    def test_ranked_places(self, description, points):
        assert score_speaker_award(description) == points

    def test_rank_needs_best_or_speaker_after_it(self):
        assert score_speaker_award("1st place") == 0

    def test_rank_token_is_word_bounded(self):
        # "21st" is not "1st"
        assert score_speaker_award("21st Speaker") == 0

    def test_unrecognized(self):
        assert score_speaker_award("Best Adjudicator") == 0


class TestCalculateAchievementPoints:
    """Tests for calculate_achievement_points."""

    def test_non_major(self):
        achievement = Achievement("City Open", "June 8-10, 2024", AchievementType.TEAM, "Quarterfinalists")
        assert calculate_achievement_points(achievement) == PointsResult(15, 1, 15)

    def test_major_doubles(self):
        achievement = Achievement("WSDC 2024", "July 1-10, 2024", AchievementType.TEAM, "Quarterfinalists")
        result = calculate_achievement_points(achievement)
        assert result.base_points == 15
        assert result.multiplier == 2
        assert result.total_points == 30

    def test_speaker_at_major(self):
        achievement = Achievement("ASDC", "", AchievementType.SPEAKER, "2nd Speaker")
        assert calculate_achievement_points(achievement) == PointsResult(9, 2, 18)

    def test_explicit_tournament_overrides(self):
        achievement = Achievement("City Open", "", AchievementType.TEAM, "Champions")
        assert calculate_achievement_points(achievement, "WSDC").total_points == 60

    def test_unrecognized_scores_zero(self):
        achievement = Achievement("WSDC", "", AchievementType.TEAM, "Participation")
        assert calculate_achievement_points(achievement) == PointsResult(0, 2, 0)
