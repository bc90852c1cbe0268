"""
Scoring

Modules:
- classifier: Major tournament detection
- points: Team and speaker achievement points
- aggregator: Student registry built from tournament rows
- leaderboard: Totals, ranking and breakdown ordering
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "is_major_tournament":
        from debate_rank.scoring.classifier import is_major_tournament
        return is_major_tournament
    if name == "calculate_achievement_points":
        from debate_rank.scoring.points import calculate_achievement_points
        return calculate_achievement_points
    if name == "build_students":
        from debate_rank.scoring.aggregator import build_students
        return build_students
    if name == "generate_leaderboard":
        from debate_rank.scoring.leaderboard import generate_leaderboard
        return generate_leaderboard
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
