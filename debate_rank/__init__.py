"""
Debate Rank - Core Package

This package contains the core modules for:
- Achievement ingestion from the results workbook (debate_rank.ingestion)
- Scoring and leaderboard generation (debate_rank.scoring)
- Weekly snapshot history (debate_rank.history)
- Shared configuration and utilities
"""

__version__ = "1.0.0"


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "generate_leaderboard":
        from debate_rank.scoring.leaderboard import generate_leaderboard
        return generate_leaderboard
    if name == "build_leaderboard_response":
        from debate_rank.service import build_leaderboard_response
        return build_leaderboard_response
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
