"""
Tournament Classifier

Decides whether a tournament is a major championship. Only the
championships themselves count: "WSDC", "WSDC 2024" or "ASDC '23" are
major, while events that merely borrow the name ("Novice WSDC 2025",
"Pre-WSDC Training", "ASDC Qualifier") are not.
"""

import re

from debate_rank.config import MAJOR_TOURNAMENTS

# Championship token followed by a 20xx year or an apostrophe year
_MAJOR_WITH_YEAR_RES = tuple(
    re.compile(rf"^{re.escape(token)}\s+(20\d{{2}}|'\d{{2}})$", re.IGNORECASE)
    for token in MAJOR_TOURNAMENTS
)


def is_major_tournament(tournament_name: str | None) -> bool:
    """Return True if the name is exactly a major championship, optionally with its year."""
    if not tournament_name:
        return False

    name = str(tournament_name).strip()
    if name in MAJOR_TOURNAMENTS:
        return True

    return any(pattern.match(name) for pattern in _MAJOR_WITH_YEAR_RES)
