"""
Data Ingestion

Modules:
- achievement_parser: Parse team and speaker cells into achievements
- spreadsheet: Read the results workbook and the students JSON cache
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "parse_tournament_row":
        from debate_rank.ingestion.achievement_parser import parse_tournament_row
        return parse_tournament_row
    if name == "read_tournament_rows":
        from debate_rank.ingestion.spreadsheet import read_tournament_rows
        return read_tournament_rows
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
