"""
Achievements Workbook Ingestion

Reads the first sheet of the debate achievements workbook into tournament
rows and caches the parsed students as JSON.

Workbook layout (row 1 is the header):
    A: Tournament name
    B: Date (free-form, e.g. "June 8-10, 2024")
    D: Team achievements
    E: Speaker awards
"""

import json
import zipfile
from datetime import date, datetime
from pathlib import Path

import pandas as pd

from debate_rank.config import (
    DATE_COLUMN,
    SPEAKER_AWARDS_COLUMN,
    STUDENTS_JSON_PATH,
    TEAM_ACHIEVEMENTS_COLUMN,
    TOURNAMENT_COLUMN,
    WORKBOOK_PATH,
)
from debate_rank.models import Student, TournamentRow
from debate_rank.utils import atomic_write_json, clean_text, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class IngestionError(Exception):
    """Raised when the student data source cannot be read"""
    pass


def column_index(letter: str) -> int:
    """Convert a spreadsheet column letter to a 0-based index ("A" -> 0, "AA" -> 26)."""
    index = 0
    for char in letter.upper():
        index = index * 26 + (ord(char) - ord('A') + 1)
    return index - 1


def format_cell_date(value) -> str:
    """Render a date cell as text; real dates become "June 8, 2024"."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ''
    if isinstance(value, (datetime, date)):
        value = pd.Timestamp(value)
        return f"{value.strftime('%B')} {value.day}, {value.year}"
    return clean_text(value)


def rows_from_dataframe(df: pd.DataFrame) -> list[TournamentRow]:
    """
    Convert a raw sheet (no header parsing, positional columns) into tournament rows.

    The first row is treated as the header. Rows without a tournament name are dropped.
    """
    def cell(row, letter):
        idx = column_index(letter)
        return row.iloc[idx] if idx < len(row) else None

    rows = []
    for _, row in df.iloc[1:].iterrows():
        tournament = clean_text(cell(row, TOURNAMENT_COLUMN))
        if not tournament:
            continue

        rows.append(TournamentRow(
            tournament=tournament,
            date=format_cell_date(cell(row, DATE_COLUMN)),
            team_achievements=clean_text(cell(row, TEAM_ACHIEVEMENTS_COLUMN)),
            speaker_awards=clean_text(cell(row, SPEAKER_AWARDS_COLUMN)),
        ))

    return rows


def read_tournament_rows(workbook_path: Path | None = None) -> list[TournamentRow]:
    """
    Read tournament rows from the first sheet of the achievements workbook.

    Args:
        workbook_path: Path to the .xlsx file (default: WORKBOOK_PATH)

    Returns:
        List of TournamentRow in sheet order

    Raises:
        IngestionError: If the workbook is missing, unreadable or empty
    """
    path = Path(workbook_path) if workbook_path is not None else WORKBOOK_PATH

    if not path.exists():
        raise IngestionError(f"Workbook not found: {path}")

    logger.info(f"Reading workbook: {path}")
    try:
        df = pd.read_excel(path, sheet_name=0, header=None, dtype=object, engine="openpyxl")
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise IngestionError(f"Could not read workbook {path}: {e}") from e

    if df.empty:
        raise IngestionError(f"Workbook {path} has no rows")

    rows = rows_from_dataframe(df)
    logger.info(f"Found {len(rows)} tournament rows")
    return rows


def export_students_json(students: list[Student], path: Path | None = None) -> Path:
    """Write students as {"students": [...]} to the JSON cache."""
    path = Path(path) if path is not None else STUDENTS_JSON_PATH
    atomic_write_json({'students': [s.to_dict() for s in students]}, path)
    logger.info(f"Wrote {len(students)} students to {path}")
    return path


def load_students_json(path: Path | None = None) -> list[Student]:
    """
    Load students from the JSON cache.

    Raises:
        IngestionError: If the file is missing, empty or malformed
    """
    path = Path(path) if path is not None else STUDENTS_JSON_PATH

    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise IngestionError(f"Could not read student data {path}: {e}") from e

    if not content.strip():
        raise IngestionError(f"Student data file is empty: {path}")

    try:
        data = json.loads(content)
        records = data['students']
        students = [Student.from_dict(record) for record in records]
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
        raise IngestionError(f"Malformed student data in {path}: {e}") from e

    logger.info(f"Loaded {len(students)} students from {path}")
    return students
