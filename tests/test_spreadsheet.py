"""
Tests for workbook ingestion and the students JSON cache.
"""

import json
from datetime import datetime

import pandas as pd
import pytest

from debate_rank.ingestion.spreadsheet import (
    IngestionError,
    column_index,
    export_students_json,
    format_cell_date,
    load_students_json,
    read_tournament_rows,
    rows_from_dataframe,
)
from debate_rank.models import Achievement, AchievementType, Student, TournamentRow

HEADER = ["Tournament", "Date", "Format", "Team Achievements", "Speaker Awards"]


def sheet(*rows):
    return pd.DataFrame([HEADER, *rows], dtype=object)


class TestColumnIndex:
    """Tests for column_index."""

    @pytest.mark.parametrize("letter,index", [("A", 0), ("B", 1), ("D", 3), ("E", 4), ("Z", 25), ("AA", 26)])
    def test_letters(self, letter, index):
        assert column_index(letter) == index


class TestFormatCellDate:
    """Tests for format_cell_date."""

    def test_text_is_kept(self):
        assert format_cell_date(" June 8-10, 2024 ") == "June 8-10, 2024"

    def test_real_date(self):
        assert format_cell_date(datetime(2024, 6, 8)) == "June 8, 2024"

    def test_missing(self):
        assert format_cell_date(float("nan")) == ""
        assert format_cell_date(pd.NaT) == ""


class TestRowsFromDataframe:
    """Tests for rows_from_dataframe."""

    def test_maps_columns(self):
        df = sheet(["City Open", "June 8-10, 2024", "BP", "Champions:\nAda L. (ABC)", "FBS: Ben T. (XYZ)"])

        rows = rows_from_dataframe(df)

        assert rows == [
            TournamentRow("City Open", "June 8-10, 2024", "Champions:\nAda L. (ABC)", "FBS: Ben T. (XYZ)"),
        ]

    def test_skips_header_and_rows_without_tournament(self):
        df = sheet(
            [None, "June 8, 2024", None, "Champions:\nAda L. (ABC)", None],
            ["WSDC 2024", None, None, None, "2nd Speaker: Ada L. (ABC)"],
        )

        rows = rows_from_dataframe(df)

        assert rows == [TournamentRow("WSDC 2024", "", "", "2nd Speaker: Ada L. (ABC)")]

    def test_short_rows(self):
        df = pd.DataFrame([["Tournament", "Date"], ["City Open", "June 8, 2024"]], dtype=object)
        assert rows_from_dataframe(df) == [TournamentRow("City Open", "June 8, 2024", "", "")]


class TestReadTournamentRows:
    """Tests for read_tournament_rows."""

    def test_reads_first_sheet(self, tmp_path):
        path = tmp_path / "achievements.xlsx"
        sheet(
            ["City Open", "June 8-10, 2024", "BP", "Champions:\nAda L. (ABC) & Ben T. (XYZ)", ""],
            ["WSDC 2024", "July 1-10, 2024", "WSDC", "", "Best Speaker: Ada L. (ABC)"],
        ).to_excel(path, header=False, index=False)

        rows = read_tournament_rows(path)

        assert [r.tournament for r in rows] == ["City Open", "WSDC 2024"]
        assert rows[0].team_achievements == "Champions:\nAda L. (ABC) & Ben T. (XYZ)"
        assert rows[1].speaker_awards == "Best Speaker: Ada L. (ABC)"

    def test_missing_workbook(self, tmp_path):
        with pytest.raises(IngestionError):
            read_tournament_rows(tmp_path / "missing.xlsx")

    def test_not_a_workbook(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_text("not a workbook")
        with pytest.raises(IngestionError):
            read_tournament_rows(path)


class TestStudentsJson:
    """Tests for the students JSON cache."""

    def test_round_trip(self, tmp_path):
        students = [
            Student("Ada L.", "ABC", [Achievement("City Open", "June 8, 2024", AchievementType.TEAM, "Champions")]),
        ]

        path = export_students_json(students, tmp_path / "students.json")

        assert json.loads(path.read_text())['students'][0]['achievements'][0]['type'] == "team"
        assert load_students_json(path) == students

    def test_legacy_name_shape(self, tmp_path):
        path = tmp_path / "students.json"
        path.write_text(json.dumps({'students': [{
            'first_name': "Ada",
            'last_initial': "L.",
            'school': "ABC",
            'achievements': [
                {'tournament': "WSDC", 'date': "", 'type': "speaker", 'description': "FBS"},
            ],
        }]}))

        students = load_students_json(path)

        assert students[0].name == "Ada L."
        assert students[0].key == "Ada L.|ABC"
        assert students[0].achievements[0].type is AchievementType.SPEAKER

    def test_missing_file(self, tmp_path):
        with pytest.raises(IngestionError):
            load_students_json(tmp_path / "students.json")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "students.json"
        path.write_text("   ")
        with pytest.raises(IngestionError):
            load_students_json(path)

    def test_malformed(self, tmp_path):
        path = tmp_path / "students.json"
        path.write_text('{"people": []}')
        with pytest.raises(IngestionError):
            load_students_json(path)
