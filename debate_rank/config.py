"""
Central configuration for the Debate Rank leaderboard.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

from pathlib import Path

# --- Project Paths ---
PROJECT_ROOT = Path(__file__).parent.parent
DATA_FOLDER = PROJECT_ROOT / "data"
WORKBOOK_PATH = DATA_FOLDER / "debate_achievements.xlsx"
STUDENTS_JSON_PATH = DATA_FOLDER / "students.json"
SNAPSHOTS_FOLDER = DATA_FOLDER / "leaderboard-snapshots"

# --- Workbook Layout ---
# Row 1 is the header; tournament rows start on row 2.
TOURNAMENT_COLUMN = "A"
DATE_COLUMN = "B"
TEAM_ACHIEVEMENTS_COLUMN = "D"
SPEAKER_AWARDS_COLUMN = "E"

# --- Major Tournaments ---
# Only the championships themselves (exact name, or name plus year) get the multiplier.
MAJOR_TOURNAMENTS = ("ASDC", "WSDC")
MAJOR_MULTIPLIER = 2
STANDARD_MULTIPLIER = 1

# --- Team Achievement Scoring ---
# Evaluated in order; the first keyword found wins.
TEAM_ACHIEVEMENT_PATTERNS = (
    (("champion", "winner", "won"), 30),
    (("grand final", "gf", "finals"), 25),
    (("semifinal", "semi-final", "sf"), 20),
    (("quarterfinal", "quarter-final", "qf"), 15),
    (("octofinal", "octo-final", "of", "octos"), 10),
    (("double octofinal", "double-octofinal", "pre-octofinal", "pre octofinal"), 5),
)

# --- Speaker Award Scoring ---
# Special awards are checked before ranked speaker places.
SPECIAL_SPEAKER_AWARDS = (
    ("fbs", 10),
    ("finals best speaker", 10),
    ("final's best speaker", 10),
    ("finals best", 10),
    ("best speaker", 10),
    ("obs", 10),  # Overall best speaker
    ("overall best speaker", 10),
)

SPEAKER_RANKING_PATTERNS = (
    (("1st", "first", "1"), 10),
    (("2nd", "second", "2"), 9),
    (("3rd", "third", "3"), 8),
    (("4th", "fourth", "4"), 7),
    (("5th", "fifth", "5"), 6),
    (("6th", "sixth", "6"), 5),
    (("7th", "seventh", "7"), 4),
    (("8th", "eighth", "8"), 3),
    (("9th", "ninth", "9"), 2),
    (("10th", "tenth", "10"), 1),
)

# --- Leaderboard Output ---
DEFAULT_LEADERBOARD_LIMIT = 20
ALL_ENTRIES = "all"
CLI_TOP_N = 10
