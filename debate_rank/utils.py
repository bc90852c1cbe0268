"""
Shared utilities for the Debate Rank leaderboard.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import json
import logging
import re
import shutil
import tempfile
from pathlib import Path

from debate_rank.config import ALL_ENTRIES

# --- Shared Regex Patterns for Achievement Parsing ---
# Student entry: "Name (School)". Greedy name, so the last parenthesized group is the school.
STUDENT_RE = re.compile(r"(.+)\s+\((.+)\)")

# Tournament date: "June 8-10, 2024", "Jan 25-26, 2025", "March 1, 2024"
MONTH_YEAR_RE = re.compile(r"(\w+)\s+\d+(?:-\d+)?,?\s+(\d{4})")


def clean_text(value) -> str:
    """Return a trimmed string for a raw cell value; None and NaN become ''."""
    if value is None:
        return ""
    if isinstance(value, float) and value != value:
        return ""
    return str(value).strip()


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# --- File Operations ---
def _atomic_write(path: Path, suffix: str, write) -> None:
    """Write to a temp file in the target folder, then move it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            delete=False,
            suffix=suffix,
            dir=path.parent,  # Same filesystem for atomic move
            encoding='utf-8',
        ) as tmp:
            tmp_path = Path(tmp.name)
            write(tmp)

        shutil.move(str(tmp_path), str(path))

    except Exception:
        if 'tmp_path' in locals() and tmp_path.exists():
            tmp_path.unlink()
        raise


def atomic_write_csv(df, path: Path, **kwargs) -> None:
    """
    Write a DataFrame to CSV atomically using a temporary file.

    This prevents data corruption if the write is interrupted.

    Args:
        df: pandas DataFrame to write
        path: Destination path for the CSV file
        **kwargs: Additional arguments to pass to df.to_csv()
    """
    logger = setup_logging(__name__)
    _atomic_write(path, '.csv', lambda tmp: df.to_csv(tmp, **kwargs))
    logger.debug(f"Atomically wrote {len(df)} rows to {path}")


def atomic_write_json(data, path: Path) -> None:
    """
    Write a JSON document atomically using a temporary file.

    Args:
        data: JSON-serializable object
        path: Destination path for the JSON file
    """
    logger = setup_logging(__name__)
    _atomic_write(path, '.json', lambda tmp: json.dump(data, tmp, indent=2, ensure_ascii=False))
    logger.debug(f"Atomically wrote JSON to {path}")


# --- Validation ---
def parse_limit(limit) -> int | None:
    """
    Normalize a leaderboard limit.

    Args:
        limit: Non-negative int, numeric string, or "all"

    Returns:
        The limit as an int, or None for the full leaderboard

    Raises:
        ValueError: If limit is not a non-negative integer or "all"
    """
    if limit is None or (isinstance(limit, str) and limit.strip().lower() == ALL_ENTRIES):
        return None

    try:
        value = int(limit)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid limit: '{limit}'. Expected a non-negative integer or '{ALL_ENTRIES}'")

    if value < 0:
        raise ValueError(f"Invalid limit: {value}. Limit cannot be negative")
    return value


__all__ = [
    # Logging
    'setup_logging',
    # File operations
    'atomic_write_csv',
    'atomic_write_json',
    # Validation
    'parse_limit',
    # Achievement parsing
    'STUDENT_RE',
    'MONTH_YEAR_RE',
    'clean_text',
]
