"""
Snapshot Stores

Weekly leaderboard snapshots are kept in a store keyed by week
("YYYY-MM-DD" of the week's Sunday). The history tracker only needs
exists/read/write/list_all, so it can run against JSON files on disk or
an in-memory dict.
"""

import copy
import json
from pathlib import Path
from typing import Protocol

from debate_rank.config import SNAPSHOTS_FOLDER
from debate_rank.utils import atomic_write_json, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

SNAPSHOT_PREFIX = "snapshot-"
SNAPSHOT_SUFFIX = ".json"


class SnapshotError(Exception):
    """Raised when snapshots cannot be read or written"""
    pass


class SnapshotStore(Protocol):
    def exists(self, week_key: str) -> bool: ...

    def read(self, week_key: str) -> dict: ...

    def write(self, week_key: str, snapshot: dict) -> None: ...

    def list_all(self) -> list[str]: ...


class InMemorySnapshotStore:
    """Dict-backed store for tests and dry runs."""

    def __init__(self, snapshots: dict | None = None):
        self._snapshots = dict(snapshots or {})

    def exists(self, week_key: str) -> bool:
        return week_key in self._snapshots

    def read(self, week_key: str) -> dict:
        try:
            return copy.deepcopy(self._snapshots[week_key])
        except KeyError:
            raise SnapshotError(f"No snapshot stored for {week_key}")

    def write(self, week_key: str, snapshot: dict) -> None:
        self._snapshots[week_key] = copy.deepcopy(snapshot)

    def list_all(self) -> list[str]:
        return sorted(self._snapshots)


class FileSnapshotStore:
    """
    Store snapshots as JSON files named snapshot-YYYY-MM-DD.json.

    Args:
        folder: Directory holding the snapshot files (created on first write)
    """

    def __init__(self, folder: Path | None = None):
        self.folder = Path(folder) if folder is not None else SNAPSHOTS_FOLDER

    def path_for(self, week_key: str) -> Path:
        return self.folder / f"{SNAPSHOT_PREFIX}{week_key}{SNAPSHOT_SUFFIX}"

    def exists(self, week_key: str) -> bool:
        return self.path_for(week_key).exists()

    def read(self, week_key: str) -> dict:
        path = self.path_for(week_key)
        try:
            with open(path, encoding="utf-8") as f:
                snapshot = json.load(f)
        except FileNotFoundError:
            raise SnapshotError(f"No snapshot stored for {week_key}")
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Could not read snapshot {path}: {e}") from e

        if not isinstance(snapshot, dict) or not isinstance(snapshot.get('leaderboard'), list):
            raise SnapshotError(f"Snapshot {path} has no leaderboard")
        return snapshot

    def write(self, week_key: str, snapshot: dict) -> None:
        path = self.path_for(week_key)
        try:
            atomic_write_json(snapshot, path)
        except (OSError, TypeError, ValueError) as e:
            raise SnapshotError(f"Could not write snapshot {path}: {e}") from e
        logger.debug(f"Wrote snapshot {path}")

    def list_all(self) -> list[str]:
        if not self.folder.exists():
            return []

        try:
            files = self.folder.glob(f"{SNAPSHOT_PREFIX}*{SNAPSHOT_SUFFIX}")
            return sorted(f.name[len(SNAPSHOT_PREFIX):-len(SNAPSHOT_SUFFIX)] for f in files)
        except OSError as e:
            raise SnapshotError(f"Could not list snapshots in {self.folder}: {e}") from e
