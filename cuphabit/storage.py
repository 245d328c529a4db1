"""Key-value persistence port used by every store.

Each store owns its own keys (the drink store has the ledger, its
moved-aside copy and the last-open marker) and never reads
another store's key. Values are opaque strings.
"""
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

import structlog

logger = structlog.get_logger(__name__)

LOGS_KEY = "cup_habit_logs"
LOGS_CORRUPT_KEY = "cup_habit_logs_corrupt"
LAST_OPEN_DATE_KEY = "cup_habit_last_open_date"
MONTHLY_BUDGET_KEY = "cup_habit_monthly_budget"
COINS_KEY = "cup_habit_coins"
OWNED_CUPS_KEY = "cup_habit_owned_cups"
CURRENT_CUP_KEY = "cup_habit_current_cup"


class KeyValueStorage(ABC):

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass


class MemoryStorage(KeyValueStorage):

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __repr__(self) -> str:
        return f"MemoryStorage({self._data!r})"


class JsonFileStorage(KeyValueStorage):
    """All keys kept in one JSON object on disk.

    The file is re-read on every access so changes made by another process
    show up on the next read. Writes replace the file atomically. An
    unreadable file reads as empty; before the next write it is renamed to
    ``<name>.corrupt`` so no key in it is overwritten.
    """

    def __init__(self, path):
        self.path = Path(path)

    @property
    def corrupt_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + ".corrupt")

    def _load(self, for_write: bool = False) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            error = str(e)
        else:
            if isinstance(data, dict):
                return {str(k): str(v) for k, v in data.items()}
            error = "not an object"

        logger.warning("storage_file_unreadable", path=str(self.path), error=error)
        if for_write:
            os.replace(self.path, self.corrupt_path)
            logger.error("storage_file_moved_aside", path=str(self.path), moved_to=str(self.corrupt_path))
        return {}

    def _dump(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load(for_write=True)
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load(for_write=True)
        if key in data:
            del data[key]
            self._dump(data)
