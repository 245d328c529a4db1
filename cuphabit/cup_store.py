import json
from typing import List, Set

import structlog

from cuphabit.storage import CURRENT_CUP_KEY, KeyValueStorage, OWNED_CUPS_KEY

logger = structlog.get_logger(__name__)

DEFAULT_CUP_ID = 1  # Classic White


class CupStore:
    """Owned cup skins and the selected one.

    The default cup always counts as owned. The selected cup is not checked
    against ownership here; callers only offer owned cups.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def _owned_list(self) -> List[int]:
        raw = self.storage.get(OWNED_CUPS_KEY)
        if not raw:
            return [DEFAULT_CUP_ID]
        try:
            owned = [int(cup_id) for cup_id in json.loads(raw)]
        except (ValueError, TypeError) as e:
            logger.warning("owned_cups_parse_failed", raw=raw, error=str(e))
            return [DEFAULT_CUP_ID]
        if DEFAULT_CUP_ID not in owned:
            owned.insert(0, DEFAULT_CUP_ID)
        return owned

    def _save_owned(self, owned: List[int]) -> None:
        self.storage.set(OWNED_CUPS_KEY, json.dumps(owned))

    def get_owned_cups(self) -> Set[int]:
        return set(self._owned_list())

    def is_owned(self, cup_id: int) -> bool:
        return cup_id in self.get_owned_cups()

    def add_owned_cup(self, cup_id: int) -> None:
        owned = self._owned_list()
        if cup_id not in owned:
            self._save_owned(owned + [cup_id])

    def remove_owned_cup(self, cup_id: int) -> None:
        owned = self._owned_list()
        self._save_owned([c for c in owned if c != cup_id])

    def reset_owned_cups(self) -> None:
        self._save_owned([DEFAULT_CUP_ID])

    def get_current_cup(self) -> int:
        raw = self.storage.get(CURRENT_CUP_KEY)
        if not raw:
            return DEFAULT_CUP_ID
        try:
            return int(json.loads(raw))
        except (ValueError, TypeError) as e:
            logger.warning("current_cup_parse_failed", raw=raw, error=str(e))
            return DEFAULT_CUP_ID

    def set_current_cup(self, cup_id: int) -> None:
        self.storage.set(CURRENT_CUP_KEY, json.dumps(cup_id))
