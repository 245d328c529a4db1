import math
from typing import Optional

import structlog

from cuphabit.storage import KeyValueStorage, MONTHLY_BUDGET_KEY

logger = structlog.get_logger(__name__)


class BudgetStore:
    """Single monthly budget value with no month tag.

    A budget set in one month keeps applying to later months until it is
    changed or cleared; nothing here rolls it over.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def get_monthly_budget(self) -> Optional[float]:
        raw = self.storage.get(MONTHLY_BUDGET_KEY)
        if not raw:
            return None
        try:
            value = float(raw)
        except ValueError as e:
            logger.warning("budget_parse_failed", raw=raw, error=str(e))
            return None
        if math.isnan(value) or value <= 0:
            return None
        return value

    def set_monthly_budget(self, value: Optional[float]) -> None:
        if value is None or value <= 0:
            self.storage.remove(MONTHLY_BUDGET_KEY)
        else:
            self.storage.set(MONTHLY_BUDGET_KEY, repr(float(value)))
