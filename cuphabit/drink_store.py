import calendar
import json
from datetime import date, datetime
from typing import Callable, List, Optional, Union
from uuid import uuid4

import structlog

from cuphabit.domain import DrinkInput, DrinkLog, normalize_type
from cuphabit.storage import KeyValueStorage, LAST_OPEN_DATE_KEY, LOGS_CORRUPT_KEY, LOGS_KEY

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def format_date(d: Union[date, datetime]) -> str:
    """Local calendar day as zero-padded YYYY-MM-DD.

    This string is the key for every day/month/year comparison; lexical
    order of these strings is chronological order.
    """
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_date(value: str) -> date:
    return datetime.strptime(value[:10], "%Y-%m-%d").date()


def month_bounds(d: Union[date, datetime]) -> tuple[str, str]:
    last_day = calendar.monthrange(d.year, d.month)[1]
    return format_date(date(d.year, d.month, 1)), format_date(date(d.year, d.month, last_day))


class DrinkStore:
    """Append-only ledger of drink purchases."""

    def __init__(self, storage: KeyValueStorage, clock: Clock = datetime.now):
        self.storage = storage
        self.clock = clock

    def _read_entries(self) -> Optional[list]:
        """Raw stored entries, or None when the stored value is not a JSON list."""
        raw = self.storage.get(LOGS_KEY)
        if not raw:
            return []
        try:
            entries = json.loads(raw)
        except ValueError as e:
            logger.warning("logs_parse_failed", error=str(e))
            return None
        if not isinstance(entries, list):
            logger.warning("logs_parse_failed", error="not a list")
            return None
        return entries

    def get_logs(self) -> List[DrinkLog]:
        logs = []
        for index, entry in enumerate(self._read_entries() or []):
            try:
                logs.append(DrinkLog.from_dict(entry))
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                logger.warning("log_entry_skipped", index=index, error=str(e))
        return logs

    def add_log(self, drink: DrinkInput) -> DrinkLog:
        now = self.clock()
        log = DrinkLog(
            id=str(uuid4()),
            type=normalize_type(drink.type),
            amount=drink.amount,
            date=drink.date[:10] if drink.date else format_date(now),
            created_at=int(now.timestamp() * 1000),
            name=drink.name,
            custom_name=drink.custom_name,
        )
        # unreadable entries are written back untouched
        entries = self._read_entries()
        if entries is None:
            self.storage.set(LOGS_CORRUPT_KEY, self.storage.get(LOGS_KEY))
            logger.error("logs_moved_aside", key=LOGS_CORRUPT_KEY)
            entries = []
        self.storage.set(LOGS_KEY, json.dumps(entries + [log.to_dict()]))
        logger.info("log_added", log_id=log.id, type=log.type, amount=log.amount, date=log.date)
        return log

    def clear_logs(self) -> None:
        self.storage.remove(LOGS_KEY)

    def get_today_logs(self) -> List[DrinkLog]:
        today = format_date(self.clock())
        return [log for log in self.get_logs() if log.date == today]

    def get_logs_by_date_range(self, start: Union[date, datetime], end: Union[date, datetime]) -> List[DrinkLog]:
        lo, hi = format_date(start), format_date(end)
        return [log for log in self.get_logs() if lo <= log.date <= hi]

    def check_new_day_and_reset(self) -> bool:
        """Update the last-open marker; True when the day changed since last open.

        Logs are never touched here.
        """
        today = format_date(self.clock())
        if self.storage.get(LAST_OPEN_DATE_KEY) != today:
            self.storage.set(LAST_OPEN_DATE_KEY, today)
            return True
        return False

    def get_current_month_spent(self) -> float:
        start, end = month_bounds(self.clock())
        return sum(log.amount or 0 for log in self.get_logs() if start <= log.date <= end)
