"""Pure derivations over store snapshots.

Nothing here reads storage; callers pass the values they read so the order
of reads and writes stays visible at the call site.
"""
import calendar
from datetime import date
from typing import Iterable, List, NamedTuple, Optional

from cuphabit.domain import BUBBLE, COFFEE, OTHER, DrinkLog
from cuphabit.drink_store import format_date

FULL_REWARD = 100
REDUCED_REWARD = 20


class BudgetProgress(NamedTuple):
    budget: Optional[float]
    spent: float
    percent: float
    remaining: Optional[float]  # None when no budget is set


class WindowTotals(NamedTuple):
    total_cups: int
    total_spent: float
    avg_per_cup: float


class CalendarDay(NamedTuple):
    date: str
    has_coffee: bool
    has_bubble: bool
    has_other: bool
    count: int


def budget_progress(month_spent: float, budget: Optional[float]) -> BudgetProgress:
    if budget is None or budget <= 0:
        return BudgetProgress(None, month_spent, 0.0, None)
    percent = min(month_spent / budget * 100, 100.0)
    return BudgetProgress(budget, month_spent, max(0.0, percent), max(0.0, budget - month_spent))


def reward_for_log(month_spent: float, amount: float, budget: Optional[float]) -> int:
    """Coins for a new log, decided from the spend before it is persisted."""
    projected = month_spent + amount
    if budget is not None and budget > 0 and projected > budget:
        return REDUCED_REWARD
    return FULL_REWARD


def window_totals(logs: Iterable[DrinkLog]) -> WindowTotals:
    amounts = [log.amount for log in logs]
    total = sum(amounts)
    return WindowTotals(len(amounts), total, total / len(amounts) if amounts else 0.0)


def calendar_day(logs: Iterable[DrinkLog], day: str) -> CalendarDay:
    day_logs = [log for log in logs if log.date == day]
    types = {log.type for log in day_logs}
    return CalendarDay(day, COFFEE in types, BUBBLE in types, OTHER in types, len(day_logs))


def month_calendar(logs: Iterable[DrinkLog], year: int, month: int) -> List[CalendarDay]:
    logs = list(logs)
    days_in_month = calendar.monthrange(year, month)[1]
    return [calendar_day(logs, format_date(date(year, month, d))) for d in range(1, days_in_month + 1)]


def first_weekday_offset(year: int, month: int) -> int:
    """Blank cells before day 1 in a Sunday-first grid."""
    return (date(year, month, 1).weekday() + 1) % 7
