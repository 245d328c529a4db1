from datetime import date, datetime, timedelta
from typing import Callable, Iterable, Iterator, List, Optional, Union

from cuphabit.domain import DrinkLog
from cuphabit.drink_store import format_date, parse_date

DAY = "day"
WEEK = "week"
MONTH = "month"
YEAR = "year"

VIEW_MODES = (DAY, WEEK, MONTH, YEAR)

Predicate = Callable[[DrinkLog], bool]


def iter_logs(logs: Iterable[DrinkLog], pred: Predicate) -> Iterator[DrinkLog]:
    for log in logs:
        if pred(log):
            yield log


def _safe_parse(value: str) -> Optional[date]:
    try:
        return parse_date(value)
    except ValueError:
        return None


def by_type(drink_type: str) -> Predicate:
    def _filter(log: DrinkLog) -> bool:
        return log.type == drink_type

    return _filter


def by_day(day: str) -> Predicate:
    def _filter(log: DrinkLog) -> bool:
        return log.date == day

    return _filter


def by_date_range(start: str, end: str) -> Predicate:
    def _filter(log: DrinkLog) -> bool:
        return start <= log.date <= end

    return _filter


def week_bounds(ref: Union[date, datetime]) -> tuple[str, str]:
    """Sunday..Saturday of the week containing ref, as YYYY-MM-DD."""
    days_since_sunday = (ref.weekday() + 1) % 7
    start = ref - timedelta(days=days_since_sunday)
    end = start + timedelta(days=6)
    return format_date(start), format_date(end)


def by_week(ref: Union[date, datetime]) -> Predicate:
    return by_date_range(*week_bounds(ref))


def by_month(ref: Union[date, datetime]) -> Predicate:
    def _filter(log: DrinkLog) -> bool:
        d = _safe_parse(log.date)
        return d is not None and d.year == ref.year and d.month == ref.month

    return _filter


def by_year(ref: Union[date, datetime]) -> Predicate:
    def _filter(log: DrinkLog) -> bool:
        d = _safe_parse(log.date)
        return d is not None and d.year == ref.year

    return _filter


def window_predicate(mode: str, now: datetime, reference: Optional[Union[date, datetime]] = None) -> Predicate:
    """Day and week follow now; month and year follow the reference month
    (defaults to now)."""
    ref = reference or now
    if mode == DAY:
        return by_day(format_date(now))
    if mode == WEEK:
        return by_week(now)
    if mode == MONTH:
        return by_month(ref)
    if mode == YEAR:
        return by_year(ref)
    raise ValueError(f"Unknown view mode: {mode!r}")


def filter_logs(
    logs: Iterable[DrinkLog],
    mode: str,
    now: datetime,
    reference: Optional[Union[date, datetime]] = None,
) -> List[DrinkLog]:
    return list(iter_logs(logs, window_predicate(mode, now, reference)))


def today_logs(logs: Iterable[DrinkLog], now: datetime) -> List[DrinkLog]:
    return filter_logs(logs, DAY, now)
