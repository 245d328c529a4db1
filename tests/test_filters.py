from datetime import date, datetime
from itertools import islice

import pytest

from cuphabit.domain import BUBBLE, COFFEE, DrinkLog
from cuphabit.filters import (
    DAY, MONTH, WEEK, YEAR,
    by_type, filter_logs, iter_logs, today_logs, week_bounds,
)

# 2025-01-15 is a Wednesday
NOW = datetime(2025, 1, 15, 9, 0)


def make_log(day, drink_type=COFFEE, amount=3.0, id=None):
    return DrinkLog(id=id or day, type=drink_type, amount=amount, date=day, created_at=0)


def test_week_bounds_sunday_to_saturday():
    assert week_bounds(NOW) == ("2025-01-12", "2025-01-18")
    assert week_bounds(date(2025, 1, 12)) == ("2025-01-12", "2025-01-18")
    assert week_bounds(date(2025, 1, 18)) == ("2025-01-12", "2025-01-18")
    # across a year boundary
    assert week_bounds(date(2025, 1, 1)) == ("2024-12-29", "2025-01-04")


def test_week_filter_includes_sunday_through_saturday():
    logs = [make_log(d) for d in ("2025-01-11", "2025-01-12", "2025-01-15", "2025-01-18", "2025-01-19")]
    result = filter_logs(logs, WEEK, NOW)
    assert [log.date for log in result] == ["2025-01-12", "2025-01-15", "2025-01-18"]


def test_day_filter():
    logs = [make_log("2025-01-14"), make_log("2025-01-15"), make_log("2025-01-16")]
    assert [log.date for log in today_logs(logs, NOW)] == ["2025-01-15"]
    assert filter_logs(logs, DAY, NOW) == today_logs(logs, NOW)


def test_month_filter_uses_reference_month():
    logs = [make_log("2024-12-31"), make_log("2025-01-01"), make_log("2025-01-31"), make_log("2025-02-01")]
    assert [log.date for log in filter_logs(logs, MONTH, NOW)] == ["2025-01-01", "2025-01-31"]
    assert [log.date for log in filter_logs(logs, MONTH, NOW, date(2024, 12, 1))] == ["2024-12-31"]


def test_year_filter():
    logs = [make_log("2024-12-31"), make_log("2025-06-01"), make_log("2025-12-31")]
    assert len(filter_logs(logs, YEAR, NOW)) == 2
    assert len(filter_logs(logs, YEAR, NOW, date(2024, 3, 1))) == 1


def test_month_filter_skips_unparsable_dates():
    logs = [make_log("garbage"), make_log("2025-01-05")]
    assert [log.date for log in filter_logs(logs, MONTH, NOW)] == ["2025-01-05"]


def test_unknown_mode():
    with pytest.raises(ValueError):
        filter_logs([], "decade", NOW)


def test_iter_logs_is_lazy():
    logs = [make_log("2025-01-0%d" % i, id=str(i)) for i in range(1, 8)]
    calls = {"n": 0}

    def pred(log):
        calls["n"] += 1
        return True

    first_two = list(islice(iter_logs(logs, pred), 2))
    assert len(first_two) == 2
    assert calls["n"] < len(logs)


def test_by_type():
    logs = [make_log("2025-01-01", COFFEE), make_log("2025-01-02", BUBBLE)]
    assert [log.type for log in filter(by_type(BUBBLE), logs)] == [BUBBLE]
