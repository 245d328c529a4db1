from typing import Dict, Iterable, List, NamedTuple, Tuple

from cuphabit.domain import DrinkLog
from cuphabit.filters import by_type, iter_logs

TOP_K = 3


class CategorySummary(NamedTuple):
    type: str
    count: int
    top_names: List[Tuple[str, int]]


def _top(counts: Dict[str, int], k: int) -> List[Tuple[str, int]]:
    # sorted() is stable and dicts keep insertion order, so ties stay in
    # first-seen order
    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ordered[: max(0, k)]


def top_categories(logs: Iterable[DrinkLog], k: int = TOP_K) -> List[Tuple[str, int]]:
    counts: Dict[str, int] = {}
    for log in logs:
        counts[log.type] = counts.get(log.type, 0) + 1
    return _top(counts, k)


def top_names(logs: Iterable[DrinkLog], drink_type: str, k: int = TOP_K) -> List[Tuple[str, int]]:
    """Most frequent labels within one drink type.

    Labels are grouped case-insensitively after trimming; the first casing
    seen is the one shown. Unlabelled logs are skipped.
    """
    counts: Dict[str, int] = {}
    display: Dict[str, str] = {}
    for log in iter_logs(logs, by_type(drink_type)):
        label = log.label
        if label is None:
            continue
        key = label.lower()
        display.setdefault(key, label)
        counts[key] = counts.get(key, 0) + 1
    return [(display[key], count) for key, count in _top(counts, k)]


def category_breakdown(logs: Iterable[DrinkLog], k: int = TOP_K) -> List[CategorySummary]:
    logs = list(logs)
    return [
        CategorySummary(drink_type, count, top_names(logs, drink_type, k))
        for drink_type, count in top_categories(logs, k)
    ]
