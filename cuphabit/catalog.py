import json
from dataclasses import dataclass
from typing import Tuple

from cuphabit.functional import Maybe, Nothing, Some

CUP_CATEGORIES = ("classic", "special", "limited")


@dataclass(frozen=True)
class CupItem:
    id: int
    name: str
    price: int
    category: str   # classic | special | limited
    color: str
    gradient: str


def load_catalog(path: str) -> Tuple[CupItem, ...]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return tuple(CupItem(**c) for c in data["cups"])


def safe_cup(cups: Tuple[CupItem, ...], cup_id: int) -> Maybe[CupItem]:
    for cup in cups:
        if cup.id == cup_id:
            return Some(cup)
    return Nothing()


def cups_in_category(cups: Tuple[CupItem, ...], category: str) -> Tuple[CupItem, ...]:
    return tuple(filter(lambda c: c.category == category, cups))
