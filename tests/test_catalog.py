from pathlib import Path

from cuphabit.catalog import CUP_CATEGORIES, cups_in_category, load_catalog, safe_cup

CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "cups.json"


def test_load_catalog():
    cups = load_catalog(str(CATALOG_PATH))
    assert len(cups) == 10
    assert {c.category for c in cups} == set(CUP_CATEGORIES)
    assert len({c.id for c in cups}) == len(cups)


def test_default_cup_is_free():
    cups = load_catalog(str(CATALOG_PATH))
    classic = safe_cup(cups, 1).get_or_else(None)
    assert classic.name == "Classic White"
    assert classic.price == 0


def test_safe_cup_missing():
    cups = load_catalog(str(CATALOG_PATH))
    assert safe_cup(cups, 42).get_or_else(None) is None
    assert safe_cup(cups, 42).map(lambda c: c.name).get_or_else("none") == "none"


def test_cups_in_category():
    cups = load_catalog(str(CATALOG_PATH))
    limited = cups_in_category(cups, "limited")
    assert [c.name for c in limited] == ["Holiday Special", "Galaxy Cup"]
