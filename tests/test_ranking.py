from cuphabit.domain import BUBBLE, COFFEE, OTHER, DrinkLog
from cuphabit.ranking import category_breakdown, top_categories, top_names


def make_log(drink_type, name=None, custom_name=None, id="x"):
    return DrinkLog(id=id, type=drink_type, amount=4.0, date="2025-01-10", created_at=0,
                    name=name, custom_name=custom_name)


def test_top_categories_by_count():
    logs = [make_log(t) for t in (COFFEE, COFFEE, BUBBLE, OTHER, OTHER, OTHER)]
    assert top_categories(logs) == [(OTHER, 3), (COFFEE, 2), (BUBBLE, 1)]


def test_top_categories_ties_keep_first_seen_order():
    logs = [make_log(t) for t in (BUBBLE, COFFEE, OTHER, COFFEE, BUBBLE)]
    assert top_categories(logs) == [(BUBBLE, 2), (COFFEE, 2), (OTHER, 1)]


def test_top_categories_k():
    logs = [make_log(t) for t in (COFFEE, BUBBLE, OTHER)]
    assert len(top_categories(logs, k=2)) == 2
    assert top_categories([], k=3) == []


def test_top_names_groups_case_insensitively():
    logs = [
        make_log(COFFEE, "Latte"),
        make_log(COFFEE, " latte "),
        make_log(COFFEE, "LATTE"),
        make_log(COFFEE, "Mocha"),
        make_log(COFFEE),
        make_log(BUBBLE, "Latte"),
    ]
    assert top_names(logs, COFFEE) == [("Latte", 3), ("Mocha", 1)]


def test_top_names_top_three():
    names = ["A", "B", "B", "C", "C", "C", "D", "D", "D", "D"]
    logs = [make_log(COFFEE, n) for n in names]
    assert top_names(logs, COFFEE) == [("D", 4), ("C", 3), ("B", 2)]


def test_top_names_uses_custom_name_for_other():
    logs = [make_log(OTHER, custom_name="Juice"), make_log(OTHER, custom_name="juice"), make_log(OTHER)]
    assert top_names(logs, OTHER) == [("Juice", 2)]


def test_top_names_prefers_name_over_custom_name():
    logs = [make_log(OTHER, name="Soda", custom_name="Juice"), make_log(OTHER, name="  ", custom_name="Juice")]
    assert top_names(logs, OTHER) == [("Soda", 1), ("Juice", 1)]


def test_unnamed_logs_still_count_in_category():
    logs = [make_log(COFFEE), make_log(COFFEE), make_log(COFFEE, "Flat white")]
    breakdown = category_breakdown(logs)
    assert breakdown[0].type == COFFEE
    assert breakdown[0].count == 3
    assert breakdown[0].top_names == [("Flat white", 1)]
