from cuphabit.budget_store import BudgetStore
from cuphabit.storage import MONTHLY_BUDGET_KEY, MemoryStorage


def test_budget_unset_by_default():
    assert BudgetStore(MemoryStorage()).get_monthly_budget() is None


def test_set_and_get_budget():
    store = BudgetStore(MemoryStorage())
    store.set_monthly_budget(120.5)
    assert store.get_monthly_budget() == 120.5

    store.set_monthly_budget(80)
    assert store.get_monthly_budget() == 80.0


def test_non_positive_or_none_clears_budget():
    storage = MemoryStorage()
    store = BudgetStore(storage)
    for value in (0, -5, None):
        store.set_monthly_budget(100)
        store.set_monthly_budget(value)
        assert store.get_monthly_budget() is None
        assert storage.get(MONTHLY_BUDGET_KEY) is None


def test_bad_stored_values_read_as_unset():
    for raw in ("0", "-3", "abc", "nan", ""):
        store = BudgetStore(MemoryStorage({MONTHLY_BUDGET_KEY: raw}))
        assert store.get_monthly_budget() is None


def test_budget_has_no_month_tag():
    storage = MemoryStorage()
    BudgetStore(storage).set_monthly_budget(50)
    # a fresh store at any later time still sees the same value
    assert BudgetStore(storage).get_monthly_budget() == 50.0
