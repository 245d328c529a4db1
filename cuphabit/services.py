from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

import structlog

from cuphabit.budget_store import BudgetStore
from cuphabit.catalog import CupItem, safe_cup
from cuphabit.coin_store import CoinStore
from cuphabit.cup_store import CupStore
from cuphabit.domain import DRINK_TYPES, DrinkInput, DrinkLog
from cuphabit.drink_store import DrinkStore
from cuphabit.filters import filter_logs, today_logs
from cuphabit.policy import BudgetProgress, budget_progress, reward_for_log, window_totals
from cuphabit.ranking import top_categories, top_names
from cuphabit.storage import KeyValueStorage

logger = structlog.get_logger(__name__)


class AddDrinkResult(NamedTuple):
    log: DrinkLog
    coins_awarded: int
    balance: int


class HomeSnapshot(NamedTuple):
    today_logs: List[DrinkLog]
    coins: int
    current_cup: int
    progress: BudgetProgress


class HabitService:
    """Facade over the four stores for the actions the UI offers.

    Each action is a sequence of independent store writes; there is no
    transaction across stores.
    """

    def __init__(
        self,
        drinks: DrinkStore,
        budget: BudgetStore,
        coins: CoinStore,
        cups: CupStore,
        catalog: Sequence[CupItem] = (),
    ):
        self.drinks = drinks
        self.budget = budget
        self.coins = coins
        self.cups = cups
        self.catalog = tuple(catalog)

    @classmethod
    def from_storage(
        cls,
        storage: KeyValueStorage,
        catalog: Sequence[CupItem] = (),
        clock: Callable[[], datetime] = datetime.now,
    ) -> "HabitService":
        return cls(
            DrinkStore(storage, clock),
            BudgetStore(storage),
            CoinStore(storage),
            CupStore(storage),
            catalog,
        )

    def add_drink(self, drink: DrinkInput) -> AddDrinkResult:
        # reward is decided on the spend before this log exists
        reward = reward_for_log(
            self.drinks.get_current_month_spent(),
            drink.amount,
            self.budget.get_monthly_budget(),
        )
        log = self.drinks.add_log(drink)
        balance = self.coins.add_coins(reward)
        logger.info("coins_awarded", log_id=log.id, coins=reward, balance=balance)
        return AddDrinkResult(log, reward, balance)

    def set_budget(self, value: Optional[float]) -> BudgetProgress:
        self.budget.set_monthly_budget(value)
        return self.budget_progress()

    def budget_progress(self) -> BudgetProgress:
        return budget_progress(self.drinks.get_current_month_spent(), self.budget.get_monthly_budget())

    def home_snapshot(self) -> HomeSnapshot:
        return HomeSnapshot(
            today_logs=today_logs(self.drinks.get_logs(), self.drinks.clock()),
            coins=self.coins.get_coins(),
            current_cup=self.cups.get_current_cup(),
            progress=self.budget_progress(),
        )

    def purchase_cup(self, cup_id: int) -> bool:
        cup = safe_cup(self.catalog, cup_id).get_or_else(None)
        if cup is None or self.cups.is_owned(cup_id):
            return False
        if not self.coins.spend_coins(cup.price):
            return False
        self.cups.add_owned_cup(cup_id)
        logger.info("cup_purchased", cup_id=cup_id, price=cup.price)
        return True

    def select_cup(self, cup_id: int) -> bool:
        if not self.cups.is_owned(cup_id):
            return False
        self.cups.set_current_cup(cup_id)
        return True

    def selectable_cups(self) -> Tuple[CupItem, ...]:
        owned = self.cups.get_owned_cups()
        return tuple(c for c in self.catalog if c.id in owned)


def totals_aggregator(logs: List[DrinkLog], acc: Dict[str, Any]) -> Dict[str, Any]:
    return window_totals(logs)._asdict()


def categories_aggregator(logs: List[DrinkLog], acc: Dict[str, Any]) -> Dict[str, Any]:
    return {"top_categories": top_categories(logs)}


def names_aggregator(logs: List[DrinkLog], acc: Dict[str, Any]) -> Dict[str, Any]:
    ranked = [t for t, _ in acc.get("top_categories", [])] or list(DRINK_TYPES)
    return {"top_names": {t: top_names(logs, t) for t in ranked}}


DEFAULT_AGGREGATORS = (totals_aggregator, categories_aggregator, names_aggregator)


class ReportService:
    """Window reports built by running aggregators in order.

    aggregators: functions taking (logs, acc) -> dict; acc holds the merged
    output of the aggregators that ran before.
    """

    def __init__(self, aggregators: Sequence[Callable[..., Dict[str, Any]]] = DEFAULT_AGGREGATORS):
        self.aggregators = aggregators

    def window_report(
        self,
        mode: str,
        logs: Iterable[DrinkLog],
        now: datetime,
        reference: Optional[Union[date, datetime]] = None,
    ) -> Dict[str, Any]:
        window = filter_logs(logs, mode, now, reference)
        report = {"mode": mode, "steps": [], "result": {}}
        acc: Dict[str, Any] = {}
        for agg in self.aggregators:
            out = agg(window, acc)
            report["steps"].append({"aggregator": getattr(agg, "__name__", str(agg)), "output": out})
            if isinstance(out, dict):
                acc.update(out)
        report["result"] = acc
        return report
