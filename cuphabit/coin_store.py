import structlog

from cuphabit.storage import COINS_KEY, KeyValueStorage

logger = structlog.get_logger(__name__)

DEFAULT_COINS = 1000


class CoinStore:

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def get_coins(self) -> int:
        raw = self.storage.get(COINS_KEY)
        if not raw:
            return DEFAULT_COINS
        try:
            return int(float(raw))
        except (ValueError, OverflowError) as e:
            logger.warning("coins_parse_failed", raw=raw, error=str(e))
            return DEFAULT_COINS

    def add_coins(self, amount: int) -> int:
        new_total = self.get_coins() + amount
        self.storage.set(COINS_KEY, str(new_total))
        return new_total

    def spend_coins(self, amount: int) -> bool:
        """Deduct amount if affordable. The only guard against a negative balance."""
        current = self.get_coins()
        if current < amount:
            logger.info("coins_spend_rejected", balance=current, amount=amount)
            return False
        self.storage.set(COINS_KEY, str(current - amount))
        return True

    def reset_coins(self) -> None:
        self.storage.set(COINS_KEY, str(DEFAULT_COINS))
