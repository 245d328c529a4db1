from cuphabit.coin_store import DEFAULT_COINS, CoinStore
from cuphabit.storage import COINS_KEY, MemoryStorage


def test_default_balance():
    assert CoinStore(MemoryStorage()).get_coins() == DEFAULT_COINS == 1000


def test_add_coins_returns_new_balance():
    store = CoinStore(MemoryStorage())
    assert store.add_coins(100) == 1100
    assert store.add_coins(20) == 1120
    assert store.get_coins() == 1120


def test_spend_coins_success():
    store = CoinStore(MemoryStorage())
    assert store.spend_coins(800) is True
    assert store.get_coins() == 200
    assert store.spend_coins(200) is True
    assert store.get_coins() == 0


def test_spend_coins_insufficient_leaves_balance():
    store = CoinStore(MemoryStorage())
    assert store.spend_coins(1001) is False
    assert store.get_coins() == 1000


def test_balance_never_negative():
    store = CoinStore(MemoryStorage())
    for amount in (300, 300, 300, 300, 300):
        store.spend_coins(amount)
        assert store.get_coins() >= 0
    assert store.get_coins() == 100


def test_reset_coins():
    store = CoinStore(MemoryStorage())
    store.add_coins(500)
    store.reset_coins()
    assert store.get_coins() == 1000


def test_corrupted_balance_falls_back_to_default():
    store = CoinStore(MemoryStorage({COINS_KEY: "lots"}))
    assert store.get_coins() == 1000


def test_decimal_balance_string_keeps_whole_coins():
    assert CoinStore(MemoryStorage({COINS_KEY: "1000.0"})).get_coins() == 1000
    assert CoinStore(MemoryStorage({COINS_KEY: "250.9"})).get_coins() == 250
    assert CoinStore(MemoryStorage({COINS_KEY: "inf"})).get_coins() == 1000
