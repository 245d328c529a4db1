"""Checks done at the presentation boundary before calling the stores.

The stores accept whatever they are given; these helpers are the gate.
"""
from typing import Optional

from cuphabit.domain import DRINK_TYPES, OTHER, DrinkInput
from cuphabit.functional import Either, Left, Right


def _clean(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = text.strip()
    return text or None


def validate_drink_input(
    drink_type: str,
    amount: str,
    name: Optional[str] = None,
    date: Optional[str] = None,
) -> Either[dict, DrinkInput]:
    if drink_type not in DRINK_TYPES:
        return Left({
            "error": "unknown_type",
            "message": f"Drink type {drink_type} is not one of {', '.join(DRINK_TYPES)}",
            "type": drink_type,
        })

    try:
        value = float(amount)
    except (TypeError, ValueError):
        return Left({
            "error": "invalid_amount",
            "message": f"Amount {amount!r} is not a number",
            "amount": amount,
        })
    if not value > 0:
        return Left({
            "error": "invalid_amount",
            "message": "Amount must be greater than zero",
            "amount": value,
        })

    label = _clean(name)
    return Right(DrinkInput(
        type=drink_type,
        amount=value,
        date=date[:10] if date else None,
        name=label if drink_type != OTHER else None,
        custom_name=label if drink_type == OTHER else None,
    ))


def parse_budget_input(text: Optional[str]) -> Optional[float]:
    """Positive number, or None meaning "clear the budget"."""
    try:
        value = float(text)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None
