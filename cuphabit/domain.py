from dataclasses import dataclass
from typing import Optional

COFFEE = "COFFEE"
BUBBLE = "BUBBLE"
OTHER = "OTHER"

DRINK_TYPES = (COFFEE, BUBBLE, OTHER)

# older data stored bubble tea as "BOBA"
LEGACY_TYPE_ALIASES = {"BOBA": BUBBLE}


def normalize_type(raw: str) -> str:
    drink_type = LEGACY_TYPE_ALIASES.get(raw, raw)
    if drink_type not in DRINK_TYPES:
        raise ValueError(f"Unknown drink type: {raw!r}")
    return drink_type


@dataclass(frozen=True)
class DrinkInput:
    type: str
    amount: float
    date: Optional[str] = None        # YYYY-MM-DD, longer ISO strings get truncated
    name: Optional[str] = None        # coffee / bubble only
    custom_name: Optional[str] = None  # other only


@dataclass(frozen=True)
class DrinkLog:
    id: str
    type: str
    amount: float
    date: str          # YYYY-MM-DD, local day the drink belongs to
    created_at: int    # ms since epoch, audit only
    name: Optional[str] = None
    custom_name: Optional[str] = None

    @property
    def label(self) -> Optional[str]:
        """First non-empty of name / custom_name, trimmed."""
        for value in (self.name, self.custom_name):
            if value and value.strip():
                return value.strip()
        return None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "type": self.type,
            "amount": self.amount,
            "date": self.date,
            "createdAt": self.created_at,
        }
        if self.name is not None:
            data["name"] = self.name
        if self.custom_name is not None:
            data["customName"] = self.custom_name
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "DrinkLog":
        return cls(
            id=str(data["id"]),
            type=normalize_type(data["type"]),
            amount=float(data.get("amount") or 0),
            date=str(data.get("date") or "")[:10],
            created_at=int(data.get("createdAt", 0)),
            name=data.get("name"),
            custom_name=data.get("customName"),
        )
