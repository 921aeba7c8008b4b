from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class Credentials:
    """OAuth2 client credentials for the Sharesight API."""

    client_id: str
    client_secret: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class CustomInvestment:
    """A user defined, non-listed asset tracked in a Sharesight portfolio."""

    id: int
    code: str
    name: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CustomInvestment":
        """Build an instance from one entry of the ``custom_investments`` list.

        Raises ``KeyError``, ``TypeError`` or ``ValueError`` on malformed records.
        """
        return cls(
            id=int(record["id"]),
            code=str(record["code"]),
            name=str(record["name"]),
        )

    def as_row(self) -> str:
        return f"{self.id}\t{self.code}\t{self.name}"


@dataclass(frozen=True, slots=True)
class PriceObservation:
    """A price for a single calendar day (``date`` is ``YYYY-MM-DD``)."""

    date: str
    price: float

    def as_payload(self) -> dict[str, Any]:
        """Return the JSON body accepted by the custom investment prices endpoint."""
        return {"last_traded_on": self.date, "last_traded_price": self.price}
