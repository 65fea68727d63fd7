"""Data models for the direct order blueprint."""

from __future__ import annotations

import datetime
from dataclasses import asdict, dataclass, field
from typing import Any, Optional, TypedDict

from rasoisetu.core.types import FirestoreDocument


class OrderItem(TypedDict):
    """One line of a direct order."""

    itemId: str
    name: str
    quantity: int
    price: float
    unit: str


class Order(FirestoreDocument, total=False):
    """A direct order document in Firestore."""

    retailerId: str
    supplierId: str
    items: list[OrderItem]
    totalAmount: float
    status: str
    isGroupOrder: bool
    groupOrderId: str


@dataclass
class InvoiceLine:
    """A numbered invoice line with its total."""

    number: int
    name: str
    quantity: int
    unit: str
    price: float
    total: float


@dataclass
class Invoice:
    """Printable invoice data for a direct order."""

    title: str
    order_id: str
    date: Optional[datetime.date]
    status: str
    currency: str
    lines: list[InvoiceLine] = field(default_factory=list)
    total_amount: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        data = asdict(self)
        data["date"] = self.date.isoformat() if self.date else None
        return data
