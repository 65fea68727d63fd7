"""Data models for the inventory blueprint."""

from __future__ import annotations

from rasoisetu.core.types import FirestoreDocument


class InventoryItem(FirestoreDocument, total=False):
    """An item a supplier offers for sale."""

    supplierId: str
    name: str
    category: str
    price: float
    unit: str
    stock: int
    description: str

    # UI and calculated fields
    stockLevel: str
