"""Service layer for supplier inventory."""

from __future__ import annotations

import datetime
import logging
import math
from typing import TYPE_CHECKING, Any

from rasoisetu.core.constants import (
    CATEGORIES,
    INVENTORY_COLLECTION,
    LOW_STOCK_THRESHOLD,
    UNITS,
)
from rasoisetu.errors import AccessDenied, NotFoundError, ValidationError
from rasoisetu.utils import utc_now

if TYPE_CHECKING:
    from rasoisetu.core.store import DocumentStore

    from .models import InventoryItem

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "category", "price", "unit", "stock", "description")


class InventoryService:
    """Service class for inventory operations."""

    @staticmethod
    def _validate_fields(fields: dict[str, Any]) -> None:
        """Check every field present in ``fields``."""
        if "name" in fields and not (fields["name"] or "").strip():
            raise ValidationError("Item name is required.")
        if "category" in fields and fields["category"] not in CATEGORIES:
            raise ValidationError(f"Unknown category '{fields['category']}'.")
        if "unit" in fields and fields["unit"] not in UNITS:
            raise ValidationError(f"Unknown unit '{fields['unit']}'.")
        if "price" in fields and (
            fields["price"] is None
            or not math.isfinite(fields["price"])
            or fields["price"] <= 0
        ):
            raise ValidationError("Price must be greater than zero.")
        if "stock" in fields and (fields["stock"] is None or fields["stock"] < 0):
            raise ValidationError("Stock cannot be negative.")

    @staticmethod
    def _get_owned_item(
        store: DocumentStore, item_id: str, supplier_id: str
    ) -> InventoryItem:
        item = store.get(INVENTORY_COLLECTION, item_id)
        if item is None:
            raise NotFoundError("Inventory item not found.")
        if item.get("supplierId") != supplier_id:
            raise AccessDenied("You can only change your own inventory.")
        return item  # type: ignore[return-value]

    @staticmethod
    def add_item(  # noqa: PLR0913
        store: DocumentStore,
        supplier_id: str,
        name: str,
        category: str,
        price: float,
        unit: str,
        stock: int,
        description: str | None = None,
        now: datetime.datetime | None = None,
    ) -> str:
        """Add an item to a supplier's inventory and return its id."""
        if not supplier_id:
            raise ValidationError("A supplier is required.")
        fields = {
            "name": name,
            "category": category,
            "price": price,
            "unit": unit,
            "stock": stock,
        }
        InventoryService._validate_fields(fields)
        now = now or utc_now()

        item_data = {
            "supplierId": supplier_id,
            "name": name.strip(),
            "category": category,
            "price": float(price),
            "unit": unit,
            "stock": int(stock),
            "createdAt": now,
            "updatedAt": now,
        }
        if description:
            item_data["description"] = description
        item_id = store.insert(INVENTORY_COLLECTION, item_data)
        logger.info(f"Supplier {supplier_id} added inventory item {item_id}")
        return item_id

    @staticmethod
    def update_item(
        store: DocumentStore,
        item_id: str,
        supplier_id: str,
        updates: dict[str, Any],
        now: datetime.datetime | None = None,
    ) -> None:
        """Change fields of an item owned by the supplier."""
        unknown = set(updates) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot change: {', '.join(sorted(unknown))}.")
        if not updates:
            raise ValidationError("Nothing to update.")
        InventoryService._validate_fields(updates)
        InventoryService._get_owned_item(store, item_id, supplier_id)

        changes = dict(updates)
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        changes["updatedAt"] = now or utc_now()
        store.update(INVENTORY_COLLECTION, item_id, changes)

    @staticmethod
    def delete_item(store: DocumentStore, item_id: str, supplier_id: str) -> None:
        """Remove an item owned by the supplier."""
        InventoryService._get_owned_item(store, item_id, supplier_id)
        store.delete(INVENTORY_COLLECTION, item_id)
        logger.info(f"Supplier {supplier_id} deleted inventory item {item_id}")

    @staticmethod
    def get_supplier_inventory(
        store: DocumentStore, supplier_id: str
    ) -> list[InventoryItem]:
        """Return a supplier's items sorted by name."""
        return store.query_by_equality(  # type: ignore[return-value]
            INVENTORY_COLLECTION, "supplierId", supplier_id, order_by="name"
        )

    @staticmethod
    def get_all_inventory(store: DocumentStore) -> list[InventoryItem]:
        """Return every item sorted by name."""
        return store.list_all(  # type: ignore[return-value]
            INVENTORY_COLLECTION, order_by="name"
        )

    @staticmethod
    def search_by_name(store: DocumentStore, term: str) -> list[InventoryItem]:
        """Return items whose name contains ``term``, ignoring case.

        Firestore has no substring queries, so this filters in memory.
        """
        term = term.strip().lower()
        items = InventoryService.get_all_inventory(store)
        return [item for item in items if term in item.get("name", "").lower()]

    @staticmethod
    def get_by_category(store: DocumentStore, category: str) -> list[InventoryItem]:
        """Return the items of one category, cheapest first."""
        if category not in CATEGORIES:
            raise ValidationError(f"Unknown category '{category}'.")
        return store.query_by_equality(  # type: ignore[return-value]
            INVENTORY_COLLECTION, "category", category, order_by="price"
        )

    @staticmethod
    def stock_level(stock: int) -> str:
        """Classify a stock count as ``out``, ``low`` or ``ok``."""
        if stock <= 0:
            return "out"
        if stock < LOW_STOCK_THRESHOLD:
            return "low"
        return "ok"
