"""Service layer for group order creation, membership and lifecycle."""

from __future__ import annotations

import datetime
import logging
import math
import numbers
from typing import TYPE_CHECKING, Any

from rasoisetu.core.constants import (
    CATEGORIES,
    GROUP_ORDER_ACTIVE,
    GROUP_ORDER_COMPLETED,
    GROUP_ORDER_EXPIRED,
    GROUP_ORDER_MIN_VENDORS,
    GROUP_ORDERS_COLLECTION,
    UNITS,
)
from rasoisetu.core.store import field_path
from rasoisetu.errors import NotFoundError, ValidationError
from rasoisetu.utils import ensure_aware, utc_now

from .utils import is_expired, next_status

if TYPE_CHECKING:
    from rasoisetu.core.store import DocumentStore

    from .models import GroupOrder

logger = logging.getLogger(__name__)


def _is_whole_number(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


class GroupOrderService:
    """Service class for group order operations."""

    @staticmethod
    def _validate_new_group_order(  # noqa: PLR0913
        creator_id: str,
        item_name: str,
        category: str,
        target_price: Any,
        unit: str,
        min_vendors: Any,
        deadline: Any,
        now: datetime.datetime,
    ) -> None:
        """Raise ValidationError if the creation input breaks a precondition."""
        required = {
            "creator": creator_id,
            "item name": item_name and item_name.strip(),
            "category": category,
            "target price": target_price,
            "unit": unit,
            "minimum vendors": min_vendors,
            "deadline": deadline,
        }
        missing = [name for name, value in required.items() if value in (None, "")]
        if missing:
            raise ValidationError(f"Please fill in: {', '.join(missing)}.")

        if category not in CATEGORIES:
            raise ValidationError(f"Unknown category '{category}'.")
        if unit not in UNITS:
            raise ValidationError(f"Unknown unit '{unit}'.")
        if not _is_number(target_price) or target_price <= 0:
            raise ValidationError("Target price must be greater than zero.")
        if not _is_whole_number(min_vendors) or min_vendors < GROUP_ORDER_MIN_VENDORS:
            raise ValidationError(
                f"A group order needs at least {GROUP_ORDER_MIN_VENDORS} vendors."
            )
        if not isinstance(deadline, datetime.datetime):
            raise ValidationError("Deadline must be a date and time.")
        if ensure_aware(deadline) <= now:
            raise ValidationError("Deadline must be in the future.")

    @staticmethod
    def create_group_order(  # noqa: PLR0913
        store: DocumentStore,
        creator_id: str,
        item_name: str,
        category: str,
        target_price: float,
        unit: str,
        min_vendors: int,
        deadline: datetime.datetime,
        now: datetime.datetime | None = None,
    ) -> str:
        """Create an active group order with the creator as its first member."""
        now = ensure_aware(now or utc_now())
        GroupOrderService._validate_new_group_order(
            creator_id,
            item_name,
            category,
            target_price,
            unit,
            min_vendors,
            deadline,
            now,
        )

        group_order_data = {
            "createdBy": creator_id,
            "itemName": item_name.strip(),
            "category": category,
            "targetPrice": float(target_price),
            "unit": unit,
            "minVendors": int(min_vendors),
            "vendorsById": {
                creator_id: {"userId": creator_id, "quantity": 1, "joinedAt": now}
            },
            "deadline": ensure_aware(deadline),
            "status": GROUP_ORDER_ACTIVE,
            "createdAt": now,
        }
        group_order_id = store.insert(GROUP_ORDERS_COLLECTION, group_order_data)
        logger.info(f"Group order {group_order_id} created by {creator_id}")
        return group_order_id

    @staticmethod
    def get_group_order(store: DocumentStore, group_order_id: str) -> GroupOrder:
        """Fetch a single group order."""
        group_order = store.get(GROUP_ORDERS_COLLECTION, group_order_id)
        if group_order is None:
            raise NotFoundError("Group order not found.")
        return group_order  # type: ignore[return-value]

    @staticmethod
    def join_group_order(
        store: DocumentStore,
        group_order_id: str,
        user_id: str,
        quantity: int = 1,
        now: datetime.datetime | None = None,
    ) -> None:
        """Join a group order, or replace the quantity of an existing membership.

        Each call writes only the caller's entry of ``vendorsById``, so joins by
        different users never overwrite one another.
        """
        if not user_id:
            raise ValidationError("A user is required to join a group order.")
        if not _is_whole_number(quantity) or quantity < 1:
            raise ValidationError("Quantity must be a whole number of at least 1.")
        now = ensure_aware(now or utc_now())

        group_order = GroupOrderService.get_group_order(store, group_order_id)
        if group_order.get("status") == GROUP_ORDER_EXPIRED or is_expired(
            group_order["deadline"], now
        ):
            raise ValidationError("This group order has expired.")

        if user_id in (group_order.get("vendorsById") or {}):
            store.update(
                GROUP_ORDERS_COLLECTION,
                group_order_id,
                {field_path("vendorsById", user_id, "quantity"): int(quantity)},
            )
            logger.info(
                f"User {user_id} changed quantity to {quantity} on {group_order_id}"
            )
        else:
            store.update(
                GROUP_ORDERS_COLLECTION,
                group_order_id,
                {
                    field_path("vendorsById", user_id): {
                        "userId": user_id,
                        "quantity": int(quantity),
                        "joinedAt": now,
                    }
                },
            )
            logger.info(f"User {user_id} joined group order {group_order_id}")

    @staticmethod
    def list_active_group_orders(store: DocumentStore) -> list[GroupOrder]:
        """Return active group orders, soonest deadline first."""
        return store.query_by_equality(  # type: ignore[return-value]
            GROUP_ORDERS_COLLECTION,
            "status",
            GROUP_ORDER_ACTIVE,
            order_by="deadline",
        )

    @staticmethod
    def reconcile_group_orders(
        store: DocumentStore, now: datetime.datetime | None = None
    ) -> dict[str, int]:
        """Move active orders that met their threshold or deadline to a final status."""
        now = ensure_aware(now or utc_now())
        counts = {GROUP_ORDER_COMPLETED: 0, GROUP_ORDER_EXPIRED: 0}

        for group_order in GroupOrderService.list_active_group_orders(store):
            new_status = next_status(group_order, now)
            if new_status is None:
                continue
            store.update(
                GROUP_ORDERS_COLLECTION,
                group_order["id"],
                {"status": new_status, "statusChangedAt": now},
            )
            counts[new_status] += 1
            logger.info(f"Group order {group_order['id']} marked {new_status}")

        return counts
