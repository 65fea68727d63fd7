"""Service layer for direct retailer-to-supplier orders."""

from __future__ import annotations

import datetime
import logging
import math
import numbers
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from rasoisetu.core.constants import (
    CURRENCY_SYMBOL,
    INVOICE_TITLE,
    ORDER_COMPLETED,
    ORDER_CONFIRMED,
    ORDER_PENDING,
    ORDER_REJECTED,
    ORDER_STATUSES,
    ORDERS_COLLECTION,
    UNITS,
)
from rasoisetu.errors import AccessDenied, NotFoundError, ValidationError
from rasoisetu.group_order.services import GroupOrderService
from rasoisetu.utils import utc_now

from .models import Invoice, InvoiceLine

if TYPE_CHECKING:
    from rasoisetu.core.store import DocumentStore

    from .models import Order, OrderItem

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    ORDER_PENDING: (ORDER_CONFIRMED, ORDER_REJECTED),
    ORDER_CONFIRMED: (ORDER_COMPLETED,),
}


def _money(amount: float) -> float:
    return round(float(amount), 2)


class OrderService:
    """Service class for direct order operations."""

    @staticmethod
    def _clean_items(items: Any) -> list[OrderItem]:
        """Validate the submitted order lines and normalise their types."""
        if not isinstance(items, list) or not items:
            raise ValidationError("An order needs at least one item.")

        cleaned = []
        for index, item in enumerate(items, start=1):
            if not isinstance(item, dict):
                raise ValidationError(f"Item {index} is malformed.")
            quantity = item.get("quantity")
            price = item.get("price")
            if not item.get("itemId") or not item.get("name"):
                raise ValidationError(f"Item {index} needs an id and a name.")
            if (
                not isinstance(quantity, numbers.Integral)
                or isinstance(quantity, bool)
                or quantity < 1
            ):
                raise ValidationError(f"Item {index} needs a quantity of at least 1.")
            if (
                not isinstance(price, numbers.Real)
                or isinstance(price, bool)
                or not math.isfinite(price)
                or price <= 0
            ):
                raise ValidationError(f"Item {index} needs a price above zero.")
            if item.get("unit") not in UNITS:
                raise ValidationError(f"Item {index} has an unknown unit.")
            cleaned.append(
                {
                    "itemId": str(item["itemId"]),
                    "name": str(item["name"]),
                    "quantity": int(quantity),
                    "price": float(price),
                    "unit": item["unit"],
                }
            )
        return cleaned

    @staticmethod
    def order_total(items: Iterable[OrderItem]) -> float:
        """Sum quantity times price over the order lines."""
        return _money(sum(item["quantity"] * item["price"] for item in items))

    @staticmethod
    def create_order(  # noqa: PLR0913
        store: DocumentStore,
        retailer_id: str,
        supplier_id: str,
        items: list[dict[str, Any]],
        group_order_id: str | None = None,
        now: datetime.datetime | None = None,
    ) -> str:
        """Place a pending order with one supplier and return its id."""
        if not retailer_id or not supplier_id:
            raise ValidationError("An order needs a retailer and a supplier.")
        cleaned_items = OrderService._clean_items(items)
        if group_order_id:
            GroupOrderService.get_group_order(store, group_order_id)
        now = now or utc_now()

        order_data = {
            "retailerId": retailer_id,
            "supplierId": supplier_id,
            "items": cleaned_items,
            "totalAmount": OrderService.order_total(cleaned_items),
            "status": ORDER_PENDING,
            "isGroupOrder": bool(group_order_id),
            "createdAt": now,
            "updatedAt": now,
        }
        if group_order_id:
            order_data["groupOrderId"] = group_order_id

        order_id = store.insert(ORDERS_COLLECTION, order_data)
        logger.info(f"Order {order_id} placed by {retailer_id} with {supplier_id}")
        return order_id

    @staticmethod
    def get_order(store: DocumentStore, order_id: str, user_id: str) -> Order:
        """Fetch an order visible to its retailer or supplier."""
        order = store.get(ORDERS_COLLECTION, order_id)
        if order is None:
            raise NotFoundError("Order not found.")
        if user_id not in (order.get("retailerId"), order.get("supplierId")):
            raise AccessDenied("You do not have access to this order.")
        return order  # type: ignore[return-value]

    @staticmethod
    def update_order_status(
        store: DocumentStore,
        order_id: str,
        supplier_id: str,
        status: str,
        now: datetime.datetime | None = None,
    ) -> None:
        """Move an order along ``pending -> confirmed|rejected -> completed``."""
        if status not in ORDER_STATUSES:
            raise ValidationError(f"Unknown order status '{status}'.")
        order = store.get(ORDERS_COLLECTION, order_id)
        if order is None:
            raise NotFoundError("Order not found.")
        if order.get("supplierId") != supplier_id:
            raise AccessDenied("Only the supplier can update this order.")

        current = order.get("status")
        if status not in ALLOWED_TRANSITIONS.get(current, ()):
            raise ValidationError(f"Cannot change an order from {current} to {status}.")

        store.update(
            ORDERS_COLLECTION,
            order_id,
            {"status": status, "updatedAt": now or utc_now()},
        )
        logger.info(f"Order {order_id} moved from {current} to {status}")

    @staticmethod
    def get_retailer_orders(store: DocumentStore, retailer_id: str) -> list[Order]:
        """Return a retailer's orders, newest first."""
        return store.query_by_equality(  # type: ignore[return-value]
            ORDERS_COLLECTION,
            "retailerId",
            retailer_id,
            order_by="createdAt",
            descending=True,
        )

    @staticmethod
    def get_supplier_orders(store: DocumentStore, supplier_id: str) -> list[Order]:
        """Return the orders placed with a supplier, newest first."""
        return store.query_by_equality(  # type: ignore[return-value]
            ORDERS_COLLECTION,
            "supplierId",
            supplier_id,
            order_by="createdAt",
            descending=True,
        )

    @staticmethod
    def filter_orders_by_status(orders: Iterable[Order], status: str) -> list[Order]:
        """Keep orders in ``status``; ``all`` keeps everything."""
        if status == "all":
            return list(orders)
        return [order for order in orders if order.get("status") == status]

    @staticmethod
    def build_invoice(order: Order) -> Invoice:
        """Build the invoice for an order."""
        created_at = order.get("createdAt")
        invoice = Invoice(
            title=INVOICE_TITLE,
            order_id=order["id"],
            date=created_at.date()
            if isinstance(created_at, datetime.datetime)
            else None,
            status=str(order.get("status", "")).upper(),
            currency=CURRENCY_SYMBOL,
        )
        for number, item in enumerate(order.get("items", []), start=1):
            invoice.lines.append(
                InvoiceLine(
                    number=number,
                    name=item["name"],
                    quantity=item["quantity"],
                    unit=item["unit"],
                    price=_money(item["price"]),
                    total=_money(item["quantity"] * item["price"]),
                )
            )
        invoice.total_amount = _money(order.get("totalAmount", 0.0))
        return invoice
