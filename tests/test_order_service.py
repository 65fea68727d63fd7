"""Tests for OrderService."""

import datetime
import unittest

from rasoisetu.core.store import FirestoreDocumentStore
from rasoisetu.errors import AccessDenied, NotFoundError, ValidationError
from rasoisetu.group_order.services import GroupOrderService
from rasoisetu.order.services import OrderService
from tests.mock_utils import FIXED_NOW, new_mock_db

RETAILER_ID = "retailer1"
SUPPLIER_ID = "supplier1"

ITEMS = [
    {"itemId": "i1", "name": "Onions", "quantity": 3, "price": 24.5, "unit": "kg"},
    {"itemId": "i2", "name": "Ghee", "quantity": 1, "price": 560.0, "unit": "litre"},
]


class OrderServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = new_mock_db()
        self.store = FirestoreDocumentStore(self.db)

    def _place(self, items=None, now=FIXED_NOW, **kwargs):
        return OrderService.create_order(
            self.store, RETAILER_ID, SUPPLIER_ID, items or ITEMS, now=now, **kwargs
        )

    def test_create_order(self) -> None:
        order_id = self._place()
        order = OrderService.get_order(self.store, order_id, RETAILER_ID)
        self.assertEqual(order["status"], "pending")
        self.assertEqual(order["totalAmount"], 633.5)
        self.assertFalse(order["isGroupOrder"])
        self.assertNotIn("groupOrderId", order)

    def test_create_order_for_group_order(self) -> None:
        group_order_id = GroupOrderService.create_group_order(
            self.store,
            RETAILER_ID,
            "Onions",
            "vegetables",
            24.5,
            "kg",
            2,
            FIXED_NOW + datetime.timedelta(days=1),
            now=FIXED_NOW,
        )
        order_id = self._place(group_order_id=group_order_id)
        order = OrderService.get_order(self.store, order_id, SUPPLIER_ID)
        self.assertTrue(order["isGroupOrder"])
        self.assertEqual(order["groupOrderId"], group_order_id)

    def test_create_order_for_unknown_group_order(self) -> None:
        with self.assertRaises(NotFoundError):
            self._place(group_order_id="missing")

    def test_create_order_item_validation(self) -> None:
        bad_items = [
            [],
            None,
            ["not a dict"],
            [{"itemId": "i1", "quantity": 1, "price": 2.0, "unit": "kg"}],
            [{"itemId": "i1", "name": "Salt", "quantity": 0, "price": 2.0, "unit": "kg"}],
            [{"itemId": "i1", "name": "Salt", "quantity": 1, "price": 0, "unit": "kg"}],
            [{"itemId": "i1", "name": "Salt", "quantity": 1, "price": 2.0, "unit": "sack"}],
            [
                {
                    "itemId": "i1",
                    "name": "Salt",
                    "quantity": 1,
                    "price": float("nan"),
                    "unit": "kg",
                }
            ],
        ]
        for items in bad_items:
            with self.subTest(items=items):
                with self.assertRaises(ValidationError):
                    OrderService.create_order(
                        self.store, RETAILER_ID, SUPPLIER_ID, items, now=FIXED_NOW
                    )

    def test_get_order_access(self) -> None:
        order_id = self._place()
        with self.assertRaises(AccessDenied):
            OrderService.get_order(self.store, order_id, "retailer2")

    def test_status_transitions(self) -> None:
        order_id = self._place()
        later = FIXED_NOW + datetime.timedelta(hours=1)

        with self.assertRaises(ValidationError):
            OrderService.update_order_status(
                self.store, order_id, SUPPLIER_ID, "completed"
            )
        OrderService.update_order_status(
            self.store, order_id, SUPPLIER_ID, "confirmed", now=later
        )
        OrderService.update_order_status(
            self.store, order_id, SUPPLIER_ID, "completed", now=later
        )

        order = OrderService.get_order(self.store, order_id, SUPPLIER_ID)
        self.assertEqual(order["status"], "completed")
        self.assertEqual(order["updatedAt"], later)
        with self.assertRaises(ValidationError):
            OrderService.update_order_status(
                self.store, order_id, SUPPLIER_ID, "rejected"
            )

    def test_only_supplier_updates_status(self) -> None:
        order_id = self._place()
        with self.assertRaises(AccessDenied):
            OrderService.update_order_status(
                self.store, order_id, RETAILER_ID, "confirmed"
            )
        with self.assertRaises(ValidationError):
            OrderService.update_order_status(
                self.store, order_id, SUPPLIER_ID, "shipped"
            )

    def test_order_listing(self) -> None:
        first = self._place()
        second = self._place(now=FIXED_NOW + datetime.timedelta(minutes=5))
        OrderService.update_order_status(self.store, first, SUPPLIER_ID, "rejected")

        retailer_orders = OrderService.get_retailer_orders(self.store, RETAILER_ID)
        supplier_orders = OrderService.get_supplier_orders(self.store, SUPPLIER_ID)

        self.assertEqual([o["id"] for o in retailer_orders], [second, first])
        self.assertEqual([o["id"] for o in supplier_orders], [second, first])
        pending = OrderService.filter_orders_by_status(supplier_orders, "pending")
        self.assertEqual([o["id"] for o in pending], [second])
        self.assertEqual(
            len(OrderService.filter_orders_by_status(supplier_orders, "all")), 2
        )

    def test_build_invoice(self) -> None:
        order_id = self._place()
        order = OrderService.get_order(self.store, order_id, RETAILER_ID)

        invoice = OrderService.build_invoice(order).to_dict()

        self.assertEqual(invoice["title"], "Rasoi Setu")
        self.assertEqual(invoice["order_id"], order_id)
        self.assertEqual(invoice["date"], "2026-10-17")
        self.assertEqual(invoice["status"], "PENDING")
        self.assertEqual(invoice["currency"], "₹")
        self.assertEqual(invoice["total_amount"], 633.5)
        self.assertEqual(
            invoice["lines"][0],
            {
                "number": 1,
                "name": "Onions",
                "quantity": 3,
                "unit": "kg",
                "price": 24.5,
                "total": 73.5,
            },
        )
        self.assertEqual(invoice["lines"][1]["number"], 2)

    def test_order_total_rounds_to_paise(self) -> None:
        items = [{"quantity": 3, "price": 0.1}]
        self.assertEqual(OrderService.order_total(items), 0.3)


if __name__ == "__main__":
    unittest.main()
