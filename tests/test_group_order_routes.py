"""Tests for the group order blueprint."""

import datetime
import unittest

from rasoisetu.group_order.services import GroupOrderService
from tests.helpers import RETAILER_ID, BaseTestCase, future_deadline

OTHER_RETAILER_ID = "retailer2"


class GroupOrderRoutesTestCase(BaseTestCase):
    """Test case for the group order blueprint."""

    def setUp(self):
        super().setUp()
        self.create_user(RETAILER_ID)
        self.create_user(OTHER_RETAILER_ID)

    def _create_payload(self, **overrides):
        payload = {
            "item_name": "Onions",
            "category": "vegetables",
            "target_price": 22.5,
            "unit": "kg",
            "min_vendors": 3,
            "deadline": future_deadline(),
        }
        payload.update(overrides)
        return payload

    def _create(self, **overrides):
        response = self.client.post(
            "/group-orders/", json=self._create_payload(**overrides)
        )
        self.assertEqual(response.status_code, 201)
        return response.get_json()["id"]

    def test_requires_login(self):
        """Anonymous callers get a JSON 401."""
        response = self.client.get("/group-orders/")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json()["status"], "error")

    def test_create_group_order(self):
        """Creating a group order makes the creator its first member."""
        self.login()
        group_order_id = self._create()

        group_order = GroupOrderService.get_group_order(self.store, group_order_id)
        self.assertEqual(group_order["status"], "active")
        self.assertEqual(group_order["createdBy"], RETAILER_ID)
        self.assertEqual(group_order["vendorsById"][RETAILER_ID]["quantity"], 1)

    def test_create_group_order_rejects_bad_input(self):
        """Form errors come back as a 400 with a readable message."""
        self.login()
        cases = [
            {"min_vendors": 1},
            {"item_name": ""},
            {"category": "furniture"},
            {"target_price": 0},
            {"deadline": "next week"},
        ]
        for overrides in cases:
            with self.subTest(overrides=overrides):
                response = self.client.post(
                    "/group-orders/", json=self._create_payload(**overrides)
                )
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.get_json()["status"], "error")

    def test_create_group_order_rejects_past_deadline(self):
        """A deadline in the past is refused by the service."""
        self.login()
        past = datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(
            hours=1
        )
        response = self.client.post(
            "/group-orders/",
            json=self._create_payload(deadline=past.strftime("%Y-%m-%dT%H:%M")),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["message"], "Deadline must be in the future.")

    def test_list_group_orders(self):
        """The list shows active orders with progress, soonest deadline first."""
        self.login()
        later_id = self._create(item_name="Rice", deadline=future_deadline(days=3))
        sooner_id = self._create(item_name="Chillies", deadline=future_deadline(hours=5))

        response = self.client.get("/group-orders/")

        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data["refreshSeconds"], 30)
        self.assertEqual([go["id"] for go in data["groupOrders"]], [sooner_id, later_id])
        first = data["groupOrders"][0]
        self.assertEqual(first["vendorCount"], 1)
        self.assertEqual(first["totalQuantity"], 1)
        self.assertTrue(first["isMember"])
        self.assertFalse(first["isExpired"])
        self.assertNotIn("vendorsById", first)

    def test_view_group_order(self):
        """A single group order is shown to another retailer."""
        self.login()
        group_order_id = self._create()
        self.login(OTHER_RETAILER_ID)

        response = self.client.get(f"/group-orders/{group_order_id}")

        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data["itemName"], "Onions")
        self.assertFalse(data["isMember"])

    def test_view_missing_group_order(self):
        """Unknown ids give a JSON 404."""
        self.login()
        response = self.client.get("/group-orders/missing")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["message"], "Group order not found.")

    def test_join_group_order(self):
        """Joining adds the caller and returns the refreshed summary."""
        self.login()
        group_order_id = self._create()
        self.login(OTHER_RETAILER_ID)

        response = self.client.post(
            f"/group-orders/{group_order_id}/join", json={"quantity": 4}
        )

        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data["status"], "success")
        self.assertEqual(data["groupOrder"]["vendorCount"], 2)
        self.assertEqual(data["groupOrder"]["totalQuantity"], 5)
        self.assertTrue(data["groupOrder"]["isMember"])

    def test_join_defaults_to_quantity_one(self):
        """An empty join request asks for a single unit."""
        self.login()
        group_order_id = self._create()
        self.login(OTHER_RETAILER_ID)

        response = self.client.post(f"/group-orders/{group_order_id}/join")

        self.assertEqual(response.status_code, 200)
        group_order = GroupOrderService.get_group_order(self.store, group_order_id)
        self.assertEqual(group_order["vendorsById"][OTHER_RETAILER_ID]["quantity"], 1)

    def test_join_rejects_zero_quantity(self):
        """Quantities below one are refused."""
        self.login()
        group_order_id = self._create()
        response = self.client.post(
            f"/group-orders/{group_order_id}/join", json={"quantity": 0}
        )
        self.assertEqual(response.status_code, 400)

    def test_join_expired_group_order(self):
        """Joining after the deadline is refused."""
        self.login()
        group_order_id = self.store.insert(
            "groupOrders",
            {
                "createdBy": OTHER_RETAILER_ID,
                "itemName": "Salt",
                "category": "spices",
                "targetPrice": 12.0,
                "unit": "kg",
                "minVendors": 2,
                "vendorsById": {},
                "deadline": datetime.datetime(2020, 1, 1, tzinfo=datetime.timezone.utc),
                "status": "active",
            },
        )

        response = self.client.post(
            f"/group-orders/{group_order_id}/join", json={"quantity": 2}
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["message"], "This group order has expired.")


if __name__ == "__main__":
    unittest.main()
