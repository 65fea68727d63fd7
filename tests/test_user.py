"""Tests for the user blueprint."""

import unittest

from rasoisetu.user.services import UserService
from tests.helpers import RETAILER_ID, SUPPLIER_ID, BaseTestCase


class UserRoutesTestCase(BaseTestCase):
    """Test case for the user blueprint."""

    def setUp(self):
        super().setUp()
        self.create_user(RETAILER_ID)
        self.create_user(SUPPLIER_ID, role="supplier")

    def test_me_for_supplier_includes_store(self):
        self.login(SUPPLIER_ID)
        data = self.client.get("/users/me").get_json()
        self.assertEqual(data["user"]["role"], "supplier")
        self.assertEqual(data["supplier"]["totalOrders"], 0)

    def test_me_for_retailer(self):
        self.login(RETAILER_ID)
        data = self.client.get("/users/me").get_json()
        self.assertEqual(data["user"]["uid"], RETAILER_ID)
        self.assertNotIn("supplier", data)

    def test_profile_rejects_unknown_role(self):
        self.login("newuser")
        response = self.client.post(
            "/users/profile", json={"email": "new@example.com", "role": "admin"}
        )
        self.assertEqual(response.status_code, 400)

    def test_repeat_profile_creation_is_refused(self):
        UserService.update_supplier_profile(
            self.store, SUPPLIER_ID, "Sharma Spices", "Jaipur"
        )
        self.login(SUPPLIER_ID)

        response = self.client.post(
            "/users/profile",
            json={"email": "supplier1@example.com", "role": "retailer"},
        )

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.get_json()["status"], "error")
        supplier = UserService.get_supplier_profile(self.store, SUPPLIER_ID)
        self.assertEqual(supplier["storeName"], "Sharma Spices")
        profile = UserService.get_user_profile(self.store, SUPPLIER_ID)
        self.assertEqual(profile["role"], "supplier")

    def test_update_supplier_profile(self):
        self.login(SUPPLIER_ID)
        response = self.client.put(
            "/users/supplier-profile",
            json={
                "store_name": "Annapurna Traders",
                "location": "Indore",
                "phone": "9826000000",
            },
        )
        self.assertEqual(response.status_code, 200)
        supplier = UserService.get_supplier_profile(self.store, SUPPLIER_ID)
        self.assertEqual(supplier["storeName"], "Annapurna Traders")
        self.assertEqual(supplier["contactInfo"], {"phone": "9826000000"})

    def test_retailer_cannot_update_supplier_profile(self):
        self.login(RETAILER_ID)
        response = self.client.put(
            "/users/supplier-profile",
            json={"store_name": "Shop", "location": "Pune"},
        )
        self.assertEqual(response.status_code, 403)

    def test_list_suppliers_with_search(self):
        UserService.update_supplier_profile(
            self.store, SUPPLIER_ID, "Annapurna Traders", "Indore"
        )
        self.login(RETAILER_ID)

        found = self.client.get("/users/suppliers?search=indore").get_json()
        missing = self.client.get("/users/suppliers?search=pune").get_json()

        self.assertEqual([s["id"] for s in found["suppliers"]], [SUPPLIER_ID])
        self.assertEqual(missing["suppliers"], [])


if __name__ == "__main__":
    unittest.main()
