import datetime
import unittest
from unittest.mock import patch

from rasoisetu import create_app
from rasoisetu.core.store import FirestoreDocumentStore
from rasoisetu.user.services import UserService
from tests.mock_utils import FIXED_NOW, new_mock_db

RETAILER_ID = "retailer1"
SUPPLIER_ID = "supplier1"


def future_deadline(**delta):
    """Return a deadline string in the format the group order form accepts."""
    deadline = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(
        **(delta or {"days": 1})
    )
    return deadline.strftime("%Y-%m-%dT%H:%M")


class BaseTestCase(unittest.TestCase):
    """Route test base with an in-memory Firestore behind the app."""

    def setUp(self):
        self.db = new_mock_db()
        self.store = FirestoreDocumentStore(self.db)

        patchers = {
            "init_app": patch("firebase_admin.initialize_app"),
            "firestore_client": patch(
                "firebase_admin.firestore.client", return_value=self.db
            ),
            "verify_id_token": patch("firebase_admin.auth.verify_id_token"),
        }
        self.mocks = {name: p.start() for name, p in patchers.items()}
        for p in patchers.values():
            self.addCleanup(p.stop)

        self.app = create_app({"TESTING": True, "WTF_CSRF_ENABLED": False})
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()

    def tearDown(self):
        self.app_context.pop()

    def create_user(self, uid=RETAILER_ID, role="retailer"):
        """Store a completed profile for ``uid``."""
        UserService.create_user_profile(
            self.store, uid, f"{uid}@example.com", role, now=FIXED_NOW
        )

    def login(self, uid=RETAILER_ID):
        with self.client.session_transaction() as sess:
            sess["user_id"] = uid
