"""Service layer for user profiles and supplier stores."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from rasoisetu.core.constants import (
    DEFAULT_LANGUAGE,
    ROLE_SUPPLIER,
    ROLES,
    SUPPLIERS_COLLECTION,
    USERS_COLLECTION,
)
from rasoisetu.errors import ConflictError, NotFoundError, ValidationError
from rasoisetu.utils import utc_now

if TYPE_CHECKING:
    from rasoisetu.core.store import DocumentStore

    from .models import Supplier, UserProfile

logger = logging.getLogger(__name__)


class UserService:
    """Service class for user and supplier profile operations."""

    @staticmethod
    def create_user_profile(  # noqa: PLR0913
        store: DocumentStore,
        uid: str,
        email: str,
        role: str,
        language: str = DEFAULT_LANGUAGE,
        now: datetime.datetime | None = None,
    ) -> None:
        """Create the profile for a newly registered user.

        Suppliers also get an empty store profile they can fill in later.
        """
        if not uid or not email:
            raise ValidationError("A user id and email are required.")
        if role not in ROLES:
            raise ValidationError(f"Role must be one of: {', '.join(ROLES)}.")
        if UserService.get_user_profile(store, uid) is not None:
            raise ConflictError("Your profile has already been created.")
        now = now or utc_now()

        store.set(
            USERS_COLLECTION,
            uid,
            {
                "uid": uid,
                "email": email,
                "role": role,
                "language": language or DEFAULT_LANGUAGE,
                "createdAt": now,
            },
        )
        if role == ROLE_SUPPLIER:
            store.set(
                SUPPLIERS_COLLECTION,
                uid,
                {
                    "userId": uid,
                    "storeName": "",
                    "location": "",
                    "contactInfo": {},
                    "rating": 0,
                    "totalOrders": 0,
                    "createdAt": now,
                },
            )
        logger.info(f"Created {role} profile for {uid}")

    @staticmethod
    def get_user_profile(store: DocumentStore, uid: str) -> UserProfile | None:
        """Fetch a user profile, or None if the user has not completed sign-up."""
        return store.get(USERS_COLLECTION, uid)  # type: ignore[return-value]

    @staticmethod
    def get_supplier_profile(store: DocumentStore, uid: str) -> Supplier | None:
        """Fetch a supplier's store profile."""
        return store.get(SUPPLIERS_COLLECTION, uid)  # type: ignore[return-value]

    @staticmethod
    def update_supplier_profile(  # noqa: PLR0913
        store: DocumentStore,
        uid: str,
        store_name: str,
        location: str,
        phone: str | None = None,
        address: str | None = None,
    ) -> None:
        """Update the store details shown to retailers."""
        if not store_name or not location:
            raise ValidationError("Store name and location are required.")
        if UserService.get_supplier_profile(store, uid) is None:
            raise NotFoundError("Supplier profile not found.")

        contact_info = {}
        if phone:
            contact_info["phone"] = phone
        if address:
            contact_info["address"] = address

        store.update(
            SUPPLIERS_COLLECTION,
            uid,
            {
                "storeName": store_name,
                "location": location,
                "contactInfo": contact_info,
            },
        )

    @staticmethod
    def get_all_suppliers(store: DocumentStore) -> list[Supplier]:
        """Return every supplier store."""
        return store.list_all(SUPPLIERS_COLLECTION)  # type: ignore[return-value]

    @staticmethod
    def search_suppliers(suppliers: Iterable[Supplier], term: str) -> list[Supplier]:
        """Filter suppliers by store name or location, case-insensitively."""
        term = (term or "").strip().lower()
        if not term:
            return list(suppliers)
        return [
            supplier
            for supplier in suppliers
            if term in (supplier.get("storeName") or "").lower()
            or term in (supplier.get("location") or "").lower()
        ]
