"""Data models for the user blueprint."""

from __future__ import annotations

from typing import TypedDict

from rasoisetu.core.types import FirestoreDocument


class UserProfile(FirestoreDocument, total=False):
    """A user document in Firestore, keyed by Firebase uid."""

    uid: str
    email: str
    role: str
    language: str


class ContactInfo(TypedDict, total=False):
    """How retailers reach a supplier."""

    phone: str
    address: str


class Supplier(FirestoreDocument, total=False):
    """A supplier store profile, keyed by the supplier's uid."""

    userId: str
    storeName: str
    location: str
    contactInfo: ContactInfo
    rating: float
    totalOrders: int
