"""Data models for the group order blueprint."""

from __future__ import annotations

import datetime
from typing import TypedDict

from rasoisetu.core.types import FirestoreDocument


class Membership(TypedDict):
    """One vendor's enrollment in a group order."""

    userId: str
    quantity: int
    joinedAt: datetime.datetime


class GroupOrder(FirestoreDocument, total=False):
    """A group order document in Firestore.

    Memberships are stored in ``vendorsById`` keyed by user id so a join only
    ever writes its own map entry.
    """

    createdBy: str
    itemName: str
    category: str
    targetPrice: float
    unit: str
    minVendors: int
    vendorsById: dict[str, Membership]
    deadline: datetime.datetime
    status: str
    statusChangedAt: datetime.datetime

    # UI and calculated fields
    joinedVendors: list[Membership]
