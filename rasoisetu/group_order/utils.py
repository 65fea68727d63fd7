"""Pure helpers for displaying and evaluating group orders."""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from typing import Any

from rasoisetu.core.constants import (
    EXPIRED_LABEL,
    GROUP_ORDER_ACTIVE,
    GROUP_ORDER_COMPLETED,
    GROUP_ORDER_EXPIRED,
)
from rasoisetu.utils import ensure_aware, serialize_value, utc_now

from .models import GroupOrder, Membership

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR


def time_remaining(
    deadline: datetime.datetime, now: datetime.datetime | None = None
) -> datetime.timedelta:
    """Return the time left before the deadline, never negative."""
    now = ensure_aware(now or utc_now())
    remaining = ensure_aware(deadline) - now
    return max(remaining, datetime.timedelta(0))


def is_expired(
    deadline: datetime.datetime, now: datetime.datetime | None = None
) -> bool:
    """Return True once ``now`` has reached the deadline."""
    now = ensure_aware(now or utc_now())
    return now >= ensure_aware(deadline)


def format_time_remaining(
    deadline: datetime.datetime, now: datetime.datetime | None = None
) -> str:
    """Render the remaining time as ``2d 4h``, ``4h 10m`` or ``10m``."""
    if is_expired(deadline, now):
        return EXPIRED_LABEL

    seconds = int(time_remaining(deadline, now).total_seconds())
    days, seconds = divmod(seconds, SECONDS_PER_DAY)
    hours, seconds = divmod(seconds, SECONDS_PER_HOUR)
    minutes = seconds // SECONDS_PER_MINUTE

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def progress_percentage(member_count: int, min_vendors: int) -> float:
    """Percentage of the vendor threshold reached, capped at 100."""
    if min_vendors <= 0:
        return 100.0
    return min(member_count / min_vendors * 100, 100.0)


def total_quantity(memberships: Iterable[Membership]) -> int:
    """Sum the requested quantity across memberships."""
    return sum(member["quantity"] for member in memberships)


def memberships(group_order: GroupOrder) -> list[Membership]:
    """Return the memberships of a group order, earliest join first."""
    vendors = group_order.get("vendorsById") or {}
    return sorted(
        vendors.values(),
        key=lambda member: (ensure_aware(member["joinedAt"]), member["userId"]),
    )


def is_member(group_order: GroupOrder, user_id: str) -> bool:
    """Return True if the user has joined the group order."""
    return user_id in (group_order.get("vendorsById") or {})


def next_status(
    group_order: GroupOrder, now: datetime.datetime | None = None
) -> str | None:
    """Return the terminal status an active order should move to, if any.

    Reaching the vendor threshold takes precedence over the deadline.
    """
    if group_order.get("status") != GROUP_ORDER_ACTIVE:
        return None
    member_count = len(group_order.get("vendorsById") or {})
    if member_count >= group_order["minVendors"]:
        return GROUP_ORDER_COMPLETED
    if is_expired(group_order["deadline"], now):
        return GROUP_ORDER_EXPIRED
    return None


def summarize_group_order(
    group_order: GroupOrder,
    user_id: str | None = None,
    now: datetime.datetime | None = None,
) -> dict[str, Any]:
    """Build the JSON payload the presentation layer renders."""
    members = memberships(group_order)
    deadline = group_order["deadline"]
    summary = {
        key: value for key, value in group_order.items() if key != "vendorsById"
    }
    summary.update(
        {
            "joinedVendors": members,
            "vendorCount": len(members),
            "totalQuantity": total_quantity(members),
            "progress": progress_percentage(len(members), group_order["minVendors"]),
            "timeRemaining": format_time_remaining(deadline, now),
            "isExpired": is_expired(deadline, now),
            "isMember": bool(user_id) and is_member(group_order, user_id),
        }
    )
    return serialize_value(summary)
