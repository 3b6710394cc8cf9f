from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class Limit(IntEnum):
    """Page sizes accepted by the paginated economy endpoints."""

    TEN = 10
    TWENTY_FIVE = 25
    FIFTY = 50
    HUNDRED = 100


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    One page of results. ``next_cursor is None`` is the only end-of-list signal.
    Cursors are opaque and only valid for the operation that issued them.
    """
    items: list[T] = field(default_factory=list)
    next_cursor: str | None = None


@dataclass(frozen=True)
class AuthenticatedUser:
    user_id: int
    username: str
    display_name: str


@dataclass(frozen=True)
class Reseller:
    user_id: int
    name: str


@dataclass(frozen=True)
class Listing:
    # unique asset id of this copy
    uaid: int
    price: int
    reseller: Reseller
    # only set for Limited U items
    serial_number: int | None = None


@dataclass(frozen=True)
class UserSale:
    sale_id: int
    is_pending: bool
    # buyer
    user_id: int
    user_display_name: str
    # after marketplace tax; left as reported
    robux_received: int
    asset_id: int
    asset_name: str
