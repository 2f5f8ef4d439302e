"""Ownership checks for restaurants, menus and menu items.

Every resource is owned through a chain ending at ``restaurants.user_id``.
Each ``ResourceKind`` knows the narrow query that walks its own chain and
fetches only that owner id, so no parent object is hydrated for an
authorization check.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from menuhub.core.errors import ForbiddenError, NotFoundError
from menuhub.models.menu import Menu
from menuhub.models.menu_item import MenuItem
from menuhub.models.restaurant import Restaurant
from menuhub.services.authentication import IdentityContext


def _restaurant_owner_query(resource_id: int) -> Select:
    return select(Restaurant.user_id).where(
        Restaurant.id == resource_id,
        Restaurant.deleted_at.is_(None),
    )


def _menu_owner_query(resource_id: int) -> Select:
    return (
        select(Restaurant.user_id)
        .join(Menu, Menu.restaurant_id == Restaurant.id)
        .where(
            Menu.id == resource_id,
            Menu.deleted_at.is_(None),
            Restaurant.deleted_at.is_(None),
        )
    )


def _menu_item_owner_query(resource_id: int) -> Select:
    return (
        select(Restaurant.user_id)
        .join(Menu, Menu.restaurant_id == Restaurant.id)
        .join(MenuItem, MenuItem.menu_id == Menu.id)
        .where(
            MenuItem.id == resource_id,
            MenuItem.deleted_at.is_(None),
            Menu.deleted_at.is_(None),
            Restaurant.deleted_at.is_(None),
        )
    )


class ResourceKind(enum.Enum):
    RESTAURANT = ("restaurant", "Restaurant", _restaurant_owner_query)
    MENU = ("menu", "Menu", _menu_owner_query)
    MENU_ITEM = ("menu_item", "Menu item", _menu_item_owner_query)

    def __init__(self, key: str, label: str, owner_query: Callable[[int], Select]) -> None:
        self.key = key
        self.label = label
        self.owner_query = owner_query

    def resolve_owner_id(self, db: Session, resource_id: int) -> Optional[int]:
        return db.execute(self.owner_query(resource_id)).scalar_one_or_none()


class DenyReason(str, enum.Enum):
    NOT_FOUND = "not_found"
    NOT_OWNER = "not_owner"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[DenyReason] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(allowed=False, reason=reason)


def authorize(
    db: Session,
    identity: IdentityContext,
    kind: ResourceKind,
    resource_id: int,
) -> Decision:
    if identity.role.bypasses_ownership:
        return Decision.allow()

    owner_id = kind.resolve_owner_id(db, resource_id)
    if owner_id is None:
        return Decision.deny(DenyReason.NOT_FOUND)
    if int(owner_id) != int(identity.user_id):
        return Decision.deny(DenyReason.NOT_OWNER)
    return Decision.allow()


def ensure_authorized(
    db: Session,
    identity: IdentityContext,
    kind: ResourceKind,
    resource_id: int,
) -> Decision:
    decision = authorize(db, identity, kind, resource_id)
    if decision.reason is DenyReason.NOT_FOUND:
        raise NotFoundError(f"{kind.label} not found or ownership could not be verified")
    if decision.reason is DenyReason.NOT_OWNER:
        raise ForbiddenError(f"You are not the owner of this {kind.label.lower()}")
    return decision
