from __future__ import annotations

from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from menuhub.models.user import Role, User
from menuhub.services.accounts import DUPLICATE_USER_DETAIL, validated_phone
from menuhub.services import store
from menuhub.services.passwords import hash_password


def ensure_users_table(engine: Engine) -> None:
    inspector = inspect(engine)
    if not inspector.has_table("users"):
        raise RuntimeError("Table users not found. Start the API once so the schema is created.")


def upsert_admin_user(
    db: Session,
    *,
    phone_number: str,
    email: str,
    password: Optional[str],
) -> tuple[User, bool]:
    """Create an administrator or promote the matching account.

    Returns the user and whether it was newly created.
    """
    phone = validated_phone(phone_number)
    email = email.strip().lower()
    existing = (
        db.query(User)
        .filter(User.deleted_at.is_(None))
        .filter((User.phone_number == phone) | (User.email == email))
        .first()
    )
    if existing:
        existing.role = Role.ADMIN
        if password:
            existing.password_hash = hash_password(password)
        return store.save(db, existing, conflict_detail=DUPLICATE_USER_DETAIL), False

    if not password:
        raise ValueError("A password is required to create a new admin.")

    admin = User(
        phone_number=phone,
        email=email,
        password_hash=hash_password(password),
        role=Role.ADMIN,
    )
    return store.create(db, admin, conflict_detail=DUPLICATE_USER_DETAIL), True
