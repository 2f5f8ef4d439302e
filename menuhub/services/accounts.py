from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from menuhub.core.errors import InvalidCredentialsError, MalformedInputError
from menuhub.models.user import Role, User
from menuhub.services import store
from menuhub.services.notifications import CodeSender
from menuhub.services.passwords import hash_password, verify_password
from menuhub.services.tokens import TokenService
from menuhub.services.verification import CodeChannel, request_code, verify_code
from menuhub.utils.phone import is_valid_phone_number, normalize_phone_number

DUPLICATE_USER_DETAIL = "Phone number or email already registered"


def validated_phone(phone_number: str) -> str:
    phone = normalize_phone_number(phone_number)
    if not is_valid_phone_number(phone):
        raise MalformedInputError("Invalid phone number format")
    return phone


def _normalize_identifier(channel: CodeChannel, identifier: str) -> str:
    if channel is CodeChannel.SMS:
        return normalize_phone_number(identifier)
    return (identifier or "").strip().lower()


def issue_token(token_service: TokenService, user: User) -> str:
    return token_service.issue(user.id, user.phone_number, user.role)


def signup(db: Session, *, phone_number: str, email: str, password: str) -> User:
    user = User(
        phone_number=validated_phone(phone_number),
        email=email.strip().lower(),
        password_hash=hash_password(password),
        role=Role.USER,
    )
    return store.create(db, user, conflict_detail=DUPLICATE_USER_DETAIL)


def login_with_password(db: Session, token_service: TokenService, *, phone_number: str, password: str) -> str:
    phone = normalize_phone_number(phone_number)
    user = (
        db.query(User)
        .filter(User.phone_number == phone, User.deleted_at.is_(None))
        .first()
    )
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()
    return issue_token(token_service, user)


def request_login_code(db: Session, sender: CodeSender, *, channel: CodeChannel, identifier: str) -> None:
    request_code(db, channel, _normalize_identifier(channel, identifier), sender)


def login_with_code(
    db: Session,
    token_service: TokenService,
    *,
    channel: CodeChannel,
    identifier: str,
    code: str,
) -> str:
    user = verify_code(db, channel, _normalize_identifier(channel, identifier), code)
    return issue_token(token_service, user)


def list_users(db: Session) -> List[User]:
    return store.list_all(db, User)


def get_user(db: Session, user_id: int) -> User:
    return store.find(db, User, user_id, detail="User not found")


def update_user(
    db: Session,
    user_id: int,
    *,
    phone_number: Optional[str] = None,
    email: Optional[str] = None,
    password: Optional[str] = None,
) -> User:
    user = get_user(db, user_id)
    if phone_number:
        user.phone_number = validated_phone(phone_number)
    if email:
        user.email = email.strip().lower()
    if password:
        user.password_hash = hash_password(password)
    return store.save(db, user, conflict_detail=DUPLICATE_USER_DETAIL)


def assign_role(db: Session, user_id: int, role: Role | str) -> User:
    try:
        new_role = Role.parse(role)
    except ValueError as exc:
        raise MalformedInputError("Invalid role") from exc
    user = get_user(db, user_id)
    user.role = new_role
    return store.save(db, user)


def delete_user(db: Session, user_id: int) -> None:
    store.delete(db, get_user(db, user_id))
