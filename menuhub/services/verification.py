"""One-time login codes over SMS and email.

Each channel keeps at most one outstanding code per user: requesting a new
code overwrites the previous one. A code is accepted while it matches and
``now <= expires_at``; a failed attempt leaves it in place so the user can
retry until it expires. Consumption is a conditional UPDATE that clears the
code only if it still holds the submitted value, so one code cannot be
redeemed twice by concurrent requests.
"""

from __future__ import annotations

import enum
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from menuhub.core.config import VERIFICATION_CODE_DIGITS, VERIFICATION_CODE_TTL_MINUTES
from menuhub.core.errors import InvalidCredentialsError
from menuhub.models.user import User
from menuhub.services import store
from menuhub.services.codes import generate_code
from menuhub.services.notifications import CodeSender

CODE_TTL = timedelta(minutes=VERIFICATION_CODE_TTL_MINUTES)
INVALID_CODE_DETAIL = "Invalid or expired verification code"


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CodeChannel(str, enum.Enum):
    SMS = "sms"
    EMAIL = "email"

    @property
    def lookup_field(self) -> str:
        return "phone_number" if self is CodeChannel.SMS else "email"

    @property
    def code_column(self):
        return User.sms_code if self is CodeChannel.SMS else User.email_code

    @property
    def expires_column(self):
        return User.sms_code_expires_at if self is CodeChannel.SMS else User.email_code_expires_at

    def dispatch(self, sender: CodeSender, user: User, code: str) -> None:
        if self is CodeChannel.SMS:
            sender.send_sms_code(user.phone_number, code)
        else:
            sender.send_email_code(user.email, code)


def find_user(db: Session, channel: CodeChannel, identifier: str) -> User:
    return store.find_by(db, User, channel.lookup_field, identifier.strip(), detail="User not found")


def request_code(
    db: Session,
    channel: CodeChannel,
    identifier: str,
    sender: CodeSender,
    *,
    now: Optional[datetime] = None,
    digits: int = VERIFICATION_CODE_DIGITS,
    ttl: timedelta = CODE_TTL,
) -> str:
    user = find_user(db, channel, identifier)
    now = now or _now()
    code = generate_code(digits)

    setattr(user, channel.code_column.key, code)
    setattr(user, channel.expires_column.key, now + ttl)
    store.save(db, user)

    channel.dispatch(sender, user, code)
    return code


def _code_matches(user: User, channel: CodeChannel, code: str, now: datetime) -> bool:
    stored = getattr(user, channel.code_column.key)
    expires_at = getattr(user, channel.expires_column.key)
    if not stored or not code or expires_at is None:
        return False
    if not secrets.compare_digest(stored, code):
        return False
    return now <= expires_at


def verify_code(
    db: Session,
    channel: CodeChannel,
    identifier: str,
    code: str,
    *,
    now: Optional[datetime] = None,
) -> User:
    user = find_user(db, channel, identifier)
    now = now or _now()
    code = code or ""

    if not _code_matches(user, channel, code, now):
        raise InvalidCredentialsError(INVALID_CODE_DETAIL)

    result = db.execute(
        update(User)
        .where(
            User.id == user.id,
            channel.code_column == code,
            channel.expires_column >= now,
        )
        .values({channel.code_column: None, channel.expires_column: None})
        .execution_options(synchronize_session=False)
    )
    db.commit()
    if result.rowcount != 1:
        raise InvalidCredentialsError(INVALID_CODE_DETAIL)

    db.refresh(user)
    return user
