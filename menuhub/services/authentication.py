from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from menuhub.core.errors import (
    BadTokenFormatError,
    ForbiddenError,
    InvalidTokenError,
    MissingCredentialsError,
    TokenError,
)
from menuhub.models.user import Role
from menuhub.services.tokens import TokenService

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class IdentityContext:
    user_id: int
    phone_number: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def extract_bearer_token(raw_header: Optional[str]) -> str:
    if raw_header is None or not raw_header.strip():
        raise MissingCredentialsError()
    if not raw_header.startswith(BEARER_PREFIX):
        raise BadTokenFormatError()
    token = raw_header[len(BEARER_PREFIX):].strip()
    if not token:
        raise BadTokenFormatError()
    return token


def authenticate(raw_header: Optional[str], token_service: TokenService) -> IdentityContext:
    """Turn an ``Authorization`` header value into an identity context.

    Raises ``MissingCredentialsError`` when there is no header,
    ``BadTokenFormatError`` when the ``Bearer`` prefix is absent and
    ``InvalidTokenError`` (chained to the Token Service failure) when the token
    is malformed, forged or expired.
    """
    token = extract_bearer_token(raw_header)
    try:
        claims = token_service.validate(token)
    except TokenError as exc:
        raise InvalidTokenError() from exc
    return IdentityContext(user_id=claims.user_id, phone_number=claims.phone_number, role=claims.role)


def require_role(identity: IdentityContext, required: Role) -> IdentityContext:
    if identity.role is not required:
        raise ForbiddenError()
    return identity
