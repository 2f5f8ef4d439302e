"""Session tokens (JWT, HS256).

The service is built from an explicit ``TokenConfig``; the signing secret is
read once from settings at startup and never rotated at runtime, so tokens
only survive a restart when ``JWT_SECRET_KEY`` is stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from jose import JWTError, jwt

from menuhub.core import config
from menuhub.core.errors import InvalidSignatureError, MalformedTokenError, TokenExpiredError
from menuhub.models.user import Role

DEFAULT_TOKEN_TTL = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenConfig:
    secret_key: str
    algorithm: str = "HS256"
    ttl: timedelta = DEFAULT_TOKEN_TTL

    def __post_init__(self) -> None:
        if not self.secret_key:
            raise ValueError("secret_key must not be empty")

    @classmethod
    def from_settings(cls) -> "TokenConfig":
        return cls(
            secret_key=config.resolve_jwt_secret(),
            algorithm=config.JWT_ALGORITHM,
            ttl=timedelta(minutes=config.JWT_EXPIRE_MINUTES),
        )


@dataclass(frozen=True)
class SessionClaims:
    user_id: int
    phone_number: str
    role: Role
    expires_at: datetime


class TokenService:
    def __init__(self, token_config: TokenConfig, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._config = token_config
        self._clock = clock or _utcnow

    @property
    def ttl(self) -> timedelta:
        return self._config.ttl

    def issue(self, user_id: int, phone_number: str, role: Role | str) -> str:
        """
        Sign a token for the given identity.

        - "sub" must be a STRING for python-jose, so it carries the user id as text
        - "user_id" keeps the numeric id for readers that do not parse "sub"
        """
        now = self._clock()
        exp = now + self._config.ttl
        payload: Dict[str, Any] = {
            "sub": str(user_id),
            "user_id": int(user_id),
            "phone_number": phone_number,
            "role": Role.parse(role).value,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        return jwt.encode(payload, self._config.secret_key, algorithm=self._config.algorithm)

    def validate(self, token: str) -> SessionClaims:
        if not token:
            raise MalformedTokenError()
        try:
            jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise MalformedTokenError() from exc

        try:
            payload = jwt.decode(
                token,
                self._config.secret_key,
                algorithms=[self._config.algorithm],
                # expiry is checked below against the injected clock
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidSignatureError() from exc

        claims = _claims_from_payload(payload)
        if self._clock() >= claims.expires_at:
            raise TokenExpiredError()
        return claims


def _claims_from_payload(payload: Dict[str, Any]) -> SessionClaims:
    try:
        raw_user_id = payload.get("user_id", payload.get("sub"))
        user_id = int(raw_user_id)
        exp = payload["exp"]
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise TypeError("exp must be numeric")
        role = Role.parse(payload["role"])
        phone_number = str(payload.get("phone_number") or "")
        expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
    except (KeyError, TypeError, ValueError, AttributeError, OverflowError, OSError) as exc:
        raise MalformedTokenError() from exc

    return SessionClaims(
        user_id=user_id,
        phone_number=phone_number,
        role=role,
        expires_at=expires_at,
    )
