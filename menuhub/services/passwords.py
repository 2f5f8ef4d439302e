from __future__ import annotations

import bcrypt

from menuhub.core.errors import MalformedInputError, PasswordHashingError

BCRYPT_ROUNDS = 12
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def _normalize_password_for_bcrypt(password: str) -> bytes:
    """
    bcrypt only considers the first 72 bytes.
    Longer passwords are truncated so bcrypt>=5 does not raise on them.
    """
    pw = (password or "").encode("utf-8")
    if len(pw) <= 72:
        return pw
    return pw[:72]


def hash_password(password: str) -> str:
    if not password:
        raise MalformedInputError("Password must not be empty")
    try:
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        hashed = bcrypt.hashpw(_normalize_password_for_bcrypt(password), salt)
    except (ValueError, MemoryError) as exc:
        raise PasswordHashingError() from exc
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not plain_password or not password_hash:
        return False
    if not password_hash.startswith(BCRYPT_PREFIXES):
        return False
    try:
        return bcrypt.checkpw(_normalize_password_for_bcrypt(plain_password), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False
    except MemoryError as exc:
        raise PasswordHashingError() from exc
