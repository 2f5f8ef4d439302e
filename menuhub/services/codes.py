from __future__ import annotations

import secrets

DEFAULT_CODE_DIGITS = 6


def generate_code(digits: int = DEFAULT_CODE_DIGITS) -> str:
    """Return a uniformly random numeric code, zero-padded to ``digits`` characters."""
    if digits < 1:
        raise ValueError("digits must be >= 1")
    return f"{secrets.randbelow(10 ** digits):0{digits}d}"
