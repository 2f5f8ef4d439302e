from __future__ import annotations

import logging

from menuhub.core.config import DATABASE_URL, IS_PROD, resolve_jwt_secret

logger = logging.getLogger(__name__)
STARTUP_PREFIX = "[STARTUP]"


def validate_database_environment() -> None:
    if IS_PROD and DATABASE_URL.startswith("sqlite"):
        logger.critical("%s SQLite is forbidden in production", STARTUP_PREFIX)
        raise RuntimeError("SQLite is forbidden in production environment")


def validate_auth_settings() -> None:
    try:
        resolve_jwt_secret()
    except RuntimeError:
        logger.critical("%s JWT_SECRET_KEY missing in production", STARTUP_PREFIX)
        raise
