# menuhub/deps.py
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.orm import Session

from menuhub.core.database import get_db
from menuhub.core.errors import ForbiddenError, NotFoundError
from menuhub.core.request_context import set_request_context
from menuhub.models.user import Role
from menuhub.services.authentication import IdentityContext, authenticate, require_role
from menuhub.services.notifications import CodeSender, LoggingCodeSender
from menuhub.services.ownership import ResourceKind, ensure_authorized
from menuhub.services.tokens import TokenConfig, TokenService

logger = logging.getLogger(__name__)


@lru_cache()
def get_token_service() -> TokenService:
    """Process-wide token service, built once from settings."""
    return TokenService(TokenConfig.from_settings())


@lru_cache()
def get_code_sender() -> CodeSender:
    return LoggingCodeSender()


def get_current_identity(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    token_service: TokenService = Depends(get_token_service),
) -> IdentityContext:
    """Validate the bearer token and expose the identity to the rest of the request."""
    identity = authenticate(authorization, token_service)
    request.state.identity = identity
    set_request_context(user_id=str(identity.user_id))
    return identity


def _log_access_denied(*, reason: str, identity: IdentityContext, request: Request, resource: str | None = None) -> None:
    endpoint = f"{request.method} {request.url.path}"
    logger.warning(
        "Access denied (%s): user_id=%s user_role=%s resource=%s endpoint=%s",
        reason,
        identity.user_id,
        identity.role.value,
        resource,
        endpoint,
    )


def require_admin(
    request: Request,
    identity: IdentityContext = Depends(get_current_identity),
) -> IdentityContext:
    try:
        return require_role(identity, Role.ADMIN)
    except ForbiddenError:
        _log_access_denied(reason="role_denied", identity=identity, request=request)
        raise


def require_ownership(kind: ResourceKind, path_param: str):
    def _dependency(
        request: Request,
        identity: IdentityContext = Depends(get_current_identity),
        db: Session = Depends(get_db),
    ) -> IdentityContext:
        raw_id = request.path_params.get(path_param)
        try:
            resource_id = int(raw_id)
        except (TypeError, ValueError) as exc:
            # same 422 shape FastAPI returns for an unguarded int path parameter
            raise RequestValidationError(
                [
                    {
                        "type": "int_parsing",
                        "loc": ("path", path_param),
                        "msg": "Input should be a valid integer, unable to parse string as an integer",
                        "input": raw_id,
                    }
                ]
            ) from exc

        try:
            ensure_authorized(db, identity, kind, resource_id)
        except (ForbiddenError, NotFoundError) as exc:
            _log_access_denied(
                reason=type(exc).__name__,
                identity=identity,
                request=request,
                resource=f"{kind.key}:{resource_id}",
            )
            raise
        return identity

    return _dependency
