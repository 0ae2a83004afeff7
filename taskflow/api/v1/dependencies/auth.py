"""Actor resolution from the bearer JWT (composition root)."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskflow.api.v1.dependencies.db import get_uow_factory
from taskflow.application.dtos.user import ActorContext
from taskflow.application.interfaces.repositories import UnitOfWorkFactory
from taskflow.domain.exceptions import AuthenticationException, AuthorizationException
from taskflow.infrastructure.security.jwt import verify_token

logger = logging.getLogger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


async def get_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
) -> ActorContext:
    """Return the calling actor from the JWT; raise 401 if missing or invalid.

    The token's sub claim is the user id; the admin flag comes from the
    stored user role, not from the token.
    """
    if not credentials:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
        user_id = int(payload["sub"])
    except (ValueError, KeyError, TypeError) as e:
        logger.info("Rejected bearer token: %s", e)
        raise AuthenticationException("Invalid token") from e
    async with uow_factory() as uow:
        user = await uow.users.get_by_id(user_id)
    if user is None:
        raise AuthenticationException("Unknown user")
    return ActorContext(actor_id=user.id, is_admin=user.is_admin)


def require_admin(resource: str, action: str):
    """Dependency factory: require an authenticated actor with the Admin role."""

    async def _require(
        actor: Annotated[ActorContext, Depends(get_actor)],
    ) -> ActorContext:
        if not actor.is_admin:
            raise AuthorizationException(resource, action)
        return actor

    return _require
