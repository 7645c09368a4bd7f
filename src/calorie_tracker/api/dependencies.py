"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated
from uuid import UUID

from fastapi import Depends, Header, Request

from calorie_tracker.domain.errors import AuthenticationError

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

_BEARER_PREFIX = "bearer "


def get_container(request: Request) -> AppContainer:
    """Return the container stored on the application state."""
    return request.app.state.container


async def current_user_id(
    request: Request, authorization: str | None = Header(default=None)
) -> UUID:
    """Resolve the authenticated user id from the bearer token."""
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        raise AuthenticationError()
    token = authorization[len(_BEARER_PREFIX) :].strip()
    if not token:
        raise AuthenticationError()
    return get_container(request).token_service.user_id_from(token)


CurrentUserId = Annotated[UUID, Depends(current_user_id)]
