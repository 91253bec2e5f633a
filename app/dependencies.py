# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Everything here is read from app.state, which create_app() fills in from
# the Settings object it was given.
# =============================================================================

import json
from typing import Annotated, Any, AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import BadRequestError
from core.services.storage_service import StorageService


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Yield one AsyncSession for the duration of a request.

    The session is closed when the response has been produced.
    """
    async with request.app.state.database.session() as session:
        yield session


def get_storage_service(request: Request) -> StorageService:
    """
    Get the storage service for this app.

    Tests replace this through app.dependency_overrides.
    """
    return request.app.state.storage


async def get_json_body(request: Request) -> dict[str, Any]:
    """
    Read the request body as a JSON object.

    An empty body counts as {} so that the resource validators report the
    missing fields themselves.

    Raises:
        BadRequestError: Body is not valid JSON or not an object
    """
    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise BadRequestError("Malformed JSON body") from e

    if not isinstance(payload, dict):
        raise BadRequestError("Request body must be a JSON object")

    return payload


# Type aliases for dependency injection
SessionDep = Annotated[AsyncSession, Depends(get_session)]
StorageDep = Annotated[StorageService, Depends(get_storage_service)]
JsonBody = Annotated[dict[str, Any], Depends(get_json_body)]
