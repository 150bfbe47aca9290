"""
API routes - Hub CRUD endpoints.

This module defines the HTTP endpoints:
- GET / and GET /now - Static greeting and server time
- GET /hubs, GET /hubs/{hub_id} - Read hubs
- POST /hubs - Create a hub
- PUT /hubs/{hub_id} - Update a hub
- DELETE /hubs/{hub_id} - Delete a hub

Every hub handler awaits exactly one repository call. Any exception it
raises is logged and answered with a 500 envelope; the envelope keys
differ per route and are kept as existing clients expect them.
Hubs are always encoded with ``jsonable_encoder`` so a record reads the
same whichever route returns it. GET routes also answer HEAD.

``fallback_router`` holds the catch-all 404 route and must be included
after every other router.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse

from hubs_api.api.dependencies import get_hub_repository, get_json_body
from hubs_api.api.models import (
    ErrorDetail,
    ErrorResponse,
    HubCreatedResponse,
    HubUpdatedResponse,
    ListErrorResponse,
)
from hubs_api.domain.ports import HubRepository

logger = logging.getLogger(__name__)

GREETING = "hello world from express!!"
HUB_NOT_FOUND = "I cannot find the hub you are looking for"

# The JSON body parser runs ahead of every handler, the catch-all included
router = APIRouter(dependencies=[Depends(get_json_body)])
fallback_router = APIRouter(dependencies=[Depends(get_json_body)])


def _error(status_code: int, envelope: ErrorResponse | ListErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.model_dump(exclude_none=True))


def _storage_failure(exc: Exception) -> JSONResponse:
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(err=ErrorDetail.from_exception(exc)),
    )


def _hub_not_found(message: str = HUB_NOT_FOUND) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, ErrorResponse(message=message))


@router.head("/", response_class=PlainTextResponse, include_in_schema=False)
@router.get("/", response_class=PlainTextResponse, summary="Greeting")
async def index() -> str:
    return GREETING


@router.head("/now", response_class=PlainTextResponse, include_in_schema=False)
@router.get("/now", response_class=PlainTextResponse, summary="Current server time")
async def now() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2024-01-01T00:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.head("/hubs", include_in_schema=False)
@router.get(
    "/hubs",
    responses={500: {"model": ListErrorResponse, "description": "Hub store failure"}},
    summary="List hubs",
)
async def list_hubs(hubs: HubRepository = Depends(get_hub_repository)) -> JSONResponse:
    try:
        found = await hubs.find()
    except Exception as e:
        logger.exception("Listing hubs failed")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ListErrorResponse(err=ErrorDetail.from_exception(e)),
        )
    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(found))


@router.head("/hubs/{hub_id}", include_in_schema=False)
@router.get(
    "/hubs/{hub_id}",
    responses={
        404: {"model": ErrorResponse, "description": "Hub not found"},
        500: {"model": ErrorResponse, "description": "Hub store failure"},
    },
    summary="Get a hub",
)
async def get_hub(hub_id: str, hubs: HubRepository = Depends(get_hub_repository)) -> JSONResponse:
    try:
        hub = await hubs.find_by_id(hub_id)
    except Exception as e:
        logger.exception("Fetching hub %s failed", hub_id)
        return _storage_failure(e)

    if hub:
        return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(hub))
    # This route's message ends with a period; the PUT/DELETE ones do not.
    return _hub_not_found(f"{HUB_NOT_FOUND}.")


@router.post(
    "/hubs",
    status_code=status.HTTP_201_CREATED,
    response_model=HubCreatedResponse,
    responses={500: {"model": ListErrorResponse, "description": "Hub store failure"}},
    summary="Create a hub",
    description="The JSON body is passed to the hub store unchanged. "
    "Data the store rejects (missing or duplicate name) is reported as a 500.",
)
async def create_hub(
    body: Any = Depends(get_json_body),
    hubs: HubRepository = Depends(get_hub_repository),
) -> JSONResponse:
    try:
        hub = await hubs.add(body)
    except Exception as e:
        logger.exception("Creating hub failed")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ListErrorResponse(err=ErrorDetail.from_exception(e)),
        )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=HubCreatedResponse(hub=jsonable_encoder(hub)).model_dump(),
    )


@router.put(
    "/hubs/{hub_id}",
    response_model=HubUpdatedResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Hub not found"},
        500: {"model": ErrorResponse, "description": "Hub store failure"},
    },
    summary="Update a hub",
)
async def update_hub(
    hub_id: str,
    body: Any = Depends(get_json_body),
    hubs: HubRepository = Depends(get_hub_repository),
) -> JSONResponse:
    try:
        updated = await hubs.update(hub_id, body)
    except Exception as e:
        logger.exception("Updating hub %s failed", hub_id)
        return _storage_failure(e)

    if updated:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=HubUpdatedResponse(updated=jsonable_encoder(updated)).model_dump(),
        )
    return _hub_not_found()


@router.delete(
    "/hubs/{hub_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        404: {"model": ErrorResponse, "description": "Hub not found"},
        500: {"model": ErrorResponse, "description": "Hub store failure"},
    },
    summary="Delete a hub",
)
async def delete_hub(hub_id: str, hubs: HubRepository = Depends(get_hub_repository)) -> Response:
    try:
        deleted = await hubs.remove(hub_id)
    except Exception as e:
        logger.exception("Deleting hub %s failed", hub_id)
        return _storage_failure(e)

    if deleted:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return _hub_not_found()


@fallback_router.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def no_route(request: Request) -> JSONResponse:
    """Answer any unmatched method/path pair, including method mismatches on known paths."""
    return _error(
        status.HTTP_404_NOT_FOUND,
        ErrorResponse(message=f"Cannot {request.method} {request.url.path}"),
    )
