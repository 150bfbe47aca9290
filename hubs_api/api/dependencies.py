"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for the hub repository and
the JSON request body.
"""

import json
from typing import Any

from fastapi import Request

from hubs_api.api.errors import MalformedJSONBody
from hubs_api.domain.ports import HubRepository

JSON_MEDIA_TYPE = "application/json"


def get_hub_repository(request: Request) -> HubRepository:
    """
    Get the hub repository from app state.

    The repository is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.hubs


async def get_json_body(request: Request) -> Any:
    """
    Parse the request body when it is declared as JSON.

    - Non-JSON content types (or none) give an empty mapping
    - An empty JSON payload gives an empty mapping
    - Only objects and arrays are accepted at the top level

    Raises:
        MalformedJSONBody: If a JSON body cannot be parsed
    """
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != JSON_MEDIA_TYPE:
        return {}

    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        body = json.loads(raw)
    except ValueError:
        raise MalformedJSONBody() from None

    if not isinstance(body, (dict, list)):
        raise MalformedJSONBody()
    return body
