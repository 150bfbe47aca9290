"""
Exception handlers - Map request-level failures to JSON envelopes.

Storage failures are handled inside each route, because their envelope
differs per route. Only failures raised before a handler runs are
translated here.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hubs_api.api.models import ErrorResponse

logger = logging.getLogger(__name__)


class MalformedJSONBody(Exception):
    """Request declared a JSON body that could not be parsed."""

    pass


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the API's exception handlers on an application.

    Usage:
        app = FastAPI()
        register_exception_handlers(app)
    """

    @app.exception_handler(MalformedJSONBody)
    async def malformed_json_handler(request: Request, exc: MalformedJSONBody) -> JSONResponse:
        logger.warning("Rejected malformed JSON body: %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(message="Malformed JSON request body").model_dump(exclude_none=True),
        )
