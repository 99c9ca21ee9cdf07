"""
Request pipeline stages that run before the route handlers.

The logger runs as HTTP middleware on every request. Authentication is an
app-wide dependency (see app.auth). Body parsing and validation are route
dependencies used by create and update only.
"""

from typing import Any, Dict

from fastapi import Depends, Request

from .core import ProductIn, validate_create, validate_update
from .database import ProductStore
from .errors import MalformedRequestError
from .logging import get_request_logger

logger = get_request_logger()


async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def _is_json(request: Request) -> bool:
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def parse_json_body(request: Request) -> Dict[str, Any]:
    """Empty bodies and non-JSON content types parse as ``{}``."""
    if not _is_json(request):
        return {}
    if not (await request.body()).strip():
        return {}
    try:
        body = await request.json()
    except ValueError:
        raise MalformedRequestError("Request body is not valid JSON")
    if not isinstance(body, dict):
        raise MalformedRequestError("Request body must be a JSON object")
    return body


async def validated_create(body: Dict[str, Any] = Depends(parse_json_body)) -> ProductIn:
    return validate_create(body)


async def validated_update(body: Dict[str, Any] = Depends(parse_json_body)) -> Dict[str, Any]:
    return validate_update(body)
