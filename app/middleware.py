# =============================================================================
# app/middleware.py - Request Body Parsing Middleware
# =============================================================================
# Two ASGI middlewares that run, in this order, before routing:
#   1. JsonBodyMiddleware        - application/json bodies
#   2. UrlencodedBodyMiddleware  - application/x-www-form-urlencoded bodies
#
# Each one parses a matching body into `request.state.body` and replays the
# raw bytes so downstream code can still read them. A malformed body is
# answered with 400, and an oversized one with 413; neither reaches a route
# handler.
# =============================================================================

import json
import logging
from typing import Any

from starlette.datastructures import Headers
from starlette.middleware import Middleware
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.config import DEFAULT_MAX_BODY_BYTES
from app.exceptions import BodyTooLargeError, InvalidBodyError, TutorialsException
from lib.urlencoded import parse_urlencoded

logger = logging.getLogger(__name__)


async def _read_body(receive: Receive, limit: int) -> bytes:
    """Buffer the request body, giving up once it grows past `limit` bytes."""
    chunks = []
    size = 0
    while True:
        message = await receive()
        if message["type"] != "http.request":
            break
        chunk = message.get("body", b"")
        size += len(chunk)
        if size > limit:
            raise BodyTooLargeError(limit)
        chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def _replay(body: bytes, receive: Receive) -> Receive:
    """Hand the buffered body out once, then defer to the real receive."""
    sent = False

    async def replay() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay


class BodyParserMiddleware:
    """
    Base class for body parsers.

    Subclasses define which media types they accept and how to parse them.
    `parse` signals malformed input by raising ValueError.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int = DEFAULT_MAX_BODY_BYTES):
        self.app = app
        self.max_body_bytes = max_body_bytes

    def accepts(self, media_type: str) -> bool:
        raise NotImplementedError

    def parse(self, body: bytes) -> Any:
        raise NotImplementedError

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        state = scope.setdefault("state", {})
        state.setdefault("body", None)

        headers = Headers(scope=scope)
        media_type = headers.get("content-type", "").split(";")[0].strip().lower()
        if not self.accepts(media_type):
            await self.app(scope, receive, send)
            return

        try:
            declared = headers.get("content-length", "")
            if declared.isdigit() and int(declared) > self.max_body_bytes:
                raise BodyTooLargeError(self.max_body_bytes)
            body = await _read_body(receive, self.max_body_bytes)
            if body.strip():
                try:
                    state["body"] = self.parse(body)
                except ValueError as e:
                    raise InvalidBodyError(media_type, str(e)) from e
        except TutorialsException as error:
            logger.debug(f"Rejected {media_type} body on {scope.get('path')}: {error.message}")
            response = JSONResponse(status_code=error.status_code, content=error.to_dict())
            await response(scope, receive, send)
            return

        await self.app(scope, _replay(body, receive), send)


class JsonBodyMiddleware(BodyParserMiddleware):
    """Parse JSON bodies (application/json and +json types)."""

    def accepts(self, media_type: str) -> bool:
        return media_type == "application/json" or media_type.endswith("+json")

    def parse(self, body: bytes) -> Any:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        parsed = json.loads(body)
        # Only objects and arrays are accepted at the top level
        if not isinstance(parsed, (dict, list)):
            raise ValueError(f"expected a JSON object or array, got {type(parsed).__name__}")
        return parsed


class UrlencodedBodyMiddleware(BodyParserMiddleware):
    """Parse URL-encoded form bodies with nested bracket keys."""

    def accepts(self, media_type: str) -> bool:
        return media_type == "application/x-www-form-urlencoded"

    def parse(self, body: bytes) -> Any:
        return parse_urlencoded(body)


def body_parsing_chain(max_body_bytes: int = DEFAULT_MAX_BODY_BYTES) -> list[Middleware]:
    """
    The body parsers in execution order (outermost first).

    Both share the same body size limit.
    """
    return [
        Middleware(JsonBodyMiddleware, max_body_bytes=max_body_bytes),
        Middleware(UrlencodedBodyMiddleware, max_body_bytes=max_body_bytes),
    ]
