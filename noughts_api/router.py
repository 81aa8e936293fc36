"""
Router facade: an APIRouter that also carries the response, decode, redirect, cookie
and logging helpers, so route modules depend on the router alone.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any, Literal, TypeVar

from fastapi import APIRouter, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter, ValidationError

from .settings import Settings
from .settings import settings as default_settings

T = TypeVar("T")

# Set on the response built by respond(); everything else written to the handler's response is kept
_BODY_HEADERS = (b"content-length", b"content-type")


class DecodeError(ValueError):
    """Request body is not valid JSON for the requested type."""


@lru_cache(maxsize=128)
def _adapter(destination: Any) -> TypeAdapter:
    return TypeAdapter(destination)


def _default_logger() -> logging.Logger:
    # log() and logf() always write; LOG_LEVEL does not filter them
    logger = logging.getLogger("noughts.router")
    logger.setLevel(logging.INFO)
    return logger


@dataclass
class Cookie:
    name: str
    value: str = ""
    max_age: int | None = None
    expires: datetime | str | int | None = None
    path: str | None = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = False
    samesite: Literal["lax", "strict", "none"] | None = "lax"


class Router(APIRouter):
    """APIRouter plus handler helpers. Holds no per-request state; one instance serves all requests."""

    def __init__(
        self,
        *args: Any,
        logger: logging.Logger | None = None,
        settings: Settings | None = None,
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self.logger = logger or _default_logger()
        self.settings = settings or default_settings

    def client_uri(self) -> str:
        return self.settings.CLIENT_URI

    async def decode(self, response: Response | None, request: Request, destination: type[T]) -> T:
        """
        Parse the JSON body into destination. Raises DecodeError; nothing is written to
        `response`, the caller picks the reply.
        """
        body = await request.body()
        try:
            return _adapter(destination).validate_json(body)
        except ValidationError as e:
            raise DecodeError(str(e)) from e

    def respond(self, response: Response | None, request: Request, data: Any, status_code: int) -> Response:
        """
        JSON response for data with status_code (empty body when data is None).
        Headers already set on `response` (Location, Set-Cookie) are carried over.
        """
        if data is None:
            out = Response(status_code=status_code)
        else:
            out = JSONResponse(jsonable_encoder(data), status_code=status_code)
        if response is not None:
            for name, value in response.raw_headers:
                if name.lower() not in _BODY_HEADERS:
                    out.raw_headers.append((name, value))
        return out

    def set_location(self, response: Response, request: Request, location: str) -> None:
        # location is used as given: no quoting, no validation
        scheme = "https://" if request.url.scheme == "https" else "http://"
        host = request.headers.get("host", request.url.netloc)
        response.headers["Location"] = scheme + host + location

    def set_cookie(self, response: Response, request: Request, cookie: Cookie) -> None:
        response.set_cookie(
            cookie.name,
            cookie.value,
            max_age=cookie.max_age,
            expires=cookie.expires,
            path=cookie.path,
            domain=cookie.domain,
            secure=cookie.secure,
            httponly=cookie.httponly,
            samesite=cookie.samesite,
        )

    def log(self, *values: Any) -> None:
        self.logger.info(" ".join(str(v) for v in values))

    def logf(self, format: str, *args: Any) -> None:
        self.logger.info(format, *args)


def new_router(**kwargs: Any) -> Router:
    """Router with the "noughts.router" logger and process settings; kwargs go to APIRouter."""
    return Router(**kwargs)
