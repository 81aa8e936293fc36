"""
Typed path params: FastAPI dependencies that parse a path parameter once and store
the value on the request, so later dependencies and the handler read it back typed.
A parse failure answers 400 with the failure message and the handler never runs.
"""
import logging
import re
import uuid
from collections.abc import AsyncIterator, Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from fastapi import HTTPException, Request

from .request_context import ParamContext, ParamKey, ParamKind, params_ctx, params_for

logger = logging.getLogger("noughts.params")

T = TypeVar("T")
Parser = Callable[[Request, str], T]

UUID_PARAM = "uuid"
UUID_KEY = ParamKey(ParamKind.UUID, UUID_PARAM)


class PathParamError(HTTPException):
    """Path parameter could not be parsed or failed validation (400)."""

    def __init__(self, param: str, message: str):
        super().__init__(status_code=400, detail=message)
        self.param = param


class ParamNotFoundError(LookupError):
    """No value was extracted for this parameter on the current request."""


class ParamTypeError(ParamNotFoundError):
    """A value was extracted but is not of the requested type."""


def _path_value(request: Request, key: str) -> Any:
    try:
        return request.path_params[key]
    except KeyError:
        raise ValueError(f"missing path parameter {key!r}") from None


def parse_str(request: Request, key: str) -> str:
    return str(_path_value(request, key))


_INT_PATTERN = re.compile(r"-?[0-9]+")


def parse_int(request: Request, key: str) -> int:
    """Base-10 ASCII digits with an optional leading minus; no spaces or underscores."""
    value = _path_value(request, key)
    if isinstance(value, int):
        return value
    if not _INT_PATTERN.fullmatch(str(value)):
        raise ValueError(f"invalid integer for {key!r}: {value!r}")
    return int(value)


def parse_uuid(request: Request, key: str) -> uuid.UUID:
    value = _path_value(request, key)
    if isinstance(value, uuid.UUID):
        # route declared {key:uuid}; Starlette already converted it
        return value
    return uuid.UUID(str(value))


@contextmanager
def _stored(key: ParamKey, value: Any) -> Iterator[ParamContext]:
    params = params_ctx.get().with_value(key, value)
    token = params_ctx.set(params)
    try:
        yield params
    finally:
        params_ctx.reset(token)


def _parse_or_reject(request: Request, key: str, parse: Parser[T]) -> T:
    try:
        return parse(request, key)
    except HTTPException:
        raise
    except Exception as e:
        logger.info("path_param rejected param=%s path=%s reason=%s", key, request.url.path, e)
        raise PathParamError(key, str(e)) from e


def extract_param(key: str, parse: Parser[T]) -> Callable[[Request], AsyncIterator[T]]:
    """
    Dependency factory: parse path parameter `key` with parse(request, key) and store the
    result for param_from_request(). Any exception raised by parse is a 400 carrying its message.

    Use on a route (Depends(extract_param(...))), in dependencies=[...], or on a router.
    Each parameter name has its own slot, so extractors for different names can be stacked.
    The value is visible from this dependency's setup until its teardown, never after.
    """
    slot = ParamKey(ParamKind.PATH, key)

    async def dependency(request: Request) -> AsyncIterator[T]:
        value = _parse_or_reject(request, key, parse)
        with _stored(slot, value):
            logger.debug("path_param stored param=%s type=%s", key, type(value).__name__)
            yield value

    dependency.__name__ = f"extract_param_{key}"
    return dependency


def param_from_context(params: ParamContext, key: str, type_: type[T] | None = None) -> T:
    """Value stored by extract_param(key, ...). Pass type_ to check what comes back."""
    try:
        value = params[ParamKey(ParamKind.PATH, key)]
    except KeyError:
        raise ParamNotFoundError(f"path param {key!r} not found") from None
    if type_ is not None and not isinstance(value, type_):
        raise ParamTypeError(
            f"path param {key!r} is {type(value).__name__}, not {type_.__name__}"
        )
    return value


def param_from_request(request: Request, key: str, type_: type[T] | None = None) -> T:
    return param_from_context(params_for(request), key, type_)


async def extract_uuid(request: Request) -> AsyncIterator[uuid.UUID]:
    """
    Dependency for routes with a {uuid} path parameter. Rejects unparseable values and the
    nil UUID with 400; stores the parsed UUID for uuid_from_request().
    """
    uid = _parse_or_reject(request, UUID_PARAM, parse_uuid)
    if uid == uuid.UUID(int=0):
        logger.info("path_param rejected param=uuid path=%s reason=nil", request.url.path)
        raise PathParamError(UUID_PARAM, "invalid uuid")
    with _stored(UUID_KEY, uid):
        yield uid


def uuid_from_context(params: ParamContext) -> uuid.UUID:
    try:
        uid = params[UUID_KEY]
    except KeyError:
        raise ParamNotFoundError("uuid not found in context") from None
    if not isinstance(uid, uuid.UUID):
        raise ParamTypeError(f"uuid in context is {type(uid).__name__}, not UUID")
    return uid


def uuid_from_request(request: Request) -> uuid.UUID:
    return uuid_from_context(params_for(request))
