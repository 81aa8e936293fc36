"""HTTP plumbing for the noughts-and-crosses API: typed path params and a router facade."""

from .params import (
    ParamNotFoundError,
    ParamTypeError,
    PathParamError,
    extract_param,
    extract_uuid,
    param_from_context,
    param_from_request,
    parse_int,
    parse_str,
    parse_uuid,
    uuid_from_context,
    uuid_from_request,
)
from .request_context import ParamContext, ParamKey, ParamKind
from .router import Cookie, DecodeError, Router, new_router

__all__ = [
    "Cookie",
    "DecodeError",
    "ParamContext",
    "ParamKey",
    "ParamKind",
    "ParamNotFoundError",
    "ParamTypeError",
    "PathParamError",
    "Router",
    "extract_param",
    "extract_uuid",
    "new_router",
    "param_from_context",
    "param_from_request",
    "parse_int",
    "parse_str",
    "parse_uuid",
    "uuid_from_context",
    "uuid_from_request",
]
