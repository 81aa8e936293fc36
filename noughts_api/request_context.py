"""Request-scoped data: request_id ContextVar for logs and the per-request ParamContext."""
import enum
from collections.abc import Iterator, Mapping
from contextvars import ContextVar
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from starlette.requests import Request

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")

class ParamKind(enum.Enum):
    PATH = "path"
    UUID = "uuid"


@dataclass(frozen=True)
class ParamKey:
    """Storage key for an extracted value: one slot per (kind, parameter name)."""

    kind: ParamKind
    name: str

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.name}"


class ParamContext(Mapping[ParamKey, Any]):
    """
    Immutable map of the path params extracted for one request.
    with_value() returns an extended copy; an existing context never changes,
    so a layer only sees what the layers before it stored.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[ParamKey, Any] | None = None):
        self._values = MappingProxyType(dict(values or {}))

    def with_value(self, key: ParamKey, value: Any) -> "ParamContext":
        values = dict(self._values)
        values[key] = value
        return ParamContext(values)

    def __getitem__(self, key: ParamKey) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[ParamKey]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"ParamContext({inner})"


EMPTY_PARAMS = ParamContext()

# Params extracted so far on this request. Set by the extractor dependencies for the
# duration of the handler and reset on their teardown, so only code nested inside an
# extractor (later dependencies, the handler) ever sees its value.
params_ctx: ContextVar[ParamContext] = ContextVar("path_params", default=EMPTY_PARAMS)


def params_for(request: Request) -> ParamContext:
    """ParamContext visible to the code handling `request` (empty outside the extractors)."""
    return params_ctx.get()
