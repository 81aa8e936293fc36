import logging
import uuid

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .logging_config import configure_logging
from .params import PathParamError
from .request_context import request_id_ctx
from .routers import health
from .settings import settings

logger = logging.getLogger("noughts")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request_id_ctx.set(request_id)
        response = await call_next(request)
        logger.info(
            "request_id=%s method=%s path=%s status=%s",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
        )
        response.headers["x-request-id"] = request_id
        return response


async def path_param_error_handler(request: Request, exc: PathParamError) -> PlainTextResponse:
    """Bad path params answer 400 with the parse failure as plain text."""
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


def create_app(*routers: APIRouter) -> FastAPI:
    """App with request logging, CORS for the client app, and the path-param error handler."""
    configure_logging()
    app = FastAPI(title="Noughts and Crosses API")
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CLIENT_URI],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(PathParamError, path_param_error_handler)

    app.include_router(health.router)
    for r in routers:
        app.include_router(r)
    return app


app = create_app()
