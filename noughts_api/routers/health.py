"""Liveness (/health) for load balancers and orchestrators."""
from fastapi import Request, Response

from noughts_api.router import new_router
from noughts_api.settings import settings

router = new_router(tags=["health"])


@router.get("/health")
def health(request: Request, response: Response):
    """Liveness: API process is up. No dependencies checked."""
    return router.respond(response, request, {"status": "ok", "service": settings.SERVICE_NAME}, 200)
