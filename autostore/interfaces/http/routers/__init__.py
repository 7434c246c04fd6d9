from fastapi import APIRouter

from autostore.interfaces.http.routers import analysis, auth, packages


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(packages.router, prefix="/apps", tags=["apps"])
    router.include_router(analysis.router, prefix="/analysis", tags=["analysis"])
    return router


__all__ = [
    "create_api_router",
]
