# campus_nav/api/v1/routes_health.py
from fastapi import APIRouter

from campus_nav.api.v1 import routes_routing
from campus_nav.core.config import settings

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


@router.get("/", summary="Health check")
async def health_check():
    """
    Liveness plus whether the campus routes have been precomputed yet.
    """
    manager = routes_routing.routing_service.graph_manager
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "data_file": manager.data_file.name,
        "routes_ready": manager.path_finder is not None,
    }
