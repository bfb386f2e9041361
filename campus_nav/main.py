# campus_nav/main.py

from fastapi import FastAPI

from campus_nav.api.v1 import routes_health, routes_routing
from campus_nav.core.config import settings
from campus_nav.core.logger import logger


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Campus route finder: shortest walking routes between named locations.",
    )

    # Routers
    app.include_router(routes_health.router, prefix="", tags=["health"])
    app.include_router(routes_routing.router, prefix="", tags=["routing"])

    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} ({settings.ENVIRONMENT}) ready")
    return app


app = create_app()
