"""Handoff — FastAPI application factory."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from handoff.config import settings
from handoff.infrastructure.api.routes_assignment import router as assignment_router
from handoff.infrastructure.api.routes_health import router as health_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Handoff Assignment Engine",
        description="Ranked, explainable owner recommendations for account handoffs",
        version="0.1.0",
        debug=settings.debug,
    )

    # CORS for the web front end
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(assignment_router, prefix="/api")

    logger.info("Handoff API ready (max %d recommendations per account)", settings.max_recommendations)
    return app


app = create_app()
