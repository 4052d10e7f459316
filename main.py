import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from core.config import settings
from core.dependencies import Services, build_services
from services.seed import seed_demo_data
from api.routers import ai, bikes, diary, gear, packing, trips

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(services: Optional[Services] = None) -> FastAPI:
    """
    Builds the API. The services are constructed once here (or in the lifespan
    when none are passed in) and shared by every request through app.state.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "services", None) is None:
            app.state.services = build_services(settings)
            if settings.SEED_DEMO_DATA:
                seed_demo_data(app.state.services)
        logger.info("Touring Planner API started")
        yield

    app = FastAPI(
        title="Touring Planner API",
        description="Trips, gear, packing and travel diary for bicycle tourers.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.services = services

    # Configure CORS (Cross-Origin Resource Sharing)
    # This allows the frontend to communicate with the backend.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", tags=["Root"])
    def read_root():
        """Redirect to the interactive API docs"""
        return RedirectResponse(url="/docs")

    # Mount all routers with the /api prefix
    app.include_router(trips.router, prefix="/api")
    app.include_router(diary.router, prefix="/api")
    app.include_router(ai.router, prefix="/api")
    app.include_router(gear.router, prefix="/api")
    app.include_router(packing.router, prefix="/api")
    app.include_router(bikes.router, prefix="/api")
    return app


app = create_app()
