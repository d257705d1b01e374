"""
Traffic Monitor
FastAPI Application Entry Point
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from traffic_monitor import __version__
from traffic_monitor.analytics import Aggregator, router as vehicles_router
from traffic_monitor.config import Settings, load_settings
from traffic_monitor.database import Database
from traffic_monitor.exceptions import DataAccessError
from traffic_monitor.log import setup_logging
from traffic_monitor.store import RecordStore, SQLRecordStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[RecordStore] = None) -> FastAPI:
    """
    Build the API application.

    When `store` is given it is used as-is and no database is opened;
    otherwise a Database handle is acquired from `settings.database_url`
    at startup and disposed at shutdown.
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifecycle hooks for the application"""
        logger.info("Starting Traffic Monitor %s", __version__)
        database = None
        record_store = store
        if record_store is None:
            database = Database(settings.database_url, echo=settings.db_echo)
            await database.init()
            record_store = SQLRecordStore(database)

        app.state.aggregator = Aggregator(
            record_store,
            low_confidence_threshold=settings.low_confidence_threshold,
            sample_limit=settings.sample_limit,
        )

        yield

        if database is not None:
            await database.close()
        logger.info("Stopping Traffic Monitor")

    app = FastAPI(
        title="Traffic Monitor",
        description="Vehicle detection statistics for the traffic dashboard",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DataAccessError)
    async def data_access_error_handler(request: Request, exc: DataAccessError):
        logger.error("Request %s failed: %s", request.url.path, exc.message)
        return JSONResponse(status_code=500, content={"error": exc.message})

    app.include_router(vehicles_router)

    @app.get("/api/health")
    async def health():
        """Health check"""
        return {"status": "ok", "service": "traffic-monitor"}

    @app.get("/")
    async def root():
        """Root endpoint with API info"""
        return {
            "name": "Traffic Monitor",
            "version": __version__,
            "docs": "/docs",
            "endpoints": {
                "sample": "/api/vehicles/sample",
                "summary": "/api/vehicles/summary",
                "hourly_average": "/api/vehicles/hourly-average",
                "vehicle_types": "/api/vehicles/vehicle-types",
                "speed_by_vehicle": "/api/vehicles/speed-by-vehicle",
                "weather_speed": "/api/vehicles/weather-speed",
                "health": "/api/health",
            },
        }

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "traffic_monitor.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=5000,
        reload=True,
    )
