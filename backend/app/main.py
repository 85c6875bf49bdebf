from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from app.config import Settings, get_settings
from app.core.database import Database
from app.core.errors import SchemaLabError
from app.api.routes import oltp, olap, simulations, sample_data
from app.services.error_classifier import classify_exception

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database or Database.from_settings(settings)
        db.connect()
        app.state.database = db
        logger.info(f"Connected to {db.engine.dialect.name} database")
        try:
            yield
        finally:
            db.dispose()
            logger.info("Database connections closed")

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        description="API comparing normalized and denormalized schemas under OLTP and OLAP workloads",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DBAPIError)
    @app.exception_handler(SchemaLabError)
    async def classified_error_handler(request: Request, exc: Exception):
        classified = classify_exception(exc)
        logger.warning(f"{request.method} {request.url.path} failed: {classified.category.value}")
        return JSONResponse(
            status_code=classified.status_code,
            content={"success": False, "error": classified.to_dict()},
        )

    # Include routers
    app.include_router(oltp.router, prefix="/api/oltp", tags=["OLTP"])
    app.include_router(olap.router, prefix="/api/olap", tags=["OLAP"])
    app.include_router(simulations.router, prefix="/api/simulations", tags=["Simulations"])
    app.include_router(sample_data.router, prefix="/api/sample-data", tags=["Sample Data"])

    @app.get("/")
    async def root():
        return {"message": "Schema Lab API", "version": "1.0.0"}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
