"""Performance evaluation tracker FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from perfeval.api.dashboard import router as dashboard_router
from perfeval.api.employees import router as employees_router
from perfeval.api.evaluations import router as evaluations_router
from perfeval.api.health import router as health_router
from perfeval.config import Settings, settings
from perfeval.database import Store
from perfeval.exceptions import StoreError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application around a store that the lifespan initializes."""
    app_settings = app_settings or settings
    store = Store(
        app_settings.database_url,
        snapshot_path=app_settings.snapshot_path,
        echo=app_settings.log_level.upper() == "DEBUG",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            await store.initialize()
        except StoreError:
            logger.exception("Database initialization failed, refusing to start")
            raise
        app_settings.upload_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Uploads directory: %s", app_settings.upload_dir.resolve())
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(
        title="Performance Evaluation Tracker",
        description="Employee records, evaluation scorecards and dashboard aggregates",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StoreError)
    @app.exception_handler(SQLAlchemyError)
    @app.exception_handler(OSError)
    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )

    app.include_router(health_router, tags=["Health"])
    app.include_router(employees_router, prefix="/api", tags=["Employees"])
    app.include_router(evaluations_router, prefix="/api", tags=["Evaluations"])
    app.include_router(dashboard_router, prefix="/api", tags=["Dashboard"])

    app.mount(
        "/uploads",
        StaticFiles(directory=app_settings.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/{full_path:path}", include_in_schema=False)
    async def spa_fallback(full_path: str):
        """Serve a file from the public directory, else the SPA shell."""
        static_dir = app_settings.static_dir.resolve()
        candidate = (static_dir / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(static_dir):
            return FileResponse(candidate)
        index = static_dir / "index.html"
        if not index.is_file():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
        return FileResponse(index)

    return app


app = create_app()
