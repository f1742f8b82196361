import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.database import init_models
from app.exception_handlers import register_exception_handlers
from app.middleware.language import LanguageMiddleware
from app.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from app.routes import admin, public

setup_structured_logging(log_level="DEBUG" if settings.debug else "INFO", json_format=settings.log_json)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Multilingual content grouping, fallback resolution and replication",
        debug=settings.debug,
        version=settings.app_version,
    )

    # Starlette runs middleware in reverse order of registration:
    # the access log wraps language detection so it can report the locale
    app.add_middleware(LanguageMiddleware)
    app.add_middleware(StructuredLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(public.router)
    app.include_router(admin.router)

    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    app.mount(settings.upload_url_prefix, StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return app


app = create_app()


@app.on_event("startup")
async def startup_event():
    """Tasks to run at application startup."""
    logger.info("Starting up the application...")
    # Production schemas are managed by alembic
    if settings.debug:
        await init_models()
        logger.info("Database tables created (if not existing).")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down the application...")


@app.get("/health", tags=["Root"])
async def health():
    return {"status": "ok", "version": settings.app_version}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
