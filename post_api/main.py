from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import select
import uvicorn

from post_api.core.config import settings
from post_api.core.database import database, get_session
from post_api.core.logging_config import setup_logging
from post_api.core.response.handlers import global_exception_handler

# Import routers from apps
from post_api.apps.blog import post_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    if settings.DB_SYNCHRONIZE:
        await database.create_all()
    async with get_session() as session:
        await session.exec(select(1))
    logger.info("Database connection established")
    yield
    logger.info("Shutting down")
    await database.disconnect()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_INFO,
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(Exception, global_exception_handler)

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint with health check."""
        return {"message": "Server is running", "status": "healthy", "version": settings.PROJECT_VERSION}

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "message": "Service is running normally"}

    app.include_router(post_router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "post_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )
