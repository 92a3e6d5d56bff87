import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import Settings
from app.database import Base, create_db_engine, create_session_factory
from app.errors import register_error_handlers
from app.routers.photos import router as photos_router
from app.service import ObjectKeyFactory
from app.storage import get_storage_backend

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the API. Store clients are created on startup and kept on app.state,
    where the request dependencies in app.deps pick them up.
    """
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        engine = create_db_engine(settings.database_url)
        # Ensure database tables exist
        Base.metadata.create_all(bind=engine)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        app.state.storage = get_storage_backend(settings)
        logger.info(
            "Photo API ready (storage=%s, port=%s)",
            settings.storage_backend,
            settings.port,
        )
        try:
            yield
        finally:
            engine.dispose()

    app = FastAPI(title="Photo Share API", lifespan=lifespan)
    app.state.settings = settings
    app.state.key_factory = ObjectKeyFactory()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(photos_router)

    if settings.storage_backend == "filesystem":
        media_root = Path(settings.media_root)
        media_root.mkdir(parents=True, exist_ok=True)
        app.mount("/media", StaticFiles(directory=media_root), name="media")

    return app


app = create_app()

__all__ = ["app", "create_app"]
