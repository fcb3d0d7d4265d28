import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notifier.application.use_cases import NotificationEngine
from notifier.application.use_cases.notifications import RoleDirectory
from notifier.config import Settings, get_settings
from notifier.infrastructure.database import (
    build_engine,
    create_session_factory,
    initialize_database,
)
from notifier.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    role_directory: RoleDirectory | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize the database and the engine on startup and release them on shutdown."""

        logging.basicConfig(level=settings.log_level.upper())
        engine = build_engine(settings=settings)
        initialize_database(engine)
        session_factory = create_session_factory(engine)
        notification_engine = NotificationEngine(
            session_factory, role_directory=role_directory, settings=settings
        )
        app.state.engine = engine
        app.state.session_factory = session_factory
        app.state.notification_engine = notification_engine
        logger.info("Notification engine ready with %d workers", settings.emit_max_workers)
        yield
        notification_engine.shutdown()
        engine.dispose()

    app = FastAPI(title="Notifier", lifespan=lifespan)

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_routes(app)
    return app


app = create_app()
