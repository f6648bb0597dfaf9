import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from app.api.api import api_router
from app.core.config import Settings, settings as default_settings
from app.core.database import Database
from app.core.error_handlers import register_exception_handlers
from app.utils.audit import configure_audit_logger
from app.utils.rate_limiter import close_clients

logger = logging.getLogger(__name__)

api_description = """
## WanderBlocks Waitlist API

- `POST /api/waitlisters` - join the waitlist (public)
- `GET /api/waitlisters` - paginated listing, newest first (admin)
- `GET /api/waitlisters/count` - total / notified / not notified (admin)
"""


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    configure_audit_logger()


def create_app(settings: Settings = default_settings) -> FastAPI:
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = app.state.database
        database.connect()
        if settings.AUTO_CREATE_TABLES:
            database.create_all()
        if not settings.ADMIN_API_TOKEN:
            logger.warning("ADMIN_API_TOKEN is not set; waitlist listing and count routes are unauthenticated")
        try:
            yield
        finally:
            database.dispose()
            close_clients()

    app = FastAPI(
        title="WanderBlocks API",
        description=api_description,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    # GZip compression for large JSON responses
    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
