"""
Postboard Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application.
How:   create_app(settings) builds the Database handle, installs the
       interceptor chain, the route groups and the error layer.
Who:   uvicorn (`postboard.main:app`, or `python -m postboard`) and tests,
       which call create_app() with their own Settings.

Application Architecture:
    ┌───────────────────────────────────────────────────────┐
    │                    FastAPI App                        │
    │                                                       │
    │  Interceptors (MIDDLEWARE_CHAIN, outermost first):    │
    │   Rate Limit → Request ID → Access Log → CORS         │
    │                                                       │
    │  Routes:                                              │
    │   /api/user/  /api/user/login  /api/user/myPosts      │
    │   /api/post/create  /api/post/update  /api/post/delete│
    │   /health  /health/ready                              │
    │                                                       │
    │  Error layer (error_handlers.py, registered last):    │
    │   not-found → 404 │ domain errors → own status │ 500  │
    └───────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging → check settings → create collections
    Shutdown: dispose the engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable, Dict, List, Optional, Tuple, Type

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from postboard import __version__
from postboard.config import Settings, settings as default_settings
from postboard.database import Database
from postboard.error_handlers import register_exception_handlers
from postboard.middleware.logging import RequestLoggingMiddleware
from postboard.middleware.rate_limit import RateLimitMiddleware
from postboard.middleware.request_id import RequestIDMiddleware
from postboard.routes import health, posts, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s on stdout
    (the container runtime collects stdout).
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access logger replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)
    logger.info("Postboard backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: development setups run on the defaults
        logger.warning("%s", str(e))

    if settings.db_auto_create:
        await database.create_all()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Postboard backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Interceptor Chain
# ══════════════════════════════════════════════════════════════════════════

# (middleware class, settings → constructor kwargs), outermost first.
# A request passes through the entries top to bottom; an entry that answers
# on its own (429, CORS preflight) stops the request there.
MIDDLEWARE_CHAIN: List[Tuple[Type, Callable[[Settings], Dict]]] = [
    (
        RateLimitMiddleware,
        lambda s: {
            "max_requests": s.rate_limit_requests,
            "window_seconds": s.rate_limit_window,
        },
    ),
    (RequestIDMiddleware, lambda s: {}),
    (RequestLoggingMiddleware, lambda s: {}),
    (
        CORSMiddleware,
        lambda s: {
            "allow_origins": s.cors_origins_list,
            "allow_credentials": True,
            "allow_methods": ["*"],
            "allow_headers": ["*"],
            "expose_headers": ["X-Request-ID", "Retry-After"],
        },
    ),
]


def install_middleware(app: FastAPI, settings: Settings) -> None:
    # Starlette wraps the app with each add_middleware call, so the last one
    # added runs first: add in reverse to get MIDDLEWARE_CHAIN order
    for middleware_class, options in reversed(MIDDLEWARE_CHAIN):
        app.add_middleware(middleware_class, **options(settings))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: configuration to use; defaults to the environment-loaded one.

    Returns:
        A FastAPI instance with its own Database handle on app.state.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Postboard API",
        description="Users, sessions and blog posts.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    install_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(posts.router)
    app.include_router(health.router)

    return app


app = create_app()
