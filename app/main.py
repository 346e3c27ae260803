# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# Builds the Tutorials API: application context, body-parsing middleware
# chain, exception handlers and the route table.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
#   poetry run tutorials-api            (see app/run.py)
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware import Middleware

from app.config import Settings, get_settings
from app.context import AppContext
from app.exceptions import (
    TutorialsException,
    tutorials_exception_handler,
    validation_exception_handler,
)
from app.middleware import body_parsing_chain
from app.routers import default_registrars

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to Test application."


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: start the database connection attempt without waiting on it
    - Shutdown: cancel a pending attempt and close the client
    """
    context: AppContext = app.state.context
    logger.info(f"Starting Tutorials API in {context.settings.ENVIRONMENT} mode")

    # Fire and forget: the listener must not wait on the database
    context.database.connect()

    yield

    logger.info("Shutting down Tutorials API")
    await context.database.close()


async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


def create_app(context: AppContext | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        context: Application context; built from get_settings() with the
            default route registrars when omitted

    Returns:
        The configured application. The route table is fixed once this
        returns.
    """
    if context is None:
        context = AppContext.from_settings(get_settings(), default_registrars())

    settings = context.settings

    # Middleware runs in list order: CORS, then JSON body, then URL-encoded body
    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        ),
        *body_parsing_chain(settings.MAX_BODY_BYTES),
    ]

    app = FastAPI(
        title="Tutorials API",
        description="CRUD API for tutorials stored in MongoDB.",
        version="1.0.0",
        lifespan=lifespan,
        middleware=middleware,
    )
    app.state.context = context

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    app.add_exception_handler(TutorialsException, tutorials_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, handle_general_exception)

    # -------------------------------------------------------------------------
    # Route Table
    # -------------------------------------------------------------------------

    @app.get("/", tags=["Root"])
    async def welcome():
        """Fixed welcome message; never touches the database."""
        return {"message": WELCOME_MESSAGE}

    for registrar in context.registrars:
        registrar.register(app)

    return app


configure_logging(get_settings())
app = create_app()
