"""todo-relay - LLM todo summaries and Slack notifications.

FastAPI application entry point with lifespan management.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from todo_relay import __version__
from todo_relay.core.config import Settings, get_settings
from todo_relay.core.credentials import (
    CredentialLoadError,
    DatabaseHandle,
    bootstrap_database,
)
from todo_relay.core.errors import RelayError
from todo_relay.core.ingress import install_origin_policy
from todo_relay.core.logging import setup_logging
from todo_relay.core.slack import SlackWebhookClient
from todo_relay.llm import LLMClient, get_llm_client
from todo_relay.services import slack_notifier, todo_summarizer

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    database_credential_source: Optional[str]
    llm_provider: str
    slack_configured: bool


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name}...")

    if app.state.database is None:
        try:
            app.state.database = bootstrap_database(settings)
        except CredentialLoadError as e:
            logger.critical(f"Cannot start without a database credential: {e}")
            raise SystemExit(1) from e

    yield
    logger.info("Shutting down...")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        return "Malformed JSON request body."
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in error.get('loc', ())[1:]) or 'body'}: {error.get('msg')}"
        for error in errors
    )
    return f"Invalid request body: {details}"


def register_exception_handlers(app: FastAPI) -> None:
    """Translate errors into the {"error": ...} envelope."""

    @app.exception_handler(RelayError)
    async def handle_relay_error(request: Request, exc: RelayError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _validation_message(exc)
        logger.warning(f"{request.method} {request.url.path} rejected: {message}")
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal server error."})


def create_app(
    settings: Optional[Settings] = None,
    *,
    database: Optional[DatabaseHandle] = None,
    llm_client: Optional[LLMClient] = None,
    slack_client: Optional[SlackWebhookClient] = None,
) -> FastAPI:
    """
    Build the application with its collaborators.

    Anything not passed in is built from ``settings``. When ``database`` is
    omitted the credential is resolved during startup.
    """
    settings = settings or get_settings()
    llm_client = llm_client or get_llm_client(settings)
    slack_client = slack_client or SlackWebhookClient(settings.slack_webhook_url)

    summarizer = todo_summarizer.TodoSummarizerService(llm_client)
    notifier = slack_notifier.SlackNotifierService(
        summarizer,
        slack_client,
        message_format=settings.slack_message_format.lower(),
    )

    app = FastAPI(
        title="todo-relay",
        description="Summarize todo items with an LLM and post them to Slack",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.todo_summarizer = summarizer
    app.state.slack_notifier = notifier
    app.state.slack_client = slack_client

    install_origin_policy(app, settings)
    register_exception_handlers(app)

    app.include_router(todo_summarizer.router)
    app.include_router(slack_notifier.router)

    @app.get("/")
    async def root() -> dict:
        """Root endpoint with service info."""
        return {
            "name": settings.app_name,
            "version": __version__,
            "description": "Todo summarization and Slack relay",
            "endpoints": ["/summarize-single-todo", "/send-single-todo-to-slack"],
        }

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request) -> HealthResponse:
        """Report which collaborators are configured."""
        handle: Optional[DatabaseHandle] = request.app.state.database
        slack_ready = request.app.state.slack_client.is_configured

        status = "healthy" if (handle is not None and slack_ready) else "degraded"

        return HealthResponse(
            status=status,
            database_credential_source=handle.source.value if handle else None,
            llm_provider=settings.llm_provider,
            slack_configured=slack_ready,
        )

    return app


def run() -> None:
    """Console entry point: resolve credentials, then serve."""
    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        database = bootstrap_database(settings)
    except CredentialLoadError as e:
        logger.critical(f"Cannot start without a database credential: {e}")
        sys.exit(1)

    app = create_app(settings, database=database)
    logger.info(f"Backend server running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
