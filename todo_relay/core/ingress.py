"""Request ingress helpers: origin policy and caller identity."""

import logging
from typing import Awaitable, Callable, Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from todo_relay.core.config import Settings

logger = logging.getLogger(__name__)

ANONYMOUS_USER = "anonymous"
USER_ID_HEADER = "x-user-id"

CORS_REJECTION_MESSAGE = (
    "The CORS policy for this site does not allow access from the specified Origin."
)


def is_origin_allowed(origin: Optional[str], settings: Settings) -> bool:
    """
    Check an Origin header against the configured policy.

    Requests without an origin (curl, server-to-server, same-origin) are
    always allowed.
    """
    if not origin or settings.allow_any_origin:
        return True
    return origin in settings.allowed_origins_list


def install_origin_policy(app: FastAPI, settings: Settings) -> None:
    """Attach CORS headers and reject requests from unlisted origins."""
    if settings.allow_any_origin:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def reject_unlisted_origins(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        origin = request.headers.get("origin")
        if not is_origin_allowed(origin, settings):
            logger.warning(f"Rejected request from origin {origin}")
            return JSONResponse(status_code=403, content={"error": CORS_REJECTION_MESSAGE})
        return await call_next(request)


def resolve_user_id(request: Request, body_user_id: Optional[str] = None) -> str:
    """Pick the caller id: body field, then x-user-id header, then anonymous."""
    if body_user_id:
        return body_user_id
    return request.headers.get(USER_ID_HEADER) or ANONYMOUS_USER
