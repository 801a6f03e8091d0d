"""Error views and application-wide exception handlers."""

import logging
from dataclasses import dataclass, field

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..templating import render

logger = logging.getLogger(__name__)

# Paths that answer with JSON rather than HTML pages
JSON_PATH_PREFIXES = ("/api/", "/health")


@dataclass(frozen=True)
class ErrorView:
    """Content of an error page."""

    status_code: int
    title: str
    message: str
    reasons: list[str] = field(default_factory=list)


PAGE_NOT_FOUND = ErrorView(
    404,
    "Page not found",
    "If you typed the web address, check it is correct. "
    "If you pasted the web address, check you copied the entire address.",
)

REVIEW_NOT_FOUND = ErrorView(
    404,
    "Code review not found",
    "The code review you are looking for does not exist. This may be because:",
    [
        "the link you followed is incorrect or out of date",
        "the code review has been deleted",
        "the code review ID was typed incorrectly",
    ],
)

UNAUTHORISED = ErrorView(
    401,
    "You need to sign in to view this page",
    "You are not signed in or your session has expired.",
)

FORBIDDEN = ErrorView(
    403,
    "You do not have permission to view this page",
    "Contact the service team if you think you should have access.",
)

SERVICE_PROBLEM_TITLE = "Sorry, there is a problem with the service"


def render_error(request: Request, view: ErrorView) -> HTMLResponse:
    return render(
        request,
        "error/index.html",
        {
            "page_title": view.title,
            "status_code": view.status_code,
            "title": view.title,
            "message": view.message,
            "reasons": view.reasons,
        },
        status_code=view.status_code,
    )


def server_error(message: str) -> ErrorView:
    return ErrorView(500, SERVICE_PROBLEM_TITLE, message)


def render_upstream_error(
    request: Request,
    exc: httpx.HTTPError,
    message: str,
    not_found: ErrorView = PAGE_NOT_FOUND,
) -> HTMLResponse:
    """Pick the error page for a failed API call."""
    if isinstance(exc, httpx.HTTPStatusError):
        match exc.response.status_code:
            case 404:
                return render_error(request, not_found)
            case 401:
                return render_error(request, UNAUTHORISED)
            case 403:
                return render_error(request, FORBIDDEN)
    return render_error(request, server_error(message))


def _wants_json(request: Request) -> bool:
    return request.url.path.startswith(JSON_PATH_PREFIXES)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if _wants_json(request):
        return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)
    match exc.status_code:
        case 404:
            return render_error(request, PAGE_NOT_FOUND)
        case 401:
            return render_error(request, UNAUTHORISED)
        case 403:
            return render_error(request, FORBIDDEN)
    return render_error(
        request,
        ErrorView(exc.status_code, str(exc.detail), "Please try again later."),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    logger.exception(f"Unhandled error serving {request.method} {request.url.path}: {exc}")
    if _wants_json(request):
        return JSONResponse({"error": "Internal Server Error"}, status_code=500)
    return render_error(request, server_error("Please try again later."))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
