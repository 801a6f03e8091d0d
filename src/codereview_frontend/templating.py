"""Jinja2 templates, filters and the shared page context."""

from pathlib import Path
from typing import Any

import markdown
from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from .services.formatters import format_date, format_status_text

# Templates directory
templates_dir = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))

NAVIGATION = (
    ("Generate review", "/"),
    ("Code reviews", "/code-reviews"),
    ("Standard sets", "/standards/standard-sets"),
    ("Classifications", "/standards/classifications"),
)


# Custom Jinja2 filters
def markdown_filter(text: str | None) -> Markup:
    """Render a markdown report body to HTML."""
    if not text:
        return Markup("")
    return Markup(markdown.markdown(text, extensions=["fenced_code", "tables"]))


# Register filters
templates.env.filters["format_date"] = format_date
templates.env.filters["format_status"] = format_status_text
templates.env.filters["markdown"] = markdown_filter


def build_navigation(request: Request) -> list[dict[str, Any]]:
    """Service navigation items with the current section marked active."""
    path = request.url.path
    items = []
    for text, href in NAVIGATION:
        if href == "/":
            active = path == "/"
        else:
            active = path == href or path.startswith(f"{href}/")
        items.append({"text": text, "href": href, "active": active})
    return items


def render(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    """Render ``name`` with the page context every template expects."""
    settings = request.app.state.settings
    page_context = {
        "service_name": settings.service_name,
        "navigation": build_navigation(request),
        "poll_interval": settings.status_poll_interval_seconds,
    }
    page_context.update(context or {})
    return templates.TemplateResponse(request, name, page_context, status_code=status_code)
