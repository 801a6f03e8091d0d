"""Home page: request a new code review."""

import logging

import httpx
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ..schemas import StandardSet
from ..services.api_client import CodeReviewApiClient
from ..services.form_validation import FormErrors, validate_code_review_form
from ..templating import render
from .deps import get_api_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["home"])

HEADING = "Generate Code Review"


async def _list_standard_sets(client: CodeReviewApiClient) -> list[StandardSet]:
    """Standard sets for the form. An API failure leaves the list empty."""
    try:
        return await client.list_standard_sets()
    except httpx.HTTPError as e:
        logger.error(
            f"Error fetching standard sets for home page from "
            f"{client.url_for('/standard-sets')}: {e!r}"
        )
        return []


def _render_home(
    request: Request,
    standard_sets: list[StandardSet],
    repository_url: str = "",
    selected: list[str] | None = None,
    errors: FormErrors | None = None,
) -> HTMLResponse:
    return render(
        request,
        "home/index.html",
        {
            "page_title": "Home",
            "heading": HEADING,
            "values": {
                "repository_url": repository_url,
                "standard_sets": selected or [],
            },
            "errors": errors,
            "standard_sets": standard_sets,
        },
    )


@router.get("/", response_class=HTMLResponse)
async def get_home(
    request: Request,
    client: CodeReviewApiClient = Depends(get_api_client),
) -> HTMLResponse:
    """Show the code review request form."""
    logger.info(f"Fetching standard sets from: {client.url_for('/standard-sets')}")
    standard_sets = await _list_standard_sets(client)
    return _render_home(request, standard_sets)


@router.post("/", response_class=HTMLResponse)
async def post_home(
    request: Request,
    repository_url: str = Form(""),
    standard_sets: list[str] = Form([]),
    client: CodeReviewApiClient = Depends(get_api_client),
) -> Response:
    """Create a code review and redirect to it."""
    repository_url = repository_url.strip()

    errors = validate_code_review_form(repository_url)
    if errors:
        return _render_home(
            request,
            await _list_standard_sets(client),
            repository_url,
            standard_sets,
            errors,
        )

    endpoint = client.url_for("/code-reviews")
    logger.info(
        f"Creating code review at: {endpoint} "
        f"(repository_url={repository_url}, standard_sets={len(standard_sets)})"
    )
    try:
        review = await client.create_code_review(repository_url, standard_sets)
    except httpx.HTTPError as e:
        logger.error(
            f"Error creating code review at {endpoint}: {e!r} "
            f"(repository_url={repository_url}, standard_sets={len(standard_sets)})"
        )
        errors = FormErrors()
        errors.add("repository_url", "Error creating code review. Please try again.")
        return _render_home(
            request,
            await _list_standard_sets(client),
            repository_url,
            standard_sets,
            errors,
        )

    return RedirectResponse(f"/code-reviews/{review.id}", status_code=302)
