"""Code review list, detail and status routes."""

import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from ..schemas import ReviewStatusResponse
from ..services.api_client import CodeReviewApiClient
from ..services.formatters import format_review_status, format_reviews_for_table
from ..templating import render
from .deps import get_api_client
from .errors import REVIEW_NOT_FOUND, render_upstream_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["code-reviews"])


@router.get("/code-reviews", response_class=HTMLResponse)
async def list_code_reviews(
    request: Request,
    client: CodeReviewApiClient = Depends(get_api_client),
) -> HTMLResponse:
    """Table of all code reviews."""
    endpoint = client.url_for("/code-reviews")
    logger.info(f"Fetching code reviews from: {endpoint}")
    try:
        reviews = await client.list_code_reviews()
    except httpx.HTTPError as e:
        logger.error(f"Error fetching code reviews from {endpoint}: {e!r}")
        return render_upstream_error(
            request, e, "Unable to fetch code reviews. Please try again later."
        )

    return render(
        request,
        "code_reviews/index.html",
        {
            "page_title": "Code Reviews",
            "heading": "Code Reviews",
            "rows": format_reviews_for_table(reviews),
        },
    )


@router.get("/code-reviews/{review_id}", response_class=HTMLResponse)
async def code_review_detail(
    request: Request,
    review_id: str,
    client: CodeReviewApiClient = Depends(get_api_client),
) -> HTMLResponse:
    """Single code review with its compliance reports."""
    endpoint = client.url_for(f"/code-reviews/{review_id}")
    logger.info(f"Fetching code review from: {endpoint}")
    try:
        review = await client.get_code_review(review_id)
    except httpx.HTTPError as e:
        logger.error(f"Error fetching code review {review_id} from {endpoint}: {e!r}")
        return render_upstream_error(
            request,
            e,
            "Unable to fetch code review. Please try again later.",
            not_found=REVIEW_NOT_FOUND,
        )

    return render(
        request,
        "code_reviews/detail.html",
        {
            "page_title": "Code Review",
            "review": review,
            "status": format_review_status(review),
        },
    )


@router.get("/code-reviews/{review_id}/status-tag", response_class=HTMLResponse)
async def code_review_status_tag(
    request: Request,
    review_id: str,
    client: CodeReviewApiClient = Depends(get_api_client),
) -> Response:
    """
    Status tag partial polled by HTMX.

    On failure nothing is swapped in, so the tag on the page stays in
    flight and polling carries on.
    """
    try:
        review = await client.get_code_review(review_id)
    except httpx.HTTPError as e:
        logger.debug(f"Status tag refresh failed for review {review_id}: {e!r}")
        return Response(status_code=502)

    return render(
        request,
        "code_reviews/_status_tag.html",
        {"tag": format_review_status(review)},
    )


@router.get("/api/code-reviews/{review_id}/status", response_model=ReviewStatusResponse)
async def code_review_status(
    review_id: str,
    client: CodeReviewApiClient = Depends(get_api_client),
) -> ReviewStatusResponse | JSONResponse:
    """Current status of a code review as JSON."""
    endpoint = client.url_for(f"/code-reviews/{review_id}")
    try:
        status = await client.get_code_review_status(review_id)
    except httpx.HTTPStatusError as e:
        logger.error(f"Error fetching status of code review {review_id} from {endpoint}: {e!r}")
        code = 404 if e.response.status_code == 404 else 500
        return JSONResponse({"error": "Failed to fetch status"}, status_code=code)
    except httpx.RequestError as e:
        logger.error(f"Error fetching status of code review {review_id} from {endpoint}: {e!r}")
        return JSONResponse({"error": "Failed to fetch status"}, status_code=500)

    return ReviewStatusResponse(id=review_id, status=status)
