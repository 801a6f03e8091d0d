"""Manage standard sets and classifications."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ..schemas import Classification, StandardSet, StandardSetCreate
from ..services.api_client import CodeReviewApiClient
from ..services.form_validation import (
    FormErrors,
    validate_classification_form,
    validate_standard_set_form,
)
from ..templating import render
from .deps import get_api_client
from .errors import render_upstream_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/standards", tags=["standards"])

STANDARD_SETS_PATH = "/standards/standard-sets"
CREATE_STANDARD_SET_PATH = "/standards/standard-sets/create"
CLASSIFICATIONS_PATH = "/standards/classifications"

CREATE_STANDARD_SET_FAILED = "Unable to create standard set. Please try again later."

StandardSetFormRenderer = Callable[[FormErrors, int], Awaitable[HTMLResponse]]


def _error_body(response: httpx.Response) -> dict[str, Any]:
    """Parsed JSON error body, or empty if the API didn't send JSON."""
    try:
        body = response.json()
    except ValueError:
        logger.error(f"Failed to parse API response: {response.text[:500]!r}")
        return {}
    return body if isinstance(body, dict) else {}


# Standard sets


async def _safe_list_standard_sets(client: CodeReviewApiClient) -> list[StandardSet]:
    try:
        return await client.list_standard_sets()
    except httpx.HTTPError as e:
        logger.error(
            f"Error fetching standard sets from {client.url_for('/standard-sets')}: {e!r}"
        )
        return []


def _render_standard_sets(
    request: Request,
    standard_sets: list[StandardSet],
    errors: FormErrors | None = None,
    values: StandardSetCreate | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return render(
        request,
        "standards/standard_sets/index.html",
        {
            "page_title": "Manage Standard Sets",
            "standard_sets": standard_sets,
            "errors": errors,
            "values": values,
        },
        status_code=status_code,
    )


@router.get("/standard-sets", response_class=HTMLResponse)
async def get_standard_sets(
    request: Request,
    client: CodeReviewApiClient = Depends(get_api_client),
) -> HTMLResponse:
    """List standard sets."""
    endpoint = client.url_for("/standard-sets")
    logger.info(f"Fetching standard sets from: {endpoint}")
    try:
        standard_sets = await client.list_standard_sets()
    except httpx.HTTPError as e:
        logger.error(f"Error fetching standard sets from {endpoint}: {e!r}")
        return render_upstream_error(
            request, e, "Unable to fetch standard sets. Please try again later."
        )
    return _render_standard_sets(request, standard_sets)


def _render_create_page(
    request: Request,
    errors: FormErrors | None = None,
    values: StandardSetCreate | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return render(
        request,
        "standards/standard_sets/create.html",
        {
            "page_title": "Add Standard Set",
            "form_action": CREATE_STANDARD_SET_PATH,
            "errors": errors,
            "values": values,
        },
        status_code=status_code,
    )


async def _submit_standard_set(
    client: CodeReviewApiClient,
    data: StandardSetCreate,
    render_form: StandardSetFormRenderer,
) -> Response:
    """Validate and create a standard set, re-rendering ``render_form`` on errors."""
    errors = validate_standard_set_form(data.name, data.repository_url)
    if errors:
        return await render_form(errors, 400)

    endpoint = client.url_for("/standard-sets")
    logger.info(f"Creating standard set at: {endpoint} (name={data.name})")
    try:
        await client.create_standard_set(data)
    except httpx.HTTPStatusError as e:
        body = _error_body(e.response)
        logger.error(
            f"Failed to create standard set at {endpoint}: "
            f"status={e.response.status_code} error={body.get('message', 'Unknown error')} "
            f"data={data.model_dump()}"
        )
        api_errors = FormErrors.from_api(body.get("errors"))
        if e.response.status_code == 400 and api_errors:
            return await render_form(api_errors, 400)
        return await render_form(
            FormErrors.general(body.get("message") or CREATE_STANDARD_SET_FAILED), 400
        )
    except httpx.RequestError as e:
        logger.error(
            f"Error creating standard set at {endpoint}: {e!r} data={data.model_dump()}"
        )
        return await render_form(FormErrors.general(CREATE_STANDARD_SET_FAILED), 500)

    return RedirectResponse(STANDARD_SETS_PATH, status_code=302)


def _standard_set_data(name: str, repository_url: str, custom_prompt: str) -> StandardSetCreate:
    return StandardSetCreate(
        name=name.strip(),
        repository_url=repository_url.strip(),
        custom_prompt=custom_prompt,
    )


@router.get("/standard-sets/create", response_class=HTMLResponse)
async def show_create_standard_set(request: Request) -> HTMLResponse:
    """Standalone form for adding a standard set."""
    return _render_create_page(request)


@router.post("/standard-sets/create", response_class=HTMLResponse)
async def create_standard_set_from_page(
    request: Request,
    name: str = Form(""),
    repository_url: str = Form(""),
    custom_prompt: str = Form(""),
    client: CodeReviewApiClient = Depends(get_api_client),
) -> Response:
    """Create a standard set from the standalone form; errors stay on that page."""
    data = _standard_set_data(name, repository_url, custom_prompt)

    async def render_form(errors: FormErrors, status_code: int) -> HTMLResponse:
        return _render_create_page(request, errors, data, status_code=status_code)

    return await _submit_standard_set(client, data, render_form)


@router.post("/standard-sets", response_class=HTMLResponse)
async def create_standard_set(
    request: Request,
    name: str = Form(""),
    repository_url: str = Form(""),
    custom_prompt: str = Form(""),
    client: CodeReviewApiClient = Depends(get_api_client),
) -> Response:
    """Create a standard set from the form on the list page."""
    data = _standard_set_data(name, repository_url, custom_prompt)

    async def render_form(errors: FormErrors, status_code: int) -> HTMLResponse:
        return _render_standard_sets(
            request,
            await _safe_list_standard_sets(client),
            errors,
            data,
            status_code=status_code,
        )

    return await _submit_standard_set(client, data, render_form)


@router.post("/standard-sets/{standard_set_id}/delete")
async def delete_standard_set(
    request: Request,
    standard_set_id: str,
    client: CodeReviewApiClient = Depends(get_api_client),
) -> Response:
    """Delete a standard set and return to the list."""
    endpoint = client.url_for(f"/standard-sets/{standard_set_id}")
    logger.info(f"Deleting standard set at: {endpoint}")
    try:
        await client.delete_standard_set(standard_set_id)
    except httpx.HTTPError as e:
        logger.error(f"Error deleting standard set {standard_set_id} at {endpoint}: {e!r}")
        return render_upstream_error(
            request, e, "Unable to delete standard set. Please try again later."
        )
    return RedirectResponse(STANDARD_SETS_PATH, status_code=302)


# Classifications


async def _safe_list_classifications(client: CodeReviewApiClient) -> list[Classification]:
    try:
        return await client.list_classifications()
    except httpx.HTTPError as e:
        logger.error(
            f"Error fetching classifications from {client.url_for('/classifications')}: {e!r}"
        )
        return []


@router.get("/classifications", response_class=HTMLResponse)
async def get_classifications(
    request: Request,
    client: CodeReviewApiClient = Depends(get_api_client),
) -> HTMLResponse:
    """List classifications."""
    endpoint = client.url_for("/classifications")
    logger.info(f"Fetching classifications from: {endpoint}")
    try:
        classifications = await client.list_classifications()
    except httpx.HTTPError as e:
        logger.error(f"Error fetching classifications from {endpoint}: {e!r}")
        return render_upstream_error(
            request, e, "Unable to fetch classifications. Please try again later."
        )
    return render(
        request,
        "standards/classifications/index.html",
        {
            "page_title": "Manage Classifications",
            "classifications": classifications,
            "errors": None,
            "values": None,
        },
    )


@router.post("/classifications", response_class=HTMLResponse)
async def create_classification(
    request: Request,
    name: str = Form(""),
    client: CodeReviewApiClient = Depends(get_api_client),
) -> Response:
    """Create a classification from the form."""
    name = name.strip()
    errors = validate_classification_form(name)
    if errors:
        return render(
            request,
            "standards/classifications/index.html",
            {
                "page_title": "Manage Classifications",
                "classifications": await _safe_list_classifications(client),
                "errors": errors,
                "values": {"name": name},
            },
            status_code=400,
        )

    endpoint = client.url_for("/classifications")
    logger.info(f"Creating classification at: {endpoint} (name={name})")
    try:
        await client.create_classification(name)
    except httpx.HTTPError as e:
        logger.error(f"Error creating classification at {endpoint}: {e!r} data={{'name': {name!r}}}")
        return render_upstream_error(
            request, e, "Unable to create classification. Please try again later."
        )
    return RedirectResponse(CLASSIFICATIONS_PATH, status_code=302)


@router.post("/classifications/{classification_id}/delete")
async def delete_classification(
    request: Request,
    classification_id: str,
    client: CodeReviewApiClient = Depends(get_api_client),
) -> Response:
    """Delete a classification and return to the list."""
    endpoint = client.url_for(f"/classifications/{classification_id}")
    logger.info(f"Deleting classification at: {endpoint}")
    try:
        await client.delete_classification(classification_id)
    except httpx.HTTPError as e:
        logger.error(
            f"Error deleting classification {classification_id} at {endpoint}: {e!r}"
        )
        return render_upstream_error(
            request, e, "Unable to delete classification. Please try again later."
        )
    return RedirectResponse(CLASSIFICATIONS_PATH, status_code=302)
