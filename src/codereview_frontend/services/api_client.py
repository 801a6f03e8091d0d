"""Async client for the code review REST API."""

from typing import Any

import httpx

from ..schemas import (
    Classification,
    CodeReview,
    CodeReviewCreate,
    StandardSet,
    StandardSetCreate,
)


class CodeReviewApiClient:
    """Async client for the code review REST API.

    Non-2xx responses raise ``httpx.HTTPStatusError``; transport failures
    raise ``httpx.RequestError``. Callers decide which view to render.
    """

    API_PREFIX = "/api/v1"

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "CodeReviewApiClient":
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}{self.API_PREFIX}",
            headers={"Accept": "application/json"},
            timeout=self.timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()

    def url_for(self, path: str) -> str:
        """Full upstream URL for ``path``, for log context."""
        return f"{self.base_url}{self.API_PREFIX}{path}"

    # Code reviews

    async def list_code_reviews(self) -> list[CodeReview]:
        """List all code reviews."""
        assert self._client is not None
        response = await self._client.get("/code-reviews")
        response.raise_for_status()
        return [CodeReview.model_validate(r) for r in response.json()]

    async def get_code_review(self, review_id: str) -> CodeReview:
        """Get a single code review with its compliance reports."""
        assert self._client is not None
        response = await self._client.get(f"/code-reviews/{review_id}")
        response.raise_for_status()
        return CodeReview.model_validate(response.json())

    async def get_code_review_status(self, review_id: str) -> str:
        """Get just the current status string of a code review."""
        review = await self.get_code_review(review_id)
        return review.status

    async def create_code_review(
        self,
        repository_url: str,
        standard_sets: list[str] | None = None,
    ) -> CodeReview:
        """Request a new code review of ``repository_url``."""
        assert self._client is not None
        payload = CodeReviewCreate(
            repository_url=repository_url,
            standard_sets=standard_sets or [],
        )
        response = await self._client.post("/code-reviews", json=payload.model_dump())
        response.raise_for_status()
        return CodeReview.model_validate(response.json())

    # Standard sets

    async def list_standard_sets(self) -> list[StandardSet]:
        """List all standard sets."""
        assert self._client is not None
        response = await self._client.get("/standard-sets")
        response.raise_for_status()
        return [StandardSet.model_validate(s) for s in response.json()]

    async def create_standard_set(self, data: StandardSetCreate) -> dict[str, Any]:
        """Create a standard set. Returns the API's JSON body."""
        assert self._client is not None
        response = await self._client.post("/standard-sets", json=data.model_dump())
        response.raise_for_status()
        return response.json() if response.content else {}

    async def delete_standard_set(self, standard_set_id: str) -> None:
        """Delete a standard set."""
        assert self._client is not None
        response = await self._client.delete(f"/standard-sets/{standard_set_id}")
        response.raise_for_status()

    # Classifications

    async def list_classifications(self) -> list[Classification]:
        """List all classifications."""
        assert self._client is not None
        response = await self._client.get("/classifications")
        response.raise_for_status()
        return [Classification.model_validate(c) for c in response.json()]

    async def create_classification(self, name: str) -> dict[str, Any]:
        """Create a classification. Returns the API's JSON body."""
        assert self._client is not None
        response = await self._client.post("/classifications", json={"name": name})
        response.raise_for_status()
        return response.json() if response.content else {}

    async def delete_classification(self, classification_id: str) -> None:
        """Delete a classification."""
        assert self._client is not None
        response = await self._client.delete(f"/classifications/{classification_id}")
        response.raise_for_status()
