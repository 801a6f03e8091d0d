"""Tests for the code review API client."""

import httpx
import pytest
from codereview_frontend.schemas import StandardSetCreate


async def test_list_code_reviews(fake_api, api_client, review_factory):
    fake_api.on("GET", "/code-reviews", json_body=[review_factory("r1"), review_factory("r2")])

    async with api_client as api:
        reviews = await api.list_code_reviews()

    assert [r.id for r in reviews] == ["r1", "r2"]
    assert reviews[0].status == "pending"


async def test_get_code_review_with_reports(fake_api, api_client, review_factory):
    fake_api.on(
        "GET",
        "/code-reviews/r1",
        json_body=review_factory(
            "r1",
            "completed",
            compliance_reports=[
                {"_id": "c1", "standard_set_name": "Python", "report": "# OK", "extra": 1}
            ],
        ),
    )

    async with api_client as api:
        review = await api.get_code_review("r1")

    assert review.status == "completed"
    assert review.compliance_reports[0].standard_set_name == "Python"
    assert review.compliance_reports[0].report == "# OK"


async def test_get_code_review_status(fake_api, api_client, review_factory):
    fake_api.on("GET", "/code-reviews/r1", json_body=review_factory("r1", "in_progress"))

    async with api_client as api:
        assert await api.get_code_review_status("r1") == "in_progress"


async def test_create_code_review_posts_payload(fake_api, api_client, review_factory):
    fake_api.on("POST", "/code-reviews", status_code=201, json_body=review_factory("new-id"))

    async with api_client as api:
        review = await api.create_code_review("https://github.com/example/repo", ["s1"])

    assert review.id == "new-id"
    assert fake_api.last_json("POST", "/code-reviews") == {
        "repository_url": "https://github.com/example/repo",
        "standard_sets": ["s1"],
    }


async def test_non_2xx_raises_status_error(fake_api, api_client):
    fake_api.on("GET", "/standard-sets", status_code=503, json_body={"message": "down"})

    async with api_client as api:
        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await api.list_standard_sets()

    assert exc_info.value.response.status_code == 503


async def test_transport_error_propagates(fake_api, api_client):
    fake_api.on("GET", "/classifications", error=httpx.ConnectError("connection refused"))

    async with api_client as api:
        with pytest.raises(httpx.RequestError):
            await api.list_classifications()


async def test_create_standard_set_with_empty_body(fake_api, api_client):
    fake_api.on("POST", "/standard-sets", status_code=201)

    async with api_client as api:
        result = await api.create_standard_set(
            StandardSetCreate(name="Python", repository_url="https://github.com/example/std")
        )

    assert result == {}
    assert fake_api.last_json("POST", "/standard-sets") == {
        "name": "Python",
        "repository_url": "https://github.com/example/std",
        "custom_prompt": "",
    }


async def test_delete_classification(fake_api, api_client):
    fake_api.on("DELETE", "/classifications/c1", status_code=204)

    async with api_client as api:
        await api.delete_classification("c1")

    assert len(fake_api.calls("DELETE", "/classifications/c1")) == 1


def test_url_for_strips_trailing_slash():
    from codereview_frontend.services.api_client import CodeReviewApiClient

    client = CodeReviewApiClient("http://api.test/")
    assert client.url_for("/code-reviews") == "http://api.test/api/v1/code-reviews"
