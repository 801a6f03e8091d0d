"""Tests for code review pages and status endpoints."""

import httpx


def test_list_code_reviews(client, fake_api, review_factory):
    fake_api.on(
        "GET",
        "/code-reviews",
        json_body=[review_factory("r1", "completed"), review_factory("r2", "in_progress")],
    )

    response = client.get("/code-reviews")

    assert response.status_code == 200
    assert 'href="/code-reviews/r1"' in response.text
    assert "5 March 2024 at 1:05pm" in response.text
    assert "5 March 2024 at 2:30pm" in response.text
    assert 'id="status-r1"' in response.text
    assert 'data-review-id="r2"' in response.text
    assert "govuk-tag--green" in response.text
    assert "In Progress" in response.text


def test_list_polls_only_in_flight_tags(client, fake_api, review_factory):
    fake_api.on(
        "GET",
        "/code-reviews",
        json_body=[review_factory("r1", "completed"), review_factory("r2", "pending")],
    )

    response = client.get("/code-reviews")

    assert 'hx-get="/code-reviews/r2/status-tag"' in response.text
    assert 'hx-get="/code-reviews/r1/status-tag"' not in response.text
    assert 'hx-trigger="every 10s"' in response.text


def test_list_code_reviews_empty(client, fake_api):
    fake_api.on("GET", "/code-reviews", json_body=[])

    response = client.get("/code-reviews")

    assert response.status_code == 200
    assert "No code reviews yet" in response.text


def test_list_code_reviews_api_down(client, fake_api):
    fake_api.on("GET", "/code-reviews", error=httpx.ConnectError("connection refused"))

    response = client.get("/code-reviews")

    assert response.status_code == 500
    assert "Sorry, there is a problem with the service" in response.text
    assert "Unable to fetch code reviews. Please try again later." in response.text
    assert "connection refused" not in response.text


def test_list_code_reviews_forbidden(client, fake_api):
    fake_api.on("GET", "/code-reviews", status_code=403, json_body={"message": "nope"})

    response = client.get("/code-reviews")

    assert response.status_code == 403
    assert "You do not have permission to view this page" in response.text


def test_list_code_reviews_unauthorised(client, fake_api):
    fake_api.on("GET", "/code-reviews", status_code=401, json_body={})

    response = client.get("/code-reviews")

    assert response.status_code == 401
    assert "You need to sign in to view this page" in response.text


def test_code_review_detail(client, fake_api, review_factory):
    fake_api.on(
        "GET",
        "/code-reviews/r1",
        json_body=review_factory(
            "r1",
            "completed",
            compliance_reports=[
                {"_id": "c1", "standard_set_name": "Python", "report": "## Findings\n\n- **All good**"}
            ],
        ),
    )

    response = client.get("/code-reviews/r1")

    assert response.status_code == 200
    assert "https://github.com/example/repo" in response.text
    assert "Completed" in response.text
    assert "Python" in response.text
    assert "<h2>Findings</h2>" in response.text
    assert "<strong>All good</strong>" in response.text


def test_code_review_detail_in_flight(client, fake_api, review_factory):
    fake_api.on("GET", "/code-reviews/r1", json_body=review_factory("r1", "started"))

    response = client.get("/code-reviews/r1")

    assert response.status_code == 200
    assert 'hx-get="/code-reviews/r1/status-tag"' in response.text
    assert "The review is still running" in response.text


def test_code_review_not_found(client, fake_api):
    fake_api.on("GET", "/code-reviews/missing", status_code=404, json_body={"message": "Not found"})

    response = client.get("/code-reviews/missing")

    assert response.status_code == 404
    assert "The code review you are looking for does not exist. This may be because:" in response.text
    assert "the link you followed is incorrect or out of date" in response.text
    assert "the code review has been deleted" in response.text
    assert "the code review ID was typed incorrectly" in response.text


def test_status_tag_partial(client, fake_api, review_factory):
    fake_api.on("GET", "/code-reviews/r1", json_body=review_factory("r1", "failed"))

    response = client.get("/code-reviews/r1/status-tag")

    assert response.status_code == 200
    assert response.text.startswith("<strong")
    assert "govuk-tag--red" in response.text
    assert 'aria-label="Status: Failed"' in response.text
    assert "hx-get" not in response.text
    assert "<html" not in response.text


def test_status_tag_partial_keeps_polling_while_in_flight(client, fake_api, review_factory):
    fake_api.on("GET", "/code-reviews/r1", json_body=review_factory("r1", "in_progress"))

    response = client.get("/code-reviews/r1/status-tag")

    assert 'hx-get="/code-reviews/r1/status-tag"' in response.text
    assert ">In Progress</strong>" in response.text


def test_status_tag_partial_failure_is_not_swapped(client, fake_api):
    fake_api.on("GET", "/code-reviews/r1", error=httpx.ReadTimeout("timed out"))

    response = client.get("/code-reviews/r1/status-tag")

    assert response.status_code == 502
    assert response.text == ""


def test_status_json(client, fake_api, review_factory):
    fake_api.on("GET", "/code-reviews/r1", json_body=review_factory("r1", "in_progress"))

    response = client.get("/api/code-reviews/r1/status")

    assert response.status_code == 200
    assert response.json() == {"id": "r1", "status": "in_progress"}


def test_status_json_not_found(client, fake_api):
    fake_api.on("GET", "/code-reviews/r1", status_code=404, json_body={})

    response = client.get("/api/code-reviews/r1/status")

    assert response.status_code == 404
    assert response.json() == {"error": "Failed to fetch status"}


def test_status_json_api_down(client, fake_api):
    fake_api.on("GET", "/code-reviews/r1", error=httpx.ConnectError("connection refused"))

    response = client.get("/api/code-reviews/r1/status")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch status"}
