"""Tests for the POST /shorten endpoint."""

import pytest
from fastapi.testclient import TestClient

from shortener.core.digest import derive_id
from shortener.main import create_app
from tests.utils import FailingStore


@pytest.mark.api
class TestShortenEndpoint:

    def test_shorten_returns_created_link(self, client):
        response = client.post("/shorten", json={"url": "https://example.com"})

        assert response.status_code == 201
        assert response.json() == {"short_url": "http://testserver/r/c984d06a"}

    def test_short_url_path_ends_with_derived_id(self, client):
        url = "https://www.google.com/search?q=golang+projects"

        short_url = client.post("/shorten", json={"url": url}).json()["short_url"]

        assert short_url.rsplit("/", 1)[-1] == derive_id(url) == "3d6a2e60"

    def test_shorten_twice_stores_one_mapping(self, client, memory_store):
        first = client.post("/shorten", json={"url": "https://example.com"})
        second = client.post("/shorten", json={"url": "https://example.com"})

        assert first.status_code == second.status_code == 201
        assert first.json() == second.json()
        assert len(memory_store) == 1

    def test_forwarded_proto_https(self, client):
        response = client.post(
            "/shorten",
            json={"url": "https://example.com"},
            headers={"X-Forwarded-Proto": "https"},
        )

        assert response.json()["short_url"] == "https://testserver/r/c984d06a"

    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"Content-Type": "application/x-www-form-urlencoded"},
            {"Content-Type": "text/plain"},
        ],
    )
    def test_json_body_is_read_whatever_the_content_type(self, client, memory_store, headers):
        response = client.post("/shorten", content=b'{"url": "https://example.com"}', headers=headers)

        assert response.status_code == 201
        assert response.json() == {"short_url": "http://testserver/r/c984d06a"}
        assert len(memory_store) == 1

    def test_empty_url_is_stored(self, client):
        response = client.post("/shorten", json={"url": ""})
        redirect = client.get("/r/d41d8cd9", follow_redirects=False)

        assert response.status_code == 201
        assert response.json()["short_url"] == "http://testserver/r/d41d8cd9"
        assert redirect.status_code == 302
        assert redirect.headers["location"] == ""

    @pytest.mark.parametrize(
        "body, content_type",
        [
            (b"not json", "application/json"),
            (b"{\"url\": ", "application/json"),
            (b"https://example.com", "text/plain"),
            (b"[\"https://example.com\"]", "application/json"),
            (b"{}", "application/json"),
            (b"{\"link\": \"https://example.com\"}", "application/json"),
            (b"{\"url\": 42}", "application/json"),
            (b"{\"url\": null}", "application/json"),
            (b"", "application/json"),
        ],
    )
    def test_malformed_body_is_rejected(self, client, memory_store, body, content_type):
        response = client.post("/shorten", content=body, headers={"Content-Type": content_type})

        assert response.status_code == 400
        assert "url" in response.json()["detail"]
        assert len(memory_store) == 0

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
    def test_only_post_is_allowed(self, client, method):
        response = client.request(method, "/shorten")

        assert response.status_code == 405

    def test_storage_failure_is_opaque_500(self, test_settings):
        app = create_app(test_settings, store=FailingStore())

        with TestClient(app) as client:
            response = client.post("/shorten", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        assert "db.internal" not in response.text

    def test_configured_base_url_and_prefix(self, memory_store):
        from shortener.core.config import EnvironmentType, Settings, StoreBackend

        config = Settings(
            ENVIRONMENT=EnvironmentType.TESTING,
            STORE_BACKEND=StoreBackend.MEMORY,
            BASE_URL="https://sho.rt/",
            REDIRECT_PREFIX="s",
        )

        with TestClient(create_app(config, store=memory_store)) as client:
            response = client.post("/shorten", json={"url": "https://example.com"})
            redirect = client.get("/s/c984d06a", follow_redirects=False)

        assert response.json()["short_url"] == "https://sho.rt/s/c984d06a"
        assert redirect.status_code == 302

    def test_response_carries_request_id(self, client):
        response = client.post("/shorten", json={"url": "https://example.com"})

        assert response.headers["X-Request-ID"]
