"""
Tests for the FastAPI docs server.
"""
import pytest
from fastapi.testclient import TestClient

from discodocs import main
from discodocs.config import settings
from discodocs.discovery import DirectoryItem
from discodocs.errors import FetchError, InvalidDiscoveryDocument, OriginNotAllowed

BOOKS_URL = "https://www.googleapis.com/discovery/v1/apis/books/v1/rest"


@pytest.fixture
def client():
    return TestClient(main.app)


@pytest.fixture
def serve_books(monkeypatch, books):
    requested = []

    def fake_load(url, client=None):
        requested.append(url)
        return books

    monkeypatch.setattr(main, "load_discovery", fake_load)
    return requested


def _raise(exc):
    def fake_load(url, client=None):
        raise exc

    return fake_load


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


class TestDiscoveryUrl:
    def test_required_without_default(self, client, monkeypatch):
        monkeypatch.setattr(settings, "default_discovery_url", None)
        r = client.get("/api/reference")
        assert r.status_code == 400
        assert "discovery_url is required" in r.json()["detail"]

    def test_must_be_http(self, client):
        r = client.get("/api/reference", params={"discovery_url": "file:///etc/passwd"})
        assert r.status_code == 400

    @pytest.mark.parametrize("url", ["https://", "http:///books/v1/rest"])
    def test_url_without_host(self, client, monkeypatch, url):
        monkeypatch.setattr(main, "load_discovery", _raise(AssertionError("must not load")))
        r = client.get("/api/reference", params={"discovery_url": url})
        assert r.status_code == 400
        assert "valid http or https URL" in r.json()["detail"]

    def test_url_without_host_with_allow_list(self, client, monkeypatch):
        monkeypatch.setattr(settings, "allowed_discovery_origins", ["https://www.googleapis.com"])
        assert client.get("/api/reference", params={"discovery_url": "https://"}).status_code == 400

    def test_default_url(self, client, monkeypatch, serve_books):
        monkeypatch.setattr(settings, "default_discovery_url", BOOKS_URL)
        assert client.get("/api/mkdocs").status_code == 200
        assert serve_books == [BOOKS_URL]

    @pytest.mark.parametrize(
        "exc, status",
        [
            (OriginNotAllowed(BOOKS_URL), 403),
            (FetchError("boom"), 502),
            (InvalidDiscoveryDocument("bad"), 502),
        ],
    )
    def test_load_errors(self, client, monkeypatch, exc, status):
        monkeypatch.setattr(main, "load_discovery", _raise(exc))
        r = client.get("/api/reference", params={"discovery_url": BOOKS_URL})
        assert r.status_code == status


class TestDocsEndpoints:
    def test_reference(self, client, serve_books):
        r = client.get("/api/reference", params={"discovery_url": BOOKS_URL})
        assert r.status_code == 200
        data = r.json()
        assert data["name"] == "books"
        assert "overview_summary" not in data

    def test_reference_with_overview(self, client, serve_books, monkeypatch):
        monkeypatch.setattr(main, "generate_overview_summary", lambda desc, key: "About books.")
        data = client.get("/api/reference", params={"discovery_url": BOOKS_URL}).json()
        assert data["overview_summary"] == "About books."

    def test_mkdocs(self, client, serve_books):
        r = client.get("/api/mkdocs", params={"discovery_url": BOOKS_URL})
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("application/yaml")
        assert r.text.startswith("site_name: books v")

    def test_readme_kinds(self, client, serve_books):
        api = client.get("/api/readme", params={"discovery_url": BOOKS_URL})
        cli = client.get("/api/readme", params={"discovery_url": BOOKS_URL, "kind": "cli"})
        assert "`google-books1` library" in api.text
        assert "command-line interface" in cli.text
        assert client.get("/api/readme", params={"discovery_url": BOOKS_URL, "kind": "html"}).status_code == 422

    def test_method_page(self, client, serve_books):
        r = client.get("/api/pages/books.bookshelves.get", params={"discovery_url": BOOKS_URL})
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/markdown")
        assert "# Required Scalar Arguments" in r.text

    def test_unknown_method_page(self, client, serve_books):
        r = client.get("/api/pages/books.nope", params={"discovery_url": BOOKS_URL})
        assert r.status_code == 404

    def test_html_reference(self, client, serve_books):
        r = client.get("/docs", params={"discovery_url": BOOKS_URL})
        assert r.status_code == 200
        assert "text/html" in r.headers["content-type"]
        assert "Books API - API Reference" in r.text
        assert "SwaggerUIBundle" not in r.text

    def test_no_swagger_route_shadows_docs(self):
        paths = [getattr(route, "path", None) for route in main.app.routes]
        assert paths.count("/docs") == 1


class TestExamples:
    def test_template_example(self, client, serve_books):
        r = client.post(
            "/api/examples",
            json={"method_id": "books.bookshelves.get", "style": "cli", "discovery_url": BOOKS_URL},
        )
        assert r.status_code == 200
        assert r.json()["code"].startswith("books1 bookshelves get")

    def test_bad_style(self, client, serve_books):
        r = client.post("/api/examples", json={"method_id": "books.bookshelves.get", "style": "cobol"})
        assert r.status_code == 400

    def test_unknown_method(self, client, serve_books):
        r = client.post("/api/examples", json={"method_id": "books.nope", "discovery_url": BOOKS_URL})
        assert r.status_code == 404


class TestDirectory:
    def test_list(self, client, monkeypatch):
        seen = {}

        def fake_directory(preferred_only=False):
            seen["preferred"] = preferred_only
            return [DirectoryItem(name="books", version="v1", title="Books API", preferred=True)]

        monkeypatch.setattr(main, "fetch_directory", fake_directory)
        r = client.get("/api/apis", params={"preferred": "true"})
        assert r.status_code == 200
        assert r.json()["items"][0]["name"] == "books"
        assert seen["preferred"] is True

    def test_fetch_error(self, client, monkeypatch):
        def fake_directory(preferred_only=False):
            raise FetchError("down")

        monkeypatch.setattr(main, "fetch_directory", fake_directory)
        assert client.get("/api/apis").status_code == 502
