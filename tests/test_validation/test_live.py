import pytest
import requests

from src.selenium_ops import serve_directory
from src.site.seo import page_paths
from src.validation.live import check_live_site, fetch


class _Response:
    def __init__(self, status_code, content_type):
        self.status_code = status_code
        self.headers = {"Content-Type": content_type}


class FakeSession:
    """Answers from a route table; unknown URLs raise a connection error."""

    def __init__(self, responses):
        self.responses = responses
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        if url not in self.responses:
            raise requests.ConnectionError(f"connection refused: {url}")
        return _Response(*self.responses[url])


def test_served_build_passes(built_site, site_data):
    with serve_directory(built_site) as base_url:
        results = check_live_site(base_url, page_paths(site_data))

    assert results["issues"] == []
    assert set(results["checks"]) == set(page_paths(site_data)) | {"/sitemap-index.xml", "/robots.txt"}
    assert all(c["status"] == 200 for c in results["checks"].values())


def test_served_build_missing_route(built_site):
    with serve_directory(built_site) as base_url:
        results = check_live_site(base_url, ["/", "/plumbers/crayford-drain-doctors"])

    assert results["issues"] == ["/plumbers/crayford-drain-doctors: HTTP 404"]


def test_serve_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        with serve_directory(tmp_path / "dist"):
            pass


def test_fetch_network_error():
    result = fetch(FakeSession({}), "https://down.example/")
    assert result["status"] is None
    assert "connection refused" in result["error"]
    assert not result["pass"]


def test_html_route_needs_html_content_type():
    session = FakeSession({
        "https://site.example/": (200, "application/octet-stream"),
        "https://site.example/sitemap-index.xml": (200, "application/xml"),
        "https://site.example/robots.txt": (200, "text/plain"),
    })
    results = check_live_site("https://site.example/", ["/"], session=session)

    assert results["issues"] == ["/: unexpected content type 'application/octet-stream'"]
    assert session.requested[0] == "https://site.example/"


def test_slow_homepage_warns(monkeypatch):
    monkeypatch.setattr("src.validation.live.SLOW_PAGE_SECONDS", -1)
    session = FakeSession({
        "https://site.example/": (200, "text/html; charset=utf-8"),
        "https://site.example/sitemap-index.xml": (200, "application/xml"),
        "https://site.example/robots.txt": (200, "text/plain"),
    })
    results = check_live_site("https://site.example", ["/"], session=session)

    assert results["pass"]
    assert results["warnings"] and results["warnings"][0].startswith("Homepage took")
