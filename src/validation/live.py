"""Smoke-test a served copy of the site over HTTP."""

from __future__ import annotations

import time

import requests

from src.config import HTTP_TIMEOUT, ROBOTS_TXT, SITEMAP_INDEX, SLOW_PAGE_SECONDS


def fetch(session: requests.Session, url: str) -> dict:
    """GET one URL; network errors become a failed result instead of raising."""
    start = time.monotonic()
    try:
        resp = session.get(url, timeout=HTTP_TIMEOUT)
    except requests.RequestException as e:
        return {"url": url, "status": None, "error": str(e), "seconds": None, "pass": False}
    elapsed = round(time.monotonic() - start, 3)
    return {
        "url": url,
        "status": resp.status_code,
        "content_type": resp.headers.get("Content-Type", ""),
        "seconds": elapsed,
        "pass": resp.status_code == 200,
    }


def check_live_site(base_url: str, routes: list[str], session: requests.Session | None = None) -> dict:
    """Fetch every page route plus the sitemap index and robots.txt.

    HTML routes must answer 200 with a text/html content type.
    """
    base = base_url.rstrip("/")
    own_session = session is None
    session = session or requests.Session()

    checks: dict[str, dict] = {}
    issues = []
    warnings = []
    try:
        for route in routes:
            result = fetch(session, base + route)
            if result["pass"] and "text/html" not in result["content_type"]:
                result["pass"] = False
                result["error"] = f"unexpected content type {result['content_type']!r}"
            checks[route] = result

        for name in (SITEMAP_INDEX, ROBOTS_TXT):
            checks[f"/{name}"] = fetch(session, f"{base}/{name}")
    finally:
        if own_session:
            session.close()

    for route, result in checks.items():
        if not result["pass"]:
            issues.append(f"{route}: {result.get('error') or 'HTTP ' + str(result['status'])}")

    home = checks.get("/")
    if home and home["seconds"] is not None and home["seconds"] > SLOW_PAGE_SECONDS:
        warnings.append(f"Homepage took {home['seconds']}s (target under {SLOW_PAGE_SECONDS}s)")

    print(f"  Live check: {sum(c['pass'] for c in checks.values())}/{len(checks)} URLs OK at {base}")
    return {"base_url": base, "checks": checks, "issues": issues, "warnings": warnings, "pass": not issues}
