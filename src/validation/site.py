"""Verify a built output directory: artifacts on disk plus every page."""

from __future__ import annotations

import re
from pathlib import Path

from bs4 import BeautifulSoup

from src.config import PLUMBER_COUNT, ROBOTS_TXT, SITEMAP_INDEX
from src.models import SiteData
from src.site.seo import absolute_url, page_paths
from src.validation.checks import validate_page
from src.validation.report import compute_grade


def route_to_file(out: Path, route: str) -> Path:
    """'/' -> out/index.html, '/plumbers/x' -> out/plumbers/x/index.html"""
    rel = route.strip("/")
    return out / rel / "index.html" if rel else out / "index.html"


def check_output_dir(out: Path) -> dict:
    exists = out.is_dir()
    entries = sorted(p.name for p in out.iterdir()) if exists else []
    return {"exists": exists, "entries": len(entries), "pass": exists and bool(entries)}


def check_detail_pages(out: Path, slugs: list[str]) -> dict:
    missing = [s for s in slugs if not (out / "plumbers" / s / "index.html").is_file()]
    plumbers_dir = out / "plumbers"
    dirs = sorted(p.name for p in plumbers_dir.iterdir() if p.is_dir()) if plumbers_dir.is_dir() else []
    extra = [d for d in dirs if d not in slugs]
    return {
        "missing": missing,
        "extra": extra,
        "dir_count": len(dirs),
        "pass": not missing and not extra and len(dirs) == PLUMBER_COUNT,
    }


def _locs(xml: str) -> list[str]:
    return [loc.get_text(strip=True) for loc in BeautifulSoup(xml, "html.parser").find_all("loc")]


def check_sitemaps(out: Path, expected_urls: list[str]) -> dict:
    """The index must reference sitemap files that together list every page."""
    index_path = out / SITEMAP_INDEX
    if not index_path.is_file():
        return {"exists": False, "sitemaps": [], "missing_urls": expected_urls, "pass": False}

    index = index_path.read_text(encoding="utf-8")
    sitemaps = [loc for loc in _locs(index) if re.search(r"sitemap.*\.xml$", loc)]

    listed: list[str] = []
    unreadable = []
    for loc in sitemaps:
        path = out / loc.rstrip("/").split("/")[-1]
        if path.is_file():
            listed.extend(_locs(path.read_text(encoding="utf-8")))
        else:
            unreadable.append(loc)

    missing = [u for u in expected_urls if u not in listed]
    return {
        "exists": True,
        "is_xml": index.startswith("<?xml"),
        "sitemaps": sitemaps,
        "unreadable": unreadable,
        "url_count": len(listed),
        "missing_urls": missing,
        "pass": index.startswith("<?xml") and bool(sitemaps) and not unreadable and not missing,
    }


def check_robots(out: Path, origin: str = "") -> dict:
    """robots.txt needs a User-agent and a Sitemap line for the index.

    `origin_matches` is False when the Sitemap line points at another host
    than the build origin (a warning, not a failure).
    """
    path = out / ROBOTS_TXT
    if not path.is_file():
        return {"exists": False, "pass": False}
    content = path.read_text(encoding="utf-8")
    has_agent = "User-agent:" in content
    sitemap_lines = [l for l in content.splitlines() if l.lower().startswith("sitemap:")]
    references_index = any(SITEMAP_INDEX in l for l in sitemap_lines)
    expected = absolute_url(origin, SITEMAP_INDEX) if origin else None
    origin_matches = expected is None or any(l.split(":", 1)[1].strip() == expected for l in sitemap_lines)
    return {
        "exists": True,
        "has_user_agent": has_agent,
        "sitemap_lines": sitemap_lines,
        "expected_sitemap": expected,
        "origin_matches": origin_matches,
        "pass": has_agent and references_index,
    }


def check_unique_titles(titles: dict[str, str]) -> dict:
    seen: dict[str, list[str]] = {}
    for route, title in titles.items():
        seen.setdefault(title.strip().lower(), []).append(route)
    duplicates = {t: routes for t, routes in seen.items() if len(routes) > 1}
    return {"duplicates": duplicates, "pass": not duplicates}


def validate_site(out: Path, site: SiteData) -> dict:
    """Run artifact checks and page checks against a built output directory."""
    out = Path(out)
    slugs = [p.slug for p in site.plumbers]
    routes = page_paths(site)

    files = {
        "Output directory": check_output_dir(out),
        "Homepage (index.html)": {"pass": (out / "index.html").is_file()},
        f"Detail pages ({len(slugs)})": check_detail_pages(out, slugs),
        "Sitemap index": check_sitemaps(out, [absolute_url(site.origin, r) for r in routes]),
        "robots.txt": check_robots(out, site.origin),
    }

    pages: dict[str, dict] = {}
    titles: dict[str, str] = {}
    for route in routes:
        path = route_to_file(out, route)
        if not path.is_file():
            continue
        html = path.read_text(encoding="utf-8")
        if route == "/":
            result = validate_page(html, "home", expected_slugs=slugs)
        else:
            plumber = site.plumber_by_slug(route.rstrip("/").split("/")[-1])
            result = validate_page(html, "plumber", expected_website=plumber.website if plumber else None)
        pages[route] = result
        titles[route] = result["title"]["title"]

    files["Unique titles"] = check_unique_titles(titles)

    issues = []
    warnings = []
    for name, check in files.items():
        if not check["pass"]:
            issues.append(f"{name}: {_describe(check)}")
    robots = files["robots.txt"]
    if robots["pass"] and not robots["origin_matches"]:
        warnings.append(f"robots.txt: Sitemap line does not point at {robots['expected_sitemap']}")
    for route, page in pages.items():
        issues.extend(f"{route}: {i}" for i in page["issues"])
        warnings.extend(f"{route}: {w}" for w in page["warnings"])

    return {
        "out_dir": str(out),
        "files": files,
        "pages": pages,
        "issues": issues,
        "warnings": warnings,
        "pass": not issues,
        "grade": compute_grade(issues, warnings),
    }


def _describe(check: dict) -> str:
    details = {k: v for k, v in check.items() if k != "pass" and v not in (None, [], {}, "")}
    return ", ".join(f"{k}={v}" for k, v in details.items()) or "failed"
