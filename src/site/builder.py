"""Render the whole site in memory, then swap it into the output directory.

A build is all-or-nothing: if any page fails to render or the staging
directory cannot be written, the previous output directory is left as it was.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from src.config import ROBOTS_TXT, SITEMAP_INDEX, STATIC_DIR
from src.loaders import PlumberDataError
from src.models import SiteData
from src.site.pages import homepage_html, page_titles, plumber_page_html
from src.site.seo import absolute_url, robots_txt, sitemap_files


def _ensure_unique_titles(site: SiteData) -> None:
    seen: dict[str, str] = {}
    for route, title in page_titles(site).items():
        key = title.strip().lower()
        if key in seen:
            raise PlumberDataError(f"Duplicate <title> {title!r} on {seen[key]} and {route}")
        seen[key] = route


def _static_files(static_dir: Path) -> dict[str, bytes]:
    files: dict[str, bytes] = {}
    if not static_dir.is_dir():
        return files
    for path in sorted(static_dir.rglob("*")):
        if path.is_file():
            files[path.relative_to(static_dir).as_posix()] = path.read_bytes()
    return files


def _robots(static: dict[str, bytes], origin: str) -> bytes:
    """Use the hand-written robots.txt when present; it must point at the sitemap index."""
    if ROBOTS_TXT not in static:
        return robots_txt(origin).encode("utf-8")
    content = static[ROBOTS_TXT].decode("utf-8")
    if not any(
        line.lower().startswith("sitemap:") and SITEMAP_INDEX in line
        for line in content.splitlines()
    ):
        raise PlumberDataError(f"static/{ROBOTS_TXT} has no 'Sitemap:' line for {SITEMAP_INDEX}")
    expected = absolute_url(origin, SITEMAP_INDEX)
    if origin and expected not in content:
        print(f"  Warning: static/{ROBOTS_TXT} does not point at {expected}")
    return static[ROBOTS_TXT]


def render_site(site: SiteData, static_dir: Path = STATIC_DIR) -> dict[str, bytes]:
    """Relative output path -> file bytes, for every artifact of one build."""
    _ensure_unique_titles(site)

    static = _static_files(Path(static_dir))
    files: dict[str, bytes] = dict(static)

    files["index.html"] = homepage_html(site).encode("utf-8")
    for plumber in site.plumbers:
        files[f"plumbers/{plumber.slug}/index.html"] = plumber_page_html(site, plumber).encode("utf-8")

    for name, content in sitemap_files(site).items():
        files[name] = content.encode("utf-8")
    files[ROBOTS_TXT] = _robots(static, site.origin)

    return files


def write_files(files: dict[str, bytes], out: Path) -> None:
    """Write into a sibling staging directory, then replace `out` with it."""
    out = Path(out)
    staging = out.with_name(out.name + ".staging")
    if staging.exists():
        shutil.rmtree(staging)

    try:
        for rel, content in sorted(files.items()):
            path = staging / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
    except OSError:
        shutil.rmtree(staging, ignore_errors=True)
        raise

    if out.exists():
        shutil.rmtree(out)
    staging.rename(out)


def build_site(site: SiteData, out: Path, static_dir: Path = STATIC_DIR) -> list[str]:
    """Render and write the site. Returns the written paths, relative to `out`."""
    print("  Rendering pages...")
    files = render_site(site, static_dir)
    pages = [rel for rel in files if rel.endswith(".html")]
    print(f"  → {len(pages)} HTML documents, {len(files) - len(pages)} other files")

    write_files(files, out)
    print(f"  Wrote {len(files)} files to {out}")
    return sorted(files)
