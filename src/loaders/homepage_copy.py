"""Load the homepage copy record (hero, intro, services, trust sections)."""

from __future__ import annotations

from pathlib import Path

from src.config import SITE_NAME, TOWN
from src.loaders.plumbers import PlumberDataError, read_json
from src.models import HomepageCopy, ServiceBlurb


def _required_text(section: dict, key: str, where: str) -> str:
    value = section.get(key)
    if not isinstance(value, str) or not value.strip():
        raise PlumberDataError(f"Homepage copy: missing required field '{where}.{key}'")
    return value.strip()


def _section(raw: dict, key: str) -> dict:
    """Optional object-valued section; absent or null means empty."""
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PlumberDataError(f"Homepage copy: '{key}' must be an object, got {type(value).__name__}")
    return value


def _text(section: dict, key: str, default: str = "") -> str:
    value = section.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def load_homepage_copy(path: Path) -> HomepageCopy:
    """Read homepage-copy.json. Only hero.headline and hero.cta are required."""
    raw = read_json(path)
    if not isinstance(raw, dict) or not isinstance(raw.get("hero"), dict):
        raise PlumberDataError(f"{path}: expected an object with a 'hero' section")

    hero = raw["hero"]
    headline = _required_text(hero, "headline", "hero")
    cta = _required_text(hero, "cta", "hero")

    meta = _section(raw, "meta")
    intro = _section(raw, "intro")
    why = _section(raw, "why")

    services_raw = raw.get("services") or []
    if not isinstance(services_raw, list):
        raise PlumberDataError("Homepage copy: 'services' must be a list")
    points_raw = why.get("points") or []
    if not isinstance(points_raw, list):
        raise PlumberDataError("Homepage copy: 'why.points' must be a list")

    services = tuple(
        ServiceBlurb(title=str(item["title"]).strip(), body=str(item.get("body", "")).strip())
        for item in services_raw
        if isinstance(item, dict) and str(item.get("title", "")).strip()
    )

    copy = HomepageCopy(
        headline=headline,
        cta=cta,
        subheadline=_text(hero, "subheadline"),
        call_cta=_text(hero, "call_cta", "Call for Emergency Help"),
        meta_title=_text(meta, "title", f"{headline} | {SITE_NAME}"),
        meta_description=_text(meta, "description", f"{headline}. Compare trusted local plumbers in {TOWN}."),
        intro_heading=_text(intro, "heading", f"When You Need a Plumber in {TOWN}"),
        intro_body=_text(intro, "body"),
        services_heading=_text(raw, "services_heading", f"Plumbing Services in {TOWN}"),
        services=services,
        why_heading=_text(why, "heading", "Why Use This Directory?"),
        why_points=tuple(str(p).strip() for p in points_raw if str(p).strip()),
    )
    print(f"  Loaded homepage copy from {path.name} ({len(services)} service blurbs)")
    return copy
