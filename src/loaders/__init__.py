"""Data loading: plumber records and homepage copy."""

from pathlib import Path

from src.config import DATA_DIR, HOMEPAGE_COPY_JSON, PLUMBERS_JSON, SITE_LANG, SITE_ORIGIN
from src.loaders.homepage_copy import load_homepage_copy
from src.loaders.plumbers import (
    PlumberDataError,
    ensure_unique_slugs,
    load_plumbers,
    parse_plumber,
    slugify,
)
from src.models import SiteData


def load_site_data(
    data_dir: Path = DATA_DIR,
    origin: str = SITE_ORIGIN,
    lang: str = SITE_LANG,
) -> SiteData:
    """Read both JSON files once and freeze them into a SiteData."""
    data_dir = Path(data_dir)
    plumbers = load_plumbers(data_dir / PLUMBERS_JSON)
    copy = load_homepage_copy(data_dir / HOMEPAGE_COPY_JSON)
    return SiteData(plumbers=plumbers, copy=copy, origin=origin.rstrip("/"), lang=lang)


__all__ = [
    "PlumberDataError",
    "ensure_unique_slugs",
    "load_homepage_copy",
    "load_plumbers",
    "load_site_data",
    "parse_plumber",
    "slugify",
]
