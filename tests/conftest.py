import json
from pathlib import Path

import pytest

from src.config import DATA_DIR, STATIC_DIR
from src.loaders import load_site_data
from src.site import build_site

PLUMBER_SLUGS = [
    "local-plumbing-services",
    "supreme-plumbers",
    "provide-plumbing-heating",
    "k-j-heating",
    "the-plumber",
    "gaff-plumbing-and-heating",
    "dartford-plumbing-mechanical-service",
    "horizon-plumbing-heating-bathrooms",
    "jaguar-plumbing-and-drainage",
    "allen-co-plumbing-and-heating-services-ltd",
]


@pytest.fixture(scope="session")
def expected_slugs() -> list[str]:
    return list(PLUMBER_SLUGS)


@pytest.fixture(scope="session")
def site_data():
    return load_site_data(DATA_DIR, origin="https://dartfordplumber.com", lang="en-GB")


@pytest.fixture(scope="session")
def built_site(site_data, tmp_path_factory) -> Path:
    out = tmp_path_factory.mktemp("build") / "dist"
    build_site(site_data, out, static_dir=STATIC_DIR)
    return out


@pytest.fixture(scope="session")
def home_html(built_site) -> str:
    return (built_site / "index.html").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def detail_html(built_site) -> str:
    return (built_site / "plumbers" / "local-plumbing-services" / "index.html").read_text(encoding="utf-8")


def make_raw_plumber(i: int, **overrides) -> dict:
    row = {
        "name": f"Plumber Number {i}",
        "phone": f"01322 000 {i:03d}",
        "rating": 4.5,
        "reviews_count": 10 + i,
        "services": ["Plumber", "Boiler repair"],
        "website": f"https://plumber{i}.example.co.uk/",
    }
    row.update(overrides)
    return row


@pytest.fixture
def raw_plumber():
    return make_raw_plumber


@pytest.fixture
def data_dir(tmp_path):
    """Writable copy of the real data files, for tests that corrupt them."""
    target = tmp_path / "data"
    target.mkdir()
    for src in DATA_DIR.glob("*.json"):
        (target / src.name).write_text(src.read_text(encoding="utf-8"), encoding="utf-8")
    return target


@pytest.fixture
def write_json():
    def _write(path: Path, data) -> Path:
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
