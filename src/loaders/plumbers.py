"""Load plumber records from the JSON export and validate them for a build."""

from __future__ import annotations

import json
import re
import unicodedata
from pathlib import Path
from urllib.parse import urlparse

from src.config import MIN_PHONE_DIGITS, PLUMBER_COUNT
from src.models import PlumberRecord


class PlumberDataError(ValueError):
    """Raised for any data problem that must stop the build."""


def slugify(name: str) -> str:
    """Derive a URL-safe slug from a business name.

    Example: 'Allen & Co Plumbing and Heating Services Ltd'
             -> 'allen-co-plumbing-and-heating-services-ltd'
             'K&J Heating' -> 'k-j-heating'
    """
    s = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    s = s.strip().lower()
    s = re.sub(r"['’]", "", s)
    s = re.sub(r"[^a-z0-9]+", "-", s)
    s = re.sub(r"-{2,}", "-", s).strip("-")
    return s


def read_json(path: Path):
    """Read a JSON file, turning every failure into a PlumberDataError."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise PlumberDataError(f"Missing data file: {path}") from None
    except json.JSONDecodeError as e:
        raise PlumberDataError(f"Malformed JSON in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise PlumberDataError(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise PlumberDataError(f"Cannot read data file {path}: {e}") from e


def _first(row: dict, *keys):
    """Return the first present, non-empty value among the aliased keys."""
    for key in keys:
        value = row.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def _clean_services(row: dict) -> tuple[str, ...]:
    raw = _first(row, "services", "categories")
    if raw is None:
        raw = _first(row, "categoryName")
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = [raw]

    seen: set[str] = set()
    services: list[str] = []
    for item in raw:
        label = str(item).strip()
        if label and label.lower() not in seen:
            seen.add(label.lower())
            services.append(label)
    return tuple(services)


def _clean_website(value, where: str) -> str | None:
    if value is None:
        return None
    url = str(value).strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise PlumberDataError(f"{where}: website is not an absolute http(s) URL: {url!r}")
    return url


def parse_plumber(row: dict, index: int) -> PlumberRecord:
    """Validate one raw record and derive its slug.

    Required: name (or 'title'), phone, rating (or 'totalScore').
    Everything else is optional and simply omitted from the page when absent.
    """
    if not isinstance(row, dict):
        raise PlumberDataError(f"Record #{index}: expected an object, got {type(row).__name__}")

    name = _first(row, "name", "title")
    where = f"Record #{index}"
    if name is None:
        raise PlumberDataError(f"{where}: missing required field 'name'")
    name = str(name).strip()
    where = f"Record #{index} ({name})"

    phone = _first(row, "phone", "phoneUnformatted")
    if phone is None:
        raise PlumberDataError(f"{where}: missing required field 'phone'")
    phone = str(phone).strip()
    if len(re.sub(r"\D", "", phone)) < MIN_PHONE_DIGITS:
        raise PlumberDataError(f"{where}: phone {phone!r} does not contain a dialable number")

    rating = _first(row, "rating", "totalScore")
    if rating is None:
        raise PlumberDataError(f"{where}: missing required field 'rating'")
    try:
        rating = float(rating)
    except (TypeError, ValueError):
        raise PlumberDataError(f"{where}: rating {rating!r} is not a number") from None
    if not 0 <= rating <= 5:
        raise PlumberDataError(f"{where}: rating {rating} outside 0-5")

    reviews = _first(row, "reviews_count", "reviewsCount")
    if reviews is not None:
        try:
            reviews = int(reviews)
        except (TypeError, ValueError):
            raise PlumberDataError(f"{where}: reviews count {reviews!r} is not an integer") from None
        if reviews < 0:
            raise PlumberDataError(f"{where}: negative reviews count")

    slug = slugify(name)
    if not slug:
        raise PlumberDataError(f"{where}: name produces an empty slug")

    address = _first(row, "address")
    description = _first(row, "description")

    return PlumberRecord(
        name=name,
        slug=slug,
        phone=phone,
        rating=rating,
        reviews_count=reviews,
        services=_clean_services(row),
        website=_clean_website(_first(row, "website"), where),
        address=str(address).strip() if address else None,
        description=str(description).strip() if description else None,
    )


def ensure_unique_slugs(plumbers: list[PlumberRecord]) -> None:
    """Fail loudly when two names collapse to the same slug."""
    owners: dict[str, str] = {}
    for plumber in plumbers:
        if plumber.slug in owners:
            raise PlumberDataError(
                f"Slug collision: {owners[plumber.slug]!r} and {plumber.name!r} "
                f"both map to /plumbers/{plumber.slug}"
            )
        owners[plumber.slug] = plumber.name


def load_plumbers(path: Path, limit: int = PLUMBER_COUNT) -> tuple[PlumberRecord, ...]:
    """Load, validate and cut the dataset down to the listed records.

    The export is ranked, so the first `limit` records in file order are the
    ones listed. Fewer than `limit` records is fatal.
    """
    raw = read_json(path)
    if not isinstance(raw, list):
        raise PlumberDataError(f"{path}: expected a JSON array of plumber records")

    if len(raw) < limit:
        raise PlumberDataError(f"{path}: need {limit} plumbers, found {len(raw)}")

    plumbers = [parse_plumber(row, i) for i, row in enumerate(raw[:limit], 1)]
    ensure_unique_slugs(plumbers)

    print(f"  Loaded {len(plumbers)} plumbers from {path.name}"
          + (f" ({len(raw) - limit} more in file not listed)" if len(raw) > limit else ""))
    return tuple(plumbers)
