"""Central configuration for the directory build and verification."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# ── Paths ──────────────────────────────────────────────────────────────────
ROOT_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.getenv("DATA_DIR", ROOT_DIR / "data"))
STATIC_DIR = ROOT_DIR / "static"
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", ROOT_DIR / "dist"))

# JSON data files (relative to DATA_DIR)
PLUMBERS_JSON = "top-plumbers.json"
HOMEPAGE_COPY_JSON = "homepage-copy.json"

# ── Site identity ──────────────────────────────────────────────────────────
SITE_ORIGIN = os.getenv("SITE_ORIGIN", "https://dartfordplumber.com").rstrip("/")
SITE_LANG = os.getenv("SITE_LANG", "en-GB")
SITE_NAME = "Dartford Plumbers"
TOWN = "Dartford"
LOGO_FILENAME = "logo.svg"

# ── Directory settings ─────────────────────────────────────────────────────
PLUMBER_COUNT = 10  # cards on the homepage, detail pages per build
CARD_BADGE_LIMIT = 3
MIN_PHONE_DIGITS = 7
FALLBACK_SERVICE = "General Plumbing"

# ── Routes ─────────────────────────────────────────────────────────────────
LISTING_ANCHOR = "/#plumbers"
PLUMBER_ROUTE = "/plumbers/{slug}"
SITEMAP_INDEX = "sitemap-index.xml"
SITEMAP_PAGE = "sitemap-0.xml"
ROBOTS_TXT = "robots.txt"

# ── Verification settings ──────────────────────────────────────────────────
EXPECTED_SECTION_HEADINGS = (
    "When you need a plumber in Dartford",
    "Emergency Repairs",
    "Why use this directory",
)
TITLE_PATTERN = r"dartford plumber"
LANG_PATTERN = r"^[a-z]{2}(-[A-Z]{2})?$"
TEL_PATTERN = r"^tel:\d+$"
SCHEMA_TYPES = ("Plumber", "LocalBusiness")

# ── Browser audit ──────────────────────────────────────────────────────────
CHROME_HEADLESS = os.getenv("CHROME_HEADLESS", "TRUE").upper() == "TRUE"
MOBILE_VIEWPORT = (375, 667)
OVERFLOW_TOLERANCE_PX = 5
TAP_TARGET_MIN_PX = 44
TAP_TARGET_SAMPLE = 20  # only the first N links/buttons are measured
TAP_TARGET_PASS_PCT = 70
CALL_BUTTON_MIN_HEIGHT_PX = 40
MIN_CONTRAST_NORMAL = 4.5
MIN_CONTRAST_LARGE = 3.0

# ── Live smoke check ───────────────────────────────────────────────────────
HTTP_TIMEOUT = 15  # seconds
SLOW_PAGE_SECONDS = 3.0
