#!/usr/bin/env python3
"""Build the static Dartford plumbers directory.

Usage:
    python generate.py                                  # Build into dist/
    python generate.py --out public                     # Build somewhere else
    python generate.py --site-origin https://example.com
    python generate.py --dry-run                        # Load and validate data, write nothing

A build is all-or-nothing: any data error (missing field, bad phone, slug
collision, malformed JSON) or write error exits non-zero and leaves the
previous output untouched.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from src.config import DATA_DIR, OUTPUT_DIR, SITE_LANG, SITE_ORIGIN, STATIC_DIR
from src.loaders import PlumberDataError, load_site_data
from src.site import build_site, plumber_href


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate the Dartford plumbers directory site")
    parser.add_argument("--out", type=Path, default=OUTPUT_DIR,
                        help=f"Output directory (default: {OUTPUT_DIR})")
    parser.add_argument("--data", type=Path, default=DATA_DIR,
                        help="Directory holding top-plumbers.json and homepage-copy.json")
    parser.add_argument("--static", type=Path, default=STATIC_DIR,
                        help="Directory of files copied verbatim (robots.txt, logo)")
    parser.add_argument("--site-origin", type=str, default=SITE_ORIGIN,
                        help="Absolute origin for canonicals, JSON-LD and sitemaps")
    parser.add_argument("--lang", type=str, default=SITE_LANG,
                        help="Value of the <html lang> attribute")
    parser.add_argument("--dry-run", action="store_true",
                        help="Load and validate the data without writing anything")
    args = parser.parse_args(argv)

    print(f"{'='*60}")
    print(f"Building site into {args.out}")
    print(f"{'='*60}")

    # ── 1. Load data ──────────────────────────────────────────────────
    print("  Loading data...")
    try:
        site = load_site_data(args.data, origin=args.site_origin, lang=args.lang)
    except PlumberDataError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.dry_run:
        print("\n  [DRY RUN] Would generate:")
        print("    /")
        for plumber in site.plumbers:
            print(f"    {plumber_href(plumber)}  ({plumber.name})")
        return 0

    # ── 2. Render and write ───────────────────────────────────────────
    try:
        written = build_site(site, args.out, static_dir=args.static)
    except PlumberDataError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: could not write {args.out}: {e}", file=sys.stderr)
        return 1

    print(f"\nBuilt {len(written)} files. Next: python verify.py --out {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
