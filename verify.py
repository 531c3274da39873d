#!/usr/bin/env python3
"""Verify a built site: pages, artifacts and, optionally, live and browser checks.

Usage:
    python verify.py                              # Static checks on dist/
    python verify.py --out public                 # Another build directory
    python verify.py --serve                      # Also smoke-test dist/ over local HTTP
    python verify.py --live https://example.com   # Smoke-test a deployed copy
    python verify.py --browser                    # Headless Chrome mobile audit
    python verify.py --json report.json           # Save the full results

Exits 1 when any check reports an issue.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from src.config import DATA_DIR, OUTPUT_DIR, SITE_LANG, SITE_ORIGIN
from src.loaders import PlumberDataError, load_site_data
from src.site.seo import page_paths
from src.validation import format_page_report, format_site_report, validate_site
from src.validation.live import check_live_site
from src.validation.report import EXTRA_SECTIONS, compute_grade


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Verify the generated Dartford plumbers site")
    parser.add_argument("--out", type=Path, default=OUTPUT_DIR,
                        help=f"Build directory to verify (default: {OUTPUT_DIR})")
    parser.add_argument("--data", type=Path, default=DATA_DIR,
                        help="Directory holding the JSON data the build used")
    parser.add_argument("--site-origin", type=str, default=SITE_ORIGIN,
                        help="Origin the build was generated with (sitemap URLs)")
    parser.add_argument("--live", type=str, default="",
                        help="Base URL of a deployed copy to smoke-test over HTTP")
    parser.add_argument("--serve", action="store_true",
                        help="Serve the build locally and smoke-test it over HTTP (reported as 'local')")
    parser.add_argument("--browser", action="store_true",
                        help="Run the headless Chrome mobile audit against a local server")
    parser.add_argument("--json", type=Path, default=None,
                        help="Write the full results to this JSON file")
    args = parser.parse_args(argv)

    # ── 1. Load the data the build was generated from ─────────────────
    print("Loading data...")
    try:
        site = load_site_data(args.data, origin=args.site_origin, lang=SITE_LANG)
    except PlumberDataError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # ── 2. Static checks ──────────────────────────────────────────────
    print(f"Checking {args.out}...")
    results = validate_site(args.out, site)
    routes = page_paths(site)

    # ── 3. HTTP and browser checks ────────────────────────────────────
    if args.live:
        results["live"] = check_live_site(args.live, routes)

    if (args.serve or args.browser) and args.out.is_dir():
        from src.selenium_ops.server import serve_directory

        with serve_directory(args.out) as base_url:
            if args.serve:
                results["local"] = check_live_site(base_url, routes)
            if args.browser:
                from src.selenium_ops import audit_site
                results["browser"] = audit_site(base_url, routes)

    for section in EXTRA_SECTIONS:
        extra = results.get(section)
        if extra:
            results["issues"].extend(f"[{section}] {i}" for i in extra["issues"])
            results["warnings"].extend(f"[{section}] {w}" for w in extra["warnings"])
    results["pass"] = not results["issues"]
    results["grade"] = compute_grade(results["issues"], results["warnings"])

    # ── 4. Report ─────────────────────────────────────────────────────
    for route, page in results["pages"].items():
        if not page["pass"]:
            print(f"\n{format_page_report(page, route)}")
    print(f"\n{format_site_report(results)}")

    if args.json:
        with open(args.json, "w") as f:
            clean = json.loads(json.dumps(results, default=str))
            json.dump(clean, f, indent=2, ensure_ascii=False)
        print(f"\nResults saved to {args.json}")

    return 0 if results["pass"] else 1


if __name__ == "__main__":
    sys.exit(main())
