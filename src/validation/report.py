"""Grading and human-readable report formatting for verification results."""

from src.config import PLUMBER_COUNT

# Optional result sections merged into a site report
EXTRA_SECTIONS = ("live", "local", "browser")


def compute_grade(issues: list, warnings: list) -> str:
    """Compute a grade from issues and warnings.

    A+ = no issues, no warnings
    A  = no issues, some warnings
    A- = 1 issue
    B+ = 2 issues
    B  = 3 issues
    C  = 4-5 issues
    D  = 6+ issues
    """
    if len(issues) == 0 and len(warnings) == 0:
        return "A+"
    if len(issues) == 0:
        return "A"
    if len(issues) <= 1:
        return "A-"
    if len(issues) <= 2:
        return "B+"
    if len(issues) <= 3:
        return "B"
    if len(issues) <= 5:
        return "C"
    return "D"


def _status(ok: bool) -> str:
    return "PASS" if ok else "FAIL"


def _issue_lines(results: dict) -> list[str]:
    lines = []
    if results.get("issues"):
        lines.append(f"\nISSUES ({len(results['issues'])}):")
        for issue in results["issues"]:
            lines.append(f"  - {issue}")
    if results.get("warnings"):
        lines.append(f"\nWARNINGS ({len(results['warnings'])}):")
        for warning in results["warnings"]:
            lines.append(f"  ~ {warning}")
    return lines


def format_page_report(results: dict, route: str) -> str:
    """Format one page's validation results as a readable CLI block."""
    h = results["headings"]
    tel = results["tel_links"]

    lines = [
        f"{'='*60}",
        f"PAGE: {route}",
        f"{'='*60}",
        f"Grade: {results['grade']}",
        "",
        f"  [{_status(results['title']['pass'])}] Title:            {results['title']['title']}",
        f"  [{_status(results['lang']['pass'])}] Language:         {results['lang']['lang']}",
        f"  [{_status(h['pass'])}] Headings:         {h['h1_count']} H1, {h['h2_count']} H2",
        f"  [{_status(tel['pass'])}] Phone links:      {tel['count']}  (invalid: {len(tel['invalid'])})",
        f"  [{_status(results['images_alt']['pass'])}] Image alt text:   {results['images_alt']['count']} images",
        f"  [{_status(results['link_names']['pass'])}] Link names:       {results['link_names']['count']} links",
    ]

    if results["kind"] == "home":
        cards = results["plumber_cards"]
        lines.append(
            f"  [{_status(cards['pass'])}] Plumber cards:    {cards['count']}  (need: {PLUMBER_COUNT})"
        )
        lines.append(f"  [{_status(results['sections']['pass'])}] Section headings: {len(results['sections']['found'])} found")
    else:
        sd = results["structured_data"]
        lines.append(f"  [{_status(sd['pass'])}] JSON-LD:          {sd['count']} block(s), type {sd['type']}")
        lines.append(f"  [{_status(results['breadcrumb']['pass'])}] Breadcrumb")
        lines.append(f"  [{_status(results['services']['pass'])}] Services:         {results['services']['badges']} badges")

    lines.extend(_issue_lines(results))
    lines.append(f"{'='*60}")
    return "\n".join(lines)


def format_site_report(results: dict) -> str:
    """Summary block for the whole site: artifact checks plus per-page grades."""
    lines = [
        f"{'='*60}",
        f"SITE VERIFICATION: {results['out_dir']}",
        f"{'='*60}",
        f"Grade: {results['grade']}",
        "",
    ]
    for name, check in results["files"].items():
        lines.append(f"  [{_status(check['pass'])}] {name}")

    lines.append("")
    for route, page in results["pages"].items():
        flag = "ok" if page["pass"] else f"{len(page['issues'])} issues"
        lines.append(f"  {route}: grade {page['grade']} ({flag})")

    for section in EXTRA_SECTIONS:
        extra = results.get(section)
        if extra:
            lines.append("")
            lines.append(f"  {section.upper()}:")
            for name, check in extra["checks"].items():
                lines.append(f"  [{_status(check['pass'])}] {name}")

    lines.extend(_issue_lines(results))
    if not results["issues"] and not results.get("warnings"):
        lines.append("\nAll checks passed!")
    lines.append(f"{'='*60}")
    return "\n".join(lines)
