"""Individual page checks and the validate_page orchestrator.

Every check takes a parsed document and returns a dict with at least a
``pass`` key, plus whatever counts or offending elements explain a failure.
"""

from __future__ import annotations

import json
import re

from bs4 import BeautifulSoup

from src.config import (
    EXPECTED_SECTION_HEADINGS,
    LANG_PATTERN,
    LISTING_ANCHOR,
    PLUMBER_COUNT,
    SCHEMA_TYPES,
    TEL_PATTERN,
    TITLE_PATTERN,
)
from src.validation.report import compute_grade

PRIMARY_CTA_PATTERN = r"view local plumbers"
DETAIL_HREF = re.compile(r"^/plumbers/([a-z0-9-]+)/?$")


# ── Main validation entry point ──────────────────────────────────────────


def validate_page(
    html: str,
    kind: str,
    expected_slugs: list[str] | None = None,
    expected_website: str | None = None,
) -> dict:
    """Run all checks that apply to a homepage ("home") or detail page ("plumber").

    Returns a dict with per-check results, issues, warnings, grade, and
    overall pass/fail.
    """
    soup = BeautifulSoup(html, "html.parser")

    results = {
        "kind": kind,
        "document": check_document_structure(html),
        "lang": check_lang(soup),
        "title": check_title(soup),
        "meta_description": check_meta_description(soup),
        "og_title": check_og_title(soup),
        "headings": check_heading_hierarchy(soup),
        "tel_links": check_tel_links(soup),
        "images_alt": check_images_alt(soup),
        "link_names": check_link_names(soup),
        "button_names": check_button_names(soup),
        "form_labels": check_form_labels(soup),
        "landmarks": check_landmarks(soup),
        "external_links": check_external_links(soup),
    }

    if kind == "home":
        results["plumber_cards"] = check_plumber_cards(soup, expected_slugs)
        results["primary_cta"] = check_primary_cta(soup)
        results["sections"] = check_section_headings(soup, EXPECTED_SECTION_HEADINGS)
    elif kind == "plumber":
        results["breadcrumb"] = check_breadcrumb(soup)
        results["structured_data"] = check_structured_data(soup)
        results["rating_subheadline"] = check_rating_subheadline(soup)
        results["contact"] = check_contact_section(soup)
        results["services"] = check_services_section(soup)
        results["back_link"] = check_back_link(soup)
        results["website_link"] = check_website_link(soup, expected_website)
    else:
        raise ValueError(f"Unknown page kind: {kind!r}")

    issues, warnings = _collect_issues(results)
    results["issues"] = issues
    results["warnings"] = warnings
    results["pass"] = len(issues) == 0
    results["grade"] = compute_grade(issues, warnings)

    return results


# ── Issue aggregation ─────────────────────────────────────────────────────


def _collect_issues(results: dict) -> tuple[list[str], list[str]]:
    """Walk through all check results and collect issues/warnings."""
    issues = []
    warnings = []

    if not results["document"]["pass"]:
        issues.append(f"Missing basic HTML structure: {results['document']['missing']}")

    lang = results["lang"]
    if not lang["pass"]:
        issues.append(f"Invalid or missing html lang attribute: {lang['lang']!r}")

    if not results["title"]["pass"]:
        issues.append(f"Title {results['title']['title']!r} does not mention 'Dartford plumber'")
    if not results["meta_description"]["pass"]:
        issues.append("Missing meta description")
    elif results["meta_description"]["length"] > 160:
        warnings.append(f"Meta description is long: {results['meta_description']['length']} chars (target 160 max)")
    if not results["og_title"]["pass"]:
        issues.append("Missing og:title meta tag")

    h = results["headings"]
    if h["h1_count"] != 1:
        issues.append(f"Expected exactly one H1 in main, found {h['h1_count']}")
    if h["h2_count"] < 1:
        issues.append("No H2 headings in main")

    tel = results["tel_links"]
    if tel["count"] == 0:
        issues.append("No tel: links on page")
    if tel["invalid"]:
        issues.append(f"Malformed tel: hrefs: {tel['invalid']}")

    if not results["images_alt"]["pass"]:
        issues.append(f"Images without alt text: {results['images_alt']['missing']}")
    if not results["link_names"]["pass"]:
        issues.append(f"Links without accessible name: {results['link_names']['unnamed']}")
    if not results["button_names"]["pass"]:
        issues.append(f"Buttons without accessible name: {results['button_names']['unnamed']}")
    if not results["form_labels"]["pass"]:
        issues.append(f"Form controls without labels: {results['form_labels']['unlabelled']}")
    if not results["landmarks"]["pass"]:
        issues.append("No <main> landmark or skip link")
    elif not results["landmarks"]["has_skip_link"]:
        warnings.append("No skip link (main landmark present)")
    if not results["external_links"]["pass"]:
        issues.append(f"New-tab links missing rel=noopener noreferrer: {results['external_links']['unsafe']}")

    if results["kind"] == "home":
        cards = results["plumber_cards"]
        if cards["count"] != PLUMBER_COUNT:
            issues.append(f"Expected {PLUMBER_COUNT} plumber cards, found {cards['count']}")
        for problem in cards["problems"]:
            issues.append(f"Plumber card: {problem}")
        if cards.get("missing_slugs"):
            issues.append(f"No card links to: {cards['missing_slugs']}")
        if not results["primary_cta"]["pass"]:
            issues.append(f"Primary CTA to {LISTING_ANCHOR} not found")
        if results["sections"]["missing"]:
            issues.append(f"Missing section headings: {results['sections']['missing']}")

    if results["kind"] == "plumber":
        if not results["breadcrumb"]["pass"]:
            issues.append("Breadcrumb navigation with a Home link not found")
        sd = results["structured_data"]
        if sd["count"] != 1:
            issues.append(f"Expected one application/ld+json block, found {sd['count']}")
        elif not sd["pass"]:
            issues.append(f"Structured data invalid: {sd['error'] or 'type ' + repr(sd['type'])}")
        if not results["rating_subheadline"]["pass"]:
            issues.append("Rating subheadline ('★ rated plumber') not found")
        if not results["contact"]["pass"]:
            issues.append("Contact Information section with a phone link not found")
        svc = results["services"]
        if not svc["has_heading"]:
            issues.append("'Services' heading not found")
        if svc["badges"] == 0:
            issues.append("No service badges")
        if not results["back_link"]["pass"]:
            issues.append(f"'Back to directory' link to {LISTING_ANCHOR} not found")
        if not results["website_link"]["pass"]:
            issues.append(results["website_link"]["problem"])

    return issues, warnings


# ── Helpers ───────────────────────────────────────────────────────────────


def _text(tag) -> str:
    return re.sub(r"\s+", " ", tag.get_text(" ", strip=True)).strip()


def accessible_name(tag, soup=None) -> str:
    """Best-effort accessible name: aria-labelledby, aria-label, text, image alt, title."""
    labelledby = tag.get("aria-labelledby")
    if labelledby and soup is not None:
        parts = []
        for ref in labelledby.split():
            target = soup.find(id=ref)
            if target is not None:
                parts.append(_text(target))
        name = " ".join(p for p in parts if p)
        if name:
            return name

    label = (tag.get("aria-label") or "").strip()
    if label:
        return label

    text = _text(tag)
    if text:
        return text

    alts = [img.get("alt", "").strip() for img in tag.find_all("img")]
    alt = " ".join(a for a in alts if a)
    if alt:
        return alt

    return (tag.get("title") or "").strip()


def _main(soup):
    return soup.find("main") or soup


def _links_named(scope, pattern: str, soup=None) -> list:
    rx = re.compile(pattern, re.IGNORECASE)
    return [a for a in scope.find_all("a", href=True) if rx.search(accessible_name(a, soup))]


def _rel_tokens(tag) -> set[str]:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return {r.lower() for r in rel}


# ── Document-wide checks ──────────────────────────────────────────────────


def check_document_structure(html: str) -> dict:
    markers = ["<!DOCTYPE html>", "<html", "</html>", "<meta", "<title>"]
    lower = html.lower()
    missing = [m for m in markers if m.lower() not in lower]
    return {"missing": missing, "pass": not missing}


def check_lang(soup) -> dict:
    root = soup.find("html")
    lang = root.get("lang", "") if root else ""
    return {"lang": lang, "pass": bool(re.match(LANG_PATTERN, lang or ""))}


def check_title(soup) -> dict:
    title = _text(soup.title) if soup.title else ""
    ok = bool(title) and bool(re.search(TITLE_PATTERN, title, re.IGNORECASE))
    return {"title": title, "pass": ok}


def check_meta_description(soup) -> dict:
    tag = soup.find("meta", attrs={"name": "description"})
    content = (tag.get("content") or "").strip() if tag else ""
    return {"content": content, "length": len(content), "pass": bool(content)}


def check_og_title(soup) -> dict:
    tag = soup.find("meta", attrs={"property": "og:title"})
    content = (tag.get("content") or "").strip() if tag else ""
    return {"content": content, "pass": bool(content)}


def check_heading_hierarchy(soup) -> dict:
    main = _main(soup)
    h1s = main.find_all("h1")
    h2s = main.find_all("h2")
    return {
        "h1_count": len(h1s),
        "h2_count": len(h2s),
        "h1": _text(h1s[0]) if h1s else "",
        "pass": len(h1s) == 1 and len(h2s) >= 1,
    }


def check_tel_links(soup) -> dict:
    hrefs = [a["href"] for a in soup.find_all("a", href=True) if a["href"].startswith("tel:")]
    invalid = [h for h in hrefs if not re.match(TEL_PATTERN, h)]
    return {"count": len(hrefs), "invalid": invalid, "pass": bool(hrefs) and not invalid}


def check_images_alt(soup) -> dict:
    images = soup.find_all("img")
    missing = [img.get("src", "?") for img in images if not (img.get("alt") or "").strip()]
    return {"count": len(images), "missing": missing, "pass": not missing}


def check_link_names(soup) -> dict:
    links = soup.find_all("a")
    unnamed = [a.get("href", "?") for a in links if not accessible_name(a, soup)]
    return {"count": len(links), "unnamed": unnamed, "pass": not unnamed}


def check_button_names(soup) -> dict:
    buttons = _main(soup).find_all("button")
    unnamed = [str(b)[:60] for b in buttons if not accessible_name(b, soup)]
    return {"count": len(buttons), "unnamed": unnamed, "pass": not unnamed}


def check_form_labels(soup) -> dict:
    """Every input/textarea/select in main needs a label, aria-label or aria-labelledby."""
    controls = _main(soup).find_all(["input", "textarea", "select"])
    unlabelled = []
    for control in controls:
        if control.name == "input" and control.get("type") in ("hidden", "submit", "button"):
            continue
        cid = control.get("id")
        has_label = (
            (cid and soup.find("label", attrs={"for": cid}) is not None)
            or control.find_parent("label") is not None
            or (control.get("aria-label") or "").strip()
            or (control.get("aria-labelledby") or "").strip()
        )
        if not has_label:
            unlabelled.append(control.get("name") or cid or control.name)
    return {"count": len(controls), "unlabelled": unlabelled, "pass": not unlabelled}


def check_landmarks(soup) -> dict:
    has_main = soup.find("main") is not None
    has_skip = any(
        a["href"].startswith("#") and re.search(r"skip", _text(a), re.IGNORECASE)
        for a in soup.find_all("a", href=True)
    )
    return {"has_main": has_main, "has_skip_link": has_skip, "pass": has_main or has_skip}


def check_external_links(soup) -> dict:
    new_tab = soup.find_all("a", attrs={"target": "_blank"})
    unsafe = [
        a.get("href", "?") for a in new_tab
        if not {"noopener", "noreferrer"} <= _rel_tokens(a)
    ]
    return {"count": len(new_tab), "unsafe": unsafe, "pass": not unsafe}


# ── Homepage checks ───────────────────────────────────────────────────────


def check_plumber_cards(soup, expected_slugs: list[str] | None = None) -> dict:
    """Each listing card: one h3 name, one 'View Details' link, one tel: button."""
    cards = [a for a in soup.find_all("article") if a.find("h3")]
    problems = []
    linked: list[str] = []

    for i, card in enumerate(cards, 1):
        name = _text(card.find("h3"))
        label = f"#{i} ({name})"
        if len(card.find_all("h3")) != 1:
            problems.append(f"{label} has {len(card.find_all('h3'))} h3 headings")

        details = _links_named(card, r"view details", soup)
        if len(details) != 1:
            problems.append(f"{label} has {len(details)} 'View Details' links")
        else:
            m = DETAIL_HREF.match(details[0]["href"])
            if m:
                linked.append(m.group(1))
            else:
                problems.append(f"{label} links to {details[0]['href']!r}")

        tel = [a for a in card.find_all("a", href=True) if a["href"].startswith("tel:")]
        if len(tel) != 1:
            problems.append(f"{label} has {len(tel)} call buttons")

    result = {
        "count": len(cards),
        "slugs": linked,
        "problems": problems,
        "in_listing_section": soup.find(id="plumbers") is not None,
    }
    if expected_slugs is not None:
        result["missing_slugs"] = [s for s in expected_slugs if s not in linked]
    result["pass"] = (
        len(cards) == PLUMBER_COUNT
        and not problems
        and result["in_listing_section"]
        and not result.get("missing_slugs")
    )
    return result


def check_primary_cta(soup) -> dict:
    links = _links_named(_main(soup), PRIMARY_CTA_PATTERN, soup)
    hrefs = [a["href"] for a in links]
    return {"hrefs": hrefs, "pass": LISTING_ANCHOR in hrefs}


def check_section_headings(soup, expected) -> dict:
    headings = [_text(h).lower() for h in _main(soup).find_all(["h2", "h3"])]
    found = []
    missing = []
    for want in expected:
        if any(want.lower() in h for h in headings):
            found.append(want)
        else:
            missing.append(want)
    return {"found": found, "missing": missing, "pass": not missing}


# ── Detail page checks ────────────────────────────────────────────────────


def check_breadcrumb(soup) -> dict:
    nav = None
    for candidate in soup.find_all("nav"):
        label = (candidate.get("aria-label") or "").strip()
        if not label and candidate.get("aria-labelledby"):
            label = accessible_name(candidate, soup)
        if re.search(r"breadcrumb", label, re.IGNORECASE):
            nav = candidate
            break
    if nav is None:
        return {"found": False, "home_href": None, "pass": False}

    home = _links_named(nav, r"home", soup)
    home_href = home[0]["href"] if home else None
    return {"found": True, "home_href": home_href, "pass": home_href == "/"}


def check_structured_data(soup) -> dict:
    scripts = soup.find_all("script", attrs={"type": "application/ld+json"})
    result = {"count": len(scripts), "type": None, "error": "", "pass": False}
    if len(scripts) != 1:
        return result

    try:
        data = json.loads(scripts[0].string or "")
    except json.JSONDecodeError as e:
        result["error"] = f"invalid JSON: {e}"
        return result

    schema_type = data.get("@type") if isinstance(data, dict) else None
    types = schema_type if isinstance(schema_type, list) else [schema_type]
    result["type"] = schema_type
    result["name"] = data.get("name") if isinstance(data, dict) else None
    result["pass"] = any(t in SCHEMA_TYPES for t in types)
    return result


def check_rating_subheadline(soup) -> dict:
    rx = re.compile(r"★ rated plumber", re.IGNORECASE)
    match = _main(soup).find(string=rx)
    return {"text": match.strip() if match else "", "pass": match is not None}


def check_contact_section(soup) -> dict:
    rx = re.compile(r"contact information", re.IGNORECASE)
    heading = next((h for h in soup.find_all(["h2", "h3"]) if rx.search(_text(h))), None)
    if heading is None:
        return {"has_heading": False, "tel_links": 0, "pass": False}

    section = heading.find_parent("section") or heading.parent
    tel = [a for a in section.find_all("a", href=True) if a["href"].startswith("tel:")]
    return {"has_heading": True, "tel_links": len(tel), "pass": len(tel) >= 1}


def check_services_section(soup) -> dict:
    has_heading = any(_text(h) == "Services" for h in soup.find_all("h2"))
    badges = soup.select('[class*="services-card__badge"]')
    return {
        "has_heading": has_heading,
        "badges": len(badges),
        "labels": [_text(b) for b in badges],
        "pass": has_heading and len(badges) > 0,
    }


def check_back_link(soup) -> dict:
    links = _links_named(_main(soup), r"back to.*directory", soup)
    hrefs = [a["href"] for a in links]
    return {"hrefs": hrefs, "pass": LISTING_ANCHOR in hrefs}


def check_website_link(soup, expected_website: str | None) -> dict:
    """The outbound website link exists exactly when the record has a website."""
    outbound = [
        a for a in _main(soup).find_all("a", href=True)
        if a["href"].startswith(("http://", "https://"))
    ]
    hrefs = [a["href"] for a in outbound]

    if expected_website is None:
        ok = not hrefs
        problem = "" if ok else f"Unexpected external link(s) on a record without a website: {hrefs}"
    else:
        ok = expected_website in hrefs
        problem = "" if ok else f"Website link {expected_website} not rendered"
    return {"hrefs": hrefs, "problem": problem, "pass": ok}
