import pytest
from bs4 import BeautifulSoup

from src.validation import validate_page
from src.validation.checks import accessible_name, check_breadcrumb, check_tel_links

WEBSITE = "https://localplumbingservicesdartford.co.uk/"


def _inject_into_main(html: str, fragment: str) -> str:
    return html.replace('<main id="main">', f'<main id="main">\n{fragment}', 1)


# ── Generated pages pass ──────────────────────────────────────────────────


def test_homepage_passes(home_html, expected_slugs):
    results = validate_page(home_html, "home", expected_slugs=expected_slugs)

    assert results["issues"] == []
    assert results["grade"] == "A+"
    assert results["plumber_cards"]["slugs"] == expected_slugs
    assert results["primary_cta"]["hrefs"] == ["/#plumbers"]


def test_detail_page_passes(detail_html):
    results = validate_page(detail_html, "plumber", expected_website=WEBSITE)

    assert results["pass"], results["issues"]
    assert results["structured_data"]["type"] == "Plumber"
    assert results["breadcrumb"]["home_href"] == "/"
    assert results["back_link"]["hrefs"] == ["/#plumbers"]
    assert results["rating_subheadline"]["text"] == "4.9 ★ rated plumber in Dartford"


def test_unknown_page_kind(home_html):
    with pytest.raises(ValueError, match="Unknown page kind"):
        validate_page(home_html, "about")


# ── Homepage failures ─────────────────────────────────────────────────────


def test_missing_card_detected(home_html, expected_slugs):
    soup = BeautifulSoup(home_html, "html.parser")
    soup.select("article.card")[-1].decompose()

    results = validate_page(str(soup), "home", expected_slugs=expected_slugs)

    assert not results["pass"]
    assert "Expected 10 plumber cards, found 9" in results["issues"]
    assert any("allen-co-plumbing-and-heating-services-ltd" in i for i in results["issues"])


def test_card_with_two_call_buttons(home_html, expected_slugs):
    soup = BeautifulSoup(home_html, "html.parser")
    extra = soup.new_tag("a", href="tel:01322270118")
    extra.string = "Call again"
    soup.select("article.card")[0].append(extra)

    results = validate_page(str(soup), "home", expected_slugs=expected_slugs)
    assert any("has 2 call buttons" in i for i in results["issues"])


def test_missing_section_heading(home_html):
    html = home_html.replace("Emergency Repairs", "Urgent Jobs")
    results = validate_page(html, "home")
    assert results["sections"]["missing"] == ["Emergency Repairs"]


def test_primary_cta_must_target_listing(home_html):
    html = home_html.replace('<a class="btn" href="/#plumbers">', '<a class="btn" href="/plumbers">')
    results = validate_page(html, "home")
    assert not results["primary_cta"]["pass"]


# ── Detail page failures ──────────────────────────────────────────────────


def test_malformed_tel_href(detail_html):
    html = detail_html.replace('href="tel:01322270118"', 'href="tel:01322 270 118"')
    results = validate_page(html, "plumber", expected_website=WEBSITE)
    assert results["tel_links"]["invalid"]
    assert not results["pass"]


def test_breadcrumb_needs_label(detail_html):
    html = detail_html.replace('aria-label="Breadcrumb"', 'aria-label="Trail"')
    results = validate_page(html, "plumber", expected_website=WEBSITE)
    assert "Breadcrumb navigation with a Home link not found" in results["issues"]


def test_breadcrumb_by_labelledby():
    soup = BeautifulSoup(
        '<span id="bc">Breadcrumb</span><nav aria-labelledby="bc"><a href="/">Home</a></nav>',
        "html.parser",
    )
    assert check_breadcrumb(soup)["pass"]


def test_duplicate_structured_data(detail_html):
    html = detail_html.replace("</head>", '<script type="application/ld+json">{}</script>\n</head>')
    results = validate_page(html, "plumber", expected_website=WEBSITE)
    assert "Expected one application/ld+json block, found 2" in results["issues"]


def test_invalid_structured_data(detail_html):
    start = detail_html.index('<script type="application/ld+json">')
    end = detail_html.index("</script>", start)
    html = detail_html[:start] + '<script type="application/ld+json">{"@type": ' + detail_html[end:]

    results = validate_page(html, "plumber", expected_website=WEBSITE)
    assert "invalid JSON" in results["structured_data"]["error"]


def test_wrong_schema_type(detail_html):
    html = detail_html.replace('"@type": "Plumber"', '"@type": "Organization"')
    results = validate_page(html, "plumber", expected_website=WEBSITE)
    assert any("type 'Organization'" in i for i in results["issues"])


def test_website_link_must_match_record(detail_html):
    results = validate_page(detail_html, "plumber", expected_website=None)
    assert any("Unexpected external link" in i for i in results["issues"])

    results = validate_page(detail_html, "plumber", expected_website="https://elsewhere.example/")
    assert any("not rendered" in i for i in results["issues"])


def test_new_tab_link_needs_rel(detail_html):
    html = detail_html.replace(' rel="noopener noreferrer"', "")
    results = validate_page(html, "plumber", expected_website=WEBSITE)
    assert results["external_links"]["unsafe"] == [WEBSITE]


def test_services_heading_must_be_exact(detail_html):
    html = detail_html.replace(">Services</h2>", ">Our Services</h2>")
    results = validate_page(html, "plumber", expected_website=WEBSITE)
    assert "'Services' heading not found" in results["issues"]


# ── Accessibility failures ────────────────────────────────────────────────


def test_image_without_alt(home_html):
    html = home_html.replace('alt="Dartford Plumbers logo"', 'alt=""')
    results = validate_page(html, "home")
    assert results["images_alt"]["missing"] == ["/logo.svg"]


def test_unnamed_link_and_button(home_html):
    html = _inject_into_main(home_html, '<a href="/nowhere"></a><button type="button"></button>')
    results = validate_page(html, "home")
    assert results["link_names"]["unnamed"] == ["/nowhere"]
    assert not results["button_names"]["pass"]


def test_form_controls_need_labels(home_html):
    html = _inject_into_main(
        home_html,
        '<label for="pc">Postcode</label><input id="pc" name="postcode">'
        '<input name="street"><input type="hidden" name="token">'
        '<select aria-label="Service"></select>',
    )
    results = validate_page(html, "home")
    assert results["form_labels"]["unlabelled"] == ["street"]


def test_two_h1s(home_html):
    html = _inject_into_main(home_html, "<h1>Another headline</h1>")
    results = validate_page(html, "home")
    assert "Expected exactly one H1 in main, found 2" in results["issues"]


def test_missing_skip_link_is_a_warning(home_html):
    html = home_html.replace('<a class="skip-link" href="#main">Skip to main content</a>', "")
    results = validate_page(html, "home")
    assert results["issues"] == []
    assert "No skip link (main landmark present)" in results["warnings"]
    assert results["grade"] == "A"


def test_long_meta_description_warns(home_html):
    long = "Dartford plumbers " * 12
    html = home_html.replace(
        'name="description" content="', f'name="description" content="{long}', 1
    )
    results = validate_page(html, "home")
    assert any("Meta description is long" in w for w in results["warnings"])


def test_bad_lang_and_title(home_html):
    html = home_html.replace('<html lang="en-GB">', '<html lang="english">')
    html = html.replace("<title>Dartford Plumbers | Find a Trusted Dartford Plumber Today</title>", "<title>Home</title>")
    results = validate_page(html, "home")
    assert not results["lang"]["pass"]
    assert not results["title"]["pass"]


# ── Helpers ───────────────────────────────────────────────────────────────


@pytest.mark.parametrize("markup,name", [
    ('<span id="n">Call Supreme</span><a href="tel:1" aria-labelledby="n">x</a>', "Call Supreme"),
    ('<a href="tel:1" aria-label="Call now">☎</a>', "Call now"),
    ('<a href="/"><img src="/logo.svg" alt="Home"></a>', "Home"),
    ('<a href="/" title="Homepage"></a>', "Homepage"),
    ('<a href="/">  View   <b>Details</b> </a>', "View Details"),
])
def test_accessible_name(markup, name):
    soup = BeautifulSoup(markup, "html.parser")
    assert accessible_name(soup.find("a"), soup) == name


def test_tel_link_format():
    soup = BeautifulSoup('<a href="tel:01322270118">a</a><a href="tel:+441322">b</a>', "html.parser")
    result = check_tel_links(soup)
    assert result["count"] == 2
    assert result["invalid"] == ["tel:+441322"]
