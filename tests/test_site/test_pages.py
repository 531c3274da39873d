import json
from dataclasses import replace

from bs4 import BeautifulSoup

from src.models import PlumberRecord
from src.site import homepage_html, plumber_page_html
from src.site.pages import detail_title, render_markdown


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# ── Homepage ──────────────────────────────────────────────────────────────


def test_homepage_lists_every_plumber_in_order(site_data, expected_slugs):
    soup = _soup(homepage_html(site_data))
    cards = soup.select("#plumbers article.card")

    assert [c.h3.get_text(strip=True) for c in cards] == [p.name for p in site_data.plumbers]
    detail_links = [c.find("a", class_="btn-outline")["href"] for c in cards]
    assert detail_links == [f"/plumbers/{s}" for s in expected_slugs]


def test_homepage_card_call_buttons(site_data):
    soup = _soup(homepage_html(site_data))
    jaguar = next(c for c in soup.select("article.card") if "Jaguar" in c.h3.get_text())

    tel = jaguar.select('a[href^="tel:"]')
    assert len(tel) == 1
    assert tel[0]["href"] == "tel:441322918260"


def test_homepage_card_badges_capped_at_three(site_data):
    soup = _soup(homepage_html(site_data))
    first = soup.select("article.card")[0]
    assert len(first.select(".services-card__badge")) == 3


def test_homepage_hero_and_sections(site_data):
    soup = _soup(homepage_html(site_data))
    main = soup.main

    assert len(main.find_all("h1")) == 1
    assert main.h1.get_text(strip=True) == "Find Trusted Dartford Plumbers"
    cta = main.find("a", string="View Local Plumbers")
    assert cta["href"] == "/#plumbers"

    headings = [h.get_text(strip=True) for h in main.find_all(["h2", "h3"])]
    assert "When You Need a Plumber in Dartford" in headings
    assert "Emergency Repairs" in headings
    assert "Why Use This Directory?" in headings
    assert "Top 10 Plumbers in Dartford" in headings


def test_homepage_emergency_call_goes_to_first_plumber(site_data):
    soup = _soup(homepage_html(site_data))
    hero_tel = soup.select_one("header.hero a.btn-call")
    assert hero_tel["href"] == site_data.plumbers[0].tel_href


def test_homepage_renders_intro_markdown(site_data):
    soup = _soup(homepage_html(site_data))
    assert soup.find("strong", string="10 highly rated plumbers") is not None


def test_homepage_document_shell(site_data):
    html = homepage_html(site_data)
    soup = _soup(html)

    assert html.startswith("<!DOCTYPE html>")
    assert soup.html["lang"] == "en-GB"
    assert soup.find("link", rel="canonical")["href"] == "https://dartfordplumber.com/"
    assert soup.find("meta", attrs={"property": "og:title"})["content"] == soup.title.get_text()
    assert soup.find("a", class_="skip-link")["href"] == "#main"
    assert not soup.find_all("script", attrs={"type": "application/ld+json"})


# ── Detail page ───────────────────────────────────────────────────────────


def test_detail_page_core_content(site_data):
    plumber = site_data.plumber_by_slug("local-plumbing-services")
    soup = _soup(plumber_page_html(site_data, plumber))
    main = soup.main

    assert main.h1.get_text(strip=True) == "Local Plumbing Services"
    assert main.find(string="4.9 ★ rated plumber in Dartford") is not None
    assert soup.title.get_text() == "Local Plumbing Services | Dartford Plumber, 4.9 ★ Rated"

    crumbs = soup.find("nav", attrs={"aria-label": "Breadcrumb"})
    assert crumbs.a["href"] == "/"
    assert crumbs.find(attrs={"aria-current": "page"}).get_text() == "Local Plumbing Services"

    back = main.find("a", class_="back-link")
    assert back["href"] == "/#plumbers"
    assert "Back to Plumber Directory" in back.get_text()


def test_detail_page_contact_and_website(site_data):
    plumber = site_data.plumber_by_slug("supreme-plumbers")
    soup = _soup(plumber_page_html(site_data, plumber))
    contact = soup.find("h2", string="Contact Information").find_parent("section")

    assert contact.find("a", href="tel:07956412903") is not None
    site_link = contact.find("a", href="https://supremeplumbers.co.uk/")
    assert site_link["target"] == "_blank"
    assert set(site_link["rel"]) == {"noopener", "noreferrer"}


def test_detail_page_without_website_has_no_outbound_link(site_data):
    plumber = site_data.plumber_by_slug("k-j-heating")
    soup = _soup(plumber_page_html(site_data, plumber))

    outbound = [a["href"] for a in soup.main.find_all("a", href=True) if a["href"].startswith("http")]
    assert outbound == []
    assert "Visit Website" not in soup.get_text()


def test_detail_page_services_badges(site_data):
    plumber = site_data.plumber_by_slug("local-plumbing-services")
    soup = _soup(plumber_page_html(site_data, plumber))

    assert soup.find("h2", string="Services") is not None
    badges = [b.get_text() for b in soup.select(".services-card__badge")]
    assert badges == list(plumber.services)


def test_detail_page_service_fallback(site_data):
    plumber = replace(site_data.plumbers[0], services=())
    soup = _soup(plumber_page_html(site_data, plumber))
    assert [b.get_text() for b in soup.select(".services-card__badge")] == ["General Plumbing"]


def test_detail_page_about_section_only_with_description(site_data):
    with_desc = site_data.plumber_by_slug("the-plumber")
    without = site_data.plumber_by_slug("supreme-plumbers")

    assert "About The Plumber" in plumber_page_html(site_data, with_desc)
    assert "About Supreme Plumbers" not in plumber_page_html(site_data, without)


def test_detail_page_structured_data(site_data):
    plumber = site_data.plumber_by_slug("allen-co-plumbing-and-heating-services-ltd")
    soup = _soup(plumber_page_html(site_data, plumber))
    scripts = soup.find_all("script", attrs={"type": "application/ld+json"})

    assert len(scripts) == 1
    data = json.loads(scripts[0].string)
    assert data["@type"] == "Plumber"
    assert data["name"] == "Allen & Co Plumbing and Heating Services Ltd"
    assert data["telephone"] == "01322 660 742"
    assert data["url"] == "https://dartfordplumber.com/plumbers/allen-co-plumbing-and-heating-services-ltd"
    assert data["aggregateRating"]["reviewCount"] == 35


def test_untrusted_text_is_escaped(site_data):
    plumber = PlumberRecord(
        name='Bob <script>alert("x")</script> Plumbing',
        slug="bob-script-alert-x-script-plumbing",
        phone="01322 000 000",
        rating=4.0,
        description="Pipes </script><b>fixed</b>",
    )
    html = plumber_page_html(site_data, plumber)
    soup = _soup(html)

    assert soup.find("b") is None
    assert len(soup.find_all("script")) == 1
    data = json.loads(soup.find("script", attrs={"type": "application/ld+json"}).string)
    assert data["name"] == plumber.name


def test_detail_titles_unique(site_data):
    titles = {detail_title(p) for p in site_data.plumbers}
    assert len(titles) == len(site_data.plumbers)


def test_render_markdown():
    assert render_markdown("") == ""
    assert "<strong>fast</strong>" in render_markdown("Call **fast**")
