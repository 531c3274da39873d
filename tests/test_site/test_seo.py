from dataclasses import replace

from bs4 import BeautifulSoup

from src.site.seo import absolute_url, page_paths, plumber_schema, robots_txt, sitemap_files


def test_absolute_url():
    assert absolute_url("https://dartfordplumber.com", "/") == "https://dartfordplumber.com/"
    assert absolute_url("https://dartfordplumber.com/", "/plumbers/x") == "https://dartfordplumber.com/plumbers/x"
    assert absolute_url("", "/plumbers/x") == "/plumbers/x"


def test_page_paths_homepage_first(site_data, expected_slugs):
    assert page_paths(site_data) == ["/"] + [f"/plumbers/{s}" for s in expected_slugs]


def test_schema_minimal_record(site_data):
    plumber = replace(site_data.plumbers[0], address=None, reviews_count=None, website=None, services=())
    data = plumber_schema(site_data, plumber)

    assert data["@context"] == "https://schema.org"
    assert data["@type"] == "Plumber"
    assert data["areaServed"] == "Dartford"
    for key in ("address", "aggregateRating", "sameAs", "knowsAbout"):
        assert key not in data


def test_schema_full_record(site_data):
    plumber = site_data.plumber_by_slug("local-plumbing-services")
    data = plumber_schema(site_data, plumber)

    assert data["address"]["streetAddress"] == "14 Lowfield Street, Dartford DA1 1HD"
    assert data["aggregateRating"] == {
        "@type": "AggregateRating",
        "ratingValue": 4.9,
        "reviewCount": 187,
        "bestRating": 5,
    }
    assert data["sameAs"] == ["https://localplumbingservicesdartford.co.uk/"]
    assert "Emergency plumber" in data["knowsAbout"]


def test_sitemap_index_points_at_urlset(site_data):
    files = sitemap_files(site_data)
    assert set(files) == {"sitemap-index.xml", "sitemap-0.xml"}

    index = BeautifulSoup(files["sitemap-index.xml"], "html.parser")
    assert [loc.get_text() for loc in index.find_all("loc")] == ["https://dartfordplumber.com/sitemap-0.xml"]

    urlset = BeautifulSoup(files["sitemap-0.xml"], "html.parser")
    locs = [loc.get_text() for loc in urlset.find_all("loc")]
    assert locs == [absolute_url(site_data.origin, p) for p in page_paths(site_data)]
    assert len(locs) == 11


def test_sitemaps_have_no_timestamps(site_data):
    for content in sitemap_files(site_data).values():
        assert "lastmod" not in content


def test_generated_robots():
    assert robots_txt("https://example.org") == (
        "User-agent: *\nAllow: /\n\nSitemap: https://example.org/sitemap-index.xml\n"
    )
