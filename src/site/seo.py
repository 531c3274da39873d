"""Structured data, sitemaps and robots policy."""

from __future__ import annotations

from src.config import PLUMBER_ROUTE, SITEMAP_INDEX, SITEMAP_PAGE, TOWN
from src.models import PlumberRecord, SiteData
from src.site.layout import esc


def absolute_url(origin: str, path: str) -> str:
    if not origin:
        return path
    return origin.rstrip("/") + "/" + path.lstrip("/")


def plumber_schema(site: SiteData, plumber: PlumberRecord) -> dict:
    """schema.org Plumber (a LocalBusiness subtype) for one detail page."""
    data = {
        "@context": "https://schema.org",
        "@type": "Plumber",
        "name": plumber.name,
        "telephone": plumber.phone,
        "url": absolute_url(site.origin, PLUMBER_ROUTE.format(slug=plumber.slug)),
        "areaServed": TOWN,
    }
    if plumber.address:
        data["address"] = {
            "@type": "PostalAddress",
            "streetAddress": plumber.address,
            "addressLocality": TOWN,
            "addressCountry": "GB",
        }
    if plumber.reviews_count:
        data["aggregateRating"] = {
            "@type": "AggregateRating",
            "ratingValue": plumber.rating,
            "reviewCount": plumber.reviews_count,
            "bestRating": 5,
        }
    if plumber.website:
        data["sameAs"] = [plumber.website]
    if plumber.services:
        data["knowsAbout"] = list(plumber.services)
    return data


def page_paths(site: SiteData) -> list[str]:
    """Every generated document route, homepage first, in dataset order."""
    return ["/"] + [PLUMBER_ROUTE.format(slug=p.slug) for p in site.plumbers]


def sitemap_xml(urls: list[str]) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "".join(f"  <url><loc>{esc(u)}</loc></url>\n" for u in urls)
        + "</urlset>\n"
    )


def sitemap_index_xml(origin: str, sitemap_files: list[str]) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "".join(
            f"  <sitemap><loc>{esc(absolute_url(origin, name))}</loc></sitemap>\n"
            for name in sitemap_files
        )
        + "</sitemapindex>\n"
    )


def sitemap_files(site: SiteData) -> dict[str, str]:
    """Filename -> content for the sitemap index and its single urlset."""
    urls = [absolute_url(site.origin, p) for p in page_paths(site)]
    return {
        SITEMAP_INDEX: sitemap_index_xml(site.origin, [SITEMAP_PAGE]),
        SITEMAP_PAGE: sitemap_xml(urls),
    }


def robots_txt(origin: str) -> str:
    return f"User-agent: *\nAllow: /\n\nSitemap: {absolute_url(origin, SITEMAP_INDEX)}\n"
