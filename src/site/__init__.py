"""Static page generation: HTML templates, structured data, sitemaps, build."""

from src.site.builder import build_site, render_site, write_files
from src.site.pages import homepage_html, plumber_href, plumber_page_html

__all__ = [
    "build_site",
    "render_site",
    "write_files",
    "homepage_html",
    "plumber_href",
    "plumber_page_html",
]
