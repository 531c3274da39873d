"""HTML primitives shared by every page: escaping, document shell, header, footer."""

from __future__ import annotations

import html
import json

from src.config import LISTING_ANCHOR, LOGO_FILENAME, SITE_NAME

CSS = """
*,*::before,*::after{box-sizing:border-box}
html{-webkit-text-size-adjust:100%}
body{margin:0;font-family:system-ui,-apple-system,"Segoe UI",Roboto,Arial,sans-serif;font-size:1rem;line-height:1.6;color:#1f2933;background:#ffffff;overflow-wrap:break-word}
img{max-width:100%;height:auto}
a{color:#0b4f8a}
a:focus-visible{outline:3px solid #f5a623;outline-offset:2px}
.sr-only{position:absolute;width:1px;height:1px;padding:0;margin:-1px;overflow:hidden;clip:rect(0,0,0,0);white-space:nowrap;border:0}
.skip-link{position:absolute;left:8px;top:-60px;display:inline-flex;align-items:center;min-height:44px;padding:0 16px;background:#0b4f8a;color:#ffffff;z-index:10}
.skip-link:focus{top:8px}
.wrap{max-width:1080px;margin:0 auto;padding:0 16px}
.topbar{background:#ffffff;border-bottom:1px solid #d9e2ec}
.topbar-inner{display:flex;align-items:center;justify-content:space-between;gap:12px;min-height:60px}
.brand{display:inline-flex;align-items:center;gap:8px;min-height:44px;font-weight:700;color:#102a43;text-decoration:none}
.nav a{display:inline-flex;align-items:center;min-height:44px;min-width:44px;padding:0 8px;font-weight:600}
.hero{background:#0b4f8a;color:#ffffff;padding:40px 0}
.hero h1{margin:0 0 12px;font-size:1.9rem;line-height:1.2}
.hero .sub{margin:0 0 20px;font-size:1.1rem;color:#ffffff}
.actions{display:flex;flex-wrap:wrap;gap:12px}
.btn,.btn-call{display:inline-flex;align-items:center;justify-content:center;min-height:48px;min-width:44px;padding:0 20px;border-radius:8px;font-weight:700;text-decoration:none}
.btn{background:#ffffff;color:#0b4f8a;border:2px solid #ffffff}
.btn-call{background:#b42318;color:#ffffff;border:2px solid #b42318}
.btn-outline{background:transparent;color:#0b4f8a;border:2px solid #0b4f8a}
main{display:block}
section{padding:32px 0}
section h2{margin:0 0 16px;font-size:1.5rem;line-height:1.25;color:#102a43}
.muted{color:#52606d}
.cards{display:grid;grid-template-columns:1fr;gap:16px;margin:0;padding:0}
.card{border:1px solid #d9e2ec;border-radius:12px;padding:20px;background:#ffffff}
.card h3{margin:0 0 4px;font-size:1.2rem;color:#102a43}
.card .rating{margin:0 0 12px;color:#52606d}
.card .actions{margin-top:16px}
.badges{display:flex;flex-wrap:wrap;gap:8px;margin:0;padding:0;list-style:none}
.services-card__badge{display:inline-block;padding:4px 12px;border-radius:999px;background:#e6f0fa;color:#0b4f8a;font-size:.9rem;font-weight:600}
.blurbs{display:grid;grid-template-columns:1fr;gap:16px}
.blurb h3{margin:0 0 6px;font-size:1.1rem;color:#102a43}
.blurb p{margin:0}
.checklist{margin:0;padding-left:20px}
.breadcrumb ol{display:flex;flex-wrap:wrap;align-items:center;gap:4px;margin:0;padding:8px 0;list-style:none}
.breadcrumb li+li::before{content:"/";margin-right:4px;color:#52606d}
.breadcrumb a{display:inline-flex;align-items:center;min-height:44px;min-width:44px}
.contact dl{display:grid;grid-template-columns:1fr;gap:4px 16px;margin:0 0 16px}
.contact dt{font-weight:700}
.contact dd{margin:0 0 8px}
.contact a{display:inline-flex;align-items:center;min-height:44px}
.back-link{display:inline-flex;align-items:center;min-height:44px;font-weight:700}
footer{background:#1f2933;color:#e4e7eb;padding:24px 0;margin-top:24px}
footer a{color:#ffffff;display:inline-flex;align-items:center;min-height:44px}
footer p{margin:0}
@media (min-width:768px){
  .hero h1{font-size:2.4rem}
  .cards{grid-template-columns:repeat(2,1fr)}
  .blurbs{grid-template-columns:repeat(2,1fr)}
  .contact dl{grid-template-columns:max-content 1fr}
}
@media (min-width:1024px){
  .cards{grid-template-columns:repeat(3,1fr)}
}
""".strip()


def esc(s) -> str:
    return html.escape(str(s), quote=True)


def json_ld(data: dict) -> str:
    """Serialize structured data for a <script> block.

    '</' is escaped so a value can never close the script element early.
    """
    payload = json.dumps(data, ensure_ascii=False, indent=2)
    return payload.replace("</", "<\\/")


def topbar_html() -> str:
    return f"""
<div class="topbar">
  <div class="wrap topbar-inner">
    <a class="brand" href="/">
      <img src="/{LOGO_FILENAME}" alt="{esc(SITE_NAME)} logo" width="32" height="32" />
      <span>{esc(SITE_NAME)}</span>
    </a>
    <nav class="nav" aria-label="Primary navigation">
      <a href="{LISTING_ANCHOR}">Plumbers</a>
    </nav>
  </div>
</div>
""".strip()


def footer_html() -> str:
    return f"""
<footer>
  <div class="wrap">
    <p>Independent directory of local plumbers in Dartford, Kent.</p>
    <p><a href="{LISTING_ANCHOR}">Browse all plumbers</a></p>
    <p>&copy; {esc(SITE_NAME)}. Listings are based on public business information.</p>
  </div>
</footer>
""".strip()


def base_html(
    *,
    lang: str,
    title: str,
    description: str,
    canonical: str,
    body: str,
    og_type: str = "website",
    head_extra: str = "",
) -> str:
    """Full document: head metadata, skip link, top bar, body, footer."""
    return f"""<!DOCTYPE html>
<html lang="{esc(lang)}">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{esc(title)}</title>
  <meta name="description" content="{esc(description)}" />
  <link rel="canonical" href="{esc(canonical)}" />
  <link rel="icon" type="image/svg+xml" href="/{LOGO_FILENAME}" />
  <meta property="og:type" content="{esc(og_type)}" />
  <meta property="og:title" content="{esc(title)}" />
  <meta property="og:description" content="{esc(description)}" />
  <meta property="og:url" content="{esc(canonical)}" />
  <meta property="og:site_name" content="{esc(SITE_NAME)}" />
  <style>
{CSS}
  </style>
{head_extra}
</head>
<body>
  <a class="skip-link" href="#main">Skip to main content</a>
{topbar_html()}
{body}
{footer_html()}
</body>
</html>
"""
