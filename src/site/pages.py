"""Render the homepage and the per-plumber detail pages."""

from __future__ import annotations

import markdown as md_lib

from src.config import (
    CARD_BADGE_LIMIT,
    FALLBACK_SERVICE,
    LISTING_ANCHOR,
    PLUMBER_ROUTE,
    TOWN,
)
from src.models import PlumberRecord, SiteData
from src.site.layout import base_html, esc, json_ld
from src.site.seo import absolute_url, plumber_schema


def plumber_href(plumber: PlumberRecord) -> str:
    return PLUMBER_ROUTE.format(slug=plumber.slug)


def render_markdown(text: str) -> str:
    """Convert authored Markdown copy to HTML."""
    if not text:
        return ""
    return md_lib.markdown(text, extensions=["extra", "sane_lists", "smarty"])


def rating_text(plumber: PlumberRecord) -> str:
    text = f"★ {plumber.rating_label}"
    if plumber.reviews_count is not None:
        noun = "review" if plumber.reviews_count == 1 else "reviews"
        text += f" ({plumber.reviews_count} {noun})"
    return text


def badges_html(services: tuple[str, ...]) -> str:
    items = "".join(
        f'<li><span class="services-card__badge">{esc(s)}</span></li>' for s in services
    )
    return f'<ul class="badges">{items}</ul>'


def call_button(plumber: PlumberRecord, label: str = "Call") -> str:
    return (
        f'<a class="btn-call" href="{esc(plumber.tel_href)}">{esc(label)}'
        f'<span class="sr-only"> {esc(plumber.name)} on {esc(plumber.phone)}</span></a>'
    )


# ── Homepage ──────────────────────────────────────────────────────────────


def plumber_card(plumber: PlumberRecord) -> str:
    services = plumber.services[:CARD_BADGE_LIMIT]
    badges = badges_html(services) if services else ""
    return f"""
    <article class="card">
      <h3>{esc(plumber.name)}</h3>
      <p class="rating">{esc(rating_text(plumber))}</p>
      {badges}
      <div class="actions">
        <a class="btn btn-outline" href="{esc(plumber_href(plumber))}">View Details<span class="sr-only"> for {esc(plumber.name)}</span></a>
        {call_button(plumber)}
      </div>
    </article>""".rstrip()


def homepage_html(site: SiteData) -> str:
    copy = site.copy
    emergency = site.plumbers[0]

    subheadline = copy.subheadline or f"{len(site.plumbers)} local plumbers ready to help."
    intro_body = render_markdown(copy.intro_body)

    cards = "\n".join(plumber_card(p) for p in site.plumbers)

    blurbs = "\n".join(
        f"""
      <div class="blurb">
        <h3>{esc(s.title)}</h3>
        <p>{esc(s.body)}</p>
      </div>""".rstrip()
        for s in copy.services
    )
    services_section = ""
    if blurbs:
        services_section = f"""
  <section aria-labelledby="services-heading">
    <div class="wrap">
      <h2 id="services-heading">{esc(copy.services_heading)}</h2>
      <div class="blurbs">{blurbs}
      </div>
    </div>
  </section>"""

    why_section = ""
    if copy.why_points:
        points = "".join(f"<li>{esc(p)}</li>" for p in copy.why_points)
        why_section = f"""
  <section aria-labelledby="why-heading">
    <div class="wrap">
      <h2 id="why-heading">{esc(copy.why_heading)}</h2>
      <ul class="checklist">{points}</ul>
    </div>
  </section>"""

    body = f"""
<main id="main">
  <header class="hero">
    <div class="wrap">
      <h1>{esc(copy.headline)}</h1>
      <p class="sub">{esc(subheadline)}</p>
      <div class="actions">
        <a class="btn" href="{LISTING_ANCHOR}">{esc(copy.cta)}</a>
        <a class="btn-call" href="{esc(emergency.tel_href)}">{esc(copy.call_cta)}<span class="sr-only"> ({esc(emergency.name)}, {esc(emergency.phone)})</span></a>
      </div>
    </div>
  </header>

  <section aria-labelledby="intro-heading">
    <div class="wrap">
      <h2 id="intro-heading">{esc(copy.intro_heading)}</h2>
      {intro_body}
    </div>
  </section>

  <section id="plumbers" aria-labelledby="plumbers-heading">
    <div class="wrap">
      <h2 id="plumbers-heading">Top {len(site.plumbers)} Plumbers in {esc(TOWN)}</h2>
      <div class="cards">
{cards}
      </div>
    </div>
  </section>
{services_section}
{why_section}
</main>
""".strip()

    return base_html(
        lang=site.lang,
        title=copy.meta_title,
        description=copy.meta_description,
        canonical=absolute_url(site.origin, "/"),
        body=body,
    )


# ── Detail page ───────────────────────────────────────────────────────────


def detail_title(plumber: PlumberRecord) -> str:
    return f"{plumber.name} | {TOWN} Plumber, {plumber.rating_label} ★ Rated"


def detail_description(plumber: PlumberRecord) -> str:
    services = ", ".join(plumber.services[:CARD_BADGE_LIMIT]) or FALLBACK_SERVICE
    text = f"{plumber.name} is a {plumber.rating_label}-star rated plumber in {TOWN}. {services}. Call {plumber.phone}."
    return text


def contact_section(plumber: PlumberRecord) -> str:
    rows = [
        "<dt>Phone</dt>"
        f'<dd><a href="{esc(plumber.tel_href)}">{esc(plumber.phone)}</a></dd>'
    ]
    if plumber.address:
        rows.append(f"<dt>Address</dt><dd>{esc(plumber.address)}</dd>")
    if plumber.website:
        rows.append(
            "<dt>Website</dt>"
            f'<dd><a href="{esc(plumber.website)}" target="_blank" rel="noopener noreferrer">'
            f'Visit Website<span class="sr-only"> of {esc(plumber.name)} (opens in a new tab)</span></a></dd>'
        )
    return f"""
  <section class="contact" aria-labelledby="contact-heading">
    <div class="wrap">
      <h2 id="contact-heading">Contact Information</h2>
      <dl>{"".join(rows)}</dl>
    </div>
  </section>""".rstrip()


def plumber_page_html(site: SiteData, plumber: PlumberRecord) -> str:
    services = plumber.services or (FALLBACK_SERVICE,)

    about = ""
    if plumber.description:
        about = f"""
  <section aria-labelledby="about-heading">
    <div class="wrap">
      <h2 id="about-heading">About {esc(plumber.name)}</h2>
      <p>{esc(plumber.description)}</p>
    </div>
  </section>"""

    body = f"""
<main id="main">
  <nav class="breadcrumb wrap" aria-label="Breadcrumb">
    <ol>
      <li><a href="/">Home</a></li>
      <li><span aria-current="page">{esc(plumber.name)}</span></li>
    </ol>
  </nav>

  <header class="hero">
    <div class="wrap">
      <h1>{esc(plumber.name)}</h1>
      <p class="sub">{esc(plumber.rating_label)} ★ rated plumber in {esc(TOWN)}</p>
      <div class="actions">
        {call_button(plumber, "Call Now")}
      </div>
    </div>
  </header>
{contact_section(plumber)}

  <section aria-labelledby="services-heading">
    <div class="wrap">
      <h2 id="services-heading">Services</h2>
      {badges_html(services)}
    </div>
  </section>
{about}

  <section aria-label="More plumbers">
    <div class="wrap">
      <a class="back-link" href="{LISTING_ANCHOR}"><span aria-hidden="true">&larr;&nbsp;</span>Back to Plumber Directory</a>
    </div>
  </section>
</main>
""".strip()

    schema = json_ld(plumber_schema(site, plumber))
    head_extra = f'  <script type="application/ld+json">\n{schema}\n  </script>'

    return base_html(
        lang=site.lang,
        title=detail_title(plumber),
        description=detail_description(plumber),
        canonical=absolute_url(site.origin, plumber_href(plumber)),
        body=body,
        og_type="business.business",
        head_extra=head_extra,
    )


def page_titles(site: SiteData) -> dict[str, str]:
    """Route -> <title>, used to check uniqueness before anything is written."""
    titles = {"/": site.copy.meta_title}
    for plumber in site.plumbers:
        titles[plumber_href(plumber)] = detail_title(plumber)
    return titles
