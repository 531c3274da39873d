"""Immutable records handed from the loaders to the page generator."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class PlumberRecord:
    name: str
    slug: str
    phone: str
    rating: float
    reviews_count: int | None = None
    services: tuple[str, ...] = ()
    website: str | None = None
    address: str | None = None
    description: str | None = None

    @property
    def tel_href(self) -> str:
        """Dialable href: 'tel:' followed by the phone's digits only."""
        return "tel:" + re.sub(r"\D", "", self.phone)

    @property
    def rating_label(self) -> str:
        return f"{self.rating:.1f}"


@dataclass(frozen=True)
class ServiceBlurb:
    title: str
    body: str


@dataclass(frozen=True)
class HomepageCopy:
    headline: str
    cta: str
    subheadline: str = ""
    call_cta: str = "Call for Emergency Help"
    meta_title: str = ""
    meta_description: str = ""
    intro_heading: str = ""
    intro_body: str = ""
    services_heading: str = ""
    services: tuple[ServiceBlurb, ...] = ()
    why_heading: str = ""
    why_points: tuple[str, ...] = ()


@dataclass(frozen=True)
class SiteData:
    """Everything one build reads. Loaded once, never written back."""

    plumbers: tuple[PlumberRecord, ...]
    copy: HomepageCopy
    origin: str = ""
    lang: str = "en-GB"

    def plumber_by_slug(self, slug: str) -> PlumberRecord | None:
        for plumber in self.plumbers:
            if plumber.slug == slug:
                return plumber
        return None
