"""SEO metadata, web fonts and the site's section map.

Everything here is pure: the generator turns a configuration into
``SeoMeta``, a font stylesheet URL and a list of sections/routes, then hands
them to the templates.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict, Field

from portfolify.frameworks import LayoutMode
from portfolify.models import PortfolioConfiguration


# ---------------------------------------------------------------------------
# Web fonts
# ---------------------------------------------------------------------------

class FontBundle(BaseModel):
    """A Google Fonts family with the weights we load and its CSS fallback."""

    model_config = ConfigDict(frozen=True)

    family: str
    weights: tuple[int, ...] = (400, 500, 600, 700)
    fallback: str = "system-ui, sans-serif"

    @property
    def query(self) -> str:
        weights = ";".join(str(weight) for weight in self.weights)
        return f"family={quote_plus(self.family)}:wght@{weights}"

    @property
    def css_stack(self) -> str:
        return f"'{self.family}', {self.fallback}"


_SERIF = "Georgia, 'Times New Roman', serif"
_MONO = "ui-monospace, SFMono-Regular, Menlo, monospace"

DEFAULT_FONT = "Inter"

FONT_BUNDLES: dict[str, FontBundle] = {
    bundle.family: bundle
    for bundle in (
        FontBundle(family="Inter", weights=(400, 500, 600, 700, 800)),
        FontBundle(family="Roboto", weights=(400, 500, 700)),
        FontBundle(family="Poppins"),
        FontBundle(family="Montserrat", weights=(400, 500, 600, 700, 800)),
        FontBundle(family="Open Sans"),
        FontBundle(family="Lato", weights=(400, 700)),
        FontBundle(family="Nunito"),
        FontBundle(family="Oswald", weights=(400, 500, 600, 700)),
        FontBundle(family="Space Grotesk"),
        FontBundle(family="Playfair Display", fallback=_SERIF),
        FontBundle(family="Cormorant Garamond", weights=(400, 500, 600, 700), fallback=_SERIF),
        FontBundle(family="Merriweather", weights=(400, 700), fallback=_SERIF),
        FontBundle(family="Lora", fallback=_SERIF),
        FontBundle(family="Source Serif 4", fallback=_SERIF),
        FontBundle(family="JetBrains Mono", fallback=_MONO),
    )
}


def resolve_font(family: str | None) -> FontBundle:
    """Return the bundle for *family*; unknown families get the default bundle."""
    if family and family in FONT_BUNDLES:
        return FONT_BUNDLES[family]
    return FONT_BUNDLES[DEFAULT_FONT]


def font_stylesheet_url(*families: str | None) -> str:
    """Google Fonts CSS2 URL loading every (resolved) family once."""
    seen: list[FontBundle] = []
    for family in families:
        bundle = resolve_font(family)
        if bundle not in seen:
            seen.append(bundle)
    query = "&".join(bundle.query for bundle in seen)
    return f"https://fonts.googleapis.com/css2?{query}&display=swap"


# ---------------------------------------------------------------------------
# Sections and routes
# ---------------------------------------------------------------------------

class Section(BaseModel):
    """A block of the generated website."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    component: str = Field(..., description="Component name in the generated project")
    slug: str = Field(..., description="Anchor id and multi-page route segment")


CORE_SECTIONS: tuple[Section, ...] = (
    Section(key="about", title="About", component="About", slug="about"),
    Section(key="skills", title="Skills", component="Skills", slug="skills"),
    Section(key="projects", title="Projects", component="Projects", slug="projects"),
)

FEATURE_SECTIONS: dict[str, Section] = {
    "gallery": Section(key="gallery", title="Gallery", component="Gallery", slug="gallery"),
    "testimonials": Section(
        key="testimonials", title="Testimonials", component="Testimonials", slug="testimonials"
    ),
    "blog": Section(key="blog", title="Blog", component="Blog", slug="blog"),
    "contact_form": Section(key="contact_form", title="Contact", component="Contact", slug="contact"),
}


def enabled_sections(configuration: PortfolioConfiguration) -> list[Section]:
    """Every section the site shows, in display order."""
    sections = list(CORE_SECTIONS)
    sections.extend(FEATURE_SECTIONS[name] for name in configuration.features.enabled())
    return sections


def home_sections(configuration: PortfolioConfiguration) -> list[Section]:
    """Sections mounted on the home page under the hero.

    Single-page sites mount everything; multi-page sites keep only the
    introduction and give every other section its own route.
    """
    sections = enabled_sections(configuration)
    if configuration.layout is LayoutMode.MULTI_PAGE:
        return [section for section in sections if section.key == "about"]
    return sections


def routed_sections(configuration: PortfolioConfiguration) -> list[Section]:
    """Sections that get a route of their own (multi-page layout only)."""
    if configuration.layout is not LayoutMode.MULTI_PAGE:
        return []
    return [section for section in enabled_sections(configuration) if section.key != "about"]


def site_routes(configuration: PortfolioConfiguration) -> list[str]:
    return ["/"] + [f"/{section.slug}" for section in routed_sections(configuration)]


# ---------------------------------------------------------------------------
# Meta tags
# ---------------------------------------------------------------------------

class SeoMeta(BaseModel):
    """Document-level metadata shared by every framework's entry document."""

    title: str
    description: str
    author: str
    keywords: list[str] = Field(default_factory=list)
    site_url: Optional[str] = None
    twitter_creator: Optional[str] = None

    def meta_tags(self) -> list[dict[str, str]]:
        """``<meta>`` tags as ``{"attr", "key", "content"}`` dicts, in document order."""
        tags: list[dict[str, str]] = [
            {"attr": "name", "key": "description", "content": self.description},
            {"attr": "name", "key": "author", "content": self.author},
        ]
        if self.keywords:
            tags.append({"attr": "name", "key": "keywords", "content": ", ".join(self.keywords)})
        tags.extend(
            [
                {"attr": "property", "key": "og:title", "content": self.title},
                {"attr": "property", "key": "og:description", "content": self.description},
                {"attr": "property", "key": "og:type", "content": "website"},
            ]
        )
        if self.site_url:
            tags.append({"attr": "property", "key": "og:url", "content": self.site_url})
        tags.extend(
            [
                {"attr": "name", "key": "twitter:card", "content": "summary_large_image"},
                {"attr": "name", "key": "twitter:title", "content": self.title},
                {"attr": "name", "key": "twitter:description", "content": self.description},
            ]
        )
        if self.twitter_creator:
            tags.append({"attr": "name", "key": "twitter:creator", "content": self.twitter_creator})
        return tags

    def next_metadata(self) -> dict[str, Any]:
        """The same data shaped as a Next.js ``Metadata`` object."""
        metadata: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "authors": [{"name": self.author}],
        }
        if self.keywords:
            metadata["keywords"] = list(self.keywords)
        open_graph: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "type": "website",
        }
        if self.site_url:
            open_graph["url"] = self.site_url
        metadata["openGraph"] = open_graph
        twitter: dict[str, Any] = {
            "card": "summary_large_image",
            "title": self.title,
            "description": self.description,
        }
        if self.twitter_creator:
            twitter["creator"] = self.twitter_creator
        metadata["twitter"] = twitter
        return metadata


def build_seo_meta(configuration: PortfolioConfiguration) -> SeoMeta:
    keywords = configuration.seo.keywords or [configuration.role, *configuration.skills[:5]]
    return SeoMeta(
        title=f"{configuration.name} | {configuration.role}",
        description=configuration.bio,
        author=configuration.name,
        keywords=keywords,
        site_url=configuration.seo.site_url,
        twitter_creator=configuration.social.twitter_handle,
    )


def sitemap_urls(configuration: PortfolioConfiguration) -> list[str]:
    """Absolute URLs for ``sitemap.xml``; empty without a site URL."""
    base = configuration.seo.site_url
    if not base:
        return []
    return [base + ("/" if route == "/" else route) for route in site_routes(configuration)]
