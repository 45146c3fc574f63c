"""Pydantic v2 models for a portfolio configuration.

``PortfolioConfiguration`` is the single value that flows from the prompt
collector (or the non-interactive defaults) into the generator.  It is
validated on construction, so everything downstream can rely on non-empty
identity fields and a normalised skill list.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator

from portfolify.catalog import ColorOverrides, Palette, Theme, effective_palette, resolve
from portfolify.frameworks import Framework, LayoutMode


# ---------------------------------------------------------------------------
# Value models
# ---------------------------------------------------------------------------

class Project(BaseModel):
    """A showcased project."""
    name: str = Field(..., description="Project title")
    description: str = Field(default="", description="One or two sentences about the project")
    tech: list[str] = Field(default_factory=list, description="Technologies used")
    repo_url: Optional[str] = Field(default=None, description="Source repository URL")
    demo_url: Optional[str] = Field(default=None, description="Live demo URL")

    @field_validator("tech")
    @classmethod
    def _strip_tech(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item and item.strip()]

    @field_validator("repo_url", "demo_url")
    @classmethod
    def _blank_url_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


SOCIAL_PLATFORMS: tuple[str, ...] = (
    "github",
    "linkedin",
    "twitter",
    "instagram",
    "behance",
    "dribbble",
    "youtube",
    "email",
)


class SocialLinks(BaseModel):
    """Links to social profiles. Every platform is optional."""
    github: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    behance: Optional[str] = None
    dribbble: Optional[str] = None
    youtube: Optional[str] = None
    email: Optional[str] = None

    @field_validator(*SOCIAL_PLATFORMS)
    @classmethod
    def _blank_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    def present(self) -> dict[str, str]:
        """Only the platforms that have a value, in canonical order."""
        return {
            platform: getattr(self, platform)
            for platform in SOCIAL_PLATFORMS
            if getattr(self, platform)
        }

    @property
    def twitter_handle(self) -> Optional[str]:
        """``@handle`` derived from the twitter link, if there is one."""
        if not self.twitter:
            return None
        value = self.twitter
        if "/" in value:
            # profile URL, with or without a scheme; the host is never the handle
            parts = urlsplit(value if "://" in value else f"//{value}")
            segments = [s for s in parts.path.split("/") if s]
            value = segments[-1] if segments else ""
        handle = value.lstrip("@")
        return f"@{handle}" if handle else None


class Features(BaseModel):
    """Optional website sections."""
    blog: bool = False
    gallery: bool = False
    contact_form: bool = True
    testimonials: bool = False

    def enabled(self) -> list[str]:
        """Names of the enabled sections in display order."""
        order = ("gallery", "testimonials", "blog", "contact_form")
        return [name for name in order if getattr(self, name)]


class FontOverrides(BaseModel):
    """User-chosen font families replacing the theme's typography."""
    heading: Optional[str] = Field(default=None, description="Heading font family")
    body: Optional[str] = Field(default=None, description="Body font family")


class SeoSettings(BaseModel):
    site_url: Optional[str] = Field(default=None, description="Public URL of the deployed site")
    keywords: list[str] = Field(default_factory=list, description="Meta keywords")

    @field_validator("site_url")
    @classmethod
    def _normalise_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().rstrip("/")
        return value or None

    @field_validator("keywords")
    @classmethod
    def _strip_keywords(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item and item.strip()]


# ---------------------------------------------------------------------------
# Portfolio configuration
# ---------------------------------------------------------------------------

class PortfolioConfiguration(BaseModel):
    """Everything the generator needs to produce one portfolio website."""

    name: str = Field(..., description="Display name of the portfolio owner")
    role: str = Field(..., description="Headline role, e.g. 'UI/UX Designer'")
    bio: str = Field(..., description="Short biography shown in the hero section")
    skills: list[str] = Field(default_factory=list, description="Ordered, de-duplicated skills")
    projects: list[Project] = Field(default_factory=list)
    social: SocialLinks = Field(default_factory=SocialLinks)
    location: Optional[str] = None
    theme: str = Field(default="developer", description="Theme key in the catalog")
    color_scheme: Optional[str] = Field(
        default=None, description="Predefined colour scheme key layered over the theme"
    )
    custom_colors: Optional[ColorOverrides] = None
    fonts: Optional[FontOverrides] = None
    features: Features = Field(default_factory=Features)
    framework: Framework = Framework.REACT_VITE
    layout: LayoutMode = LayoutMode.SINGLE_PAGE
    seo: SeoSettings = Field(default_factory=SeoSettings)

    @field_validator("name", "role", "bio")
    @classmethod
    def _require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("skills")
    @classmethod
    def _dedupe_skills(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        skills: list[str] = []
        for skill in value:
            skill = skill.strip()
            if skill and skill not in seen:
                seen.add(skill)
                skills.append(skill)
        return skills

    @field_validator("location")
    @classmethod
    def _blank_location_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    # -- derived values ----------------------------------------------------

    def resolved_theme(self) -> Theme:
        return resolve(self.theme)

    def effective_palette(self) -> Palette:
        return effective_palette(self.theme, self.color_scheme, self.custom_colors)

    def font_families(self) -> tuple[str, str]:
        """``(heading, body)`` families after applying any overrides."""
        typography = self.resolved_theme().typography
        heading = typography.heading_font
        body = typography.body_font
        if self.fonts is not None:
            heading = (self.fonts.heading or "").strip() or heading
            body = (self.fonts.body or "").strip() or body
        return heading, body

    def to_site_config(self) -> dict[str, Any]:
        """The document written to ``src/config/portfolio.json``.

        Keys are camelCase because the generated website reads them
        directly from JavaScript.
        """
        return {
            "name": self.name,
            "role": self.role,
            "bio": self.bio,
            "location": self.location,
            "skills": list(self.skills),
            "projects": [
                {
                    "name": project.name,
                    "description": project.description,
                    "tech": list(project.tech),
                    "repoUrl": project.repo_url,
                    "demoUrl": project.demo_url,
                }
                for project in self.projects
            ],
            "social": self.social.present(),
            "theme": self.resolved_theme().key,
            "colorScheme": self.color_scheme,
            "features": {
                "blog": self.features.blog,
                "gallery": self.features.gallery,
                "contactForm": self.features.contact_form,
                "testimonials": self.features.testimonials,
            },
            "layout": self.layout.value,
        }
