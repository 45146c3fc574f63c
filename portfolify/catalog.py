"""Theme and colour-scheme catalog.

Pure lookup tables: every theme is an immutable pydantic model fixed at
import time.  A portfolio configuration references a theme by key and may
layer a predefined colour scheme and/or custom colours on top of it; any
slot that ends up blank is filled from the default theme.

Colours are HSL triples (``"220 90% 56%"``) consumed by the generated
stylesheet as ``hsl(var(--primary))``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

PALETTE_SLOTS: tuple[str, ...] = (
    "primary",
    "secondary",
    "accent",
    "background",
    "foreground",
    "muted",
    "card",
    "border",
)


class Palette(BaseModel):
    """A complete set of themed colour slots."""

    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    accent: str
    background: str
    foreground: str
    muted: str
    card: str
    border: str


class ColorOverrides(BaseModel):
    """User-entered colours; every slot is optional."""

    primary: Optional[str] = None
    secondary: Optional[str] = None
    accent: Optional[str] = None
    background: Optional[str] = None
    foreground: Optional[str] = None
    muted: Optional[str] = None
    card: Optional[str] = None
    border: Optional[str] = None


class Typography(BaseModel):
    model_config = ConfigDict(frozen=True)

    heading_font: str = "Inter"
    body_font: str = "Inter"
    heading_weight: int = Field(default=700, ge=100, le=900)
    body_weight: int = Field(default=400, ge=100, le=900)


class LayoutHints(BaseModel):
    model_config = ConfigDict(frozen=True)

    radius: str = "0.75rem"
    grid_columns: int = Field(default=3, ge=1, le=4)
    hero_style: str = Field(default="centered", description="centered, split, minimal or fullscreen")


class Theme(BaseModel):
    """A named, immutable bundle of colour, typography and layout presets."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    category: str = Field(..., description="Professional, Creative, Business, Beauty, Food or Personal")
    emoji: str
    palette: Palette
    typography: Typography = Field(default_factory=Typography)
    layout: LayoutHints = Field(default_factory=LayoutHints)
    default_role: str
    default_bio: str
    default_skills: tuple[str, ...] = ()
    suggested_features: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Catalog data
# ---------------------------------------------------------------------------

def _palette(
    primary: str,
    secondary: str,
    accent: str,
    background: str,
    foreground: str,
    muted: str,
    card: str,
    border: str,
) -> Palette:
    return Palette(
        primary=primary,
        secondary=secondary,
        accent=accent,
        background=background,
        foreground=foreground,
        muted=muted,
        card=card,
        border=border,
    )


DEFAULT_THEME_KEY = "developer"

_THEMES: tuple[Theme, ...] = (
    Theme(
        key="developer",
        name="Programmer / Developer",
        category="Professional",
        emoji="💻",
        palette=_palette(
            "220 90% 56%", "280 80% 60%", "142 76% 36%", "224 71% 4%",
            "213 31% 91%", "223 47% 11%", "224 60% 7%", "216 34% 17%",
        ),
        typography=Typography(heading_font="JetBrains Mono", body_font="Inter"),
        layout=LayoutHints(radius="0.5rem", grid_columns=3, hero_style="split"),
        default_role="Full Stack Developer",
        default_bio="Passionate developer creating innovative solutions with modern technologies.",
        default_skills=("React", "Node.js", "TypeScript", "Python", "AWS", "Docker", "Git"),
        suggested_features=("blog", "gallery"),
    ),
    Theme(
        key="designer",
        name="Designer / Graphic Designer",
        category="Creative",
        emoji="🎨",
        palette=_palette(
            "330 80% 60%", "270 70% 60%", "45 93% 58%", "280 30% 5%",
            "300 20% 95%", "280 20% 12%", "280 25% 8%", "280 18% 18%",
        ),
        typography=Typography(heading_font="Playfair Display", body_font="Poppins"),
        layout=LayoutHints(radius="1rem", grid_columns=2, hero_style="fullscreen"),
        default_role="UI/UX Designer",
        default_bio="Creative designer crafting beautiful and intuitive user experiences.",
        default_skills=("Figma", "Adobe XD", "Photoshop", "Illustrator", "Prototyping", "Design Systems"),
        suggested_features=("gallery", "testimonials"),
    ),
    Theme(
        key="photographer",
        name="Photographer",
        category="Creative",
        emoji="📷",
        palette=_palette(
            "0 0% 20%", "0 0% 40%", "45 100% 50%", "0 0% 3%",
            "0 0% 98%", "0 0% 10%", "0 0% 6%", "0 0% 16%",
        ),
        typography=Typography(heading_font="Cormorant Garamond", body_font="Lato", heading_weight=600),
        layout=LayoutHints(radius="0rem", grid_columns=3, hero_style="fullscreen"),
        default_role="Professional Photographer",
        default_bio="Capturing moments and telling stories through the lens.",
        default_skills=("Portrait", "Landscape", "Wedding", "Product", "Lightroom", "Photoshop"),
        suggested_features=("gallery", "contactForm"),
    ),
    Theme(
        key="writer",
        name="Writer / Author",
        category="Professional",
        emoji="✍️",
        palette=_palette(
            "30 50% 45%", "25 40% 55%", "200 80% 50%", "40 20% 6%",
            "40 30% 95%", "35 15% 12%", "38 18% 9%", "35 14% 18%",
        ),
        typography=Typography(heading_font="Merriweather", body_font="Source Serif 4"),
        layout=LayoutHints(radius="0.25rem", grid_columns=1, hero_style="minimal"),
        default_role="Content Writer & Author",
        default_bio="Wordsmith crafting compelling stories and engaging content.",
        default_skills=("Creative Writing", "Copywriting", "Content Strategy", "SEO", "Editing", "Research"),
        suggested_features=("blog", "testimonials"),
    ),
    Theme(
        key="musician",
        name="Musician / Artist",
        category="Creative",
        emoji="🎵",
        palette=_palette(
            "280 70% 55%", "320 60% 50%", "45 100% 55%", "260 30% 5%",
            "280 20% 95%", "270 20% 12%", "265 25% 8%", "270 18% 18%",
        ),
        typography=Typography(heading_font="Montserrat", body_font="Poppins", heading_weight=800),
        layout=LayoutHints(radius="1rem", grid_columns=3, hero_style="fullscreen"),
        default_role="Music Producer & Artist",
        default_bio="Creating melodies that move souls and rhythms that inspire.",
        default_skills=("Music Production", "Mixing", "Mastering", "Composition", "Live Performance", "Vocals"),
        suggested_features=("gallery", "contactForm"),
    ),
    Theme(
        key="salon-spa",
        name="Salon / Spa",
        category="Beauty",
        emoji="💇",
        palette=_palette(
            "350 80% 65%", "320 60% 55%", "30 80% 60%", "340 20% 5%",
            "340 20% 95%", "340 15% 12%", "340 18% 8%", "340 14% 18%",
        ),
        typography=Typography(heading_font="Playfair Display", body_font="Lato", heading_weight=600),
        layout=LayoutHints(radius="1.5rem", grid_columns=3, hero_style="centered"),
        default_role="Beauty & Wellness Expert",
        default_bio="Providing premium beauty and wellness services for your complete transformation.",
        default_skills=("Hair Styling", "Makeup", "Skincare", "Nail Art", "Spa Treatments", "Bridal"),
        suggested_features=("gallery", "testimonials", "contactForm"),
    ),
    Theme(
        key="restaurant",
        name="Restaurant / Cafe",
        category="Food",
        emoji="🍽️",
        palette=_palette(
            "25 80% 50%", "15 70% 45%", "45 90% 55%", "20 25% 6%",
            "30 30% 95%", "25 20% 12%", "22 22% 9%", "25 18% 18%",
        ),
        typography=Typography(heading_font="Lora", body_font="Open Sans"),
        layout=LayoutHints(radius="0.75rem", grid_columns=3, hero_style="fullscreen"),
        default_role="Restaurant & Culinary",
        default_bio="Serving delicious cuisines and memorable dining experiences.",
        default_skills=("Fine Dining", "Casual Cuisine", "Desserts", "Beverages", "Catering", "Private Events"),
        suggested_features=("gallery", "contactForm", "testimonials"),
    ),
    Theme(
        key="freelancer",
        name="Freelancer / Consultant",
        category="Professional",
        emoji="💼",
        palette=_palette(
            "210 80% 50%", "200 70% 45%", "45 90% 55%", "220 30% 6%",
            "210 30% 95%", "215 20% 12%", "218 25% 9%", "215 18% 18%",
        ),
        typography=Typography(heading_font="Inter", body_font="Inter"),
        layout=LayoutHints(radius="0.5rem", grid_columns=3, hero_style="split"),
        default_role="Freelance Consultant",
        default_bio="Helping businesses grow with strategic insights and expert solutions.",
        default_skills=("Strategy", "Project Management", "Business Analysis", "Marketing", "Consulting", "Leadership"),
        suggested_features=("testimonials", "contactForm", "blog"),
    ),
    Theme(
        key="startup",
        name="Startup / Business",
        category="Business",
        emoji="🚀",
        palette=_palette(
            "250 80% 60%", "220 70% 55%", "170 80% 45%", "230 30% 5%",
            "240 20% 95%", "235 20% 12%", "232 25% 8%", "235 18% 18%",
        ),
        typography=Typography(heading_font="Space Grotesk", body_font="Inter"),
        layout=LayoutHints(radius="0.75rem", grid_columns=3, hero_style="split"),
        default_role="Startup & Business",
        default_bio="Innovative startup transforming ideas into reality.",
        default_skills=("Innovation", "Technology", "Growth", "Product Development", "Funding", "Team Building"),
        suggested_features=("blog", "testimonials", "contactForm"),
    ),
    Theme(
        key="personal",
        name="Personal / Resume",
        category="Personal",
        emoji="👤",
        palette=_palette(
            "200 60% 50%", "180 50% 45%", "45 80% 55%", "210 25% 6%",
            "200 25% 95%", "205 18% 12%", "208 20% 9%", "205 16% 18%",
        ),
        typography=Typography(heading_font="Roboto", body_font="Roboto", heading_weight=500),
        layout=LayoutHints(radius="0.5rem", grid_columns=2, hero_style="minimal"),
        default_role="Professional",
        default_bio="Dedicated professional with a passion for excellence.",
        default_skills=("Communication", "Leadership", "Problem Solving", "Team Collaboration", "Time Management"),
        suggested_features=("contactForm",),
    ),
    Theme(
        key="fitness",
        name="Fitness Trainer",
        category="Personal",
        emoji="💪",
        palette=_palette(
            "142 70% 45%", "160 60% 40%", "25 90% 55%", "150 25% 5%",
            "145 20% 95%", "148 18% 12%", "150 20% 8%", "148 16% 18%",
        ),
        typography=Typography(heading_font="Oswald", body_font="Roboto", heading_weight=600),
        layout=LayoutHints(radius="0.25rem", grid_columns=3, hero_style="fullscreen"),
        default_role="Fitness & Wellness Coach",
        default_bio="Helping you achieve your fitness goals with personalized training.",
        default_skills=("Personal Training", "Nutrition", "Weight Loss", "Strength Training", "HIIT", "Yoga"),
        suggested_features=("testimonials", "gallery", "contactForm"),
    ),
    Theme(
        key="realestate",
        name="Real Estate Agent",
        category="Business",
        emoji="🏠",
        palette=_palette(
            "25 70% 50%", "35 60% 45%", "200 80% 50%", "30 20% 6%",
            "25 25% 95%", "28 15% 12%", "28 18% 9%", "28 14% 18%",
        ),
        typography=Typography(heading_font="Lora", body_font="Open Sans"),
        layout=LayoutHints(radius="0.5rem", grid_columns=3, hero_style="split"),
        default_role="Real Estate Professional",
        default_bio="Helping you find your dream property with expert guidance.",
        default_skills=("Property Sales", "Rentals", "Market Analysis", "Negotiation", "Property Management", "Investment"),
        suggested_features=("gallery", "contactForm", "testimonials"),
    ),
    Theme(
        key="healthcare",
        name="Healthcare Professional",
        category="Professional",
        emoji="🏥",
        palette=_palette(
            "200 80% 50%", "180 70% 45%", "142 60% 45%", "195 25% 5%",
            "200 20% 95%", "198 18% 12%", "196 20% 8%", "198 16% 18%",
        ),
        typography=Typography(heading_font="Nunito", body_font="Open Sans"),
        layout=LayoutHints(radius="1rem", grid_columns=3, hero_style="centered"),
        default_role="Healthcare Professional",
        default_bio="Providing compassionate care and medical expertise.",
        default_skills=("Patient Care", "Diagnosis", "Treatment", "Medical Research", "Health Education", "Wellness"),
        suggested_features=("testimonials", "contactForm", "blog"),
    ),
    Theme(
        key="educator",
        name="Educator / Teacher",
        category="Professional",
        emoji="📚",
        palette=_palette(
            "220 70% 50%", "200 60% 45%", "45 85% 55%", "215 25% 5%",
            "220 20% 95%", "218 18% 12%", "216 20% 8%", "218 16% 18%",
        ),
        typography=Typography(heading_font="Merriweather", body_font="Nunito"),
        layout=LayoutHints(radius="0.75rem", grid_columns=3, hero_style="centered"),
        default_role="Educator & Mentor",
        default_bio="Inspiring minds and shaping futures through education.",
        default_skills=("Teaching", "Curriculum Design", "Online Education", "Mentoring", "Research", "Public Speaking"),
        suggested_features=("blog", "testimonials", "contactForm"),
    ),
)

THEMES: dict[str, Theme] = {theme.key: theme for theme in _THEMES}

COLOR_SCHEMES: dict[str, Palette] = {
    "ocean-blue": _palette(
        "210 90% 55%", "200 80% 50%", "180 70% 45%", "215 30% 5%",
        "210 25% 95%", "212 20% 12%", "213 25% 8%", "212 18% 18%",
    ),
    "forest-green": _palette(
        "142 70% 45%", "160 60% 40%", "80 60% 45%", "150 25% 5%",
        "145 20% 95%", "148 18% 12%", "150 20% 8%", "148 16% 18%",
    ),
    "sunset-orange": _palette(
        "25 90% 55%", "15 80% 50%", "45 95% 55%", "20 25% 5%",
        "25 20% 95%", "22 18% 12%", "21 22% 8%", "22 16% 18%",
    ),
    "royal-purple": _palette(
        "270 70% 55%", "280 60% 50%", "330 70% 55%", "265 25% 5%",
        "270 20% 95%", "268 18% 12%", "266 22% 8%", "268 16% 18%",
    ),
    "elegant-rose": _palette(
        "350 70% 60%", "330 60% 55%", "45 80% 55%", "345 20% 5%",
        "350 18% 95%", "348 15% 12%", "346 18% 8%", "348 14% 18%",
    ),
    "minimal-mono": _palette(
        "0 0% 20%", "0 0% 40%", "0 0% 60%", "0 0% 3%",
        "0 0% 98%", "0 0% 12%", "0 0% 7%", "0 0% 18%",
    ),
    "tech-cyan": _palette(
        "185 80% 50%", "195 70% 45%", "220 80% 55%", "190 25% 5%",
        "185 20% 95%", "188 18% 12%", "189 22% 8%", "188 16% 18%",
    ),
}

COLOR_SCHEME_NAMES: dict[str, str] = {
    "ocean-blue": "Ocean Blue",
    "forest-green": "Forest Green",
    "sunset-orange": "Sunset Orange",
    "royal-purple": "Royal Purple",
    "elegant-rose": "Elegant Rose",
    "minimal-mono": "Minimal Mono",
    "tech-cyan": "Tech Cyan",
}

# Background/foreground/muted used by the interactive "custom" colour path,
# where only primary/secondary/accent are asked for.
CUSTOM_BASE_COLORS: dict[str, str] = {
    "background": "220 30% 5%",
    "foreground": "210 25% 95%",
    "muted": "215 20% 12%",
}


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

def default_theme() -> Theme:
    return THEMES[DEFAULT_THEME_KEY]


def resolve(key: str | None) -> Theme:
    """Return the theme registered under *key*, or the default theme."""
    if key is None:
        return default_theme()
    return THEMES.get(key, default_theme())


def theme_keys() -> list[str]:
    """All theme keys in catalog order."""
    return [theme.key for theme in _THEMES]


def themes_by_category() -> dict[str, list[Theme]]:
    """Group catalog themes by category, preserving catalog order."""
    grouped: dict[str, list[Theme]] = {}
    for theme in _THEMES:
        grouped.setdefault(theme.category, []).append(theme)
    return grouped


def resolve_color_scheme(key: str | None) -> Palette | None:
    """Return a predefined colour scheme, or ``None`` for unknown keys."""
    if not key:
        return None
    return COLOR_SCHEMES.get(key)


def effective_palette(
    theme_key: str | None,
    color_scheme: str | None = None,
    overrides: ColorOverrides | None = None,
) -> Palette:
    """Compute the final colours for a portfolio.

    Layers, lowest first: the theme's palette, the predefined colour scheme
    (if any), then the user's custom colours.  A slot left blank by every
    layer takes the default theme's value so the stylesheet never receives
    an empty custom property.
    """
    fallback = default_theme().palette
    layers: list[dict[str, Optional[str]]] = [resolve(theme_key).palette.model_dump()]
    scheme = resolve_color_scheme(color_scheme)
    if scheme is not None:
        layers.append(scheme.model_dump())
    if overrides is not None:
        layers.append(overrides.model_dump())

    merged: dict[str, str] = {}
    for slot in PALETTE_SLOTS:
        value = getattr(fallback, slot)
        for layer in layers:
            candidate = (layer.get(slot) or "").strip()
            if candidate:
                value = candidate
        merged[slot] = value
    return Palette(**merged)
