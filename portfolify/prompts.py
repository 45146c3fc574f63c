"""Interactive collection of a portfolio configuration.

Two ways to obtain a :class:`PortfolioConfiguration`:

* :func:`collect_configuration` asks the user, one question at a time,
  through ``rich.prompt``.
* :func:`defaults_for` builds one from a theme's defaults without any I/O
  (the ``--yes`` path and the batch mode).
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from portfolify.catalog import (
    COLOR_SCHEME_NAMES,
    COLOR_SCHEMES,
    CUSTOM_BASE_COLORS,
    ColorOverrides,
    Theme,
    resolve,
    themes_by_category,
)
from portfolify.frameworks import FRAMEWORKS, Framework, LayoutMode
from portfolify.models import (
    Features,
    PortfolioConfiguration,
    Project,
    SeoSettings,
    SocialLinks,
)
from portfolify.utils import console as default_console
from portfolify.utils import name_problems

DEFAULT_NAME = "John Doe"
DEFAULT_EMAIL = "hello@example.com"
MAX_PROJECTS = 6

# Extra social platforms asked for, by theme category; LinkedIn and Twitter
# are always asked for last.
SOCIAL_BY_CATEGORY: dict[str, tuple[str, ...]] = {
    "Professional": ("github",),
    "Creative": ("instagram", "behance", "dribbble"),
    "Beauty": ("instagram", "youtube"),
    "Food": ("instagram", "youtube"),
    "Business": ("instagram", "youtube"),
}
BASE_SOCIAL: tuple[str, ...] = ("linkedin", "twitter")

SOCIAL_LABELS: dict[str, str] = {
    "github": "GitHub URL",
    "linkedin": "LinkedIn URL (optional)",
    "twitter": "Twitter/X URL (optional)",
    "instagram": "Instagram URL",
    "behance": "Behance URL (optional)",
    "dribbble": "Dribbble URL (optional)",
    "youtube": "YouTube URL (optional)",
}

FEATURE_LABELS: dict[str, str] = {
    "contact_form": "Contact form",
    "gallery": "Gallery / portfolio showcase",
    "blog": "Blog section",
    "testimonials": "Testimonials",
}

# Suggested-feature names as stored in the catalog.
_SUGGESTION_KEYS: dict[str, str] = {
    "contact_form": "contactForm",
    "gallery": "gallery",
    "blog": "blog",
    "testimonials": "testimonials",
}


class UserAborted(Exception):
    """Raised when the user cancels an interactive session (Ctrl-C / EOF)."""


# ---------------------------------------------------------------------------
# Non-interactive defaults
# ---------------------------------------------------------------------------


def default_features(theme: Theme) -> Features:
    """Section defaults by theme category.

    Gallery for Creative/Beauty, blog for Professional, testimonials for
    Business/Beauty; the contact form is always on.
    """
    return Features(
        gallery=theme.category in ("Creative", "Beauty"),
        blog=theme.category == "Professional",
        testimonials=theme.category in ("Business", "Beauty"),
        contact_form=True,
    )


def defaults_for(
    theme_key: str | None,
    framework: Framework | str = Framework.REACT_VITE,
    layout: LayoutMode | str = LayoutMode.SINGLE_PAGE,
) -> PortfolioConfiguration:
    """Build a complete configuration from a theme's defaults. Performs no I/O."""
    theme = resolve(theme_key)
    return PortfolioConfiguration(
        name=DEFAULT_NAME,
        role=theme.default_role,
        bio=theme.default_bio,
        skills=list(theme.default_skills),
        social=SocialLinks(email=DEFAULT_EMAIL),
        theme=theme.key,
        features=default_features(theme),
        framework=Framework(framework),
        layout=LayoutMode(layout),
    )


# ---------------------------------------------------------------------------
# Prompt primitives
# ---------------------------------------------------------------------------


def _split_csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _ask_text(console: Console, label: str, default: str = "", required: bool = False) -> str:
    while True:
        answer = Prompt.ask(label, default=default, console=console, show_default=bool(default))
        answer = (answer or "").strip()
        if answer or not required:
            return answer
        console.print("[red]A value is required.[/red]")


def _ask_choice(console: Console, title: str, options: Sequence[tuple[str, str]], default: int = 1) -> str:
    """Show a numbered menu and return the value of the chosen option."""
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Option")
    for index, (label, _) in enumerate(options, start=1):
        table.add_row(str(index), label)
    console.print(table)

    choices = [str(index) for index in range(1, len(options) + 1)]
    selected = IntPrompt.ask("Select", choices=choices, default=default, console=console, show_choices=False)
    return options[selected - 1][1]


# ---------------------------------------------------------------------------
# Individual questions
# ---------------------------------------------------------------------------


def _ask_theme(console: Console) -> Theme:
    options: list[tuple[str, str]] = []
    for category, themes in themes_by_category().items():
        for theme in themes:
            options.append((f"{theme.emoji}  {theme.name} [dim]({category})[/dim]", theme.key))
    return resolve(_ask_choice(console, "Portfolio type", options))


def _ask_colors(console: Console, theme: Theme) -> tuple[Optional[str], Optional[ColorOverrides]]:
    options: list[tuple[str, str]] = [(f"Use default ({theme.name} theme)", "default")]
    options.extend((COLOR_SCHEME_NAMES[key], key) for key in COLOR_SCHEMES)
    options.append(("Custom colors (enter HSL values)", "custom"))
    choice = _ask_choice(console, "Color scheme", options)

    if choice == "default":
        return None, None
    if choice != "custom":
        return choice, None

    overrides = ColorOverrides(
        primary=_ask_text(console, 'Primary color (HSL, e.g. "220 90% 56%")', "220 90% 56%"),
        secondary=_ask_text(console, "Secondary color (HSL)", "200 80% 50%"),
        accent=_ask_text(console, "Accent color (HSL)", "45 90% 55%"),
        **CUSTOM_BASE_COLORS,
    )
    return None, overrides


def _ask_layout(console: Console) -> LayoutMode:
    options = [
        ("Single page (scrolling sections)", LayoutMode.SINGLE_PAGE.value),
        ("Multi-page (separate pages)", LayoutMode.MULTI_PAGE.value),
    ]
    return LayoutMode(_ask_choice(console, "Layout", options))


def _ask_framework(console: Console) -> Framework:
    options = [(spec.display_name, framework.value) for framework, spec in FRAMEWORKS.items()]
    return Framework(_ask_choice(console, "Framework", options))


def _ask_features(console: Console, theme: Theme) -> Features:
    console.print("\n[bold]Sections to include[/bold]")
    selected: dict[str, bool] = {}
    for field, label in FEATURE_LABELS.items():
        suggested = _SUGGESTION_KEYS[field] in theme.suggested_features
        selected[field] = Confirm.ask(f"  {label}?", default=suggested, console=console)
    return Features(**selected)


def _ask_social(console: Console, theme: Theme, email: str) -> SocialLinks:
    platforms = SOCIAL_BY_CATEGORY.get(theme.category, ()) + BASE_SOCIAL
    links = {platform: _ask_text(console, SOCIAL_LABELS[platform]) for platform in platforms}
    return SocialLinks(email=email, **links)


def _ask_projects(console: Console) -> list[Project]:
    projects: list[Project] = []
    if not Confirm.ask("Add projects to showcase?", default=True, console=console):
        return projects

    while len(projects) < MAX_PROJECTS:
        number = len(projects) + 1
        projects.append(
            Project(
                name=_ask_text(console, f"Project {number} name", required=True),
                description=_ask_text(console, "Project description", required=True),
                tech=_split_csv(_ask_text(console, "Technologies used (comma-separated)")),
                repo_url=_ask_text(console, "Repository URL (optional)") or None,
                demo_url=_ask_text(console, "Live demo URL (optional)") or None,
            )
        )
        if len(projects) >= MAX_PROJECTS:
            break
        if not Confirm.ask("Add another project?", default=len(projects) < 3, console=console):
            break
    return projects


def _ask_seo(console: Console) -> SeoSettings:
    site_url = _ask_text(console, "Site URL for SEO (optional, e.g. https://example.com)")
    keywords = _split_csv(_ask_text(console, "SEO keywords (comma-separated, optional)"))
    return SeoSettings(site_url=site_url or None, keywords=keywords)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def collect_configuration(console: Console | None = None) -> PortfolioConfiguration:
    """Ask the user for every configuration value.

    Raises:
        UserAborted: The user pressed Ctrl-C or closed the input stream.
    """
    console = console or default_console
    try:
        theme = _ask_theme(console)
        color_scheme, custom_colors = _ask_colors(console, theme)
        layout = _ask_layout(console)
        framework = _ask_framework(console)
        features = _ask_features(console, theme)

        console.print("\n[bold cyan]Your information[/bold cyan]")
        name = _ask_text(console, "Your name", DEFAULT_NAME, required=True)
        role = _ask_text(console, "Your role/title", theme.default_role, required=True)
        bio = _ask_text(console, "Short bio", theme.default_bio, required=True)
        skills = _split_csv(_ask_text(console, "Skills (comma-separated)", ", ".join(theme.default_skills)))
        location = _ask_text(console, "Location (optional)")
        email = _ask_text(console, "Email", DEFAULT_EMAIL)
        social = _ask_social(console, theme, email)
        projects = _ask_projects(console)
        seo = _ask_seo(console)
    except (KeyboardInterrupt, EOFError) as exc:
        raise UserAborted("Cancelled by user") from exc

    return PortfolioConfiguration(
        name=name,
        role=role,
        bio=bio,
        skills=skills,
        projects=projects,
        social=social,
        location=location or None,
        theme=theme.key,
        color_scheme=color_scheme,
        custom_colors=custom_colors,
        features=features,
        framework=framework,
        layout=layout,
        seo=seo,
    )


def prompt_project_name(default: str = "my-portfolio", console: Console | None = None) -> str:
    """Ask for a project name until the answer is a valid package name.

    Raises:
        UserAborted: The user pressed Ctrl-C or closed the input stream.
    """
    console = console or default_console
    try:
        while True:
            answer = Prompt.ask("Project name", default=default, console=console).strip()
            problems = name_problems(answer)
            if not problems:
                return answer
            for problem in problems:
                console.print(f"[red]  {problem}[/red]")
    except (KeyboardInterrupt, EOFError) as exc:
        raise UserAborted("Cancelled by user") from exc


__all__ = [
    "UserAborted",
    "collect_configuration",
    "default_features",
    "defaults_for",
    "prompt_project_name",
]
