"""Static description of the frameworks a portfolio can be generated for.

Both the generator (which directories to create, where the stylesheet goes)
and the validator (which files must exist, which packages are critical) read
from the same table so the two can never disagree.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Framework(str, Enum):
    """Target frameworks for the generated website."""

    REACT_VITE = "react-vite"
    NEXTJS = "nextjs"
    SVELTEKIT = "sveltekit"


class LayoutMode(str, Enum):
    """How the portfolio sections are laid out."""

    SINGLE_PAGE = "single-page"
    MULTI_PAGE = "multi-page"


# Path (relative to the project root) of the JSON document the generated
# website reads at runtime.
CONFIG_FILE = "src/config/portfolio.json"


class FrameworkSpec(BaseModel):
    """Everything the scaffolder and validator need to know about a framework."""

    model_config = ConfigDict(frozen=True)

    framework: Framework
    display_name: str
    directories: tuple[str, ...] = Field(..., description="Skeleton directories to create")
    required_files: tuple[str, ...] = Field(..., description="Files a complete project must contain")
    public_dir: str = Field(..., description="Directory served verbatim (favicon, robots.txt)")
    assets_dir: str = Field(..., description="Directory for bundled images")
    components_dir: str
    stylesheet: str = Field(..., description="Path of the themed global stylesheet")
    build_output: str = Field(..., description="Directory produced by 'npm run build'")
    critical_packages: tuple[str, ...] = Field(
        ..., description="Packages checked in node_modules by the validator"
    )
    has_eslint: bool = True


FRAMEWORKS: dict[Framework, FrameworkSpec] = {
    Framework.REACT_VITE: FrameworkSpec(
        framework=Framework.REACT_VITE,
        display_name="React + Vite",
        directories=(
            "src/components",
            "src/pages",
            "src/styles",
            "src/assets",
            "src/lib",
            "src/config",
            "public",
        ),
        required_files=(
            "package.json",
            "tsconfig.json",
            "vite.config.ts",
            "index.html",
            "src/main.tsx",
            "src/App.tsx",
        ),
        public_dir="public",
        assets_dir="src/assets",
        components_dir="src/components",
        stylesheet="src/styles/globals.css",
        build_output="dist",
        critical_packages=("react", "react-dom"),
    ),
    Framework.NEXTJS: FrameworkSpec(
        framework=Framework.NEXTJS,
        display_name="Next.js",
        directories=(
            "src/app",
            "src/components",
            "src/assets",
            "src/lib",
            "src/config",
            "public",
        ),
        required_files=(
            "package.json",
            "tsconfig.json",
            "next.config.js",
            "src/app/page.tsx",
            "src/app/layout.tsx",
        ),
        public_dir="public",
        assets_dir="src/assets",
        components_dir="src/components",
        stylesheet="src/app/globals.css",
        build_output=".next",
        critical_packages=("next", "react", "react-dom"),
    ),
    Framework.SVELTEKIT: FrameworkSpec(
        framework=Framework.SVELTEKIT,
        display_name="SvelteKit",
        directories=(
            "src/routes",
            "src/lib/components",
            "src/lib/assets",
            "src/config",
            "static",
        ),
        required_files=(
            "package.json",
            "tsconfig.json",
            "svelte.config.js",
            "src/routes/+page.svelte",
            "src/routes/+layout.svelte",
        ),
        public_dir="static",
        assets_dir="src/lib/assets",
        components_dir="src/lib/components",
        stylesheet="src/app.css",
        build_output="build",
        critical_packages=("svelte", "@sveltejs/kit"),
        has_eslint=False,
    ),
}


def get_framework_spec(framework: Framework | str) -> FrameworkSpec:
    """Return the spec for *framework*, defaulting to React + Vite for unknown values."""
    try:
        return FRAMEWORKS[Framework(framework)]
    except ValueError:
        return FRAMEWORKS[Framework.REACT_VITE]


def detect_framework(manifest: dict | None) -> Framework:
    """Infer the framework of an existing project from its ``package.json``.

    ``next`` in ``dependencies`` means Next.js, ``@sveltejs/kit`` in
    ``devDependencies`` means SvelteKit; anything else, including a missing
    manifest, is treated as React + Vite.
    """
    if not manifest:
        return Framework.REACT_VITE
    if "next" in (manifest.get("dependencies") or {}):
        return Framework.NEXTJS
    if "@sveltejs/kit" in (manifest.get("devDependencies") or {}):
        return Framework.SVELTEKIT
    return Framework.REACT_VITE
