"""Main scaffolding orchestrator.

Takes a ``PortfolioConfiguration`` and generates a complete, ready-to-install
portfolio website project for React + Vite, Next.js or SvelteKit.
"""

from __future__ import annotations

import asyncio
import shutil
from datetime import date
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from portfolify.config import Settings
from portfolify.frameworks import CONFIG_FILE, Framework, FrameworkSpec, LayoutMode, get_framework_spec
from portfolify.models import PortfolioConfiguration
from portfolify.utils import dump_json, print_debug, print_success, print_warning

from . import blog as blog_content
from .manifest import build_manifest, eslint_config, prettier_config, vercel_config
from .seo import (
    FEATURE_SECTIONS,
    build_seo_meta,
    enabled_sections,
    font_stylesheet_url,
    home_sections,
    resolve_font,
    routed_sections,
    sitemap_urls,
)
from .templates import TemplateRenderer, write_text

GALLERY_PLACEHOLDERS = 6


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TargetExistsError(Exception):
    """Raised when the target directory already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory '{path}' already exists")


class TemplateSourceError(Exception):
    """Raised when the template source directory is missing or empty."""

    def __init__(self, path: Path, detail: str = "is missing or empty") -> None:
        self.path = path
        super().__init__(f"Template directory '{path}' {detail}")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class GenerationOptions(BaseModel):
    """Switches that change which extra files are written."""

    deploy_ready: bool = Field(default=False, description="Write Vercel, Netlify and GitHub Pages configs")
    custom_assets: Optional[Path] = Field(
        default=None, description="Directory copied into the project's assets directory"
    )
    today: Optional[date] = Field(
        default=None, description="Date stamped into LICENSE, the blog seed and the sitemap"
    )


class GeneratedTree(BaseModel):
    """Result of a successful generation."""

    root: Path
    framework: Framework
    files: list[str] = Field(default_factory=list, description="Sorted project-relative paths")

    def __contains__(self, relative_path: object) -> bool:
        return relative_path in self.files


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Generates a portfolio website project from a configuration.

    The generated tree contains:
    - the framework's base files (build config, entry document, root page)
    - the section components, wired up for a single- or multi-page layout
    - ``package.json`` and ``src/config/portfolio.json``
    - a themed stylesheet and a favicon in the theme's primary colour
    - README, LICENSE and tooling dotfiles
    - optional blog seed content, gallery placeholders, deploy configs
      and sitemap
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.renderer = TemplateRenderer(self.settings.template_dir)

    # -- Public API --------------------------------------------------------

    async def generate(
        self,
        project_name: str,
        configuration: PortfolioConfiguration,
        target_dir: str | Path,
        framework: Framework | str | None = None,
        options: GenerationOptions | None = None,
    ) -> GeneratedTree:
        """Generate the complete project in *target_dir*.

        Args:
            project_name: Package name written into ``package.json``.
            configuration: Validated portfolio configuration.
            target_dir: Directory to create; it must not exist yet.
            framework: Overrides ``configuration.framework`` when given.
            options: Extra outputs; defaults to none.

        Returns:
            The generated tree, listing every file written.

        Raises:
            TemplateSourceError: The template directory is unusable. Nothing
                has been written.
            TargetExistsError: *target_dir* already exists. Nothing has been
                written.

        Any other failure propagates unchanged and leaves the partially
        written directory in place.
        """
        if framework is not None and Framework(framework) is not configuration.framework:
            configuration = configuration.model_copy(update={"framework": Framework(framework)})
        options = options or GenerationOptions()
        spec = get_framework_spec(configuration.framework)
        root = Path(target_dir)
        debug = self.settings.debug

        # 0. Preconditions, checked before anything touches the disk
        self._check_template_source(spec)
        if root.exists():
            raise TargetExistsError(root)

        print_debug(f"Template source: {self.renderer.template_dir}", debug)
        print_debug(f"Target: {root.resolve()}", debug)

        # 1. Create the project directory (exclusive) and its skeleton
        await asyncio.to_thread(_create_root, root)
        await self._create_directory_structure(root, spec)

        ctx = self._build_context(project_name, configuration, spec, options)

        # 2. Framework base tree
        await self.renderer.render_tree(spec.framework.value, root, ctx)

        # 3. Section components
        await self._render_components(root, spec, configuration, ctx)

        # 4. Manifest, runtime config, stylesheet, docs and dotfiles
        await asyncio.gather(
            self._write_json(root / "package.json", build_manifest(
                project_name, spec.framework, configuration.features, configuration.layout
            )),
            self._write_json(root / CONFIG_FILE, configuration.to_site_config()),
            self.renderer.render_to_file("styles/globals.css.j2", root / spec.stylesheet, ctx),
            self.renderer.render_to_file(
                "seo/favicon.svg.j2", root / spec.public_dir / "favicon.svg", ctx
            ),
            self._render_docs(root, ctx),
            self._render_dotfiles(root, spec, ctx),
        )

        # 5. One route per section for multi-page layouts
        await self._render_pages(root, spec, ctx)

        # 6. Feature content
        if configuration.features.blog:
            await self._render_blog(root, configuration, ctx)
        if configuration.features.gallery:
            await self._render_gallery_placeholders(root, spec, ctx)

        # 7. SEO files (only with a public site URL)
        if configuration.seo.site_url:
            await asyncio.gather(
                self.renderer.render_to_file(
                    "seo/sitemap.xml.j2", root / spec.public_dir / "sitemap.xml", ctx
                ),
                self.renderer.render_to_file(
                    "seo/robots.txt.j2", root / spec.public_dir / "robots.txt", ctx
                ),
            )

        # 8. Deploy configuration
        if options.deploy_ready:
            await self._render_deploy_files(root, spec, ctx)

        # 9. User-supplied assets
        if options.custom_assets is not None:
            await self._copy_custom_assets(options.custom_assets, root / spec.assets_dir)

        files = await asyncio.to_thread(_list_files, root)
        for relative in files:
            print_debug(f"wrote {relative}", debug)

        return GeneratedTree(root=root, framework=spec.framework, files=files)

    # -- Preconditions -----------------------------------------------------

    def _check_template_source(self, spec: FrameworkSpec) -> None:
        template_dir = self.renderer.template_dir
        if not self.renderer.has_templates():
            raise TemplateSourceError(template_dir)
        if not (template_dir / spec.framework.value).is_dir():
            raise TemplateSourceError(
                template_dir, f"has no '{spec.framework.value}' templates"
            )

    # -- Context building --------------------------------------------------

    def _build_context(
        self,
        project_name: str,
        configuration: PortfolioConfiguration,
        spec: FrameworkSpec,
        options: GenerationOptions,
    ) -> dict[str, Any]:
        """Build the Jinja2 template context from the configuration."""
        today = options.today or date.today()
        theme = configuration.resolved_theme()
        heading_family, body_family = configuration.font_families()
        heading_font = resolve_font(heading_family)
        body_font = resolve_font(body_family)
        seo = build_seo_meta(configuration)

        return {
            "project_name": project_name,
            "config": configuration,
            "theme": theme,
            "palette": configuration.effective_palette(),
            "typography": theme.typography,
            "radius": theme.layout.radius,
            "heading_font": heading_font,
            "body_font": body_font,
            "font_url": font_stylesheet_url(heading_font.family, body_font.family),
            "framework": spec,
            "multi_page": configuration.layout is LayoutMode.MULTI_PAGE,
            "sections": enabled_sections(configuration),
            "home_sections": home_sections(configuration),
            "routed_sections": routed_sections(configuration),
            "features": configuration.features,
            "seo": seo,
            "meta_tags": seo.meta_tags(),
            "next_metadata": seo.next_metadata(),
            "sitemap_urls": sitemap_urls(configuration),
            "year": today.year,
            "today": today.isoformat(),
        }

    # -- Directory structure -----------------------------------------------

    async def _create_directory_structure(self, root: Path, spec: FrameworkSpec) -> None:
        """Create the framework's skeleton directory tree."""

        async def _mkdir(d: str) -> None:
            p = root / d
            await asyncio.to_thread(p.mkdir, parents=True, exist_ok=True)

        await asyncio.gather(*[_mkdir(d) for d in spec.directories])

    # -- Components and pages ----------------------------------------------

    async def _render_components(
        self,
        root: Path,
        spec: FrameworkSpec,
        configuration: PortfolioConfiguration,
        ctx: dict[str, Any],
    ) -> None:
        """Copy the section components, leaving out disabled features."""
        enabled = {section.component for section in enabled_sections(configuration)}
        skip = [
            section.component
            for section in FEATURE_SECTIONS.values()
            if section.component not in enabled
        ]
        await self.renderer.render_tree(
            f"components/{_component_flavour(spec)}",
            root / spec.components_dir,
            ctx,
            skip_patterns=skip,
        )

    async def _render_pages(self, root: Path, spec: FrameworkSpec, ctx: dict[str, Any]) -> None:
        """Render one page per routed section (multi-page layout)."""
        jobs = []
        for section in ctx["routed_sections"]:
            page_ctx = {**ctx, "section": section}
            if spec.framework is Framework.REACT_VITE:
                template = "pages/react-page.tsx.j2"
                out = root / "src" / "pages" / f"{section.component}Page.tsx"
            elif spec.framework is Framework.NEXTJS:
                template = "pages/next-page.tsx.j2"
                out = root / "src" / "app" / section.slug / "page.tsx"
            else:
                template = "pages/svelte-page.svelte.j2"
                out = root / "src" / "routes" / section.slug / "+page.svelte"
            jobs.append(self.renderer.render_to_file(template, out, page_ctx))
        await asyncio.gather(*jobs)

    # -- Docs and dotfiles -------------------------------------------------

    async def _render_docs(self, root: Path, ctx: dict[str, Any]) -> None:
        """Render README.md and the MIT LICENSE."""
        await asyncio.gather(
            self.renderer.render_to_file("docs/README.md.j2", root / "README.md", ctx),
            self.renderer.render_to_file("docs/LICENSE.j2", root / "LICENSE", ctx),
        )

    async def _render_dotfiles(self, root: Path, spec: FrameworkSpec, ctx: dict[str, Any]) -> None:
        """Render .gitignore, .env.example, .prettierrc and the ESLint config."""
        dotfiles = [
            ("shared/gitignore.j2", ".gitignore"),
            ("shared/env.example.j2", ".env.example"),
        ]
        jobs = [
            self.renderer.render_to_file(template_name, root / output_name, ctx)
            for template_name, output_name in dotfiles
        ]
        jobs.append(self._write_json(root / ".prettierrc", prettier_config(spec.framework)))
        eslint = eslint_config(spec.framework)
        if eslint is not None:
            jobs.append(self._write_json(root / ".eslintrc.json", eslint))
        await asyncio.gather(*jobs)

    # -- Features ----------------------------------------------------------

    async def _render_blog(
        self, root: Path, configuration: PortfolioConfiguration, ctx: dict[str, Any]
    ) -> None:
        """Write the welcome article, the post index and the blog utility."""
        body = self.renderer.render("blog/welcome.md.j2", ctx)
        post = blog_content.welcome_post(configuration.name, body, date.fromisoformat(ctx["today"]))
        await asyncio.gather(
            asyncio.to_thread(write_text, root / post.path, post.to_markdown()),
            self._write_json(root / blog_content.BLOG_INDEX, blog_content.blog_index([post])),
            self.renderer.copy_to_file("blog/blog.ts", root / "src" / "lib" / "blog.ts"),
        )

    async def _render_gallery_placeholders(
        self, root: Path, spec: FrameworkSpec, ctx: dict[str, Any]
    ) -> None:
        """Write placeholder artwork the user is expected to replace."""
        jobs = []
        for index in range(1, GALLERY_PLACEHOLDERS + 1):
            out = root / spec.assets_dir / "gallery" / f"placeholder-{index}.svg"
            jobs.append(
                self.renderer.render_to_file("gallery/placeholder.svg.j2", out, {**ctx, "index": index})
            )
        await asyncio.gather(*jobs)

    # -- Deploy ------------------------------------------------------------

    async def _render_deploy_files(self, root: Path, spec: FrameworkSpec, ctx: dict[str, Any]) -> None:
        """Write vercel.json, netlify.toml and a GitHub Pages workflow."""
        await asyncio.gather(
            self._write_json(root / "vercel.json", vercel_config(spec.framework)),
            self.renderer.render_to_file("deploy/netlify.toml.j2", root / "netlify.toml", ctx),
            self.renderer.render_to_file(
                "deploy/deploy.yml.j2", root / ".github" / "workflows" / "deploy.yml", ctx
            ),
        )
        print_success("Deploy configuration files created")

    async def _copy_custom_assets(self, source: Path, destination: Path) -> None:
        source = Path(source).expanduser()
        if not source.is_dir():
            print_warning(f"Custom assets directory '{source}' not found; skipping")
            return
        await asyncio.to_thread(shutil.copytree, source, destination, dirs_exist_ok=True)
        print_success("Custom assets copied")

    # -- Helpers -----------------------------------------------------------

    async def _write_json(self, path: Path, data: Any) -> Path:
        await asyncio.to_thread(write_text, path, dump_json(data))
        return path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _component_flavour(spec: FrameworkSpec) -> str:
    return "svelte" if spec.framework is Framework.SVELTEKIT else "react"


def _create_root(root: Path) -> None:
    """Create *root*, failing if it appeared since the existence check."""
    root.parent.mkdir(parents=True, exist_ok=True)
    try:
        root.mkdir()
    except FileExistsError as exc:
        raise TargetExistsError(root) from exc


def _list_files(root: Path) -> list[str]:
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())
