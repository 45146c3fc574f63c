"""Jinja2 rendering for the portfolio template tree.

The template root (``portfolify/scaffolder/templates/`` unless another
directory is injected through ``Settings``) mixes two kinds of files:

* ``*.j2`` templates, rendered with the generation context and written
  without the suffix;
* everything else, opaque payload copied byte for byte.  Component sources
  contain ``{{`` in JSX and Svelte markup, so they must never go through
  Jinja2.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from portfolify.config import DEFAULT_TEMPLATE_DIR

TEMPLATE_SUFFIX = ".j2"


class TemplateRenderer:
    """Renders templates and materialises template subtrees on disk.

    Autoescaping is off: the outputs are TypeScript, CSS, Markdown, JSON and
    HTML alike, so each template escapes explicitly (``|e`` in markup,
    ``|tojson`` in scripts).
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir or DEFAULT_TEMPLATE_DIR)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([], default_for_string=False),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["hsl"] = hsl_color

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render *template_path* (relative to the template root) to a string."""
        return self.env.get_template(template_path).render(**context)

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        out = Path(output_path)
        content = self.render(template_path, context)
        await asyncio.to_thread(write_text, out, content)
        return out

    async def copy_to_file(self, template_path: str, output_path: str | Path) -> Path:
        """Copy a payload file verbatim; parent directories are created."""
        out = Path(output_path)
        await asyncio.to_thread(_copy_file, self.template_dir / template_path, out)
        return out

    async def render_tree(
        self,
        template_prefix: str,
        output_dir: str | Path,
        context: dict[str, Any],
        *,
        skip_patterns: list[str] | None = None,
    ) -> list[Path]:
        """Write every file under *template_prefix* into *output_dir*.

        Relative paths are preserved, so ``react-vite/src/App.tsx.j2``
        rendered with ``template_prefix="react-vite"`` lands at
        ``<output_dir>/src/App.tsx``.  Files whose relative path contains
        any of *skip_patterns* are left out.  A missing prefix writes
        nothing.  All writes run concurrently.

        Returns:
            The written paths, in sorted template order.
        """
        source = self.template_dir / template_prefix
        if not source.is_dir():
            return []

        skip = skip_patterns or []
        target = Path(output_dir)
        jobs = []
        for path in sorted(p for p in source.rglob("*") if p.is_file()):
            relative = path.relative_to(source).as_posix()
            if any(pattern in relative for pattern in skip):
                continue
            key = f"{template_prefix}/{relative}"
            if relative.endswith(TEMPLATE_SUFFIX):
                jobs.append(
                    self.render_to_file(key, target / relative[: -len(TEMPLATE_SUFFIX)], context)
                )
            else:
                jobs.append(self.copy_to_file(key, target / relative))
        return list(await asyncio.gather(*jobs))

    def has_templates(self) -> bool:
        """True when the template root exists and holds at least one file."""
        if not self.template_dir.is_dir():
            return False
        return any(p.is_file() for p in self.template_dir.rglob("*"))


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

def hsl_color(triple: str) -> str:
    """``"210 90% 55%"`` -> ``"hsl(210, 90%, 55%)"``.

    Palette slots are stored in the space-separated form the stylesheet
    uses; SVG attributes get the comma-separated one.
    """
    return f"hsl({', '.join(triple.split())})"


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------

def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _copy_file(source: Path, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, destination)
