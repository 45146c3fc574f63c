"""Portfolify scaffolder -- generates complete portfolio website projects.

This package takes a ``PortfolioConfiguration`` and renders a ready-to-install
React + Vite, Next.js or SvelteKit project: framework base files, themed
stylesheet, section components, manifest and SEO metadata.

Quick usage::

    from portfolify.prompts import defaults_for
    from portfolify.scaffolder import ProjectGenerator

    configuration = defaults_for("photographer", framework="nextjs")
    generator = ProjectGenerator()
    tree = await generator.generate("jane-photo", configuration, "./jane-photo")
"""

from portfolify.scaffolder.blog import reading_time_minutes
from portfolify.scaffolder.generator import (
    GeneratedTree,
    GenerationOptions,
    ProjectGenerator,
    TargetExistsError,
    TemplateSourceError,
)
from portfolify.scaffolder.manifest import build_manifest
from portfolify.scaffolder.templates import TemplateRenderer

__all__ = [
    "GeneratedTree",
    "GenerationOptions",
    "ProjectGenerator",
    "TargetExistsError",
    "TemplateRenderer",
    "TemplateSourceError",
    "build_manifest",
    "reading_time_minutes",
]
