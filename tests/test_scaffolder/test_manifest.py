"""Tests for package.json and deploy-file builders (portfolify.scaffolder.manifest)."""

from __future__ import annotations

import pytest

from portfolify.frameworks import Framework, LayoutMode
from portfolify.models import Features
from portfolify.scaffolder.manifest import (
    build_manifest,
    eslint_config,
    prettier_config,
    vercel_config,
)

pytestmark = pytest.mark.unit


class TestBuildManifest:
    @pytest.mark.parametrize("framework", list(Framework))
    def test_name_is_caller_supplied(self, framework):
        manifest = build_manifest("jane-site", framework, Features())
        assert manifest["name"] == "jane-site"
        assert manifest["private"] is True
        assert manifest["version"] == "0.1.0"
        assert "format" in manifest["scripts"]

    def test_react_vite_base(self):
        manifest = build_manifest("x", Framework.REACT_VITE, Features())
        assert manifest["type"] == "module"
        assert {"react", "react-dom", "framer-motion", "lucide-react"} <= set(manifest["dependencies"])
        assert "vite" in manifest["devDependencies"]
        assert "gray-matter" not in manifest["dependencies"]
        assert "react-router-dom" not in manifest["dependencies"]

    def test_nextjs_is_commonjs(self):
        manifest = build_manifest("x", Framework.NEXTJS, Features())
        assert "type" not in manifest
        assert "next" in manifest["dependencies"]
        assert manifest["scripts"]["build"] == "next build"

    def test_sveltekit(self):
        manifest = build_manifest("x", Framework.SVELTEKIT, Features())
        assert "lucide-svelte" in manifest["dependencies"]
        assert "@sveltejs/kit" in manifest["devDependencies"]
        assert "react" not in manifest["dependencies"]
        assert manifest["scripts"]["prepare"].startswith("svelte-kit sync")

    @pytest.mark.parametrize("framework", list(Framework))
    def test_blog_adds_markdown_stack(self, framework):
        manifest = build_manifest("x", framework, Features(blog=True))
        assert manifest["dependencies"]["gray-matter"] == "^4.0.3"
        assert manifest["dependencies"]["marked"] == "^11.1.1"

    def test_router_only_for_multi_page_react_vite(self):
        multi = LayoutMode.MULTI_PAGE
        assert "react-router-dom" in build_manifest("x", Framework.REACT_VITE, Features(), multi)["dependencies"]
        assert "react-router-dom" not in build_manifest("x", Framework.NEXTJS, Features(), multi)["dependencies"]
        assert "react-router-dom" not in build_manifest("x", Framework.SVELTEKIT, Features(), multi)["dependencies"]

    def test_dependencies_sorted(self):
        manifest = build_manifest("x", Framework.NEXTJS, Features(blog=True))
        assert list(manifest["dependencies"]) == sorted(manifest["dependencies"])
        assert list(manifest["devDependencies"]) == sorted(manifest["devDependencies"])

    def test_unknown_framework_falls_back(self):
        assert build_manifest("x", "gatsby", Features()) == build_manifest("x", Framework.REACT_VITE, Features())

    def test_deterministic(self):
        features = Features(blog=True, gallery=True)
        assert build_manifest("x", "nextjs", features) == build_manifest("x", "nextjs", features)


class TestDeployAndTooling:
    @pytest.mark.parametrize(
        "framework, name, output",
        [
            (Framework.REACT_VITE, "vite", "dist"),
            (Framework.NEXTJS, "nextjs", ".next"),
            (Framework.SVELTEKIT, "sveltekit", "build"),
        ],
    )
    def test_vercel(self, framework, name, output):
        assert vercel_config(framework) == {
            "framework": name,
            "buildCommand": "npm run build",
            "outputDirectory": output,
        }

    def test_eslint_configs(self):
        assert "plugin:react-hooks/recommended" in eslint_config(Framework.REACT_VITE)["extends"]
        assert eslint_config(Framework.NEXTJS) == {"extends": ["next/core-web-vitals"]}
        assert eslint_config(Framework.SVELTEKIT) is None

    def test_prettier_plugin_only_for_svelte(self):
        assert "plugins" not in prettier_config(Framework.REACT_VITE)
        assert prettier_config(Framework.SVELTEKIT)["plugins"] == ["prettier-plugin-svelte"]
