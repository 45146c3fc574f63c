"""Package manifest (``package.json``) and deploy-file builders.

The manifest is a deterministic function of the framework, the enabled
features and the layout; only ``name`` comes from the caller.  Dependency
maps are emitted with sorted keys, the way the package manager writes them.
"""

from __future__ import annotations

from typing import Any

from portfolify.frameworks import Framework, LayoutMode, get_framework_spec
from portfolify.models import Features

MANIFEST_VERSION = "0.1.0"

_FORMAT_GLOBS: dict[Framework, str] = {
    Framework.REACT_VITE: 'prettier --write "src/**/*.{ts,tsx,css,json}"',
    Framework.NEXTJS: 'prettier --write "src/**/*.{ts,tsx,css,json}"',
    Framework.SVELTEKIT: 'prettier --write "src/**/*.{ts,svelte,css,json}"',
}

_SCRIPTS: dict[Framework, dict[str, str]] = {
    Framework.REACT_VITE: {
        "dev": "vite",
        "build": "tsc && vite build",
        "lint": "eslint src --ext ts,tsx --report-unused-disable-directives --max-warnings 0",
        "preview": "vite preview",
        "typecheck": "tsc --noEmit",
    },
    Framework.NEXTJS: {
        "dev": "next dev",
        "build": "next build",
        "start": "next start",
        "lint": "next lint",
        "typecheck": "tsc --noEmit",
    },
    Framework.SVELTEKIT: {
        "dev": "vite dev",
        "build": "vite build",
        "preview": "vite preview",
        "prepare": "svelte-kit sync || echo ''",
        "check": "svelte-kit sync && svelte-check --tsconfig ./tsconfig.json",
    },
}

_REACT_RUNTIME: dict[str, str] = {
    "react": "^18.2.0",
    "react-dom": "^18.2.0",
    "framer-motion": "^10.16.16",
    "lucide-react": "^0.303.0",
    "clsx": "^2.1.0",
    "tailwind-merge": "^2.2.0",
}

_STYLE_TOOLING: dict[str, str] = {
    "autoprefixer": "^10.4.16",
    "postcss": "^8.4.33",
    "prettier": "^3.2.2",
    "tailwindcss": "^3.4.1",
    "typescript": "^5.3.3",
}

_DEPENDENCIES: dict[Framework, dict[str, str]] = {
    Framework.REACT_VITE: dict(_REACT_RUNTIME),
    Framework.NEXTJS: {"next": "^14.1.0", **_REACT_RUNTIME},
    Framework.SVELTEKIT: {"lucide-svelte": "^0.303.0"},
}

_DEV_DEPENDENCIES: dict[Framework, dict[str, str]] = {
    Framework.REACT_VITE: {
        "@types/react": "^18.2.47",
        "@types/react-dom": "^18.2.18",
        "@typescript-eslint/eslint-plugin": "^6.18.1",
        "@typescript-eslint/parser": "^6.18.1",
        "@vitejs/plugin-react": "^4.2.1",
        "eslint": "^8.56.0",
        "eslint-plugin-react-hooks": "^4.6.0",
        "eslint-plugin-react-refresh": "^0.4.5",
        "vite": "^5.0.11",
        **_STYLE_TOOLING,
    },
    Framework.NEXTJS: {
        "@types/node": "^20.11.0",
        "@types/react": "^18.2.47",
        "@types/react-dom": "^18.2.18",
        "eslint": "^8.56.0",
        "eslint-config-next": "^14.1.0",
        **_STYLE_TOOLING,
    },
    Framework.SVELTEKIT: {
        "@sveltejs/adapter-auto": "^3.1.0",
        "@sveltejs/kit": "^2.0.6",
        "@sveltejs/vite-plugin-svelte": "^3.0.1",
        "prettier-plugin-svelte": "^3.1.2",
        "svelte": "^4.2.8",
        "svelte-check": "^3.6.3",
        "vite": "^5.0.11",
        **_STYLE_TOOLING,
    },
}

BLOG_DEPENDENCIES: dict[str, str] = {
    "gray-matter": "^4.0.3",
    "marked": "^11.1.1",
}
ROUTER_DEPENDENCIES: dict[str, str] = {"react-router-dom": "^6.21.1"}


def build_manifest(
    project_name: str,
    framework: Framework | str,
    features: Features,
    layout: LayoutMode | str = LayoutMode.SINGLE_PAGE,
) -> dict[str, Any]:
    """Return the ``package.json`` document for a generated project.

    Args:
        project_name: Written verbatim as ``name``.
        framework: Target framework; unknown values fall back to React + Vite.
        features: Blog adds ``gray-matter`` and ``marked``.
        layout: Multi-page React + Vite adds ``react-router-dom``.
    """
    fw = get_framework_spec(framework).framework
    dependencies = dict(_DEPENDENCIES[fw])
    if features.blog:
        dependencies.update(BLOG_DEPENDENCIES)
    if fw is Framework.REACT_VITE and LayoutMode(layout) is LayoutMode.MULTI_PAGE:
        dependencies.update(ROUTER_DEPENDENCIES)

    scripts = dict(_SCRIPTS[fw])
    scripts["format"] = _FORMAT_GLOBS[fw]

    manifest: dict[str, Any] = {
        "name": project_name,
        "private": True,
        "version": MANIFEST_VERSION,
    }
    if fw is not Framework.NEXTJS:
        manifest["type"] = "module"
    manifest["scripts"] = scripts
    manifest["dependencies"] = dict(sorted(dependencies.items()))
    manifest["devDependencies"] = dict(sorted(_DEV_DEPENDENCIES[fw].items()))
    return manifest


# ---------------------------------------------------------------------------
# Deploy configuration
# ---------------------------------------------------------------------------

def vercel_config(framework: Framework | str) -> dict[str, str]:
    """``vercel.json`` contents for *framework*."""
    spec = get_framework_spec(framework)
    vercel_framework = {
        Framework.REACT_VITE: "vite",
        Framework.NEXTJS: "nextjs",
        Framework.SVELTEKIT: "sveltekit",
    }[spec.framework]
    return {
        "framework": vercel_framework,
        "buildCommand": "npm run build",
        "outputDirectory": spec.build_output,
    }


def eslint_config(framework: Framework | str) -> dict[str, Any] | None:
    """``.eslintrc.json`` contents, or ``None`` for frameworks linted otherwise."""
    fw = get_framework_spec(framework).framework
    if fw is Framework.REACT_VITE:
        return {
            "root": True,
            "env": {"browser": True, "es2020": True},
            "extends": [
                "eslint:recommended",
                "plugin:@typescript-eslint/recommended",
                "plugin:react-hooks/recommended",
            ],
            "ignorePatterns": ["dist", ".eslintrc.json"],
            "parser": "@typescript-eslint/parser",
            "plugins": ["react-refresh"],
            "rules": {
                "react-refresh/only-export-components": ["warn", {"allowConstantExport": True}],
            },
        }
    if fw is Framework.NEXTJS:
        return {"extends": ["next/core-web-vitals"]}
    return None


def prettier_config(framework: Framework | str) -> dict[str, Any]:
    config: dict[str, Any] = {
        "semi": True,
        "singleQuote": True,
        "tabWidth": 4,
        "trailingComma": "es5",
        "printWidth": 100,
    }
    if get_framework_spec(framework).framework is Framework.SVELTEKIT:
        config["plugins"] = ["prettier-plugin-svelte"]
    return config
