# tests/conftest.py - Pytest configuration
"""
Pytest configuration and shared fixtures.
"""
import asyncio
import json
import shutil
from pathlib import Path

import pytest

from lutracss.index import SymbolIndex
from lutracss.config import Config


# Fixture directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


def write(path: Path, text: str) -> Path:
    """Write a file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def build_project(root: Path, manifest: dict) -> Path:
    """
    Lay out a sample lutra project under root.

    - src/app.css: project stylesheet (theme.css)
    - node_modules/lutra: bundled stylesheet and components
    - excluded locations holding variables that must not be indexed
    """
    write(root / "package.json", json.dumps(manifest))

    app_css = root / "src" / "app.css"
    app_css.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy(FIXTURES_DIR / "theme.css", app_css)
    shutil.copy(FIXTURES_DIR / "Page.svelte", root / "src" / "Page.svelte")

    lutra = root / "node_modules" / "lutra"
    write(lutra / "package.json", json.dumps({"name": "lutra", "version": "1.0.0"}))
    (lutra / "dist" / "components").mkdir(parents=True)
    shutil.copy(FIXTURES_DIR / "lutra.css", lutra / "dist" / "lutra.css")
    shutil.copy(FIXTURES_DIR / "Button.svelte", lutra / "dist" / "components" / "Button.svelte")
    shutil.copy(FIXTURES_DIR / "Card.svelte", lutra / "dist" / "components" / "Card.svelte")

    write(root / "node_modules" / "other" / "style.css", ":root { --other-lib: 1; }\n")
    write(lutra / "node_modules" / "dep" / "dep.css", ":root { --nested-dep: 1; }\n")
    write(root / "dist" / "bundle.css", ":root { --bundled: 1; }\n")

    return root


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def lutra_project(tmp_path):
    """A project that depends on lutra."""
    return build_project(
        tmp_path / "app",
        {"name": "my-app", "devDependencies": {"lutra": "^1.0.0"}},
    )


@pytest.fixture
def plain_project(tmp_path):
    """A project that does not use lutra."""
    return build_project(
        tmp_path / "plain",
        {"name": "plain-app", "dependencies": {"svelte": "^4.0.0"}},
    )


@pytest.fixture
def make_index():
    """Factory for a SymbolIndex using the default configuration."""
    def factory(root: Path, config: Config = None) -> SymbolIndex:
        config = config or Config()
        return SymbolIndex(
            root,
            css_patterns=config.css_glob_patterns,
            svelte_patterns=config.svelte_glob_patterns,
            exclude_patterns=config.exclude_patterns,
            library=config.library,
        )
    return factory


@pytest.fixture
def built_index(lutra_project, make_index):
    """SymbolIndex for the lutra project after one rebuild."""
    index = make_index(lutra_project)
    asyncio.run(index.rebuild())
    return index
