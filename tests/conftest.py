"""
Shared fixtures.

- Puts the project root on ``sys.path`` so ``import jotr`` resolves
- Points every test at throwaway notes/templates directories (autouse)
- Resets the cached settings between tests
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _test_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate configuration from the developer's environment."""
    from jotr.config import clear_settings_cache

    for name in ("JOTR_TEMPLATES_DIR", "JOTR_EDITOR", "VISUAL", "EDITOR"):
        monkeypatch.delenv(name, raising=False)

    monkeypatch.setenv("JOTR_BASE_DIR", str(tmp_path / "notes"))
    monkeypatch.setenv("JOTR_ENVIRONMENT", "testing")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings(tmp_path: Path):
    """Settings rooted in the test's temporary directory."""
    from jotr.config import Settings

    return Settings(
        base_dir=tmp_path / "notes",
        templates_dir=tmp_path / "templates",
    )


@pytest.fixture
def templates_dir(settings) -> Path:
    path = settings.templates_path
    path.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture
def write_template(templates_dir: Path):
    """Write a template file into the templates directory."""

    def _write(filename: str, content: str) -> Path:
        path = templates_dir / filename
        path.write_text(content, encoding="utf-8")
        return path

    return _write
