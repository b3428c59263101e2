"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from pqa.schemas.config import SuiteSettings


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--audit-config",
        action="store",
        default=None,
        help="Path to audit-config.yml for the e2e suite (defaults to the built-in pages).",
    )


def _lighthouse_report(url: str, **scores: float | None) -> dict[str, Any]:
    categories = {}
    for key, score in scores.items():
        cat_id = key.replace("_", "-")
        categories[cat_id] = {"id": cat_id, "title": cat_id.upper(), "score": score}
    return {"requestedUrl": url, "finalDisplayedUrl": url, "categories": categories}


@pytest.fixture
def make_report():
    """Factory for minimal Lighthouse JSON reports with the given 0-1 scores.

    Keyword ``best_practices`` maps to the ``best-practices`` category.
    """
    return _lighthouse_report


@pytest.fixture
def settings(tmp_path: Path) -> SuiteSettings:
    """Settings for two pages with reports under a temp directory."""
    return SuiteSettings(
        pages=["https://example.com/", "https://example.com/about-us"],
        report_directory=str(tmp_path / "reports"),
    )


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    cfg = tmp_path / "audit-config.yml"
    cfg.write_text(
        """\
pages:
  - "https://example.com/"
  - "https://example.com/about-us"
report_directory: "{out}"
thresholds:
  performance: 80
  best-practices: 70
  pwa: null
""".format(out=str(tmp_path / "reports"))
    )
    return cfg


@pytest.fixture
def mock_page() -> MagicMock:
    """A Playwright page double whose ``goto`` records the URL it navigated to."""
    page = MagicMock()
    page.url = "about:blank"

    async def goto(url: str, **kwargs: Any) -> None:
        page.url = url

    page.goto = AsyncMock(side_effect=goto)
    page.close = AsyncMock()
    return page
