"""Fixtures for the live audit suite: one browser for the whole session."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from pqa.audit import iter_checks
from pqa.config import load_config
from pqa.errors import SetupError
from pqa.schemas.config import SuiteSettings
from pqa.shared.browser import BrowserSession
from pqa.targets import slugify


def _load_settings(config: pytest.Config) -> SuiteSettings:
    path = config.getoption("--audit-config")
    return load_config(path) if path else SuiteSettings()


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    if {"url", "kind"} <= set(metafunc.fixturenames):
        checks = list(iter_checks(_load_settings(metafunc.config).pages))
        metafunc.parametrize(
            ("url", "kind"),
            checks,
            ids=[f"{slugify(url)}-{kind.value}" for url, kind in checks],
        )


@pytest.fixture(scope="session")
def suite_settings(pytestconfig: pytest.Config) -> SuiteSettings:
    return _load_settings(pytestconfig)


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_session(suite_settings: SuiteSettings) -> AsyncIterator[BrowserSession]:
    """Launch the shared browser once; a launch failure stops the whole run."""
    session = BrowserSession(suite_settings)
    try:
        await session.open()
    except SetupError as exc:
        pytest.exit(str(exc), returncode=pytest.ExitCode.INTERNAL_ERROR)
    yield session
    await session.close()
