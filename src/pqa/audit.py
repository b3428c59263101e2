"""Audit orchestration — two Lighthouse checks per page, one page per check."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import AsyncExitStack

from pqa.errors import AuditError, CheckFailedError, NavigationError, ThresholdError
from pqa.schemas.audit import AuditOptions, CheckKind, CheckResult
from pqa.schemas.config import SuiteSettings
from pqa.shared.browser import BrowserSession
from pqa.shared.lighthouse import play_audit
from pqa.targets import slugify

logger = logging.getLogger(__name__)

ResultCallback = Callable[[CheckResult], None]


def iter_checks(pages: Iterable[str]) -> Iterator[tuple[str, CheckKind]]:
    """Yield ``(url, kind)`` in page order, the threshold check first."""
    for url in pages:
        yield url, CheckKind.THRESHOLDS
        yield url, CheckKind.HTML_REPORT


def build_options(url: str, kind: CheckKind, settings: SuiteSettings) -> AuditOptions:
    """Audit options for one check.

    The HTML report for ``url`` is ``<report_dir>/<slug>.html``.
    """
    slug = slugify(url)
    if kind is CheckKind.THRESHOLDS:
        return AuditOptions(thresholds=settings.thresholds)
    return AuditOptions(
        thresholds=settings.thresholds,
        html_report=True,
        report_dir=settings.report_dir,
        report_name=f"{slug}.html",
    )


async def run_check(
    session: BrowserSession,
    url: str,
    kind: CheckKind,
    settings: SuiteSettings,
) -> CheckResult:
    """Navigate a fresh page to ``url`` and audit it.

    Check failures come back as ``CheckResult.failed``; only programming
    errors propagate.
    """
    try:
        options = build_options(url, kind, settings)
    except AuditError as exc:
        return CheckResult.failed(url, kind, str(exc))

    async with AsyncExitStack() as stack:
        try:
            page = await stack.enter_async_context(session.page())
        except Exception as exc:
            return CheckResult.failed(url, kind, f"Could not open a page for {url}: {exc}")

        try:
            try:
                await page.goto(url, timeout=settings.navigation_timeout_ms)
            except Exception as exc:
                raise NavigationError(f"Could not load {url}: {exc}") from exc

            result = await play_audit(
                page,
                session.port,
                options,
                command=settings.lighthouse_command,
                extra_flags=settings.lighthouse_flags,
            )
        except ThresholdError as exc:
            return CheckResult.failed(url, kind, str(exc), scores=exc.result.scores)
        except AuditError as exc:
            return CheckResult.failed(url, kind, str(exc))

    return CheckResult.passed(url, kind, report_path=result.report_path, scores=result.scores)


def log_outcome(result: CheckResult) -> None:
    """Log a check's outcome: the report path on success, the reason on failure."""
    if not result.ok:
        logger.error("Error during %s audit for %s: %s", result.kind.label, result.url, result.reason)
    elif result.kind is CheckKind.HTML_REPORT:
        logger.info("HTML report generated for %s at: %s", result.url, result.report_path)
    else:
        logger.info("Custom audit completed successfully for %s.", result.url)


def ensure_passed(result: CheckResult) -> CheckResult:
    """Log a check's outcome and raise ``CheckFailedError`` if it failed."""
    log_outcome(result)
    if not result.ok:
        raise CheckFailedError(f"{result.url}: {result.reason}")
    return result


async def run_suite(
    settings: SuiteSettings,
    *,
    on_result: ResultCallback | None = None,
) -> list[CheckResult]:
    """Run every check for every configured page against one browser session.

    A ``SetupError`` from the browser launch propagates before any check runs.
    """
    results: list[CheckResult] = []
    async with BrowserSession(settings) as session:
        for url, kind in iter_checks(settings.pages):
            result = await run_check(session, url, kind, settings)
            log_outcome(result)
            results.append(result)
            if on_result is not None:
                on_result(result)
    return results
