"""Lighthouse runner — audits a Playwright page through the browser's debugging port."""

from __future__ import annotations

import asyncio
import json
import logging
import shutil
import tempfile
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from playwright.async_api import Page

from pqa.errors import AuditRunError, LighthouseNotFoundError, ThresholdError
from pqa.schemas.audit import AuditOptions, AuditResult, CategoryScore

logger = logging.getLogger(__name__)

DEFAULT_COMMAND: tuple[str, ...] = ("lighthouse",)


def build_command(
    url: str,
    port: int,
    output_path: Path,
    options: AuditOptions,
    *,
    command: Sequence[str] = DEFAULT_COMMAND,
    extra_flags: Sequence[str] = (),
) -> list[str]:
    """Assemble the Lighthouse CLI invocation for one audit."""
    args = [*command, url, f"--port={port}", "--output=json"]
    if options.html_report:
        args.append("--output=html")
    args += [f"--output-path={output_path}", "--disable-storage-reset", "--quiet"]

    categories = options.thresholds.as_category_map()
    if categories:
        args.append(f"--only-categories={','.join(categories)}")
    args += list(extra_flags)
    return args


def report_files(output_path: Path, *, html: bool) -> tuple[Path, Path | None]:
    """Where Lighthouse writes its JSON (and HTML) artifacts for ``output_path``.

    A single output goes to ``output_path`` itself; several outputs each get
    a ``.report.<ext>`` suffix.
    """
    if not html:
        return output_path, None
    return (
        output_path.with_name(output_path.name + ".report.json"),
        output_path.with_name(output_path.name + ".report.html"),
    )


def parse_report(url: str, report: dict[str, Any]) -> AuditResult:
    """Extract the 0-100 category scores from a Lighthouse JSON report."""
    runtime_error = report.get("runtimeError")
    if runtime_error:
        raise AuditRunError(
            f"Lighthouse runtime error for {url}: "
            f"{runtime_error.get('code', '')} {runtime_error.get('message', '')}".strip()
        )

    categories = []
    for cat_id, cat in (report.get("categories") or {}).items():
        raw = cat.get("score")
        score = round(float(raw) * 100) if isinstance(raw, (int, float)) else None
        categories.append(CategoryScore(id=cat_id, title=cat.get("title", ""), score=score))

    return AuditResult(
        url=report.get("finalDisplayedUrl") or report.get("finalUrl") or url,
        categories=categories,
    )


def compare_thresholds(
    scores: Mapping[str, int | None], thresholds: Mapping[str, int]
) -> list[str]:
    """Return one message per category that misses its threshold.

    Categories absent from the report, or reported without a score, count
    as misses.
    """
    failures: list[str] = []
    for category, minimum in thresholds.items():
        if category not in scores:
            failures.append(f"{category} was not reported")
            continue
        score = scores[category]
        if score is None:
            failures.append(f"{category} could not be scored")
        elif score < minimum:
            failures.append(f"{category} record is {score} and is under the {minimum} threshold")
    return failures


async def _run_lighthouse(args: list[str]) -> None:
    logger.debug("Running: %s", " ".join(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise LighthouseNotFoundError(
            f"Lighthouse CLI not found ({args[0]!r}). Install it with `npm install -g lighthouse`."
        ) from exc

    try:
        _, stderr = await proc.communicate()
    except asyncio.CancelledError:
        if proc.returncode is None:
            proc.kill()
            await proc.wait()
        raise
    if proc.returncode != 0:
        tail = stderr.decode(errors="replace").strip()[-500:]
        raise AuditRunError(f"Lighthouse exited with code {proc.returncode}: {tail}")


async def play_audit(
    page: Page,
    port: int,
    options: AuditOptions,
    *,
    command: Sequence[str] = DEFAULT_COMMAND,
    extra_flags: Sequence[str] = (),
) -> AuditResult:
    """Audit the page's current URL and enforce ``options.thresholds``.

    Lighthouse connects to the already running browser on ``port``. When
    ``options.html_report`` is set the HTML report is written to
    ``options.report_path``.

    Raises ``ThresholdError`` (carrying the parsed result) when any checked
    category misses its minimum.
    """
    url = page.url
    logger.info("Running Lighthouse for %s", url)

    with tempfile.TemporaryDirectory(prefix="pqa-lighthouse-") as tmp:
        output_path = Path(tmp) / "lighthouse"
        await _run_lighthouse(
            build_command(url, port, output_path, options, command=command, extra_flags=extra_flags)
        )

        json_path, html_path = report_files(output_path, html=options.html_report)
        try:
            report = json.loads(json_path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise AuditRunError(f"Unreadable Lighthouse report for {url}: {exc}") from exc

        result = parse_report(url, report)

        target = options.report_path
        if target is not None and html_path is not None:
            if not html_path.exists():
                raise AuditRunError(f"Lighthouse wrote no HTML report for {url}")
            target.parent.mkdir(parents=True, exist_ok=True)
            await asyncio.to_thread(shutil.move, str(html_path), str(target))
            result.report_path = str(target)

    result.failures = compare_thresholds(result.scores, options.thresholds.as_category_map())
    if result.failures:
        raise ThresholdError(
            f"Some thresholds are not matching the expectations for {url}: "
            + "; ".join(result.failures),
            result,
        )
    return result
