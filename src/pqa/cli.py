"""Typer CLI — ``pqa audit``, ``pqa validate`` and ``pqa slug`` commands."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from pqa.config import load_config
from pqa.errors import InvalidURLError, SetupError
from pqa.schemas.audit import CheckResult
from pqa.schemas.config import SuiteSettings
from pqa.targets import slugify

app = typer.Typer(
    name="pqa",
    help="Page Quality Audits — Lighthouse threshold checks and HTML reports for a list of pages.",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_settings(config: Path | None) -> SuiteSettings:
    if config is None:
        return SuiteSettings()
    try:
        return load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to audit-config.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a configuration file without running any audit."""
    _setup_logging(verbose)
    cfg = _load_settings(config)

    console.print("[green]Config is valid![/]\n")
    console.print(f"  Pages:       {len(cfg.pages)}")
    for url in cfg.pages:
        console.print(f"    - {url}  [dim]→ {slugify(url)}.html[/]")
    console.print(f"  Report dir:  {cfg.report_dir}")
    console.print(f"  Debug port:  {cfg.debugging_port}")
    thresholds = ", ".join(f"{k}={v}" for k, v in cfg.thresholds.as_category_map().items())
    console.print(f"  Thresholds:  {thresholds or '(none)'}")
    console.print(f"  Lighthouse:  {' '.join(cfg.lighthouse_command)}")


@app.command()
def audit(
    config: Path = typer.Option(None, "--config", "-c", help="Path to audit-config.yml (defaults to the built-in pages)."),
    url: list[str] = typer.Option(None, "--url", "-u", help="Audit only this page (repeatable)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run both checks against every configured page.

    Exits with code 1 if the browser cannot start or any check fails.

    Examples:

        pqa audit

        pqa audit --config config/audit-config.yml --url https://example.com/about-us
    """
    _setup_logging(verbose)
    cfg = _load_settings(config)

    if url:
        try:
            cfg = SuiteSettings(**{**cfg.model_dump(by_alias=True), "pages": list(url)})
        except ValidationError as exc:
            console.print(f"[red]Invalid URL:[/] {exc}")
            raise typer.Exit(code=1)

    console.print(f"[bold]Auditing {len(cfg.pages)} page(s)[/] — reports in {cfg.report_dir}\n")
    try:
        results = asyncio.run(_run_audit(cfg))
    except SetupError as exc:
        console.print(f"[red]Setup failed:[/] {exc}")
        raise typer.Exit(code=1)

    failed = [r for r in results if not r.ok]
    if failed:
        console.print(f"\n[red]{len(failed)} of {len(results)} checks failed.[/]")
        raise typer.Exit(code=1)
    console.print(f"\n[green]All {len(results)} checks passed.[/]")


async def _run_audit(cfg: SuiteSettings) -> list[CheckResult]:
    """Run the suite under a progress display and print the score table."""
    from pqa.audit import run_suite
    from pqa.shared.progress import AuditProgress, render_summary

    with AuditProgress(total_pages=len(cfg.pages)) as progress:
        progress.print_phase("Running Lighthouse audits")
        results = await run_suite(cfg, on_result=progress.record)

    console.print(render_summary(results, list(cfg.thresholds.as_category_map())))
    return results


@app.command()
def slug(url: str = typer.Argument(..., help="Absolute URL of a page.")) -> None:
    """Print the report file stem for a page URL."""
    try:
        console.print(slugify(url))
    except InvalidURLError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1)
