"""Rich progress display for command-line audit runs."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from pqa.schemas.audit import CheckResult

console = Console()


class AuditProgress:
    """Tracks the checks of a run, one spinner line per page."""

    def __init__(self, total_pages: int) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
        )
        self._task_ids: dict[str, int] = {}
        self._total_pages = total_pages

    def __enter__(self) -> "AuditProgress":
        self._progress.__enter__()
        return self

    def __exit__(self, *args: object) -> None:
        self._progress.__exit__(*args)

    def _ensure_task(self, url: str) -> int:
        if url not in self._task_ids:
            n = len(self._task_ids) + 1
            self._task_ids[url] = self._progress.add_task(
                f"[cyan]{url}[/] ({n}/{self._total_pages})", total=None
            )
        return self._task_ids[url]

    def record(self, result: CheckResult) -> None:
        """Print a persistent line for a finished check and update its page's spinner."""
        tid = self._ensure_task(result.url)
        if result.ok:
            self._progress.console.print(f"  [green]✓[/] {result.kind.value:<12} {result.url}")
            self._progress.update(tid, description=f"[green]✓ {result.url}[/]")
        else:
            self._progress.console.print(
                f"  [red]✗[/] {result.kind.value:<12} {result.url}: [dim]{result.reason}[/]"
            )
            self._progress.update(tid, description=f"[red]✗ {result.url}[/]")

    def print_phase(self, label: str) -> None:
        """Print a phase header outside the progress display."""
        self._progress.console.print(Panel(f"[bold]{label}[/bold]", style="blue"))


def render_summary(results: list[CheckResult], categories: list[str]) -> Table:
    """Build a score table, one row per check."""
    table = Table(title="Lighthouse audit results")
    table.add_column("Page")
    table.add_column("Check")
    for cat in categories:
        table.add_column(cat, justify="right")
    table.add_column("Result")

    for r in results:
        cells = []
        for cat in categories:
            score = r.scores.get(cat)
            cells.append("–" if score is None else str(score))
        status = "[green]pass[/]" if r.ok else "[red]fail[/]"
        table.add_row(r.url, r.kind.value, *cells, status)
    return table
