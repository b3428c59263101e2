"""Pydantic models for audit options, Lighthouse results and check outcomes."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Thresholds(BaseModel):
    """Minimum acceptable score (0-100) per Lighthouse category.

    ``None`` leaves a category unchecked and keeps it out of the audit run.
    """

    model_config = ConfigDict(populate_by_name=True)

    performance: int | None = Field(50, ge=0, le=100)
    accessibility: int | None = Field(50, ge=0, le=100)
    best_practices: int | None = Field(50, ge=0, le=100, alias="best-practices")
    seo: int | None = Field(50, ge=0, le=100)
    pwa: int | None = Field(50, ge=0, le=100)

    def as_category_map(self) -> dict[str, int]:
        """Checked categories keyed by their Lighthouse id."""
        return {
            key: value
            for key, value in self.model_dump(by_alias=True).items()
            if value is not None
        }


class AuditOptions(BaseModel):
    """Everything one audit call needs besides the page and the debugging port.

    - ``thresholds``: per-category minimums; any miss fails the audit.
    - ``html_report``: also write the human-readable Lighthouse report.
    - ``report_dir``: directory the HTML report is written to.
    - ``report_name``: file name of the HTML report inside ``report_dir``.
    """

    thresholds: Thresholds = Thresholds()
    html_report: bool = False
    report_dir: Path | None = None
    report_name: str = ""

    @model_validator(mode="after")
    def check_report_target(self) -> "AuditOptions":
        if self.html_report and (self.report_dir is None or not self.report_name):
            raise ValueError("html_report requires both 'report_dir' and 'report_name'")
        return self

    @property
    def report_path(self) -> Path | None:
        if not self.html_report or self.report_dir is None:
            return None
        return self.report_dir / self.report_name


class CategoryScore(BaseModel):
    """A single category score as reported by Lighthouse, scaled to 0-100."""

    id: str
    title: str = ""
    score: int | None = None  # None when Lighthouse could not score the category


class AuditResult(BaseModel):
    """Outcome of one Lighthouse run against one page."""

    url: str
    categories: list[CategoryScore] = []
    failures: list[str] = []
    report_path: str = ""

    @property
    def scores(self) -> dict[str, int | None]:
        return {c.id: c.score for c in self.categories}

    @property
    def passed(self) -> bool:
        return not self.failures


class CheckKind(str, Enum):
    """The two audit checks run against every page."""

    THRESHOLDS = "thresholds"
    HTML_REPORT = "html-report"

    @property
    def label(self) -> str:
        return "custom" if self is CheckKind.THRESHOLDS else "HTML"


class CheckResult(BaseModel):
    """Result of one check: ok, or failed with a reason."""

    url: str
    kind: CheckKind
    ok: bool
    reason: str = ""
    report_path: str = ""
    scores: dict[str, int | None] = {}

    @classmethod
    def passed(
        cls,
        url: str,
        kind: CheckKind,
        *,
        report_path: str = "",
        scores: dict[str, int | None] | None = None,
    ) -> "CheckResult":
        return cls(url=url, kind=kind, ok=True, report_path=report_path, scores=scores or {})

    @classmethod
    def failed(
        cls,
        url: str,
        kind: CheckKind,
        reason: str,
        *,
        scores: dict[str, int | None] | None = None,
    ) -> "CheckResult":
        return cls(url=url, kind=kind, ok=False, reason=reason, scores=scores or {})
