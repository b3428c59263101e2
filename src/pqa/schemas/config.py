"""Configuration schema — validates audit-config.yml."""

from pathlib import Path

from pydantic import BaseModel, field_validator

from pqa.schemas.audit import Thresholds
from pqa.targets import PAGES_TO_TEST, slugify


class SuiteSettings(BaseModel):
    """Settings for one audit run.

    Every field has a default, so an empty config audits the built-in page
    list against the standard thresholds.
    """

    pages: list[str] = list(PAGES_TO_TEST)

    # Output
    report_directory: str = "./reports"

    # Browser
    debugging_port: int = 9222  # Lighthouse attaches to the browser on this port
    headless: bool = True
    navigation_timeout_ms: float | None = None  # None keeps Playwright's default

    # Lighthouse
    thresholds: Thresholds = Thresholds()
    lighthouse_command: list[str] = ["lighthouse"]
    lighthouse_flags: list[str] = []

    @field_validator("pages")
    @classmethod
    def check_pages(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one page is required")
        for url in v:
            slugify(url)
        return v

    @field_validator("debugging_port")
    @classmethod
    def check_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError(f"debugging_port out of range: {v}")
        return v

    @field_validator("lighthouse_command")
    @classmethod
    def check_command(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("lighthouse_command must not be empty")
        return v

    @property
    def report_dir(self) -> Path:
        return Path(self.report_directory).resolve()
