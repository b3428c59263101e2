"""Tests for the pqa command line."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from typer.testing import CliRunner

from pqa import cli
from pqa.errors import SetupError
from pqa.schemas.audit import CheckKind, CheckResult

runner = CliRunner()


class TestSlugCommand:
    def test_prints_slug(self) -> None:
        result = runner.invoke(cli.app, ["slug", "https://example.com/services/consulting-design"])
        assert result.exit_code == 0
        assert "services-consulting-design" in result.output

    def test_rejects_relative(self) -> None:
        result = runner.invoke(cli.app, ["slug", "/about-us"])
        assert result.exit_code == 1


class TestValidateCommand:
    def test_valid(self, tmp_config: Path) -> None:
        result = runner.invoke(cli.app, ["validate", "--config", str(tmp_config)])
        assert result.exit_code == 0
        assert "Config is valid" in result.output
        assert "about-us.html" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(cli.app, ["validate", "--config", str(tmp_path / "nope.yml")])
        assert result.exit_code == 1
        assert "Config validation failed" in result.output


class TestAuditCommand:
    def test_exit_code_reflects_failures(
        self, monkeypatch: pytest.MonkeyPatch, tmp_config: Path
    ) -> None:
        results = [
            CheckResult.passed("https://example.com/", CheckKind.THRESHOLDS),
            CheckResult.failed("https://example.com/", CheckKind.HTML_REPORT, "seo too low"),
        ]
        monkeypatch.setattr(cli, "_run_audit", AsyncMock(return_value=results))
        result = runner.invoke(cli.app, ["audit", "--config", str(tmp_config)])
        assert result.exit_code == 1
        assert "1 of 2 checks failed" in result.output

    def test_all_passed(self, monkeypatch: pytest.MonkeyPatch, tmp_config: Path) -> None:
        run = AsyncMock(return_value=[CheckResult.passed("https://example.com/faqs", CheckKind.THRESHOLDS)])
        monkeypatch.setattr(cli, "_run_audit", run)
        result = runner.invoke(
            cli.app, ["audit", "--config", str(tmp_config), "--url", "https://example.com/faqs"]
        )
        assert result.exit_code == 0
        assert "All 1 checks passed" in result.output
        cfg = run.call_args.args[0]
        assert cfg.pages == ["https://example.com/faqs"]
        assert cfg.thresholds.performance == 80

    def test_invalid_url_option(self, tmp_config: Path) -> None:
        result = runner.invoke(cli.app, ["audit", "--config", str(tmp_config), "--url", "faqs"])
        assert result.exit_code == 1
        assert "Invalid URL" in result.output

    def test_setup_failure(self, monkeypatch: pytest.MonkeyPatch, tmp_config: Path) -> None:
        monkeypatch.setattr(cli, "_run_audit", AsyncMock(side_effect=SetupError("no chromium")))
        result = runner.invoke(cli.app, ["audit", "--config", str(tmp_config)])
        assert result.exit_code == 1
        assert "Setup failed" in result.output
