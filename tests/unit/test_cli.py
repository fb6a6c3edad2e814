# tests/unit/test_cli.py
"""Unit tests for the run command."""

from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from newsdesk.cli.main import cli
from newsdesk.utils.exceptions import PipelineError


@pytest.fixture
def runner(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    monkeypatch.chdir(tmp_path)
    return CliRunner()


@pytest.mark.unit
class TestRunCommand:
    """Tests for `newsdesk run`."""

    def test_overrides_reach_config(self, runner, tmp_path):
        """Should pass CLI options into the configuration."""
        with patch("newsdesk.cli.commands.run.PipelineOrchestrator") as orchestrator_cls, patch(
            "newsdesk.cli.commands.run.setup_logging"
        ):
            orchestrator_cls.return_value.run = AsyncMock(
                return_value={"collected": 2, "enriched": 2, "failed": 0, "json_written": True,
                              "markdown_written": True, "indexes_updated": 3,
                              "local_date": "2025-05-06", "time_slot": "morning"}
            )

            result = runner.invoke(
                cli,
                ["run", "-j", str(tmp_path / "j"), "-m", str(tmp_path / "m"),
                 "--sources", "cnn", "--concurrency", "3"],
            )

        assert result.exit_code == 0, result.output
        config = orchestrator_cls.call_args.kwargs["config"]
        assert config.json_output_dir == tmp_path / "j"
        assert config.markdown_output_dir == tmp_path / "m"
        assert config.source_list == ["cnn"]
        assert config.max_concurrency == 3
        assert "Pipeline completed successfully!" in result.output

    def test_pipeline_failure_aborts(self, runner, tmp_path):
        """Should exit non-zero when the pipeline fails."""
        with patch("newsdesk.cli.commands.run.PipelineOrchestrator") as orchestrator_cls, patch(
            "newsdesk.cli.commands.run.setup_logging"
        ):
            orchestrator_cls.return_value.run = AsyncMock(side_effect=PipelineError("all failed"))
            result = runner.invoke(cli, ["run", "-j", str(tmp_path / "j"), "-m", str(tmp_path / "m")])

        assert result.exit_code != 0
        assert "Pipeline failed: all failed" in result.output

    def test_rejects_zero_concurrency(self, runner):
        """Should reject a concurrency below 1."""
        result = runner.invoke(cli, ["run", "--concurrency", "0"])
        assert result.exit_code == 2
