# tests/integration/test_pipeline.py
"""Integration tests for the full pipeline run."""

import json

import pytest

from conftest import FakeCollector, RoutingClient, article_payload, no_sleep
from newsdesk.core.article import RawArticle
from newsdesk.pipeline.orchestrator import PipelineOrchestrator
from newsdesk.utils.exceptions import AIServiceError, CollectorError, PipelineError

EXHAUSTED = RawArticle(source="https://lite.cnn.com/2025/05/06/a", content="exhausted")
CLEAN = RawArticle(source="https://lite.cnn.com/2025/05/06/b", content="clean")
TRUNCATED = RawArticle(source="https://text.npr.org/nx-s1-3", content="truncated")


def scenario_client() -> RoutingClient:
    clean = json.dumps(article_payload(title="Clean story"))
    recovered = json.dumps(article_payload(title="Recovered story", category="Business & Economy"))
    return RoutingClient(
        {
            "exhausted": [AIServiceError("service unavailable")],
            "clean": [clean],
            "truncated": [recovered[:90], recovered],
        }
    )


def orchestrator_for(config, client, articles, clock, collectors=None):
    return PipelineOrchestrator(
        config,
        client=client,
        collectors=collectors or [FakeCollector(articles)],
        clock=clock,
        sleep=no_sleep,
    )


@pytest.mark.integration
class TestPipelineRun:
    """End-to-end runs with a scripted generation client."""

    async def test_mixed_batch(self, test_config, fixed_clock):
        """Should publish the two good articles and report one failure."""
        client = scenario_client()
        orchestrator = orchestrator_for(
            test_config, client, [EXHAUSTED, CLEAN, TRUNCATED], fixed_clock(7, 15)
        )

        stats = await orchestrator.run()

        assert stats["collected"] == 3
        assert stats["enriched"] == 2
        assert stats["failed"] == 1
        assert stats["json_written"] and stats["markdown_written"]
        assert stats["indexes_updated"] == 3

        assert client.calls_for("exhausted") == test_config.max_retries + 1
        assert client.calls_for("clean") == 1
        assert client.calls_for("truncated") == 2

        json_path = test_config.json_output_dir / "2025-05-06" / "morning.json"
        edition = json.loads(json_path.read_text(encoding="utf-8"))
        assert [a["title"] for a in edition["articles"]] == ["Clean story", "Recovered story"]
        assert edition["articles"][1]["source"] == TRUNCATED.source

        md_dir = test_config.markdown_output_dir
        assert (md_dir / "2025-05-06_morning.md").exists()

        summary = (md_dir / "SUMMARY.md").read_text(encoding="utf-8").splitlines()
        assert summary.count("    - [2025-05-06](./2025-05-06.md)") == 1
        assert summary.count("        - [Morning](./2025-05-06_morning.md)") == 1

        daily = (md_dir / "daily_news.md").read_text(encoding="utf-8").splitlines()
        assert daily.count("- [**2025-05-06**](./2025-05-06.md)") == 1
        assert daily.count("    - [Morning](./2025-05-06_morning.md)") == 1

        toc = (md_dir / "2025-05-06.md").read_text(encoding="utf-8").splitlines()
        assert toc.count("- [Morning](./2025-05-06_morning.md)") == 1
        assert "\t- [**Business & Economy**](2025-05-06_morning.md#business--economy)" in toc
        assert (
            "\t\t- <small>`npr`</small> - "
            "[Recovered story](2025-05-06_morning.md#recovered-story---npr)"
        ) in toc

    async def test_rerun_leaves_indexes_unchanged(self, test_config, fixed_clock):
        """Should not duplicate index entries when an edition runs twice."""
        md_dir = test_config.markdown_output_dir
        first = orchestrator_for(test_config, scenario_client(), [CLEAN], fixed_clock(9, 0))
        await first.run()
        documents = {
            name: (md_dir / name).read_text(encoding="utf-8")
            for name in ("SUMMARY.md", "daily_news.md", "2025-05-06.md")
        }

        second = orchestrator_for(test_config, scenario_client(), [CLEAN], fixed_clock(10, 0))
        await second.run()

        for name, text in documents.items():
            assert (md_dir / name).read_text(encoding="utf-8") == text

    async def test_two_slots_share_date_heading(self, test_config, fixed_clock):
        """Should list morning and evening under one date heading."""
        await orchestrator_for(test_config, scenario_client(), [CLEAN], fixed_clock(7, 0)).run()
        await orchestrator_for(test_config, scenario_client(), [CLEAN], fixed_clock(20, 0)).run()

        daily = (test_config.markdown_output_dir / "daily_news.md").read_text(encoding="utf-8")
        assert daily.count("[**2025-05-06**]") == 1
        assert "    - [Morning](./2025-05-06_morning.md)\n    - [Evening](./2025-05-06_evening.md)" in daily

    async def test_all_failed_writes_nothing(self, test_config, fixed_clock):
        """Should fail the run and write no output when every article fails."""
        orchestrator = orchestrator_for(test_config, scenario_client(), [EXHAUSTED], fixed_clock())

        with pytest.raises(PipelineError, match="failed enrichment"):
            await orchestrator.run()

        assert list(test_config.json_output_dir.iterdir()) == []
        assert list(test_config.markdown_output_dir.iterdir()) == []

    async def test_nothing_collected(self, test_config, fixed_clock):
        """Should fail the run when no source produced articles."""
        collectors = [FakeCollector([], name="cnn"), FakeCollector([], name="npr", error=CollectorError("down"))]
        orchestrator = orchestrator_for(test_config, scenario_client(), [], fixed_clock(), collectors)

        with pytest.raises(PipelineError, match="No articles collected"):
            await orchestrator.run()

    async def test_failing_source_skipped(self, test_config, fixed_clock):
        """Should keep articles from healthy sources."""
        collectors = [FakeCollector([], name="cnn", error=CollectorError("down")), FakeCollector([CLEAN])]
        orchestrator = orchestrator_for(test_config, scenario_client(), [], fixed_clock(), collectors)

        stats = await orchestrator.run()
        assert stats["enriched"] == 1

    async def test_unwritable_output_fails_up_front(self, test_config, fixed_clock, tmp_path):
        """Should fail before calling the model when an output dir is unusable."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file", encoding="utf-8")
        config = test_config.model_copy(update={"json_output_dir": blocker / "json"})
        client = scenario_client()

        with pytest.raises(PipelineError):
            await orchestrator_for(config, client, [CLEAN], fixed_clock()).run()

        assert client.calls_for("clean") == 0
