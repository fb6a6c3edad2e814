"""Pipeline orchestrator for coordinating all processing stages."""

import asyncio
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from newsdesk.core.article import RawArticle
from newsdesk.core.config import Config
from newsdesk.core.edition import EditionRecord
from newsdesk.integrations.backoff import AskClient, BackoffCaller
from newsdesk.integrations.openai_client import OpenAIClient
from newsdesk.pipeline.collectors import BaseCollector, create_collector
from newsdesk.pipeline.edition_assembler import EditionAssembler
from newsdesk.pipeline.enrichment import ArticleEnricher
from newsdesk.pipeline.formatters import write_edition_json, write_edition_markdown
from newsdesk.pipeline.indexes import IndexMerger
from newsdesk.pipeline.scheduler import FanOutScheduler
from newsdesk.services.config_loader import load_prompt_config
from newsdesk.utils.date_utils import now_local
from newsdesk.utils.exceptions import NewsdeskError, PipelineError
from newsdesk.utils.fs_utils import ensure_writable_dir
from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)


class PipelineOrchestrator:
    """Orchestrates the news enrichment pipeline.

    Coordinates: Collection → Enrichment → Edition → (JSON, Markdown, Indexes)
    """

    def __init__(
        self,
        config: Config,
        client: Optional[AskClient] = None,
        collectors: Optional[Sequence[BaseCollector]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize pipeline orchestrator.

        Args:
            config: Application configuration.
            client: Generation client. Defaults to an OpenAIClient built
                from the configured prompt template.
            collectors: Article sources. Defaults to the configured sources.
            clock: Local time source for the edition stamp.
            sleep: Coroutine used to wait between retries.
        """
        self.config = config
        self.run_id = self._generate_run_id()

        self._client = client
        self._collectors = list(collectors) if collectors is not None else None
        self._sleep = sleep

        self.assembler = EditionAssembler(clock=clock or now_local)
        self.index_merger = IndexMerger(config.markdown_output_dir)

        logger.info("pipeline_initialized", run_id=self.run_id)

    async def run(self) -> Dict[str, Any]:
        """Run the pipeline.

        Returns:
            Statistics dict with counts for each stage.

        Raises:
            PipelineError: If an output directory is unusable, nothing was
                collected, or every article failed enrichment.
        """
        logger.info("pipeline_starting", run_id=self.run_id)

        try:
            stats: Dict[str, Any] = {
                "collected": 0,
                "enriched": 0,
                "failed": 0,
                "json_written": False,
                "markdown_written": False,
                "indexes_updated": 0,
            }

            # Fail before any work if the outputs cannot be written
            ensure_writable_dir(self.config.json_output_dir)
            ensure_writable_dir(self.config.markdown_output_dir)

            # Stage 1: Collection
            articles = await self._run_collection()
            stats["collected"] = len(articles)
            if not articles:
                raise PipelineError("No articles collected")

            # Stage 2: Enrichment
            edition, failed = await self._run_enrichment(articles)
            stats["enriched"] = len(edition.articles)
            stats["failed"] = failed
            if not edition.articles:
                raise PipelineError(
                    f"All {len(articles)} articles failed enrichment"
                )

            # Stage 3: Outputs
            stats.update(self._write_outputs(edition))
            stats["local_date"] = edition.local_date
            stats["time_slot"] = edition.time_slot.value

            logger.info("pipeline_completed", run_id=self.run_id, stats=stats)
            return stats

        except NewsdeskError as e:
            logger.error("pipeline_failed", run_id=self.run_id, error=str(e))
            raise

        except Exception as e:
            logger.error("pipeline_failed", run_id=self.run_id, error=str(e))
            raise PipelineError(f"Pipeline execution failed: {e}") from e

    async def _run_collection(self) -> List[RawArticle]:
        """Run news collection stage.

        A failing source is logged and skipped.
        """
        logger.info("stage_collection_starting")

        collectors = self._collectors
        if collectors is None:
            collectors = [
                create_collector(name, timeout=self.config.request_timeout_sec)
                for name in self.config.source_list
            ]

        articles: List[RawArticle] = []
        for collector in collectors:
            try:
                collected = await collector.collect()
            except Exception as e:
                logger.error(
                    "source_collection_failed",
                    source=getattr(collector, "name", type(collector).__name__),
                    error=str(e),
                )
                continue
            articles.extend(collected)

        logger.info("stage_collection_complete", collected=len(articles))
        return articles

    async def _run_enrichment(self, articles: List[RawArticle]) -> tuple:
        """Run the enrichment stage and assemble the edition.

        Returns:
            (edition, number of dropped articles)
        """
        logger.info("stage_enrichment_starting", articles=len(articles))

        client = BackoffCaller(
            self._build_client(),
            max_retries=self.config.max_retries,
            base_delay=self.config.retry_base_delay,
            max_delay=self.config.retry_max_delay,
            max_jitter=self.config.retry_max_jitter,
            sleep=self._sleep,
        )
        enricher = ArticleEnricher(client)
        scheduler = FanOutScheduler(enricher, concurrency=self.config.max_concurrency)

        results = await scheduler.process(articles)
        edition = self.assembler.assemble(results)

        for failure in enricher.failures:
            logger.warning(
                "article_dropped",
                index=failure.index,
                source=failure.source,
                reason=failure.reason.value,
            )

        failed = len(articles) - len(edition.articles)
        logger.info(
            "stage_enrichment_complete",
            enriched=len(edition.articles),
            failed=failed,
        )
        return edition, failed

    def _build_client(self) -> AskClient:
        if self._client is not None:
            return self._client

        prompt = load_prompt_config(self.config.prompt_name, Path(self.config.config_dir))
        return OpenAIClient(
            api_key=self.config.openai_api_key,
            prompt=prompt,
            model=self.config.model,
            base_url=self.config.openai_base_url,
            temperature=self.config.temperature,
            max_tokens=self.config.max_output_tokens,
            timeout=float(self.config.request_timeout_sec),
        )

    def _write_outputs(self, edition: EditionRecord) -> Dict[str, Any]:
        """Write the edition to every sink.

        Sinks are independent: a failing sink is logged and the others
        still run.
        """
        logger.info("stage_outputs_starting", edition=edition.edition_filename)
        stats: Dict[str, Any] = {}

        try:
            write_edition_json(edition, self.config.json_output_dir)
            stats["json_written"] = True
        except Exception as e:
            logger.error("json_output_failed", error=str(e))
            stats["json_written"] = False

        try:
            write_edition_markdown(edition, self.config.markdown_output_dir)
            stats["markdown_written"] = True
        except Exception as e:
            logger.error("markdown_output_failed", error=str(e))
            stats["markdown_written"] = False

        index_results = self.index_merger.update_all(edition)
        stats["indexes_updated"] = sum(1 for ok in index_results.values() if ok)

        logger.info("stage_outputs_complete", **stats)
        return stats

    def _generate_run_id(self) -> str:
        """Generate unique run ID.

        Returns:
            Run ID string (timestamp + short UUID).
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        short_uuid = str(uuid.uuid4())[:8]
        return f"{timestamp}_{short_uuid}"
