"""
Pipeline Orchestrator.

Coordinates sequential execution of all stages for one archive, and runs
that pipeline on a background worker.
"""

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import AbstractSet, Optional, Union

from convostats.errors import (
    AnalysisInProgressError,
    InputReadError,
    ParseError,
    ReportWriteError,
    ShapeError,
)
from convostats.models.result import AnalysisResult, RunOutcome
from convostats.models.status import RunState
from convostats.stages.aggregation import FrequencyAggregator
from convostats.stages.extraction import MessageExtractor
from convostats.stages.parsing import parse_document, read_document
from convostats.stages.reporting import ReportWriter
from convostats.stages.sentiment import SentimentScorer, create_scorer
from convostats.stages.tokenization import join_messages, tokenize
from convostats.status import StatusChannel
from convostats.utils.storage import StorageManager
import config.settings as settings

logger = logging.getLogger(__name__)


def build_scorer(backend: Optional[str] = None) -> SentimentScorer:
    """Create the configured sentiment scorer."""
    backend = backend or settings.SENTIMENT_BACKEND
    if backend == "gemini":
        return create_scorer(
            backend,
            api_key=settings.GOOGLE_API_KEY,
            model_name=settings.SENTIMENT_MODEL,
            temperature=settings.SENTIMENT_TEMPERATURE,
            max_retries=settings.SENTIMENT_MAX_RETRIES,
            max_chars=settings.SENTIMENT_MAX_CHARS
        )
    return create_scorer(backend)


class PipelineOrchestrator:
    """
    Runs one analysis from archive path to report files.

    Coordinates:
    1. Parsing → 2. Extraction → 3. Tokenization
    → 4. Aggregation (raw, filtered) → 5. Sentiment → 6. Reports

    Fatal errors end the run with a FAILED status event; nothing is raised
    out of run().
    """

    def __init__(
        self,
        output_dir: Union[str, Path, None] = None,
        scorer: Optional[SentimentScorer] = None,
        stop_words: Optional[AbstractSet[str]] = None
    ):
        """
        Initialize pipeline orchestrator.

        Args:
            output_dir: Directory for report files (default: settings.OUTPUT_ROOT)
            scorer: Sentiment scorer (default: configured backend)
            stop_words: Words excluded from the filtered table
        """
        self.output_dir = str(output_dir or settings.OUTPUT_ROOT)
        self.stop_words = settings.STOP_WORDS if stop_words is None else frozenset(stop_words)

        logger.info("Initializing pipeline components...")

        self.scorer = scorer or build_scorer()
        self.aggregator = FrequencyAggregator()
        self.storage = StorageManager(self.output_dir)
        self.report_writer = ReportWriter(
            storage=self.storage,
            raw_filename=settings.RAW_REPORT_FILENAME,
            filtered_filename=settings.FILTERED_REPORT_FILENAME,
            raw_header=settings.RAW_REPORT_HEADER,
            filtered_header=settings.FILTERED_REPORT_HEADER,
            max_entries=settings.REPORT_MAX_ENTRIES
        )

        logger.info(f"Pipeline initialized (sentiment backend: {self.scorer.name})")

    def run(
        self,
        input_path: Union[str, Path],
        channel: Optional[StatusChannel] = None
    ) -> Optional[AnalysisResult]:
        """
        Run the complete pipeline for one archive.

        Args:
            input_path: Exported conversations JSON
            channel: Receives status events (a private one is used if None)

        Returns:
            AnalysisResult on success, None if the run failed
        """
        channel = channel or StatusChannel()
        outcome = self.execute(input_path, channel)
        channel.publish(outcome.state, outcome.message)
        return outcome.result

    def execute(self, input_path: Union[str, Path], channel: StatusChannel) -> RunOutcome:
        """
        Run every stage, publishing all status events except the terminal one.

        The caller publishes outcome.state / outcome.message once it has
        recorded the result.
        """
        try:
            result = self._run_stages(input_path, channel)

        except ShapeError as e:
            logger.error(f"Invalid archive shape in {input_path}: {e}")
            return RunOutcome(RunState.FAILED, "Invalid JSON format")
        except ParseError as e:
            logger.error(f"Failed to parse {input_path}: {e}")
            return RunOutcome(RunState.FAILED, f"Error parsing file: {e}")
        except InputReadError as e:
            return RunOutcome(RunState.FAILED, f"Error loading file: {e}")
        except ReportWriteError as e:
            logger.error(f"Failed to write reports to {self.output_dir}: {e}")
            return RunOutcome(RunState.FAILED, f"Error writing results: {e}")
        except Exception as e:
            last = channel.latest
            state = last.state if last else RunState.IDLE
            logger.error(f"Analysis failed in state {state.value}: {e}", exc_info=True)
            return RunOutcome(RunState.FAILED, f"Analysis failed: {e}")

        logger.info(f"Analysis complete in {result.elapsed_seconds:.2f}s")
        return RunOutcome(
            RunState.DONE,
            f"Analysis completed at: {result.finished_at}\n"
            f"Total analysis time: {result.elapsed_seconds} seconds",
            result
        )

    def _run_stages(self, input_path: Union[str, Path], channel: StatusChannel) -> AnalysisResult:
        started_at = datetime.now()
        logger.info(f"Starting analysis of {input_path}")
        channel.publish(RunState.PARSING, f"Starting analysis at: {started_at}")

        # STAGE 1: Parsing
        conversations = parse_document(read_document(input_path))
        channel.publish(RunState.PARSING, "File loaded and JSON parsed successfully")

        # STAGE 2: Extraction
        messages = MessageExtractor().extract(conversations)
        channel.publish(RunState.EXTRACTING, "Messages extracted successfully")

        # STAGE 3: Tokenization
        all_text = join_messages(messages)
        tokens = tokenize(all_text)
        logger.info(f"Tokenized {len(messages)} messages into {len(tokens)} tokens")
        channel.publish(RunState.TOKENIZING, "Text tokenized successfully")

        # STAGE 4: Aggregation
        raw_table = self.aggregator.count(tokens)
        channel.publish(RunState.AGGREGATING, "Word frequencies counted")

        filtered_table = self.aggregator.count_filtered(tokens, self.stop_words)
        channel.publish(RunState.AGGREGATING, "Stop words filtered out")

        # STAGE 5: Sentiment
        sentiment = self.scorer.score(all_text)
        logger.info(f"Overall sentiment: {sentiment}")
        channel.publish(RunState.SCORING, f"Overall sentiment: {sentiment}")

        # STAGE 6: Reports
        raw_path, filtered_path = self.report_writer.write(raw_table, filtered_table, sentiment)
        channel.publish(RunState.WRITING, f"Results written to {self.output_dir}")

        return AnalysisResult(
            raw_table=raw_table,
            filtered_table=filtered_table,
            sentiment=sentiment,
            message_count=len(messages),
            raw_report_path=raw_path,
            filtered_report_path=filtered_path,
            started_at=started_at,
            finished_at=datetime.now()
        )


class AnalysisRunner:
    """
    Runs the pipeline on a background thread, one run at a time.

    start() returns immediately with the run's StatusChannel. By the time
    the terminal DONE or FAILED event is published, result holds the run's
    outcome and is_analyzing is already False.
    """

    def __init__(self, orchestrator: PipelineOrchestrator):
        self.orchestrator = orchestrator
        self.result: Optional[AnalysisResult] = None
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._analyzing = False

    @property
    def is_analyzing(self) -> bool:
        with self._lock:
            return self._analyzing

    def start(self, input_path: Union[str, Path], channel: Optional[StatusChannel] = None) -> StatusChannel:
        """
        Launch a run in the background.

        Raises:
            AnalysisInProgressError: If a run is already in flight
        """
        channel = channel or StatusChannel()

        with self._lock:
            if self._analyzing:
                raise AnalysisInProgressError("An analysis is already in progress")
            self._analyzing = True
            self.result = None
            self._thread = threading.Thread(
                target=self._work,
                args=(input_path, channel),
                name="convostats-analysis",
                daemon=True
            )

        self._thread.start()
        return channel

    def wait(self, timeout: Optional[float] = None) -> Optional[AnalysisResult]:
        """Block until the current run finishes. Returns its result."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return self.result

    def _work(self, input_path: Union[str, Path], channel: StatusChannel) -> None:
        outcome = RunOutcome(RunState.FAILED, "Analysis failed")
        try:
            outcome = self.orchestrator.execute(input_path, channel)
        finally:
            with self._lock:
                self.result = outcome.result
                self._analyzing = False
            channel.publish(outcome.state, outcome.message)
