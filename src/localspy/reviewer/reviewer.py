"""Main review pipeline that orchestrates scanning, reviewing and summarizing."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from localspy.backend import Backend, OllamaClient
from localspy.config import Settings, get_settings
from localspy.errors import BackendError, ModelUnavailableError
from localspy.reviewer.models import (
    Diagnostic,
    FileReview,
    Finding,
    ReviewConfig,
    ReviewResult,
    SourceFile,
)
from localspy.reviewer.parsing import normalize_response
from localspy.reviewer.prompts import build_prompt
from localspy.reviewer.scanner import FileSelector
from localspy.reviewer.summary import aggregate, filter_by_severity

logger = logging.getLogger(__name__)


class ReviewPipeline:
    """Orchestrates the code review of a project directory.

    Files are selected, reviewed one backend call each, and the findings of
    all files are filtered by severity and summarized. A file whose review
    fails contributes no findings; only configuration and model availability
    problems stop a run.
    """

    def __init__(
        self,
        config: ReviewConfig,
        backend: Backend | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the review pipeline.

        Args:
            config: Review configuration for this run
            backend: Model backend. Defaults to an Ollama client built from settings.
            settings: Runtime settings. Defaults to the global settings.
        """
        self.config = config
        self.settings = settings or get_settings()
        self.backend = backend or OllamaClient(
            host=self.settings.ollama_host,
            timeout=self.settings.request_timeout,
            pull_timeout=self.settings.pull_timeout,
        )
        self.selector = FileSelector(config)

    def ensure_model(self) -> None:
        """Make sure the configured model is installed, pulling it if needed.

        Raises:
            ModelUnavailableError: If the model is missing and cannot be pulled
        """
        model = self.config.model
        try:
            if self.backend.has_model(model):
                logger.debug(f"Model {model} is available")
                return
            logger.info(f"Model {model} not found. Pulling...")
            self.backend.pull_model(model)
        except BackendError as e:
            raise ModelUnavailableError(f"Model {model} is not available: {e}") from e

    def review_file(self, file: SourceFile, position: int = 1, total: int = 1) -> FileReview:
        """Review a single file.

        Backend failures are logged and turned into a FileReview with no
        issues and a diagnostic.
        """
        logger.info(f"Reviewing {file.path} ({position}/{total})")
        prompt = build_prompt(file, self.config)
        try:
            text = self.backend.generate(
                self.config.model,
                prompt,
                self.config.temperature,
                self.config.max_tokens,
            )
        except Exception as e:
            logger.warning(f"Failed to review {file.path}: {e}")
            return FileReview(
                filename=file.path,
                diagnostic=Diagnostic(path=file.path, stage="review", message=str(e)),
            )

        reply = normalize_response(text, file)
        logger.debug(
            f"{file.path}: {len(reply.issues)} issues (confidence {reply.confidence:.2f})"
        )
        return FileReview(filename=file.path, issues=reply.issues, confidence=reply.confidence)

    def _review_files(self, files: list[SourceFile]) -> list[FileReview]:
        """Review files in discovery order, concurrently if workers allow it."""
        total = len(files)
        workers = min(self.settings.max_workers, total)
        if workers <= 1:
            return [self.review_file(f, i, total) for i, f in enumerate(files, start=1)]

        logger.debug(f"Reviewing with {workers} workers")
        executor = ThreadPoolExecutor(max_workers=workers)
        try:
            # map() yields in submission order, so each file's findings stay together
            reviews = list(
                executor.map(self.review_file, files, range(1, total + 1), [total] * total)
            )
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown()
        return reviews

    def review(self, root: str | Path) -> ReviewResult:
        """Run the complete review pipeline on a project directory.

        Args:
            root: Project directory to review

        Returns:
            ReviewResult with the filtered findings and their summary

        Raises:
            ModelUnavailableError: If the model cannot be made available
            ValueError: If root is not a directory
        """
        start = time.perf_counter()
        logger.info(f"Starting review of {root} with {self.config.model}")
        self.ensure_model()

        logger.info("Scanning files...")
        scan = self.selector.scan(root)
        reviews = self._review_files(scan.files)

        all_issues: list[Finding] = []
        diagnostics = list(scan.diagnostics)
        for file_review in reviews:
            all_issues.extend(file_review.issues)
            if file_review.diagnostic is not None:
                diagnostics.append(file_review.diagnostic)

        issues = filter_by_severity(all_issues, self.config.severity)
        logger.info(
            f"Found {len(all_issues)} issues, {len(issues)} at or above "
            f"'{self.config.severity.value}' severity"
        )

        return ReviewResult(
            summary=aggregate(len(scan.files), issues),
            issues=issues,
            execution_time=time.perf_counter() - start,
            diagnostics=diagnostics,
            model=self.config.model,
        )

    __call__ = review


def review(
    root: str | Path,
    config: ReviewConfig,
    backend: Backend | None = None,
    settings: Settings | None = None,
) -> ReviewResult:
    """Review a project directory. See ``ReviewPipeline.review``."""
    return ReviewPipeline(config, backend=backend, settings=settings).review(root)
