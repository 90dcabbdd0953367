"""Base reporter interface for review output."""

from abc import ABC, abstractmethod

from rich.console import Console

from localspy.reviewer.models import ReviewResult, Severity

# Report order, most severe first
SEVERITY_ORDER = [Severity.HIGH, Severity.MEDIUM, Severity.LOW]


class BaseReporter(ABC):
    """Abstract base class for review reporters."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the reporter.

        Args:
            console: Rich console for output. Creates new one if not provided.
        """
        self.console = console or Console()

    @abstractmethod
    def render(self, result: ReviewResult) -> str:
        """Render the review result as text.

        Args:
            result: The review result to render.
        """
        pass

    def report(self, result: ReviewResult) -> None:
        """Output the review result to the console."""
        self.console.print(self.render(result), markup=False, highlight=False)
