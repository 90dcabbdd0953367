"""Reporter modules for outputting review results."""

from localspy.reviewer.reporters.base import BaseReporter
from localspy.reviewer.reporters.console import ConsoleReporter
from localspy.reviewer.reporters.json_reporter import JsonReporter
from localspy.reviewer.reporters.markdown import MarkdownReporter

__all__ = [
    "BaseReporter",
    "ConsoleReporter",
    "JsonReporter",
    "MarkdownReporter",
    "get_reporter",
]

_REPORTERS: dict[str, type[BaseReporter]] = {
    "json": JsonReporter,
    "markdown": MarkdownReporter,
    "console": ConsoleReporter,
}


def get_reporter(format: str, **kwargs) -> BaseReporter:
    """Get the reporter for an output format.

    Raises:
        ValueError: If the format is unknown
    """
    try:
        reporter_cls = _REPORTERS[format]
    except KeyError:
        raise ValueError(f"Unknown output format: {format}")
    return reporter_cls(**kwargs)
