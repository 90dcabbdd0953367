"""Reviewer - file selection, review and aggregation."""

from localspy.reviewer.models import (
    BackendReply,
    Diagnostic,
    FileReview,
    Finding,
    FindingCategory,
    ReviewConfig,
    ReviewResult,
    ReviewSummary,
    Severity,
    SeverityThreshold,
    SourceFile,
)

__all__ = [
    "BackendReply",
    "Diagnostic",
    "FileReview",
    "Finding",
    "FindingCategory",
    "ReviewConfig",
    "ReviewResult",
    "ReviewSummary",
    "Severity",
    "SeverityThreshold",
    "SourceFile",
]
