"""Severity filtering and summary statistics."""

from collections import Counter
from collections.abc import Iterable

from localspy.reviewer.models import Finding, ReviewSummary, SeverityThreshold


def passes_threshold(finding: Finding, threshold: SeverityThreshold) -> bool:
    """Check a finding against a minimum severity.

    ``all`` has rank 0, below every severity, so it keeps everything through
    the same comparison as the other thresholds.
    """
    return finding.severity.rank >= threshold.rank


def filter_by_severity(
    findings: Iterable[Finding], threshold: SeverityThreshold | str
) -> list[Finding]:
    """Drop findings below a minimum severity, preserving order."""
    threshold = SeverityThreshold(threshold)
    return [f for f in findings if passes_threshold(f, threshold)]


def aggregate(total_files: int, findings: list[Finding]) -> ReviewSummary:
    """Build the summary counts from the final list of findings.

    Only severities and categories that occur appear in the mappings.
    """
    by_severity = Counter(f.severity for f in findings)
    by_type = Counter(f.category for f in findings)
    return ReviewSummary(
        total_files=total_files,
        total_issues=len(findings),
        issues_by_severity=dict(by_severity),
        issues_by_type=dict(by_type),
    )
