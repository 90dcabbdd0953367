"""Markdown reporter: a human-readable report document."""

import re

from localspy.reviewer.models import Finding, ReviewResult, Severity
from localspy.reviewer.reporters.base import SEVERITY_ORDER, BaseReporter

SEVERITY_EMOJI = {
    Severity.HIGH: "🔴",
    Severity.MEDIUM: "🟡",
    Severity.LOW: "🟢",
}


def code_fence(code: str) -> str:
    """Get a backtick fence longer than any backtick run inside the code."""
    longest = max((len(run) for run in re.findall(r"`+", code)), default=0)
    return "`" * max(3, longest + 1)


class MarkdownReporter(BaseReporter):
    """Reporter that renders review results as a Markdown document."""

    def _issue_block(self, index: int, issue: Finding) -> list[str]:
        lines = [
            f"### {index}. {issue.title} {SEVERITY_EMOJI[issue.severity]}",
            "",
            f"**File:** `{issue.file}`",
        ]
        if issue.line:
            location = f"{issue.line}:{issue.column}" if issue.column else str(issue.line)
            lines.append(f"**Line:** {location}")
        lines.extend([
            f"**Type:** {issue.category.value}",
            f"**Severity:** {issue.severity.value}",
            "",
            "**Description:**",
            issue.description,
            "",
        ])

        if issue.code:
            fence = code_fence(issue.code)
            lines.extend([
                "**Code:**",
                fence,
                issue.code,
                fence,
                "",
            ])

        if issue.suggestion:
            lines.extend([
                "**Suggestion:**",
                issue.suggestion,
                "",
            ])

        lines.extend(["---", ""])
        return lines

    def render(self, result: ReviewResult) -> str:
        summary = result.summary
        lines = [
            "# AI Code Review Report",
            "",
            "## Summary",
            "",
            f"- **Files Reviewed:** {summary.total_files}",
            f"- **Total Issues:** {summary.total_issues}",
            f"- **Execution Time:** {result.execution_time:.2f}s",
        ]
        if result.model:
            lines.append(f"- **Model:** {result.model}")
        lines.append("")

        lines.extend(["### Issues by Severity", ""])
        for severity in SEVERITY_ORDER:
            count = summary.issues_by_severity.get(severity)
            if count:
                lines.append(
                    f"- {SEVERITY_EMOJI[severity]} **{severity.value.upper()}:** {count}"
                )
        lines.append("")

        lines.extend(["### Issues by Type", ""])
        for category, count in summary.issues_by_type.items():
            lines.append(f"- **{category.value}:** {count}")
        lines.append("")

        if result.issues:
            lines.extend(["## Issues", ""])
            for index, issue in enumerate(result.issues, start=1):
                lines.extend(self._issue_block(index, issue))

        if result.diagnostics:
            lines.extend(["## Skipped Files", ""])
            for diagnostic in result.diagnostics:
                lines.append(f"- `{diagnostic.path}` ({diagnostic.stage}): {diagnostic.message}")
            lines.append("")

        return "\n".join(lines)
