"""Console reporter: terse colorized terminal output."""

from rich.console import Group
from rich.markup import escape
from rich.rule import Rule
from rich.text import Text

from localspy.reviewer.models import Finding, ReviewResult, Severity
from localspy.reviewer.reporters.base import SEVERITY_ORDER, BaseReporter

SEVERITY_STYLE = {
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "green",
}


class ConsoleReporter(BaseReporter):
    """Reporter that prints a colorized summary and issue list."""

    def _issue_lines(self, index: int, issue: Finding) -> list[str]:
        style = SEVERITY_STYLE[issue.severity]
        location = f"[cyan]{escape(issue.file)}[/cyan]"
        if issue.line:
            location += f" (Line {issue.line})"
        lines = [
            f"[bold]{index}. {escape(issue.title)}[/bold]",
            f"   File: {location}",
            f"   Type: [magenta]{issue.category.value}[/magenta] | "
            f"Severity: [{style}]{issue.severity.value}[/{style}]",
            "",
            "   [dim]Description:[/dim]",
            f"   {escape(issue.description)}",
            "",
        ]
        if issue.suggestion:
            lines.extend([
                "   [dim]💡 Suggestion:[/dim]",
                f"   [green]{escape(issue.suggestion)}[/green]",
                "",
            ])
        return lines

    def _build(self, result: ReviewResult) -> Group:
        summary = result.summary
        lines = [
            "[bold blue]🤖 AI Code Review Report[/bold blue]",
            "",
            "[bold]📊 Summary:[/bold]",
            f"  Files Reviewed: [cyan]{summary.total_files}[/cyan]",
            f"  Total Issues: [yellow]{summary.total_issues}[/yellow]",
            f"  Execution Time: [green]{result.execution_time:.2f}[/green]s",
            "",
        ]

        if summary.issues_by_severity:
            lines.append("[bold]🎯 Issues by Severity:[/bold]")
            for severity in SEVERITY_ORDER:
                count = summary.issues_by_severity.get(severity)
                if count:
                    style = SEVERITY_STYLE[severity]
                    lines.append(f"  [{style}]{severity.value.upper()}[/{style}]: {count}")
            lines.append("")

        if summary.issues_by_type:
            lines.append("[bold]📋 Issues by Type:[/bold]")
            for category, count in summary.issues_by_type.items():
                lines.append(f"  [cyan]{category.value}[/cyan]: {count}")
            lines.append("")

        if result.diagnostics:
            lines.append(f"[dim]Skipped {len(result.diagnostics)} file(s), see log for details[/dim]")
            lines.append("")

        renderables: list = [Text.from_markup("\n".join(lines))]
        if result.issues:
            renderables.append(Text.from_markup("[bold]🔍 Detailed Issues:[/bold]"))
            renderables.append(Rule(style="grey50"))
            for index, issue in enumerate(result.issues, start=1):
                renderables.append(Text.from_markup("\n".join(self._issue_lines(index, issue))))
                renderables.append(Rule(style="grey50"))
        else:
            renderables.append(Text.from_markup("[green]✅ No issues found![/green]"))
        return Group(*renderables)

    def render(self, result: ReviewResult) -> str:
        with self.console.capture() as capture:
            self.console.print(self._build(result))
        return capture.get()

    def report(self, result: ReviewResult) -> None:
        self.console.print(self._build(result))
