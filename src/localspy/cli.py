"""Command-line interface for localspy."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from localspy import __version__
from localspy.config import get_settings, load_review_config, write_default_config
from localspy.config_io import CONFIG_FILE_NAMES
from localspy.errors import BackendError, ConfigurationError, ModelUnavailableError

app = typer.Typer(
    name="localspy",
    help="AI-powered code reviewer using local Ollama models",
    no_args_is_help=True,
)

# Reports go to stdout, everything else to stderr so reports can be piped
console = Console()
err_console = Console(stderr=True)

RECOMMENDED_MODELS = [
    ("codellama:7b", "Code Llama 7B - Fast, good for basic code review", "3.8GB"),
    ("codellama:13b", "Code Llama 13B - Better accuracy, slower", "7.3GB"),
    ("deepseek-coder:6.7b", "DeepSeek Coder - Excellent for code analysis", "3.8GB"),
    ("starcoder:7b", "StarCoder - Good for multiple languages", "4.1GB"),
]


def setup_logging(verbose: bool = False) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=True, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"localspy version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """localspy - AI-powered code reviewer using local Ollama models."""
    pass


@app.command()
def init(
    path: Annotated[
        Path,
        typer.Argument(help="Config file to create"),
    ] = Path(CONFIG_FILE_NAMES[0]),
) -> None:
    """Create a configuration file with the default settings."""
    try:
        write_default_config(path)
    except FileExistsError:
        console.print("[yellow]Configuration file already exists![/yellow]")
        return
    console.print(f"[green]✅ Configuration file created: {path}[/green]")
    console.print("[dim]Edit the file to customize your review settings.[/dim]")


@app.command()
def review(
    path: Annotated[
        str,
        typer.Argument(help="Path to review"),
    ] = ".",
    config_file: Annotated[
        str | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a YAML or JSON config file (overrides default config locations).",
        ),
    ] = None,
    model: Annotated[
        str | None,
        typer.Option("--model", "-m", help="Ollama model to use"),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output format: console, json or markdown"),
    ] = None,
    severity: Annotated[
        str | None,
        typer.Option("--severity", "-s", help="Minimum severity: low, medium, high or all"),
    ] = None,
    save: Annotated[
        Path | None,
        typer.Option("--save", help="Save the report to a file instead of printing it"),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-w", min=1, help="Number of files reviewed concurrently"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """Review the code under PATH with a local model.

    Examples:
        localspy review                          # Review current directory
        localspy review src --severity high      # Only high severity issues
        localspy review . -o markdown --save review.md
        localspy review . --model deepseek-coder:6.7b --workers 2
    """
    setup_logging(verbose)

    try:
        config = load_review_config(config_file)
        config = config.with_overrides(model=model, output_format=output, severity=severity)
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)
    except ValidationError as e:
        err_console.print(f"[red]Configuration error:[/red] invalid command-line option\n{e}")
        raise typer.Exit(1)

    settings = get_settings()
    if workers:
        settings = settings.model_copy(update={"max_workers": workers})

    root = Path(path).resolve()
    if not root.is_dir():
        err_console.print(f"[red]Error:[/red] Directory does not exist: {root}")
        raise typer.Exit(1)

    err_console.print(
        Panel(
            f"[bold blue]Reviewing:[/bold blue] {root}\n"
            f"[bold]Model:[/bold] {config.model} [dim]({settings.ollama_host})[/dim]\n"
            f"[bold]Review types:[/bold] {', '.join(t.value for t in config.review_types)}\n"
            f"[bold]Minimum severity:[/bold] {config.severity.value}\n"
            f"[bold]Output:[/bold] {config.output_format}",
            title="localspy",
        )
    )

    try:
        from localspy.reviewer.reviewer import ReviewPipeline

        pipeline = ReviewPipeline(config, settings=settings)
        with err_console.status("Reviewing code..."):
            result = pipeline(root)
    except ModelUnavailableError as e:
        err_console.print(f"[red]Model unavailable:[/red] {e}")
        err_console.print("[dim]Make sure Ollama is running: ollama serve[/dim]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        err_console.print("[yellow]Review aborted[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        err_console.print(f"[red]Error during review:[/red] {e}")
        logging.exception("Review failed")
        raise typer.Exit(1)

    err_console.print("[green]✓[/green] Code review completed!")

    from localspy.reviewer.reporters import get_reporter

    if save:
        reporter = get_reporter(config.output_format, console=Console(width=100, no_color=True))
        save.write_text(reporter.render(result), encoding="utf-8")
        err_console.print(f"[green]Report saved to: {save}[/green]")
    else:
        get_reporter(config.output_format, console=console).report(result)


@app.command()
def models() -> None:
    """List recommended models and the ones installed locally."""
    console.print("[bold]🤖 Recommended Models for Code Review:[/bold]\n")
    for name, description, size in RECOMMENDED_MODELS:
        console.print(f"[cyan]• {name}[/cyan]")
        console.print(f"  {description}")
        console.print(f"[dim]  Size: {size}[/dim]\n")

    from localspy.backend import OllamaClient

    settings = get_settings()
    client = OllamaClient(host=settings.ollama_host, timeout=10.0)
    try:
        installed = client.list_models()
    except BackendError as e:
        console.print(f"[dim]Could not list installed models: {e}[/dim]")
    else:
        console.print("[bold]Installed:[/bold] " + (", ".join(installed) or "[dim]none[/dim]"))

    console.print("\n[yellow]💡 To install a model: ollama pull <model-name>[/yellow]")
    console.print("[dim]Make sure Ollama is running: ollama serve[/dim]")


@app.command()
def config(
    config_file: Annotated[
        str | None,
        typer.Option("--config", "-c", help="Path to a YAML or JSON config file."),
    ] = None,
) -> None:
    """Show current configuration."""
    try:
        review_config = load_review_config(config_file)
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)
    settings = get_settings()

    console.print(Panel("[bold]Current Configuration[/bold]", title="localspy"))
    console.print(f"[bold]Model:[/bold] {review_config.model}")
    console.print(f"[bold]Temperature:[/bold] {review_config.temperature}")
    console.print(f"[bold]Max Tokens:[/bold] {review_config.max_tokens}")
    console.print(f"[bold]Include:[/bold] {', '.join(review_config.include_patterns) or '(default)'}")
    console.print(f"[bold]Exclude:[/bold] {', '.join(review_config.exclude_patterns) or '(none)'}")
    console.print(
        f"[bold]Review Types:[/bold] {', '.join(t.value for t in review_config.review_types)}"
    )
    console.print(f"[bold]Output Format:[/bold] {review_config.output_format}")
    console.print(f"[bold]Minimum Severity:[/bold] {review_config.severity.value}")
    console.print(f"[bold]Ollama Host:[/bold] {settings.ollama_host}")
    console.print(f"[bold]Request Timeout:[/bold] {settings.request_timeout}s")
    console.print(f"[bold]Workers:[/bold] {settings.max_workers}")


if __name__ == "__main__":
    app()
