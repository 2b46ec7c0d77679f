"""CLI entry point for CV Customizer."""

import logging
import subprocess
import sys
import time
from pathlib import Path
from typing import Annotated

from dotenv import load_dotenv

# Load environment variables from .env.local (including LangSmith config)
# Path: main.py -> cv_customizer/ -> src/ -> project root
load_dotenv(Path(__file__).parent.parent.parent / ".env.local")

import typer  # noqa: E402
from rich.console import Console  # noqa: E402
from rich.logging import RichHandler  # noqa: E402
from rich.panel import Panel  # noqa: E402
from rich.table import Table  # noqa: E402

from cv_customizer.agents.errors import CriterionFailed  # noqa: E402
from cv_customizer.analysis import run_cv_analysis  # noqa: E402
from cv_customizer.config import get_settings  # noqa: E402
from cv_customizer.documents import InputError  # noqa: E402
from cv_customizer.graph.workflow import run_cv_customization  # noqa: E402
from cv_customizer.llm.catalog import available_models  # noqa: E402
from cv_customizer.models.progress import STEP_NAMES, ProgressUpdate  # noqa: E402
from cv_customizer.models.quality import CRITERION_NAMES  # noqa: E402
from cv_customizer.output.markdown import (  # noqa: E402
    format_customization_result,
    format_cv_analysis,
    save_json,
    save_markdown,
)
from cv_customizer.prompts.checklists import (  # noqa: E402
    ASSIGNMENTS_CHECKLISTS,
    DEFAULT_CHECKLIST,
    SUMMARY_CHECKLISTS,
    get_checklist,
)


def format_time(seconds: float) -> str:
    """Format seconds into human-readable time."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    secs = seconds % 60
    return f"{minutes}m {secs:.0f}s"


app = typer.Typer(
    name="cv-customizer",
    help="CV Customizer - tailor a CV to customer requirements with fact-checked LLM stages",
    add_completion=False,
)
console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def read_upload(path: Path) -> tuple[bytes, str]:
    """Read a file as (content, filename)."""
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)
    return path.read_bytes(), path.name


@app.command()
def customize(
    cv: Annotated[Path, typer.Argument(help="Path to the CV (PDF)")],
    requirements: Annotated[
        list[Path], typer.Argument(help="One or more customer requirement documents (PDF)")
    ],
    output: Annotated[Path, typer.Option("--output", "-o", help="Output Markdown path")] = Path(
        "customized_cv.md"
    ),
    json_output: Annotated[
        Path | None, typer.Option("--json", help="Also write the full result as JSON")
    ] = None,
    provider: Annotated[
        str | None,
        typer.Option("--provider", "-p", help="LLM provider (openai, anthropic, mistral, google)"),
    ] = None,
    model: Annotated[
        str | None, typer.Option("--model", "-m", help="Model name (see `models`)")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show detailed progress")
    ] = False,
) -> None:
    """Customize a CV against customer requirement documents."""
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    console.print(
        Panel.fit(
            "[bold blue]CV Customizer[/bold blue] - Tailoring your CV",
            border_style="blue",
        )
    )

    cv_upload = read_upload(cv)
    requirement_uploads = [read_upload(path) for path in requirements]

    if verbose:
        console.print(f"[dim]CV:[/dim] {cv}")
        for path in requirements:
            console.print(f"[dim]Requirements:[/dim] {path}")
        console.print(f"[dim]Provider:[/dim] {provider or settings.provider}")
        console.print(f"[dim]Model:[/dim] {model or 'default'}")
        if settings.langsmith_enabled:
            console.print(f"[dim]LangSmith:[/dim] {settings.langsmith_project}")
        console.print()

    step_started: dict[str, float] = {}
    start_time = time.time()

    def print_progress(update: ProgressUpdate) -> None:
        label = STEP_NAMES[update.step]
        if update.status == "starting":
            step_started[update.step.value] = time.time()
            if verbose:
                console.print(f"  [dim]..[/dim] {label:<28} [dim]{update.message}[/dim]")
        elif update.status == "completed":
            elapsed = time.time() - step_started.get(update.step.value, time.time())
            console.print(
                f"  [green]OK[/green] {label:<28} [dim][{format_time(elapsed)}][/dim]"
                + (f" {update.message}" if verbose else "")
            )
        else:
            console.print(f"  [red]FAILED[/red] {label:<24} {update.message}")

    console.print()
    state = run_cv_customization(
        cv_upload,
        requirement_uploads,
        provider=provider,
        model=model,
        progress=print_progress,
    )

    console.print(f"\n[bold]Total time:[/bold] {format_time(time.time() - start_time)}")

    if state.get("errors"):
        console.print("[red]Errors occurred:[/red]")
        for error in state["errors"]:
            console.print(f"  - {error}")
        raise typer.Exit(1)

    result = state.get("result")
    if result is None:
        console.print("[red]No customized CV was produced.[/red]")
        raise typer.Exit(1)

    save_markdown(format_customization_result(result), output)
    console.print(f"\n[green]Customized CV saved to:[/green] {output}")
    if json_output:
        save_json(result, json_output)
        console.print(f"[green]Result JSON saved to:[/green] {json_output}")

    score = result.evaluation.overall_score
    score_color = "green" if score >= 7 else "yellow" if score >= 5 else "red"
    console.print(f"\n[bold]Overall Score:[/bold] [{score_color}]{score:g}/10[/{score_color}]")
    console.print(
        f"[dim]Requirements covered: {result.evaluation.covered_count}/"
        f"{len(result.evaluation.requirement_coverage)}[/dim]"
    )
    if result.correction is not None:
        summary = result.correction.correction_summary
        console.print(
            f"[dim]Corrections: {summary.total_issues_fixed} issues fixed "
            f"(confidence {summary.confidence_score:g}/10)[/dim]"
        )


@app.command()
def analyze(
    cv: Annotated[Path, typer.Argument(help="Path to the CV (PDF)")],
    output: Annotated[Path, typer.Option("--output", "-o", help="Output Markdown path")] = Path(
        "cv_analysis.md"
    ),
    json_output: Annotated[
        Path | None, typer.Option("--json", help="Also write the full analysis as JSON")
    ] = None,
    summary_checklist: Annotated[
        str,
        typer.Option(
            "--summary-checklist",
            help=f"Summary guidelines ({', '.join(SUMMARY_CHECKLISTS)})",
        ),
    ] = DEFAULT_CHECKLIST,
    assignments_checklist: Annotated[
        str,
        typer.Option(
            "--assignments-checklist",
            help=f"Project description guidelines ({', '.join(ASSIGNMENTS_CHECKLISTS)})",
        ),
    ] = DEFAULT_CHECKLIST,
    provider: Annotated[
        str | None,
        typer.Option("--provider", "-p", help="LLM provider (openai, anthropic, mistral, google)"),
    ] = None,
    model: Annotated[
        str | None, typer.Option("--model", "-m", help="Model name (see `models`)")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show detailed progress")
    ] = False,
) -> None:
    """Rate the quality of a consultant CV on five criteria."""
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    try:
        summary_guidelines = get_checklist(SUMMARY_CHECKLISTS, summary_checklist)
        assignment_guidelines = get_checklist(ASSIGNMENTS_CHECKLISTS, assignments_checklist)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    console.print(
        Panel.fit(
            "[bold blue]CV Customizer[/bold blue] - Analyzing your CV",
            border_style="blue",
        )
    )
    cv_upload = read_upload(cv)

    start_time = time.time()
    try:
        with console.status("Rating language, completeness, summary, projects, competencies..."):
            analysis = run_cv_analysis(
                cv_upload,
                provider=provider,
                model=model,
                summary_checklist=summary_guidelines.content,
                assignments_checklist=assignment_guidelines.content,
            )
    except (InputError, CriterionFailed) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    console.print(f"\n[bold]Total time:[/bold] {format_time(time.time() - start_time)}")

    table = Table(title="CV Analysis")
    table.add_column("Criterion")
    table.add_column("Score", justify="right")
    for criterion, rating in analysis.ratings():
        table.add_row(CRITERION_NAMES[criterion], f"{rating.score:.1f}")
    console.print(table)

    save_markdown(format_cv_analysis(analysis), output)
    console.print(f"\n[green]Analysis saved to:[/green] {output}")
    if json_output:
        save_json(analysis, json_output)
        console.print(f"[green]Analysis JSON saved to:[/green] {json_output}")

    score = analysis.overall_score
    score_color = "green" if score >= 7 else "yellow" if score >= 5 else "red"
    console.print(f"\n[bold]Overall Score:[/bold] [{score_color}]{score:.1f}/10[/{score_color}]")


@app.command()
def models(
    show_all: Annotated[
        bool, typer.Option("--all", "-a", help="Include models without PDF support")
    ] = False,
) -> None:
    """List selectable models and whether their provider is configured."""
    settings = get_settings()
    table = Table(title="Available Models")
    table.add_column("Provider")
    table.add_column("Model")
    table.add_column("Name")
    table.add_column("PDF")
    table.add_column("API key")

    for option in available_models(pdf_only=not show_all):
        table.add_row(
            option.provider,
            option.model,
            option.display_name,
            "yes" if option.supports_pdf else "no",
            "[green]set[/green]"
            if settings.is_provider_available(option.provider)
            else "[red]missing[/red]",
        )
    console.print(table)


@app.command()
def ui() -> None:
    """Launch the Streamlit web UI."""
    app_path = Path(__file__).parent.parent.parent / "app" / "app.py"
    if not app_path.exists():
        console.print(f"[red]Error:[/red] Web UI not found at {app_path}")
        raise typer.Exit(1)

    stop_hint = "⌃C (Control+C)" if sys.platform == "darwin" else "Ctrl+C"
    console.print(f"Press {stop_hint} to stop the server")
    try:
        subprocess.run([sys.executable, "-m", "streamlit", "run", str(app_path)])
    except KeyboardInterrupt:
        pass


@app.command()
def version() -> None:
    """Show version information."""
    from cv_customizer import __version__

    console.print(f"CV Customizer v{__version__}")


if __name__ == "__main__":
    app()
