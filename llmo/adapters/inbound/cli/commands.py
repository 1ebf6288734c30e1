"""CLI interface for LLMO Checker."""

import json

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ....common.exception_handler import format_exception_json
from ....config import get_logger, settings, setup_logging
from ....core.domain import DiagnosisReport, to_percentage
from ....core.domain.scoring import score_color, score_label

app = typer.Typer(
    name="llmo",
    help="LLMO Checker - diagnose how findable a page is for AI search",
    add_completion=False,
)

console = Console(legacy_windows=False)
logger = get_logger("cli")

# Shows full stack traces on errors
DEBUG_MODE = settings.debug


def handle_cli_error(exc: Exception) -> None:
    """Display an error in structured form.

    In debug mode, shows full JSON error details.
    In normal mode, shows the message with its error code.
    """
    error_data = format_exception_json(exc, include_trace=DEBUG_MODE)

    if DEBUG_MODE:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, default=str),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error = error_data["error"]
    console.print(f"\n[red]Error [{error.get('code', 'UNKNOWN')}]:[/] {error['message']}")
    console.print(f"[dim]Type: {error['type']}[/]")
    location = error_data.get("location", {})
    if location:
        console.print(
            f"[dim]Location: {location.get('file', '?')}:{location.get('line', '?')} "
            f"in {location.get('method', '?')}[/]"
        )
    console.print("[dim]Set DEBUG=true for full details[/]")


def _scored(label: str, score: int) -> str:
    color = score_color(score)
    return f"{label}: [bold {color}]{score}[/] [dim]({score_label(score)})[/]"


def render_report(report: DiagnosisReport) -> None:
    """Print a diagnosis report as rich panels."""
    analysis = report.analysis
    overall = analysis.overall_score

    header = [
        f"[bold]{report.page_title or report.url}[/]",
        f"[dim]{report.url}[/]",
        f"Target question: {report.target_query}",
        "",
        _scored("Overall", overall),
        f"Vector similarity: [bold]{report.similarity.percentage}%[/]",
    ]
    if report.is_spa:
        header.append("[yellow]Script-rendered page: only static markup was analysed[/]")
    console.print(
        Panel("\n".join(header), title="LLMO Diagnosis", border_style=score_color(overall))
    )

    for title, category in (
        ("Comprehensiveness", analysis.comprehensiveness),
        ("Structured data", analysis.structured_data),
        ("Primary source", analysis.primary_source),
    ):
        console.print(_scored(title, category.score))
        console.print(f"  [dim]{category.feedback}[/]")

    if analysis.improvements:
        console.print("\n[bold]Improvements:[/]")
        for index, tip in enumerate(analysis.improvements, start=1):
            console.print(f"  {index}. {tip}")

    console.print(f"\n{analysis.summary}")


@app.command()
def diagnose(
    url: str = typer.Argument(..., help="Page to diagnose"),
    query: str = typer.Argument(..., help="Question the page should be found for"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
) -> None:
    """Diagnose one page against a target question."""
    from ....composition.container import get_diagnosis_service

    setup_logging(settings.log_level, settings.log_file, settings.log_json)
    try:
        settings.validate_providers()
        settings.ensure_directories()
        service = get_diagnosis_service()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    with console.status("[bold green]Diagnosing...[/]"):
        outcome = service.diagnose(url, query)

    if not outcome.success or outcome.report is None:
        reason = outcome.reason.value if outcome.reason else "unknown"
        console.print(f"[red]Diagnosis failed ({reason}):[/] {outcome.message}")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(outcome.report.to_dict(), ensure_ascii=False))
    else:
        render_report(outcome.report)


@app.command()
def history(
    limit: int = typer.Option(10, min=1, max=100, help="Number of diagnoses to show"),
) -> None:
    """Show the newest diagnoses."""
    from ....composition.container import get_store

    try:
        store = get_store()
        entries = store.recent(limit) if store is not None else []
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if not entries:
        console.print("[dim]No diagnoses recorded yet.[/]")
        return

    table = Table(title="Recent diagnoses")
    table.add_column("ID", style="dim")
    table.add_column("Created")
    table.add_column("URL")
    table.add_column("Question")
    table.add_column("Similarity", justify="right")
    for entry in entries:
        table.add_row(
            str(entry.id),
            entry.created_at,
            entry.url,
            entry.target_query,
            f"{to_percentage(entry.similarity_score)}%",
        )
    console.print(table)


@app.command("setup-db")
def setup_db(
    reset: bool = typer.Option(False, help="Drop existing diagnoses before creating"),
) -> None:
    """Create the diagnosis table or collection."""
    from ....composition.container import get_store

    console.print(f"[bold]LLMO Checker Setup[/] [dim](store: {settings.store_backend})[/]\n")
    try:
        settings.ensure_directories()
        store = get_store()
        if store is None:
            console.print("[yellow]Storage is disabled (STORE_BACKEND=none); nothing to do.[/]")
            return
        if reset:
            console.print("[yellow]Resetting stored diagnoses...[/]")
        store.setup(reset=reset)
        logger.info("Diagnosis store set up (backend=%s, reset=%s)", settings.store_backend, reset)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    console.print("[green]OK[/] Diagnosis store ready")


@app.command()
def status() -> None:
    """Show configuration and store reachability."""
    from ....composition.container import get_store

    console.print("[bold]LLMO Checker Status[/]\n")

    key_for = {"gemini": settings.google_api_key, "openai": settings.openai_api_key}
    if key_for[settings.embedding_provider]:
        console.print(f"[green]OK[/] Embedding provider: {settings.embedding_provider}")
    else:
        console.print(f"[red]Missing key[/] for embedding provider {settings.embedding_provider}")

    console.print(f"Analysis models: {', '.join(settings.analysis_models) or '(none)'}")

    try:
        store = get_store()
    except Exception as exc:
        handle_cli_error(exc)
        return
    if store is None:
        console.print("Store: [dim]disabled[/]")
    elif store.ping():
        console.print(f"Store: [green]{settings.store_backend} reachable[/]")
    else:
        console.print(f"Store: [red]{settings.store_backend} unreachable[/]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    logger.info("Starting API server on %s:%d", host, port)
    uvicorn.run("llmo.adapters.inbound.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
