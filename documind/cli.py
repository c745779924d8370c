"""DocuMind command-line interface."""

import asyncio
import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from documind.ai.factory import ModelClientFactory
from documind.analysis.models import AnalysisResult, SimilarityResult
from documind.analysis.payloads import analysis_payload, similarity_payload
from documind.chat.exceptions import EmptyMessageError
from documind.chat.models import ChatTurn
from documind.config.settings import Settings
from documind.encoding.exceptions import ReadError
from documind.logging.logger import Log
from documind.workspace.exceptions import WorkspaceError
from documind.workspace.workspace import DocumentWorkspace, build_workspace

app = typer.Typer(
    name="documind",
    help="Analyze, compare and chat with documents using a multimodal model",
    add_completion=False,
)
console = Console()

_RISK_COLORS = {"low": "green", "medium": "yellow", "high": "red"}
_EXIT_WORDS = frozenset({"exit", "quit"})


def _config_error(exc: Exception) -> typer.Exit:
    console.print(f"[bold red]Configuration error:[/bold red] {escape(str(exc))}")
    return typer.Exit(code=2)


def _load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as exc:
        raise _config_error(exc) from exc


def _bootstrap() -> DocumentWorkspace:
    settings = _load_settings()
    Log.configure(settings.log_level)
    try:
        return build_workspace(settings)
    except ValueError as exc:
        raise _config_error(exc) from exc


def _fail(message: str) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    return typer.Exit(code=1)


def _render_analysis(name: str, result: AnalysisResult) -> None:
    fraud = result.fraud_detection
    color = _RISK_COLORS[fraud.risk_band]
    verdict = "[red]Suspicious[/red]" if fraud.is_suspicious else "[green]Looks authentic[/green]"

    overview = Table.grid(padding=(0, 2))
    overview.add_row("Document type", f"[bold]{result.document_type.value}[/bold]")
    overview.add_row("Confidence", f"{result.confidence_score * 100:.0f}%")
    overview.add_row("Fraud score", f"[{color}]{fraud.score}/100[/{color}]  {verdict}")
    console.print(Panel(overview, title=name))

    if fraud.is_suspicious:
        console.print(Panel(fraud.reasoning, title="Tamper analysis", border_style="red"))

    console.print(Panel(result.summary_short, title="Summary (short)"))
    console.print(Panel(result.summary_medium, title="Summary (medium)"))
    console.print(Panel(result.summary_long, title="Summary (long)"))

    entities = Table(title="Entities")
    entities.add_column("Category", style="cyan")
    entities.add_column("Text")
    for entity in result.entities:
        entities.add_row(entity.category, entity.text)
    console.print(entities)

    console.print(Panel(result.ocr_text or "[dim]No text found[/dim]", title="OCR text"))


def _render_similarity(result: SimilarityResult) -> None:
    console.print(
        Panel(result.explanation, title=f"Similarity match: {result.similarity_score}%")
    )
    table = Table()
    table.add_column("Similarities", style="green")
    table.add_column("Differences", style="red")
    rows = max(len(result.similarities), len(result.differences))
    for i in range(rows):
        table.add_row(
            result.similarities[i] if i < len(result.similarities) else "",
            result.differences[i] if i < len(result.differences) else "",
        )
    console.print(table)


def _render_turn(turn: ChatTurn) -> None:
    style = "red" if turn.failed else "green"
    console.print(f"[bold {style}]Assistant:[/bold {style}] {turn.text}")


@app.command()
def analyze(
    path: Path = typer.Argument(..., help="Image or PDF to analyze"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
) -> None:
    """Run OCR, summaries, classification, fraud check and entity extraction."""
    workspace = _bootstrap()
    try:
        with console.status("Analyzing document..."):
            result = asyncio.run(workspace.analyze(path))
    except (ReadError, WorkspaceError) as exc:
        raise _fail(str(exc)) from exc
    if result is None:
        raise _fail(workspace.error or "Analysis failed")

    if as_json:
        console.print_json(json.dumps(analysis_payload(result)))
    else:
        _render_analysis(path.name, result)


@app.command()
def compare(
    first: Path = typer.Argument(..., help="Original / first document"),
    second: Path = typer.Argument(..., help="Comparison document"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
) -> None:
    """Compare two documents by layout, text and meaning."""
    workspace = _bootstrap()
    try:
        with console.status("Comparing..."):
            result = asyncio.run(workspace.compare(first, second))
    except (ReadError, WorkspaceError) as exc:
        raise _fail(str(exc)) from exc
    if result is None:
        raise _fail(workspace.last_comparison_error or "Comparison failed")

    if as_json:
        console.print_json(json.dumps(similarity_payload(result)))
    else:
        _render_similarity(result)


@app.command()
def chat(path: Path = typer.Argument(..., help="Image or PDF to chat about")) -> None:
    """Ask questions answered only from the document."""
    workspace = _bootstrap()
    try:
        asyncio.run(_chat_loop(workspace, path))
    except (ReadError, WorkspaceError) as exc:
        raise _fail(str(exc)) from exc


async def _chat_loop(workspace: DocumentWorkspace, path: Path) -> None:
    with console.status("Analyzing document..."):
        result = await workspace.analyze(path)
    if result is None:
        raise _fail(workspace.error or "Analysis failed")

    transcript = workspace.open_chat()
    for turn in transcript:
        _render_turn(turn)
    while True:
        try:
            text = await asyncio.to_thread(console.input, "[bold blue]You:[/bold blue] ")
        except EOFError:
            break
        if text.strip().lower() in _EXIT_WORDS:
            break
        try:
            with console.status("Thinking..."):
                turn = await workspace.ask(text)
        except EmptyMessageError:
            continue
        _render_turn(turn)
    workspace.clear()


@app.command()
def config() -> None:
    """Show the effective configuration (secrets hidden)."""
    settings = _load_settings()
    table = Table(title="DocuMind configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in settings.model_dump().items():
        if name == "api_key":
            value = "set" if value else "not set"
        table.add_row(name, str(value))
    table.add_row("supported providers", ", ".join(ModelClientFactory.supported_providers()))
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
