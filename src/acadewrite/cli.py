"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from acadewrite.assistant.gateway import AIGateway
from acadewrite.assistant.prompts import QuickAction
from acadewrite.clients.llm_client import LLMClient
from acadewrite.config import AppConfig, load_config
from acadewrite.editor.insertion import clean_ai_output
from acadewrite.editor.markup import strip_html, word_count
from acadewrite.exceptions import AcadeWriteError
from acadewrite.export import EXPORT_FORMATS, export_document
from acadewrite.models.analysis import AnalysisResult
from acadewrite.parsers.upload_parser import load_upload_file
from acadewrite.storage.draft_store import DraftStore

app = typer.Typer(
    name="acadewrite",
    help="Academic writing assistant: analysis, quick actions and export.",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _gateway(config: AppConfig) -> AIGateway:
    llm = LLMClient(timeout=config.llm.timeout, max_attempts=config.llm.max_retries)
    return AIGateway(
        llm,
        analysis_model=config.llm.analysis_model,
        chat_model=config.llm.chat_model,
        autocomplete_model=config.llm.autocomplete_model,
    )


def _draft_store(config: AppConfig) -> DraftStore:
    return DraftStore(db_path=config.storage.resolved_db_path, key=config.storage.draft_key)


def _read_markup(file: Path) -> str:
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)
    try:
        return load_upload_file(file)
    except AcadeWriteError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _print_analysis(result: AnalysisResult) -> None:
    insights = result.document_insights
    grammar_color = {"Good": "green", "Needs Work": "yellow", "Poor": "red"}[result.grammar_rating]
    console.print(
        Panel(
            f"Clarity: {result.clarity_score} | Academic tone: {result.academic_tone_score} | "
            f"Grammar: [{grammar_color}]{result.grammar_rating}[/{grammar_color}]\n"
            f"Readability: {result.readability_level} | "
            f"Reading time: {insights.estimated_reading_time} | "
            f"Vocabulary: {insights.vocabulary_diversity_score}\n"
            f"Complex sentences: {insights.complex_sentence_count} | "
            f"Transitions: {insights.transition_words_count}",
            title="Analysis",
        )
    )
    if not result.suggestions:
        return
    table = Table(title="Suggestions")
    table.add_column("Type", style="cyan")
    table.add_column("Suggestion")
    table.add_column("Fix", style="dim")
    for s in result.suggestions:
        fix = f"{s.original_text} -> {s.replacement}" if s.is_applicable else ""
        table.add_row(s.type, s.text, fix)
    console.print(table)


@app.command()
def analyze(
    file: Path = typer.Argument(help="Text or markdown file to analyze"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Score a document for clarity, academic tone and readability."""
    _setup_logging(verbose)
    config = load_config()
    plain = strip_html(_read_markup(file))
    if verbose:
        console.print(f"[dim]{word_count(plain)} words, {len(plain)} chars[/dim]")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Analyzing...", total=None)
        result = asyncio.run(_gateway(config).analyze(plain))

    _print_analysis(result)


@app.command()
def action(
    name: str = typer.Argument(help="Quick action: paraphrase, expand, summarize, cite, plagiarism, custom"),
    file: Path = typer.Argument(help="File holding the passage to transform"),
    prompt: str = typer.Option(None, "--prompt", "-p", help="Instruction for the custom action"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run a quick action over the contents of a file."""
    _setup_logging(verbose)
    try:
        quick_action = QuickAction[name.upper()]
    except KeyError:
        choices = ", ".join(a.name.lower() for a in QuickAction)
        console.print(f"[red]Unknown action '{name}'. Choose one of: {choices}[/red]")
        raise typer.Exit(1)
    if quick_action is QuickAction.CUSTOM and not (prompt or "").strip():
        console.print("[red]The custom action needs --prompt.[/red]")
        raise typer.Exit(1)

    selection = strip_html(_read_markup(file))
    if not selection.strip():
        console.print("[red]Please select some text first.[/red]")
        raise typer.Exit(1)

    config = load_config()
    with console.status(f"{quick_action.label}..."):
        result = asyncio.run(_gateway(config).quick_action(quick_action, selection, prompt))
    console.print(Panel(clean_ai_output(result), title=quick_action.label))


@app.command("import")
def import_file(
    file: Path = typer.Argument(help="Text or markdown file to load as the current draft"),
) -> None:
    """Replace the stored draft with a .txt/.md file."""
    markup = _read_markup(file)
    _draft_store(load_config()).save(markup)
    console.print(f"[green]Draft replaced with {file.name} ({word_count(markup)} words)[/green]")


@app.command()
def export(
    fmt: str = typer.Option("pdf", "--format", "-f", help="Export format: txt, pdf or docx"),
    output: Path = typer.Option(None, "--output", "-o", help="Output file path"),
    file: Path = typer.Option(None, "--file", help="Export this file instead of the stored draft"),
) -> None:
    """Export the stored draft (or a file) as txt, pdf or docx."""
    if fmt not in EXPORT_FORMATS:
        console.print(f"[red]Unknown format '{fmt}'. Choose one of: {', '.join(EXPORT_FORMATS)}[/red]")
        raise typer.Exit(1)
    config = load_config()
    markup = _read_markup(file) if file else _draft_store(config).load()
    if not strip_html(markup).strip() and fmt != "docx":
        console.print("[yellow]The draft is empty.[/yellow]")

    if output is None:
        output = Path(EXPORT_FORMATS[fmt].filename(config.export.basename))
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(export_document(markup, fmt))
    console.print(f"[green]Exported: {output}[/green]")


@app.command()
def draft() -> None:
    """Show the stored draft as plain text."""
    store = _draft_store(load_config())
    text = strip_html(store.load())
    if not text.strip():
        console.print("[dim]No draft saved.[/dim]")
        return
    saved_at = store.saved_at()
    console.print(Panel(text, title=f"Draft (saved {saved_at})" if saved_at else "Draft"))


if __name__ == "__main__":
    app()
