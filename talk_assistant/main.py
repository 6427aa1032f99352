"""CLI interface for the Sacrament Talk Assistant."""

import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
import typer

# Load environment variables from .env file
load_dotenv()
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from talk_assistant.errors import TalkAssistantError
from talk_assistant.generation import compose as compose_talk
from talk_assistant.models.document import Document
from talk_assistant.models.preferences import (
    Audience,
    PreferenceSet,
    TalkFormat,
    TalkLength,
)
from talk_assistant.refinement import (
    KeywordIntentClassifier,
    RefinementConfig,
    RefinementEngine,
    RefinementResult,
    SubmissionResult,
)

# Initialize CLI app
app = typer.Typer(
    name="talk-assistant",
    help="Sacrament talk composer with chat-driven refinement",
    add_completion=False,
)

console = Console()

RESPONSE_DELAY_ENV = "TALK_ASSISTANT_RESPONSE_DELAY"


def setup_logging(verbose: bool = False) -> None:
    """Set up logging with rich formatting."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _parse_choice(value: Optional[str], enum_cls, option: str):
    """Map an option string onto one of the preference enums."""
    if value is None:
        return None
    try:
        return enum_cls(value.lower())
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        console.print(f"[red]Invalid {option}: {escape(value)}. Choose from: {valid}[/red]")
        sys.exit(1)


def build_preferences(
    topic: str,
    length: Optional[str],
    talk_format: Optional[str],
    audience: Optional[str],
    scriptures: bool,
    quotes: bool,
    concepts: bool,
    personal: bool,
    notes: str,
) -> PreferenceSet:
    return PreferenceSet(
        topic=topic,
        length=_parse_choice(length, TalkLength, "length"),
        format=_parse_choice(talk_format, TalkFormat, "format"),
        audience=_parse_choice(audience, Audience, "audience"),
        include_scriptures=scriptures,
        include_quotes=quotes,
        include_concepts=concepts,
        personal_experiences=personal,
        additional_notes=notes,
    )


def load_refinement_config() -> RefinementConfig:
    """Build the refinement config, honoring the response delay env var."""
    delay = os.getenv(RESPONSE_DELAY_ENV)
    if not delay:
        return RefinementConfig()
    try:
        return RefinementConfig(response_delay_seconds=float(delay))
    except ValueError:
        console.print(
            f"[yellow]Ignoring invalid {RESPONSE_DELAY_ENV}={escape(repr(delay))}[/yellow]"
        )
        return RefinementConfig()


# Shared composition options
TOPIC_OPTION = typer.Option(..., "--topic", "-t", help="Talk topic, e.g. Faith")
LENGTH_OPTION = typer.Option(
    None, "--length", "-l", help="Talk length: 5min, 10min, 15min, 20min"
)
FORMAT_OPTION = typer.Option(
    None, "--format", "-f", help="Talk format: full, outline, hybrid"
)
AUDIENCE_OPTION = typer.Option(
    None, "--audience", "-a", help="Audience: general, youth, adults, primary"
)
SCRIPTURES_OPTION = typer.Option(
    False, "--scriptures/--no-scriptures", help="Include a scriptural foundation"
)
QUOTES_OPTION = typer.Option(
    False, "--quotes/--no-quotes", help="Include prophetic guidance"
)
CONCEPTS_OPTION = typer.Option(
    False, "--concepts/--no-concepts", help="Include key concepts"
)
PERSONAL_OPTION = typer.Option(
    False, "--personal/--no-personal", help="Leave room for a personal experience"
)
NOTES_OPTION = typer.Option("", "--notes", "-n", help="Additional notes for the talk")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")


@app.command()
def compose(
    topic: str = TOPIC_OPTION,
    length: Optional[str] = LENGTH_OPTION,
    talk_format: Optional[str] = FORMAT_OPTION,
    audience: Optional[str] = AUDIENCE_OPTION,
    scriptures: bool = SCRIPTURES_OPTION,
    quotes: bool = QUOTES_OPTION,
    concepts: bool = CONCEPTS_OPTION,
    personal: bool = PERSONAL_OPTION,
    notes: str = NOTES_OPTION,
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write the rendered talk to a file"
    ),
    show_notes: bool = typer.Option(
        False, "--notes-panel", help="Show speaker notes below the talk"
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """
    Compose a talk from preferences.

    Example:
        talk-assistant compose --topic Faith --scriptures --length 10min
    """
    setup_logging(verbose)

    preferences = build_preferences(
        topic, length, talk_format, audience,
        scriptures, quotes, concepts, personal, notes,
    )

    try:
        document = compose_talk(preferences)
    except TalkAssistantError as e:
        console.print(f"[red]Composition failed: {escape(str(e))}[/red]")
        sys.exit(1)

    display_document(document, show_notes=show_notes)

    if output:
        output_path = Path(output)
        output_path.write_text(document.render() + "\n", encoding="utf-8")
        console.print(f"\n[green]Talk saved to: {escape(str(output_path))}[/green]")


@app.command()
def refine(
    topic: str = TOPIC_OPTION,
    instructions: Optional[list[str]] = typer.Option(
        None, "--instruction", "-i",
        help="Refinement instruction (repeatable); omit for interactive chat",
    ),
    length: Optional[str] = LENGTH_OPTION,
    talk_format: Optional[str] = FORMAT_OPTION,
    audience: Optional[str] = AUDIENCE_OPTION,
    scriptures: bool = SCRIPTURES_OPTION,
    quotes: bool = QUOTES_OPTION,
    concepts: bool = CONCEPTS_OPTION,
    personal: bool = PERSONAL_OPTION,
    notes: str = NOTES_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """
    Compose a talk and refine it through chat instructions.

    Example:
        talk-assistant refine --topic Faith --scriptures -i "add a scripture"
    """
    setup_logging(verbose)

    preferences = build_preferences(
        topic, length, talk_format, audience,
        scriptures, quotes, concepts, personal, notes,
    )
    engine = RefinementEngine(config=load_refinement_config())

    try:
        document = asyncio.run(engine.start(preferences))
    except TalkAssistantError as e:
        console.print(f"[red]Composition failed: {escape(str(e))}[/red]")
        sys.exit(1)

    if instructions:
        for instruction in instructions:
            console.print(f"\n[bold cyan]You:[/bold cyan] {escape(instruction)}")
            try:
                result = asyncio.run(engine.submit_instruction(instruction))
            except TalkAssistantError as e:
                console.print(f"[red]Refinement failed: {escape(str(e))}[/red]")
                sys.exit(1)
            display_response(result)

        console.print()
        display_document(engine.document)
        return

    display_document(document)
    run_chat_loop(engine)


def run_chat_loop(engine: RefinementEngine) -> None:
    """Interactive refinement chat."""
    console.print(
        "\n[dim]Type an instruction to refine the talk. "
        "Commands: /undo, /redo, /history, /show, /quit[/dim]"
    )

    while True:
        try:
            instruction = Prompt.ask("\n[bold cyan]You[/bold cyan]", default="")
        except (EOFError, KeyboardInterrupt):
            console.print("\n[yellow]Session ended[/yellow]")
            break

        command = instruction.strip().lower()
        if command in ("/quit", "/exit"):
            break
        if command == "/show":
            display_document(engine.document)
            continue
        if command == "/history":
            display_history(engine)
            continue
        if command in ("/undo", "/redo"):
            document = engine.undo() if command == "/undo" else engine.redo()
            if document is None:
                console.print(f"[yellow]Nothing to {command[1:]}[/yellow]")
            else:
                display_document(document)
            continue

        try:
            result = asyncio.run(engine.submit_instruction(instruction))
        except TalkAssistantError as e:
            console.print(f"[red]Refinement failed: {escape(str(e))}[/red]")
            continue

        display_response(result)
        if result.changed:
            display_document(result.document)


@app.command()
def classify(
    instruction: str = typer.Argument(..., help="Refinement instruction to classify"),
) -> None:
    """
    Show which intent a refinement instruction maps to.

    Example:
        talk-assistant classify "Can you make this shorter?"
    """
    classifier = KeywordIntentClassifier()
    intent = classifier.classify(instruction)

    table = Table(title="Intent Classification")
    table.add_column("Instruction", style="cyan")
    table.add_column("Intent", style="green")
    table.add_row(Text(instruction), intent.value)
    console.print(table)


def display_document(document: Document, show_notes: bool = False) -> None:
    """Display a rendered talk."""
    subtitle = f"{document.word_count()} words"
    if document.target_minutes:
        subtitle += f", target {document.target_minutes} min"
    else:
        subtitle += f", ~{document.estimated_duration_minutes():.1f} min"

    console.print(Panel(
        Text(document.render()),
        title=f"[bold blue]{escape(document.title)}[/bold blue]",
        subtitle=subtitle,
    ))

    if show_notes and document.speaker_notes:
        console.print(Panel(
            Text("\n".join(f"• {note}" for note in document.speaker_notes)),
            title="[bold]Speaker Notes[/bold]",
            border_style="dim",
        ))


def display_history(engine: RefinementEngine) -> None:
    """Display the refinements applied so far."""
    entries = engine.history.list_entries()
    if not entries:
        console.print("[dim]No refinements yet.[/dim]")
        return

    for entry in entries:
        console.print(f"  [dim]•[/dim] {escape(entry)}")


def display_response(result: SubmissionResult) -> None:
    """Display the assistant's reply to an instruction."""
    if not result.response_text:
        console.print("[dim]Nothing to do for an empty instruction.[/dim]")
        return

    style = "green" if isinstance(result, RefinementResult) else "yellow"
    console.print(f"[bold {style}]Assistant:[/bold {style}] {escape(result.response_text)}")

    if isinstance(result, RefinementResult) and result.changes_summary:
        for change in result.changes_summary:
            console.print(f"  [dim]• {escape(change)}[/dim]")


@app.callback()
def main():
    """
    Sacrament Talk Assistant

    Compose sacrament meeting talks from a few preferences and refine
    them through plain-language chat instructions.
    """
    pass


if __name__ == "__main__":
    app()
