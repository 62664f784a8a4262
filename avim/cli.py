"""Typer CLI app: the interactive editor and headless transcription."""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console

from .app import Event, open_project, pump_input, run, run_ingestion
from .cache import TranscriptCache
from .config import (
    DEFAULT_CHUNK_SECONDS,
    DEFAULT_DEEPGRAM_MODEL,
    DEFAULT_LANGUAGE,
    DISCREPANCY_WARNING_SECONDS,
    PROJECT_SUFFIX,
)
from .editor.session import Session, SessionLogHandler
from .errors import AvimError
from .project import save_project
from .transcription.audio import FfmpegAudio, is_media_file
from .transcription.deepgram_provider import DeepgramProvider
from .transcription.pipeline import discrepancy, ingest
from .ui import TerminalUI
from .utils import format_clip_line

app = typer.Typer(help="avim: vi-style editor for clip-segmented transcripts")
console = Console()
logger = logging.getLogger("avim")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def _check_input(file: Path, allow_project: bool) -> None:
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)
    if allow_project and file.suffix == PROJECT_SUFFIX:
        return
    if not is_media_file(file):
        console.print(f"[red]Unsupported file type: {file.suffix}[/red]")
        raise typer.Exit(1)


@app.command()
def edit(
    file: Path = typer.Argument(..., help="Audio file or .avim project to edit"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Ignore cached transcripts"),
    debug: bool = typer.Option(False, "--debug", help="Show the debug log panel"),
    chunk_seconds: float = typer.Option(
        DEFAULT_CHUNK_SECONDS, "--chunk-seconds", min=1.0, help="Max audio length per transcription request"
    ),
    model: str = typer.Option(DEFAULT_DEEPGRAM_MODEL, "--model", help="Deepgram model"),
    language: str = typer.Option(DEFAULT_LANGUAGE, "--language", help="Language code"),
) -> None:
    """Open an audio file or project in the modal editor."""
    _check_input(file, allow_project=True)
    audio = FfmpegAudio()

    async def _run() -> None:
        queue: asyncio.Queue[Event] = asyncio.Queue()
        tasks: list[asyncio.Task] = []

        if file.suffix == PROJECT_SUFFIX:
            try:
                audio_path = await open_project(queue, file, audio)
            except AvimError as e:
                console.print(f"[red]{e}[/red]")
                raise typer.Exit(1)
            session = Session(audio_path, audio=audio, project_path=str(file), debug=debug)
        else:
            session = Session(str(file), audio=audio, debug=debug)
            provider = DeepgramProvider(model=model, language=language)
            tasks.append(
                asyncio.create_task(
                    run_ingestion(
                        queue,
                        str(file),
                        provider=provider,
                        audio=audio,
                        cache=TranscriptCache(),
                        use_cache=not no_cache,
                        chunk_seconds=chunk_seconds,
                    )
                )
            )

        # Log records go to the session instead of the terminal
        logger.setLevel(logging.DEBUG if debug else logging.INFO)
        logger.propagate = False
        logger.addHandler(SessionLogHandler(session))

        with TerminalUI(console) as ui:
            tasks.append(asyncio.create_task(pump_input(queue, ui.keys())))
            await run(session, queue, ui.draw, tasks)

    asyncio.run(_run())


@app.command()
def transcribe(
    file: Path = typer.Argument(..., help="Audio or video file to transcribe"),
    output: Path = typer.Option(None, "--output", "-o", help="Project file to write"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Ignore cached transcripts"),
    chunk_seconds: float = typer.Option(
        DEFAULT_CHUNK_SECONDS, "--chunk-seconds", min=1.0, help="Max audio length per transcription request"
    ),
    model: str = typer.Option(DEFAULT_DEEPGRAM_MODEL, "--model", help="Deepgram model"),
    language: str = typer.Option(DEFAULT_LANGUAGE, "--language", help="Language code"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Transcribe audio in chunks and write an .avim project."""
    _setup_logging(verbose)
    _check_input(file, allow_project=False)

    out_file = output or file.with_suffix(PROJECT_SUFFIX)

    async def _run() -> None:
        console.print(f"[bold]Transcribing:[/bold] {file.name}")
        result = await ingest(
            str(file),
            provider=DeepgramProvider(model=model, language=language),
            audio=FfmpegAudio(),
            cache=TranscriptCache(),
            use_cache=not no_cache,
            chunk_seconds=chunk_seconds,
            on_status=lambda message: console.print(f"  {message}"),
        )
        source = "cache" if result.from_cache else "transcription"
        console.print(
            f"  [green]Done.[/green] {len(result.clips)} clips from {source}."
        )
        if result.clips and result.duration is not None:
            excess = discrepancy(result.clips, result.duration)
            if excess > DISCREPANCY_WARNING_SECONDS:
                console.print(
                    f"  [yellow]Warning: Tx is {excess:.2f}s longer than audio.[/yellow]"
                )
        if verbose:
            for clip in result.clips:
                console.print(f"    {format_clip_line(clip)}", highlight=False)

        save_project(out_file, str(file), result.clips)
        console.print(f"\n[bold green]Output:[/bold green] {out_file}")

    try:
        asyncio.run(_run())
    except AvimError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
