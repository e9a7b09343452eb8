"""CLI command implementations"""

from typing import Annotated, Optional

import typer

from mdms import logconf
from mdms.config import Settings, load_config
from mdms.core.errors import ManuscriptError
from mdms.core.pipeline import compile_manuscript, run_compile
from mdms.core.utils.wordcount import round_up


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logconf.init(settings.log_level)
    return settings


def _echo_count(word_count: int, exact: bool) -> None:
    if exact:
        typer.echo(f"Word count: {word_count}")
    else:
        typer.echo(f"Approximate word count: {round_up(word_count)}")


def compile_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file or directory containing the manuscript")],
    out: Annotated[Optional[str], typer.Option("--output-dir", "-o", help="Directory to write manuscripts to")] = None,
    pii: Annotated[Optional[str], typer.Option("--pii", help="Markdown file with author contact details")] = None,
    fonts: Annotated[Optional[list[str]], typer.Option("--font", help="Font to render; repeat for several")] = None,
    anonymous: Annotated[Optional[bool], typer.Option("--anonymous/--no-anonymous", help="Also write anonymized manuscripts")] = None,
    classic: Annotated[Optional[bool], typer.Option("--classic/--no-classic", help="Also write classic-style manuscripts")] = None,
    word_count: Annotated[bool, typer.Option("--word-count", help="Display the word count and exit")] = False,
    exact: Annotated[Optional[bool], typer.Option("--exact/--rounded", help="Report the exact word count")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR")] = None,
    ):
    """Compile Markdown file(s) into standard manuscript format."""
    settings = _settings(overrides={
        "output_dir": out, "pii": pii, "fonts": fonts or None,
        "anonymous": anonymous, "classic": classic,
        "exact_word_count": exact, "log_level": log_level,
    })

    try:
        manuscript = compile_manuscript(path, settings.parser_config)
    except ManuscriptError as e:
        _fail(str(e))
    _echo_count(manuscript.word_count, settings.exact_word_count)
    if word_count:
        raise typer.Exit(0)

    try:
        written = run_compile(path, settings, manuscript)
    except ManuscriptError as e:
        _fail("Rendering failed", e)
    for out_file in written:
        typer.echo(f"  {out_file}")
    typer.echo(f"Wrote {len(written)} manuscript(s) to {settings.output_dir}")


def count_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file or directory containing the manuscript")],
    exact: Annotated[Optional[bool], typer.Option("--exact/--rounded", help="Report the exact word count")] = None,
    ):
    """Display the manuscript word count."""
    settings = _settings(overrides={"exact_word_count": exact})
    try:
        manuscript = compile_manuscript(path, settings.parser_config)
    except ManuscriptError as e:
        _fail(str(e))
    _echo_count(manuscript.word_count, settings.exact_word_count)
