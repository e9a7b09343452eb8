"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdms.cli.commands import compile_cmd, count_cmd


app = typer.Typer(name="mdms", no_args_is_help=True, help="Markdown to standard manuscript format")

app.command(name="compile")(compile_cmd)
app.command(name="count")(count_cmd)
