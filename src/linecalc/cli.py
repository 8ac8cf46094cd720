"""
linecalc CLI.

Commands:
- eval: evaluate lines given as arguments or read from a file
- repl: interactive prompt sharing one variable store
"""

from __future__ import annotations

import json
import logging
import math
import platform
import sys
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from linecalc._version import get_version
from linecalc.core.errors import LinecalcError
from linecalc.core.manifest import LinecalcManifest, resolve_manifest
from linecalc.interpreter import Interpreter

logger = logging.getLogger(__name__)

console = Console()

REPL_COMMANDS = {
    ":vars": "List assigned variables",
    ":reset": "Forget all variables",
    ":help": "Show this help",
    ":quit": "Leave the prompt",
}


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        console.print(f"linecalc {get_version()}")
        console.print(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


app = typer.Typer(
    help="linecalc - line-at-a-time arithmetic interpreter with variables",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="Path to linecalc.toml (default: search upward from the current directory)",
    ),
) -> None:
    """linecalc CLI main callback for global options."""
    try:
        manifest = resolve_manifest(config)
    except LinecalcError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(2)

    level = logging.DEBUG if verbose else manifest.logging.level_number
    logging.basicConfig(level=level, format=manifest.logging.format)
    if manifest.path:
        logger.debug("Loaded configuration from %s", manifest.path)

    ctx.obj = manifest


def format_number(value: float) -> str:
    """Render a result the way the calculator always has: 2 not 2.0, Infinity, NaN."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _json_value(value: float) -> float | None:
    return value if math.isfinite(value) else None


def _read_lines(path: Path) -> list[str]:
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line for line in lines if line.strip()]


def _manifest(ctx: typer.Context) -> LinecalcManifest:
    if isinstance(ctx.obj, LinecalcManifest):
        return ctx.obj
    return LinecalcManifest()


@app.command(name="eval")
def eval_command(
    ctx: typer.Context,
    lines: list[str] | None = typer.Argument(
        None,
        help="Lines to evaluate, in order, sharing one set of variables",
    ),
    file: Path | None = typer.Option(
        None,
        "--file",
        "-f",
        exists=True,
        dir_okay=False,
        help="Read lines from a file (blank lines are skipped)",
    ),
    format_: str = typer.Option(
        "text",
        "--format",
        help="Output format: text or json.",
    ),
) -> None:
    """Evaluate lines and print one result per line."""
    if format_ not in ("text", "json"):
        console.print(f"[red]Unknown format: {escape(format_)}. Choose from: text, json[/red]")
        raise typer.Exit(2)

    sources = list(lines or [])
    if file is not None:
        sources.extend(_read_lines(file))
    if not sources:
        console.print("[yellow]Nothing to evaluate[/yellow]")
        raise typer.Exit(2)

    interpreter = Interpreter(_manifest(ctx).interpreter)
    results: list[dict[str, Any]] = []

    for source in sources:
        try:
            value = interpreter.run(source)
        except LinecalcError as e:
            if format_ == "json":
                results.append({"line": source, "error": str(e)})
                typer.echo(json.dumps(results, indent=2))
            else:
                console.print(f"[red]{escape(e.format_snippet(source))}[/red]")
            raise typer.Exit(1)

        if format_ == "json":
            results.append(
                {"line": source, "result": _json_value(value), "display": format_number(value)}
            )
        else:
            typer.echo(format_number(value))

    if format_ == "json":
        typer.echo(json.dumps(results, indent=2))


def _print_variables(interpreter: Interpreter) -> None:
    variables = interpreter.variables
    if not variables:
        console.print("[dim]No variables assigned[/dim]")
        return

    table = Table(title="Variables")
    table.add_column("Name", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in sorted(variables.items()):
        table.add_row(name, format_number(value))
    console.print(table)


def _print_help() -> None:
    console.print("Enter an expression such as [bold]x = 2 + 3[/bold] or [bold]x * 4[/bold].")
    for command, description in REPL_COMMANDS.items():
        console.print(f"  [cyan]{command}[/cyan]  {description}")


@app.command(name="repl")
def repl_command(ctx: typer.Context) -> None:
    """Start an interactive prompt. Variables persist until :reset or exit."""
    manifest = _manifest(ctx)
    interpreter = Interpreter(manifest.interpreter)

    while True:
        try:
            source = console.input(escape(manifest.repl.prompt))
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        line = source.strip()
        if not line:
            continue
        if line == ":quit":
            break
        if line == ":vars":
            _print_variables(interpreter)
            continue
        if line == ":reset":
            interpreter.reset()
            console.print("[dim]Variables cleared[/dim]")
            continue
        if line == ":help":
            _print_help()
            continue

        try:
            value = interpreter.run(source)
        except LinecalcError as e:
            console.print(f"[red]{escape(e.format_snippet(source))}[/red]")
            continue
        console.print(format_number(value))


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
