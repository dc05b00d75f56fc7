"""Typer-based CLI for CodeProbe structural code analysis."""

from __future__ import annotations

import json
import logging
import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__, config_manager
from .tools import TOOLS, tool_names, view_code_items, view_files_full_context, view_files_outlines

console = Console()

app = typer.Typer(
    help="🔎 CodeProbe CLI: outlines, full-file context and code item lookup for Java projects.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="⚙️  Show or change scanner settings.", no_args_is_help=True)
app.add_typer(config_app, name="config")


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr so tool output on stdout stays clean."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def print_error(message: str):
    typer.echo(typer.style(f"❌ {message}", fg=typer.colors.RED), err=True)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"CodeProbe CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Log debug details to stderr."),
):
    """CodeProbe CLI: heuristic structure analysis without a compiler."""
    setup_logging(verbose)


# ---------------------------------------------------------------------------
# Analysis commands
# ---------------------------------------------------------------------------

def _outline_table(result: dict) -> Table:
    table = Table(title=f"📄 {escape(result['path'])}", title_style="bold cyan")
    table.add_column("Lines", style="dim", justify="right")
    table.add_column("Type", style="magenta")
    table.add_column("Name", style="bold")
    table.add_column("Signature", overflow="fold", ratio=1)
    for item in result["outline"]:
        end = item.get("endLine")
        span = f"{item['startLine']}-{end}" if end and end != item["startLine"] else str(item["startLine"])
        table.add_row(span, item["type"], escape(item["name"]), escape(item["signature"]))
    return table


@app.command("outline")
def outline(
    paths: List[str] = typer.Argument(..., help="Absolute paths of files to outline."),
    table: bool = typer.Option(False, "--table", "-t", help="Render rich tables instead of JSON."),
):
    """Outline classes, methods and fields of each file."""
    output = view_files_outlines({"AbsolutePaths": paths})
    if not table:
        typer.echo(output)
        return

    results = json.loads(output)
    if isinstance(results, dict):
        print_error(results["error"])
        raise typer.Exit(code=1)
    for result in results:
        if "error" in result:
            print_error(f"{result['path']}: {result['error']}")
            continue
        console.print(_outline_table(result))


@app.command("context")
def context(
    paths: List[str] = typer.Argument(..., help="Absolute paths of files to analyze."),
    start: int = typer.Option(1, "--start", "-s", min=1, help="First source line to show."),
    end: Optional[int] = typer.Option(None, "--end", "-e", min=1, help="Last source line to show."),
):
    """Show files with their injections, resolved imports and dependency outlines."""
    typer.echo(view_files_full_context({"AbsolutePaths": paths, "StartLine": start, "EndLine": end}))


@app.command("item")
def item(
    targets: List[str] = typer.Argument(..., help="Queries of the form FILE:ITEM_NAME."),
):
    """Print the definition of named code items, following interfaces to implementations."""
    items = []
    for target in targets:
        file_part, sep, name = target.rpartition(":")
        if not sep or not file_part or not name:
            raise typer.BadParameter(f"Expected FILE:ITEM_NAME, got '{target}'.")
        items.append({"File": file_part, "ItemName": name})
    typer.echo(view_code_items({"Items": items}))


@app.command("request")
def request(
    source: str = typer.Argument(..., help="JSON request file, or '-' for stdin."),
):
    """Run a raw tool request: {"tool": NAME, "arguments": {...}}."""
    try:
        if source == "-":
            raw = typer.get_text_stream("stdin").read()
        else:
            with open(source, "r", encoding="utf-8") as f:
                raw = f.read()
        envelope = json.loads(raw)
    except OSError as exc:
        print_error(f"Cannot read request: {exc}")
        raise typer.Exit(code=1)
    except json.JSONDecodeError as exc:
        print_error(f"Request is not valid JSON: {exc}")
        raise typer.Exit(code=1)

    if not isinstance(envelope, dict):
        print_error("Request must be a JSON object.")
        raise typer.Exit(code=1)
    tool = TOOLS.get(envelope.get("tool", ""))
    if tool is None:
        print_error(f"Unknown tool '{envelope.get('tool')}'. Available: {', '.join(tool_names())}")
        raise typer.Exit(code=1)
    arguments = envelope.get("arguments", {})
    typer.echo(tool(arguments if isinstance(arguments, dict) else {}))


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@config_app.command("show")
def config_show():
    """Show effective scanner settings."""
    settings = config_manager.load_scan_config()
    table = Table(title=f"⚙️  {config_manager.CONFIG_FILE}", title_style="bold cyan")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_column("Default", style="dim")
    for key, default in config_manager.DEFAULT_SCAN_CONFIG.items():
        value = settings[key]
        table.add_row(key, ", ".join(value) if isinstance(value, list) else str(value),
                      ", ".join(default) if isinstance(default, list) else str(default))
    console.print(table)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Setting name, see 'codeprobe config show'."),
    value: str = typer.Argument(..., help="New value; comma separated for lists."),
):
    """Change one scanner setting."""
    try:
        coerced = config_manager.coerce_scan_value(key, value)
    except KeyError:
        raise typer.BadParameter(
            f"Unknown setting '{key}'. Known: {', '.join(config_manager.DEFAULT_SCAN_CONFIG)}"
        )
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid value for {key}: {exc}")

    if not config_manager.save_scan_setting(key, coerced):
        print_error(f"Failed to write {config_manager.CONFIG_FILE}")
        raise typer.Exit(code=1)
    typer.echo(typer.style(f"✅ {key} = {coerced}", fg=typer.colors.GREEN))


@config_app.command("reset")
def config_reset():
    """Drop all scanner settings and return to defaults."""
    if not config_manager.clear_scan_config():
        print_error(f"Failed to write {config_manager.CONFIG_FILE}")
        raise typer.Exit(code=1)
    typer.echo(typer.style("✅ Scanner settings reset to defaults", fg=typer.colors.GREEN))


if __name__ == "__main__":
    app()
