"""
pig-graph CLI
==============
Command-line interface for the pig-graph library.

Commands:
    validate    Validate the items of a JSON-LD package graph
    inspect     List the items of a package graph
    convert     Convert between JSON-LD and the internal item form
    version     Show version information

Usage::

    pig-graph validate package.jsonld
    pig-graph inspect package.jsonld --format json
    pig-graph convert package.jsonld --to internal -o items.json
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..messages import SUPPORTED_LANGUAGES, Code, get_message
from ..models.factory import PigItem
from ..transform.normalize import get_local_text
from ..validator.graph import GraphValidator, Severity, graph_items

console = Console()
err_console = Console(stderr=True)

_SEVERITY_COLORS = {Severity.ERROR: "red", Severity.WARNING: "yellow", Severity.INFO: "blue"}


def _load(path: Path, lang: str) -> Any:
    """Read a JSON document; exit with code 2 when it cannot be read or parsed."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]{get_message(Code.READ_FAILED, path, e, lang=lang)}[/red]")
        sys.exit(2)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        err_console.print(f"[red]{get_message(Code.PARSE_FAILED, path.name, e, lang=lang)}[/red]")
        sys.exit(2)


lang_option = click.option(
    "--lang",
    type=click.Choice(SUPPORTED_LANGUAGES),
    default="en",
    show_default=True,
    help="Language of status messages",
)


@click.group()
@click.version_option(version=__version__, prog_name="pig-graph")
@click.option("--verbose", "-v", is_flag=True, help="Log normalization steps and warnings")
def cli(verbose: bool) -> None:
    """
    pig-graph – Product Information Graph items and JSON-LD conversion.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@lang_option
@click.option("--strict", is_flag=True, help="Exit with code 1 if any warnings")
@click.option("--json-output", is_flag=True, help="Output results as JSON")
def validate(path: Path, lang: str, strict: bool, json_output: bool) -> None:
    """Validate the items of a JSON-LD package graph."""
    document = _load(path, lang)
    result = GraphValidator(lang=lang, strict=strict).validate(document)

    if json_output:
        output = {
            "file": str(path),
            "passed": result.passed,
            "item_count": result.item_count,
            "valid_count": len(result.items),
            "issues": [
                {
                    "rule": i.rule_id,
                    "severity": i.severity.value,
                    "index": i.index,
                    "id": i.item_id,
                    "msg": i.message,
                }
                for i in result.issues
            ],
        }
        click.echo(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        console.print()
        status_str = "[bold green]PASS[/bold green]" if result.passed else "[bold red]FAIL[/bold red]"
        console.print(Panel(
            f"[bold]{path.name}[/bold]\n"
            f"Status: {status_str}  |  "
            f"Items: {result.item_count}  |  Valid: {len(result.items)}  |  "
            f"Errors: {len(result.errors)}  |  Warnings: {len(result.warnings)}",
            title="pig-graph Validation",
            border_style="blue",
        ))

        if result.issues:
            t = Table(box=box.SIMPLE, title="Issues")
            t.add_column("#", style="dim")
            t.add_column("Severity")
            t.add_column("Rule")
            t.add_column("Id")
            t.add_column("Message")
            for issue in result.issues:
                color = _SEVERITY_COLORS[issue.severity]
                t.add_row(
                    "—" if issue.index is None else str(issue.index),
                    f"[{color}]{issue.severity.value}[/{color}]",
                    issue.rule_id,
                    issue.item_id or "—",
                    issue.message,
                )
            console.print(t)

        if not result.item_count:
            console.print("\n[yellow]No items found in this document.[/yellow]")
        console.print()

    sys.exit(0 if result.passed else 1)


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@lang_option
@click.option("--format", "output_format", type=click.Choice(["rich", "json"]), default="rich")
def inspect(path: Path, lang: str, output_format: str) -> None:
    """List the items of a package graph."""
    document = _load(path, lang)

    rows = []
    for index, entry in enumerate(graph_items(document)):
        status = PigItem.from_jsonld(entry, lang=lang)
        if status.ok:
            item = status.response
            rows.append({
                "index": index,
                "itemType": item.item_type.value,
                "id": item.id,
                "hasClass": item.has_class or item.specializes,
                "title": get_local_text(item.title, lang),
                "status": status.status,
            })
        else:
            rows.append({
                "index": index,
                "itemType": None,
                "id": entry.get("@id") if isinstance(entry, dict) else None,
                "hasClass": None,
                "title": "",
                "status": status.status,
                "message": status.status_text,
            })

    if output_format == "json":
        click.echo(json.dumps({"file": str(path), "items": rows}, indent=2, ensure_ascii=False))
        return

    console.print()
    console.print(Panel(
        f"[bold]{path.name}[/bold]\n"
        f"Items: [cyan]{len(rows)}[/cyan]  |  "
        f"Classes: [cyan]{sum(1 for r in rows if PigItem.is_class(r['itemType']))}[/cyan]  |  "
        f"Instances: [cyan]{sum(1 for r in rows if PigItem.is_instance(r['itemType']))}[/cyan]",
        title="pig-graph Inspection",
        border_style="cyan",
    ))

    if rows:
        t = Table(title="Items", box=box.ROUNDED)
        t.add_column("#")
        t.add_column("Item type")
        t.add_column("Id")
        t.add_column("Class")
        t.add_column("Title")
        t.add_column("Status")
        for r in rows:
            t.add_row(
                str(r["index"]),
                f"[cyan]{r['itemType'] or '—'}[/cyan]",
                r["id"] or "—",
                r["hasClass"] or "—",
                r["title"][:40] or "—",
                "[green]✓[/green]" if r["status"] == 0 else f"[red]{r['status']}[/red]",
            )
        console.print(t)
    console.print()


# ---------------------------------------------------------------------------
# convert
# ---------------------------------------------------------------------------


def _to_internal(entry: Any, lang: str) -> tuple[Any, str | None]:
    status = PigItem.from_jsonld(entry, lang=lang)
    if not status.ok:
        return None, str(status)
    return status.response.get(), None


def _to_jsonld(entry: Any, lang: str) -> tuple[Any, str | None]:
    item_type = entry.get("itemType") if isinstance(entry, dict) else None
    item = PigItem.create(item_type, lang=lang) if item_type else None
    if item is None:
        return None, f"[{int(Code.UNKNOWN_ITEM_TYPE)}] " + get_message(
            Code.UNKNOWN_ITEM_TYPE, "convert", item_type, lang=lang
        )
    item.set(entry)
    if not item.status().ok:
        return None, str(item.status())
    return item.get_jsonld(), None


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--to", "target", type=click.Choice(["internal", "jsonld"]), default="internal", show_default=True)
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Output path (default: stdout)")
@lang_option
def convert(path: Path, target: str, output: Path | None, lang: str) -> None:
    """Convert package items between JSON-LD and the internal form."""
    document = _load(path, lang)
    convert_one = _to_internal if target == "internal" else _to_jsonld

    converted = []
    failures = 0
    for index, entry in enumerate(graph_items(document)):
        result, error = convert_one(entry, lang)
        if error:
            failures += 1
            err_console.print(f"[red]#{index}[/red] {error}")
            continue
        converted.append(result)

    payload: Any = converted if target == "internal" else {"@graph": converted}
    if isinstance(document, dict) and "@context" in document and target == "jsonld":
        payload = {"@context": document["@context"], **payload}
    text = json.dumps(payload, indent=2, ensure_ascii=False)

    if output:
        output.write_text(text + "\n", encoding="utf-8")
        err_console.print(f"[green]✓[/green] {len(converted)} item(s) written to [bold]{output}[/bold]")
    else:
        click.echo(text)

    sys.exit(1 if failures else 0)


# ---------------------------------------------------------------------------
# version info
# ---------------------------------------------------------------------------


@cli.command("version")
def show_version() -> None:
    """Show detailed version information."""
    console.print(Panel(
        f"[bold cyan]pig-graph[/bold cyan] v{__version__}\n\n"
        "Product Information Graph – items, validation and JSON-LD conversion\n"
        f"Message languages: {', '.join(SUPPORTED_LANGUAGES)}\n"
        f"Item types: {', '.join(PigItem.supported_types())}",
        title="pig-graph",
        border_style="cyan",
    ))
