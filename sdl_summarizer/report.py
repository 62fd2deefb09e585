"""Documentation output: rich console, JSON and Markdown."""

from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import utils
from .models import Operation, SchemaDocument, TypeDefinition

console = Console()

FORMATS = ("console", "json", "markdown")
SECTIONS = ("queries", "mutations", "types")

KIND_COLORS = {
    "query": "#0066cc",
    "mutation": "#d73a49",
    "type": "#0066cc",
    "interface": "#6f42c1",
    "enum": "#22863a",
    "scalar": "#6a737d",
    "union": "#d73a49",
    "input": "#005cc5",
}
DEFAULT_COLOR = "#24292e"

KIND_ICONS = {
    "query": "Q",
    "mutation": "M",
    "type": "T",
    "interface": "I",
    "enum": "E",
    "scalar": "S",
    "union": "U",
    "input": "IN",
}


def kind_color(kind: str) -> str:
    return KIND_COLORS.get(kind, DEFAULT_COLOR)


def kind_icon(kind: str) -> str:
    return KIND_ICONS.get(kind, "?")


def emit(doc: SchemaDocument, fmt: str, api: Optional[dict[str, Any]] = None, only: Optional[str] = None) -> None:
    """
    Output schema documentation.

    Args:
        doc: Summarized schema
        fmt: Output format ("console", "json" or "markdown")
        api: Header metadata (name, version, description, endpoints)
        only: Restrict output to one section ("queries", "mutations" or "types")

    Raises:
        ValueError: On unknown format or section
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown output format: {fmt} (expected one of {', '.join(FORMATS)})")
    if only is not None and only not in SECTIONS:
        raise ValueError(f"Unknown section: {only} (expected one of {', '.join(SECTIONS)})")

    api = api or {}
    if fmt == "json":
        print(utils.to_json(to_payload(doc, api, only)))
    elif fmt == "markdown":
        print(to_markdown(doc, api, only))
    else:
        print_console(doc, api, only)


def _sections(doc: SchemaDocument, only: Optional[str]) -> list[tuple[str, str, list]]:
    sections = [
        ("queries", "Queries", doc.queries),
        ("mutations", "Mutations", doc.mutations),
        ("types", "Types", doc.types),
    ]
    return [s for s in sections if only is None or s[0] == only]


def to_payload(doc: SchemaDocument, api: dict[str, Any], only: Optional[str] = None) -> dict[str, Any]:
    payload = {"api": api, **doc.to_dict()}
    if only == "types":
        payload.pop("operations")
    elif only in ("queries", "mutations"):
        payload.pop("types")
        kind = "query" if only == "queries" else "mutation"
        payload["operations"] = [op for op in payload["operations"] if op["kind"] == kind]
    return payload


def to_markdown(doc: SchemaDocument, api: dict[str, Any], only: Optional[str] = None) -> str:
    """Render the document as Markdown."""
    out = [_markdown_title(api)]

    if api.get("description"):
        out.append(api["description"])
    if api.get("provider"):
        out.append(f"Provided by {api['provider']}.")
    endpoints = [(label, api.get(key)) for label, key in (("Endpoint", "productionURL"), ("Sandbox", "sandboxURL"))]
    endpoint_lines = [f"- **{label}:** `{url}`" for label, url in endpoints if url]
    if endpoint_lines:
        out.append("\n".join(endpoint_lines))

    for _, title, items in _sections(doc, only):
        noun = "type" if title == "Types" else "operation"
        out.append(f"## {title}\n\n_{utils.plural(len(items), noun)}_")
        if not items:
            out.append(f"No {title.lower()} defined.")
        for item in items:
            out.append(_markdown_entry(item))

    return "\n\n".join(out) + "\n"


def _markdown_title(api: dict[str, Any]) -> str:
    title = f"# {api.get('name', 'GraphQL Schema Documentation')}"
    if api.get("version"):
        title += f" ({api['version']})"
    return title


def _markdown_entry(item) -> str:
    parts = [f"### `{item.name}` ({item.kind.value})"]
    if item.description:
        parts.append(item.description)
    if isinstance(item, Operation):
        parts.append(f"**Returns:** `{item.return_type}`")
        if item.parameters:
            rows = ["| Name | Type | Required |", "| --- | --- | --- |"]
            for p in item.parameters:
                rows.append(f"| `{p.name}` | `{p.type}` | {'yes' if p.required else 'no'} |")
            parts.append("\n".join(rows))
    parts.append(f"```graphql\n{item.content}\n```")
    return "\n\n".join(parts)


def print_console(doc: SchemaDocument, api: dict[str, Any], only: Optional[str] = None) -> None:
    """Rich console rendering, one section per operation kind plus types."""
    title = escape(api.get("name", "GraphQL Schema Documentation"))
    if api.get("version"):
        title += f" [dim]{escape(api['version'])}[/dim]"
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    if api.get("description"):
        console.print(escape(api["description"]))
    for label, key in (("Endpoint", "productionURL"), ("Sandbox", "sandboxURL")):
        if api.get(key):
            console.print(f"[green]{label}:[/green] {escape(api[key])}")
    if api.get("provider"):
        console.print(f"[dim]Provided by {escape(api['provider'])}[/dim]")

    for _, title, items in _sections(doc, only):
        noun = "type" if title == "Types" else "operation"
        console.print(f"\n[bold]{title}[/bold] [dim]({utils.plural(len(items), noun)})[/dim]\n")
        if not items:
            console.print(f"  [dim]No {title.lower()} defined[/dim]")
            continue
        for item in items:
            if isinstance(item, Operation):
                _print_operation(item)
            else:
                _print_type(item)

    console.print()


def _badge(kind: str) -> str:
    color = kind_color(kind)
    return f"[bold white on {color}] {kind_icon(kind)} [/bold white on {color}]"


def _print_operation(op: Operation) -> None:
    console.print(f"{_badge(op.kind.value)} [bold]{op.name}[/bold]: [cyan]{escape(op.return_type)}[/cyan]")
    if op.description:
        console.print(f"    {escape(op.description)}")

    if op.parameters:
        table = Table(show_header=True, box=None, padding=(0, 2))
        table.add_column("Parameter", style="cyan")
        table.add_column("Type")
        table.add_column("Required")
        for p in op.parameters:
            table.add_row(p.name, escape(p.type), "[red]required[/red]" if p.required else "[dim]optional[/dim]")
        console.print(Panel(table, expand=False, border_style="dim"))

    console.print(Syntax(op.content, "graphql", theme="ansi_light", background_color="default"))


def _print_type(t: TypeDefinition) -> None:
    console.print(f"{_badge(t.kind.value)} [bold]{t.name}[/bold] [dim]{t.kind.value}[/dim]")
    if t.description:
        console.print(f"    {escape(t.description)}")
    console.print(Syntax(t.content, "graphql", theme="ansi_light", background_color="default"))


def print_kv(title: str, data: dict) -> None:
    """
    Print key-value pairs (for schema pull, init-config).

    Args:
        title: Section title
        data: Key-value data
    """
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    for k, v in data.items():
        table.add_row(k, str(v))

    console.print(table)
    console.print()
