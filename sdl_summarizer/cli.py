"""CLI for sdl-summarizer."""

import logging
from dataclasses import dataclass
from typing import Literal, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from . import config, parser, schema_loader, utils
from .models import SchemaDocument
from .report import emit, print_kv

app = typer.Typer(help="GraphQL SDL Summarizer")
schema_app = typer.Typer(help="Schema operations")
app.add_typer(schema_app, name="schema")

console = Console()
err_console = Console(stderr=True)


@dataclass
class SummarizeOptions:
    """Options for summarize command."""

    schema_file: Optional[str] = None
    url: Optional[str] = None
    token: Optional[str] = None
    output: Optional[Literal["console", "json", "markdown"]] = None
    only: Optional[Literal["queries", "mutations", "types"]] = None
    refresh: bool = False


def setup_logging(verbose: bool = False) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    setup_logging(verbose)


@app.command("summarize")
def summarize_cmd(
    schema_file: Optional[str] = typer.Argument(None, help="SDL file or introspection JSON file"),
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    token: Optional[str] = typer.Option(None, help="API token"),
    output: Optional[str] = typer.Option(None, help="Output format (console|json|markdown)"),
    only: Optional[str] = typer.Option(None, help="Show one section (queries|mutations|types)"),
    refresh: bool = typer.Option(False, help="Ignore cached introspection results"),
):
    """Render documentation for a GraphQL schema."""
    try:
        opts = SummarizeOptions(
            schema_file=schema_file,
            url=url,
            token=token,
            output=output,
            only=only,
            refresh=refresh,
        )
        cfg = config.load()
        doc = run_summarize(opts, cfg)
        emit(doc, opts.output or cfg.output, api=cfg.api_metadata(), only=opts.only)
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def run_summarize(opts: SummarizeOptions, cfg: config.Config) -> SchemaDocument:
    """
    Load a schema and summarize it.

    Args:
        opts: Summarize options
        cfg: Loaded configuration

    Returns:
        SchemaDocument for the loaded SDL
    """
    url = None
    if not opts.schema_file and (opts.url or cfg.default_url):
        url = utils.ensure_graphql_url(opts.url or cfg.default_url)

    profile = schema_loader.load_schema(
        url=url,
        schema_file=opts.schema_file,
        cfg=cfg,
        allow_cache=True,
        refresh=opts.refresh,
        token=opts.token,
    )
    return parser.summarize(profile.sdl)


@schema_app.command("pull")
def schema_pull(
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    token: Optional[str] = typer.Option(None, help="API token"),
    out: Optional[str] = typer.Option(None, help="Write SDL to this file"),
):
    """Fetch and cache the SDL of a GraphQL endpoint."""
    try:
        cfg = config.load()
        base_url = url or cfg.default_url

        if not base_url:
            console.print("[red]Error: No URL provided. Use --url or set default_url in config.[/red]")
            raise typer.Exit(1)

        full_url = utils.ensure_graphql_url(base_url)
        console.print(f"[cyan]Fetching schema from {full_url}...[/cyan]")
        profile = schema_loader.load_schema(url=full_url, cfg=cfg, allow_cache=True, refresh=True, token=token)

        # If custom output path specified, write just the SDL
        if out:
            utils.write_text(out, profile.sdl)
            path = out
        else:
            path = schema_loader.cache_path_for(profile.source, cfg)

        print_kv("Schema pulled", {"url": profile.source, "hash": profile.hash, "path": path})
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command("init-config")
def init_config(
    path: Optional[str] = typer.Option(None, help="Config file path"),
    force: bool = typer.Option(False, help="Overwrite an existing file"),
):
    """Write an example configuration file."""
    target = path or config.get_default_config_path()
    if utils.exists(target) and not force:
        console.print(f"[red]Error: {target} already exists. Use --force to overwrite.[/red]")
        raise typer.Exit(1)

    written = config.create_example_config(target)
    print_kv("Config written", {"path": written})


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
