"""Command line interface for docfind_site."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from docfind_site.config import PluginOptions
from docfind_site.errors import DocfindError
from docfind_site.index.collector import collect_documents, documents_to_json
from docfind_site.plugin import DocfindPlugin
from docfind_site.web.app import create_app


console = Console()
app = typer.Typer(help="docfind - search index builds for Markdown sites")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _fail(exc: DocfindError) -> typer.Exit:
    console.print(f"[red]{escape(str(exc))}[/red]")
    return typer.Exit(code=1)


def _make_plugin(
    docs_dir: Optional[Path],
    out_dir: Optional[Path],
    index_dir: Optional[Path],
    base: Optional[str],
    clean_urls: Optional[bool],
    include: Optional[List[str]],
    exclude: Optional[List[str]],
    indexer: Optional[str],
    category: Optional[str],
) -> DocfindPlugin:
    options = PluginOptions(
        docs_dir=docs_dir,
        out_dir=out_dir,
        index_dir=index_dir,
        base=base,
        clean_urls=clean_urls,
        include=include or None,
        exclude=exclude or None,
        indexer=indexer,
        default_category=category,
    )
    try:
        return DocfindPlugin(options)
    except DocfindError as exc:
        raise _fail(exc) from exc


DocsDirOption = typer.Option(None, "--docs-dir", help="Markdown source directory (default: docs)")
OutDirOption = typer.Option(None, "--out-dir", help="Site output directory")
IndexDirOption = typer.Option(None, "--index-dir", help="Index artifact directory for builds")
BaseOption = typer.Option(None, "--base", help="Public base path (default: /)")
CleanUrlsOption = typer.Option(None, "--clean-urls/--no-clean-urls", help="Use clean URLs")
IncludeOption = typer.Option(None, "--include", help="Include glob, repeatable")
ExcludeOption = typer.Option(None, "--exclude", help="Exclude glob, repeatable")
IndexerOption = typer.Option(None, "--indexer", help="Indexer executable (default: docfind)")
CategoryOption = typer.Option(None, "--default-category", help="Category for pages without one")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Verbose logging")


@app.command()
def collect(
    docs_dir: Optional[Path] = DocsDirOption,
    base: Optional[str] = BaseOption,
    clean_urls: Optional[bool] = CleanUrlsOption,
    include: Optional[List[str]] = IncludeOption,
    exclude: Optional[List[str]] = ExcludeOption,
    category: Optional[str] = CategoryOption,
    as_json: bool = typer.Option(False, "--json", help="Print the manifest JSON"),
    verbose: bool = VerboseOption,
) -> None:
    """List the documents that would be indexed."""
    _setup_logging(verbose)
    plugin = _make_plugin(docs_dir, None, None, base, clean_urls, include, exclude, None, category)
    try:
        documents = collect_documents(plugin.options)
    except DocfindError as exc:
        raise _fail(exc) from exc

    if as_json:
        typer.echo(documents_to_json(documents))
        return
    if not documents:
        console.print("[yellow]No documents found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Href")
    for document in documents:
        table.add_row(document.title, document.category or "", document.href)
    console.print(table)


@app.command()
def build(
    docs_dir: Optional[Path] = DocsDirOption,
    out_dir: Optional[Path] = OutDirOption,
    index_dir: Optional[Path] = IndexDirOption,
    base: Optional[str] = BaseOption,
    clean_urls: Optional[bool] = CleanUrlsOption,
    include: Optional[List[str]] = IncludeOption,
    exclude: Optional[List[str]] = ExcludeOption,
    indexer: Optional[str] = IndexerOption,
    category: Optional[str] = CategoryOption,
    verbose: bool = VerboseOption,
) -> None:
    """Collect documents and build the search index for the final site."""
    _setup_logging(verbose)
    plugin = _make_plugin(
        docs_dir, out_dir, index_dir, base, clean_urls, include, exclude, indexer, category
    )
    console.print(f"Building index into [bold]{plugin.options.index_dir}[/bold]...")
    try:
        documents = asyncio.run(plugin.close_bundle())
    except DocfindError as exc:
        raise _fail(exc) from exc
    console.print(f"Indexed {len(documents)} documents.")


@app.command()
def dev(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(5173, help="Server port"),
    docs_dir: Optional[Path] = DocsDirOption,
    out_dir: Optional[Path] = OutDirOption,
    base: Optional[str] = BaseOption,
    clean_urls: Optional[bool] = CleanUrlsOption,
    include: Optional[List[str]] = IncludeOption,
    exclude: Optional[List[str]] = ExcludeOption,
    indexer: Optional[str] = IndexerOption,
    category: Optional[str] = CategoryOption,
    verbose: bool = VerboseOption,
) -> None:
    """Serve the site with a live-rebuilt search index."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - optional extra
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    _setup_logging(verbose)
    plugin = _make_plugin(
        docs_dir, out_dir, None, base, clean_urls, include, exclude, indexer, category
    )
    console.print(
        f"Starting dev server on http://{host}:{port}{plugin.options.base}/ "
        f"(index assets under {plugin.options.mount_prefix})"
    )
    uvicorn.run(
        create_app(plugin),
        host=host,
        port=port,
        reload=False,
        log_level="debug" if verbose else "info",
    )
