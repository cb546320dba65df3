"""
Command-line interface for the Google Docs extractor.

This module provides the CLI entry point: authenticating against Google Docs
and extracting documents to JSON with their images uploaded to S3.
"""

from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from gdoc_extractor.config import get_settings
from gdoc_extractor.extractor.export import ImageExporter
from gdoc_extractor.google_docs.auth import GoogleDocsAuth, create_auth_manager
from gdoc_extractor.google_docs.client import create_docs_client
from gdoc_extractor.pipeline import DocumentResult, ExtractionPipeline, read_document_ids
from gdoc_extractor.storage.http import HttpImageFetcher
from gdoc_extractor.storage.s3 import create_blob_store
from gdoc_extractor.utils.errors import GDocExtractorException
from gdoc_extractor.utils.logging import setup_logging

app = typer.Typer(
    name="gdoc-extractor",
    help="Extract Google Docs articles to JSON and their images to S3",
    add_completion=False,
)
console = Console()


@app.command()
def connect(
    credentials_path: Optional[Path] = typer.Option(
        None,
        "--credentials",
        "-c",
        help="Path to Google OAuth2 client secrets JSON",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Force re-authentication",
    ),
):
    """Authenticate with Google Docs and cache the token."""
    settings = get_settings()
    auth = GoogleDocsAuth(
        credentials_path=credentials_path or settings.google_credentials_path,
        token_path=settings.google_token_path,
        port=settings.oauth_port,
    )

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            progress.add_task("Authenticating with Google Docs...", total=None)
            auth.authenticate(force_reauth=force)
    except GDocExtractorException as e:
        console.print(f"[red]✗[/red] Authentication failed: {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Token saved to {settings.google_token_path}")


@app.command()
def revoke():
    """Delete the cached Google Docs token."""
    settings = get_settings()
    auth = GoogleDocsAuth(
        credentials_path=settings.google_credentials_path,
        token_path=settings.google_token_path,
    )
    auth.revoke()
    console.print(f"[green]✓[/green] Removed cached token {settings.google_token_path}")


@app.command()
def extract(
    document_ids: Optional[List[str]] = typer.Argument(
        None,
        help="Google Docs document IDs",
    ),
    ids_file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        exists=True,
        dir_okay=False,
        help="File with one document ID per line ('#' starts a comment)",
    ),
    output_dir: Path = typer.Option(
        Path("."),
        "--output-dir",
        "-o",
        help="Directory for the extracted JSON files",
    ),
    upload: bool = typer.Option(
        True,
        "--upload/--no-upload",
        help="Upload document images to S3 when configured",
    ),
):
    """Extract documents to JSON and upload their images."""
    ids = list(document_ids or [])
    if ids_file is not None:
        console.print(f"Reading document IDs from file: {ids_file}")
        ids.extend(read_document_ids(ids_file))

    if not ids:
        console.print("No document IDs to process.")
        return

    settings = get_settings()

    try:
        docs_client = create_docs_client(create_auth_manager(settings))
        exporter = None
        if upload:
            store = create_blob_store(settings)
            if store is not None:
                exporter = ImageExporter(
                    store=store,
                    fetcher=HttpImageFetcher(timeout=settings.http_timeout_seconds),
                    bucket=settings.s3_bucket_name,
                )
    except GDocExtractorException as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"Found {len(ids)} document(s) to process.")
    pipeline = ExtractionPipeline(docs_client, output_dir=output_dir, exporter=exporter)
    results = pipeline.run(ids)

    _print_summary(results)
    if any(not result.succeeded for result in results):
        raise typer.Exit(1)


def _print_summary(results: List[DocumentResult]) -> None:
    table = Table(title=f"Processed documents ({len(results)})")
    table.add_column("Document ID", style="cyan")
    table.add_column("Title")
    table.add_column("Images", justify="right")
    table.add_column("Status", justify="center")

    for result in results:
        if result.export is not None:
            images = f"{len(result.export.uploaded)}/{len(result.export.results)}"
        else:
            images = "-"
        status = "[green]✓[/green]" if result.succeeded else f"[red]✗[/red] {result.error}"
        table.add_row(result.document_id, result.title or "", images, status)

    console.print(table)


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Google Docs extractor - convert articles to JSON for rendering."""
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    setup_logging(
        log_level="DEBUG" if debug else settings.log_level,
        log_file_path=settings.log_file_path,
        dev_mode=settings.dev_mode,
    )


if __name__ == "__main__":
    app()
