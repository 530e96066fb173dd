"""Service and data management CLI commands."""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.mirror.api.http.app_data import ApplicationDependencies
from src.mirror.api.utils.app_startup import configure_logging
from src.mirror.core.errors import MirrorError
from src.mirror.core.services import DocumentStoreService, ImportSummary, UpstreamClient
from src.mirror.runtime.context import get_config

console = Console()


def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind the server to"),
    port: Optional[int] = typer.Option(None, help="Port to bind the server to"),
) -> None:
    """
    🚀 Start the HTTP service.

    Host and port default to the values in config.yaml (port 3000).
    """
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Serving placeholder mirror on http://{host}:{port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run("src.mirror.api.http.app:app", host=host, port=port, access_log=False)


async def _run_import() -> ImportSummary:
    config = get_config()
    deps = ApplicationDependencies.build(
        store_service=DocumentStoreService(config.database),
        upstream_client=UpstreamClient(config.upstream),
    )
    try:
        return await deps.importer.load_all()
    finally:
        await deps.aclose()


def load() -> None:
    """
    📥 Clear the store and import every user, post and comment from upstream.
    """
    configure_logging()
    try:
        summary = asyncio.run(_run_import())
    except MirrorError as exc:
        console.print(f"[red]Import failed: {exc.message}[/red]")
        raise typer.Exit(1) from exc

    table = Table(title="Import summary")
    table.add_column("Collection", style="cyan")
    table.add_column("Documents", justify="right", style="green")
    table.add_row("users", str(summary.users))
    table.add_row("posts", str(summary.posts))
    table.add_row("comments", str(summary.comments))
    console.print(table)


def show_config() -> None:
    """
    🔧 Print the effective configuration with secrets masked.
    """
    config = get_config()

    table = Table(title="Effective configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("environment", config.app.environment)
    table.add_row("listen", f"{config.app.host}:{config.app.port}")
    table.add_row("database.backend", config.database.backend)
    table.add_row("database.url", config.database.sanitized_connection_string)
    table.add_row("database.app_db", config.database.app_db)
    table.add_row("upstream.base_url", config.upstream.base_url)
    table.add_row("logging.level", config.logging.level)
    console.print(table)
