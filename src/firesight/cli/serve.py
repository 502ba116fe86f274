"""``firesight serve``: HTTP API for heat analysis."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import FireSightError
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_config


@app.command()
def serve(
    port: Optional[int] = typer.Option(None, help="Port to listen on (default: config port)"),
    host: Optional[str] = typer.Option(None, help="Host to bind to (default: config host)"),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """Serve POST /analyze and GET /health."""
    try:
        from ..server import _check_deps

        _check_deps()
    except ImportError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    import uvicorn

    from ..server.app import create_app

    setup_logging(verbose=verbose)
    try:
        settings = resolve_config(config=config, verbose=verbose, host=host, port=port)
    except FireSightError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    url = f"http://{settings.host}:{settings.port}"
    console.print(f"[bold]FireSight API[/bold] → [link={url}]{url}[/link]")
    if settings.temp_dir:
        console.print(f"[dim]Cloning into {settings.temp_dir}[/dim]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    try:
        uvicorn.run(
            create_app(settings),
            host=settings.host,
            port=settings.port,
            log_level="info" if verbose else "warning",
        )
    except KeyboardInterrupt:
        pass
    finally:
        console.print("\n[dim]Stopped.[/dim]")
