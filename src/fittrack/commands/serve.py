"""Web server command."""

import click

from ..config import configure_logging
from .base import load_settings


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the web server.

    Examples:

        # Start on default port (8000)
        fittrack serve

        # Start on custom port
        fittrack serve --port 3000

        # Development mode with auto-reload
        fittrack serve --reload
    """
    settings = load_settings(ctx)
    configure_logging(settings.log_level, force=True)

    import uvicorn

    from ..web import create_app

    click.echo()
    click.echo(click.style("Starting fittrack web server...", fg="green"))
    click.echo()
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo(f"  Store:   {settings.store_url}")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")
    click.echo()

    uvicorn.run(
        create_app(settings) if not reload else "fittrack.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
    )
