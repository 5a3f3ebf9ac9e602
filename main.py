import os
import subprocess
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich import box

from api import ROUTES
from config import settings

APP_NAME = "Book Collection CLI"

console = Console()

app = typer.Typer(help=APP_NAME)


def _routes_table() -> Table:
    table = Table(title="API Endpoints", box=box.SIMPLE)
    table.add_column("Method", style="bold cyan")
    table.add_column("Path")
    for method, path in ROUTES:
        table.add_row(method, path)
    return table


@app.command("routes")
def cli_routes():
    """List the endpoints served by the API."""
    console.print(_routes_table())


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (default: HOST or 127.0.0.1)"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on (default: PORT or 3000)"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes; the collection is reset each time"),
):
    """Start the API with uvicorn."""
    host = host or settings.api_host
    port = int(port if port is not None else settings.api_port)
    url = f"http://{host}:{port}"
    console.print(f"Server running on {url}")
    console.print(_routes_table())

    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
        "--log-level", settings.log_level.lower(),
    ]
    if reload:
        args.append("--reload")
    try:
        # the server process reads HOST/PORT for its startup log
        subprocess.run(args, env={**os.environ, "HOST": host, "PORT": str(port)})
    except FileNotFoundError:
        console.print("[bold red]Error:[/] could not launch `uvicorn`. Make sure it is installed in this environment.")
    except KeyboardInterrupt:
        console.print("[green]Server stopped.[/]")


if __name__ == "__main__":
    app()
