import logging
from pathlib import Path
from typing import Optional

import typer

from tksctl.commands import cluster
from tksctl.logging import setup_logging

app = typer.Typer(help="TKS - cluster lifecycle CLI.")

# Add all command groups
app.add_typer(cluster.app, name="cluster")


# Global options callback
@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
    config: Optional[Path] = typer.Option(None, "--config", help="Config file (default: ./.tks.yaml or ~/.tks.yaml)"),
):
    """TKS - cluster lifecycle CLI."""
    setup_logging(debug)
    if debug:
        logging.debug("Debug mode enabled")
    ctx.obj = {"config_path": config}
