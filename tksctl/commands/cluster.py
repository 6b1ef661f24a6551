"""
Cluster commands backed by the TKS cluster LCM service.
"""
import logging
import sys
from typing import Optional

import typer

from tksctl.config import Config
from tksctl.errors import ConfigurationError, LcmConnectionError, LcmRpcError, UsageError
from tksctl.modules import cluster_lcm, presenter
from tksctl.modules.request import (
    DEFAULT_MACHINE_REPLICAS,
    DEFAULT_NUM_OF_AZ,
    DEFAULT_TEMPLATE,
    build_create_request,
)

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_CONNECTION_FAILURE = 2

app = typer.Typer(help="Manage TKS clusters")


@app.command("create")
def create_cluster_cmd(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, metavar="CLUSTERNAME", help="Cluster name"),
    contract_id: str = typer.Option("", "--contract-id", help="Contract ID"),
    csp_id: str = typer.Option("", "--csp-id", help="CSP ID"),
    region: str = typer.Option("", "--region", help="AWS Region"),
    num_of_az: int = typer.Option(DEFAULT_NUM_OF_AZ, "--num-of-az", help="Number of availability zones in selected region"),
    ssh_key_name: str = typer.Option("", "--ssh-key-name", help="SSH key name for EC2 instance connection"),
    machine_type: str = typer.Option("", "--machine-type", help="machine type of worker node"),
    machine_replicas: int = typer.Option(DEFAULT_MACHINE_REPLICAS, "--machine-replicas", help="machine replicas of worker node"),
    template: str = typer.Option(DEFAULT_TEMPLATE, "--template", help="Template name for the cluster"),
    lcm_url: Optional[str] = typer.Option(None, "--lcm-url", help="Address of the cluster LCM server (overrides tksClusterLcmUrl)"),
    transport: Optional[str] = typer.Option(None, "--transport", help="Transport security: insecure or tls"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Deadline for the create call in seconds [default: 1800]"),
):
    """Create a TKS Cluster.

    Example:
    tks cluster create <CLUSTERNAME> [--template TEMPLATE_NAME]
    """
    try:
        request = build_create_request(
            [name] if name else [],
            contract_id=contract_id,
            csp_id=csp_id,
            region=region,
            num_of_az=num_of_az,
            ssh_key_name=ssh_key_name,
            machine_type=machine_type,
            machine_replicas=machine_replicas,
            template=template,
        )
        message = request.to_message()
    except UsageError as e:
        if not name:
            typer.echo("You must specify cluster name.")
        typer.echo(presenter.failure_line(e), err=True)
        raise typer.Exit(EXIT_FAILURE)

    obj = ctx.obj or {}
    try:
        config = Config.load(
            obj.get("config_path"),
            overrides={
                "lcm_url": lcm_url,
                "transport_security": transport,
                "call_timeout": timeout,
            },
        )
        config.validate()
    except ConfigurationError as e:
        typer.echo(presenter.failure_line(e), err=True)
        raise typer.Exit(EXIT_FAILURE)

    typer.echo("Proto Json data: ")
    typer.echo(presenter.render_request(message))

    try:
        response = cluster_lcm.create_cluster(
            config.lcm_url,
            request,
            deadline=config.call_timeout,
            transport_security=config.transport_security,
            connect_timeout=config.connect_timeout,
        )
    except LcmConnectionError as e:
        # Unrecoverable: end the process without presenting a response.
        logger.critical(str(e))
        typer.echo(presenter.failure_line(e), err=True)
        sys.exit(EXIT_CONNECTION_FAILURE)
    except LcmRpcError as e:
        typer.echo(presenter.failure_line(e), err=True)
        raise typer.Exit(EXIT_FAILURE)

    typer.echo("Response:")
    typer.echo(presenter.render_response(response))
    typer.echo(presenter.success_line(request.name))
