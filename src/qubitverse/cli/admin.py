# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Administrative CLI commands.

Commands
--------
serve
    Run the HTTP relay in front of the simulator.
config
    Display current configuration.
"""

from __future__ import annotations

from dataclasses import replace

import click
from qubitverse.cli._utils import config_from_ctx, echo, print_json
from qubitverse.errors import ConfigError


def register(cli: click.Group) -> None:
    """Register admin commands with CLI."""
    cli.add_command(serve_cmd)
    cli.add_command(config_cmd)


# =============================================================================
# Serve command
# =============================================================================


@click.command("serve")
@click.option("--host", default=None, help="Host to bind to (default from config).")
@click.option("--port", "-p", default=None, type=int, help="Port to listen on.")
@click.option("--command", "command", default=None, help="Simulator command line.")
@click.option("--log-level", default="info", show_default=True,
              type=click.Choice(["critical", "error", "warning", "info", "debug"]))
@click.pass_context
def serve_cmd(
    ctx: click.Context,
    host: str | None,
    port: int | None,
    command: str | None,
    log_level: str,
) -> None:
    """
    Run the HTTP relay.

    Serves ``POST /encode`` for the web client and the JSON API under
    ``/api``.

    Examples:
        qubitverse serve
        qubitverse serve --port 8000 --command "./simulator"
    """
    import shlex

    from qubitverse.server import run_server

    config = config_from_ctx(ctx)
    overrides: dict[str, object] = {}
    if host:
        overrides["host"] = host
    if port is not None:
        overrides["port"] = port
    if command:
        overrides.update(transport="process", simulator_command=tuple(shlex.split(command)))
    try:
        config = replace(config, **overrides)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    echo(f"Starting qubitverse relay at http://{config.host}:{config.port}")
    if config.transport == "http":
        echo(f"Simulator: {config.simulator_url}")
    else:
        echo(f"Simulator: {shlex.join(config.simulator_command)}")

    run_server(config=config, log_level=log_level)


# =============================================================================
# Config command
# =============================================================================


@click.command("config")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["pretty", "json"]),
    default="pretty",
)
@click.pass_context
def config_cmd(ctx: click.Context, fmt: str) -> None:
    """Show current configuration."""
    config = config_from_ctx(ctx)

    if fmt == "json":
        print_json(config.to_dict())
        return

    echo(f"Transport:         {config.transport}")
    echo(f"Simulator command: {' '.join(config.simulator_command)}")
    echo(f"Simulator URL:     {config.simulator_url}")
    echo(f"Timeout:           {config.timeout:g}s")
    echo(f"Retries:           {config.retry_attempts} (backoff {config.retry_backoff:g}s)")
    echo(f"Strict decode:     {config.strict_decode}")
    echo(f"Relay address:     {config.host}:{config.port}")
    echo(f"CORS origins:      {', '.join(config.cors_origins) or '-'}")
