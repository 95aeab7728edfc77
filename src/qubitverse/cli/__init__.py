# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
qubitverse command-line interface.

Command Modules
---------------
circuit
    ``encode``, ``decode`` and ``run``.
admin
    ``serve`` and ``config``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from qubitverse.cli import admin, circuit


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="TOML config file (overrides QUBITVERSE_CONFIG).",
)
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-vv for debug).")
@click.version_option(package_name="qubitverse")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: int) -> None:
    """Encode circuits, talk to the simulator, and decode its traces."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


circuit.register(cli)
admin.register(cli)


def main() -> None:
    """Console-script entry point."""
    cli()


__all__ = ["cli", "main"]
