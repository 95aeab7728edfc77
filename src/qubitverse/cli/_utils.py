# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Shared CLI utilities.

Output helpers and context accessors used across CLI commands.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

import click
from qubitverse.circuit.models import CircuitProgram
from qubitverse.circuit.serialization import program_from_dict
from qubitverse.config import Config, load_config
from qubitverse.errors import QubitverseError
from qubitverse.protocol.trace import ExecutionTrace


def echo(msg: str, *, err: bool = False) -> None:
    """
    Print message to stdout or stderr.

    Parameters
    ----------
    msg : str
        Message to print.
    err : bool, default=False
        If True, print to stderr instead of stdout.
    """
    click.echo(msg, err=err)


def print_json(obj: Any) -> None:
    """Print object as formatted JSON."""
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False, default=str))


def print_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    title: str = "",
) -> None:
    """
    Print formatted ASCII table.

    Parameters
    ----------
    headers : sequence of str
        Column headers.
    rows : sequence of sequence
        Table rows. Each row should have same length as headers.
    title : str, optional
        Table title to display above the table.
    """
    if title:
        echo(f"\n{title}\n{'=' * len(title)}")

    if not rows:
        echo("(empty)")
        return

    widths = [len(str(h)) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(widths):
                widths[i] = max(widths[i], len(str(cell)))

    fmt = "  ".join(f"{{:<{w}}}" for w in widths)

    echo(fmt.format(*headers))
    echo(fmt.format(*["-" * w for w in widths]))
    for row in rows:
        echo(fmt.format(*[str(c) for c in row]))


def config_from_ctx(ctx: click.Context) -> Config:
    """
    Resolve configuration for a command.

    Uses the ``--config`` file from the root group when given.
    """
    obj = ctx.find_root().obj or {}
    try:
        return load_config(obj.get("config_path"))
    except QubitverseError as e:
        raise click.ClickException(str(e)) from e


def load_program(path: Path) -> CircuitProgram:
    """Read a circuit document, converting failures to CLI errors."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid circuit JSON in {path}: {e}") from e
    try:
        return program_from_dict(data)
    except QubitverseError as e:
        raise click.ClickException(f"Invalid circuit: {e}") from e


def print_trace(trace: ExecutionTrace) -> None:
    """Print a decoded trace in human-readable form."""
    if trace.is_empty:
        echo("Empty trace.")
        return

    for snapshot in trace.snapshots:
        print_table(
            ["Basis", "Amplitude"],
            [(v.qubit_label, v.amplitude) for v in snapshot.values],
            title=f"[{snapshot.id}] {snapshot.label}",
        )

    if trace.probabilities:
        print_table(
            ["Outcome", "Probability"],
            [(p.basis_index, f"{p.probability:.6f}") for p in trace.probabilities],
            title="Probabilities",
        )

    echo("")
    if trace.is_collapsed:
        echo(f"Measured: {trace.measured_index}")
    else:
        echo("Measured: -")

    if trace.issues:
        echo(f"\nSkipped lines ({len(trace.issues)}):")
        for issue in trace.issues[:5]:
            echo(f"  - line {issue.line_number}: {issue.reason}: {issue.line!r}")
        if len(trace.issues) > 5:
            echo(f"  ... and {len(trace.issues) - 5} more")
