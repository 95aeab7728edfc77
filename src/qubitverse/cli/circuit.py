# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Circuit CLI commands.

Commands
--------
encode
    Encode a circuit document as simulator command text.
decode
    Decode simulator response text into a trace.
run
    Encode, evaluate on the simulator, and decode in one step.
"""

from __future__ import annotations

import shlex
from dataclasses import replace
from pathlib import Path
from typing import TextIO

import click
from qubitverse.circuit.models import EvaluationMode
from qubitverse.cli._utils import config_from_ctx, echo, load_program, print_json, print_trace
from qubitverse.errors import ConfigError, DecodeError, TransportError


_MODES = [m.name.lower() for m in EvaluationMode]


def register(cli: click.Group) -> None:
    """Register circuit commands with CLI."""
    cli.add_command(encode_cmd)
    cli.add_command(decode_cmd)
    cli.add_command(run_cmd)


mode_option = click.option(
    "--mode",
    "-m",
    type=click.Choice(_MODES),
    default="amplitudes",
    show_default=True,
    help="Requested simulator behavior.",
)

format_option = click.option(
    "--format",
    "fmt",
    type=click.Choice(["pretty", "json"]),
    default="pretty",
    help="Output format.",
)


@click.command("encode")
@click.argument("circuit", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@mode_option
@click.option(
    "--output", "-o", type=click.Path(path_type=Path), help="Write command text to file."
)
def encode_cmd(circuit: Path, mode: str, output: Path | None) -> None:
    """
    Encode a circuit document as simulator command text.

    CIRCUIT is a JSON file of the form {"numQubits": N, "gates": [...]}.

    Examples:
        qubitverse encode bell.json
        qubitverse encode bell.json --mode measure -o bell.txt
    """
    from qubitverse.protocol.encoder import encode

    program = load_program(circuit)
    text = encode(program, EvaluationMode.parse(mode))

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        echo(f"Wrote {len(program)} op(s) to {output}")
    else:
        click.echo(text, nl=False)


@click.command("decode")
@click.argument("response", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--num-qubits", "-n", type=click.IntRange(min=1), default=None,
              help="Register size, enables basis index range checks.")
@click.option(
    "--strict/--lenient",
    default=None,
    help="Fail on unrecognized lines (default from config).",
)
@format_option
@click.pass_context
def decode_cmd(
    ctx: click.Context,
    response: TextIO,
    num_qubits: int | None,
    strict: bool | None,
    fmt: str,
) -> None:
    """
    Decode simulator response text.

    RESPONSE is a file holding the simulator output, or - for stdin.

    Examples:
        qubitverse decode out.txt
        simulator < bell.txt | qubitverse decode --format json
    """
    from qubitverse.protocol.decoder import decode

    if strict is None:
        strict = config_from_ctx(ctx).strict_decode

    try:
        trace = decode(response.read(), strict=strict, num_qubits=num_qubits)
    except DecodeError as e:
        raise click.ClickException(f"Decode failed: {e}") from e

    if fmt == "json":
        print_json(trace.to_dict())
    else:
        print_trace(trace)


@click.command("run")
@click.argument("circuit", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@mode_option
@click.option(
    "--transport",
    type=click.Choice(["process", "http"]),
    default=None,
    help="Override the configured transport.",
)
@click.option("--url", default=None, help="Simulator URL (implies --transport http).")
@click.option("--command", "command", default=None,
              help="Simulator command line (implies --transport process).")
@click.option(
    "--strict/--lenient",
    default=None,
    help="Fail on unrecognized lines (default from config).",
)
@click.option("--raw", is_flag=True, help="Print the raw simulator response instead.")
@format_option
@click.pass_context
def run_cmd(
    ctx: click.Context,
    circuit: Path,
    mode: str,
    transport: str | None,
    url: str | None,
    command: str | None,
    strict: bool | None,
    raw: bool,
    fmt: str,
) -> None:
    """
    Evaluate a circuit on the simulator and show the decoded trace.

    Examples:
        qubitverse run bell.json
        qubitverse run bell.json --mode measure --url http://localhost:5000/encode
        qubitverse run bell.json --command "./simulator" --format json
    """
    from qubitverse.session import EvaluationSession
    from qubitverse.transport import create_transport

    config = config_from_ctx(ctx)
    overrides: dict[str, object] = {}
    if url:
        overrides.update(transport="http", simulator_url=url)
    if command:
        overrides.update(transport="process", simulator_command=tuple(shlex.split(command)))
    if transport:
        overrides["transport"] = transport
    if strict is not None:
        overrides["strict_decode"] = strict
    try:
        config = replace(config, **overrides)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    program = load_program(circuit)

    with EvaluationSession(create_transport(config), strict=config.strict_decode) as session:
        try:
            outcome = session.submit(program, EvaluationMode.parse(mode))
        except TransportError as e:
            raise click.ClickException(f"Simulator request failed: {e}") from e

    if raw:
        click.echo(outcome.response_text, nl=False)
        return
    if outcome.trace is None:
        raise click.ClickException(f"Decode failed: {outcome.error}")

    if fmt == "json":
        print_json(outcome.trace.to_dict())
    else:
        print_trace(outcome.trace)

