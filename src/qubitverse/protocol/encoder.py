# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Circuit encoder.

Serializes a :class:`~qubitverse.circuit.models.CircuitProgram` into the
line-oriented command text read by the simulator::

    <mode>n:<numQubits>
    type:single
    gateType:H
    qubit:0
    theta:-1
    position:120
    @

One ``key:value`` line per field, each operation closed by ``@``.  The
program's op order is emitted as-is; ordering is established when the
program is built.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal

from qubitverse.circuit.models import CircuitProgram, EvaluationMode
from qubitverse.circuit.serialization import op_fields


logger = logging.getLogger(__name__)

#: Line closing each operation block.
OP_TERMINATOR = "@"


def format_number(value: float) -> str:
    """
    Render a number the way the simulator lexer reads it.

    Integral values drop the fractional part (``120.0`` -> ``120``);
    other values use the shortest round-trip digits, never an exponent.
    """
    if isinstance(value, int):
        return str(value)
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)) and math.isfinite(value):
        return format_number(value)
    return str(value)


def encode_header(num_qubits: int, mode: EvaluationMode) -> str:
    """Directive line selecting the evaluation mode and register size."""
    return f"{int(mode)}n:{num_qubits}"


def encode(program: CircuitProgram, mode: EvaluationMode = EvaluationMode.AMPLITUDES) -> str:
    """
    Encode a program as simulator command text.

    Parameters
    ----------
    program : CircuitProgram
        Validated, position-ordered circuit.
    mode : EvaluationMode, optional
        Requested simulator behavior. Default is amplitudes.

    Returns
    -------
    str
        Newline-terminated command text.  Encoding the same program
        twice yields identical text.
    """
    mode = EvaluationMode.parse(mode)
    lines = [encode_header(program.num_qubits, mode)]
    for op in program.ops:
        lines.extend(f"{key}:{_format_value(value)}" for key, value in op_fields(op))
        lines.append(OP_TERMINATOR)

    text = "\n".join(lines) + "\n"
    logger.debug(
        "Encoded %d op(s) on %d qubit(s) in %s mode (%d bytes)",
        len(program.ops),
        program.num_qubits,
        mode.name.lower(),
        len(text),
    )
    return text
