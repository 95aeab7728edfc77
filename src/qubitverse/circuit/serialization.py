# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Circuit documents.

A circuit document is the JSON form of a :class:`CircuitProgram`, with
each operation in the same key/value shape used on the wire::

    {
      "numQubits": 2,
      "gates": [
        {"type": "single", "gateType": "H", "qubit": 0, "theta": -1, "position": 120},
        {"type": "cnot", "control": 0, "target": 1, "position": 260}
      ]
    }

:func:`op_fields` defines the canonical field order for every op kind:
the type tag, then the kind's own fields, then ``position``.
"""

from __future__ import annotations

from typing import Any, Mapping

from qubitverse.circuit.models import (
    CircuitProgram,
    ControlledGate,
    GateOp,
    MeasureNth,
    SingleQubitGate,
    SwapGate,
    is_parametrized,
)
from qubitverse.errors import EncodeError


#: Wire value standing in for an absent ``theta``.
NO_THETA = -1


def op_fields(op: GateOp) -> list[tuple[str, Any]]:
    """
    Ordered wire fields of one operation.

    Parameters
    ----------
    op : GateOp
        Operation to describe.

    Returns
    -------
    list of (str, Any)
        ``(key, value)`` pairs in canonical order.
    """
    match op:
        case SingleQubitGate():
            theta = NO_THETA if op.theta is None else op.theta
            fields = [("gateType", op.gate_type), ("qubit", op.qubit), ("theta", theta)]
        case ControlledGate():
            fields = [("control", op.control), ("target", op.target)]
        case SwapGate():
            fields = [("qubitA", op.qubit_a), ("qubitB", op.qubit_b)]
        case MeasureNth():
            fields = [("qubit", op.qubit)]
        case _:
            raise EncodeError(f"Not a gate op: {op!r}")
    return [("type", op.wire_type), *fields, ("position", op.position)]


def _get(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    raise EncodeError(f"Gate is missing {keys[0]!r}: {dict(data)!r}")


def op_from_dict(data: Mapping[str, Any]) -> GateOp:
    """
    Build an operation from its document form.

    ``theta`` equal to ``-1`` (or missing) on a fixed gate means "no
    angle".  Swaps also accept the editor's ``qubit1``/``qubit2`` keys.

    Raises
    ------
    EncodeError
        If the type tag is unknown or a field is missing or invalid.
    """
    op_type = str(_get(data, "type")).lower()
    position = _get(data, "position")

    if op_type == "single":
        gate_type = _get(data, "gateType")
        theta = data.get("theta")
        if not is_parametrized(str(gate_type)) and theta == NO_THETA:
            theta = None
        return SingleQubitGate(
            gate_type=gate_type,
            qubit=_get(data, "qubit"),
            theta=theta,
            position=position,
        )
    if op_type in ("cnot", "cz"):
        return ControlledGate(
            kind=op_type,
            control=_get(data, "control"),
            target=_get(data, "target"),
            position=position,
        )
    if op_type == "swap":
        return SwapGate(
            qubit_a=_get(data, "qubitA", "qubit1"),
            qubit_b=_get(data, "qubitB", "qubit2"),
            position=position,
        )
    if op_type == "measurenth":
        return MeasureNth(qubit=_get(data, "qubit"), position=position)
    raise EncodeError(f"Unknown gate type tag: {data.get('type')!r}")


def program_from_dict(data: Mapping[str, Any]) -> CircuitProgram:
    """
    Load a circuit document.

    Gates may be listed in any order; they are sorted by position with
    ties kept in document order.
    """
    if not isinstance(data, Mapping):
        raise EncodeError("Circuit document must be a JSON object")
    num_qubits = _get(data, "numQubits")
    gates = data.get("gates", [])
    if not isinstance(gates, list):
        raise EncodeError("'gates' must be a list")
    return CircuitProgram.build(num_qubits, [op_from_dict(g) for g in gates])


def program_to_dict(program: CircuitProgram) -> dict[str, Any]:
    """Dump a program as a circuit document."""
    return {
        "numQubits": program.num_qubits,
        "gates": [dict(op_fields(op)) for op in program.ops],
    }
