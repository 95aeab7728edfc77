# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Editor placement records to gate operations.

The circuit editor keeps one list of widget records per gate family.
Single-qubit and measurement widgets only know their canvas coordinates,
so their qubit row is recovered from the vertical coordinate; two-qubit
widgets store their qubit indices directly.  The horizontal coordinate
becomes the operation ``position``.

Widget shapes
-------------
single / measure
    ``{"x": float, "y": float, "text": "H", "params": {"theta": float}}``
    (``params`` only on parametrized gates, ``text`` unused for measure)
cnot / cz
    ``{"x": float, "control": int, "target": int}``
swap
    ``{"x": float, "qubit1": int, "qubit2": int}``
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from qubitverse.circuit.models import (
    CircuitProgram,
    ControlledGate,
    ControlledKind,
    GateOp,
    MeasureNth,
    SingleQubitGate,
    SwapGate,
)
from qubitverse.errors import EncodeError


#: Side length of a single-qubit gate widget, in canvas units.
GATE_SIZE = 40

#: Vertical distance between qubit wires, in canvas units.
QUBIT_SPACING = 50


def qubit_from_y(
    y: float,
    *,
    gate_size: float = GATE_SIZE,
    spacing: float = QUBIT_SPACING,
) -> int:
    """
    Map a widget's top coordinate to its qubit row.

    Wire ``q`` is drawn at ``(q + 1) * spacing``; widgets are snapped so
    their centre sits on a wire.
    """
    # round half up, as the canvas snapping does
    return math.floor((y + gate_size / 2) / spacing + 0.5) - 1


def _field(record: Mapping[str, Any], key: str, family: str) -> Any:
    try:
        return record[key]
    except KeyError:
        raise EncodeError(f"{family} widget is missing {key!r}: {dict(record)!r}") from None


def _single(record: Mapping[str, Any]) -> SingleQubitGate:
    params = record.get("params") or {}
    theta = params.get("theta")
    return SingleQubitGate(
        gate_type=_field(record, "text", "single"),
        qubit=qubit_from_y(_field(record, "y", "single")),
        theta=theta,
        position=_field(record, "x", "single"),
    )


def ops_from_placements(
    gates: Iterable[Mapping[str, Any]] = (),
    cnot_gates: Iterable[Mapping[str, Any]] = (),
    cz_gates: Iterable[Mapping[str, Any]] = (),
    swap_gates: Iterable[Mapping[str, Any]] = (),
    measure_gates: Iterable[Mapping[str, Any]] = (),
) -> list[GateOp]:
    """
    Convert editor widget lists into gate operations.

    The result is in creation order (families concatenated in the
    argument order); :meth:`CircuitProgram.build` establishes temporal
    order from it.

    Raises
    ------
    EncodeError
        If a widget lacks a required field or describes an invalid gate.
    """
    ops: list[GateOp] = [_single(g) for g in gates]
    for kind, family in ((ControlledKind.CNOT, cnot_gates), (ControlledKind.CZ, cz_gates)):
        ops.extend(
            ControlledGate(
                kind=kind,
                control=_field(g, "control", kind.value),
                target=_field(g, "target", kind.value),
                position=_field(g, "x", kind.value),
            )
            for g in family
        )
    ops.extend(
        SwapGate(
            qubit_a=_field(g, "qubit1", "swap"),
            qubit_b=_field(g, "qubit2", "swap"),
            position=_field(g, "x", "swap"),
        )
        for g in swap_gates
    )
    ops.extend(
        MeasureNth(
            qubit=qubit_from_y(_field(g, "y", "measure")),
            position=_field(g, "x", "measure"),
        )
        for g in measure_gates
    )
    return ops


def program_from_placements(
    num_qubits: int,
    gates: Iterable[Mapping[str, Any]] = (),
    cnot_gates: Iterable[Mapping[str, Any]] = (),
    cz_gates: Iterable[Mapping[str, Any]] = (),
    swap_gates: Iterable[Mapping[str, Any]] = (),
    measure_gates: Iterable[Mapping[str, Any]] = (),
) -> CircuitProgram:
    """Snapshot the editor state into a validated :class:`CircuitProgram`."""
    ops = ops_from_placements(gates, cnot_gates, cz_gates, swap_gates, measure_gates)
    return CircuitProgram.build(num_qubits, ops)
