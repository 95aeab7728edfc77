# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Circuit construction.

models
    GateOp variants, :class:`EvaluationMode` and :class:`CircuitProgram`.

placement
    Conversion of editor widget records into GateOps.

serialization
    Circuit JSON documents to and from :class:`CircuitProgram`.
"""

from __future__ import annotations

from qubitverse.circuit.models import (
    CircuitProgram,
    ControlledGate,
    ControlledKind,
    EvaluationMode,
    GateOp,
    MeasureNth,
    SingleQubitGate,
    SwapGate,
)


__all__ = [
    "CircuitProgram",
    "ControlledGate",
    "ControlledKind",
    "EvaluationMode",
    "GateOp",
    "MeasureNth",
    "SingleQubitGate",
    "SwapGate",
]
