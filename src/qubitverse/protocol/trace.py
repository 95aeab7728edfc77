# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Decoded execution trace types.

An :class:`ExecutionTrace` is what the graph and chart renderers consume:
a linear chain of :class:`StateSnapshot` nodes, the final probability
table and, when the register was measured, the collapsed outcome.
Every type here is immutable; a new trace is built per response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


#: Snapshot labels for the fixed record kinds.
INITIAL_STATE_LABEL = "Initial State"
MEASURING_LABEL = "Measuring the Qubit"
MEASURED_STATE_LABEL = "Measured State"

#: Amplitude texts used for the one-hot collapsed state.
ONE_AMPLITUDE = "(1,0)"
ZERO_AMPLITUDE = "(0,0)"


def gate_label(gate_name: str) -> str:
    """Snapshot label for the state after applying ``gate_name``."""
    return f"Applying {gate_name.upper()} Gate"


def basis_label(index: int) -> str:
    """Render a basis index as ``"<index>: |<binary>〉"``."""
    return f"{index}: |{index:b}〉"


@dataclass(frozen=True, slots=True)
class AmplitudeEntry:
    """
    One basis-state amplitude inside a snapshot.

    Attributes
    ----------
    basis_index : int
        Decimal index of the basis state.
    amplitude : str
        Amplitude token exactly as printed by the simulator, e.g.
        ``"(0.707107,0)"``.
    """

    basis_index: int
    amplitude: str

    @property
    def qubit_label(self) -> str:
        """Display label, e.g. ``"2: |10〉"``."""
        return basis_label(self.basis_index)

    def to_dict(self) -> dict[str, Any]:
        return {"qubit": self.qubit_label, "value": self.amplitude}


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """
    Labeled register state at one step of execution.

    Attributes
    ----------
    id : int
        1-based position in the chain.
    label : str
        Step description ("Initial State", "Applying H Gate", ...).
    values : tuple of AmplitudeEntry
        Amplitudes in the order the simulator listed them.
    """

    id: int
    label: str
    values: tuple[AmplitudeEntry, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "values": [v.to_dict() for v in self.values],
        }


@dataclass(frozen=True, slots=True)
class ProbabilityEntry:
    """Probability of one computational-basis outcome."""

    basis_index: int
    probability: float

    def to_dict(self) -> dict[str, Any]:
        return {"name": str(self.basis_index), "value": self.probability}


@dataclass(frozen=True, slots=True)
class Edge:
    """Directed link between consecutive snapshots."""

    source: int
    target: int

    def to_dict(self) -> dict[str, int]:
        return {"from": self.source, "to": self.target}


@dataclass(frozen=True, slots=True)
class DecodeIssue:
    """
    Response line skipped during lenient decoding.

    Attributes
    ----------
    line_number : int
        1-based line number.
    line : str
        Skipped line content.
    reason : str
        Why the line was rejected.
    """

    line_number: int
    line: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"line": self.line_number, "content": self.line, "reason": self.reason}


@dataclass(frozen=True)
class ExecutionTrace:
    """
    Renderable result of one evaluation.

    Attributes
    ----------
    snapshots : tuple of StateSnapshot
        State chain with ids ``1..N``.
    edges : tuple of Edge
        ``(k, k+1)`` for every consecutive snapshot pair.
    probabilities : tuple of ProbabilityEntry
        Final outcome probabilities.
    measured_index : int or None
        Collapsed outcome, ``None`` when the register was not measured.
    issues : tuple of DecodeIssue
        Lines skipped while decoding.
    """

    snapshots: tuple[StateSnapshot, ...] = ()
    edges: tuple[Edge, ...] = ()
    probabilities: tuple[ProbabilityEntry, ...] = ()
    measured_index: int | None = None
    issues: tuple[DecodeIssue, ...] = field(default=(), compare=False)

    @property
    def is_collapsed(self) -> bool:
        """True if the trace ends in a measured, collapsed state."""
        return self.measured_index is not None

    @property
    def is_empty(self) -> bool:
        return not (self.snapshots or self.probabilities or self.is_collapsed)

    def to_dict(self) -> dict[str, Any]:
        """
        JSON-ready form for the renderers.

        ``measuredIndex`` is ``None`` (JSON ``null``) when absent.
        """
        return {
            "snapshots": [s.to_dict() for s in self.snapshots],
            "edges": [e.to_dict() for e in self.edges],
            "probabilities": [p.to_dict() for p in self.probabilities],
            "measuredIndex": self.measured_index,
            "isCollapsed": self.is_collapsed,
            "issues": [i.to_dict() for i in self.issues],
        }


def chain_edges(count: int) -> tuple[Edge, ...]:
    """Linear chain ``1 -> 2 -> ... -> count``."""
    return tuple(Edge(k, k + 1) for k in range(1, count))
