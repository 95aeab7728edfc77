# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Circuit data models.

A circuit is a :class:`CircuitProgram`: a qubit count plus an ordered
sequence of gate operations.  Every operation is one of four frozen
variants, together forming the :data:`GateOp` union:

- :class:`SingleQubitGate` - named one-qubit gate, optionally parametrized
- :class:`ControlledGate` - CNOT or CZ on a control/target pair
- :class:`SwapGate` - exchange of two qubits
- :class:`MeasureNth` - mid-circuit measurement of one qubit

Each operation carries a ``position``: the horizontal coordinate of the
widget in the editor.  It has no geometric meaning and is only used to
establish temporal order.

Examples
--------
>>> from qubitverse.circuit.models import CircuitProgram, ControlledGate, SingleQubitGate
>>> program = CircuitProgram.build(
...     2,
...     [
...         ControlledGate("CNOT", control=0, target=1, position=260),
...         SingleQubitGate("H", qubit=0, position=120),
...     ],
... )
>>> [op.position for op in program.ops]
[120, 260]
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar, Iterable, Union

from qubitverse.errors import EncodeError


# =============================================================================
# Enums
# =============================================================================


class EvaluationMode(IntEnum):
    """
    Simulator behavior requested for one evaluation.

    The mode only changes the leading directive line of the encoded
    circuit, never the encoding of the operations.
    """

    AMPLITUDES = 0
    PROBABILITIES = 1
    MEASURE = 2

    @classmethod
    def parse(cls, value: str | int | EvaluationMode) -> EvaluationMode:
        """
        Resolve a mode from its name or numeric value.

        Parameters
        ----------
        value : str, int or EvaluationMode
            ``"amplitudes"``, ``"probabilities"``, ``"measure"`` (any
            case), or the wire digit ``0``/``1``/``2``.

        Raises
        ------
        EncodeError
            If the value names no mode.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                value = int(text)
            else:
                try:
                    return cls[text.upper()]
                except KeyError:
                    raise EncodeError(f"Unknown evaluation mode: {value!r}") from None
        try:
            return cls(value)
        except ValueError:
            raise EncodeError(f"Unknown evaluation mode: {value!r}") from None


class ControlledKind(str, Enum):
    """Two-qubit controlled gate kinds."""

    CNOT = "cnot"
    CZ = "cz"


# =============================================================================
# Gate vocabulary
# =============================================================================

#: Gates applied without a rotation angle.
FIXED_GATES: frozenset[str] = frozenset({"i", "x", "y", "z", "h", "s", "t"})

#: Gates that require a ``theta`` angle.
PARAMETRIZED_GATES: frozenset[str] = frozenset({"p", "rx", "ry", "rz"})


def is_parametrized(gate_type: str) -> bool:
    """Check whether a gate name requires a ``theta`` angle."""
    return gate_type.lower() in PARAMETRIZED_GATES


def _check_qubit(value: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise EncodeError(f"{name} must be non-negative, got {value}")


def _check_real(value: float, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EncodeError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise EncodeError(f"{name} must be finite, got {value!r}")


# =============================================================================
# Gate operations
# =============================================================================


@dataclass(frozen=True, slots=True)
class SingleQubitGate:
    """
    Named one-qubit gate.

    Parameters
    ----------
    gate_type : str
        Gate name as shown in the editor (``"H"``, ``"Rx"``, ...).
    qubit : int
        Target qubit.
    theta : float, optional
        Rotation angle; present exactly when the gate is parametrized
        (``P``, ``Rx``, ``Ry``, ``Rz``).
    position : float
        Temporal ordering key.
    """

    wire_type: ClassVar[str] = "single"

    gate_type: str
    qubit: int
    theta: float | None = None
    position: float = 0

    def __post_init__(self) -> None:
        name = self.gate_type.lower() if isinstance(self.gate_type, str) else ""
        if name not in FIXED_GATES and name not in PARAMETRIZED_GATES:
            raise EncodeError(f"Unknown gate type: {self.gate_type!r}")
        _check_qubit(self.qubit, "qubit")
        _check_real(self.position, "position")
        if name in PARAMETRIZED_GATES:
            if self.theta is None:
                raise EncodeError(f"Gate {self.gate_type} requires theta")
            _check_real(self.theta, "theta")
        elif self.theta is not None:
            raise EncodeError(f"Gate {self.gate_type} does not take theta")

    @property
    def qubits(self) -> tuple[int, ...]:
        """Qubits touched by this operation."""
        return (self.qubit,)


@dataclass(frozen=True, slots=True)
class ControlledGate:
    """
    CNOT or CZ gate.

    Parameters
    ----------
    kind : ControlledKind or str
        ``CNOT`` or ``CZ`` (case-insensitive).
    control : int
        Control qubit.
    target : int
        Target qubit, distinct from ``control``.
    position : float
        Temporal ordering key.
    """

    kind: ControlledKind
    control: int
    target: int
    position: float = 0

    def __post_init__(self) -> None:
        try:
            kind = ControlledKind(str(getattr(self.kind, "value", self.kind)).lower())
        except ValueError:
            raise EncodeError(f"Unknown controlled gate: {self.kind!r}") from None
        object.__setattr__(self, "kind", kind)
        _check_qubit(self.control, "control")
        _check_qubit(self.target, "target")
        _check_real(self.position, "position")
        if self.control == self.target:
            raise EncodeError(
                f"{kind.name} control and target must differ (both {self.control})"
            )

    @property
    def wire_type(self) -> str:
        return self.kind.value

    @property
    def qubits(self) -> tuple[int, ...]:
        """Qubits touched by this operation."""
        return (self.control, self.target)


@dataclass(frozen=True, slots=True)
class SwapGate:
    """Exchange of two distinct qubits."""

    wire_type: ClassVar[str] = "swap"

    qubit_a: int
    qubit_b: int
    position: float = 0

    def __post_init__(self) -> None:
        _check_qubit(self.qubit_a, "qubitA")
        _check_qubit(self.qubit_b, "qubitB")
        _check_real(self.position, "position")
        if self.qubit_a == self.qubit_b:
            raise EncodeError(f"SWAP qubits must differ (both {self.qubit_a})")

    @property
    def qubits(self) -> tuple[int, ...]:
        """Qubits touched by this operation."""
        return (self.qubit_a, self.qubit_b)


@dataclass(frozen=True, slots=True)
class MeasureNth:
    """Mid-circuit measurement of a single qubit."""

    wire_type: ClassVar[str] = "measurenth"

    qubit: int
    position: float = 0

    def __post_init__(self) -> None:
        _check_qubit(self.qubit, "qubit")
        _check_real(self.position, "position")

    @property
    def qubits(self) -> tuple[int, ...]:
        """Qubits touched by this operation."""
        return (self.qubit,)


GateOp = Union[SingleQubitGate, ControlledGate, SwapGate, MeasureNth]


# =============================================================================
# Program
# =============================================================================


@dataclass(frozen=True)
class CircuitProgram:
    """
    Validated, position-ordered circuit.

    Construct with :meth:`build` to have operations sorted; direct
    construction requires ``ops`` to already be in ascending position
    order.

    Parameters
    ----------
    num_qubits : int
        Register size, at least 1.
    ops : tuple of GateOp
        Operations in temporal order.

    Raises
    ------
    EncodeError
        If the register is empty, an operation addresses a qubit outside
        the register, or ``ops`` is not sorted by position.
    """

    num_qubits: int
    ops: tuple[GateOp, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.num_qubits, bool) or not isinstance(self.num_qubits, int):
            raise EncodeError(f"num_qubits must be an integer, got {self.num_qubits!r}")
        if self.num_qubits < 1:
            raise EncodeError(f"num_qubits must be at least 1, got {self.num_qubits}")
        object.__setattr__(self, "ops", tuple(self.ops))

        previous = -math.inf
        for index, op in enumerate(self.ops):
            if not isinstance(op, (SingleQubitGate, ControlledGate, SwapGate, MeasureNth)):
                raise EncodeError(f"Operation {index} is not a gate op: {op!r}")
            for qubit in op.qubits:
                if qubit >= self.num_qubits:
                    raise EncodeError(
                        f"Operation {index} addresses qubit {qubit} "
                        f"but the register has {self.num_qubits} qubit(s)"
                    )
            if op.position < previous:
                raise EncodeError(
                    f"Operation {index} at position {op.position} is out of order"
                )
            previous = op.position

    @classmethod
    def build(cls, num_qubits: int, ops: Iterable[GateOp]) -> CircuitProgram:
        """
        Create a program from operations in creation order.

        Operations are sorted ascending by ``position``; ties keep their
        creation order.
        """
        return cls(num_qubits=num_qubits, ops=tuple(sorted(ops, key=_position_key)))

    def ops_on_qubit(self, qubit: int) -> tuple[GateOp, ...]:
        """Execution order of the operations touching ``qubit``."""
        return tuple(op for op in self.ops if qubit in op.qubits)

    def __len__(self) -> int:
        return len(self.ops)


def _position_key(op: GateOp) -> float:
    return op.position
