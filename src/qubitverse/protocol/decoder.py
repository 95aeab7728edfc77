# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Simulator response decoder.

The simulator answers with a sequence of records, each introduced by a
marker line and, for most kinds, followed by a body of ``key=value``
lines:

=============  ==========================================  ============
Marker         Record                                      Body
=============  ==========================================  ============
``+``          snapshot "Initial State"                    amplitudes
``measureNth`` snapshot "Measuring the Qubit"              amplitudes
gate name      snapshot "Applying <NAME> Gate"             amplitudes
``prob``       probability table                           probabilities
``measure``    collapsed outcome                           one integer
=============  ==========================================  ============

A gate name is any other line made only of letters and spaces.  A body
ends at the first blank line, marker or gate-name line.  Body lines are
``<basis index>=<value>``.

Lines matching none of these shapes are :class:`ProtocolSyntaxError`
candidates.  In lenient mode (the default) they are skipped and kept as
:class:`~qubitverse.protocol.trace.DecodeIssue` entries on the trace; in
strict mode the first one is raised.  An unrecognized line shaped like
a record header (``U3``, ``Rx(0.5)``) closes the open body, and the
body that follows it is dropped with it.  A body line repeating a basis
index already seen in the same record is rejected the same way.  A
``measure`` marker without a valid index on the next line is always an
error.

Examples
--------
>>> trace = decode("+\\n0=(1,0)\\n1=(0,0)\\nmeasure\\n0\\n")
>>> [s.label for s in trace.snapshots]
['Initial State', 'Measured State']
>>> trace.measured_index
0
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from enum import Enum, auto

from qubitverse.errors import IndexOutOfRangeError, ProtocolSyntaxError
from qubitverse.protocol.trace import (
    INITIAL_STATE_LABEL,
    MEASURED_STATE_LABEL,
    MEASURING_LABEL,
    ONE_AMPLITUDE,
    ZERO_AMPLITUDE,
    AmplitudeEntry,
    DecodeIssue,
    ExecutionTrace,
    ProbabilityEntry,
    StateSnapshot,
    chain_edges,
    gate_label,
)


logger = logging.getLogger(__name__)


INITIAL_MARKER = "+"
MEASURE_NTH_MARKER = "measureNth"
PROB_MARKER = "prob"
MEASURE_MARKER = "measure"

_BODY_LINE = re.compile(r"^\s*(\d+)\s*=\s*(\S.*?)\s*$")
_NAME_LINE = re.compile(r"^[ a-zA-Z]+$")
_INDEX_LINE = re.compile(r"^\s*(\d+)\s*$")
#: Unrecognized lines shaped like a record header, e.g. ``U3`` or ``Rx(0.5)``.
_RECORD_LINE = re.compile(r"^\s*[A-Za-z][^=]*$")


class LineKind(Enum):
    """Classification of one response line."""

    BLANK = auto()
    INITIAL = auto()
    MEASURE_NTH = auto()
    PROB = auto()
    MEASURE = auto()
    GATE = auto()
    BODY = auto()
    UNKNOWN = auto()


_MARKERS = {
    INITIAL_MARKER: LineKind.INITIAL,
    MEASURE_NTH_MARKER: LineKind.MEASURE_NTH,
    PROB_MARKER: LineKind.PROB,
    MEASURE_MARKER: LineKind.MEASURE,
}

#: Kinds that close an open body.
_TERMINATORS = frozenset(
    {
        LineKind.BLANK,
        LineKind.INITIAL,
        LineKind.MEASURE_NTH,
        LineKind.PROB,
        LineKind.MEASURE,
        LineKind.GATE,
    }
)


def classify(line: str) -> LineKind:
    """Classify a single response line."""
    if not line.strip():
        return LineKind.BLANK
    marker = _MARKERS.get(line.strip())
    if marker is not None:
        return marker
    if _NAME_LINE.match(line):
        return LineKind.GATE
    if _BODY_LINE.match(line):
        return LineKind.BODY
    return LineKind.UNKNOWN


def is_unknown_record(line: str) -> bool:
    """True for an unrecognized line that opens a record of its own."""
    return classify(line) is LineKind.UNKNOWN and _RECORD_LINE.match(line) is not None


@dataclass
class _Scan:
    """Per-call cursor state."""

    lines: list[str]
    strict: bool
    pos: int = 0
    issues: list[DecodeIssue] = field(default_factory=list)

    def current(self) -> str:
        return self.lines[self.pos]

    def at_end(self) -> bool:
        return self.pos >= len(self.lines)

    def reject(self, reason: str, index: int | None = None) -> None:
        """Record (or raise, in strict mode) a line, by default the current one."""
        index = self.pos if index is None else index
        line_number = index + 1
        line = self.lines[index]
        if self.strict:
            raise ProtocolSyntaxError(line_number, line, reason)
        logger.warning("Skipping response line %d (%s): %r", line_number, reason, line)
        self.issues.append(DecodeIssue(line_number, line, reason))

    def body(self) -> list[tuple[int, int, str]]:
        """
        Consume ``key=value`` lines up to the next terminator.

        Returns ``(line index, key, value)`` triples.
        """
        pairs: list[tuple[int, int, str]] = []
        seen: set[int] = set()
        while not self.at_end():
            kind = classify(self.current())
            if kind in _TERMINATORS or is_unknown_record(self.current()):
                break
            if kind is LineKind.BODY:
                match = _BODY_LINE.match(self.current())
                key = int(match.group(1))
                if key in seen:
                    self.reject(f"duplicate basis index {key}")
                else:
                    seen.add(key)
                    pairs.append((self.pos, key, match.group(2)))
            else:
                self.reject("malformed body line")
            self.pos += 1
        return pairs


class TraceDecoder:
    """
    Decoder from response text to :class:`ExecutionTrace`.

    Parameters
    ----------
    strict : bool, optional
        Raise on the first unrecognized line instead of skipping it.
        Default is False.
    num_qubits : int, optional
        Register size of the evaluated circuit.  When given, amplitude and
        probability keys must address one of the ``2**num_qubits`` basis states.
    """

    def __init__(self, *, strict: bool = False, num_qubits: int | None = None) -> None:
        self.strict = strict
        self.num_qubits = num_qubits

    def decode(self, text: str) -> ExecutionTrace:
        """
        Decode one simulator response.

        Raises
        ------
        ProtocolSyntaxError
            If a ``measure`` record has no valid index, or in strict mode
            on any unrecognized line.
        IndexOutOfRangeError
            If the measured index addresses no probability or amplitude,
            or an amplitude or probability key exceeds the register.
        """
        scan = _Scan(lines=text.splitlines(), strict=self.strict)
        snapshots: list[StateSnapshot] = []
        probabilities: list[ProbabilityEntry] = []
        measured: int | None = None

        while not scan.at_end():
            line = scan.current()
            kind = classify(line)

            if kind is LineKind.BLANK:
                scan.pos += 1
            elif kind in (LineKind.INITIAL, LineKind.MEASURE_NTH, LineKind.GATE):
                label = _snapshot_label(kind, line)
                scan.pos += 1
                values = self._amplitudes(scan)
                snapshots.append(StateSnapshot(len(snapshots) + 1, label, values))
            elif kind is LineKind.PROB:
                scan.pos += 1
                probabilities.extend(self._probabilities(scan))
            elif kind is LineKind.MEASURE:
                if measured is not None:
                    logger.warning("Response holds more than one measure record; keeping the last")
                measured = self._measured_index(scan)
            elif is_unknown_record(line):
                scan.reject("unrecognized record")
                scan.pos += 1
                marker_line = scan.pos
                dropped = scan.body()
                logger.debug("Dropped %d body line(s) after line %d", len(dropped), marker_line)
            else:
                scan.reject("unexpected line outside a record")
                scan.pos += 1

        trace_snapshots = tuple(snapshots)
        trace_probabilities = tuple(probabilities)
        if measured is not None:
            trace_snapshots, trace_probabilities = collapse(
                trace_snapshots, trace_probabilities, measured
            )

        logger.debug(
            "Decoded %d snapshot(s), %d probability entr(ies), measured=%s, %d issue(s)",
            len(trace_snapshots),
            len(trace_probabilities),
            measured,
            len(scan.issues),
        )
        return ExecutionTrace(
            snapshots=trace_snapshots,
            edges=chain_edges(len(trace_snapshots)),
            probabilities=trace_probabilities,
            measured_index=measured,
            issues=tuple(scan.issues),
        )

    def _amplitudes(self, scan: _Scan) -> tuple[AmplitudeEntry, ...]:
        entries = []
        for _, key, value in scan.body():
            if self.num_qubits is not None and key >= 2**self.num_qubits:
                raise IndexOutOfRangeError(key, 2**self.num_qubits, "basis states")
            entries.append(AmplitudeEntry(key, value))
        return tuple(entries)

    def _probabilities(self, scan: _Scan) -> list[ProbabilityEntry]:
        entries = []
        for index, key, value in scan.body():
            if self.num_qubits is not None and key >= 2**self.num_qubits:
                raise IndexOutOfRangeError(key, 2**self.num_qubits, "basis states")
            try:
                probability = float(value)
            except ValueError:
                scan.reject("probability is not a number", index)
                continue
            if not math.isfinite(probability):
                scan.reject("probability is not finite", index)
                continue
            entries.append(ProbabilityEntry(key, probability))
        return entries

    @staticmethod
    def _measured_index(scan: _Scan) -> int:
        marker_line = scan.pos + 1
        scan.pos += 1
        if scan.at_end():
            raise ProtocolSyntaxError(marker_line, MEASURE_MARKER, "measure record has no index")
        match = _INDEX_LINE.match(scan.current())
        if match is None:
            raise ProtocolSyntaxError(
                scan.pos + 1, scan.current(), "measure index is not a non-negative integer"
            )
        scan.pos += 1
        return int(match.group(1))


def _snapshot_label(kind: LineKind, line: str) -> str:
    if kind is LineKind.INITIAL:
        return INITIAL_STATE_LABEL
    if kind is LineKind.MEASURE_NTH:
        return MEASURING_LABEL
    return gate_label(line.strip())


def collapse(
    snapshots: tuple[StateSnapshot, ...],
    probabilities: tuple[ProbabilityEntry, ...],
    measured: int,
) -> tuple[tuple[StateSnapshot, ...], tuple[ProbabilityEntry, ...]]:
    """
    Apply measurement collapse.

    All probability mass moves to position ``measured``, and a one-hot
    "Measured State" snapshot, shaped like the first snapshot, is
    appended.  Without a probability table, one is derived from the
    first snapshot's basis indices.

    Raises
    ------
    IndexOutOfRangeError
        If ``measured`` addresses no probability entry or no amplitude of
        the first snapshot.
    """
    if probabilities and measured >= len(probabilities):
        raise IndexOutOfRangeError(measured, len(probabilities), "probabilities")
    first = snapshots[0].values if snapshots else ()
    if measured >= len(first):
        raise IndexOutOfRangeError(measured, len(first), "initial state amplitudes")

    if not probabilities:
        probabilities = tuple(ProbabilityEntry(v.basis_index, 0.0) for v in first)
    collapsed_probabilities = tuple(
        ProbabilityEntry(p.basis_index, 1.0 if k == measured else 0.0)
        for k, p in enumerate(probabilities)
    )
    values = tuple(
        AmplitudeEntry(v.basis_index, ONE_AMPLITUDE if k == measured else ZERO_AMPLITUDE)
        for k, v in enumerate(first)
    )
    measured_state = StateSnapshot(len(snapshots) + 1, MEASURED_STATE_LABEL, values)
    return snapshots + (measured_state,), collapsed_probabilities


def decode(
    text: str,
    *,
    strict: bool = False,
    num_qubits: int | None = None,
) -> ExecutionTrace:
    """
    Decode simulator response text.

    Shorthand for ``TraceDecoder(strict=..., num_qubits=...).decode(text)``.
    ``decode("")`` returns an empty, unmeasured trace.
    """
    return TraceDecoder(strict=strict, num_qubits=num_qubits).decode(text)
