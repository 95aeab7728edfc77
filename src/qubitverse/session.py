# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Evaluation session.

An :class:`EvaluationSession` runs the round trip
"program -> encode -> transport -> decode -> publish" for one user
action at a time and holds the trace currently shown to the user.

Request Policy
--------------
Every :meth:`EvaluationSession.submit` call takes a sequence number from
a monotonically increasing counter before any I/O.  When a request
finishes, successfully or not, its number raises the session's
high-water mark.  A decoded response is published only if no newer
request has finished by then; otherwise it is stale and discarded.
Concurrent submissions therefore publish in request order
(last-requested wins), regardless of the order responses arrive in,
and a newer request that fails in transport still supersedes older
responses still in flight.

Published State
---------------
- :attr:`TraceState.EMPTY` - no trace yet
- :attr:`TraceState.READY` - a trace is present (``measured_index`` may
  still be ``None``)
- :attr:`TraceState.FAILED` - the last published response did not decode

Examples
--------
>>> from qubitverse.session import EvaluationSession
>>> with EvaluationSession(transport) as session:
...     outcome = session.submit(program, EvaluationMode.MEASURE)
...     session.history.frequencies()
[(3, 1)]
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any

from qubitverse.circuit.models import CircuitProgram, EvaluationMode
from qubitverse.errors import DecodeError
from qubitverse.protocol.decoder import TraceDecoder
from qubitverse.protocol.encoder import encode
from qubitverse.protocol.trace import ExecutionTrace
from qubitverse.transport.base import Transport


logger = logging.getLogger(__name__)


class TraceState(str, Enum):
    """What the session currently has to show."""

    EMPTY = "empty"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class EvaluationOutcome:
    """
    Result of one submission.

    Attributes
    ----------
    sequence : int
        Request sequence number, starting at 1.
    mode : EvaluationMode
        Requested evaluation mode.
    response_text : str
        Raw simulator response.
    trace : ExecutionTrace or None
        Decoded trace, ``None`` if decoding failed.
    error : DecodeError or None
        Decode failure, if any.
    stale : bool
        True if a newer request had already finished, so this outcome
        was not published.
    """

    sequence: int
    mode: EvaluationMode
    response_text: str
    trace: ExecutionTrace | None = None
    error: DecodeError | None = None
    stale: bool = False

    @property
    def ok(self) -> bool:
        return self.trace is not None


class MeasurementHistory:
    """
    Collapsed outcomes of successive measurements.

    Thread-safe; the session appends one value per published collapsed
    trace.
    """

    def __init__(self) -> None:
        self._values: list[int] = []
        self._lock = threading.Lock()

    def record(self, value: int) -> None:
        with self._lock:
            self._values.append(value)

    def values(self) -> list[int]:
        with self._lock:
            return list(self._values)

    def frequencies(self) -> list[tuple[int, int]]:
        """``(outcome, count)`` pairs in first-seen order."""
        with self._lock:
            return list(Counter(self._values).items())

    def clear(self) -> None:
        with self._lock:
            self._values.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)


class EvaluationSession:
    """
    Submit circuits and keep the latest published trace.

    Parameters
    ----------
    transport : Transport
        Channel to the simulator.  The session does not close it unless
        used as a context manager.
    strict : bool, optional
        Decode strictly (raise on unrecognized lines). Default is False.
    """

    def __init__(self, transport: Transport, *, strict: bool = False) -> None:
        self.transport = transport
        self.strict = strict
        self.history = MeasurementHistory()

        self._counter = itertools.count(1)
        self._lock = threading.Lock()
        self._published_sequence = 0
        self._finished_sequence = 0
        self._state = TraceState.EMPTY
        self._trace: ExecutionTrace | None = None
        self._error: DecodeError | None = None

    # -------------------------------------------------------------------------
    # Published state
    # -------------------------------------------------------------------------

    @property
    def state(self) -> TraceState:
        with self._lock:
            return self._state

    @property
    def trace(self) -> ExecutionTrace | None:
        """Latest published trace, ``None`` unless state is READY."""
        with self._lock:
            return self._trace

    @property
    def error(self) -> DecodeError | None:
        """Decode error of the latest publication, if it failed."""
        with self._lock:
            return self._error

    @property
    def published_sequence(self) -> int:
        """Sequence number of the latest published outcome (0 if none)."""
        with self._lock:
            return self._published_sequence

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def submit(
        self,
        program: CircuitProgram,
        mode: EvaluationMode = EvaluationMode.AMPLITUDES,
    ) -> EvaluationOutcome:
        """
        Evaluate ``program`` and publish the decoded trace.

        Parameters
        ----------
        program : CircuitProgram
            Snapshot of the circuit at submit time.
        mode : EvaluationMode, optional
            Requested evaluation mode. Default is amplitudes.

        Returns
        -------
        EvaluationOutcome
            The outcome, published or stale.  Decode failures are
            reported through ``outcome.error`` and the FAILED state.

        Raises
        ------
        EncodeError
            If the program cannot be encoded; nothing is sent.
        TransportError
            If the simulator failed; published state is left unchanged
            and older requests still in flight become stale.
        """
        mode = EvaluationMode.parse(mode)
        payload = encode(program, mode)
        with self._lock:
            sequence = next(self._counter)
        logger.debug("Submitting request #%d (%s)", sequence, mode.name.lower())

        try:
            response_text = self.transport.send(payload)
        finally:
            with self._lock:
                self._finished_sequence = max(self._finished_sequence, sequence)

        trace: ExecutionTrace | None = None
        error: DecodeError | None = None
        try:
            trace = TraceDecoder(strict=self.strict, num_qubits=program.num_qubits).decode(
                response_text
            )
        except DecodeError as e:
            error = e
            logger.warning("Request #%d: response could not be decoded: %s", sequence, e)

        stale = not self._publish(sequence, trace, error)
        return EvaluationOutcome(
            sequence=sequence,
            mode=mode,
            response_text=response_text,
            trace=trace,
            error=error,
            stale=stale,
        )

    def _publish(
        self,
        sequence: int,
        trace: ExecutionTrace | None,
        error: DecodeError | None,
    ) -> bool:
        with self._lock:
            if sequence < self._finished_sequence:
                logger.warning(
                    "Discarding stale response #%d (request #%d already finished)",
                    sequence,
                    self._finished_sequence,
                )
                return False
            self._published_sequence = sequence
            self._trace = trace
            self._error = error
            self._state = TraceState.READY if trace is not None else TraceState.FAILED
            if trace is not None and trace.measured_index is not None:
                self.history.record(trace.measured_index)
        return True

    def reset(self) -> None:
        """Forget the published trace and measurement history."""
        with self._lock:
            self._state = TraceState.EMPTY
            self._trace = None
            self._error = None
        self.history.clear()

    def close(self) -> None:
        """Close the underlying transport."""
        self.transport.close()

    def __enter__(self) -> EvaluationSession:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def evaluate(
    program: CircuitProgram,
    mode: EvaluationMode,
    transport: Transport,
    *,
    strict: bool = False,
) -> ExecutionTrace:
    """
    One-shot evaluation without session state.

    Raises
    ------
    EncodeError
        If the program cannot be encoded.
    TransportError
        If the simulator failed.
    DecodeError
        If the response could not be decoded.
    """
    response_text = transport.send(encode(program, mode))
    return TraceDecoder(strict=strict, num_qubits=program.num_qubits).decode(response_text)
