# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Simulator text protocol.

encoder
    :func:`encode` turns a :class:`~qubitverse.circuit.models.CircuitProgram`
    into command text.

decoder
    :func:`decode` turns response text into an :class:`ExecutionTrace`.

trace
    Immutable decoded entities consumed by the renderers.
"""

from __future__ import annotations

from qubitverse.protocol.decoder import TraceDecoder, decode
from qubitverse.protocol.encoder import encode
from qubitverse.protocol.trace import (
    AmplitudeEntry,
    DecodeIssue,
    Edge,
    ExecutionTrace,
    ProbabilityEntry,
    StateSnapshot,
)


__all__ = [
    "AmplitudeEntry",
    "DecodeIssue",
    "Edge",
    "ExecutionTrace",
    "ProbabilityEntry",
    "StateSnapshot",
    "TraceDecoder",
    "decode",
    "encode",
]
