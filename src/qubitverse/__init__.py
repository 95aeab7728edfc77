# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
qubitverse: circuit encoding and trace decoding for a state-vector simulator.

Quick Start
-----------
>>> from qubitverse import CircuitProgram, SingleQubitGate, ControlledGate, encode
>>> program = CircuitProgram.build(2, [
...     SingleQubitGate("h", qubit=0, position=10),
...     ControlledGate("cnot", control=0, target=1, position=20),
... ])
>>> print(encode(program), end="")
0n:2
type:single
gateType:h
qubit:0
theta:-1
position:10
@
type:cnot
control:0
target:1
position:20
@

Decoding
--------
>>> from qubitverse import decode
>>> trace = decode(response_text, num_qubits=2)
>>> [s.label for s in trace.snapshots]
['Initial State', 'Applying H Gate', 'Applying CNOT Gate']

Evaluating
----------
>>> from qubitverse import EvaluationMode, EvaluationSession, create_transport
>>> with EvaluationSession(create_transport()) as session:
...     outcome = session.submit(program, EvaluationMode.MEASURE)
...     outcome.trace.measured_index

Submodules
----------
- qubitverse.circuit: Gate operations and circuit programs
- qubitverse.protocol: Command encoder and response decoder
- qubitverse.transport: Simulator transports (process, HTTP)
- qubitverse.session: Request sequencing and published trace
- qubitverse.config: Configuration management
- qubitverse.errors: Public exception types
- qubitverse.server: HTTP relay (FastAPI)
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Any


__all__ = [
    # Version
    "__version__",
    # Circuit
    "CircuitProgram",
    "ControlledGate",
    "EvaluationMode",
    "MeasureNth",
    "SingleQubitGate",
    "SwapGate",
    # Protocol
    "ExecutionTrace",
    "TraceDecoder",
    "decode",
    "encode",
    # Evaluation
    "EvaluationSession",
    "create_transport",
    # Config
    "Config",
    "get_config",
    "set_config",
]


try:
    __version__ = version("qubitverse")
except PackageNotFoundError:
    __version__ = "0.0.0"


if TYPE_CHECKING:
    from qubitverse.circuit.models import (
        CircuitProgram,
        ControlledGate,
        EvaluationMode,
        MeasureNth,
        SingleQubitGate,
        SwapGate,
    )
    from qubitverse.config import Config, get_config, set_config
    from qubitverse.protocol.decoder import TraceDecoder, decode
    from qubitverse.protocol.encoder import encode
    from qubitverse.protocol.trace import ExecutionTrace
    from qubitverse.session import EvaluationSession
    from qubitverse.transport import create_transport


_LAZY_IMPORTS = {
    # Circuit
    "CircuitProgram": ("qubitverse.circuit.models", "CircuitProgram"),
    "ControlledGate": ("qubitverse.circuit.models", "ControlledGate"),
    "EvaluationMode": ("qubitverse.circuit.models", "EvaluationMode"),
    "MeasureNth": ("qubitverse.circuit.models", "MeasureNth"),
    "SingleQubitGate": ("qubitverse.circuit.models", "SingleQubitGate"),
    "SwapGate": ("qubitverse.circuit.models", "SwapGate"),
    # Protocol
    "ExecutionTrace": ("qubitverse.protocol.trace", "ExecutionTrace"),
    "TraceDecoder": ("qubitverse.protocol.decoder", "TraceDecoder"),
    "decode": ("qubitverse.protocol.decoder", "decode"),
    "encode": ("qubitverse.protocol.encoder", "encode"),
    # Evaluation
    "EvaluationSession": ("qubitverse.session", "EvaluationSession"),
    "create_transport": ("qubitverse.transport", "create_transport"),
    # Config
    "Config": ("qubitverse.config", "Config"),
    "get_config": ("qubitverse.config", "get_config"),
    "set_config": ("qubitverse.config", "set_config"),
}


def __getattr__(name: str) -> Any:
    """Lazy import handler for module-level attributes."""
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = __import__(module_path, fromlist=[attr_name])
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available attributes for autocomplete."""
    return sorted(set(__all__) | set(_LAZY_IMPORTS.keys()))
