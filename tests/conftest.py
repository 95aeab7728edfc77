# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Test fixtures for qubitverse.

Provides in-memory transports, sample circuits and canned simulator
responses so tests never spawn a real simulator.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Callable, Iterator

import pytest
from click.testing import CliRunner
from qubitverse.circuit.models import CircuitProgram, ControlledGate, SingleQubitGate
from qubitverse.cli import cli
from qubitverse.config import reset_config
from qubitverse.errors import TransportError


# =============================================================================
# Canned payloads
# =============================================================================

_BELL_RESPONSE = """+
0=(1,0)
1=(0,0)
2=(0,0)
3=(0,0)
H
0=(0.707107,0)
1=(0.707107,0)
2=(0,0)
3=(0,0)
CNOT
0=(0.707107,0)
1=(0,0)
2=(0,0)
3=(0.707107,0)
prob
0=0.5
1=0
2=0
3=0.5
"""

_MEASURED_BELL_RESPONSE = _BELL_RESPONSE + "measure\n3\n"

_COLLAPSED_SINGLE_RESPONSE = "+\n0=(1,0)\n1=(0,0)\nmeasure\n0\n"


class FakeTransport:
    """
    In-memory transport returning queued responses.

    ``responses`` items may be strings or exceptions; the last item is
    reused once the queue is down to one.
    """

    def __init__(self, *responses: str | Exception) -> None:
        self.responses = list(responses) or [""]
        self.sent: list[str] = []
        self.closed = False
        self._lock = threading.Lock()

    def send(self, payload: str) -> str:
        with self._lock:
            self.sent.append(payload)
            item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from QUBITVERSE_* settings and the cached config."""
    import os

    for key in list(os.environ):
        if key.startswith("QUBITVERSE_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def bell_program() -> CircuitProgram:
    """H on qubit 0 followed by CNOT 0 -> 1."""
    return CircuitProgram.build(
        2,
        [
            ControlledGate("CNOT", control=0, target=1, position=260),
            SingleQubitGate("H", qubit=0, position=120),
        ],
    )


@pytest.fixture
def bell_document() -> dict[str, Any]:
    """Circuit document for the Bell program."""
    return {
        "numQubits": 2,
        "gates": [
            {"type": "single", "gateType": "H", "qubit": 0, "theta": -1, "position": 120},
            {"type": "cnot", "control": 0, "target": 1, "position": 260},
        ],
    }


@pytest.fixture
def bell_file(tmp_path: Path, bell_document: dict[str, Any]) -> Path:
    """Bell circuit document on disk."""
    path = tmp_path / "bell.json"
    path.write_text(json.dumps(bell_document), encoding="utf-8")
    return path


@pytest.fixture
def bell_response() -> str:
    """Amplitudes and probabilities of the Bell program."""
    return _BELL_RESPONSE


@pytest.fixture
def measured_bell_response() -> str:
    """Bell response collapsed onto basis state 3."""
    return _MEASURED_BELL_RESPONSE


@pytest.fixture
def collapsed_single_response() -> str:
    """Single-qubit response measured as 0, without a probability table."""
    return _COLLAPSED_SINGLE_RESPONSE


@pytest.fixture
def transport_factory() -> Callable[..., FakeTransport]:
    """
    Create in-memory transports.

    Usage:
        transport = transport_factory(measured_bell_response)
        transport = transport_factory(TransportError("down"))
    """

    def _create(*responses: str | Exception) -> FakeTransport:
        return FakeTransport(*responses)

    return _create


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Transport answering with the Bell response."""
    return FakeTransport(_BELL_RESPONSE)


@pytest.fixture
def failing_transport() -> FakeTransport:
    """Transport that always fails."""
    return FakeTransport(TransportError("Error processing input", status_code=1))


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner: CliRunner) -> Callable[..., Any]:
    """
    Invoke CLI commands.

    Usage:
        result = invoke("encode", "bell.json")
        result = invoke("decode", "-", input=bell_response)
    """

    def _invoke(*args: str, input: str | None = None):
        return cli_runner.invoke(cli, list(args), input=input)

    return _invoke
