# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
CLI integration tests for qubitverse.

Tests all user-facing CLI commands end-to-end.
"""

from __future__ import annotations

import json
import shlex
import sys
from pathlib import Path
from typing import Any, Callable

import pytest
from qubitverse.errors import TransportError


@pytest.fixture
def use_transport(
    monkeypatch: pytest.MonkeyPatch, transport_factory: Callable[..., Any]
) -> Callable[..., Any]:
    """Route ``run`` through an in-memory transport answering with ``responses``."""

    def _use(*responses: str | Exception) -> Any:
        transport = transport_factory(*responses)
        monkeypatch.setattr("qubitverse.transport.create_transport", lambda config: transport)
        return transport

    return _use


# =============================================================================
# ENCODE
# =============================================================================


class TestEncode:
    """Tests for `qubitverse encode`."""

    def test_stdout(self, invoke: Callable, bell_file: Path) -> None:
        result = invoke("encode", str(bell_file))
        assert result.exit_code == 0
        assert result.output.startswith("0n:2\ntype:single\n")
        assert result.output.endswith("@\n")

    def test_mode(self, invoke: Callable, bell_file: Path) -> None:
        result = invoke("encode", str(bell_file), "--mode", "measure")
        assert result.exit_code == 0
        assert result.output.startswith("2n:2\n")

    def test_output_file(self, invoke: Callable, bell_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out" / "bell.txt"
        result = invoke("encode", str(bell_file), "-o", str(out))
        assert result.exit_code == 0
        assert "Wrote 2 op(s)" in result.output
        assert out.read_text(encoding="utf-8").count("@") == 2

    def test_invalid_json(self, invoke: Callable, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        result = invoke("encode", str(path))
        assert result.exit_code != 0
        assert "Invalid circuit JSON" in result.output

    def test_invalid_circuit(self, invoke: Callable, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps(
                {"numQubits": 2, "gates": [{"type": "cnot", "control": 1, "target": 1, "position": 0}]}
            ),
            encoding="utf-8",
        )
        result = invoke("encode", str(path))
        assert result.exit_code != 0
        assert "Invalid circuit" in result.output
        assert "must differ" in result.output


# =============================================================================
# DECODE
# =============================================================================


class TestDecode:
    """Tests for `qubitverse decode`."""

    def test_pretty_from_stdin(self, invoke: Callable, bell_response: str) -> None:
        result = invoke("decode", input=bell_response)
        assert result.exit_code == 0
        assert "[1] Initial State" in result.output
        assert "[3] Applying CNOT Gate" in result.output
        assert "Probabilities" in result.output
        assert "Measured: -" in result.output

    def test_json(self, invoke: Callable, tmp_path: Path, measured_bell_response: str) -> None:
        path = tmp_path / "out.txt"
        path.write_text(measured_bell_response, encoding="utf-8")
        result = invoke("decode", str(path), "--format", "json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["measuredIndex"] == 3
        assert data["snapshots"][-1]["label"] == "Measured State"

    def test_empty(self, invoke: Callable) -> None:
        result = invoke("decode", input="")
        assert result.exit_code == 0
        assert "Empty trace." in result.output

    def test_lenient_reports_skipped_lines(self, invoke: Callable) -> None:
        result = invoke("decode", input="+\n0=(1,0)\n???\n")
        assert result.exit_code == 0
        assert "Skipped lines (1)" in result.output

    def test_strict(self, invoke: Callable) -> None:
        result = invoke("decode", "--strict", input="+\n0=(1,0)\n???\n")
        assert result.exit_code != 0
        assert "Decode failed" in result.output

    def test_strict_from_env(self, invoke: Callable, monkeypatch) -> None:
        monkeypatch.setenv("QUBITVERSE_STRICT_DECODE", "1")
        result = invoke("decode", input="???\n")
        assert result.exit_code != 0

    def test_num_qubits(self, invoke: Callable, bell_response: str) -> None:
        result = invoke("decode", "--num-qubits", "1", input=bell_response)
        assert result.exit_code != 0
        assert "out of range" in result.output


# =============================================================================
# RUN
# =============================================================================


class TestRun:
    """Tests for `qubitverse run`."""

    def test_pretty(
        self, invoke: Callable, bell_file: Path, use_transport, measured_bell_response: str
    ) -> None:
        transport = use_transport(measured_bell_response)
        result = invoke("run", str(bell_file), "--mode", "measure")
        assert result.exit_code == 0
        assert "Measured: 3" in result.output
        assert transport.sent[0].startswith("2n:2\n")
        assert transport.closed

    def test_raw(
        self, invoke: Callable, bell_file: Path, use_transport, bell_response: str
    ) -> None:
        use_transport(bell_response)
        result = invoke("run", str(bell_file), "--raw")
        assert result.exit_code == 0
        assert result.output == bell_response

    def test_transport_failure(self, invoke: Callable, bell_file: Path, use_transport) -> None:
        use_transport(TransportError("Error processing input"))
        result = invoke("run", str(bell_file))
        assert result.exit_code != 0
        assert "Simulator request failed" in result.output

    def test_decode_failure(self, invoke: Callable, bell_file: Path, use_transport) -> None:
        use_transport("+\n0=(1,0)\nmeasure\n")
        result = invoke("run", str(bell_file))
        assert result.exit_code != 0
        assert "Decode failed" in result.output

    def test_command_option_spawns_process(
        self, invoke: Callable, bell_file: Path, bell_response: str
    ) -> None:
        script = f"import sys; sys.stdin.read(); sys.stdout.write({bell_response!r})"
        command = shlex.join([sys.executable, "-c", script])
        result = invoke("run", str(bell_file), "--command", command, "--format", "json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["snapshots"]) == 3

    def test_invalid_override(self, invoke: Callable, bell_file: Path, monkeypatch) -> None:
        monkeypatch.setenv("QUBITVERSE_TIMEOUT", "-1")
        result = invoke("run", str(bell_file))
        assert result.exit_code != 0
        assert "timeout must be positive" in result.output


# =============================================================================
# ADMIN
# =============================================================================


class TestConfigCommand:
    """Tests for `qubitverse config`."""

    def test_pretty(self, invoke: Callable) -> None:
        result = invoke("config")
        assert result.exit_code == 0
        assert "Transport:" in result.output
        assert "qubitverse-simulator" in result.output

    def test_json_with_config_file(self, invoke: Callable, tmp_path: Path) -> None:
        path = tmp_path / "qubitverse.toml"
        path.write_text('[qubitverse]\ntransport = "http"\nport = 8123\n', encoding="utf-8")
        result = invoke("--config", str(path), "config", "--format", "json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["transport"] == "http"
        assert data["port"] == 8123


class TestServeCommand:
    """Tests for `qubitverse serve`."""

    def test_passes_overrides(self, invoke: Callable, monkeypatch) -> None:
        calls = {}

        def fake_run_server(config, log_level):
            calls["config"] = config
            calls["log_level"] = log_level

        monkeypatch.setattr("qubitverse.server.run_server", fake_run_server)
        result = invoke("serve", "--port", "9001", "--command", "./sim -q")
        assert result.exit_code == 0
        assert "http://127.0.0.1:9001" in result.output
        assert calls["config"].port == 9001
        assert calls["config"].simulator_command == ("./sim", "-q")
        assert calls["log_level"] == "info"

    def test_invalid_port(self, invoke: Callable) -> None:
        result = invoke("serve", "--port", "0")
        assert result.exit_code != 0
        assert "port out of range" in result.output
