# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""Tests for the circuit encoder."""

from __future__ import annotations

import pytest
from qubitverse.circuit.models import (
    CircuitProgram,
    ControlledGate,
    EvaluationMode,
    MeasureNth,
    SingleQubitGate,
    SwapGate,
)
from qubitverse.protocol.encoder import encode, encode_header, format_number


class TestEncode:
    """Command text layout."""

    def test_single_hadamard(self):
        program = CircuitProgram.build(1, [SingleQubitGate("H", qubit=0, position=100)])
        assert encode(program, EvaluationMode.AMPLITUDES) == (
            "0n:1\ntype:single\ngateType:H\nqubit:0\ntheta:-1\nposition:100\n@\n"
        )

    def test_bell_circuit(self, bell_program):
        assert encode(bell_program).splitlines() == [
            "0n:2",
            "type:single",
            "gateType:H",
            "qubit:0",
            "theta:-1",
            "position:120",
            "@",
            "type:cnot",
            "control:0",
            "target:1",
            "position:260",
            "@",
        ]

    def test_gate_names_keep_their_case(self):
        program = CircuitProgram.build(
            2,
            [
                SingleQubitGate("h", qubit=0, position=10),
                ControlledGate("cnot", control=0, target=1, position=20),
            ],
        )
        assert encode(program) == (
            "0n:2\n"
            "type:single\ngateType:h\nqubit:0\ntheta:-1\nposition:10\n@\n"
            "type:cnot\ncontrol:0\ntarget:1\nposition:20\n@\n"
        )

    def test_empty_program_is_header_only(self):
        assert encode(CircuitProgram.build(3, []), EvaluationMode.PROBABILITIES) == "1n:3\n"

    @pytest.mark.parametrize(
        "mode, header",
        [
            (EvaluationMode.AMPLITUDES, "0n:4"),
            (EvaluationMode.PROBABILITIES, "1n:4"),
            (EvaluationMode.MEASURE, "2n:4"),
            ("measure", "2n:4"),
        ],
    )
    def test_mode_only_changes_header(self, bell_program, mode, header):
        program = CircuitProgram(4, bell_program.ops)
        text = encode(program, mode)
        first, _, rest = text.partition("\n")
        assert first == header
        assert rest == encode(program).partition("\n")[2]

    def test_deterministic(self, bell_program):
        assert encode(bell_program) == encode(bell_program)

    def test_ops_ordered_by_position(self):
        program = CircuitProgram.build(
            3,
            [
                MeasureNth(qubit=2, position=500),
                SwapGate(qubit_a=0, qubit_b=2, position=30),
                SingleQubitGate("Rx", qubit=1, theta=0.5, position=200),
                ControlledGate("CZ", control=1, target=2, position=90),
            ],
        )
        types = [line for line in encode(program).splitlines() if line.startswith("type:")]
        assert types == ["type:swap", "type:cz", "type:single", "type:measurenth"]

    def test_no_trailing_content_after_last_terminator(self, bell_program):
        assert encode(bell_program).endswith("@\n")

    def test_theta_and_fractional_positions(self):
        program = CircuitProgram.build(
            1, [SingleQubitGate("P", qubit=0, theta=1.5707963267948966, position=12.5)]
        )
        lines = encode(program).splitlines()
        assert "theta:1.5707963267948966" in lines
        assert "position:12.5" in lines


class TestFormatting:
    """Number rendering and header."""

    @pytest.mark.parametrize(
        "value, text",
        [
            (120, "120"),
            (120.0, "120"),
            (-1, "-1"),
            (0.25, "0.25"),
            (1e-7, "0.0000001"),
            (2.5e16, "25000000000000000"),
        ],
    )
    def test_format_number(self, value, text):
        assert format_number(value) == text

    def test_header(self):
        assert encode_header(5, EvaluationMode.MEASURE) == "2n:5"
