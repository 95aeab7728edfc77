# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""JSON API router for the circuit editor."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, ConfigDict, Field
from qubitverse.circuit.models import EvaluationMode
from qubitverse.circuit.serialization import program_from_dict
from qubitverse.config import Config
from qubitverse.errors import DecodeError, EncodeError, TransportError
from qubitverse.protocol.decoder import decode
from qubitverse.protocol.encoder import encode
from qubitverse.transport.base import Transport


logger = logging.getLogger(__name__)
router = APIRouter()


# =============================================================================
# Dependencies
# =============================================================================


def get_transport(request: Request) -> Transport:
    return request.app.state.transport


def get_app_config(request: Request) -> Config:
    return request.app.state.config


TransportDep = Annotated[Transport, Depends(get_transport)]
ConfigDep = Annotated[Config, Depends(get_app_config)]


# =============================================================================
# Request models
# =============================================================================


class EvaluateRequest(BaseModel):
    """Circuit document plus the requested evaluation mode."""

    model_config = ConfigDict(populate_by_name=True)

    num_qubits: int = Field(alias="numQubits", ge=1)
    gates: list[dict[str, Any]] = Field(default_factory=list)
    mode: int | str = 0
    strict: bool | None = None


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/health")
async def health() -> dict[str, Any]:
    """Liveness check."""
    from qubitverse import __version__

    return {"status": "ok", "version": __version__}


@router.post("/evaluate")
def evaluate_circuit(
    body: EvaluateRequest,
    transport: TransportDep,
    config: ConfigDep,
) -> dict[str, Any]:
    """
    Encode a circuit, run it on the simulator and return the decoded trace.

    Invalid circuits and undecodable responses give 400; simulator
    failures give 502.
    """
    strict = config.strict_decode if body.strict is None else body.strict
    try:
        program = program_from_dict({"numQubits": body.num_qubits, "gates": body.gates})
        mode = EvaluationMode.parse(body.mode)
        response_text = transport.send(encode(program, mode))
        trace = decode(response_text, strict=strict, num_qubits=program.num_qubits)
    except (EncodeError, DecodeError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except TransportError as e:
        logger.warning("Simulator request failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e)) from e

    return trace.to_dict()


@router.post("/decode")
async def decode_response(
    request: Request,
    config: ConfigDep,
    num_qubits: int | None = Query(None, ge=1, description="Register size"),
    strict: bool | None = Query(None, description="Fail on unrecognized lines"),
) -> dict[str, Any]:
    """Decode raw simulator response text sent as the request body."""
    text = (await request.body()).decode("utf-8", errors="replace")
    if strict is None:
        strict = config.strict_decode
    try:
        trace = decode(text, strict=strict, num_qubits=num_qubits)
    except DecodeError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return trace.to_dict()
