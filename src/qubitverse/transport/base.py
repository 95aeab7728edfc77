# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""Simulator transport interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


#: Media type of both request and response payloads.
CONTENT_TYPE = "text/plain"


@runtime_checkable
class Transport(Protocol):
    """
    Protocol for reaching the simulator.

    A transport performs one blocking request/response exchange per
    call.  It does not interpret either payload.

    Methods
    -------
    send(payload)
        Deliver command text and return the simulator's response text.
    close()
        Release any held resources.
    """

    def send(self, payload: str) -> str:
        """
        Deliver command text to the simulator.

        Parameters
        ----------
        payload : str
            Encoded circuit.

        Returns
        -------
        str
            Raw response text.

        Raises
        ------
        TransportError
            If the simulator could not be reached or reported failure.
        """
        ...

    def close(self) -> None:
        """Release any held resources."""
        ...
