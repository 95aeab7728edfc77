# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Local simulator process transport.

Each request spawns the simulator executable, writes the command text to
its standard input, and returns its standard output once it exits.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Any, Sequence

from qubitverse.config import DEFAULT_TIMEOUT
from qubitverse.errors import TransportError


logger = logging.getLogger(__name__)

#: Message returned for any simulator failure.
PROCESSING_ERROR = "Error processing input"


class ProcessTransport:
    """
    Run the simulator as a child process per request.

    Parameters
    ----------
    command : sequence of str
        Executable and arguments.
    timeout : float, optional
        Seconds to wait for the process to exit. Default is 30.0.
    cwd : str, optional
        Working directory for the child process.
    """

    def __init__(
        self,
        command: Sequence[str],
        *,
        timeout: float = DEFAULT_TIMEOUT,
        cwd: str | None = None,
    ) -> None:
        if not command:
            raise ValueError("command must not be empty")
        self.command = list(command)
        self.timeout = timeout
        self.cwd = cwd

    def send(self, payload: str) -> str:
        """
        Run the simulator on ``payload``.

        Raises
        ------
        TransportError
            If the executable cannot be started, times out, or exits with
            a non-zero status.
        """
        logger.debug("Spawning simulator %s (%d bytes in)", self.command[0], len(payload))
        try:
            completed = subprocess.run(
                self.command,
                input=payload,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                cwd=self.cwd,
                check=False,
            )
        except FileNotFoundError as e:
            raise TransportError(f"Simulator executable not found: {self.command[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise TransportError(f"Simulator timed out after {self.timeout}s") from e
        except OSError as e:
            raise TransportError(f"Could not start simulator: {e}") from e

        if completed.stderr:
            logger.warning("Simulator stderr: %s", completed.stderr.rstrip())
        if completed.returncode != 0:
            raise TransportError(PROCESSING_ERROR, status_code=completed.returncode)

        logger.debug("Simulator returned %d bytes", len(completed.stdout))
        return completed.stdout

    def close(self) -> None:
        """Nothing to release; processes do not outlive a request."""

    def __enter__(self) -> ProcessTransport:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
