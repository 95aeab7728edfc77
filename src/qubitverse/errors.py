# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Public exception hierarchy.

All exceptions raised by qubitverse inherit from :class:`QubitverseError`,
allowing a single catch-all handler for library errors.

Hierarchy
---------
::

    QubitverseError
    ├── EncodeError
    ├── DecodeError
    │   ├── ProtocolSyntaxError
    │   └── IndexOutOfRangeError
    ├── TransportError
    └── ConfigError

Examples
--------
>>> from qubitverse.errors import DecodeError, QubitverseError
>>> try:
...     trace = decode(response_text)
... except DecodeError as exc:
...     print(f"decode failed: {exc}")
... except QubitverseError:
...     print("other qubitverse error")
"""

from __future__ import annotations


__all__ = [
    "QubitverseError",
    "EncodeError",
    "DecodeError",
    "ProtocolSyntaxError",
    "IndexOutOfRangeError",
    "TransportError",
    "ConfigError",
]


class QubitverseError(Exception):
    """
    Base exception for all qubitverse operations.

    ``except QubitverseError`` is guaranteed to intercept any error
    originating from the library.
    """


class EncodeError(QubitverseError):
    """
    Raised when a gate operation or circuit program is invalid.

    Encode errors are raised by the op constructors and by
    :meth:`~qubitverse.circuit.models.CircuitProgram.build`, so an
    invalid circuit never produces a wire payload.
    """


class DecodeError(QubitverseError):
    """Base exception for simulator response decoding."""


class ProtocolSyntaxError(DecodeError):
    """
    Raised when a response line matches no known record grammar.

    Parameters
    ----------
    line_number : int
        1-based line number within the response text.
    line : str
        Offending line content.
    reason : str
        Human-readable description of the problem.
    """

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {line!r}")


class IndexOutOfRangeError(DecodeError):
    """
    Raised when a decoded index does not address a valid entry.

    Parameters
    ----------
    index : int
        The offending index.
    size : int
        Number of addressable entries.
    context : str
        What was being indexed (e.g. ``"probabilities"``).
    """

    def __init__(self, index: int, size: int, context: str) -> None:
        self.index = index
        self.size = size
        self.context = context
        super().__init__(
            f"Index {index} out of range for {context} (size {size})"
        )


class TransportError(QubitverseError):
    """
    Raised when the simulator could not be reached or reported failure.

    Parameters
    ----------
    message : str
        Error description.
    status_code : int, optional
        HTTP status code or process exit code, if any.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ConfigError(QubitverseError):
    """Raised when configuration values cannot be parsed."""
