# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Simulator transports.

- :class:`ProcessTransport` - spawn the simulator per request
- :class:`HttpTransport` - POST to a remote simulator endpoint

Use :func:`create_transport` to build the one selected by configuration.
"""

from __future__ import annotations

import logging

from qubitverse.config import Config, get_config
from qubitverse.transport.base import Transport
from qubitverse.transport.http import HttpTransport
from qubitverse.transport.process import ProcessTransport


logger = logging.getLogger(__name__)


__all__ = [
    "HttpTransport",
    "ProcessTransport",
    "Transport",
    "create_transport",
]


def create_transport(config: Config | None = None) -> Transport:
    """
    Create the transport selected by ``config.transport``.

    Parameters
    ----------
    config : Config, optional
        Settings to use. Defaults to :func:`~qubitverse.config.get_config`.

    Returns
    -------
    Transport
        Ready-to-use transport; the caller owns and closes it.
    """
    config = config or get_config()
    logger.debug("Creating %s transport", config.transport)
    if config.transport == "http":
        return HttpTransport(
            config.simulator_url,
            timeout=config.timeout,
            retry_attempts=config.retry_attempts,
            retry_backoff=config.retry_backoff,
        )
    return ProcessTransport(config.simulator_command, timeout=config.timeout)
