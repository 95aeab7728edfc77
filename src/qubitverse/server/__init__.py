# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
HTTP relay between the circuit editor and the simulator.

Starting the Server
-------------------
>>> from qubitverse.server import run_server
>>> run_server(port=5000)

Or from the CLI::

    qubitverse serve --port 5000

Custom Deployment
-----------------
>>> from qubitverse.server import create_app
>>> app = create_app()  # ASGI app for uvicorn / gunicorn
"""

from qubitverse.server.app import create_app, run_server


__all__ = [
    "run_server",
    "create_app",
]
