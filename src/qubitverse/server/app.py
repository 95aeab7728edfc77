# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Relay application factory.

Creates the FastAPI application that sits between the circuit editor and
the simulator.  ``POST /encode`` keeps the plain-text contract the editor
speaks; the JSON API under ``/api`` does encoding and decoding server-side.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from qubitverse.config import Config, get_config
from qubitverse.errors import TransportError
from qubitverse.server import routes
from qubitverse.transport.base import Transport
from qubitverse.transport.process import PROCESSING_ERROR


logger = logging.getLogger(__name__)


def create_app(
    transport_factory: Callable[[], Transport] | None = None,
    config: Config | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Parameters
    ----------
    transport_factory : Callable, optional
        Zero-argument factory returning the simulator transport.
        If not provided, uses :func:`~qubitverse.transport.create_transport`
        with ``config``.
    config : Config, optional
        Settings for CORS and decoding. Defaults to
        :func:`~qubitverse.config.get_config`.

    Returns
    -------
    FastAPI
        Configured application instance.
    """
    from qubitverse import __version__

    config = config or get_config()
    if transport_factory is None:
        from qubitverse.transport import create_transport

        def transport_factory() -> Transport:
            return create_transport(config)

    transport = transport_factory()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        logger.debug("Closing simulator transport")
        app.state.transport.close()

    app = FastAPI(
        title="qubitverse relay",
        description="Relay between the circuit editor and the state-vector simulator",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.transport = transport

    @app.post("/encode", response_class=PlainTextResponse)
    async def relay_encode(request: Request) -> PlainTextResponse:
        """
        Forward command text to the simulator verbatim.

        Any simulator failure is reported as ``500 Error processing input``.
        """
        payload = (await request.body()).decode("utf-8", errors="replace")
        try:
            text = await run_in_threadpool(request.app.state.transport.send, payload)
        except TransportError as e:
            logger.warning("Relay request failed: %s", e)
            return PlainTextResponse(PROCESSING_ERROR, status_code=500)
        return PlainTextResponse(text)

    app.include_router(routes.router, prefix="/api", tags=["api"])

    return app


def run_server(
    config: Config | None = None,
    *,
    host: str | None = None,
    port: int | None = None,
    log_level: str = "info",
) -> None:
    """
    Serve the relay with uvicorn until interrupted.

    ``host`` and ``port`` default to the configured relay address.
    """
    import uvicorn

    config = config or get_config()
    uvicorn.run(
        create_app(config=config),
        host=host or config.host,
        port=port or config.port,
        log_level=log_level,
    )
