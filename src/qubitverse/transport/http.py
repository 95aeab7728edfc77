# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Remote simulator transport over HTTP.

Posts the command text as ``text/plain`` and returns the response body.
Transient failures (connection resets, 429 and 5xx answers) are retried
with exponential backoff by the urllib3 ``Retry`` adapter mounted on the
``requests.Session``.

Examples
--------
>>> from qubitverse.transport.http import HttpTransport
>>> with HttpTransport("http://localhost:5000/encode", timeout=5.0) as transport:
...     response_text = transport.send(command_text)
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from qubitverse.config import DEFAULT_RETRY_ATTEMPTS, DEFAULT_RETRY_BACKOFF, DEFAULT_TIMEOUT
from qubitverse.errors import TransportError
from qubitverse.transport.base import CONTENT_TYPE
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)


class HttpTransport:
    """
    POST command text to a simulator endpoint.

    Parameters
    ----------
    url : str
        Full endpoint URL.
    timeout : float, optional
        Request timeout in seconds. Default is 30.0.
    retry_attempts : int, optional
        Retries for transient failures. Default is 3.
    retry_backoff : float, optional
        Base backoff between retries in seconds. Default is 0.5.
    verify_ssl : bool, optional
        Whether to verify SSL certificates. Default is True.

    Attributes
    ----------
    session : requests.Session
        Configured HTTP session with retry logic.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        retry_backoff: float = DEFAULT_RETRY_BACKOFF,
        verify_ssl: bool = True,
    ) -> None:
        if not url:
            raise ValueError("url is required")
        self.url = url
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_backoff = retry_backoff
        self.verify_ssl = verify_ssl
        self.session = self._create_session()

        logger.debug("HttpTransport initialized: url=%s", url)

    def _create_session(self) -> requests.Session:
        """Create HTTP session with text headers and retry adapter."""
        session = requests.Session()
        session.headers.update(
            {
                "Content-Type": CONTENT_TYPE,
                "Accept": CONTENT_TYPE,
                "User-Agent": "qubitverse/1.0",
            }
        )

        retry_strategy = Retry(
            total=self.retry_attempts,
            backoff_factor=self.retry_backoff,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def send(self, payload: str) -> str:
        """
        POST ``payload`` and return the response text.

        Raises
        ------
        TransportError
            On timeout, connection failure, or a non-2xx status.
        """
        try:
            response = self.session.post(
                self.url,
                data=payload.encode("utf-8"),
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timeout after {self.timeout}s: POST {self.url}") from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection error to simulator {self.url}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: POST {self.url}: {e}") from e

        logger.debug("Simulator POST %s -> %d", self.url, response.status_code)

        if not response.ok:
            detail = response.text.strip() or response.reason
            raise TransportError(
                f"Simulator error ({response.status_code}): {detail}",
                status_code=response.status_code,
            )
        return response.text

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
