"""
HTTP Transport
==============

Sends the request a verifier describes and hands back status and body.
Blocking calls go through ``requests``, awaitable ones through ``httpx``.
Timeouts are a transport setting; nothing here retries.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
import logging

import httpx
import requests

from ..domain.exceptions import TransportConnectionError, TransportError, TransportTimeout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationRequest:
    """Authority request as built by a verifier"""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None


@dataclass(frozen=True)
class VerificationResponse:
    """Raw authority answer"""
    status: int
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class RequestsTransport:
    """Blocking transport"""

    def __init__(self, timeout_seconds: float = 30.0, session: Optional[requests.Session] = None):
        self.timeout_seconds = timeout_seconds
        self.session = session

    def send(self, request: VerificationRequest) -> VerificationResponse:
        """Send the request and return status and raw body"""
        logger.debug(f"{request.method} {request.url}")
        client = self.session or requests
        try:
            response = client.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body.encode("utf-8") if request.body is not None else None,
                timeout=self.timeout_seconds,
            )
        except requests.Timeout as e:
            raise TransportTimeout(request.url, str(e)) from e
        except requests.ConnectionError as e:
            raise TransportConnectionError(request.url, str(e)) from e
        except requests.RequestException as e:
            raise TransportError(request.url, str(e)) from e

        logger.debug(f"{request.method} {request.url} -> HTTP {response.status_code}")
        return VerificationResponse(status=response.status_code, body=response.content)


class HttpxTransport:
    """Awaitable transport.

    Without an injected client a short-lived ``httpx.AsyncClient`` is opened
    per request, so nothing is shared between calls.
    """

    def __init__(self, timeout_seconds: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        self.timeout_seconds = timeout_seconds
        self.client = client

    async def send(self, request: VerificationRequest) -> VerificationResponse:
        """Send the request and return status and raw body"""
        logger.debug(f"{request.method} {request.url}")
        try:
            if self.client is not None:
                response = await self._request(self.client, request)
            else:
                async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_seconds)) as client:
                    response = await self._request(client, request)
        except httpx.TimeoutException as e:
            raise TransportTimeout(request.url, str(e)) from e
        except (httpx.NetworkError, httpx.ProtocolError) as e:
            raise TransportConnectionError(request.url, str(e)) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(request.url, str(e)) from e

        logger.debug(f"{request.method} {request.url} -> HTTP {response.status_code}")
        return VerificationResponse(status=response.status_code, body=response.content)

    async def _request(self, client: httpx.AsyncClient, request: VerificationRequest) -> httpx.Response:
        return await client.request(
            method=request.method,
            url=request.url,
            headers=request.headers,
            content=request.body.encode("utf-8") if request.body is not None else None,
        )
