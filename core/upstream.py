# =============================================================================
# core/upstream.py  -  One-shot HTTP exchange with the ABN AMRO services
# =============================================================================
#
# send() issues exactly ONE request and returns the decoded JSON object.
# Every way that can go wrong is translated into the core/errors.py taxonomy:
#
#   httpx.RequestError   → TransportError
#   non-2xx status       → UpstreamHttpError(status, body text)
#   body is not JSON     → ParseError
#
# No retries, no caching and no explicit timeout: httpx's own defaults apply.
# A caller may pass its own httpx.AsyncClient (the tests do, with a
# MockTransport); otherwise a client is opened and closed inside the call.
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from core.errors import ParseError, TransportError, UpstreamHttpError
from core.models import UpstreamRequest

logger = logging.getLogger(__name__)


async def send(
    request: UpstreamRequest,
    client: Optional[httpx.AsyncClient] = None,
) -> dict[str, Any]:
    """Send ``request`` and return the response body as a dict.

    Args:
        request: The prepared method, URL, query parameters, headers and body.
        client: Optional client to send through.  It is NOT closed here.

    Returns:
        The parsed JSON object from a 2xx response.

    Raises:
        TransportError: The service could not be reached.
        UpstreamHttpError: The service answered with a non-2xx status.
        ParseError: The body was not a JSON object.
    """
    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await _exchange(own_client, request)
    return await _exchange(client, request)


async def _exchange(client: httpx.AsyncClient, request: UpstreamRequest) -> dict[str, Any]:
    logger.debug(f"{request.method} {request.url} params={request.params}")
    try:
        response = await client.request(
            request.method,
            request.url,
            params=request.params or None,
            headers=request.headers,
            json=request.json,
        )
    except httpx.RequestError as e:
        raise TransportError(f"Could not reach {request.url}: {e}") from e

    logger.info(f"{request.method} {response.request.url} -> {response.status_code}")

    if not response.is_success:
        raise UpstreamHttpError(response.status_code, response.text)

    try:
        payload = response.json()
    except ValueError as e:
        raise ParseError(f"Invalid JSON in response from {request.url}: {e}") from e

    if not isinstance(payload, dict):
        raise ParseError(
            f"Expected a JSON object from {request.url}, got {type(payload).__name__}"
        )
    return payload
