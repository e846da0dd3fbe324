"""Ready-made assertions."""

import logging
from collections.abc import Awaitable, Callable

import httpx

logger = logging.getLogger(__name__)

HTTP_STATUS_OK = 200
HTTP_STATUS_BAD_GATEWAY = 502


def assert_online(
    url: str,
    method: str = "GET",
    ignore_502: bool = False,
    timeout: float = 10.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Callable[[], Awaitable[bool]]:
    """Build an assertion that ``url`` answers 200 to an HTTP ``method``.

    Request errors (refused connection, timeout) count as a failure rather
    than raising. With ``ignore_502`` a 502 Bad Gateway also passes.

    Args:
        url: URL to request
        method: HTTP method (default: GET)
        ignore_502: Treat 502 responses as online
        timeout: Request timeout in seconds
        transport: Optional httpx transport (used by tests)

    Returns:
        Async zero-argument assertion
    """

    async def check() -> bool:
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                response = await client.request(method.upper(), url)
            code = response.status_code
        except httpx.HTTPError as e:
            logger.debug("Request to %s failed: %s", url, e)
            code = None

        if code != HTTP_STATUS_OK:
            logger.error("%s returned status code %s", url, code)

        return code == HTTP_STATUS_OK or (ignore_502 and code == HTTP_STATUS_BAD_GATEWAY)

    return check
