r"""Ready-made operations for resilient tasks.

The operations built here are zero-argument coroutine functions that can
be passed directly as the ``operation`` of a ``ResilientTask``.
"""

from __future__ import annotations

__all__ = ["DEFAULT_TIMEOUT", "fetch_json"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from aretask.validation import validate_timeout

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger: logging.Logger = logging.getLogger(__name__)

# Default timeout in seconds for HTTP operations
DEFAULT_TIMEOUT = 10.0


def fetch_json(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    method: str = "GET",
    **kwargs: Any,
) -> Callable[[], Awaitable[Any]]:
    """Build an operation that fetches and decodes a JSON document.

    Each call of the returned operation sends one request. Responses
    with a 4xx or 5xx status raise ``httpx.HTTPStatusError`` and network
    problems raise ``httpx.RequestError``, so that a ``ResilientTask``
    counts them as failed attempts.

    Args:
        url: The URL to request.
        client: An optional ``httpx.AsyncClient`` to send the request
            with. It is left open. If ``None``, a client is created and
            closed for every call.
        timeout: Maximum seconds to wait for the server response. Only
            used if ``client`` is ``None``. Must be > 0.
        method: The HTTP method of the request.
        **kwargs: Additional keyword arguments passed to
            ``httpx.AsyncClient.request``.

    Returns:
        A zero-argument coroutine function returning the decoded JSON
        body.

    Raises:
        ConfigurationError: If ``timeout`` is not positive.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretask import ResilientTask
        >>> from aretask.operations import fetch_json
        >>> task = ResilientTask(
        ...     name="load-products",
        ...     operation=fetch_json("https://api.example.com/products"),
        ... )
        >>> asyncio.run(task.start())  # doctest: +SKIP

        ```
    """
    validate_timeout(timeout)

    async def operation() -> Any:
        owns_client = client is None
        http_client = client or httpx.AsyncClient(timeout=timeout)
        try:
            logger.debug(f"{method} {url}")
            response = await http_client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        finally:
            if owns_client:
                await http_client.aclose()

    return operation
