"""Shared GET-with-retry for the JSON feeds."""

import logging
import time
from typing import Any

import httpx

logger = logging.getLogger(__name__)

RETRY_STATUSES = (503, 429)


def get_json(
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = 30.0,
    max_retries: int = 3,
    retry_base_delay: float = 2.0,
) -> Any:
    """GET a JSON document, retrying on 503/429 and transport errors.

    Backoff is exponential: ``retry_base_delay * 2**attempt``.
    """
    last_error: Exception | None = None
    for attempt in range(max_retries + 1):
        try:
            resp = httpx.get(url, params=params, headers=headers, timeout=timeout)
            if resp.status_code in RETRY_STATUSES and attempt < max_retries:
                delay = retry_base_delay * (2**attempt)
                logger.warning(
                    "%s returned %d, retrying in %.1fs (attempt %d/%d)",
                    url, resp.status_code, delay, attempt + 1, max_retries,
                )
                time.sleep(delay)
                continue
            resp.raise_for_status()
            return resp.json()
        except httpx.RequestError as e:
            last_error = e
            if attempt < max_retries:
                delay = retry_base_delay * (2**attempt)
                logger.warning("Request error for %s, retrying in %.1fs: %s", url, delay, e)
                time.sleep(delay)
                continue
            raise

    assert last_error is not None
    raise last_error
