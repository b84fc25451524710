"""
Outbound HTTP relay.

All calls to the identity service and the game backend go through
`relay_post`. It never raises: transport failures come back as None so
callers only have to inspect the parsed body.
"""
from typing import Any, Optional
import json

import httpx

from account_relay.config import settings
from account_relay.logger import logger


async def relay_post(
    url: str,
    payload: Any = None,
    headers: Optional[dict] = None,
    params: Optional[dict] = None,
    timeout: Optional[float] = None,
) -> Any:
    """
    POST `payload` as JSON and return the parsed response body.

    Any status from 200 to 599 counts as a response, so backend error
    bodies reach the caller. Returns the decoded JSON, the raw text when
    the body is not JSON, or None on an empty body, a status outside that
    range, a timeout or any transport error. Each call is attempted once.
    """
    request_headers = {"Content-Type": "application/json"}
    if headers:
        request_headers.update(headers)

    try:
        body = json.dumps(payload)
    except (TypeError, ValueError) as e:
        logger.error(f"Relay payload for {url} is not JSON serializable: {e}")
        return None

    try:
        async with httpx.AsyncClient(timeout=timeout or settings.RELAY_TIMEOUT) as client:
            response = await client.post(
                url,
                content=body,
                headers=request_headers,
                params=params,
            )
    except httpx.TimeoutException:
        logger.warning(f"Relay timed out: {url}")
        return None
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"Relay failed for {url}: {type(e).__name__}")
        return None

    if not 200 <= response.status_code < 600:
        logger.warning(f"Relay got unexpected status {response.status_code} from {url}")
        return None

    if response.status_code >= 400:
        logger.debug(f"Relay got status {response.status_code} from {url}")

    try:
        return response.json()
    except ValueError:
        text = response.text
        return text if text else None
