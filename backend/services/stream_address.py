"""Look up push/pull (RTMP push, FLV play) addresses from the demo stream backend."""

from __future__ import annotations

import logging

import httpx

from models.usersig import StreamAddresses

logger = logging.getLogger(__name__)

_REQUEST_HEADERS = {"Content-Type": "application/json; charset=UTF-8"}


async def fetch_stream_addresses(
    url: str,
    *,
    timeout: float = 30.0,
    client: httpx.AsyncClient | None = None,
) -> StreamAddresses | None:
    """
    GET ``url`` and read ``url_push`` / ``url_play_flv`` from its JSON body.

    Every failure (bad URL, transport error, non-2xx, bad JSON, missing field)
    is logged and reported as None. A caller-supplied client is not closed.
    """
    if not url:
        logger.warning("[stream_address] No lookup URL configured.")
        return None

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
                response = await own_client.get(url, headers=_REQUEST_HEADERS)
        else:
            response = await client.get(
                url, headers=_REQUEST_HEADERS, timeout=timeout, follow_redirects=True
            )
        response.raise_for_status()
        body = response.json()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("[stream_address] Request to %s failed: %s", url, exc)
        return None
    except ValueError as exc:
        logger.warning("[stream_address] Response from %s is not JSON: %s", url, exc)
        return None

    if not isinstance(body, dict):
        logger.warning("[stream_address] Expected a JSON object from %s, got %s", url, type(body).__name__)
        return None
    push_url = body.get("url_push")
    play_url = body.get("url_play_flv")
    if not isinstance(push_url, str) or not isinstance(play_url, str):
        logger.warning("[stream_address] url_push/url_play_flv missing in response from %s", url)
        return None

    logger.info("[stream_address] push URL=%s play URL=%s", push_url, play_url)
    return StreamAddresses(push_url=push_url, play_url=play_url)
