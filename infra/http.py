"""Lightweight blocking helper for reading JSON from the maze server."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Any


def join_url(base_url: str, path: str) -> str:
    """Join a base URL and an endpoint path with exactly one slash."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def fetch_json(url: str, timeout: float = 2.0) -> Any:
    """
    Fetch a URL and decode the body as JSON.

    Args:
        url: Absolute URL to GET
        timeout: Socket timeout in seconds. It bounds each connect and read,
            not the whole request, so a server that trickles its body can
            take longer. Callers that need a hard deadline wrap the call
            (see ``HttpDataSource``).

    Returns:
        Decoded JSON value.

    Raises:
        RuntimeError: For connection, HTTP or parse errors.
    """
    headers = {"Accept": "application/json"}

    req = urllib.request.Request(url, headers=headers)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:  # nosec B310 (external HTTP call expected)
            return json.load(resp)
    except urllib.error.HTTPError as exc:
        raise RuntimeError(f"{url} returned HTTP {exc.code}: {exc.reason}") from exc
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"{url} returned invalid JSON: {exc}") from exc
    except Exception as exc:
        raise RuntimeError(f"Failed to fetch {url}: {exc}") from exc
