"""Small helpers shared by the HTTP integrations."""

from __future__ import annotations

from typing import Any

import requests

from ..errors import RemoteError
from ..logutils import logger


def is_success(resp: Any) -> bool:
    """Return ``True`` for 2xx responses."""
    status = getattr(resp, "status_code", 0) or 0
    return 200 <= int(status) < 300


def describe(resp: Any, limit: int = 200) -> str:
    """Return ``HTTP <status>`` followed by the start of the response body."""
    status = getattr(resp, "status_code", "n/a")
    text = getattr(resp, "text", "") or ""
    return f"HTTP {status}: {text[:limit]}" if text else f"HTTP {status}"


def send(
    session: Any,
    method: str,
    url: str,
    what: str,
    *,
    log_body: bool = True,
    **kwargs: Any,
) -> Any:
    """Issue ``method`` on ``session`` and wrap transport failures in :class:`RemoteError`.

    Pass ``log_body=False`` for responses carrying secrets.
    """
    logger.debug(f"{method.upper()} {url}")
    try:
        resp = getattr(session, method)(url, **kwargs)
    except requests.RequestException as exc:
        raise RemoteError(f"{what} failed: {exc}") from exc
    if log_body:
        logger.debug(f"Response {describe(resp)}")
    else:
        logger.debug(f"Response HTTP {getattr(resp, 'status_code', 'n/a')}")
    return resp


def read_json(resp: Any, what: str) -> Any:
    """Return the decoded JSON body of a successful response.

    Raises:
        RemoteError: on a non-2xx status or an undecodable body.
    """
    if not is_success(resp):
        raise RemoteError(f"{what} failed with {describe(resp)}")
    try:
        return resp.json()
    except ValueError as exc:
        raise RemoteError(f"Invalid JSON in {what} response: {exc}") from exc
