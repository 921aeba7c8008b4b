"""OAuth2 client-credentials authentication against Sharesight."""

from __future__ import annotations

from typing import Any

import requests

from ...config import AppConfig
from ...errors import AuthenticationError
from ...logutils import logger, mask_secret
from ...models import Credentials
from ..http import describe, is_success, send
from .client import SharesightClient


def _request_token(session: Any, credentials: Credentials, config: AppConfig) -> str:
    params = {
        "grant_type": "client_credentials",
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
    }
    resp = send(
        session,
        "post",
        config.TOKEN_URL,
        "Authentication",
        log_body=False,
        data=params,
        timeout=config.REQUEST_TIMEOUT,
    )
    if not is_success(resp):
        status = getattr(resp, "status_code", None)
        raise AuthenticationError(f"Error during auth: {describe(resp)}", status_code=status)

    try:
        payload = resp.json()
    except ValueError as exc:
        raise AuthenticationError(f"Invalid auth response json: {exc}") from exc

    token = payload.get("access_token") if isinstance(payload, dict) else None
    if not isinstance(token, str) or not token:
        raise AuthenticationError("Invalid auth response json: no access_token")
    return token


def authenticate(
    credentials: Credentials,
    config: AppConfig | None = None,
    session: Any | None = None,
) -> SharesightClient:
    """Exchange ``credentials`` for a bearer token and return a ready client.

    Every request made through the returned client carries
    ``Authorization: Bearer <token>``. No token caching or refresh: each call
    performs a fresh token request.

    Raises:
        AuthenticationError: when the token endpoint answers with a non-2xx
            status or without an ``access_token``.
        RemoteError: when the token endpoint cannot be reached.
    """
    config = config or AppConfig()
    session = session if session is not None else requests.Session()

    try:
        token = _request_token(session, credentials, config)
    except Exception:
        session.close()
        raise

    session.headers.update(
        {
            "Authorization": f"Bearer {token}",
            "User-Agent": config.USER_AGENT,
        }
    )
    logger.info(f"Authenticated client {credentials.client_id}, token {mask_secret(token)}")
    return SharesightClient(session, config)
