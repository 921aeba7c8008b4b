"""Tests for the OAuth2 client-credentials exchange."""

import pytest
import requests
from loguru import logger

from sharesight_updater.config import AppConfig
from sharesight_updater.errors import AuthenticationError, RemoteError
from sharesight_updater.integrations.sharesight import SharesightClient, authenticate
from sharesight_updater.models import Credentials

CREDS = Credentials(client_id="my-client", client_secret="s3cret")


def test_authenticate_posts_client_credentials(fake_session, response):
    session = fake_session([response(200, {"access_token": "tok-123456789"})])

    client = authenticate(CREDS, AppConfig(), session=session)

    assert isinstance(client, SharesightClient)
    call = session.calls[0]
    assert call.method == "POST"
    assert call.url == "https://api.sharesight.com/oauth2/token"
    assert call.kwargs["data"] == {
        "grant_type": "client_credentials",
        "client_id": "my-client",
        "client_secret": "s3cret",
    }
    assert "Authorization" not in call.headers
    assert session.headers["Authorization"] == "Bearer tok-123456789"
    assert session.headers["User-Agent"] == AppConfig().USER_AGENT
    assert not session.closed


def test_authenticate_uses_configured_token_url(fake_session, response):
    session = fake_session([response(200, {"access_token": "tok"})])
    config = AppConfig(TOKEN_URL="http://localhost:9999/oauth2/token")

    authenticate(CREDS, config, session=session)

    assert session.calls[0].url == "http://localhost:9999/oauth2/token"


def test_authenticate_rejects_non_success_status(fake_session, response):
    session = fake_session([response(401, {"error": "invalid_client"}, text="invalid_client")])

    with pytest.raises(AuthenticationError) as excinfo:
        authenticate(CREDS, session=session)

    assert excinfo.value.status_code == 401
    assert excinfo.value.exit_code == 4
    assert session.closed
    assert len(session.calls) == 1


def test_authenticate_requires_access_token(fake_session, response):
    session = fake_session([response(200, {"token_type": "Bearer"})])

    with pytest.raises(AuthenticationError, match="access_token"):
        authenticate(CREDS, session=session)
    assert session.closed


def test_authenticate_rejects_invalid_json(fake_session, response):
    session = fake_session([response(200, ValueError("Expecting value"))])

    with pytest.raises(AuthenticationError, match="Invalid auth response json"):
        authenticate(CREDS, session=session)


def test_authenticate_wraps_transport_errors(fake_session):
    session = fake_session([requests.ConnectionError("connection refused")])

    with pytest.raises(RemoteError, match="connection refused"):
        authenticate(CREDS, session=session)
    assert session.closed


def test_authenticate_never_logs_full_token(fake_session, response):
    token = "abcdefghijklmnopqrstuvwxyz"
    body = '{"access_token": "' + token + '"}'
    session = fake_session([response(200, {"access_token": token}, text=body)])
    messages = []
    logger.add(lambda msg: messages.append(str(msg)), level="DEBUG")

    authenticate(CREDS, session=session)

    assert messages
    assert all(token not in m for m in messages)
    assert any("abcde***" in m for m in messages)
    assert all("s3cret" not in m for m in messages)
