from types import SimpleNamespace

import pytest
from loguru import logger


class FakeSession:
    """Stand-in for ``requests.Session`` replaying canned responses in order."""

    def __init__(self, responses=None):
        self.headers = {}
        self.calls = []
        self.closed = False
        self._responses = list(responses or [])

    def _next(self, method, url, kwargs):
        self.calls.append(
            SimpleNamespace(method=method, url=url, kwargs=kwargs, headers=dict(self.headers))
        )
        if not self._responses:
            raise AssertionError(f"unexpected {method} {url}")
        resp = self._responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp

    def get(self, url, **kwargs):
        return self._next("GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, kwargs)

    def close(self):
        self.closed = True


def make_response(status=200, payload=None, text=""):
    resp = SimpleNamespace(status_code=status, text=text)

    def json():
        if isinstance(payload, Exception):
            raise payload
        return payload

    resp.json = json
    return resp


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def response():
    return make_response


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from real credentials, config files and log sinks."""
    for name in (
        "CLIENT_ID",
        "CLIENT_SECRET",
        "SHARESIGHT_CONFIG",
        "SHARESIGHT_ENV_FILE",
        "SHARESIGHT_API_BASE_URL",
        "SHARESIGHT_LOG_LEVEL",
        "SHARESIGHT_DEBUG",
    ):
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    yield
    logger.remove()
