"""Shared fixtures for clob_signer tests."""

import base64
from unittest.mock import Mock

import orjson
import pytest
import requests

from clob_signer.config import ClobSignerSettings
from clob_signer.signing.identity import AccountIdentity
from clob_signer.auth.credentials import Session, SessionCredentials

# Well-known test vectors (never funded)
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

ZERO_SECRET = base64.urlsafe_b64encode(b"\x00" * 32).decode()


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return ClobSignerSettings(
        _env_file=None,
        clob_url="https://clob.test",
        private_key=None,
        enable_metrics=False,
    )


@pytest.fixture
def private_key():
    return TEST_PRIVATE_KEY


@pytest.fixture
def expected_address():
    return TEST_ADDRESS


@pytest.fixture
def zero_secret():
    """base64url of 32 zero bytes."""
    return ZERO_SECRET


@pytest.fixture
def identity():
    return AccountIdentity(TEST_PRIVATE_KEY)


@pytest.fixture
def credentials():
    return SessionCredentials(api_key="k", api_secret=ZERO_SECRET, api_passphrase="p")


@pytest.fixture
def session(credentials):
    """Authenticated session for TEST_ADDRESS."""
    s = Session(TEST_ADDRESS)
    s.establish(credentials)
    return s


@pytest.fixture
def make_response():
    """Factory for canned HTTP responses."""
    def _make(status_code=200, payload=None, raw=None):
        if raw is None:
            raw = orjson.dumps(payload) if payload is not None else b""
        response = Mock(spec=requests.Response)
        response.status_code = status_code
        response.content = raw
        response.text = raw.decode("utf-8", errors="replace")
        return response
    return _make
