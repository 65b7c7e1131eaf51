"""
Integration tests for ClobClient.

Tests the full authenticate -> place -> cancel flow with mocked HTTP responses.
"""

from unittest.mock import patch

import orjson
import pytest

from clob_signer import ClobClient, Side
from clob_signer.config import ClobSignerSettings
from clob_signer.exceptions import (
    AuthenticationFailedError,
    InputValidationError,
    NotAuthenticatedError,
)


@pytest.fixture
def client(private_key, settings):
    c = ClobClient(private_key, settings=settings)
    with patch.object(c.clob.session, "request") as request:
        c.http = request
        yield c
    c.close()


@pytest.fixture
def derive_response(make_response, zero_secret):
    return make_response(200, {"apiKey": "k", "secret": zero_secret, "passphrase": "p"})


class TestIdentity:

    def test_address(self, client, expected_address):
        assert client.address == expected_address
        assert not client.is_authenticated

    def test_invalid_key(self, settings):
        with pytest.raises(InputValidationError):
            ClobClient("0xdeadbeef", settings=settings)

    def test_repr_hides_key(self, client, private_key, expected_address):
        text = repr(client)
        assert text == f"ClobClient(address={expected_address}, authenticated=False)"
        assert private_key[2:] not in text

    def test_from_settings(self, private_key, expected_address):
        settings = ClobSignerSettings(_env_file=None, private_key=private_key)
        client = ClobClient.from_settings(settings)
        try:
            assert client.address == expected_address
        finally:
            client.close()

    def test_from_settings_without_key(self, settings):
        with pytest.raises(InputValidationError):
            ClobClient.from_settings(settings)


class TestUnauthenticated:

    def test_place_requires_authentication(self, client):
        with pytest.raises(NotAuthenticatedError):
            client.place_limit_order("123", "0.05", "100", Side.BUY)
        client.http.assert_not_called()

    def test_cancel_requires_authentication(self, client):
        with pytest.raises(NotAuthenticatedError):
            client.cancel_order("0xabc")
        client.http.assert_not_called()

    def test_l2_headers_require_authentication(self, client):
        with pytest.raises(NotAuthenticatedError):
            client.l2_headers("GET", "/orders")

    def test_build_order_does_not_need_session(self, client, expected_address):
        signed = client.build_order("123", "0.05", "100", Side.BUY)
        assert signed.order.maker == expected_address
        client.http.assert_not_called()


class TestTradingFlow:

    def test_authenticate(self, client, derive_response):
        client.http.return_value = derive_response

        credentials = client.authenticate()

        assert client.is_authenticated
        assert credentials.api_key == "k"
        assert client.l2_headers("GET", "/orders")["POLY_API_KEY"] == "k"

    def test_failed_authentication(self, client, make_response):
        client.http.return_value = make_response(401, {"error": "Unauthorized"})

        with pytest.raises(AuthenticationFailedError):
            client.authenticate()
        assert not client.is_authenticated

    def test_place_and_cancel(self, client, derive_response, make_response, expected_address):
        client.http.side_effect = [
            derive_response,
            make_response(200, {"success": True, "orderID": "0xabc", "status": "live"}),
            make_response(404, {"error": "order not found"}),
        ]

        client.authenticate()
        result = client.place_limit_order("123", "0.05", "100", Side.BUY)
        cancelled = client.cancel_order(result.order_id)

        assert result.success
        assert result.order_id == "0xabc"
        assert cancelled is False

        body = orjson.loads(client.http.call_args_list[1].kwargs["data"])
        assert body["owner"] == expected_address
        assert body["orderType"] == "GTC"
        assert body["order"]["makerAmount"] == "5000000"
        assert body["order"]["takerAmount"] == "100000000"

    def test_sell_amounts_swap(self, client, derive_response, make_response):
        client.http.side_effect = [
            derive_response,
            make_response(200, {"success": True, "orderID": "0xdef"}),
        ]

        client.authenticate()
        client.place_limit_order("123", "0.05", "100", Side.SELL)

        body = orjson.loads(client.http.call_args_list[1].kwargs["data"])
        assert body["order"]["makerAmount"] == "100000000"
        assert body["order"]["takerAmount"] == "5000000"
        assert body["order"]["side"] == "SELL"

    def test_rejection_is_returned(self, client, derive_response, make_response):
        client.http.side_effect = [
            derive_response,
            make_response(200, {"success": False, "errorMsg": "market closed"}),
        ]

        client.authenticate()
        result = client.place_limit_order("123", "0.05", "100", Side.BUY)

        assert not result.success
        assert result.error_msg == "market closed"

    def test_invalid_order_not_sent(self, client, derive_response):
        client.http.return_value = derive_response
        client.authenticate()

        with pytest.raises(InputValidationError):
            client.place_limit_order("not-a-token", "0.05", "100", Side.BUY)
        assert client.http.call_count == 1


class TestLifecycle:

    def test_context_manager_closes(self, private_key, settings):
        with patch("clob_signer.client.CLOBAPI.close") as close:
            with ClobClient(private_key, settings=settings) as client:
                assert client.address
        close.assert_called_once()
