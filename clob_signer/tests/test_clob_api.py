"""
Tests for the CLOB HTTP client.

requests.Session.request is mocked; bodies and headers are inspected as
they would go on the wire.
"""

from unittest.mock import Mock

import orjson
import pytest
import requests

from clob_signer.api.clob import CLOBAPI
from clob_signer.auth.credentials import Session
from clob_signer.auth.request_signer import RequestSigner, verify_hmac_signature
from clob_signer.exceptions import (
    AuthenticationFailedError,
    ExchangeRejectionError,
    NotAuthenticatedError,
    RequestTimeoutError,
    TransportError,
)
from clob_signer.models import OrderType, Side
from clob_signer.trading.order_builder import OrderBuilder


@pytest.fixture
def api(settings):
    client = CLOBAPI(settings=settings)
    client.session.request = Mock()
    yield client
    client.close()


@pytest.fixture
def signer(session):
    return RequestSigner(session)


@pytest.fixture
def signed_order(identity):
    return OrderBuilder(identity).build_signed_order("123", "0.05", "100", Side.BUY)


ATTESTATION = {
    "address": "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23",
    "timestamp": "1700000000",
    "nonce": "0",
    "message": "This message attests that I control the given wallet",
    "signature": "0x" + "11" * 65,
}


class TestDeriveApiKey:

    def test_success(self, api, make_response, zero_secret):
        api.session.request.return_value = make_response(
            200, {"apiKey": "k", "secret": zero_secret, "passphrase": "p"}
        )

        result = api.derive_api_key(ATTESTATION)

        assert result.api_key == "k"
        assert result.secret == zero_secret
        assert result.passphrase == "p"

        kwargs = api.session.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["url"] == "https://clob.test/auth/derive-api-key"
        assert orjson.loads(kwargs["data"]) == ATTESTATION
        assert kwargs["timeout"] == (10.0, 30.0)

    @pytest.mark.parametrize("status", [400, 401, 500])
    def test_non_2xx(self, api, make_response, status):
        api.session.request.return_value = make_response(status, {"error": "Unauthorized"})

        with pytest.raises(AuthenticationFailedError) as exc_info:
            api.derive_api_key(ATTESTATION)

        assert exc_info.value.status_code == status
        assert "Unauthorized" in exc_info.value.response_body

    def test_non_json_body(self, api, make_response):
        api.session.request.return_value = make_response(200, raw=b"<html>oops</html>")

        with pytest.raises(AuthenticationFailedError):
            api.derive_api_key(ATTESTATION)

    @pytest.mark.parametrize("payload", [
        {"apiKey": "k", "secret": "s"},
        {"apiKey": "", "secret": "s", "passphrase": "p"},
        ["k", "s", "p"],
    ])
    def test_malformed_body(self, api, make_response, payload):
        api.session.request.return_value = make_response(200, payload)

        with pytest.raises(AuthenticationFailedError):
            api.derive_api_key(ATTESTATION)

    def test_timeout(self, api):
        api.session.request.side_effect = requests.exceptions.ReadTimeout("slow")

        with pytest.raises(RequestTimeoutError):
            api.derive_api_key(ATTESTATION)

    def test_connection_error(self, api):
        api.session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(TransportError):
            api.derive_api_key(ATTESTATION)


class TestPostOrder:

    def test_accepted(self, api, signer, signed_order, make_response):
        api.session.request.return_value = make_response(
            200, {"success": True, "orderID": "0xabc", "status": "live", "errorMsg": ""}
        )

        result = api.post_order(signed_order, signer)

        assert result.success
        assert result.order_id == "0xabc"
        assert result.status == "live"
        assert result.error_msg is None
        assert result.raise_for_rejection() is result

    def test_body_and_headers(self, api, signer, signed_order, make_response, zero_secret):
        api.session.request.return_value = make_response(200, {"success": True, "orderID": "1"})

        api.post_order(signed_order, signer, OrderType.GTC)

        kwargs = api.session.request.call_args.kwargs
        body = kwargs["data"]
        headers = kwargs["headers"]

        assert kwargs["method"] == "POST"
        assert kwargs["url"] == "https://clob.test/order"
        assert orjson.loads(body) == signed_order.to_payload(
            owner=signer.session.address, order_type=OrderType.GTC
        )
        # Signature covers exactly the bytes sent
        assert verify_hmac_signature(
            zero_secret,
            headers["POLY_SIGNATURE"],
            headers["POLY_TIMESTAMP"],
            "POST",
            "/order",
            body,
        )
        assert headers["POLY_ADDRESS"] == signer.session.address

    def test_rejected_with_2xx(self, api, signer, signed_order, make_response):
        api.session.request.return_value = make_response(
            200, {"success": False, "errorMsg": "not enough balance / allowance"}
        )

        result = api.post_order(signed_order, signer)

        assert not result.success
        assert result.error_msg == "not enough balance / allowance"
        with pytest.raises(ExchangeRejectionError) as exc_info:
            result.raise_for_rejection()
        assert exc_info.value.reason == "not enough balance / allowance"

    def test_rejected_with_4xx(self, api, signer, signed_order, make_response):
        api.session.request.return_value = make_response(400, {"error": "invalid signature"})

        result = api.post_order(signed_order, signer)

        assert not result.success
        assert result.error_msg == "invalid signature"

    def test_server_error_with_json_body(self, api, signer, signed_order, make_response):
        api.session.request.return_value = make_response(503, {"error": "service unavailable"})

        with pytest.raises(TransportError) as exc_info:
            api.post_order(signed_order, signer)
        assert exc_info.value.status_code == 503
        assert "service unavailable" in exc_info.value.response_body

    def test_non_json_response(self, api, signer, signed_order, make_response):
        api.session.request.return_value = make_response(502, raw=b"Bad Gateway")

        with pytest.raises(TransportError) as exc_info:
            api.post_order(signed_order, signer)
        assert exc_info.value.status_code == 502

    def test_non_object_response(self, api, signer, signed_order, make_response):
        api.session.request.return_value = make_response(200, [1, 2, 3])

        with pytest.raises(TransportError):
            api.post_order(signed_order, signer)

    def test_timeout(self, api, signer, signed_order):
        api.session.request.side_effect = requests.exceptions.ConnectTimeout("slow")

        with pytest.raises(RequestTimeoutError):
            api.post_order(signed_order, signer)

    def test_requires_session(self, api, signed_order, expected_address):
        unauthenticated = RequestSigner(Session(expected_address))

        with pytest.raises(NotAuthenticatedError):
            api.post_order(signed_order, unauthenticated)
        api.session.request.assert_not_called()


class TestCancelOrder:

    @pytest.mark.parametrize("status,expected", [
        (200, True),
        (204, True),
        (404, False),
        (400, False),
        (500, False),
    ])
    def test_status_decides(self, api, signer, make_response, status, expected):
        api.session.request.return_value = make_response(status, {"not_canceled": {}})
        assert api.cancel_order("0xabc", signer) is expected

    def test_non_json_404_does_not_raise(self, api, signer, make_response):
        api.session.request.return_value = make_response(404, raw=b"Not Found")
        assert api.cancel_order("0xabc", signer) is False

    def test_request(self, api, signer, make_response, zero_secret):
        api.session.request.return_value = make_response(200, {"canceled": ["0xabc"]})

        api.cancel_order("0xabc", signer)

        kwargs = api.session.request.call_args.kwargs
        assert kwargs["method"] == "DELETE"
        assert kwargs["url"] == "https://clob.test/order"
        assert orjson.loads(kwargs["data"]) == {"orderID": "0xabc"}
        assert verify_hmac_signature(
            zero_secret,
            kwargs["headers"]["POLY_SIGNATURE"],
            kwargs["headers"]["POLY_TIMESTAMP"],
            "DELETE",
            "/order",
            kwargs["data"],
        )

    def test_transport_error_raises(self, api, signer):
        api.session.request.side_effect = requests.exceptions.ConnectionError("reset")

        with pytest.raises(TransportError):
            api.cancel_order("0xabc", signer)
