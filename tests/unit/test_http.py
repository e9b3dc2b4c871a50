"""Unit tests for HttpClient."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from easysms.errors import HttpError
from easysms.http import DEFAULT_TIMEOUT, HttpClient


def make_response(status_code=200, json_body=None, text="", url="https://sms.test/"):
    response = MagicMock()
    response.status_code = status_code
    response.url = url
    response.text = text
    if isinstance(json_body, Exception):
        response.json.side_effect = json_body
    else:
        response.json.return_value = json_body
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session, mock_logger):
    return HttpClient(session=session, logger=mock_logger)


@pytest.mark.unit
class TestHttpClient:

    def test_default_timeout(self, session):
        assert HttpClient(session=session).timeout == DEFAULT_TIMEOUT == 5.0

    def test_get_parses_json(self, client, session):
        session.request.return_value = make_response(json_body={"Code": "OK"})

        result = client.get("https://sms.test/", params={"a": "1"})

        assert result == {"Code": "OK"}
        session.request.assert_called_once_with(
            "GET", "https://sms.test/", timeout=5.0, params={"a": "1"}, headers=None
        )

    def test_explicit_timeout_wins(self, client, session):
        session.request.return_value = make_response(json_body={})

        client.get("https://sms.test/", timeout=1.5)

        assert session.request.call_args.kwargs["timeout"] == 1.5

    def test_post_form_encodes(self, client, session):
        session.request.return_value = make_response(json_body={"code": 0})

        client.post("https://sms.test/send", data={"mobile": "1"})

        kwargs = session.request.call_args.kwargs
        assert kwargs["data"] == {"mobile": "1"}
        assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"

    def test_post_keeps_caller_headers(self, client, session):
        session.request.return_value = make_response(json_body={})
        headers = {"Authorization": "Basic abc"}

        client.post("https://sms.test/send", headers=headers)

        sent = session.request.call_args.kwargs["headers"]
        assert sent["Authorization"] == "Basic abc"
        assert headers == {"Authorization": "Basic abc"}

    def test_post_json_serializes_payload(self, client, session):
        session.request.return_value = make_response(json_body={"Response": {}})

        client.post_json("https://sms.test/", payload={"PhoneNumberSet": ["+1"]})

        kwargs = session.request.call_args.kwargs
        assert json.loads(kwargs["data"]) == {"PhoneNumberSet": ["+1"]}
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_get_text_returns_body(self, client, session):
        session.request.return_value = make_response(text="0")

        assert client.get_text("https://sms.test/") == "0"

    def test_non_2xx_body_is_returned(self, client, session):
        """Providers report errors in the body, so status codes are not raised."""
        session.request.return_value = make_response(
            status_code=400, json_body={"code": 2, "msg": "bad mobile"}
        )

        assert client.get("https://sms.test/")["code"] == 2

    def test_network_error_raises_http_error(self, client, session, mock_logger):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(HttpError) as exc_info:
            client.get("https://sms.test/")

        assert exc_info.value.url == "https://sms.test/"
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)
        mock_logger.warning.assert_called_once()

    def test_invalid_json_raises_http_error(self, client, session):
        session.request.return_value = make_response(
            status_code=502, json_body=ValueError("no json")
        )

        with pytest.raises(HttpError, match="invalid JSON response") as exc_info:
            client.get("https://sms.test/")

        assert exc_info.value.status_code == 502

    def test_non_object_json_raises_http_error(self, client, session):
        session.request.return_value = make_response(json_body=["not", "a", "dict"])

        with pytest.raises(HttpError, match="unexpected JSON response type list"):
            client.get("https://sms.test/")

    def test_close_closes_session(self, client, session):
        client.close()

        session.close.assert_called_once()
