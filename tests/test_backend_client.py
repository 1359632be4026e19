import pytest
import requests
from unittest.mock import patch, MagicMock

from infrastructure.api.backend_client import (
    BackendClient,
    BackendRejectedError,
    BackendTransportError,
)


@pytest.fixture
def client():
    return BackendClient("http://api.test/api/", timeout=5)


def _response(status_code, body=None):
    resp = MagicMock()
    resp.status_code = status_code
    if body is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = body
    return resp


@patch('requests.request')
def test_login_posts_credentials(mock_request, client):
    mock_request.return_value = _response(200, {"token": "abc", "user_type": "amateur"})

    data = client.login("user@test.com", "secret")

    assert data["token"] == "abc"
    args, kwargs = mock_request.call_args
    assert args == ("POST", "http://api.test/api/login/")
    assert kwargs["json"] == {"email": "user@test.com", "password": "secret"}
    assert kwargs["timeout"] == 5
    assert "Authorization" not in kwargs["headers"]


@patch('requests.request')
def test_logout_sends_bearer_token(mock_request, client):
    mock_request.return_value = _response(205)

    client.logout("abc", "refresh-1")

    args, kwargs = mock_request.call_args
    assert args == ("POST", "http://api.test/api/logout/")
    assert kwargs["headers"]["Authorization"] == "Bearer abc"
    assert kwargs["json"] == {"refresh_token": "refresh-1"}


@patch('requests.request')
def test_verify_session_uses_get(mock_request, client):
    mock_request.return_value = _response(200, {})

    client.verify_session("abc")

    args, kwargs = mock_request.call_args
    assert args == ("GET", "http://api.test/api/session/verify/")
    assert kwargs["headers"]["Authorization"] == "Bearer abc"


@patch('requests.request')
def test_reset_endpoints_payloads(mock_request, client):
    mock_request.return_value = _response(200, {"ok": True})

    client.request_password_reset("user@test.com")
    client.verify_reset_code("user@test.com", "123456")
    client.confirm_password_reset("user@test.com", "123456", "Passw0rd", "Passw0rd")

    urls = [call.args[1] for call in mock_request.call_args_list]
    assert urls == [
        "http://api.test/api/password/reset/request/",
        "http://api.test/api/password/reset/verify/",
        "http://api.test/api/password/reset/confirm/",
    ]
    assert mock_request.call_args_list[1].kwargs["json"] == {"email": "user@test.com", "code": "123456"}
    assert mock_request.call_args_list[2].kwargs["json"] == {
        "email": "user@test.com",
        "code": "123456",
        "new_password": "Passw0rd",
        "confirm_password": "Passw0rd",
    }


@patch('requests.request')
def test_rejection_uses_server_error_message(mock_request, client):
    mock_request.return_value = _response(400, {"error": "Code expired"})

    with pytest.raises(BackendRejectedError) as excinfo:
        client.verify_reset_code("user@test.com", "000000")

    assert str(excinfo.value) == "Code expired"
    assert excinfo.value.status_code == 400


@patch('requests.request')
def test_rejection_without_json_falls_back(mock_request, client):
    mock_request.return_value = _response(500)

    with pytest.raises(BackendRejectedError) as excinfo:
        client.login("user@test.com", "secret")

    assert str(excinfo.value) == "Login failed"


@patch('requests.request')
def test_network_error_is_transport_failure(mock_request, client):
    mock_request.side_effect = requests.ConnectionError("Connection Refused")

    with pytest.raises(BackendTransportError):
        client.request_password_reset("user@test.com")


@patch('requests.request')
def test_empty_success_body_returns_empty_dict(mock_request, client):
    mock_request.return_value = _response(204)

    assert client.request_password_reset("user@test.com") == {}
