"""Tests for the ComfyUI health probe."""

import errno
import socket
from unittest.mock import MagicMock

import pytest
import requests

from comfydeck.health import BackendProber, HealthStatus, describe_error, describe_status

URL = "http://127.0.0.1:8188"


@pytest.fixture
def mock_session():
    return MagicMock()


def _connection_refused() -> requests.ConnectionError:
    # Shape of what requests raises when nothing listens on the port
    refused = ConnectionRefusedError(errno.ECONNREFUSED, "Connection refused")
    try:
        try:
            raise refused
        except ConnectionRefusedError as e:
            raise OSError("Failed to establish a new connection") from e
    except OSError as wrapped:
        return requests.ConnectionError(wrapped)


def test_200_means_running(mock_session):
    mock_session.get.return_value = MagicMock(status_code=200)

    status = BackendProber(session=mock_session).probe(URL)

    assert status.reachable is True
    assert status.status_code == 200
    assert status.message == "ComfyUI is running."
    mock_session.get.assert_called_once_with(URL, timeout=None)


def _closed_local_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_closed_port_is_connection_refused():
    """Test classification against the exception chain requests really raises"""
    url = f"http://127.0.0.1:{_closed_local_port()}"

    status = BackendProber(timeout=5.0).probe(url)

    assert status.reachable is False
    assert status.error_code == "ECONNREFUSED"
    assert "config.json" in status.message


def test_other_status_is_reachable_but_unknown(mock_session):
    mock_session.get.return_value = MagicMock(status_code=404)

    status = BackendProber(session=mock_session).probe(URL)

    assert status.reachable is True
    assert status.status_code == 404
    assert status.message == "Unknown response."


def test_connection_refused_has_actionable_message(mock_session):
    mock_session.get.side_effect = _connection_refused()

    status = BackendProber(session=mock_session).probe(URL)

    assert status.reachable is False
    assert status.error_code == "ECONNREFUSED"
    assert "running" in status.message
    assert "config.json" in status.message
    assert status.summary().startswith("ECONNREFUSED: ")


def test_other_errors_are_reported_verbatim(mock_session):
    mock_session.get.side_effect = requests.Timeout("read timed out")

    status = BackendProber(session=mock_session).probe(URL)

    assert status.reachable is False
    assert status.error_code == "Timeout"
    assert status.message == "read timed out"


def test_other_errno_is_named(mock_session):
    mock_session.get.side_effect = requests.ConnectionError(OSError(errno.EHOSTUNREACH, "No route to host"))

    status = BackendProber(session=mock_session).probe(URL)

    assert status.error_code == "EHOSTUNREACH"
    assert "No route to host" in status.message


def test_invalid_url_is_not_raised():
    status = BackendProber().probe("not a url")

    assert status.reachable is False
    assert status.error_code == "MissingSchema"


def test_probe_tries_once(mock_session):
    mock_session.get.side_effect = _connection_refused()

    BackendProber(session=mock_session).probe(URL)

    assert mock_session.get.call_count == 1


def test_lookup_defaults():
    assert describe_status(200) == "ComfyUI is running."
    assert describe_status(500) == "Unknown response."
    assert describe_error(None, ValueError("boom")) == "boom"


def test_health_status_serialises():
    status = HealthStatus(url=URL, reachable=True, status_code=200, message="ComfyUI is running.")

    assert status.model_dump()["status_code"] == 200
    assert status.summary() == "200: ComfyUI is running."
