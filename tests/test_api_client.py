"""Tests for HTTP error mapping in the API client."""

import pytest
import requests

from scouting.api_client import ApiError, OfflineError, ScoutingApiClient
from scouting.form_engine import FAILED


class StaticSession:
    """Answers every request with the same status and body."""

    def __init__(self, status_code=200, body=b"", error=None):
        self.headers = {}
        self.status_code = status_code
        self.body = body
        self.error = error

    def request(self, method, url, timeout=None, **kwargs):
        if self.error is not None:
            raise self.error
        response = requests.Response()
        response.status_code = self.status_code
        response._content = self.body
        response.encoding = "utf-8"
        response.url = url
        return response


def test_non_json_success_body_raises_api_error():
    api = ScoutingApiClient(
        "http://scouting.test/api",
        session=StaticSession(body=b"<html>captive portal</html>"),
    )

    with pytest.raises(ApiError) as excinfo:
        api.create_entry({"teamNumber": "611"})

    assert not isinstance(excinfo.value, OfflineError)
    assert excinfo.value.status_code == 200
    assert str(excinfo.value) == "Invalid response from server"


def test_error_status_uses_server_message():
    api = ScoutingApiClient(
        "http://scouting.test/api",
        session=StaticSession(status_code=404, body=b'{"message": "Season not found"}'),
    )

    with pytest.raises(ApiError) as excinfo:
        api.get_scouting_config("nope")

    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "Season not found"


def test_timeout_is_offline():
    api = ScoutingApiClient(
        "http://scouting.test/api",
        session=StaticSession(error=requests.Timeout("read timed out")),
    )

    with pytest.raises(OfflineError):
        api.get_current_season()


def test_form_recovers_from_non_json_submit_response(
    scouting_client, flask_session, monkeypatch, clock
):
    form = scouting_client.new_form(scout_name="Ada", clock=clock)
    form.set_value("teamNumber", "611")
    form.set_value("matchNumber", "12")
    assert form.next()

    garbled = StaticSession(body=b"not json")
    monkeypatch.setattr(flask_session, "request", garbled.request)

    assert form.submit() is False
    assert form.status == FAILED
    assert form.loading is False
    assert scouting_client.store.error == "Failed to submit scouting entry."
    assert scouting_client.store.entries == []
