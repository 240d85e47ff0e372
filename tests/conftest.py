"""Shared fixtures: an API app on a temp data dir and a client wired to it."""

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from main import create_app
from scouting.client import ScoutingClient

BASE_URL = "http://scouting.test/api"

AUTO_CONFIG = {
    "name": "2024 Match Scouting",
    "version": 1,
    "categories": [
        {
            "id": "auto",
            "title": "Auto",
            "description": "Autonomous period",
            "fields": [
                {"id": "autoNotes", "type": "number", "label": "Auto notes"},
            ],
        }
    ],
}


class FlaskSession:
    """Stand-in for ``requests.Session`` that routes to a Flask test client.

    Set ``offline`` to make every call raise ``requests.ConnectionError``.
    """

    def __init__(self, test_client):
        self.test_client = test_client
        self.headers = {}
        self.offline = False
        self.calls = []

    def request(self, method, url, timeout=None, json=None, params=None):
        self.calls.append((method, url))
        if self.offline:
            raise requests.ConnectionError("Network is unreachable")

        path = "/api" + url[len(BASE_URL):]
        result = self.test_client.open(
            path,
            method=method,
            json=json,
            query_string=params,
            headers=dict(self.headers),
        )

        response = requests.Response()
        response.status_code = result.status_code
        response.reason = result.status
        response._content = result.data
        response.headers = CaseInsensitiveDict(result.headers)
        response.encoding = "utf-8"
        response.url = url
        return response


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def server_cfg(tmp_path):
    return {
        "host": "127.0.0.1",
        "port": 5000,
        "data_dir": str(tmp_path / "server"),
        "max_upload_mb": 1,
    }


@pytest.fixture
def app(server_cfg):
    app = create_app(server_cfg)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def season(client):
    """A current season with the single-field Auto config."""
    response = client.post(
        "/api/seasons",
        json={
            "name": "Crescendo",
            "year": 2024,
            "isCurrent": True,
            "startDate": "2024-01-06",
            "endDate": "2024-04-20",
            "gameName": "CRESCENDO",
        },
    )
    season = response.get_json()
    client.put(f"/api/seasons/{season['id']}/config", json=AUTO_CONFIG)
    return season


@pytest.fixture
def flask_session(client):
    return FlaskSession(client)


@pytest.fixture
def scouting_client(tmp_path, flask_session, season):
    scouting_client = ScoutingClient(
        {"base_url": BASE_URL, "timeout": 5, "data_dir": str(tmp_path / "client")},
        session=flask_session,
    )
    scouting_client.load_current_season()
    return scouting_client


@pytest.fixture
def clock():
    return FakeClock()
