"""HTTP client for the scouting API."""

from __future__ import annotations

import logging

import requests

from .constants import REQUEST_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The server answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class OfflineError(ApiError):
    """The server could not be reached at all."""


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(payload, dict):
        if payload.get("message"):
            return str(payload["message"])
        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            return "; ".join(str(e.get("msg", e)) for e in errors if e)
    return f"HTTP {response.status_code}"


class ScoutingApiClient:
    """Thin wrapper over the JSON wire contract.

    Connection failures raise ``OfflineError``; any 4xx/5xx raises
    ``ApiError`` with the server's message, as does a body that is not JSON.
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        token: str | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, timeout=self.timeout, **kwargs
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            logger.warning("[Api] %s %s unreachable: %s", method, url, exc)
            raise OfflineError(f"Unable to reach server: {exc}") from exc

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            message = _error_message(response)
            logger.warning(
                "[Api] %s %s failed status=%s message=%s",
                method,
                url,
                response.status_code,
                message,
            )
            raise ApiError(message, response.status_code) from exc

        logger.debug("[Api] %s %s status=%s", method, url, response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            logger.warning(
                "[Api] %s %s returned a non-JSON body: %s", method, url, exc
            )
            raise ApiError(
                "Invalid response from server", response.status_code
            ) from exc

    def create_entry(self, entry: dict) -> dict:
        return self._request("POST", "/scouting", json=entry)

    def bulk_create_entries(self, entries: list[dict]) -> dict:
        return self._request("POST", "/scouting/bulk", json={"entries": entries})

    def list_entries(self, season_id: str, team_number: str | None = None) -> list:
        params = {"seasonId": season_id}
        if team_number:
            params["teamNumber"] = team_number
        return self._request("GET", "/scouting", params=params)

    def get_current_season(self) -> dict:
        return self._request("GET", "/seasons/current")

    def get_scouting_config(self, season_id: str) -> dict:
        return self._request("GET", f"/seasons/{season_id}/config")

    def get_teams(self, season_id: str) -> list:
        return self._request("GET", f"/seasons/{season_id}/teams")

    def get_matches(self, season_id: str) -> list:
        return self._request("GET", f"/seasons/{season_id}/matches")
