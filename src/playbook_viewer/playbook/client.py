"""HTTP client for the plays API.

Fetches ``GET {base_url}/api/plays/{play_id}`` and returns the
``{"play": {...}}`` body as :class:`PlayContent`.  Access control lives on the
server; this client only turns the outcomes into distinct exception types so
a viewer can show "sign in", "no access" or "not found" accordingly.  No
retries are attempted.
"""

from __future__ import annotations

import logging

import requests

from playbook_viewer.playbook.models import PlayContent

_logger = logging.getLogger(__name__)

_SESSION_COOKIE = "session_id"


class PlayFetchError(Exception):
    """Raised when play content cannot be fetched."""


class UnauthorizedError(PlayFetchError):
    """The request carried no valid session (HTTP 401)."""


class ForbiddenError(PlayFetchError):
    """The user is not allowed to view this play (HTTP 403)."""


class PlayNotFoundError(PlayFetchError):
    """No play with the requested ID exists (HTTP 404)."""


def _error_message(response: requests.Response, default: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return default
    if isinstance(data, dict):
        return str(data.get("error") or data.get("detail") or default)
    return default


class PlayContentClient:
    """Plays API client.

    Args:
        base_url: Server root, e.g. ``"http://localhost:8000"``.
        session_token: Value of the session cookie, if the server needs one.
        timeout: Request timeout in seconds.
        http: Optional :class:`requests.Session` (injected in tests).
    """

    def __init__(
        self,
        base_url: str,
        session_token: str | None = None,
        timeout: float = 10.0,
        http: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http = http or requests.Session()
        if session_token:
            self._http.cookies.set(_SESSION_COOKIE, session_token)

    def fetch_play(self, play_id: str) -> PlayContent:
        """Fetch one play's players and drawings.

        Raises
        ------
        UnauthorizedError, ForbiddenError, PlayNotFoundError
            For HTTP 401, 403 and 404 respectively.
        PlayFetchError
            For any other HTTP error, a transport failure or an unreadable body.
        """
        url = f"{self._base_url}/api/plays/{play_id}"
        try:
            response = self._http.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            _logger.warning("Fetching play %s failed: %s", play_id, exc)
            raise PlayFetchError(f"Could not reach {url}: {exc}") from exc

        status = response.status_code
        if status == 401:
            _logger.warning("Fetching play %s: unauthorized", play_id)
            raise UnauthorizedError("Unauthorized")
        if status == 403:
            _logger.warning("Fetching play %s: access denied", play_id)
            raise ForbiddenError("Access denied")
        if status == 404:
            _logger.warning("Fetching play %s: not found", play_id)
            raise PlayNotFoundError("Play not found")
        if not response.ok:
            message = _error_message(response, "Failed to fetch play")
            _logger.warning("Fetching play %s: HTTP %d %s", play_id, status, message)
            raise PlayFetchError(message)

        try:
            body = response.json()
            return PlayContent.from_dict(body["play"])
        except (ValueError, KeyError, TypeError) as exc:
            _logger.warning("Fetching play %s: unreadable body: %s", play_id, exc)
            raise PlayFetchError(f"Unreadable play content: {exc}") from exc
