"""
HTTP client for the notes API.

The bearer token returned by ``register``/``login`` is kept in memory on the
client instance and sent with every protected call.
"""
import logging
from typing import Dict, List, Optional

import httpx

from .models import AuthResult, Note

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-success response from the API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class SessionExpired(ApiError):
    """The token was rejected (missing, invalid, or expired); log in again."""


class NotLoggedIn(Exception):
    """A protected call was attempted without a token."""


# PUBLIC_INTERFACE
class NotesClient:
    """
    Thin wrapper over ``httpx.Client``.

    Pass ``base_url`` to talk to a running server, or ``http`` to reuse an
    existing client (for instance FastAPI's ``TestClient``).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        if http is None:
            if not base_url:
                raise ValueError("base_url is required when no http client is given")
            http = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)
            self._owns_http = True
        else:
            self._owns_http = False
        self._http = http
        self.token = token

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def is_logged_in(self) -> bool:
        return self.token is not None

    def logout(self) -> None:
        self.token = None

    def _auth_headers(self) -> Dict[str, str]:
        if self.token is None:
            raise NotLoggedIn("Not logged in")
        return {"Authorization": f"Bearer {self.token}"}

    @staticmethod
    def _body(response: httpx.Response) -> dict:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    def _check(self, response: httpx.Response, expected: int, default_error: str, session_statuses=(401, 403)) -> dict:
        data = self._body(response)
        if response.status_code == expected:
            return data
        message = data.get("error") or default_error
        if response.status_code in session_statuses:
            raise SessionExpired(response.status_code, message)
        raise ApiError(response.status_code, message)

    def _authenticate(self, path: str, username: str, password: str, expected: int, default_error: str) -> AuthResult:
        response = self._http.post(path, json={"username": username, "password": password})
        data = self._check(response, expected, default_error, session_statuses=())
        result = AuthResult(user=data["user"], token=data["token"])
        self.token = result.token
        return result

    # Authentication

    def register(self, username: str, password: str) -> AuthResult:
        return self._authenticate("/api/register", username, password, 201, "Registration failed")

    def login(self, username: str, password: str) -> AuthResult:
        return self._authenticate("/api/login", username, password, 200, "Login failed")

    # Notes

    def get_notes(self) -> List[Note]:
        response = self._http.get("/api/notes", headers=self._auth_headers())
        data = self._check(response, 200, "Failed to load notes")
        return [Note.model_validate(item) for item in data.get("notes", [])]

    def get_note(self, note_id: int) -> Note:
        response = self._http.get(f"/api/notes/{note_id}", headers=self._auth_headers())
        data = self._check(response, 200, "Failed to load note")
        return Note.model_validate(data["note"])

    def create_note(self, title: str, content: str, tags: str = "") -> Note:
        response = self._http.post(
            "/api/notes",
            json={"title": title, "content": content, "tags": tags},
            headers=self._auth_headers(),
        )
        data = self._check(response, 201, "Failed to create note")
        return Note.model_validate(data["note"])

    def update_note(self, note_id: int, title: str, content: str, tags: str = "") -> Note:
        response = self._http.put(
            f"/api/notes/{note_id}",
            json={"title": title, "content": content, "tags": tags},
            headers=self._auth_headers(),
        )
        data = self._check(response, 200, "Failed to update note")
        return Note.model_validate(data["note"])

    def delete_note(self, note_id: int) -> None:
        response = self._http.delete(f"/api/notes/{note_id}", headers=self._auth_headers())
        self._check(response, 200, "Failed to delete note")

    # Account

    def change_password(self, old_password: str, new_password: str) -> None:
        # 401 here means a wrong current password, not an expired session.
        response = self._http.put(
            "/api/user/password",
            json={"oldPassword": old_password, "newPassword": new_password},
            headers=self._auth_headers(),
        )
        self._check(response, 200, "Failed to change password", session_statuses=(403,))

    def delete_account(self, password: str) -> None:
        """Delete the account; the stored token is dropped on success."""
        response = self._http.request(
            "DELETE",
            "/api/user/account",
            json={"password": password},
            headers=self._auth_headers(),
        )
        self._check(response, 200, "Failed to delete account", session_statuses=(403,))
        logger.debug("Account deleted; dropping token")
        self.token = None
