"""OAuth2 credential handling for the Google Tasks API.

The token file uses google-auth's authorized-user JSON format. Tokens are
refreshed on demand and written back so the next run starts from the
newest access token.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Generator
from pathlib import Path

import httpx
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from google_tasks_mcp.exceptions import AuthError

TASKS_SCOPE = "https://www.googleapis.com/auth/tasks"
SCOPES = [TASKS_SCOPE]

# Manual code entry for headless machines
OOB_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"


def save_credentials(path: Path, credentials: Credentials) -> None:
    """Write credentials to ``path`` readable by the owner only.

    Raises:
        OSError: If the file cannot be written.
    """
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(credentials.to_json())
    # O_CREAT's mode is ignored when the file already exists
    os.chmod(path, 0o600)


def load_credentials(path: Path) -> Credentials:
    """Read credentials saved by :func:`save_credentials`.

    Raises:
        AuthError: If the file is missing or malformed.
    """
    try:
        return Credentials.from_authorized_user_file(str(path), SCOPES)
    except (OSError, ValueError) as e:
        raise AuthError(f"token not found, run with --auth first: {e}") from e


def _build_flow(credentials_file: Path) -> Flow:
    try:
        return Flow.from_client_secrets_file(
            str(credentials_file),
            scopes=SCOPES,
            redirect_uri=OOB_REDIRECT_URI,
            autogenerate_code_verifier=False,
        )
    except (OSError, ValueError) as e:
        raise AuthError(f"unable to read credentials file: {e}") from e


def authorization_url(credentials_file: Path) -> str:
    """Build the consent URL the user opens to authorize the server.

    Offline access with forced consent so Google always issues a
    refresh token.
    """
    flow = _build_flow(credentials_file)
    url, _state = flow.authorization_url(
        access_type="offline",
        prompt="consent",
        state="state-token",
    )
    return url


def exchange_code(credentials_file: Path, token_file: Path, code: str) -> Credentials:
    """Exchange an authorization code for tokens and save them.

    Raises:
        AuthError: If the exchange or the save fails.
    """
    flow = _build_flow(credentials_file)
    try:
        flow.fetch_token(code=code)
    except Exception as e:
        # oauthlib raises a wide family of errors for rejected codes
        raise AuthError(f"unable to exchange code for token: {e}") from e

    credentials = flow.credentials
    try:
        save_credentials(token_file, credentials)
    except OSError as e:
        raise AuthError(f"unable to save token: {e}") from e
    return credentials


class CredentialStore:
    """Supplies a currently valid access token.

    Expired tokens are refreshed before being handed out and the refreshed
    token is persisted. Failing to persist is not fatal.
    """

    def __init__(self, token_file: Path, credentials: Credentials) -> None:
        """Initialize the store.

        Args:
            token_file: Where refreshed tokens are written.
            credentials: Loaded OAuth credentials.
        """
        self._token_file = token_file
        self._credentials = credentials

    @classmethod
    def load(cls, token_file: Path) -> CredentialStore:
        """Load the store from a token file and make sure it is usable.

        Raises:
            AuthError: If the token is missing or cannot be refreshed.
        """
        store = cls(token_file, load_credentials(token_file))
        store.access_token()
        return store

    def access_token(self) -> str:
        """Return a valid access token, refreshing if needed.

        Raises:
            AuthError: If the refresh fails.
        """
        if not self._credentials.valid:
            previous = self._credentials.token
            try:
                self._credentials.refresh(Request())
            except GoogleAuthError as e:
                # RefreshError for a rejected grant, TransportError for network failures
                raise AuthError(f"failed to refresh token: {e}") from e

            if self._credentials.token != previous:
                try:
                    save_credentials(self._token_file, self._credentials)
                except OSError as e:
                    print(f"Warning: failed to save refreshed token: {e}", file=sys.stderr)

        return self._credentials.token


class BearerAuth(httpx.Auth):
    """httpx auth that stamps each request with a fresh bearer token."""

    def __init__(self, store: CredentialStore) -> None:
        self._store = store

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._store.access_token()}"
        yield request
