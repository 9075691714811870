"""Tests for OAuth credential handling."""

import json
import stat
from unittest.mock import MagicMock, patch

import httpx
import pytest
from google.auth.exceptions import RefreshError, TransportError
from google.oauth2.credentials import Credentials

from google_tasks_mcp.backend.auth import (
    OOB_REDIRECT_URI,
    TASKS_SCOPE,
    BearerAuth,
    CredentialStore,
    authorization_url,
    exchange_code,
    load_credentials,
    save_credentials,
)
from google_tasks_mcp.backend.google import GoogleTasksBackend
from google_tasks_mcp.exceptions import AuthError
from google_tasks_mcp.plugins.tasks import TasksPlugin

CLIENT_SECRETS = {
    "installed": {
        "client_id": "client-123.apps.googleusercontent.com",
        "client_secret": "shh",
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
        "redirect_uris": [OOB_REDIRECT_URI],
    }
}


def make_credentials(token="access-1"):
    return Credentials(
        token=token,
        refresh_token="refresh-1",
        token_uri="https://oauth2.googleapis.com/token",
        client_id="client-123",
        client_secret="shh",
        scopes=[TASKS_SCOPE],
    )


@pytest.fixture
def secrets_file(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps(CLIENT_SECRETS))
    return path


class TestTokenFile:
    """Tests for saving and loading tokens."""

    def test_save_is_owner_only(self, tmp_path):
        """Token files are written with mode 0600."""
        token_file = tmp_path / "tasks-token.json"

        save_credentials(token_file, make_credentials())

        assert stat.S_IMODE(token_file.stat().st_mode) == 0o600

    def test_save_tightens_existing_file(self, tmp_path):
        """Overwriting an existing file also restricts its mode."""
        token_file = tmp_path / "tasks-token.json"
        token_file.write_text("{}")
        token_file.chmod(0o644)

        save_credentials(token_file, make_credentials())

        assert stat.S_IMODE(token_file.stat().st_mode) == 0o600

    def test_load_saved_token(self, tmp_path):
        """A saved token loads back with its refresh token."""
        token_file = tmp_path / "tasks-token.json"
        save_credentials(token_file, make_credentials("access-xyz"))

        loaded = load_credentials(token_file)

        assert loaded.token == "access-xyz"
        assert loaded.refresh_token == "refresh-1"

    def test_missing_token(self, tmp_path):
        """A missing token tells the user to authorize first."""
        with pytest.raises(AuthError, match="run with --auth first"):
            load_credentials(tmp_path / "absent.json")

    def test_malformed_token(self, tmp_path):
        """A token file without the required fields is rejected."""
        token_file = tmp_path / "tasks-token.json"
        token_file.write_text('{"token": "x"}')

        with pytest.raises(AuthError):
            load_credentials(token_file)


class TestConsentFlow:
    """Tests for the manual authorization flow."""

    def test_authorization_url(self, secrets_file):
        """The URL requests offline access with forced consent."""
        url = httpx.URL(authorization_url(secrets_file))

        assert url.host == "accounts.google.com"
        assert url.params["client_id"] == "client-123.apps.googleusercontent.com"
        assert url.params["redirect_uri"] == OOB_REDIRECT_URI
        assert url.params["access_type"] == "offline"
        assert url.params["prompt"] == "consent"
        assert url.params["scope"] == TASKS_SCOPE
        assert url.params["state"] == "state-token"

    def test_unreadable_secrets(self, tmp_path):
        """A missing client secrets file is an auth error."""
        with pytest.raises(AuthError, match="unable to read credentials file"):
            authorization_url(tmp_path / "absent.json")

    def test_exchange_code_saves_token(self, secrets_file, tmp_path):
        """The exchanged token is written to the token file."""
        token_file = tmp_path / "tasks-token.json"

        with patch("google_tasks_mcp.backend.auth.Flow.fetch_token") as mock_fetch, patch(
            "google_tasks_mcp.backend.auth.Flow.credentials",
            new=make_credentials("fresh"),
        ):
            exchange_code(secrets_file, token_file, "4/code")

        mock_fetch.assert_called_once_with(code="4/code")
        assert json.loads(token_file.read_text())["token"] == "fresh"

    def test_exchange_code_failure(self, secrets_file, tmp_path):
        """A rejected code is an auth error and nothing is saved."""
        token_file = tmp_path / "tasks-token.json"

        with patch(
            "google_tasks_mcp.backend.auth.Flow.fetch_token",
            side_effect=ValueError("invalid_grant"),
        ):
            with pytest.raises(AuthError, match="invalid_grant"):
                exchange_code(secrets_file, token_file, "bad")

        assert not token_file.exists()


class TestCredentialStore:
    """Tests for on-demand refresh."""

    def test_valid_token_is_not_refreshed(self, tmp_path):
        """A valid token is returned as is."""
        credentials = MagicMock(valid=True, token="access-1")
        store = CredentialStore(tmp_path / "tok.json", credentials)

        assert store.access_token() == "access-1"
        credentials.refresh.assert_not_called()

    def test_expired_token_is_refreshed_and_saved(self, tmp_path):
        """A refreshed token is persisted."""
        credentials = MagicMock(valid=False, token="old")
        credentials.to_json.return_value = '{"token": "new"}'

        def refresh(request):
            credentials.token = "new"

        credentials.refresh.side_effect = refresh
        token_file = tmp_path / "tok.json"
        store = CredentialStore(token_file, credentials)

        assert store.access_token() == "new"
        assert json.loads(token_file.read_text()) == {"token": "new"}

    def test_refresh_failure(self, tmp_path):
        """A refused refresh is an auth error."""
        credentials = MagicMock(valid=False, token="old")
        credentials.refresh.side_effect = RefreshError("invalid_grant")
        store = CredentialStore(tmp_path / "tok.json", credentials)

        with pytest.raises(AuthError, match="failed to refresh token"):
            store.access_token()

    def test_network_failure_during_refresh(self, tmp_path):
        """A transport failure while refreshing is an auth error too."""
        credentials = MagicMock(valid=False, token="old")
        credentials.refresh.side_effect = TransportError("connection reset")
        store = CredentialStore(tmp_path / "tok.json", credentials)

        with pytest.raises(AuthError, match="failed to refresh token: connection reset"):
            store.access_token()

    def test_refresh_network_failure_is_tool_error(self, tmp_path):
        """Through the server, a refresh network failure reads as Error: ..."""
        credentials = MagicMock(valid=False, token="old")
        credentials.refresh.side_effect = TransportError("connection reset")
        store = CredentialStore(tmp_path / "tok.json", credentials)
        google = GoogleTasksBackend(
            auth=BearerAuth(store),
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
        )

        result = TasksPlugin(google).execute("list_task_lists", {})

        assert result.is_error is True
        assert result.content[0]["text"] == "Error: failed to refresh token: connection reset"

    def test_load_network_failure(self, tmp_path):
        """Startup reports a refresh network failure as an auth error."""
        credentials = MagicMock(valid=False, token="old")
        credentials.refresh.side_effect = TransportError("connection reset")

        with patch("google_tasks_mcp.backend.auth.load_credentials", return_value=credentials):
            with pytest.raises(AuthError, match="connection reset"):
                CredentialStore.load(tmp_path / "tok.json")

    def test_save_failure_is_not_fatal(self, tmp_path, capsys):
        """Failing to persist a refreshed token only warns."""
        credentials = MagicMock(valid=False, token="old")
        credentials.to_json.return_value = "{}"

        def refresh(request):
            credentials.token = "new"

        credentials.refresh.side_effect = refresh
        store = CredentialStore(tmp_path / "missing-dir" / "tok.json", credentials)

        assert store.access_token() == "new"
        assert "Warning" in capsys.readouterr().err

    def test_load_checks_token(self, tmp_path):
        """Loading a store validates the token up front."""
        with patch(
            "google_tasks_mcp.backend.auth.load_credentials",
            return_value=MagicMock(valid=True, token="t"),
        ):
            store = CredentialStore.load(tmp_path / "tok.json")

        assert store.access_token() == "t"

    def test_bearer_auth(self, tmp_path):
        """The httpx auth hook sets the Authorization header."""
        store = CredentialStore(tmp_path / "tok.json", MagicMock(valid=True, token="abc"))
        request = httpx.Request("GET", "https://tasks.googleapis.com/tasks/v1/users/@me/lists")

        flow = BearerAuth(store).auth_flow(request)
        sent = next(flow)

        assert sent.headers["Authorization"] == "Bearer abc"
