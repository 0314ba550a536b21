"""Unit tests for google_drive/drive_client_wrapper.py: Drive API calls and client construction."""

import io
import json
from unittest.mock import MagicMock, patch

import httplib2
import pytest
from google.auth.exceptions import RefreshError, TransportError
from google.oauth2.credentials import Credentials
from googleapiclient.errors import HttpError

from drive_docs.google_drive.config import DOCUMENT_MIME_TYPE, DRIVE_FILE_SCOPE, DriveConfig
from drive_docs.google_drive.drive_client_wrapper import DriveClient
from drive_docs.google_drive.errors import AuthError, ConfigError, RemoteError

CLIENT_CONFIG = {
    "installed": {
        "client_id": "client-id.apps.googleusercontent.com",
        "client_secret": "client-secret",
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token"
    }
}

FOLDER_QUERY = "mimeType = 'application/vnd.google-apps.folder' and 'root' in parents and trashed = false"


def _http_error(status=500):
    return HttpError(httplib2.Response({"status": status}), b"boom")


def _make_client():
    service = MagicMock()
    return DriveClient(service), service


# ---------------------------------------------------------------------------
# find_folders / list_child_folders
# ---------------------------------------------------------------------------


class TestFindFolders:
    def test_query_filters_name_type_parent_and_trash(self):
        client, service = _make_client()
        service.files.return_value.list.return_value.execute.return_value = {
            "files": [{"id": "f1", "name": "docs"}, {"id": "f2", "name": "docs"}]
        }

        folders = client.find_folders("docs", "root")

        service.files.return_value.list.assert_called_once_with(
            q=f"name = 'docs' and {FOLDER_QUERY}",
            spaces="drive",
            fields="files(id, name)"
        )
        assert folders == [{"id": "f1", "name": "docs"}, {"id": "f2", "name": "docs"}]

    def test_names_with_quotes_are_escaped(self):
        client, service = _make_client()
        service.files.return_value.list.return_value.execute.return_value = {"files": []}

        client.find_folders("Bob's \"docs\"", "root")

        q = service.files.return_value.list.call_args.kwargs["q"]
        assert q.startswith("name = 'Bob\\'s \"docs\"' and ")

    def test_missing_files_key_means_no_matches(self):
        client, service = _make_client()
        service.files.return_value.list.return_value.execute.return_value = {}

        assert client.find_folders("docs", "root") == []

    def test_http_error_raises_remote_error(self):
        client, service = _make_client()
        service.files.return_value.list.return_value.execute.side_effect = _http_error()

        with pytest.raises(RemoteError, match="unable to search folder") as exc_info:
            client.find_folders("docs", "root")
        assert isinstance(exc_info.value.__cause__, HttpError)

    def test_refresh_error_raises_auth_error(self):
        client, service = _make_client()
        service.files.return_value.list.return_value.execute.side_effect = RefreshError("invalid_grant")

        with pytest.raises(AuthError, match="unable to refresh token"):
            client.find_folders("docs", "root")

    def test_network_error_raises_remote_error(self):
        client, service = _make_client()
        service.files.return_value.list.return_value.execute.side_effect = ConnectionResetError("reset")

        with pytest.raises(RemoteError):
            client.find_folders("docs", "root")

    def test_transport_error_during_token_refresh_raises_remote_error(self):
        client, service = _make_client()
        service.files.return_value.list.return_value.execute.side_effect = TransportError("dns failure")

        with pytest.raises(RemoteError, match="unable to search folder") as exc_info:
            client.find_folders("docs", "root")
        assert isinstance(exc_info.value.__cause__, TransportError)


class TestListChildFolders:
    def test_query_has_no_name_clause(self):
        client, service = _make_client()
        service.files.return_value.list.return_value.execute.return_value = {
            "files": [{"id": "1", "name": "X"}, {"id": "2", "name": "Y"}]
        }

        folders = client.list_child_folders("root")

        assert service.files.return_value.list.call_args.kwargs["q"] == FOLDER_QUERY
        assert folders == [{"id": "1", "name": "X"}, {"id": "2", "name": "Y"}]

    def test_http_error_raises_remote_error(self):
        client, service = _make_client()
        service.files.return_value.list.return_value.execute.side_effect = _http_error(403)

        with pytest.raises(RemoteError, match="unable to list folders"):
            client.list_child_folders("root")


# ---------------------------------------------------------------------------
# create_folder / create_file
# ---------------------------------------------------------------------------


class TestCreateFolder:
    def test_creates_folder_under_parent(self):
        client, service = _make_client()
        service.files.return_value.create.return_value.execute.return_value = {"id": "new-folder"}

        folder_id = client.create_folder("2024", "docs-id")

        service.files.return_value.create.assert_called_once_with(
            body={"name": "2024", "mimeType": "application/vnd.google-apps.folder", "parents": ["docs-id"]},
            fields="id"
        )
        assert folder_id == "new-folder"

    def test_http_error_raises_remote_error(self):
        client, service = _make_client()
        service.files.return_value.create.return_value.execute.side_effect = _http_error()

        with pytest.raises(RemoteError, match="unable to create folder 2024"):
            client.create_folder("2024", "docs-id")


class TestCreateFile:
    def test_uploads_with_document_mime_type_and_single_parent(self):
        client, service = _make_client()
        service.files.return_value.create.return_value.execute.return_value = {"id": "new-file"}

        file_id = client.create_file(io.BytesIO(b"hello"), "report.txt", "folder-id", DOCUMENT_MIME_TYPE,
                                     "text/plain")

        kwargs = service.files.return_value.create.call_args.kwargs
        assert kwargs["body"] == {"name": "report.txt", "mimeType": DOCUMENT_MIME_TYPE, "parents": ["folder-id"]}
        assert kwargs["fields"] == "id"
        assert kwargs["media_body"].mimetype() == "text/plain"
        assert kwargs["media_body"].resumable() is False
        assert file_id == "new-file"

    def test_http_error_raises_remote_error(self):
        client, service = _make_client()
        service.files.return_value.create.return_value.execute.side_effect = _http_error()

        with pytest.raises(RemoteError, match="unable to upload file"):
            client.create_file(io.BytesIO(b"hello"), "report.txt", "folder-id", DOCUMENT_MIME_TYPE, "text/plain")


# ---------------------------------------------------------------------------
# init_from_config
# ---------------------------------------------------------------------------


def _write_client_config(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps(CLIENT_CONFIG))
    return str(path)


class TestInitFromConfig:
    def test_missing_credentials_file_makes_no_remote_calls(self, tmp_path):
        config = DriveConfig(str(tmp_path / "credentials.json"), str(tmp_path / "token.json"))
        code_provider = MagicMock()

        with patch("drive_docs.google_drive.drive_client_wrapper.googleapiclient.discovery.build") as mock_build, \
                patch("drive_docs.google_drive.drive_client_wrapper.run_authorization_flow") as mock_flow:
            with pytest.raises(ConfigError):
                DriveClient.init_from_config(config, code_provider)

        mock_build.assert_not_called()
        mock_flow.assert_not_called()
        code_provider.assert_not_called()

    def test_saved_token_skips_authorization(self, tmp_path):
        token_path = tmp_path / "token.json"
        token_path.write_text(json.dumps({"token": "access", "refresh_token": "refresh"}))
        config = DriveConfig(_write_client_config(tmp_path), str(token_path))
        code_provider = MagicMock()

        with patch("drive_docs.google_drive.drive_client_wrapper.googleapiclient.discovery.build") as mock_build:
            client = DriveClient.init_from_config(config, code_provider)

        code_provider.assert_not_called()
        args, kwargs = mock_build.call_args
        assert args == ("drive", "v3")
        assert kwargs["credentials"].token == "access"
        assert kwargs["credentials"].refresh_token == "refresh"
        assert client._drive_service is mock_build.return_value

    def test_malformed_token_raises_auth_error(self, tmp_path):
        token_path = tmp_path / "token.json"
        token_path.write_text("{")
        config = DriveConfig(_write_client_config(tmp_path), str(token_path))

        with patch("drive_docs.google_drive.drive_client_wrapper.googleapiclient.discovery.build") as mock_build:
            with pytest.raises(AuthError):
                DriveClient.init_from_config(config, MagicMock())

        mock_build.assert_not_called()

    def test_missing_token_runs_flow_and_saves_token(self, tmp_path):
        token_path = tmp_path / "token.json"
        config = DriveConfig(_write_client_config(tmp_path), str(token_path))
        credentials = Credentials(
            token="new-access", refresh_token="new-refresh", token_uri="https://oauth2.googleapis.com/token",
            client_id="client-id.apps.googleusercontent.com", client_secret="client-secret",
            scopes=[DRIVE_FILE_SCOPE]
        )
        code_provider = MagicMock(return_value="auth-code")

        with patch("drive_docs.google_drive.drive_client_wrapper.googleapiclient.discovery.build") as mock_build, \
                patch("drive_docs.google_drive.drive_client_wrapper.run_authorization_flow",
                      return_value=credentials) as mock_flow:
            DriveClient.init_from_config(config, code_provider)

        mock_flow.assert_called_once_with(CLIENT_CONFIG, [DRIVE_FILE_SCOPE], code_provider)
        assert mock_build.call_args.kwargs["credentials"] is credentials
        saved = json.loads(token_path.read_text())
        assert saved["token"] == "new-access"
        assert saved["refresh_token"] == "new-refresh"
