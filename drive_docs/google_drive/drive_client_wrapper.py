import googleapiclient.discovery
import httplib2
from core_data_modules.logging import Logger
from google.auth.exceptions import RefreshError, TransportError
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from drive_docs.google_drive.authorization import console_authorization_code_provider, credentials_from_token_info, \
    load_client_config, run_authorization_flow, token_info_from_credentials
from drive_docs.google_drive.config import FOLDER_MIME_TYPE
from drive_docs.google_drive.errors import AuthError, RemoteError
from drive_docs.google_drive.query import DriveQuery
from drive_docs.google_drive.token_store import TokenStore

log = Logger(__name__)


def _folder_query(parent_id, name=None):
    query = DriveQuery()
    if name is not None:
        query.name_equals(name)
    return query.mime_type_equals(FOLDER_MIME_TYPE).in_parents(parent_id).not_trashed().build()


class DriveClient(object):
    def __init__(self, drive_service):
        """
        Client for the parts of the Drive v3 API used to manage folders and upload documents.

        Every method blocks until Drive responds. Failures aren't retried: they're raised as RemoteError, or as
        AuthError if the token couldn't be refreshed.

        :param drive_service: Drive v3 service.
        :type drive_service: googleapiclient.discovery.Resource
        """
        self._drive_service = drive_service

    @classmethod
    def init_from_config(cls, config, code_provider=console_authorization_code_provider):
        """
        Connects to Drive using the client credentials and token files named in `config`.

        If no token has been saved yet, runs the interactive authorization flow and saves the token it produces.

        :param config: Connection settings.
        :type config: drive_docs.google_drive.config.DriveConfig
        :param code_provider: Function which is given an authorization url and returns the authorization code the
                              user obtained from it. Only called when there is no saved token.
        :type code_provider: function of str -> str
        :return: Client authorized as the user.
        :rtype: DriveClient
        """
        client_config = load_client_config(config.credentials_file_path)

        token_store = TokenStore(config.token_file_path)
        token_info = token_store.load()
        if token_info is None:
            credentials = run_authorization_flow(client_config, config.scopes, code_provider)
            token_store.save(token_info_from_credentials(credentials))
        else:
            credentials = credentials_from_token_info(token_info, client_config, config.scopes)

        log.debug("Building Drive v3 service")
        drive_service = googleapiclient.discovery.build("drive", "v3", credentials=credentials,
                                                        cache_discovery=False)
        return cls(drive_service)

    @staticmethod
    def _execute(request, action):
        try:
            return request.execute()
        except HttpError as ex:
            raise RemoteError(f"unable to {action}: {ex}") from ex
        except RefreshError as ex:
            raise AuthError(f"unable to refresh token: {ex}") from ex
        except (OSError, httplib2.HttpLib2Error, TransportError) as ex:
            raise RemoteError(f"unable to {action}: {ex}") from ex

    def find_folders(self, name, parent_id):
        """
        Searches for the non-trashed folders called `name` directly under a parent folder.

        :param name: Exact folder name to look for.
        :type name: str
        :param parent_id: Id of the folder to search in.
        :type parent_id: str
        :return: Matching folders, in the order Drive returned them, as dicts with "id" and "name".
        :rtype: list of dict
        """
        log.info(f"Searching for folder '{name}' under parent with id '{parent_id}'...")
        response = self._execute(
            self._drive_service.files().list(
                q=_folder_query(parent_id, name),
                spaces="drive",
                fields="files(id, name)"),
            "search folder"
        )
        folders = response.get("files", [])
        log.info(f"Searching for folder '{name}' under parent with id '{parent_id}' - done. "
                 f"Found {len(folders)} matching folders")
        return folders

    def list_child_folders(self, parent_id):
        """
        Lists the non-trashed folders directly under a parent folder.

        Only the first page of results is fetched.

        :param parent_id: Id of the folder to list.
        :type parent_id: str
        :return: Child folders, in the order Drive returned them, as dicts with "id" and "name".
        :rtype: list of dict
        """
        log.info(f"Listing folders under parent with id '{parent_id}'...")
        response = self._execute(
            self._drive_service.files().list(
                q=_folder_query(parent_id),
                spaces="drive",
                fields="files(id, name)"),
            "list folders"
        )
        folders = response.get("files", [])
        log.info(f"Listing folders under parent with id '{parent_id}' - done. {len(folders)} folders")
        return folders

    def create_folder(self, name, parent_id):
        log.info(f"Creating folder '{name}' under parent with id '{parent_id}'...")
        file_metadata = {
            "name": name,
            "mimeType": FOLDER_MIME_TYPE,
            "parents": [parent_id]
        }
        folder = self._execute(
            self._drive_service.files().create(body=file_metadata, fields="id"),
            f"create folder {name}"
        )
        log.info(f"Creating folder '{name}' under parent with id '{parent_id}' - done. Folder id is "
                 f"'{folder.get('id')}'")
        return folder.get("id")

    def create_file(self, f, target_file_name, target_folder_id, target_mime_type, source_mime_type):
        """
        Uploads a file into a folder in a single request.

        :param f: File to upload, opened in binary mode.
        :type f: file-like
        :param target_file_name: Name to give the file in Drive.
        :type target_file_name: str
        :param target_folder_id: Id of the folder to create the file in.
        :type target_folder_id: str
        :param target_mime_type: MIME type of the file in Drive. Setting this to a Google Docs type asks Drive to
                                 convert the uploaded content.
        :type target_mime_type: str
        :param source_mime_type: MIME type of the uploaded content.
        :type source_mime_type: str
        :return: Id of the created file.
        :rtype: str
        """
        file_metadata = {
            "name": target_file_name,
            "mimeType": target_mime_type,
            "parents": [target_folder_id]
        }
        media = MediaIoBaseUpload(f, mimetype=source_mime_type, resumable=False)

        log.info(f"Creating file '{target_file_name}' in folder with ID '{target_folder_id}'...")
        file = self._execute(
            self._drive_service.files().create(body=file_metadata, media_body=media, fields="id"),
            "upload file"
        )
        log.info(f"Creating file '{target_file_name}' in folder with ID '{target_folder_id}' - done. "
                 f"File id is '{file.get('id')}'")
        return file.get("id")
