DRIVE_FILE_SCOPE = "https://www.googleapis.com/auth/drive.file"

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
DOCUMENT_MIME_TYPE = "application/vnd.google-apps.document"

# Drive's alias for the top of the user's "My Drive" tree.
ROOT_FOLDER_ID = "root"

DEFAULT_CREDENTIALS_FILE_PATH = "credentials.json"
DEFAULT_TOKEN_FILE_PATH = "token.json"


class DuplicateFolderPolicies(object):
    FIRST = "first"  # Use the first matching folder in the order Drive returned them.
    ERROR = "error"  # Refuse to guess and fail the resolution.

    VALUES = {FIRST, ERROR}


class DriveConfig(object):
    def __init__(self, credentials_file_path=DEFAULT_CREDENTIALS_FILE_PATH, token_file_path=DEFAULT_TOKEN_FILE_PATH,
                 scopes=None, duplicate_folder_policy=DuplicateFolderPolicies.FIRST,
                 document_mime_type=DOCUMENT_MIME_TYPE):
        """
        Settings needed to connect to Drive and to upload documents.

        :param credentials_file_path: Path to the OAuth client secrets file identifying this application.
        :type credentials_file_path: str
        :param token_file_path: Path to the file the user's authorization token is persisted in.
                                If this file doesn't exist, the interactive authorization flow is run and its result
                                is written here.
        :type token_file_path: str
        :param scopes: OAuth scopes to request. If None, defaults to file-level Drive access only.
        :type scopes: list of str | None
        :param duplicate_folder_policy: One of `DuplicateFolderPolicies.VALUES`.
        :type duplicate_folder_policy: str
        :param document_mime_type: MIME type to ask Drive to convert uploaded files into.
        :type document_mime_type: str
        """
        if scopes is None:
            scopes = [DRIVE_FILE_SCOPE]
        assert duplicate_folder_policy in DuplicateFolderPolicies.VALUES, \
            f"duplicate_folder_policy must be one of {DuplicateFolderPolicies.VALUES}"

        self.credentials_file_path = credentials_file_path
        self.token_file_path = token_file_path
        self.scopes = list(scopes)
        self.duplicate_folder_policy = duplicate_folder_policy
        self.document_mime_type = document_mime_type
