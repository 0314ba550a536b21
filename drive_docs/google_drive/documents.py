import mimetypes
import os

from core_data_modules.logging import Logger

from drive_docs.google_drive.config import DOCUMENT_MIME_TYPE
from drive_docs.google_drive.errors import LocalIOError

DEFAULT_SOURCE_MIME_TYPE = "application/octet-stream"

log = Logger(__name__)


class UploadResult(object):
    def __init__(self, file_id, file_name, folder_path):
        """
        :param file_id: Id of the document created in Drive.
        :type file_id: str
        :param file_name: Name the document was given in Drive.
        :type file_name: str
        :param folder_path: Folder path the document was uploaded to, as given by the user.
        :type folder_path: str
        """
        self.file_id = file_id
        self.file_name = file_name
        self.folder_path = folder_path

    def summary_lines(self):
        return [
            f"Successfully converted {self.file_name} to Google Docs",
            f"File ID: {self.file_id}",
            f"Location: Google Drive:{self.folder_path}/{self.file_name}"
        ]


class FolderEntry(object):
    def __init__(self, name, folder_id):
        self.name = name
        self.id = folder_id

    def __eq__(self, other):
        return isinstance(other, FolderEntry) and self.name == other.name and self.id == other.id

    def __repr__(self):
        return f"FolderEntry(name={self.name!r}, id={self.id!r})"

    def __str__(self):
        return f"{self.name} (ID: {self.id})"


def guess_source_mime_type(file_path):
    mime_type, _ = mimetypes.guess_type(file_path)
    if mime_type is None:
        return DEFAULT_SOURCE_MIME_TYPE
    return mime_type


def upload_as_document(drive_client, folder_resolver, source_file_path, target_folder_path, target_file_name=None,
                       document_mime_type=DOCUMENT_MIME_TYPE):
    """
    Uploads a local file to a Drive folder, asking Drive to convert it to a Google Docs document.

    The local file is opened before any calls to Drive are made, so a missing file never creates folders.
    The target folder and any missing parents are created if they don't exist.

    :param drive_client: Client to upload with.
    :type drive_client: drive_docs.google_drive.drive_client_wrapper.DriveClient
    :param folder_resolver: Resolver to look up (and create) the target folder with.
    :type folder_resolver: drive_docs.google_drive.folder_resolver.FolderResolver
    :param source_file_path: Path to the local file to upload.
    :type source_file_path: str
    :param target_folder_path: Slash-delimited Drive folder path to upload to. "" or "/" uploads to the root.
    :type target_folder_path: str
    :param target_file_name: Name to give the document in Drive. If None, uses the local file's name.
    :type target_file_name: str | None
    :param document_mime_type: Google Docs MIME type to convert the file into.
    :type document_mime_type: str
    :return: Details of the created document.
    :rtype: UploadResult
    """
    if target_file_name is None:
        target_file_name = os.path.basename(source_file_path)

    try:
        f = open(source_file_path, "rb")
    except OSError as ex:
        raise LocalIOError(f"unable to open file: {ex}") from ex

    with f:
        target_folder_id = folder_resolver.resolve(target_folder_path)
        log.info(f"Uploading '{source_file_path}' as a document named '{target_file_name}'...")
        file_id = drive_client.create_file(f, target_file_name, target_folder_id, document_mime_type,
                                           guess_source_mime_type(source_file_path))

    return UploadResult(file_id, target_file_name, target_folder_path)


def list_folders(drive_client, folder_id):
    """
    :param drive_client: Client to list with.
    :type drive_client: drive_docs.google_drive.drive_client_wrapper.DriveClient
    :param folder_id: Id of the folder to list the child folders of.
    :type folder_id: str
    :return: Immediate child folders, in the order Drive returned them. Only the first page of results is included.
    :rtype: list of FolderEntry
    """
    return [FolderEntry(folder.get("name"), folder.get("id")) for folder in drive_client.list_child_folders(folder_id)]


def print_folders(folders):
    print("Existing folder list:")
    for folder in folders:
        print(f"- {folder}")
