from core_data_modules.logging import Logger

from drive_docs.google_drive.config import DuplicateFolderPolicies, ROOT_FOLDER_ID
from drive_docs.google_drive.errors import DuplicateFolderError

log = Logger(__name__)


def split_path(path):
    """
    Splits a slash-delimited Drive folder path into its folder names.

    Leading, trailing and repeated slashes are ignored, so "/a/b/", "a/b" and "//a//b//" all give ["a", "b"].

    :param path: Folder path, or None.
    :type path: str | None
    :return: Folder names, outermost first.
    :rtype: list of str
    """
    if path is None:
        return []
    return [folder for folder in path.strip("/").split("/") if folder != ""]


class FolderResolver(object):
    def __init__(self, drive_client, duplicate_folder_policy=DuplicateFolderPolicies.FIRST):
        """
        Maps folder paths to Drive folder ids, creating any folders that don't exist yet.

        Note that resolving always has the side effect of creating missing folders, even when the caller only wants
        to read. If a call fails part way along a path, folders that were already created are left in place.

        :param drive_client: Client to search for and create folders with.
        :type drive_client: drive_docs.google_drive.drive_client_wrapper.DriveClient
        :param duplicate_folder_policy: What to do when several folders with the same name exist under the same
                                        parent. One of `DuplicateFolderPolicies.VALUES`.
        :type duplicate_folder_policy: str
        """
        assert duplicate_folder_policy in DuplicateFolderPolicies.VALUES, \
            f"duplicate_folder_policy must be one of {DuplicateFolderPolicies.VALUES}"
        self._drive_client = drive_client
        self._duplicate_folder_policy = duplicate_folder_policy

    def _choose_folder(self, folders, name, parent_id):
        if len(folders) > 1:
            if self._duplicate_folder_policy == DuplicateFolderPolicies.ERROR:
                raise DuplicateFolderError(f"Multiple folders with name '{name}' found under parent with id "
                                           f"'{parent_id}'")
            log.warning(f"Multiple folders with name '{name}' found under parent with id '{parent_id}'. "
                        f"Using the first, with id '{folders[0].get('id')}'")
        return folders[0].get("id")

    def resolve(self, path):
        """
        Gets the id of the folder at `path`, creating it and any missing parents.

        Paths are resolved from the root of the user's Drive. Each folder name costs one search, plus one create
        if the folder doesn't exist.

        :param path: Slash-delimited folder path e.g. "/documents/project". "", "/" and None refer to the root.
        :type path: str | None
        :return: Id of the deepest folder in `path`, or the root folder id.
        :rtype: str
        """
        folders = split_path(path)
        if len(folders) == 0:
            return ROOT_FOLDER_ID

        folder_id = ROOT_FOLDER_ID
        for name in folders:
            matches = self._drive_client.find_folders(name, folder_id)
            if len(matches) > 0:
                folder_id = self._choose_folder(matches, name, folder_id)
                log.info(f"Using existing folder '{name}' with id '{folder_id}'")
            else:
                folder_id = self._drive_client.create_folder(name, folder_id)

        return folder_id
