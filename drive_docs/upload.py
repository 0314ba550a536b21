import argparse
import sys

from core_data_modules.logging import Logger

from drive_docs.google_drive.authorization import console_authorization_code_provider
from drive_docs.google_drive.config import DEFAULT_CREDENTIALS_FILE_PATH, DEFAULT_TOKEN_FILE_PATH, DriveConfig, \
    DuplicateFolderPolicies
from drive_docs.google_drive.documents import list_folders, print_folders, upload_as_document
from drive_docs.google_drive.drive_client_wrapper import DriveClient
from drive_docs.google_drive.errors import DriveDocsError
from drive_docs.google_drive.folder_resolver import FolderResolver

log = Logger(__name__)


def _fail(message, ex=None):
    if ex is None:
        log.error(message)
    else:
        log.error(f"{message}: {ex}")
    sys.exit(1)


def make_parser():
    parser = argparse.ArgumentParser(description="Uploads a file to Google Drive, converting it to a Google Docs "
                                                 "document and creating the target folder path if it doesn't "
                                                 "exist. Alternatively, lists the folders under a Drive path.")

    parser.add_argument("-path", "--path", default="",
                        help="Target path on Google Drive (e.g.: /documents/project). Defaults to the root")
    parser.add_argument("-list", "--list", action="store_true", dest="list_only",
                        help="Only list folders under the target path")
    parser.add_argument("--credentials", default=DEFAULT_CREDENTIALS_FILE_PATH, dest="credentials_file_path",
                        help="Path to the OAuth client credentials file")
    parser.add_argument("--token", default=DEFAULT_TOKEN_FILE_PATH, dest="token_file_path",
                        help="Path to the file to load the authorization token from, or to save it to after "
                             "authorizing")
    parser.add_argument("--name", default=None, dest="target_file_name",
                        help="Name to give the document in Drive. Defaults to the local file's name")
    parser.add_argument("--duplicate-folders", default=DuplicateFolderPolicies.FIRST,
                        choices=sorted(DuplicateFolderPolicies.VALUES), dest="duplicate_folder_policy",
                        help="What to do when a path segment matches more than one folder: use the 'first' one "
                             "Drive returns, or fail with an 'error'")
    parser.add_argument("file_path", metavar="file-path", nargs="?",
                        help="Local file to upload and convert. Required unless listing")

    return parser


def main(argv=None, code_provider=console_authorization_code_provider):
    args = make_parser().parse_args(argv)

    config = DriveConfig(
        credentials_file_path=args.credentials_file_path,
        token_file_path=args.token_file_path,
        duplicate_folder_policy=args.duplicate_folder_policy
    )

    try:
        drive_client = DriveClient.init_from_config(config, code_provider)
    except DriveDocsError as ex:
        _fail("Unable to initialize client", ex)

    folder_resolver = FolderResolver(drive_client, config.duplicate_folder_policy)

    if args.list_only:
        try:
            folder_id = folder_resolver.resolve(args.path)
        except DriveDocsError as ex:
            _fail("Unable to find target path", ex)
        try:
            folders = list_folders(drive_client, folder_id)
        except DriveDocsError as ex:
            _fail("Unable to list folders", ex)
        print_folders(folders)
        return

    if args.file_path is None:
        _fail("Please specify the file path to convert")

    try:
        result = upload_as_document(drive_client, folder_resolver, args.file_path, args.path,
                                    args.target_file_name, config.document_mime_type)
    except DriveDocsError as ex:
        _fail("Conversion failed", ex)

    for line in result.summary_lines():
        print(line)


if __name__ == "__main__":
    main()
