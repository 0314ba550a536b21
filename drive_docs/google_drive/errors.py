class DriveDocsError(Exception):
    """Base class for every failure the uploader reports to the user."""
    pass


class ConfigError(DriveDocsError):
    """The OAuth client credentials file is missing or can't be parsed."""
    pass


class AuthError(DriveDocsError):
    """A token couldn't be loaded, obtained or refreshed."""
    pass


class LocalIOError(DriveDocsError):
    """A local file couldn't be opened, read or written."""
    pass


class RemoteError(DriveDocsError):
    """A Drive API call failed."""
    pass


class DuplicateFolderError(DriveDocsError):
    """More than one folder matched a path segment and the duplicate policy forbids choosing one."""
    pass
