import json
import os

from core_data_modules.logging import Logger

from drive_docs.google_drive.errors import AuthError, LocalIOError

log = Logger(__name__)


class TokenStore(object):
    def __init__(self, token_file_path):
        """
        Persists a user's OAuth authorization token as JSON, so later runs can skip the interactive flow.

        :param token_file_path: Path to the token file.
        :type token_file_path: str
        """
        self.token_file_path = token_file_path

    def load(self):
        """
        Loads the persisted token.

        The token's expiry isn't checked here. An expired token is refreshed by the HTTP layer when it has a
        refresh token, otherwise the first API call fails.

        :return: The token info, or None if no token has been saved yet.
        :rtype: dict | None
        """
        if not os.path.exists(self.token_file_path):
            log.info(f"No token found at '{self.token_file_path}'")
            return None

        log.info(f"Loading token from '{self.token_file_path}'...")
        try:
            with open(self.token_file_path, "r") as f:
                token_info = json.load(f)
        except OSError as ex:
            raise AuthError(f"unable to read token file '{self.token_file_path}': {ex}") from ex
        except ValueError as ex:
            raise AuthError(f"unable to parse token file '{self.token_file_path}': {ex}") from ex

        if not isinstance(token_info, dict):
            raise AuthError(f"unable to parse token file '{self.token_file_path}': expected a JSON object")

        log.info(f"Loaded token from '{self.token_file_path}'")
        return token_info

    def save(self, token_info):
        """
        Writes a token to the token file, replacing any existing one.

        :param token_info: Token to save.
        :type token_info: dict
        """
        log.info(f"Saving token to '{self.token_file_path}'...")
        try:
            with open(self.token_file_path, "w") as f:
                json.dump(token_info, f)
        except OSError as ex:
            raise LocalIOError(f"unable to create token file '{self.token_file_path}': {ex}") from ex
        log.info(f"Saved token to '{self.token_file_path}'")
