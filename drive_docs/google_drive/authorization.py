import datetime
import json

from core_data_modules.logging import Logger
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error
from requests import RequestException

from drive_docs.google_drive.errors import AuthError, ConfigError

DEFAULT_REDIRECT_URI = "http://localhost"
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"

log = Logger(__name__)


def load_client_config(credentials_file_path):
    """
    Loads an OAuth client secrets file, as downloaded from the Google Cloud console.

    :param credentials_file_path: Path to the client secrets file.
    :type credentials_file_path: str
    :return: Client config, with a top-level "installed" or "web" section.
    :rtype: dict
    """
    log.info(f"Loading client credentials from '{credentials_file_path}'...")
    try:
        with open(credentials_file_path, "r") as f:
            client_config = json.load(f)
    except OSError as ex:
        raise ConfigError(f"unable to read credentials file: {ex}") from ex
    except ValueError as ex:
        raise ConfigError(f"unable to parse credentials: {ex}") from ex

    if not isinstance(client_config, dict) or ("installed" not in client_config and "web" not in client_config):
        raise ConfigError(f"unable to parse credentials: '{credentials_file_path}' has no 'installed' or 'web' "
                          f"client section")
    return client_config


def _client_section(client_config):
    if "installed" in client_config:
        return client_config["installed"]
    return client_config["web"]


def _parse_expiry(expiry):
    # Same format Credentials.to_json writes, which is naive UTC.
    return datetime.datetime.strptime(expiry.rstrip("Z").split(".")[0], "%Y-%m-%dT%H:%M:%S")


def credentials_from_token_info(token_info, client_config, scopes):
    """
    Builds user credentials from a persisted token.

    Accepts the format written by `Credentials.to_json` ("token", "refresh_token", ...) and the plain OAuth format
    ("access_token", "refresh_token", "token_type", "expiry") written by other OAuth libraries. Client fields missing
    from the token are taken from the client config.

    :param token_info: Persisted token.
    :type token_info: dict
    :param client_config: Client config, as returned by `load_client_config`.
    :type client_config: dict
    :param scopes: Scopes the token was granted for.
    :type scopes: list of str
    :return: Credentials which refresh themselves when a refresh token is available.
    :rtype: google.oauth2.credentials.Credentials
    """
    client = _client_section(client_config)

    if "token" in token_info:
        access_token = token_info["token"]
        expiry = token_info.get("expiry")
        if expiry is not None:
            try:
                expiry = _parse_expiry(expiry)
            except (AttributeError, TypeError, ValueError) as ex:
                raise AuthError(f"malformed token file: bad expiry '{expiry}'") from ex
    else:
        # Expiry in other formats carries a timezone offset; leave it unset and rely on a refresh after a 401.
        access_token = token_info.get("access_token")
        expiry = None

    refresh_token = token_info.get("refresh_token")
    if not access_token and not refresh_token:
        raise AuthError("malformed token file: neither an access token nor a refresh token is present")

    return Credentials(
        token=access_token,
        refresh_token=refresh_token,
        token_uri=token_info.get("token_uri", client.get("token_uri", DEFAULT_TOKEN_URI)),
        client_id=token_info.get("client_id", client.get("client_id")),
        client_secret=token_info.get("client_secret", client.get("client_secret")),
        scopes=token_info.get("scopes", scopes),
        expiry=expiry
    )


def token_info_from_credentials(credentials):
    return json.loads(credentials.to_json())


def console_authorization_code_provider(authorization_url):
    """
    Asks the operator to authorize the application in a browser and paste back the resulting code.

    :param authorization_url: URL the operator needs to visit.
    :type authorization_url: str
    :return: Authorization code entered by the operator.
    :rtype: str
    """
    print("Please visit this URL and authorize the application:")
    print(authorization_url)
    return input("Enter the authorization code: ")


def run_authorization_flow(client_config, scopes, code_provider=console_authorization_code_provider):
    """
    Obtains new user credentials by running the OAuth consent flow once.

    There is no retry: an empty code or a code the token endpoint rejects fails with AuthError.

    :param client_config: Client config, as returned by `load_client_config`.
    :type client_config: dict
    :param scopes: Scopes to request.
    :type scopes: list of str
    :param code_provider: Function which is given the authorization url and returns the authorization code the
                          user obtained from it.
    :type code_provider: function of str -> str
    :return: Newly obtained credentials.
    :rtype: google.oauth2.credentials.Credentials
    """
    redirect_uris = _client_section(client_config).get("redirect_uris") or [DEFAULT_REDIRECT_URI]
    flow = Flow.from_client_config(client_config, scopes=scopes, redirect_uri=redirect_uris[0])
    authorization_url, _ = flow.authorization_url(access_type="offline", prompt="consent")

    log.info("Waiting for an authorization code...")
    try:
        code = code_provider(authorization_url)
    except EOFError as ex:
        raise AuthError("unable to read authorization code: no input") from ex

    code = (code or "").strip()
    if code == "":
        raise AuthError("unable to read authorization code: no code entered")

    log.info("Exchanging authorization code for a token...")
    try:
        flow.fetch_token(code=code)
    except (OAuth2Error, RequestException, ValueError) as ex:
        raise AuthError(f"unable to exchange token: {ex}") from ex
    log.info("Exchanged authorization code for a token")

    return flow.credentials
