"""Authentication and credential management for the SDK.

The CredentialStore owns the single on-disk token record. At startup it
installs a previously saved credential into the session; otherwise it hands
out the consent URL and later exchanges the returned authorization code for a
new credential, which overwrites the token file.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from . import config
from .exceptions import CredentialError
from .result import Result
from .session import MailSession

logger = logging.getLogger(__name__)

# Read + modify mailbox access
GMAIL_SCOPES = [
    "https://www.googleapis.com/auth/gmail.readonly",
    "https://www.googleapis.com/auth/gmail.modify",
]

AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"


def _parse_expiry(info: Dict[str, Any]) -> Optional[datetime]:
    """
    Read the expiry hint from a token record.

    google-auth writes 'expiry' as an ISO timestamp; the googleapis Node
    client writes 'expiry_date' as epoch milliseconds. google-auth compares
    expiry against naive UTC, so the result is returned naive.
    """
    if info.get("expiry"):
        parsed = datetime.fromisoformat(str(info["expiry"]).rstrip("Z"))
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed
    if info.get("expiry_date"):
        seconds = int(info["expiry_date"]) / 1000
        return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(tzinfo=None)
    return None


def credentials_from_info(info: Dict[str, Any], client: Dict[str, str] = None) -> Credentials:
    """
    Build a Credentials object from a stored token record.

    Client id/secret missing from the record are filled from `client`.

    Raises:
        CredentialError: If the record has no access token or a field has the
            wrong shape
    """
    client = client or {}
    token = info.get("token") or info.get("access_token")
    if not token:
        raise CredentialError("Token record has no access token")

    try:
        scopes = info.get("scopes")
        if scopes is None and info.get("scope"):
            scopes = info["scope"].split(" ")
    except Exception as e:
        raise CredentialError(f"Token record has invalid scopes: {e}") from e

    try:
        expiry = _parse_expiry(info)
    except Exception as e:
        raise CredentialError(f"Token record has an invalid expiry: {e}") from e

    try:
        return Credentials(
            token=token,
            refresh_token=info.get("refresh_token"),
            token_uri=info.get("token_uri", TOKEN_URI),
            client_id=info.get("client_id") or client.get("client_id") or None,
            client_secret=info.get("client_secret") or client.get("client_secret") or None,
            scopes=scopes,
            expiry=expiry,
        )
    except Exception as e:
        raise CredentialError(f"Token record could not be loaded: {e}") from e


def load_credentials(token_path: Path, client: Dict[str, str] = None) -> Credentials:
    """
    Load credentials from a token file.

    Raises:
        CredentialError: If the file is missing, unreadable or malformed
    """
    try:
        with open(token_path, "r") as f:
            info = json.load(f)
    except FileNotFoundError as e:
        raise CredentialError(f"Token file not found: {token_path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise CredentialError(f"Could not read token file {token_path}: {e}") from e

    if not isinstance(info, dict):
        raise CredentialError(f"Token file {token_path} does not hold a JSON object")
    return credentials_from_info(info, client)


def save_credentials(creds: Credentials, token_path: Path):
    """Write credentials to the token file, replacing any previous content."""
    token_path.parent.mkdir(parents=True, exist_ok=True)
    with open(token_path, "w") as token_file:
        token_file.write(creds.to_json())
    logger.debug(f"Token saved to {token_path}")


class CredentialStore:
    """
    Loads, exchanges and persists the credential for a MailSession.

    Args:
        session: Session that receives the installed credential
        token_path: Token file location (defaults to the configured path)
        client_config: OAuth client settings (defaults to the environment)
        notify: Callable used for user-facing messages such as the consent URL
    """

    def __init__(
        self,
        session: MailSession,
        token_path: Optional[Path] = None,
        client_config: Optional[Dict[str, str]] = None,
        notify: Callable[[str], None] = print,
    ):
        self.session = session
        self.token_path = Path(token_path) if token_path else config.get_token_file_path()
        self.client = client_config if client_config is not None else config.get_client_config()
        self.notify = notify
        self._flow = None

    def _build_flow(self) -> Flow:
        client_config = {
            "web": {
                "client_id": self.client.get("client_id", ""),
                "client_secret": self.client.get("client_secret", ""),
                "auth_uri": AUTH_URI,
                "token_uri": TOKEN_URI,
                "redirect_uris": [self.client.get("redirect_uri", "")],
            }
        }
        return Flow.from_client_config(
            client_config,
            scopes=GMAIL_SCOPES,
            redirect_uri=self.client.get("redirect_uri", ""),
        )

    def _get_flow(self) -> Flow:
        # The exchange reuses the flow that produced the consent URL
        if self._flow is None:
            self._flow = self._build_flow()
        return self._flow

    def authorization_url(self) -> str:
        """Build the consent URL for read + modify mailbox access."""
        auth_url, _ = self._get_flow().authorization_url(access_type="offline")
        return auth_url

    def ensure_authenticated(self) -> Result:
        """
        Install the persisted credential into the session.

        If no usable token file exists, the consent URL is shown through
        `notify` and a failed Result is returned. Never waits for input.
        """
        try:
            creds = load_credentials(self.token_path, self.client)
        except CredentialError as e:
            logger.info(f"No existing token found: {e}")
            self.notify("No existing token found. Please run the authentication flow.")
            try:
                self.notify(f"Authorize this app by visiting this url: {self.authorization_url()}")
            except Exception as url_error:
                logger.error(f"Error building authorization URL: {url_error}")
                return Result.failure(f"{e}; could not build authorization URL: {url_error}", False)
            return Result.failure(str(e), False)

        self.session.install(creds)
        logger.info("Using existing authentication token")
        return Result.success(True)

    def complete_authorization(self, code: str) -> Result:
        """
        Exchange a one-time authorization code for a credential.

        On success the credential is installed into the session and written
        to the token file, overwriting any existing one.
        """
        try:
            flow = self._get_flow()
            flow.fetch_token(code=code)
            creds = flow.credentials
            save_credentials(creds, self.token_path)
        except Exception as e:
            logger.error(f"Error retrieving access token: {e}")
            return Result.failure(str(e), False)

        self.session.install(creds)
        logger.info("Token stored successfully")
        return Result.success(True)
