"""Gmail service factory for the SDK."""

import logging
from typing import Any

import httplib2
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build

from ..exceptions import CredentialError
from ..session import MailSession

logger = logging.getLogger(__name__)


def get_gmail_service(session: MailSession) -> Any:
    """
    Get the authenticated Gmail API service object for a session.

    The service is built once per installed credential and cached on the
    session. Requests go through an httplib2 transport carrying the session
    timeout, so a stalled call fails instead of hanging.

    Raises:
        CredentialError: If no credential is installed in the session
    """
    if session.service is not None:
        return session.service
    if session.credentials is None:
        raise CredentialError("No credentials installed; authenticate first.")

    logger.debug(f"Building Gmail service with a {session.timeout}s request timeout")
    http = AuthorizedHttp(session.credentials, http=httplib2.Http(timeout=session.timeout))
    session.service = build("gmail", "v1", http=http, cache_discovery=False)
    return session.service
