"""Session context shared by every mailbox operation.

A MailSession holds the installed credential and the Gmail service built
from it. Operations take the session explicitly rather than reading a
module-level credential, so separate sessions never interfere.
"""

import logging
from typing import Any, Optional

from . import config

logger = logging.getLogger(__name__)


class MailSession:
    """Credential, transport settings, and cached Gmail service for one user."""

    def __init__(self, credentials: Any = None, timeout: Optional[float] = None):
        self.credentials = credentials
        self.timeout = timeout if timeout is not None else config.get_request_timeout()
        # Built lazily by gmail_manager.sdk.mail.service.get_gmail_service
        self.service = None

    @property
    def is_authenticated(self) -> bool:
        return self.credentials is not None

    def install(self, credentials: Any):
        """Install a credential, discarding any service built for a previous one."""
        self.credentials = credentials
        self.service = None
        logger.debug("Installed new credentials into session")
