"""Gmail Manager SDK - credential handling and Gmail API access.

Example usage:
    from gmail_manager.sdk import MailSession, CredentialStore, mail

    session = MailSession()
    store = CredentialStore(session)
    if store.ensure_authenticated():
        for message_id in mail.list_recent(session, 5).value:
            print(mail.get_details(session, message_id).value)
"""

from . import config
from . import auth
from . import mail
from .auth import CredentialStore
from .result import Result
from .session import MailSession

__all__ = ["config", "auth", "mail", "CredentialStore", "MailSession", "Result"]
