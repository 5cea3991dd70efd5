"""Gmail operations for the SDK.

Provides functions for listing, searching, reading, and labeling Gmail
messages. Every function takes a MailSession and returns a Result.

Example usage:
    from gmail_manager.sdk import MailSession, CredentialStore
    from gmail_manager.sdk.mail import MailboxClient

    session = MailSession()
    if CredentialStore(session).ensure_authenticated():
        client = MailboxClient(session)
        ids = client.search_by_sender("someone@example.com", 5).value
"""

from .service import get_gmail_service
from .types import MessageSummary, Label
from .search import (
    list_recent,
    filter_messages,
    search_by_sender,
    search_by_subject,
    search_by_label,
    search_unread,
)
from .read import get_details
from .label import (
    list_labels,
    create_label,
    add_label,
    remove_label,
    archive,
    unarchive,
    INBOX_LABEL_ID,
)
from .client import MailboxClient

__all__ = [
    "get_gmail_service",
    "MessageSummary",
    "Label",
    "list_recent",
    "filter_messages",
    "search_by_sender",
    "search_by_subject",
    "search_by_label",
    "search_unread",
    "get_details",
    "list_labels",
    "create_label",
    "add_label",
    "remove_label",
    "archive",
    "unarchive",
    "INBOX_LABEL_ID",
    "MailboxClient",
]
