"""Gmail message read operations."""

import logging
from typing import Optional

from ..result import api_operation
from ..session import MailSession
from ..timing import time_api_call
from .service import get_gmail_service
from .types import MessageSummary, NO_SUBJECT, UNKNOWN_SENDER, UNKNOWN_DATE

logger = logging.getLogger(__name__)


def _get_header(headers: list, name: str, default: str) -> str:
    """Get a header value by name."""
    for header in headers:
        if header.get('name', '').lower() == name.lower():
            return header.get('value', default)
    return default


@api_operation("fetching email details", None, logger)
@time_api_call
def get_details(session: MailSession, message_id: str) -> Optional[MessageSummary]:
    """
    Retrieve the display fields of a specific Gmail message.

    Args:
        session: Authenticated session
        message_id: The Gmail message ID

    Returns:
        Result holding a MessageSummary (None on failure). Missing Subject,
        From and Date headers are replaced with fixed placeholders.
    """
    service = get_gmail_service(session)
    logger.debug(f"Retrieving message with ID: {message_id}")

    msg = service.users().messages().get(userId='me', id=message_id).execute()

    headers = (msg.get('payload') or {}).get('headers') or []
    return MessageSummary(
        id=message_id,
        subject=_get_header(headers, 'Subject', NO_SUBJECT),
        sender=_get_header(headers, 'From', UNKNOWN_SENDER),
        date=_get_header(headers, 'Date', UNKNOWN_DATE),
        snippet=msg.get('snippet') or '',
        labels=list(msg.get('labelIds') or []),
    )
