"""Gmail label operations.

Archiving is not a separate message state in Gmail: a message is archived
when it does not carry the INBOX label.
"""

import logging
from typing import List, Optional

from ..result import api_operation
from ..session import MailSession
from ..timing import time_api_call
from .service import get_gmail_service
from .types import Label

logger = logging.getLogger(__name__)

INBOX_LABEL_ID = "INBOX"


@api_operation("fetching labels", [], logger)
@time_api_call
def list_labels(session: MailSession) -> List[Label]:
    """
    List all Gmail labels.

    Returns:
        Result holding a list of Label values ([] on failure)
    """
    service = get_gmail_service(session)
    results = service.users().labels().list(userId='me').execute()
    return [Label(id=label['id'], name=label['name']) for label in results.get('labels') or []]


@api_operation("creating label", None, logger)
@time_api_call
def create_label(session: MailSession, name: str) -> Optional[Label]:
    """
    Create a label shown in both the label list and the message list.

    Returns:
        Result holding the created Label (None on failure)
    """
    service = get_gmail_service(session)
    create_body = {
        'name': name,
        'labelListVisibility': 'labelShow',
        'messageListVisibility': 'show'
    }
    created = service.users().labels().create(userId='me', body=create_body).execute()
    logger.info(f"Created label: {name}")
    return Label(id=created['id'], name=created.get('name', name))


def _modify(session: MailSession, message_id: str, add: str = None, remove: str = None):
    service = get_gmail_service(session)
    body = {}
    if add:
        body['addLabelIds'] = [add]
    if remove:
        body['removeLabelIds'] = [remove]
    service.users().messages().modify(userId='me', id=message_id, body=body).execute()


@api_operation("adding label", False, logger)
@time_api_call
def add_label(session: MailSession, message_id: str, label_id: str) -> bool:
    """Add one label (by ID) to one message."""
    _modify(session, message_id, add=label_id)
    logger.info(f"Added label to message {message_id}")
    return True


@api_operation("removing label", False, logger)
@time_api_call
def remove_label(session: MailSession, message_id: str, label_id: str) -> bool:
    """Remove one label (by ID) from one message."""
    _modify(session, message_id, remove=label_id)
    logger.info(f"Removed label from message {message_id}")
    return True


@api_operation("archiving email", False, logger)
@time_api_call
def archive(session: MailSession, message_id: str) -> bool:
    _modify(session, message_id, remove=INBOX_LABEL_ID)
    logger.info(f"Archived message {message_id}")
    return True


@api_operation("unarchiving email", False, logger)
@time_api_call
def unarchive(session: MailSession, message_id: str) -> bool:
    _modify(session, message_id, add=INBOX_LABEL_ID)
    logger.info(f"Unarchived message {message_id}")
    return True
