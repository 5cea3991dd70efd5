"""Gmail message listing and search operations.

Only the first page of results is ever requested; nextPageToken is ignored.
"""

import logging
from typing import List

from ..result import Result, api_operation
from ..session import MailSession
from ..timing import time_api_call
from .service import get_gmail_service

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 10


def _list_message_ids(session: MailSession, max_results: int, query: str = None) -> List[str]:
    service = get_gmail_service(session)
    list_kwargs = {"userId": "me", "maxResults": max_results}
    if query is not None:
        list_kwargs["q"] = query

    results = service.users().messages().list(**list_kwargs).execute()
    messages = results.get("messages") or []
    return [message["id"] for message in messages][:max_results]


@api_operation("fetching emails", [], logger)
@time_api_call
def list_recent(session: MailSession, max_results: int = DEFAULT_MAX_RESULTS) -> List[str]:
    """
    List the ids of the most recent messages, with no filter.

    Args:
        session: Authenticated session
        max_results: Maximum number of ids to return

    Returns:
        Result holding a list of message ids ([] on failure)
    """
    ids = _list_message_ids(session, max_results)
    logger.info(f"Found {len(ids)} emails")
    return ids


@api_operation("filtering emails", [], logger)
@time_api_call
def filter_messages(session: MailSession, query: str, max_results: int = DEFAULT_MAX_RESULTS) -> List[str]:
    """
    List the ids of messages matching a Gmail search query.

    The query is passed to the API verbatim. At most `max_results` ids are
    returned.
    """
    logger.debug(f"Searching for emails with query: '{query}'")
    ids = _list_message_ids(session, max_results, query=query)
    logger.info(f"Found {len(ids)} emails matching query: {query}")
    return ids


def sender_query(sender: str) -> str:
    return f"from:{sender}"


def subject_query(subject: str) -> str:
    return f"subject:{subject}"


def label_query(label_name: str) -> str:
    return f"label:{label_name}"


UNREAD_QUERY = "is:unread"


def search_by_sender(session: MailSession, sender: str, max_results: int = DEFAULT_MAX_RESULTS) -> Result:
    return filter_messages(session, sender_query(sender), max_results)


def search_by_subject(session: MailSession, subject: str, max_results: int = DEFAULT_MAX_RESULTS) -> Result:
    return filter_messages(session, subject_query(subject), max_results)


def search_by_label(session: MailSession, label_name: str, max_results: int = DEFAULT_MAX_RESULTS) -> Result:
    return filter_messages(session, label_query(label_name), max_results)


def search_unread(session: MailSession, max_results: int = DEFAULT_MAX_RESULTS) -> Result:
    return filter_messages(session, UNREAD_QUERY, max_results)
