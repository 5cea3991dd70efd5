"""
Unit test fixtures.

Mailbox tests run against FakeGmailService attached directly to a
MailSession, so no credentials or network access are needed.
"""

import pytest
from unittest.mock import MagicMock

from gmail_manager.sdk import MailSession
from gmail_manager.sdk.mail import MailboxClient

from .fakes import FakeGmailService, make_message


@pytest.fixture
def gmail() -> FakeGmailService:
    """A small mailbox: three inbox messages, one unread, one custom label."""
    return FakeGmailService(
        messages=[
            make_message("m3", subject="Quarterly report", sender="alice@example.com",
                         date="Tue, 3 Sep 2024 10:00:00 +0000", snippet="Numbers attached",
                         label_ids=["INBOX", "UNREAD"]),
            make_message("m2", subject="Lunch?", sender="bob@example.com",
                         date="Mon, 2 Sep 2024 12:00:00 +0000", snippet="Are you free",
                         label_ids=["INBOX", "Label_project"]),
            make_message("m1", sender="alice@example.com", snippet="no subject here",
                         label_ids=["INBOX"]),
        ],
        labels=[
            {"id": "INBOX", "name": "INBOX", "type": "system"},
            {"id": "UNREAD", "name": "UNREAD", "type": "system"},
            {"id": "Label_project", "name": "Project", "type": "user"},
        ],
    )


@pytest.fixture
def session(gmail) -> MailSession:
    s = MailSession(credentials=MagicMock(), timeout=5)
    s.service = gmail
    return s


@pytest.fixture
def client(session) -> MailboxClient:
    return MailboxClient(session)
