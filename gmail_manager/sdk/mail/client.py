"""Session-bound facade over the Gmail operations."""

from ..result import Result
from ..session import MailSession
from . import label, read, search


class MailboxClient:
    """
    Gmail mailbox operations bound to one session.

    Each method issues a single API call and returns a Result; none of them
    raise. See the modules in gmail_manager.sdk.mail for the details of each
    call.
    """

    def __init__(self, session: MailSession):
        self.session = session

    def list_recent(self, limit: int = search.DEFAULT_MAX_RESULTS) -> Result:
        return search.list_recent(self.session, limit)

    def get_details(self, message_id: str) -> Result:
        return read.get_details(self.session, message_id)

    def filter(self, query: str, limit: int = search.DEFAULT_MAX_RESULTS) -> Result:
        return search.filter_messages(self.session, query, limit)

    def search_by_sender(self, sender: str, limit: int = search.DEFAULT_MAX_RESULTS) -> Result:
        return search.search_by_sender(self.session, sender, limit)

    def search_by_subject(self, subject: str, limit: int = search.DEFAULT_MAX_RESULTS) -> Result:
        return search.search_by_subject(self.session, subject, limit)

    def search_by_label(self, label_name: str, limit: int = search.DEFAULT_MAX_RESULTS) -> Result:
        return search.search_by_label(self.session, label_name, limit)

    def search_unread(self, limit: int = search.DEFAULT_MAX_RESULTS) -> Result:
        return search.search_unread(self.session, limit)

    def list_labels(self) -> Result:
        return label.list_labels(self.session)

    def create_label(self, name: str) -> Result:
        return label.create_label(self.session, name)

    def add_label(self, message_id: str, label_id: str) -> Result:
        return label.add_label(self.session, message_id, label_id)

    def remove_label(self, message_id: str, label_id: str) -> Result:
        return label.remove_label(self.session, message_id, label_id)

    def archive(self, message_id: str) -> Result:
        return label.archive(self.session, message_id)

    def unarchive(self, message_id: str) -> Result:
        return label.unarchive(self.session, message_id)
