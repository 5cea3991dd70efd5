"""Value types returned by the mailbox operations."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

# Placeholders for headers a message does not carry
NO_SUBJECT = "No Subject"
UNKNOWN_SENDER = "Unknown Sender"
UNKNOWN_DATE = "Unknown Date"


@dataclass(frozen=True)
class MessageSummary:
    """Display fields of one message, fetched fresh per request."""

    id: str
    subject: str = NO_SUBJECT
    sender: str = UNKNOWN_SENDER
    date: str = UNKNOWN_DATE
    snippet: str = ""
    labels: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "subject": self.subject,
            "from": self.sender,
            "date": self.date,
            "snippet": self.snippet,
            "labels": list(self.labels),
        }


@dataclass(frozen=True)
class Label:
    id: str
    name: str
