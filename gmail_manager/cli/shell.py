"""Interactive command shell for Gmail Manager.

The shell moves through three states: it authenticates once
(AWAITING_AUTH), then reads and dispatches one command per line (READY)
until the user quits, input ends, or authentication fails (TERMINATED).
"""

import enum
import logging
import shlex
from typing import Callable, Dict, List, Optional, Tuple

import click

from gmail_manager.sdk import CredentialStore, Result
from gmail_manager.sdk.exceptions import GmailManagerError
from gmail_manager.sdk.mail import MailboxClient

from .display import (
    echo_error,
    echo_lines,
    echo_success,
    format_label,
    format_message_block,
    format_message_details,
)

logger = logging.getLogger(__name__)

BANNER = ["Gmail Manager CLI", "================"]

# Menu entries in display order: (command, usage, description)
COMMANDS: List[Tuple[str, str, str]] = [
    ("list", "list [count]", "List recent emails"),
    ("details", "details <messageId>", "Get email details"),
    ("filter", "filter <query> [count]", "Filter emails by query"),
    ("search-sender", "search-sender <email> [count]", "Search by sender"),
    ("search-subject", "search-subject <text> [count]", "Search by subject"),
    ("search-unread", "search-unread [count]", "List unread emails"),
    ("search-label", "search-label <labelName> [count]", "List emails with a label"),
    ("labels", "labels", "List all labels"),
    ("create-label", "create-label <name>", "Create new label"),
    ("add-label", "add-label <messageId> <labelId>", "Add label to email"),
    ("remove-label", "remove-label <messageId> <labelId>", "Remove label from email"),
    ("archive", "archive <messageId>", "Archive email"),
    ("unarchive", "unarchive <messageId>", "Unarchive email"),
    ("help", "help", "Show this menu"),
    ("quit", "quit", "Exit the application"),
]

class ShellState(enum.Enum):
    AWAITING_AUTH = "awaiting_auth"
    READY = "ready"
    TERMINATED = "terminated"


class CommandError(GmailManagerError):
    """A command was given missing or malformed arguments."""
    pass


class InteractiveShell:
    """
    Line-oriented shell dispatching commands to a MailboxClient.

    Args:
        store: Credential store used for the startup authentication
        client: Mailbox client sharing the store's session
        display_limit: Maximum number of messages rendered per listing
        default_count: Number of messages requested when no count is given
    """

    def __init__(
        self,
        store: CredentialStore,
        client: MailboxClient,
        display_limit: int = 5,
        default_count: int = 10,
    ):
        self.store = store
        self.client = client
        self.display_limit = display_limit
        self.default_count = default_count
        self.state = ShellState.AWAITING_AUTH
        self.handlers: Dict[str, Callable[[List[str]], None]] = {
            "list": self.do_list,
            "details": self.do_details,
            "filter": self.do_filter,
            "search-sender": self.do_search_sender,
            "search-subject": self.do_search_subject,
            "search-unread": self.do_search_unread,
            "search-label": self.do_search_label,
            "labels": self.do_labels,
            "create-label": self.do_create_label,
            "add-label": self.do_add_label,
            "remove-label": self.do_remove_label,
            "archive": self.do_archive,
            "unarchive": self.do_unarchive,
            "help": self.do_help,
            "quit": self.do_quit,
            "exit": self.do_quit,
        }

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def run(self):
        """Run the shell until it reaches TERMINATED."""
        self.state = ShellState.AWAITING_AUTH
        for line in BANNER:
            click.echo(line)

        while self.state is not ShellState.TERMINATED:
            if self.state is ShellState.AWAITING_AUTH:
                self.authenticate()
            else:
                self.print_menu()
                line = self.read_command()
                if line is None:
                    self.state = ShellState.TERMINATED
                else:
                    self.dispatch(line)

    def authenticate(self) -> bool:
        """Install a credential, asking for an authorization code if needed."""
        if self.store.ensure_authenticated().ok:
            self.state = ShellState.READY
            return True

        click.echo("\nFirst time setup required.")
        click.echo("1. Visit the URL above to authorize the app")
        click.echo("2. Copy the authorization code")
        try:
            code = click.prompt("Enter the authorization code", prompt_suffix=": ")
        except click.Abort:
            code = None

        if code is None or not self.store.complete_authorization(code.strip()).ok:
            echo_error("Authentication failed. Exiting.")
            self.state = ShellState.TERMINATED
            return False

        click.echo("Token stored successfully")
        self.state = ShellState.READY
        return True

    def read_command(self) -> Optional[str]:
        """Block for one line of input; None once input is exhausted."""
        try:
            return click.prompt("\nEnter command", default="", show_default=False, prompt_suffix=": ")
        except click.Abort:
            return None

    def print_menu(self):
        click.echo("\nAvailable commands:")
        for number, (_, usage, description) in enumerate(COMMANDS, start=1):
            click.echo(f"{number}. {usage} - {description}")

    def dispatch(self, line: str):
        """Tokenize one input line and run the matching command."""
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            echo_error(f"Could not parse command: {e}")
            return
        if not tokens:
            return

        name, args = tokens[0].lower(), tokens[1:]
        handler = self.handlers.get(name)
        if handler is None:
            echo_error("Unknown command. Please try again.")
            return

        logger.debug(f"Dispatching '{name}' with args {args}")
        try:
            handler(args)
        except CommandError as e:
            echo_error(str(e))

    # ------------------------------------------------------------------
    # Argument helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require(args: List[str], count: int, message: str) -> List[str]:
        if len(args) < count or not all(args[:count]):
            raise CommandError(message)
        return args[:count]

    def _count(self, args: List[str], index: int) -> int:
        if len(args) <= index:
            return self.default_count
        try:
            count = int(args[index])
        except ValueError:
            raise CommandError(f"Count must be a positive integer, got '{args[index]}'")
        if count <= 0:
            raise CommandError(f"Count must be a positive integer, got '{args[index]}'")
        return count

    def _show_messages(self, result: Result, include_labels: bool = False):
        """Render the first display_limit messages of a listing result."""
        if not result.ok:
            echo_error(f"Could not fetch emails: {result.error}")
            return
        if not result.value:
            click.echo("\nNo emails found.")
            return

        for message_id in result.value[:self.display_limit]:
            details = self.client.get_details(message_id)
            if details.ok and details.value is not None:
                echo_lines(format_message_block(details.value, include_labels=include_labels))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def do_list(self, args: List[str]):
        count = self._count(args, 0)
        click.echo(f"\nFetching {count} recent emails...")
        self._show_messages(self.client.list_recent(count), include_labels=True)

    def do_details(self, args: List[str]):
        message_id, = self._require(args, 1, "Please provide a message ID")
        result = self.client.get_details(message_id)
        if result.ok and result.value is not None:
            echo_lines(format_message_details(result.value))
        else:
            echo_error("Email not found or error occurred")

    def do_filter(self, args: List[str]):
        query, = self._require(args, 1, "Please provide a search query")
        self._show_messages(self.client.filter(query, self._count(args, 1)))

    def do_search_sender(self, args: List[str]):
        sender, = self._require(args, 1, "Please provide sender email address")
        self._show_messages(self.client.search_by_sender(sender, self._count(args, 1)))

    def do_search_subject(self, args: List[str]):
        subject, = self._require(args, 1, "Please provide subject text to search for")
        self._show_messages(self.client.search_by_subject(subject, self._count(args, 1)))

    def do_search_unread(self, args: List[str]):
        self._show_messages(self.client.search_unread(self._count(args, 0)))

    def do_search_label(self, args: List[str]):
        label_name, = self._require(args, 1, "Please provide a label name")
        self._show_messages(self.client.search_by_label(label_name, self._count(args, 1)))

    def do_labels(self, args: List[str]):
        result = self.client.list_labels()
        if not result.ok:
            echo_error(f"Could not fetch labels: {result.error}")
            return
        echo_lines(["Available Labels:"] + [format_label(label) for label in result.value])

    def do_create_label(self, args: List[str]):
        name, = self._require(args, 1, "Please provide a label name")
        result = self.client.create_label(name)
        if result.ok and result.value is not None:
            echo_success(f"Label created successfully: {result.value.name} (ID: {result.value.id})")
        else:
            echo_error(f"Failed to create label: {result.error}")

    def do_add_label(self, args: List[str]):
        message_id, label_id = self._require(args, 2, "Please provide messageId and labelId")
        self._report(self.client.add_label(message_id, label_id),
                     "Label added successfully", "Failed to add label")

    def do_remove_label(self, args: List[str]):
        message_id, label_id = self._require(args, 2, "Please provide messageId and labelId")
        self._report(self.client.remove_label(message_id, label_id),
                     "Label removed successfully", "Failed to remove label")

    def do_archive(self, args: List[str]):
        message_id, = self._require(args, 1, "Please provide a message ID")
        self._report(self.client.archive(message_id),
                     "Email archived successfully", "Failed to archive email")

    def do_unarchive(self, args: List[str]):
        message_id, = self._require(args, 1, "Please provide a message ID")
        self._report(self.client.unarchive(message_id),
                     "Email unarchived successfully", "Failed to unarchive email")

    def do_help(self, args: List[str]):
        self.print_menu()

    def do_quit(self, args: List[str]):
        click.echo("Goodbye!")
        self.state = ShellState.TERMINATED

    @staticmethod
    def _report(result: Result, success_message: str, failure_message: str):
        if result.ok and result.value:
            echo_success(success_message)
        else:
            echo_error(f"{failure_message}: {result.error}")
