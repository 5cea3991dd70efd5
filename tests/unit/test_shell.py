"""
Unit tests for the interactive shell.

The shell is driven end to end through the real click entry point with
Click's CliRunner; build_shell is patched to return a shell whose mailbox
client talks to FakeGmailService.
"""

from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from gmail_manager.cli.__main__ import gmail_manager
from gmail_manager.cli.shell import InteractiveShell, ShellState
from gmail_manager.sdk import Result


@pytest.fixture
def store():
    """Credential store that already holds a valid token."""
    s = MagicMock()
    s.ensure_authenticated.return_value = Result.success(True)
    return s


@pytest.fixture
def shell(store, client):
    return InteractiveShell(store, client, display_limit=5, default_count=10)


@pytest.fixture
def run(monkeypatch):
    """Run the CLI with the given shell and input lines; returns the CliRunner result."""
    def _run(shell, *lines):
        monkeypatch.setattr("gmail_manager.cli.__main__.build_shell", lambda: shell)
        text = "".join(f"{line}\n" for line in lines)
        return CliRunner().invoke(gmail_manager, [], input=text)
    return _run


class TestStateMachine:

    def test_quit_terminates(self, shell, run):
        result = run(shell, "quit")

        assert result.exit_code == 0
        assert "Gmail Manager CLI" in result.output
        assert "Available commands:" in result.output
        assert "Goodbye!" in result.output
        assert shell.state is ShellState.TERMINATED

    def test_exit_is_case_insensitive(self, shell, run):
        result = run(shell, "EXIT")

        assert "Goodbye!" in result.output
        assert shell.state is ShellState.TERMINATED

    def test_end_of_input_terminates(self, shell, run):
        result = run(shell)

        assert result.exit_code == 0
        assert shell.state is ShellState.TERMINATED

    def test_unknown_command_keeps_looping(self, shell, run):
        result = run(shell, "frobnicate", "quit")

        assert "Unknown command. Please try again." in result.output
        assert "Goodbye!" in result.output
        assert result.output.count("Available commands:") == 2

    def test_menu_lists_every_command(self, shell, run):
        result = run(shell, "quit")

        for usage in ("list [count]", "details <messageId>", "filter <query> [count]",
                      "search-sender <email> [count]", "search-subject <text> [count]",
                      "search-unread [count]", "search-label <labelName> [count]", "labels",
                      "create-label <name>", "add-label <messageId> <labelId>",
                      "remove-label <messageId> <labelId>", "archive <messageId>",
                      "unarchive <messageId>", "help", "quit"):
            assert usage in result.output


class TestAuthentication:

    def test_authorization_code_flow(self, store, client, run):
        store.ensure_authenticated.return_value = Result.failure("no token", False)
        store.complete_authorization.return_value = Result.success(True)
        shell = InteractiveShell(store, client)

        result = run(shell, "  the-code  ", "quit")

        assert "First time setup required." in result.output
        store.complete_authorization.assert_called_once_with("the-code")
        assert "Token stored successfully" in result.output
        assert "Goodbye!" in result.output

    def test_failed_exchange_terminates(self, store, client, run):
        store.ensure_authenticated.return_value = Result.failure("no token", False)
        store.complete_authorization.return_value = Result.failure("invalid_grant", False)
        shell = InteractiveShell(store, client)

        result = run(shell, "bad-code", "list")

        assert "Authentication failed. Exiting." in result.output
        assert "Available commands:" not in result.output
        assert shell.state is ShellState.TERMINATED

    def test_no_code_given_terminates(self, store, client, run):
        store.ensure_authenticated.return_value = Result.failure("no token", False)
        shell = InteractiveShell(store, client)

        result = run(shell)

        assert "Authentication failed. Exiting." in result.output
        store.complete_authorization.assert_not_called()

    def test_existing_token_skips_prompt(self, store, shell, run):
        result = run(shell, "quit")

        assert "First time setup required." not in result.output
        store.complete_authorization.assert_not_called()


class TestListing:

    def test_list_shows_details_with_labels(self, shell, run, gmail):
        result = run(shell, "list 2", "quit")

        assert "Fetching 2 recent emails..." in result.output
        assert "ID: m3" in result.output
        assert "From: alice@example.com" in result.output
        assert "Subject: Quarterly report" in result.output
        assert "Labels: INBOX, UNREAD" in result.output
        assert "Preview: Numbers attached" in result.output
        assert "ID: m2" in result.output
        assert "ID: m1" not in result.output
        assert gmail.requests[0][1]["maxResults"] == 2

    def test_list_default_count(self, shell, run, gmail):
        result = run(shell, "list", "quit")

        assert "Fetching 10 recent emails..." in result.output
        assert gmail.requests[0][1]["maxResults"] == 10

    def test_display_is_truncated_to_display_limit(self, store, client, run, gmail):
        shell = InteractiveShell(store, client, display_limit=1)

        result = run(shell, "list 3", "quit")

        assert "ID: m3" in result.output
        assert "ID: m2" not in result.output
        gets = [r for r in gmail.requests if r[0] == "messages.get"]
        assert len(gets) == 1

    def test_filter_blocks_have_no_labels_line(self, shell, run):
        result = run(shell, "filter from:bob@example.com", "quit")

        assert "ID: m2" in result.output
        assert "Subject: Lunch?" in result.output
        assert "Labels:" not in result.output

    def test_quoted_query_is_one_argument(self, shell, run, gmail):
        run(shell, 'filter "from:alice subject:report" 4', "quit")

        assert gmail.requests[0][1] == {"userId": "me", "maxResults": 4, "q": "from:alice subject:report"}

    def test_search_commands_build_queries(self, shell, run, gmail):
        run(shell, "search-sender alice@example.com 3", "search-subject Lunch",
            "search-unread", "search-label Project", "quit")

        queries = [r[1]["q"] for r in gmail.requests if r[0] == "messages.list"]
        assert queries == ["from:alice@example.com", "subject:Lunch", "is:unread", "label:Project"]

    def test_no_results(self, shell, run):
        result = run(shell, "search-sender nobody@example.com", "quit")

        assert "No emails found." in result.output

    def test_listing_failure_is_reported(self, store, run):
        client = MagicMock()
        client.list_recent.return_value = Result.failure("Unable to find the server", [])
        shell = InteractiveShell(store, client)

        result = run(shell, "list", "quit")

        assert "Could not fetch emails: Unable to find the server" in result.output
        assert "Goodbye!" in result.output


class TestArgumentErrors:

    @pytest.mark.parametrize("line,message", [
        ("details", "Please provide a message ID"),
        ("filter", "Please provide a search query"),
        ("search-sender", "Please provide sender email address"),
        ("search-subject", "Please provide subject text to search for"),
        ("search-label", "Please provide a label name"),
        ("create-label", "Please provide a label name"),
        ("add-label m1", "Please provide messageId and labelId"),
        ("remove-label", "Please provide messageId and labelId"),
        ("archive", "Please provide a message ID"),
        ("unarchive", "Please provide a message ID"),
    ])
    def test_missing_arguments(self, shell, run, gmail, line, message):
        result = run(shell, line, "quit")

        assert message in result.output
        assert "Goodbye!" in result.output
        assert gmail.requests == []

    @pytest.mark.parametrize("line", ["list ten", "list 0", "search-unread -3", "filter is:unread x"])
    def test_invalid_count(self, shell, run, gmail, line):
        result = run(shell, line, "quit")

        assert "Count must be a positive integer" in result.output
        assert gmail.requests == []

    def test_unbalanced_quotes(self, shell, run):
        result = run(shell, 'filter "from:alice', "quit")

        assert "Could not parse command" in result.output
        assert "Goodbye!" in result.output


class TestMailboxCommands:

    def test_details(self, shell, run):
        result = run(shell, "details m1", "quit")

        assert "Email Details:" in result.output
        assert "Subject: No Subject" in result.output
        assert "Date: Unknown Date" in result.output
        assert "Labels: INBOX" in result.output
        assert "Content: no subject here" in result.output

    def test_details_not_found(self, shell, run):
        result = run(shell, "details nope", "quit")

        assert "Email not found or error occurred" in result.output

    def test_labels(self, shell, run):
        result = run(shell, "labels", "quit")

        assert "Available Labels:" in result.output
        assert "ID: Label_project | Name: Project" in result.output

    def test_create_label(self, shell, run, gmail):
        result = run(shell, 'create-label "Travel Plans"', "quit")

        assert "Label created successfully: Travel Plans (ID: Label_1)" in result.output
        assert gmail.label_records[-1]["name"] == "Travel Plans"

    def test_add_and_remove_label(self, shell, run, gmail):
        result = run(shell, "add-label m1 Label_project", "remove-label m2 Label_project", "quit")

        assert "Label added successfully" in result.output
        assert "Label removed successfully" in result.output
        assert "Label_project" in gmail.messages_by_id["m1"]["labelIds"]
        assert "Label_project" not in gmail.messages_by_id["m2"]["labelIds"]

    def test_archive_and_unarchive(self, shell, run, gmail):
        result = run(shell, "archive m3", "quit")
        assert "Email archived successfully" in result.output
        assert "INBOX" not in gmail.messages_by_id["m3"]["labelIds"]

        result = run(shell, "unarchive m3", "quit")
        assert "Email unarchived successfully" in result.output
        assert "INBOX" in gmail.messages_by_id["m3"]["labelIds"]

    def test_mutation_failure_is_reported(self, store, run):
        client = MagicMock()
        client.archive.return_value = Result.failure("HttpError 404", False)
        shell = InteractiveShell(store, client)

        result = run(shell, "archive m9", "quit")

        assert "Failed to archive email: HttpError 404" in result.output
        assert "Goodbye!" in result.output


def test_dispatch_blank_line_does_nothing(shell, capsys):
    shell.state = ShellState.READY

    shell.dispatch("   ")

    assert capsys.readouterr().out == ""
    assert shell.state is ShellState.READY
