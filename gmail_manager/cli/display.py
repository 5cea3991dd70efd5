"""Plain-text rendering helpers shared by the shell commands."""

from typing import Iterable, List

import click

from gmail_manager.sdk.mail import Label, MessageSummary

SEPARATOR = "-" * 50


def format_message_block(summary: MessageSummary, include_labels: bool = False) -> List[str]:
    """Lines describing one message in a list-style listing."""
    lines = [
        f"ID: {summary.id}",
        f"From: {summary.sender}",
        f"Subject: {summary.subject}",
        f"Date: {summary.date}",
    ]
    if include_labels:
        lines.append(f"Labels: {', '.join(summary.labels)}")
    lines.append(f"Preview: {summary.snippet}")
    lines.append(SEPARATOR)
    return lines


def format_message_details(summary: MessageSummary) -> List[str]:
    return [
        "Email Details:",
        f"ID: {summary.id}",
        f"From: {summary.sender}",
        f"Subject: {summary.subject}",
        f"Date: {summary.date}",
        f"Labels: {', '.join(summary.labels)}",
        f"Content: {summary.snippet}",
    ]


def format_label(label: Label) -> str:
    return f"ID: {label.id} | Name: {label.name}"


def echo_lines(lines: Iterable[str], leading_blank: bool = True):
    if leading_blank:
        click.echo()
    for line in lines:
        click.echo(line)


def echo_error(message: str):
    click.secho(message, fg="red")


def echo_success(message: str):
    click.secho(message, fg="green")
