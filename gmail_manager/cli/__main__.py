"""Gmail Manager CLI - entry point for the interactive shell."""

import logging
import os

import click
from dotenv import load_dotenv

from gmail_manager.sdk import config, CredentialStore, MailSession
from gmail_manager.sdk.mail import MailboxClient

from .shell import InteractiveShell


# Configure logging at the application level. The shell shares the terminal
# with log output, so only warnings and errors are shown unless LOG_LEVEL says otherwise.
if not logging.root.handlers:
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.WARNING),
                        format='%(asctime)s - %(levelname)s - %(message)s')
# Suppress noisy INFO logs from googleapiclient and google_auth_oauthlib
logging.getLogger('googleapiclient.discovery').setLevel(logging.WARNING)
logging.getLogger('googleapiclient.discovery_cache').setLevel(logging.WARNING)
logging.getLogger('google_auth_oauthlib.flow').setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def build_shell() -> InteractiveShell:
    """Wire a session, credential store and mailbox client from configuration."""
    config_data = config.load_config()
    session = MailSession(timeout=config.get_request_timeout(config_data))
    store = CredentialStore(
        session,
        token_path=config.get_token_file_path(config_data),
        notify=click.echo,
    )
    logger.debug(f"Using token file {store.token_path}")
    return InteractiveShell(
        store,
        MailboxClient(session),
        display_limit=config.get_display_limit(config_data),
        default_count=config.get_default_count(config_data),
    )


@click.command()
def gmail_manager():
    """Gmail Manager CLI.

    Interactive shell for listing, searching, labeling and archiving Gmail
    messages.
    """
    build_shell().run()


def main():
    """Entry point for the CLI."""
    load_dotenv()
    gmail_manager()


if __name__ == "__main__":
    main()
