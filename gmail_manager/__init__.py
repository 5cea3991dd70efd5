"""Gmail Manager - interactive Gmail mailbox CLI.

Package layout:
- gmail_manager.sdk: credential store, session, and Gmail request wrappers
- gmail_manager.cli: the interactive command shell
"""

__version__ = "0.1.0"
