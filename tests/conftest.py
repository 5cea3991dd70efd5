"""
Test configuration shared by all gmail_manager tests.

This module provides:
- Environment isolation so tests never read the user's real config or token
- Marker registration
"""

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """
    Point every configuration lookup at a temporary directory.

    No test touches ~/.config/gmail-manager or the token.json next to the
    package, and the OAuth client settings are fixed test values.
    """
    monkeypatch.setenv("GMAIL_MANAGER_CONFIG_FILE", str(tmp_path / "config.yaml"))
    monkeypatch.setenv("GMAIL_MANAGER_TOKEN_FILE", str(tmp_path / "token.json"))
    monkeypatch.delenv("GMAIL_MANAGER_DISPLAY_LIMIT", raising=False)
    monkeypatch.setenv("GOOGLE_CLIENT_ID", "test_client_id")
    monkeypatch.setenv("GOOGLE_CLIENT_SECRET", "test_client_secret")
    monkeypatch.setenv("GOOGLE_REDIRECT_URI", "http://localhost:3000/oauth2callback")
    return tmp_path


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
