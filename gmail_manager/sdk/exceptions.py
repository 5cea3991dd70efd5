class GmailManagerError(Exception):
    """Base class for all Gmail Manager exceptions."""
    pass

class CredentialError(GmailManagerError):
    """Raised when the persisted token record is absent or unreadable."""
    pass

class ConfigurationError(GmailManagerError):
    """Raised when a configuration value has the wrong shape."""
    pass
