"""Gmail Manager CLI - interactive command shell."""
