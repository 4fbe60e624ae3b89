"""User role system: credential, session and role authorization core."""

__version__ = "2.0.0"
