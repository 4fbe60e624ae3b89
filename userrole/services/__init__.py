"""Services module."""
from .account import AccountService, AuthResult, display_user
from .credential_store import CredentialStore
from .session_registry import SessionRegistry

__all__ = [
    "AccountService",
    "AuthResult",
    "CredentialStore",
    "SessionRegistry",
    "display_user",
]
