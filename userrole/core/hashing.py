"""Password hashing."""
from functools import cached_property

import bcrypt

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted one-way password hashing backed by bcrypt.

    ``rounds`` is the bcrypt cost factor; each increment doubles the work.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash password using bcrypt with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode('utf-8')

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash. Malformed hashes count as a mismatch."""
        if not plain_password or not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                _encode(plain_password),
                hashed_password.encode('utf-8')
            )
        except (ValueError, TypeError):
            return False

    @cached_property
    def dummy_hash(self) -> str:
        """Hash to verify against when no user matched, so both paths cost the same."""
        return self.hash("dummy-password-for-timing")
