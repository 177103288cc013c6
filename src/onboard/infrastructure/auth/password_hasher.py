"""Password hashing utility using Argon2.

Provides secure password hashing and verification using the Argon2id algorithm,
and the random throwaway passwords given to accounts that authenticate through
an external identity provider.
"""

import secrets
import string

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_hasher = PasswordHasher()

RANDOM_PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%^&*()-_=+"


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Args:
        password: The plaintext password to hash.

    Returns:
        The hashed password string.

    Example:
        >>> hashed = hash_password("SecureP@ss123!")
        >>> hashed.startswith("$argon2id$")
        True
    """
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a hash.

    Args:
        password: The plaintext password to verify.
        hashed: The hashed password to verify against.

    Returns:
        True if the password matches, False otherwise.
    """
    try:
        _hasher.verify(hashed, password)
        return True
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def needs_rehash(hashed: str) -> bool:
    """Check if a password hash needs to be rehashed with current parameters."""
    return _hasher.check_needs_rehash(hashed)


def generate_random_password(length: int = 25) -> str:
    """Generate a high-entropy password that is never shown to anyone.

    Args:
        length: Number of characters.

    Returns:
        Random password drawn from letters, digits and punctuation.
    """
    if length < 1:
        raise ValueError("Password length must be positive")
    return "".join(secrets.choice(RANDOM_PASSWORD_ALPHABET) for _ in range(length))


class CredentialHasher:
    """Injectable facade over the module-level hashing functions."""

    def hash(self, password: str) -> str:
        return hash_password(password)

    def verify(self, password: str, hashed: str) -> bool:
        return verify_password(password, hashed)

    def needs_rehash(self, hashed: str) -> bool:
        return needs_rehash(hashed)

    def random_password(self, length: int = 25) -> str:
        return generate_random_password(length)


credential_hasher = CredentialHasher()
