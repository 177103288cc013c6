"""Authentication infrastructure components.

This module provides password hashing and random credential generation.
"""

from onboard.infrastructure.auth.password_hasher import (
    CredentialHasher,
    credential_hasher,
    generate_random_password,
    hash_password,
    needs_rehash,
    verify_password,
)

__all__ = [
    "CredentialHasher",
    "credential_hasher",
    "generate_random_password",
    "hash_password",
    "needs_rehash",
    "verify_password",
]
