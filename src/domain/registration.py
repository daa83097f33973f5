"""
Registration domain service - create-once user records.

This module contains the core business logic for user registration.
A user record maps a normalized email to a bcrypt password hash and
is written exactly once.

Registration Guard Clauses
==========================

Checks run in order and the first failure wins:

1. Email on the allow-list (only when an allow-list is configured)
2. Email not registered yet (read from the store)
3. Atomic write of the password hash (put_if_absent)
4. Read-back of the written hash

Step 3 closes the window between the read in step 2 and the write:
when two requests race for the same email, exactly one write succeeds
and the other request is reported as already registered.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import bcrypt

from .exceptions import EmailAlreadyRegistered, EmailNotEligible, RegistrationNotPersisted
from .ports import KeyValueStore

logger = logging.getLogger(__name__)

# bcrypt reads at most 72 password bytes; longer input is truncated here.
BCRYPT_MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


def _password_bytes(password: str) -> bytes:
    return password.encode()[:BCRYPT_MAX_PASSWORD_BYTES]


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: email normalization, allow-list
    check, duplicate check, password hashing, and write verification.
    """

    store: KeyValueStore
    allowed_emails: Iterable[str] | None = None
    bcrypt_cost: int = 10
    _allowed: frozenset[str] | None = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        if self.allowed_emails is not None:
            self._allowed = frozenset(normalize_email(e) for e in self.allowed_emails)

    def register(self, email: str, password: str) -> str:
        """
        Register a new user by storing their password hash.

        Args:
            email: User's email address (will be normalized)
            password: User's password (will be hashed)

        Returns:
            Normalized email address

        Raises:
            EmailNotEligible: If an allow-list is configured and the email is not on it
            EmailAlreadyRegistered: If the email already has a stored hash
            RegistrationNotPersisted: If the hash cannot be read back after writing
        """
        normalized_email = normalize_email(email)

        if not self.is_eligible(normalized_email):
            raise EmailNotEligible(normalized_email)

        if self.store.get(normalized_email):
            raise EmailAlreadyRegistered(normalized_email)

        password_hash = self._hash_password(password)

        if not self.store.put_if_absent(normalized_email, password_hash):
            raise EmailAlreadyRegistered(normalized_email)

        if not self.store.get(normalized_email):
            logger.error("Stored password hash missing after write for %s", normalized_email)
            raise RegistrationNotPersisted(normalized_email)

        return normalized_email

    def is_eligible(self, email: str) -> bool:
        """Return True if the email may be registered under the allow-list."""
        if self._allowed is None:
            return True
        return normalize_email(email) in self._allowed

    def verify_password(self, email: str, password: str) -> bool:
        """
        Check a password against the stored hash for an email.

        Returns False when the email is not registered.
        """
        stored_hash = self.store.get(normalize_email(email))
        if not stored_hash:
            return False
        return bcrypt.checkpw(_password_bytes(password), stored_hash.encode())

    def _hash_password(self, password: str) -> str:
        """Hash password using bcrypt with the configured cost factor."""
        return bcrypt.hashpw(
            _password_bytes(password), bcrypt.gensalt(rounds=self.bcrypt_cost)
        ).decode()
