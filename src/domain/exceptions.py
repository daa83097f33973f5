"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class EmailNotEligible(RegistrationError):
    """Email is not on the configured allow-list."""

    pass


class EmailAlreadyRegistered(RegistrationError):
    """Email already has a stored password hash."""

    pass


class RegistrationNotPersisted(RegistrationError):
    """The password hash could not be read back after writing it."""

    pass
