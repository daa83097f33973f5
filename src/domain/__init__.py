"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for user registration.
It defines its own port interfaces for infrastructure abstraction,
ensuring true hexagonal architecture decoupling.
"""

from .exceptions import (
    EmailAlreadyRegistered,
    EmailNotEligible,
    RegistrationError,
    RegistrationNotPersisted,
)
from .ports import KeyValueStore
from .registration import RegistrationService, normalize_email

__all__ = [
    "EmailAlreadyRegistered",
    "EmailNotEligible",
    "KeyValueStore",
    "RegistrationError",
    "RegistrationNotPersisted",
    "RegistrationService",
    "normalize_email",
]
