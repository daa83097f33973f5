"""
Shared fixtures for adversarial tests.

Provides a registration service over a fresh in-memory store per test.
"""

import pytest

from src.adapters.kv.memory import InMemoryKeyValueStore
from src.domain.registration import RegistrationService


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def service(store: InMemoryKeyValueStore) -> RegistrationService:
    """Registration service with a low bcrypt cost to keep attacks fast."""
    return RegistrationService(store=store, bcrypt_cost=4)
