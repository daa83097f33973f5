"""
Unit tests for RegistrationService domain logic.

Tests domain logic with mocked ports to verify:
- Email normalization
- Allow-list enforcement
- Duplicate detection
- Password hashing
- Write verification
"""

from unittest.mock import Mock

import bcrypt
import pytest

from src.adapters.kv.memory import InMemoryKeyValueStore
from src.domain.exceptions import EmailAlreadyRegistered, EmailNotEligible, RegistrationNotPersisted
from src.domain.registration import RegistrationService, normalize_email


def make_store(get_values: list | None = None, put_result: bool = True) -> Mock:
    """Mock store whose get() returns the given values in order."""
    store = Mock()
    store.get.side_effect = get_values if get_values is not None else [None, "$2b$04$stored"]
    store.put_if_absent.return_value = put_result
    return store


class TestEmailNormalization:
    """Tests for email normalization."""

    def test_normalize_email_strips_and_lowercases(self) -> None:
        """Email normalization applies strip + lowercase together."""
        assert normalize_email("  User@Example.COM  ") == "user@example.com"

    def test_register_stores_normalized_email(self) -> None:
        """The store key is the normalized email."""
        store = make_store()
        service = RegistrationService(store=store, bcrypt_cost=4)

        result = service.register("  USER@Example.com ", "password123")

        assert result == "user@example.com"
        assert store.put_if_absent.call_args[0][0] == "user@example.com"


class TestAllowList:
    """Tests for the optional email allow-list."""

    def test_no_allow_list_accepts_any_email(self) -> None:
        """Without an allow-list any email can be registered."""
        store = make_store()
        service = RegistrationService(store=store, bcrypt_cost=4)

        service.register("anyone@example.com", "password123")

        store.put_if_absent.assert_called_once()

    def test_email_not_on_allow_list_rejected(self) -> None:
        """Emails absent from the allow-list raise EmailNotEligible."""
        store = make_store()
        service = RegistrationService(
            store=store, allowed_emails=["allowed@example.com"], bcrypt_cost=4
        )

        with pytest.raises(EmailNotEligible):
            service.register("other@example.com", "password123")

        store.get.assert_not_called()
        store.put_if_absent.assert_not_called()

    def test_email_on_allow_list_accepted(self) -> None:
        """Emails on the allow-list are registered."""
        store = make_store()
        service = RegistrationService(
            store=store, allowed_emails=["allowed@example.com"], bcrypt_cost=4
        )

        assert service.register("allowed@example.com", "password123") == "allowed@example.com"

    def test_allow_list_entries_are_normalized(self) -> None:
        """Allow-list matching ignores case and surrounding whitespace."""
        service = RegistrationService(
            store=make_store(), allowed_emails=[" Allowed@Example.com "], bcrypt_cost=4
        )

        assert service.is_eligible("ALLOWED@example.com")
        assert not service.is_eligible("someone@example.com")

    def test_empty_allow_list_rejects_everything(self) -> None:
        """An empty allow-list is configured, so no email is eligible."""
        service = RegistrationService(store=make_store(), allowed_emails=[], bcrypt_cost=4)

        with pytest.raises(EmailNotEligible):
            service.register("user@example.com", "password123")


class TestDuplicateDetection:
    """Tests for already-registered emails."""

    def test_existing_hash_rejected_before_hashing(self) -> None:
        """An existing stored hash raises EmailAlreadyRegistered without writing."""
        store = make_store(get_values=["$2b$04$existing"])
        service = RegistrationService(store=store, bcrypt_cost=4)

        with pytest.raises(EmailAlreadyRegistered):
            service.register("user@example.com", "password123")

        store.put_if_absent.assert_not_called()
        store.put.assert_not_called()

    def test_lost_write_race_rejected(self) -> None:
        """put_if_absent returning False means another request registered first."""
        store = make_store(get_values=[None], put_result=False)
        service = RegistrationService(store=store, bcrypt_cost=4)

        with pytest.raises(EmailAlreadyRegistered):
            service.register("user@example.com", "password123")

    def test_second_registration_does_not_overwrite(self) -> None:
        """Registering twice keeps the first password hash."""
        store = InMemoryKeyValueStore()
        service = RegistrationService(store=store, bcrypt_cost=4)

        service.register("user@example.com", "first-password")
        first_hash = store.get("user@example.com")

        with pytest.raises(EmailAlreadyRegistered):
            service.register("user@example.com", "second-password")

        assert store.get("user@example.com") == first_hash
        assert service.verify_password("user@example.com", "first-password")
        assert not service.verify_password("user@example.com", "second-password")


class TestPasswordHashing:
    """Tests for password hashing."""

    def test_stored_value_is_bcrypt_hash(self) -> None:
        """The stored value is a bcrypt hash of the password, not the password."""
        store = InMemoryKeyValueStore()
        service = RegistrationService(store=store, bcrypt_cost=4)

        service.register("user@example.com", "password123")

        stored = store.get("user@example.com")
        assert stored != "password123"
        assert stored.startswith("$2b$04$")
        assert bcrypt.checkpw(b"password123", stored.encode())

    def test_default_cost_factor_is_10(self) -> None:
        """Default bcrypt cost factor is 10."""
        store = InMemoryKeyValueStore()
        service = RegistrationService(store=store)

        service.register("user@example.com", "password123")

        assert store.get("user@example.com").startswith("$2b$10$")

    def test_verify_password_unknown_email(self) -> None:
        """verify_password returns False for unregistered emails."""
        service = RegistrationService(store=InMemoryKeyValueStore(), bcrypt_cost=4)
        assert service.verify_password("nobody@example.com", "password123") is False


class TestWriteVerification:
    """Tests for the read-back after writing."""

    def test_missing_value_after_write_raises(self) -> None:
        """A write that cannot be read back raises RegistrationNotPersisted."""
        store = make_store(get_values=[None, None])
        service = RegistrationService(store=store, bcrypt_cost=4)

        with pytest.raises(RegistrationNotPersisted):
            service.register("user@example.com", "password123")

    def test_successful_write_reads_back_twice(self) -> None:
        """The store is read once before and once after the write."""
        store = make_store()
        service = RegistrationService(store=store, bcrypt_cost=4)

        service.register("user@example.com", "password123")

        assert store.get.call_count == 2


class TestLongPasswords:
    """Tests for passwords longer than bcrypt's 72-byte input limit."""

    def test_register_100_byte_password(self) -> None:
        """A 100-byte password registers instead of raising."""
        store = InMemoryKeyValueStore()
        service = RegistrationService(store=store, bcrypt_cost=4)

        assert service.register("long@example.com", "x" * 100) == "long@example.com"
        assert service.verify_password("long@example.com", "x" * 100)

    def test_only_first_72_bytes_are_significant(self) -> None:
        """Passwords sharing the first 72 bytes verify against the same hash."""
        store = InMemoryKeyValueStore()
        service = RegistrationService(store=store, bcrypt_cost=4)

        service.register("long@example.com", "a" * 72 + "tail-one")

        assert service.verify_password("long@example.com", "a" * 72 + "tail-two")
        assert not service.verify_password("long@example.com", "a" * 71 + "b")

    def test_multibyte_password_truncated_by_bytes(self) -> None:
        """Truncation counts UTF-8 bytes, not characters."""
        store = InMemoryKeyValueStore()
        service = RegistrationService(store=store, bcrypt_cost=4)

        service.register("utf8@example.com", "ä" * 50)

        assert service.verify_password("utf8@example.com", "ä" * 50)
