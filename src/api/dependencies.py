"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Request
from psycopg_pool import ConnectionPool

from src.adapters.kv import InMemoryKeyValueStore, PostgresKeyValueStore, run_migrations
from src.config.settings import Settings, get_settings
from src.domain.ports import KeyValueStore
from src.domain.registration import RegistrationService


def build_store(settings: Settings) -> tuple[KeyValueStore, ConnectionPool | None]:
    """
    Create the configured key-value store.

    For the postgres backend this opens a connection pool and runs
    migrations; the pool is returned so the caller can close it.
    """
    if settings.kv_backend == "memory":
        return InMemoryKeyValueStore(settings.kv_namespace), None

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )
    run_migrations(pool)
    return PostgresKeyValueStore(pool, settings.kv_namespace), pool


def get_store(request: Request) -> KeyValueStore:
    """
    Get key-value store from app state.

    The store is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.store


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the store and the configured allow-list.
    """
    settings = get_settings()
    return RegistrationService(
        store=get_store(request),
        allowed_emails=settings.allowed_emails,
        bcrypt_cost=settings.bcrypt_cost,
    )
