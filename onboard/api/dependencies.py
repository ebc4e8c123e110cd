"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Request
from psycopg_pool import ConnectionPool

from onboard.adapters.messaging.console import ConsoleVerificationSender
from onboard.adapters.repository.postgres import (
    PostgresIdentityRepository,
    PostgresProfileRepository,
)
from onboard.config.settings import get_settings
from onboard.domain.profiles import ProfileService
from onboard.domain.registration import RegistrationService

# Module-level singleton - ConsoleVerificationSender is stateless
_sender = ConsoleVerificationSender()


def get_identity_pool(request: Request) -> ConnectionPool:
    """
    Get the identity store pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.identity_pool


def get_profile_pool(request: Request) -> ConnectionPool:
    """Get the profile store pool from app state."""
    return request.app.state.profile_pool


def get_identity_repository(request: Request) -> PostgresIdentityRepository:
    """Create identity repository with connection pool from app state."""
    return PostgresIdentityRepository(get_identity_pool(request))


def get_profile_repository(request: Request) -> PostgresProfileRepository:
    """Create profile repository with connection pool from app state."""
    return PostgresProfileRepository(get_profile_pool(request))


def get_verification_sender() -> ConsoleVerificationSender:
    """Get console verification sender (singleton)."""
    return _sender


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, sender and registration settings.
    """
    settings = get_settings()
    return RegistrationService(
        repository=get_identity_repository(request),
        sender=get_verification_sender(),
        bcrypt_cost=settings.bcrypt_cost,
        code_ttl_seconds=settings.verification_code_ttl_seconds,
        require_code=settings.require_verification_code,
    )


def get_profile_service(request: Request) -> ProfileService:
    """Create profile service backed by the profile store."""
    return ProfileService(repository=get_profile_repository(request))
