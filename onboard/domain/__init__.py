"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for student onboarding:
identity registration/verification and student profile intake. It defines
its own port interfaces for infrastructure abstraction, ensuring true
hexagonal architecture decoupling.
"""

from .exceptions import (
    ConflictError,
    NotFoundError,
    OnboardingError,
    ServerError,
    ValidationError,
)
from .ports import (
    Channel,
    ClaimResult,
    IdentityRecord,
    IdentityRepository,
    NewStudentProfile,
    ProfileRepository,
    StudentProfile,
    VerificationSender,
    VerifyResult,
)
from .profiles import ProfileService
from .registration import RegistrationService

__all__ = [
    "Channel",
    "ClaimResult",
    "ConflictError",
    "IdentityRecord",
    "IdentityRepository",
    "NewStudentProfile",
    "NotFoundError",
    "OnboardingError",
    "ProfileRepository",
    "ProfileService",
    "RegistrationService",
    "ServerError",
    "StudentProfile",
    "ValidationError",
    "VerificationSender",
    "VerifyResult",
]
