"""
Domain exceptions - Semantic error types for onboarding.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Each error carries the HTTP status the API layer answers with and
a human-readable message that is returned to the caller verbatim.
"""


class OnboardingError(Exception):
    """Base class for onboarding domain errors."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(OnboardingError):
    """Required input is missing or malformed."""

    status_code = 400
    default_message = "Invalid request."


class ConflictError(OnboardingError):
    """Email or phone is already registered."""

    status_code = 400
    default_message = "Already registered."


class NotFoundError(OnboardingError):
    """No record matches the given identifier."""

    status_code = 404
    default_message = "User not found"


class ServerError(OnboardingError):
    """Unexpected persistence failure."""

    pass
