"""Student onboarding service: identity registration/verification and profile intake."""

__version__ = "0.1.0"
