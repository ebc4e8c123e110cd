"""Intake form client for the registration endpoint."""

from .intake import IntakeForm, IntakeResult

__all__ = ["IntakeForm", "IntakeResult"]
