"""Messaging adapters - verification code delivery."""

from .console import ConsoleVerificationSender

__all__ = ["ConsoleVerificationSender"]
