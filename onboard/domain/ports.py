"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the records and interfaces (ports) that the domain
requires from infrastructure. Adapters implement these protocols.

The identity and profile contexts are deliberately separate: each has
its own record type and repository, and neither references the other.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Protocol


class Channel(str, Enum):
    """Delivery channel for a verification code."""

    EMAIL = "email"
    SMS = "sms"


class ClaimResult(Enum):
    """
    Result of inserting a new identity record.

    The repository reports which unique constraint rejected the insert
    so the service can raise the matching conflict message.
    """

    CREATED = "created"
    EMAIL_TAKEN = "email_taken"
    PHONE_TAKEN = "phone_taken"


class VerifyResult(Enum):
    """Result of a verification attempt."""

    SUCCESS = "success"
    ALREADY_VERIFIED = "already_verified"
    NOT_FOUND = "not_found"
    INVALID_CODE = "invalid_code"
    EXPIRED = "expired"


@dataclass(frozen=True)
class IdentityRecord:
    """A registering user: contact identifiers, credential and verified flag."""

    id: int
    email: str | None
    phone: str | None
    credential_hash: str
    verified: bool
    created_at: datetime


@dataclass(frozen=True)
class NewStudentProfile:
    """Caller-supplied profile fields, already validated."""

    full_name: str
    email: str
    date_of_birth: date
    address: str
    education_background: str


@dataclass(frozen=True)
class StudentProfile:
    """A stored student profile."""

    id: int
    full_name: str
    email: str
    date_of_birth: date
    address: str
    education_background: str
    created_at: datetime


class IdentityRepository(Protocol):
    """Port interface for identity record persistence."""

    def find_by_email(self, email: str) -> IdentityRecord | None:
        """Return the record registered with this email, if any."""
        ...

    def find_by_phone(self, phone: str) -> IdentityRecord | None:
        """Return the record registered with this phone, if any."""
        ...

    def create(
        self,
        email: str | None,
        phone: str | None,
        credential_hash: str,
        code: str,
        code_ttl_seconds: int,
    ) -> ClaimResult:
        """
        Insert a new unverified identity record.

        Uniqueness of email and phone is enforced by the store itself, so
        two concurrent inserts for the same identifier cannot both succeed.

        Args:
            email: Normalized email address or None
            phone: Normalized phone number or None
            credential_hash: bcrypt hashed password
            code: One-time verification code
            code_ttl_seconds: Lifetime of the code

        Returns:
            CREATED, or which identifier was already taken
        """
        ...

    def verify(
        self,
        email: str,
        phone: str,
        code: str | None,
        require_code: bool,
    ) -> VerifyResult:
        """
        Mark the record matching the identifier as verified.

        Looks up by email first, then by phone, under a row lock.

        Args:
            email: Identifier normalized as an email address
            phone: Identifier normalized as a phone number
            code: Verification code supplied by the caller, if any
            require_code: Reject attempts that carry no code

        Returns:
            VerifyResult indicating success or the failure reason
        """
        ...


class ProfileRepository(Protocol):
    """Port interface for student profile persistence."""

    def create(self, profile: NewStudentProfile) -> StudentProfile:
        """Insert a profile and return it with its id and creation time."""
        ...

    def list_all(self) -> list[StudentProfile]:
        """Return every stored profile, oldest first."""
        ...

    def count_by_email(self, email: str) -> int:
        """Return how many stored profiles use this email."""
        ...


class VerificationSender(Protocol):
    """Port interface for out-of-band verification code delivery."""

    def send_verification_code(self, channel: Channel, address: str, code: str) -> None:
        """
        Deliver a verification code.

        Args:
            channel: EMAIL or SMS
            address: Recipient email address or phone number
            code: One-time verification code
        """
        ...
