"""
Registration domain service - identity registration and verification.

Registration
============

1. Blank identifiers are treated as absent; at least one of email/phone
   is required.
2. Email, then phone, is checked against existing records so the caller
   gets a specific conflict message.
3. The password is hashed with bcrypt and the record is inserted with
   verified=False. The store's unique constraints are authoritative: a
   concurrent duplicate that slips past step 2 is rejected by the insert
   and reported as the same conflict.
4. A one-time code is handed to the verification sender. Dispatch failures
   are logged; the registration still succeeds.

Verification
============

The identifier is matched against email first, then phone. A supplied
code must match and be unexpired. Verifying an already verified record
succeeds again without changing it.
"""

import logging
import secrets
from dataclasses import dataclass

import bcrypt

from .exceptions import ConflictError, NotFoundError, ValidationError
from .ports import Channel, ClaimResult, IdentityRepository, VerificationSender, VerifyResult

logger = logging.getLogger(__name__)

EMAIL_OR_PHONE_REQUIRED = "Email or phone required."
EMAIL_TAKEN = "Email already registered."
PHONE_TAKEN = "Phone already registered."
USER_NOT_FOUND = "User not found"
INVALID_CODE = "Invalid or expired verification code."


@dataclass
class RegistrationService:
    """
    Domain service for identity registration and verification.

    Orchestrates identifier normalization, duplicate checks,
    password hashing, code generation and record persistence.
    """

    repository: IdentityRepository
    sender: VerificationSender
    bcrypt_cost: int = 10
    code_ttl_seconds: int = 900
    require_code: bool = False

    def register(self, email: str | None, phone: str | None, password: str) -> str:
        """
        Register a new identity record.

        Args:
            email: Email address (optional, normalized)
            phone: Phone number (optional, normalized)
            password: Password (will be hashed)

        Returns:
            The address the verification code was sent to

        Raises:
            ValidationError: If neither email nor phone is given
            ConflictError: If the email or phone is already registered
        """
        normalized_email = self._normalize_email(email)
        normalized_phone = self._normalize_phone(phone)

        if not normalized_email and not normalized_phone:
            raise ValidationError(EMAIL_OR_PHONE_REQUIRED)

        if normalized_email and self.repository.find_by_email(normalized_email):
            raise ConflictError(EMAIL_TAKEN)
        if normalized_phone and self.repository.find_by_phone(normalized_phone):
            raise ConflictError(PHONE_TAKEN)

        password_hash = self._hash_password(password)
        code = self._generate_verification_code()

        result = self.repository.create(
            normalized_email,
            normalized_phone,
            password_hash,
            code,
            self.code_ttl_seconds,
        )
        if result == ClaimResult.EMAIL_TAKEN:
            raise ConflictError(EMAIL_TAKEN)
        if result == ClaimResult.PHONE_TAKEN:
            raise ConflictError(PHONE_TAKEN)

        if normalized_email:
            channel, address = Channel.EMAIL, normalized_email
        else:
            channel, address = Channel.SMS, normalized_phone
        # Record is committed at this point; dispatch is out-of-band.
        try:
            self.sender.send_verification_code(channel, address, code)
        except Exception:
            logger.exception("Verification code dispatch via %s failed", channel.value)

        logger.info("Registered identity via %s (verification pending)", channel.value)
        return address

    def verify(self, email_or_phone: str, code: str | None = None) -> VerifyResult:
        """
        Mark the identity matching an email or phone as verified.

        Args:
            email_or_phone: Registered email address or phone number
            code: Verification code issued at registration, if supplied

        Returns:
            SUCCESS, or ALREADY_VERIFIED for a repeat verification

        Raises:
            NotFoundError: If no record matches the identifier
            ValidationError: If the code is wrong, expired or required but missing
        """
        identifier = (email_or_phone or "").strip()
        if not identifier:
            raise NotFoundError(USER_NOT_FOUND)

        code = code.strip() if code else None
        result = self.repository.verify(
            self._normalize_email(identifier),
            self._normalize_phone(identifier),
            code,
            self.require_code,
        )

        if result == VerifyResult.NOT_FOUND:
            raise NotFoundError(USER_NOT_FOUND)
        if result in (VerifyResult.INVALID_CODE, VerifyResult.EXPIRED):
            logger.info("Verification rejected: %s", result.value)
            raise ValidationError(INVALID_CODE)
        return result

    def _normalize_email(self, email: str | None) -> str | None:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase. Blank becomes None.
        """
        if email is None:
            return None
        return email.strip().lower() or None

    def _normalize_phone(self, phone: str | None) -> str | None:
        """Strip surrounding whitespace. Blank becomes None."""
        if phone is None:
            return None
        return phone.strip() or None

    def _generate_verification_code(self) -> str:
        """
        Generate a cryptographically secure 6-digit verification code.

        Returns string to preserve leading zeros.
        """
        return "".join(secrets.choice("0123456789") for _ in range(6))

    def _hash_password(self, password: str) -> str:
        """Hash password using bcrypt with cost factor >= 10."""
        rounds = max(self.bcrypt_cost, 10)
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()
