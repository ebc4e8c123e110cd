"""
Identity routes.

- POST /api/register - Create an unverified identity record
- POST /api/verify - Mark an identity record as verified
"""

from fastapi import APIRouter, Depends, status

from onboard.api.dependencies import get_registration_service
from onboard.api.models import (
    ErrorResponse,
    MessageResponse,
    RegisterRequest,
    ValidationErrorResponse,
    VerifyRequest,
)
from onboard.domain.registration import RegistrationService

router = APIRouter(tags=["identity"])


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Invalid input or already registered"},
        500: {"model": ErrorResponse, "description": "Server error"},
    },
    summary="Register a new user",
    description="Submit an email and/or phone with a password. "
    "The record is created unverified and a verification code is dispatched.",
)
def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    """
    Register a new user.

    - **email**: Email address (optional)
    - **phone**: Phone number (optional)
    - **password**: Password

    At least one of email or phone is required.
    """
    service.register(request_data.email, request_data.phone, request_data.password)
    return MessageResponse(message="Registered (verification pending).")


@router.post(
    "/verify",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or expired code"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Verify a registered user",
    description="Mark the user registered with the given email or phone as verified.",
)
def verify(
    request_data: VerifyRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    """
    Mark a registered user as verified.

    - **emailOrPhone**: Email address or phone number used at registration
    - **code**: Verification code (optional unless the server requires it)

    Verifying an already verified user succeeds again.
    """
    service.verify(request_data.email_or_phone, request_data.code)
    return MessageResponse(message="User verified")
