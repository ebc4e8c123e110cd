"""
Profile intake routes.

- POST /api/students - Create a student profile (mobile client)
- GET /api/students - List all student profiles (web admin)
"""

from fastapi import APIRouter, Depends, status

from onboard.api.dependencies import get_profile_service
from onboard.api.models import (
    StudentProfileRequest,
    StudentProfileResponse,
    ValidationErrorResponse,
)
from onboard.domain.profiles import ProfileService

router = APIRouter(prefix="/students", tags=["students"])


@router.post(
    "",
    response_model=StudentProfileResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationErrorResponse, "description": "Validation error"}},
    summary="Create a student profile",
)
def create_student(
    request_data: StudentProfileRequest,
    service: ProfileService = Depends(get_profile_service),
) -> StudentProfileResponse:
    profile = service.create(request_data.to_domain())
    return StudentProfileResponse.from_domain(profile)


@router.get(
    "",
    response_model=list[StudentProfileResponse],
    summary="List student profiles",
)
def list_students(
    service: ProfileService = Depends(get_profile_service),
) -> list[StudentProfileResponse]:
    return [StudentProfileResponse.from_domain(p) for p in service.list()]
