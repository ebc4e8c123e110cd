"""
API routes package.

Combines the identity and profile intake routers; mounted under /api.
"""

from fastapi import APIRouter

from onboard.api.routes import identity, students

router = APIRouter()
router.include_router(identity.router)
router.include_router(students.router)

__all__ = ["router"]
