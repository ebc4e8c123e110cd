"""
Profile intake domain service.

Create and list student profiles. Field validation is done by the
request model before the service is called; the service only persists
and reads back. Profile emails are not required to be unique, but a
repeated email is logged so the gap stays visible.
"""

import logging
from dataclasses import dataclass

from .ports import NewStudentProfile, ProfileRepository, StudentProfile

logger = logging.getLogger(__name__)


@dataclass
class ProfileService:
    """Domain service for student profile intake."""

    repository: ProfileRepository

    def create(self, profile: NewStudentProfile) -> StudentProfile:
        """Store a validated profile and return it with id and createdAt."""
        existing = self.repository.count_by_email(profile.email)
        if existing:
            logger.warning(
                "Profile email already used by %d stored profile(s); storing anyway", existing
            )
        stored = self.repository.create(profile)
        logger.info("Created student profile %s", stored.id)
        return stored

    def list(self) -> list[StudentProfile]:
        """Return every stored profile."""
        return self.repository.list_all()
