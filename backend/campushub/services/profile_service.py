"""
CampusHub Backend — Profile Service
=====================================

What:  Read and upsert the "user details" profile, plus the public people
       directory.
Why:   Profiles are keyed by the owning user id taken from the session. The
       earlier design looked profiles up by a client-supplied email on an
       unauthenticated route, which let anyone overwrite anyone's profile.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campushub.auth.principal import Principal
from campushub.database import store_guard
from campushub.exceptions import NotFoundError
from campushub.models.profile import UserProfile
from campushub.schemas.profile import PersonSummary, ProfileResponse, ProfileUpdateRequest

logger = logging.getLogger(__name__)


def _to_response(profile: UserProfile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        full_name=profile.full_name,
        email=profile.email,
        campus=profile.campus,
        phone=profile.phone,
        instagram=profile.instagram,
        twitter=profile.twitter,
        linked_in=profile.linked_in,
        github=profile.github,
        skills=list(profile.skills or []),
        projects=list(profile.projects or []),
    )


class ProfileService:

    async def _find_for_user(self, db: AsyncSession, principal: Principal) -> Optional[UserProfile]:
        with store_guard("load profile"):
            result = await db.execute(
                select(UserProfile).where(UserProfile.user_id == principal.id)
            )
        return result.scalar_one_or_none()

    async def get_for_principal(self, db: AsyncSession, principal: Principal) -> Optional[ProfileResponse]:
        profile = await self._find_for_user(db, principal)
        return _to_response(profile) if profile is not None else None

    async def upsert_for_principal(
        self,
        db: AsyncSession,
        principal: Principal,
        payload: ProfileUpdateRequest,
    ) -> ProfileResponse:
        """Create or replace the caller's own profile."""
        profile = await self._find_for_user(db, principal)
        if profile is None:
            profile = UserProfile(user_id=principal.id)
            db.add(profile)

        profile.email = principal.email
        profile.full_name = payload.full_name
        profile.campus = payload.campus or principal.campus
        profile.phone = payload.phone
        profile.instagram = payload.instagram
        profile.twitter = payload.twitter
        profile.linked_in = payload.linked_in
        profile.github = payload.github
        profile.skills = list(payload.skills)
        profile.projects = list(payload.projects)

        with store_guard("save profile"):
            await db.flush()
        logger.info("Profile saved for user %s", principal.id)
        return _to_response(profile)

    async def list_people(self, db: AsyncSession) -> List[PersonSummary]:
        with store_guard("list people"):
            result = await db.execute(
                select(UserProfile.full_name, UserProfile.skills).order_by(UserProfile.full_name)
            )
        return [
            PersonSummary(full_name=full_name, skills=list(skills or []))
            for full_name, skills in result.all()
        ]

    async def get_by_full_name(self, db: AsyncSession, full_name: str) -> ProfileResponse:
        with store_guard("load profile by name"):
            result = await db.execute(
                select(UserProfile).where(UserProfile.full_name == full_name).limit(1)
            )
        profile = result.scalar_one_or_none()
        if profile is None:
            raise NotFoundError(resource="user", resource_id=full_name)
        return _to_response(profile)


profile_service = ProfileService()
