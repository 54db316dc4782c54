"""
CampusHub Backend — User Profile Routes
=========================================

GET/POST /userpage always operate on the logged-in user's own profile.
/people and /userdetails/{fullName} are the public directory.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campushub.auth.deps import require_principal
from campushub.auth.principal import Principal
from campushub.database import get_db_session
from campushub.schemas.common import ErrorResponse
from campushub.schemas.profile import PersonSummary, ProfileResponse, ProfileUpdateRequest
from campushub.services.profile_service import profile_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Profiles"])

_AUTH_RESPONSES = {401: {"description": "Not logged in", "model": ErrorResponse}}


@router.get(
    "/userpage",
    response_model=None,
    responses=_AUTH_RESPONSES,
    summary="The logged-in user's profile ({} when none saved yet)",
)
async def get_own_profile(
    principal: Principal = Depends(require_principal),
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    profile = await profile_service.get_for_principal(db, principal)
    if profile is None:
        return {}
    return profile.model_dump(mode="json", by_alias=True)


@router.post(
    "/userpage",
    response_model=ProfileResponse,
    responses={
        **_AUTH_RESPONSES,
        400: {"description": "Invalid profile payload", "model": ErrorResponse},
    },
    summary="Create or replace the logged-in user's profile",
)
async def save_own_profile(
    payload: ProfileUpdateRequest,
    principal: Principal = Depends(require_principal),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.upsert_for_principal(db, principal, payload)


@router.get(
    "/people",
    response_model=List[PersonSummary],
    summary="Directory of everyone with a profile",
)
async def list_people(db: AsyncSession = Depends(get_db_session)) -> List[PersonSummary]:
    return await profile_service.list_people(db)


@router.get(
    "/userdetails/{full_name}",
    response_model=ProfileResponse,
    responses={404: {"description": "No profile with that name", "model": ErrorResponse}},
    summary="Look up a profile by full name",
)
async def get_profile_by_name(
    full_name: str,
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.get_by_full_name(db, full_name)
