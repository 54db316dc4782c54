"""
CampusHub Backend — Club Routes
=================================

What:  Club listing (public), club creation with an optional poster image
       (logged-in users only) and poster download.

Upload flow (POST /clublisting, multipart/form-data):
    require_principal ──► 401 before the upload is looked at
        └── club_service.create_club()
              ├── content type not image/*   ──► 400
              ├── larger than max_upload_size ──► 400
              └── stored with the club row   ──► 201 {status, message, id}
"""

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from campushub.auth.deps import require_principal
from campushub.auth.principal import Principal
from campushub.database import get_db_session
from campushub.schemas.club import ClubCreatedResponse, ClubResponse
from campushub.schemas.common import ErrorResponse
from campushub.services.club_service import club_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Clubs"])


@router.get(
    "/clubpost",
    response_model=List[ClubResponse],
    summary="List all clubs, newest first",
)
async def list_clubs(db: AsyncSession = Depends(get_db_session)) -> List[ClubResponse]:
    return await club_service.list_clubs(db)


@router.get(
    "/clubpost/{club_id}/poster",
    responses={
        200: {"content": {"image/*": {}}, "description": "Poster image bytes"},
        404: {"description": "No such club or no poster", "model": ErrorResponse},
    },
    summary="Download a club poster",
)
async def get_poster(
    club_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    content, content_type = await club_service.get_poster(db, club_id)
    return Response(
        content=content,
        media_type=content_type,
        headers={
            "Cache-Control": "public, max-age=3600",
            "X-Content-Type-Options": "nosniff",
        },
    )


@router.post(
    "/clublisting",
    response_model=ClubCreatedResponse,
    status_code=201,
    responses={
        400: {"description": "Invalid club or poster", "model": ErrorResponse},
        401: {"description": "Not logged in", "model": ErrorResponse},
    },
    summary="Create a club listing",
)
async def create_club(
    principal: Principal = Depends(require_principal),
    club_name: str = Form(..., alias="clubName"),
    club_type: str = Form("", alias="type"),
    description: str = Form(""),
    google_form_link: Optional[str] = Form(None, alias="googleFormLink"),
    poster_image: Optional[UploadFile] = File(None, alias="posterImage"),
    db: AsyncSession = Depends(get_db_session),
) -> ClubCreatedResponse:
    club = await club_service.create_club(
        db,
        principal,
        club_name=club_name,
        club_type=club_type,
        description=description,
        google_form_link=google_form_link,
        poster=poster_image,
    )
    return ClubCreatedResponse(id=club.id)
