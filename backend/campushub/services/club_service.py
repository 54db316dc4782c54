"""
CampusHub Backend — Club Service
==================================

What:  Club listings and their poster images.
How:   The poster is validated (declared content type, size) and stored as
       bytes on the club row. Listing never loads poster bytes; they are
       fetched only by get_poster().

Upload checks, cheapest first:
    1. Declared content type must be image/*
    2. At most max_upload_size bytes are read; one byte more means rejection
       without buffering the rest of the upload
    3. An empty file part counts as "no poster"
"""

import logging
import uuid
from typing import List, Optional, Tuple

from fastapi import UploadFile
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from campushub.auth.principal import Principal
from campushub.config import settings
from campushub.database import store_guard
from campushub.exceptions import NotFoundError, ValidationError
from campushub.models.club import Club
from campushub.schemas.club import ClubResponse

logger = logging.getLogger(__name__)


def poster_url(club: Club) -> Optional[str]:
    return f"/clubpost/{club.id}/poster" if club.has_poster else None


def _to_response(club: Club) -> ClubResponse:
    return ClubResponse(
        id=club.id,
        club_name=club.club_name,
        type=club.type,
        description=club.description,
        google_form_link=club.google_form_link,
        poster_url=poster_url(club),
        created_at=club.created_at,
    )


class ClubService:

    def validate_content_type(self, content_type: Optional[str]) -> str:
        ctype = (content_type or "").split(";")[0].strip().lower()
        if not ctype.startswith("image/"):
            raise ValidationError(
                message="Poster must be an image file.",
                field="posterImage",
                context={"content_type": ctype},
            )
        return ctype

    def validate_size(self, size: int) -> None:
        if size > settings.max_upload_size:
            max_mb = settings.max_upload_size / (1024 * 1024)
            raise ValidationError(
                message=f"Poster exceeds the maximum size of {max_mb:.0f}MB.",
                field="posterImage",
                context={"max_size": settings.max_upload_size},
            )

    async def read_poster(self, upload: Optional[UploadFile]) -> Tuple[Optional[bytes], Optional[str]]:
        """Return (bytes, content_type), or (None, None) when no poster was sent."""
        if upload is None or not upload.filename:
            return None, None
        try:
            ctype = self.validate_content_type(upload.content_type)
            content = await upload.read(settings.max_upload_size + 1)
        finally:
            await upload.close()
        if not content:
            return None, None
        self.validate_size(len(content))
        return content, ctype

    async def list_clubs(self, db: AsyncSession) -> List[ClubResponse]:
        with store_guard("list clubs"):
            result = await db.execute(select(Club).order_by(desc(Club.created_at)))
        return [_to_response(c) for c in result.scalars().all()]

    async def create_club(
        self,
        db: AsyncSession,
        owner: Principal,
        club_name: str,
        club_type: str,
        description: str,
        google_form_link: Optional[str],
        poster: Optional[UploadFile],
    ) -> ClubResponse:
        name = (club_name or "").strip()
        if not name:
            raise ValidationError(message="Club name is required.", field="clubName")

        content, ctype = await self.read_poster(poster)
        club = Club(
            club_name=name,
            type=(club_type or "").strip(),
            description=description or "",
            google_form_link=(google_form_link or "").strip() or None,
            poster_image=content,
            poster_content_type=ctype,
            created_by=owner.id,
        )
        with store_guard("create club"):
            db.add(club)
            await db.flush()
        logger.info(
            "Club created: %s by user %s (poster=%d bytes)",
            club.id,
            owner.id,
            len(content) if content else 0,
        )
        return _to_response(club)

    async def get_poster(self, db: AsyncSession, club_id: uuid.UUID) -> Tuple[bytes, str]:
        with store_guard("load poster"):
            result = await db.execute(
                select(Club).options(undefer(Club.poster_image)).where(Club.id == club_id)
            )
        club = result.scalar_one_or_none()
        if club is None or club.poster_image is None:
            raise NotFoundError(resource="poster", resource_id=str(club_id))
        return club.poster_image, club.poster_content_type or "application/octet-stream"


club_service = ClubService()
