"""
CampusHub Backend — Project Listing Routes
============================================

GET /listings is public. POST /makeproj needs a session; the owner is
always the session principal, never a field from the body.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campushub.auth.deps import require_principal
from campushub.auth.principal import Principal
from campushub.database import get_db_session
from campushub.schemas.common import ErrorResponse
from campushub.schemas.project import (
    ProjectCreateRequest,
    ProjectCreatedResponse,
    ProjectResponse,
)
from campushub.services.project_service import project_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Projects"])


@router.get(
    "/listings",
    response_model=List[ProjectResponse],
    summary="List all projects, newest first",
)
async def list_projects(db: AsyncSession = Depends(get_db_session)) -> List[ProjectResponse]:
    return await project_service.list_projects(db)


@router.post(
    "/makeproj",
    response_model=ProjectCreatedResponse,
    status_code=201,
    responses={
        400: {"description": "Invalid project payload", "model": ErrorResponse},
        401: {"description": "Not logged in", "model": ErrorResponse},
    },
    summary="Create a project owned by the logged-in user",
)
async def make_project(
    payload: ProjectCreateRequest,
    principal: Principal = Depends(require_principal),
    db: AsyncSession = Depends(get_db_session),
) -> ProjectCreatedResponse:
    project = await project_service.create_project(db, principal, payload)
    return ProjectCreatedResponse(id=project.id)
