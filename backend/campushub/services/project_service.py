"""
CampusHub Backend — Project Service
=====================================

What:  List and create project listings.
Why:   Keeps route handlers thin; ownership stamping lives here.
"""

import logging
from typing import List

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from campushub.auth.principal import Principal
from campushub.database import store_guard
from campushub.models.project import Project
from campushub.schemas.project import ProjectCreateRequest, ProjectResponse

logger = logging.getLogger(__name__)


def _to_response(project: Project) -> ProjectResponse:
    return ProjectResponse(
        id=project.id,
        name=project.name,
        desc=project.desc,
        num=project.num,
        type=project.type,
        created_by=project.created_by,
        created_at=project.created_at,
    )


class ProjectService:
    """Stateless; receives the request's session on every call."""

    async def list_projects(self, db: AsyncSession) -> List[ProjectResponse]:
        with store_guard("list projects"):
            result = await db.execute(select(Project).order_by(desc(Project.created_at)))
        return [_to_response(p) for p in result.scalars().all()]

    async def create_project(
        self,
        db: AsyncSession,
        owner: Principal,
        payload: ProjectCreateRequest,
    ) -> ProjectResponse:
        """Create a project owned by `owner`, the session principal."""
        project = Project(
            name=payload.name,
            desc=payload.desc,
            num=payload.num,
            type=payload.type,
            created_by=owner.id,
        )
        with store_guard("create project"):
            db.add(project)
            await db.flush()
        logger.info("Project created: %s by user %s", project.id, owner.id)
        return _to_response(project)


project_service = ProjectService()
