"""
CampusHub Backend — Frontend (SPA) Serving
============================================

What:  Serves the built frontend from `frontend_dist_path`.
How:   An existing file under the dist directory is returned as-is; every
       other path falls back to index.html so client-side routing works.
       Without a build, unknown paths are a plain 404.

This router is registered after every API router so it only sees paths no
API route claimed.
"""

import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from campushub.config import settings
from campushub.exceptions import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Frontend"])


def resolve_asset(dist: Path, full_path: str) -> Path:
    """
    Map a request path onto a file inside `dist`.

    Paths that escape the dist directory (`..`, absolute segments) and paths
    that are not regular files resolve to index.html.
    """
    index = dist / "index.html"
    if not full_path:
        return index
    candidate = (dist / full_path).resolve()
    if not candidate.is_relative_to(dist) or not candidate.is_file():
        return index
    return candidate


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str) -> FileResponse:
    dist = Path(settings.frontend_dist_path).resolve()
    target = resolve_asset(dist, full_path)
    if not target.is_file():
        raise NotFoundError(resource="page", resource_id="/" + full_path)
    return FileResponse(target)
