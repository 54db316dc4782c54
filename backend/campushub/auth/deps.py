"""
CampusHub Backend — Auth Dependencies & Cookie Helpers
========================================================

What:  FastAPI dependencies that build the per-request AuthContext and gate
       privileged routes, plus the session cookie writer.
How:   FastAPI caches a dependency per request, so get_auth_context runs at
       most once per request no matter how many dependants ask for it.

Usage in a privileged route:
    @router.post("/makeproj")
    async def make_project(..., principal: Principal = Depends(require_principal)):
        ...  # only reached with a live session

    require_principal raises UnauthorizedError before the handler body runs,
    so an anonymous request never reaches the side effect.
"""

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from campushub.auth.principal import ANONYMOUS, AuthContext, Principal
from campushub.auth.sessions import session_gate
from campushub.config import settings
from campushub.database import get_db_session


async def get_auth_context(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> AuthContext:
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return ANONYMOUS

    # Unresolvable cookies stay anonymous; the token is kept so logout can
    # still clear it.
    principal = await session_gate.resolve_principal(db, token)
    return AuthContext(principal=principal, session_token=token)


async def require_principal(ctx: AuthContext = Depends(get_auth_context)) -> Principal:
    return ctx.require_authenticated()


def _cookie_secure(request: Request) -> bool:
    # Behind a TLS-terminating proxy run uvicorn with --proxy-headers so the
    # scheme reflects the client connection.
    return settings.session_cookie_secure or settings.is_production or request.url.scheme == "https"


def set_session_cookie(response: Response, request: Request, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds,
        path="/",
        httponly=True,
        samesite="lax",
        secure=_cookie_secure(request),
    )


def clear_session_cookie(response: Response, request: Request) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=_cookie_secure(request),
    )
