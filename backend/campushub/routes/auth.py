"""
CampusHub Backend — Signup, Login & Logout Routes
===================================================

What:  The credential endpoints and the session cookie lifecycle.

Login flow:
    anonymous ──POST /login──► authenticator.authenticate()
        ├── AuthFailureError ──► 401, no cookie, nothing written
        └── Principal ──► old session (if any) revoked
                       ──► session_gate.serialize_principal() ──► Set-Cookie

Both routes read the raw body (JSON or form-encoded) instead of declaring a
pydantic body, so a malformed login body fails exactly like a wrong password
and a malformed signup body fails with the same generic message as a
duplicate identity.
"""

import logging
from typing import Any, Dict

import pydantic
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from campushub.auth.authenticator import authenticator
from campushub.auth.credential_store import credential_store
from campushub.auth.deps import clear_session_cookie, get_auth_context, set_session_cookie
from campushub.auth.principal import AuthContext
from campushub.auth.sessions import session_gate
from campushub.database import get_db_session
from campushub.exceptions import ValidationError
from campushub.schemas.auth import LoginResponse, PrincipalResponse, SignupRequest
from campushub.schemas.common import ErrorResponse, StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


async def read_body(request: Request) -> Dict[str, Any]:
    """
    Parse a JSON or form-encoded body into a dict.

    Anything unparsable, or JSON that is not an object, yields {}.
    """
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            body = await request.json()
        elif content_type.startswith(
            ("application/x-www-form-urlencoded", "multipart/form-data")
        ):
            form = await request.form()
            body = {key: value for key, value in form.items() if isinstance(value, str)}
        else:
            return {}
    except (ValueError, StarletteHTTPException):
        return {}
    return body if isinstance(body, dict) else {}


@router.post(
    "/signup",
    response_model=StatusResponse,
    responses={
        400: {"description": "Missing or invalid field", "model": ErrorResponse},
        409: {"description": "Signup failed (generic)", "model": ErrorResponse},
    },
    summary="Register a new account",
)
async def signup(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> StatusResponse:
    body = await read_body(request)
    try:
        payload = SignupRequest.model_validate(body)
    except pydantic.ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ValidationError(message="Error during signup", context={"fields": fields})

    await credential_store.register(db, payload.to_candidate(), payload.password)
    return StatusResponse(status="success", message="Signup successful")


async def _login(
    request: Request,
    response: Response,
    db: AsyncSession,
    ctx: AuthContext,
) -> LoginResponse:
    body = await read_body(request)
    principal = await authenticator.authenticate(db, body.get("username"), body.get("password"))

    # A session that existed before authentication is never promoted
    if ctx.session_token:
        await session_gate.invalidate(db, ctx.session_token)

    token = await session_gate.serialize_principal(db, principal)
    set_session_cookie(response, request, token)
    logger.info("User %s logged in", principal.id)
    return LoginResponse(user=PrincipalResponse.from_principal(principal))


_LOGIN_RESPONSES = {401: {"description": "Invalid username or password", "model": ErrorResponse}}


@router.post(
    "/login",
    response_model=LoginResponse,
    responses=_LOGIN_RESPONSES,
    summary="Log in and receive a session cookie",
)
async def login(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    ctx: AuthContext = Depends(get_auth_context),
) -> LoginResponse:
    return await _login(request, response, db, ctx)


@router.post(
    "/clublogin",
    response_model=LoginResponse,
    responses=_LOGIN_RESPONSES,
    summary="Log in (club portal)",
)
async def club_login(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    ctx: AuthContext = Depends(get_auth_context),
) -> LoginResponse:
    return await _login(request, response, db, ctx)


@router.post(
    "/logout",
    response_model=StatusResponse,
    summary="End the current session",
)
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    ctx: AuthContext = Depends(get_auth_context),
) -> StatusResponse:
    """Idempotent: succeeds with or without a live session."""
    if ctx.session_token:
        await session_gate.invalidate(db, ctx.session_token)
    clear_session_cookie(response, request)
    return StatusResponse(status="success", message="Logged out")
