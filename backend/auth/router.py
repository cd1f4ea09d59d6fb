# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – local registration, login, password connect, current user.

These handlers are a thin adapter around ``auth.protocols.local``: they build
a RequestContext from the request, call the protocol, and turn its outcome
into an HTTP response.  Flash messages queued by the protocol are returned
in the ``flash`` field of the body.

Status mapping
--------------
* Missing / mismatched input, rejected password ............ 400
* Email or username already taken .......................... 409
* Login rejected (unknown user, no password, wrong password) 401
* Data-layer failure, failed compensation .................. 500
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from database import get_db
from core.exceptions import (
    CompensationFailure,
    EmailExists,
    LookupFailure,
    PassportError,
    UserExists,
)
from core.logger import get_logger
from core.security import create_access_token, get_current_user
from models.user import User
from models.validation import ModelValidationError
from auth.context import RequestContext
from auth.protocols import local
from auth.results import AuthenticationRejected, Success
from auth.schemas import (
    ConnectRequest,
    ErrorResponse,
    FlashItem,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserInfoResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])

log = get_logger("auth.router")

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _flash(ctx: RequestContext) -> list[dict]:
    return [FlashItem.model_validate(m).model_dump() for m in ctx.flash.consume()]


def _error(status_code: int, code: str, ctx: RequestContext) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": code, "flash": _flash(ctx)},
    )


def _status_for(exc: PassportError) -> int:
    if isinstance(exc, (EmailExists, UserExists)):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, (CompensationFailure, LookupFailure)):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


# ---------------------------------------------------------------------------
# POST /auth/local/register
# ---------------------------------------------------------------------------


@router.post(
    "/local/register",
    response_model=UserInfoResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create a user inside a site together with its local passport."""
    ctx = RequestContext(params=body.model_dump())
    try:
        user = local.register(ctx, db)
    except PassportError as exc:
        return _error(_status_for(exc), exc.code, ctx)
    return user


# ---------------------------------------------------------------------------
# POST /auth/local
# ---------------------------------------------------------------------------


@router.post("/local", response_model=LoginResponse, responses=_ERROR_RESPONSES)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Verify an email/username + password and return a signed JWT."""
    ctx = RequestContext()
    result = local.login(ctx, db, body.identifier, body.password)

    if isinstance(result, AuthenticationRejected):
        return _error(status.HTTP_401_UNAUTHORIZED, result.reason, ctx)
    if not isinstance(result, Success):
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, result.cause.code, ctx)

    user = result.user
    user.last_login = datetime.now(timezone.utc)
    db.commit()
    log.info("user id=%s logged in", user.id)

    token = create_access_token(
        {"sub": user.email, "user_id": user.id, "site_id": user.site_id}
    )
    return LoginResponse(access_token=token, token_type="bearer", flash=_flash(ctx))


# ---------------------------------------------------------------------------
# POST /auth/local/connect
# ---------------------------------------------------------------------------


@router.post("/local/connect", response_model=UserInfoResponse, responses=_ERROR_RESPONSES)
def connect(
    body: ConnectRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Give the signed-in user a local password if they do not have one yet."""
    ctx = RequestContext(params=body.model_dump(), user=current_user)
    try:
        return local.connect(ctx, db)
    except ModelValidationError:
        return _error(status.HTTP_400_BAD_REQUEST, "invalid_password", ctx)
    except PassportError as exc:
        return _error(_status_for(exc), exc.code, ctx)


# ---------------------------------------------------------------------------
# GET /auth/me
# ---------------------------------------------------------------------------


@router.get("/me", response_model=UserInfoResponse)
def me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user's public profile (no secrets)."""
    return current_user
