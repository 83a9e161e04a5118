"""Signup/signin routes and the request authentication dependencies.

authenticate_request is the soft gate every guarded route depends on: it
attaches a principal when a valid bearer token is present and otherwise
leaves the request anonymous. require(operation) builds the guard that
rejects anonymous or under-privileged callers before the handler runs.
"""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.orm import Session

from app.core.authorization import ACCESS_RULES, check_access, is_admin
from app.core.database import get_db
from app.core.exceptions import AdminAccessRequiredError, UserNotFoundError
from app.core.security import TokenCodec, TokenError, get_token_codec
from app.schemas.auth import JwtResponse, Principal, SigninRequest, SignupRequest
from app.schemas.common import MessageResponse
from app.services.accounts import authenticate, register_user
from app.services.principal import resolve_principal

logger = logging.getLogger(__name__)
router = APIRouter()

BEARER_PREFIX = "Bearer "


def authenticate_request(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    authorization: Annotated[str | None, Header()] = None,
) -> Principal | None:
    """
    Dependency: resolve the request's principal from a bearer token, if any.

    Never raises for a missing, malformed, forged or expired token, nor for a
    token whose user no longer exists; the request just stays anonymous and
    guarded routes reject it later. The principal is stored on request.state
    and reused if the dependency runs again for the same request.
    """
    logger.debug(
        "%s %s Authorization header present: %s",
        request.method,
        request.url.path,
        authorization is not None,
    )
    if authorization is None or not authorization.startswith(BEARER_PREFIX):
        return getattr(request.state, "principal", None)

    token = authorization[len(BEARER_PREFIX):]
    try:
        subject = codec.validate(token)
    except TokenError as e:
        logger.debug("Token rejected (prefix %s...): %s", token[:10], e.message)
        return getattr(request.state, "principal", None)

    if getattr(request.state, "principal", None) is None:
        try:
            request.state.principal = resolve_principal(db, subject)
        except UserNotFoundError:
            logger.debug("Token subject has no account: %s", subject)
            return None
    return request.state.principal


def require(operation: str) -> Callable[..., Principal]:
    """Build the guard dependency for operation, per ACCESS_RULES."""
    predicate = ACCESS_RULES[operation]

    def guard(
        principal: Annotated[Principal | None, Depends(authenticate_request)],
    ) -> Principal:
        return check_access(principal, predicate)

    guard.__name__ = f"require_{operation.replace(':', '_')}"
    return guard


def _jwt_response(token: str, principal: Principal) -> JwtResponse:
    return JwtResponse(
        token=token,
        id=principal.id,
        username=principal.username,
        email=principal.email,
        roles=sorted(principal.roles),
    )


@router.post("/signup", response_model=MessageResponse)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Register a new account with the USER role."""
    register_user(db, body)
    return MessageResponse(message="User registered successfully!")


@router.post("/signin", response_model=JwtResponse)
def signin(
    body: SigninRequest,
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> JwtResponse:
    """
    Authenticate with username (or email) and password; returns a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    principal = authenticate(db, body.username, body.password)
    token = codec.issue(principal.username)
    logger.info("Signin succeeded", extra={"user_id": principal.id})
    return _jwt_response(token, principal)


@router.post(
    "/admin/signin",
    response_model=JwtResponse,
    responses={403: {"model": MessageResponse}},
)
def admin_signin(
    body: SigninRequest,
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> JwtResponse:
    """Signin for the admin console: valid credentials and an ADMIN role are both required."""
    principal = authenticate(db, body.username, body.password)
    if not is_admin(principal):
        logger.info("Admin signin refused", extra={"user_id": principal.id})
        raise AdminAccessRequiredError()
    token = codec.issue(principal.username)
    logger.info("Admin signin succeeded", extra={"user_id": principal.id})
    return _jwt_response(token, principal)


@router.get("/me", response_model=Principal)
def me(principal: Annotated[Principal, Depends(require("auth:me"))]) -> Principal:
    """Return the principal attached to this request."""
    return principal
