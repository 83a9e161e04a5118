"""Account registration and credential checks."""

import logging
from functools import lru_cache

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.authorization import ROLE_USER
from app.core.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
)
from app.core.security import hash_password, verify_password
from app.models import User, UserRole
from app.schemas.auth import Principal, SignupRequest
from app.services.principal import find_user, to_principal

logger = logging.getLogger(__name__)


@lru_cache
def _dummy_hash() -> str:
    # Checked against when the account does not exist, so unknown usernames
    # cost the same bcrypt work as wrong passwords.
    return hash_password("not-a-real-password")


def _check_unique(db: Session, username: str, email: str) -> None:
    if db.query(User.id).filter(User.username == username).first() is not None:
        raise DuplicateUsernameError()
    if db.query(User.id).filter(User.email == email).first() is not None:
        raise DuplicateEmailError()


def create_user(
    db: Session,
    *,
    username: str,
    email: str,
    password: str,
    first_name: str = "",
    last_name: str = "",
    phone: str | None = None,
    roles: tuple[str, ...] = (ROLE_USER,),
) -> User:
    """
    Insert a user with a hashed password and the given roles.

    Raises DuplicateUsernameError / DuplicateEmailError without writing
    anything when either value is taken. A concurrent insert that wins the
    race is caught by the unique constraints and reported the same way.
    """
    _check_unique(db, username, email)
    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        roles=[UserRole(name=role) for role in dict.fromkeys(roles)],
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        _check_unique(db, username, email)
        raise
    db.refresh(user)
    logger.info(
        "User registered",
        extra={"user_id": user.id, "username": user.username, "roles": sorted(user.role_names)},
    )
    return user


def register_user(db: Session, body: SignupRequest) -> User:
    """Create an account from a signup request. New accounts get the USER role."""
    return create_user(
        db,
        username=body.username,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )


def authenticate(db: Session, identifier: str, password: str) -> Principal:
    """
    Check credentials and return the principal they belong to.

    identifier may be a username or an email. Raises InvalidCredentialsError
    for an unknown account and for a wrong password alike.
    """
    user = find_user(db, identifier)
    if user is None:
        verify_password(password, _dummy_hash())
        logger.info("Signin failed", extra={"reason": "unknown_identifier"})
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.info("Signin failed", extra={"reason": "bad_password", "user_id": user.id})
        raise InvalidCredentialsError()
    return to_principal(user)
