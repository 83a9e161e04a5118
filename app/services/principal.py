"""Principal resolution: token subject -> user record -> request principal."""

from sqlalchemy.orm import Session

from app.core.exceptions import UserNotFoundError
from app.models import User
from app.schemas.auth import Principal


def find_user(db: Session, identifier: str) -> User | None:
    """Look a user up by email if identifier contains '@', else by username."""
    if "@" in identifier:
        return db.query(User).filter(User.email == identifier).first()
    return db.query(User).filter(User.username == identifier).first()


def to_principal(user: User) -> Principal:
    """Map a user row to a principal carrying every granted role."""
    return Principal(
        id=user.id,
        username=user.username,
        email=user.email,
        roles=user.role_names,
    )


def resolve_principal(db: Session, subject: str) -> Principal:
    """Load the principal for subject (username or email). Raises UserNotFoundError."""
    user = find_user(db, subject)
    if user is None:
        raise UserNotFoundError(subject)
    return to_principal(user)


def load_user(db: Session, principal: Principal) -> User:
    """Fetch the user row behind a principal. Raises UserNotFoundError if it is gone."""
    user = db.get(User, principal.id)
    if user is None:
        raise UserNotFoundError(principal.username)
    return user
