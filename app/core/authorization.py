"""Role-based access rules, held as data and checked by one guard function."""

from dataclasses import dataclass
from typing import Literal

from app.core.exceptions import AccessDeniedError, NotAuthenticatedError
from app.schemas.auth import Principal

RoleName = Literal["USER", "ADMIN", "ORGANIZER"]

ROLE_USER: RoleName = "USER"
ROLE_ADMIN: RoleName = "ADMIN"
ROLE_ORGANIZER: RoleName = "ORGANIZER"
ROLE_VALUES: tuple[RoleName, ...] = (ROLE_USER, ROLE_ADMIN, ROLE_ORGANIZER)

# Conventional prefix some role stores put on role names (ROLE_ADMIN).
ROLE_PREFIX = "ROLE_"


def normalize_role(name: str) -> str:
    """Upper-case a role name and drop an optional ROLE_ prefix."""
    role = name.strip().upper()
    if role.startswith(ROLE_PREFIX):
        role = role[len(ROLE_PREFIX):]
    return role


@dataclass(frozen=True)
class RolePredicate:
    """Satisfied when the principal holds at least one of ``any_of``."""

    any_of: frozenset[str]

    def is_satisfied_by(self, roles: frozenset[str]) -> bool:
        granted = {normalize_role(r) for r in roles}
        return not granted.isdisjoint(self.any_of)


ADMIN_ONLY = RolePredicate(frozenset({ROLE_ADMIN}))
ANY_MEMBER = RolePredicate(frozenset({ROLE_USER, ROLE_ADMIN, ROLE_ORGANIZER}))


# operation -> required roles. Routes look their predicate up by operation name.
ACCESS_RULES: dict[str, RolePredicate] = {
    "auth:me": ANY_MEMBER,
    "categories:create": ADMIN_ONLY,
    "categories:update": ADMIN_ONLY,
    "categories:delete": ADMIN_ONLY,
    "events:create": ADMIN_ONLY,
    "events:update": ADMIN_ONLY,
    "events:delete": ADMIN_ONLY,
    "events:pending": ADMIN_ONLY,
    "events:approve": ADMIN_ONLY,
    "events:reject": ADMIN_ONLY,
    "events:mine": ANY_MEMBER,
    "events:submit": ANY_MEMBER,
    "bookings:list": ADMIN_ONLY,
    "bookings:get": ADMIN_ONLY,
    "bookings:confirm": ADMIN_ONLY,
    "bookings:cancel": ADMIN_ONLY,
    "bookings:by_event": ADMIN_ONLY,
    "bookings:create": ANY_MEMBER,
    "bookings:mine": ANY_MEMBER,
}


def check_access(principal: Principal | None, predicate: RolePredicate) -> Principal:
    """
    Return the principal if it satisfies predicate.

    Raises NotAuthenticatedError for anonymous requests and AccessDeniedError
    when none of the principal's roles is accepted.
    """
    if principal is None:
        raise NotAuthenticatedError()
    if not predicate.is_satisfied_by(principal.roles):
        raise AccessDeniedError()
    return principal


def is_admin(principal: Principal) -> bool:
    """True if any role is ADMIN or ROLE_ADMIN, ignoring case."""
    return any(
        role.strip().upper() in (ROLE_ADMIN, ROLE_PREFIX + ROLE_ADMIN)
        for role in principal.roles
    )
