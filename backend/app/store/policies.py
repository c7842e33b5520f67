"""
Row-level security policies evaluated by the store

Policies run inside the store, next to the data, against the caller's
identity. Callers of the data client never see role logic.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.user import AppRole, UserRole

Record = Dict[str, Any]


@dataclass(frozen=True)
class Caller:
    """Identity a request runs as, with its roles resolved once per call"""

    user_id: Optional[str] = None
    roles: FrozenSet[AppRole] = field(default_factory=frozenset)

    @property
    def authenticated(self) -> bool:
        return self.user_id is not None

    def is_(self, *roles: AppRole) -> bool:
        return any(role in self.roles for role in roles)


Policy = Callable[[Caller, Record], bool]


def load_caller(db: Session, user_id: Optional[str]) -> Caller:
    if not user_id:
        return Caller()
    roles = db.execute(select(UserRole.role).where(UserRole.user_id == user_id)).scalars().all()
    return Caller(user_id=user_id, roles=frozenset(AppRole(r) for r in roles))


def has_role(db: Session, user_id: Optional[str], role: AppRole) -> bool:
    """Server-side counterpart of the `has_role(user_id, role)` function"""
    return load_caller(db, user_id).is_(AppRole(role))


def _any_role(caller, record):
    return bool(caller.roles)


def _admin(caller, record):
    return caller.is_(AppRole.ADMIN)


def _manager(caller, record):
    return caller.is_(AppRole.ADMIN, AppRole.RECRUITER)


def _job_owner(caller, record):
    if caller.is_(AppRole.ADMIN):
        return True
    return caller.is_(AppRole.RECRUITER) and record.get("created_by") == caller.user_id


def _owner_or_admin(column: str) -> Policy:
    def check(caller, record):
        return caller.authenticated and (record.get(column) == caller.user_id or caller.is_(AppRole.ADMIN))
    return check


# Policies that never look at the row itself
ROW_INDEPENDENT = frozenset({_any_role, _admin, _manager})

# table -> operation -> policy
POLICIES: Dict[str, Dict[str, Policy]] = {
    "jobs": {
        "select": _any_role,
        "insert": _job_owner,
        "update": _job_owner,
    },
    "candidates": {
        "select": _any_role,
        "insert": _manager,
        "update": _manager,
    },
    "applications": {
        "select": _any_role,
        "insert": _manager,
        "update": _manager,
    },
    "profiles": {
        "select": _owner_or_admin("id"),
        "insert": _admin,
        "update": _admin,
    },
    "user_roles": {
        "select": _owner_or_admin("user_id"),
        "insert": _admin,
        "update": _admin,
    },
}


def allows(table: str, operation: str, caller: Caller, record: Record) -> bool:
    """Evaluate the policy for one row; anything without a policy is denied"""
    policy = POLICIES.get(table, {}).get(operation)
    if policy is None:
        return False
    return policy(caller, record)


def allows_every_row(table: str, operation: str, caller: Caller) -> Optional[bool]:
    """Decide a policy for the whole table, or None when it depends on the row"""
    policy = POLICIES.get(table, {}).get(operation)
    if policy is None:
        return False
    if policy not in ROW_INDEPENDENT:
        return None
    return policy(caller, {})
