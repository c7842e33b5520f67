"""
Async table client over the relational store

Every call is a single request/response: the SQLAlchemy work runs in the
thread pool so independent reads can be awaited together. Failures are
raised as StoreError carrying the store's own message.
"""
import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool
import structlog

from app.core.exceptions import StoreError
from app.models import Application, Candidate, Job, Profile, UserRole
from app.models.user import AppRole
from app.store.policies import Caller, allows, allows_every_row, has_role, load_caller

logger = structlog.get_logger()

# Tables reachable through the client; `users` stays with the auth service
TABLES = {
    "jobs": Job,
    "candidates": Candidate,
    "applications": Application,
    "profiles": Profile,
    "user_roles": UserRole,
}

Row = Dict[str, Any]


@dataclass
class StoreResult:
    """Rows returned by a request, plus the exact count for count queries"""

    rows: List[Row] = field(default_factory=list)
    count: Optional[int] = None


def _to_row(instance) -> Row:
    row = {}
    for column in inspect(instance).mapper.column_attrs:
        value = getattr(instance, column.key)
        row[column.key] = value.value if isinstance(value, enum.Enum) else value
    return row


def _sqlstate(exc: SQLAlchemyError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


class TableQuery:
    """Requests against one table, executed as the client's caller"""

    def __init__(self, client: "StoreClient", name: str):
        if name not in TABLES:
            raise StoreError(f'relation "public.{name}" does not exist', code="42P01")
        self.client = client
        self.name = name
        self.model = TABLES[name]
        self.columns = [c.key for c in inspect(self.model).mapper.column_attrs]

    def _check_columns(self, names: Sequence[str]):
        for name in names:
            if name not in self.columns:
                raise StoreError(f"column {self.name}.{name} does not exist", code="42703")

    def _parse_columns(self, columns: str) -> List[str]:
        if columns.strip() == "*":
            return list(self.columns)
        names = [c.strip() for c in columns.split(",") if c.strip()]
        self._check_columns(names)
        return names

    async def select(
        self,
        columns: str = "*",
        order_by: Optional[str] = None,
        ascending: bool = True,
        count_only: bool = False,
    ) -> StoreResult:
        """Read visible rows, optionally ordered; `count_only` returns just the count"""
        names = self._parse_columns(columns)
        if order_by is not None:
            self._check_columns([order_by])
        return await self.client._run(self._select, names, order_by, ascending, count_only)

    async def count(self) -> int:
        result = await self.select("id", count_only=True)
        return result.count or 0

    async def insert(self, record: Row) -> StoreResult:
        """Insert one row and return it as stored"""
        self._check_columns(list(record))
        return await self.client._run(self._insert, dict(record))

    async def update(self, values: Row, **match: Any) -> StoreResult:
        """Update the visible rows equal to `match` and return them"""
        self._check_columns(list(values))
        self._check_columns(list(match))
        return await self.client._run(self._update, dict(values), match)

    def _select(self, db: Session, caller: Caller, names, order_by, ascending, count_only) -> StoreResult:
        if count_only:
            decided = allows_every_row(self.name, "select", caller)
            if decided is not None:
                count = db.scalar(select(func.count()).select_from(self.model)) if decided else 0
                return StoreResult(rows=[], count=count)
        stmt = select(self.model)
        if order_by is not None:
            column = getattr(self.model, order_by)
            stmt = stmt.order_by(column.asc() if ascending else column.desc())
        rows = [_to_row(obj) for obj in db.execute(stmt).scalars()]
        visible = [row for row in rows if allows(self.name, "select", caller, row)]
        if count_only:
            return StoreResult(rows=[], count=len(visible))
        return StoreResult(rows=[{name: row[name] for name in names} for row in visible])

    def _insert(self, db: Session, caller: Caller, record: Row) -> StoreResult:
        if not allows(self.name, "insert", caller, record):
            raise StoreError(
                f'new row violates row-level security policy for table "{self.name}"',
                code="42501",
            )
        instance = self.model(**record)
        db.add(instance)
        db.commit()
        db.refresh(instance)
        return StoreResult(rows=[_to_row(instance)], count=1)

    def _update(self, db: Session, caller: Caller, values: Row, match: Row) -> StoreResult:
        stmt = select(self.model).filter_by(**match)
        updated = []
        for instance in db.execute(stmt).scalars().all():
            if not allows(self.name, "update", caller, _to_row(instance)):
                continue
            for key, value in values.items():
                setattr(instance, key, value)
            if not allows(self.name, "update", caller, _to_row(instance)):
                raise StoreError(
                    f'new row violates row-level security policy for table "{self.name}"',
                    code="42501",
                )
            updated.append(instance)
        db.commit()
        for instance in updated:
            db.refresh(instance)
        return StoreResult(rows=[_to_row(obj) for obj in updated], count=len(updated))


class StoreClient:
    """
    Client for the relational store

    `identity` returns the id of the signed-in user at call time (or None),
    so a client built once follows session changes.
    """

    def __init__(self, session_factory: sessionmaker, identity: Callable[[], Optional[str]]):
        self.session_factory = session_factory
        self.identity = identity

    def table(self, name: str) -> TableQuery:
        return TableQuery(self, name)

    async def rpc_has_role(self, user_id: str, role: str) -> bool:
        return await run_in_threadpool(self._has_role, user_id, role)

    def _has_role(self, user_id: str, role: str) -> bool:
        with self.session_factory() as db:
            return has_role(db, user_id, AppRole(role))

    async def _run(self, operation, *args) -> StoreResult:
        return await run_in_threadpool(self._execute, operation, *args)

    def _execute(self, operation, *args) -> StoreResult:
        user_id = self.identity()
        with self.session_factory() as db:
            try:
                caller = load_caller(db, user_id)
                result = operation(db, caller, *args)
            except StoreError as e:
                db.rollback()
                logger.warning("store_request_denied", operation=operation.__name__, error=e.message)
                raise
            except IntegrityError as e:
                db.rollback()
                message = str(e.orig)
                logger.warning("store_constraint_violation", operation=operation.__name__, error=message)
                raise StoreError(message, code=_sqlstate(e) or "23000")
            except (SQLAlchemyError, ArithmeticError, TypeError, ValueError) as e:
                db.rollback()
                logger.error("store_request_failed", operation=operation.__name__, error=str(e))
                raise StoreError(str(e), code=_sqlstate(e) if isinstance(e, SQLAlchemyError) else None)
        return result
