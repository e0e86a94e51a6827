"""
Primitives shared by every resource controller.

A `Resource` describes one table: where its id lives, how new ids are made,
which columns a partial update may touch, and which child tables it owns.
`patch_row` and `cascade_delete` consume that description so the controllers
never hand-build SET clauses or multi-statement deletes themselves.
"""
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from sqlalchemy import Table, and_, delete, insert, select, update

from taskboard.core.errors import NotFoundError, ValidationError
from taskboard.db.session import Database, QueryRunner

logger = logging.getLogger(__name__)

SEQUENTIAL = "sequential"
TOKEN = "token"


@dataclass(frozen=True)
class Owned:
    """A child table removed together with its parent."""
    table: Table
    foreign_key: str
    children: Tuple["Owned", ...] = ()


@dataclass(frozen=True)
class Resource:
    table: Table
    label: str
    allowed_fields: FrozenSet[str] = frozenset()
    id_strategy: str = SEQUENTIAL
    owned: Tuple[Owned, ...] = ()
    id_column: str = "id"

    def new_id(self) -> Optional[str]:
        if self.id_strategy == TOKEN:
            return uuid.uuid4().hex
        return None

    def where(self, ident: Any, scope: Optional[Mapping[str, Any]] = None):
        clauses = [self.table.c[self.id_column] == ident]
        for column, value in (scope or {}).items():
            clauses.append(self.table.c[column] == value)
        return and_(*clauses)


def get_row(runner, resource: Resource, ident: Any, scope: Optional[Mapping[str, Any]] = None) -> Optional[Dict[str, Any]]:
    return runner.fetch_one(select(resource.table).where(resource.where(ident, scope)))


def require_row(runner, resource: Resource, ident: Any, scope: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    row = get_row(runner, resource, ident, scope)
    if row is None:
        raise NotFoundError(f"{resource.label} not found")
    return row


def insert_row(runner, resource: Resource, values: Mapping[str, Any]) -> Dict[str, Any]:
    values = dict(values)
    token = resource.new_id()
    if token is not None:
        values[resource.id_column] = token

    result = runner.execute(insert(resource.table).values(**values))
    ident = token if token is not None else result.last_insert_id
    return require_row(runner, resource, ident)


def patch_row(
    db: Database,
    resource: Resource,
    ident: Any,
    updates: Mapping[str, Any],
    scope: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Apply a partial update restricted to the resource's allow-list.

    Keys outside the allow-list are dropped; if nothing is left the update is
    rejected. The row must exist (within `scope`, when given), and the
    refreshed row is returned.
    """
    fields = {k: v for k, v in updates.items() if k in resource.allowed_fields}
    if not fields:
        raise ValidationError("No valid fields to update", errors=[
            {"field": None, "message": f"Allowed fields: {', '.join(sorted(resource.allowed_fields))}"}
        ])

    with db.transaction() as tx:
        require_row(tx, resource, ident, scope)
        tx.execute(update(resource.table).where(resource.where(ident, scope)).values(**fields))
        return require_row(tx, resource, ident, scope)


def _delete_owned(tx: QueryRunner, owned: Owned, parent_ids) -> int:
    child = owned.table
    child_ids = select(child.c.id).where(child.c[owned.foreign_key].in_(parent_ids))

    removed = 0
    for grandchild in owned.children:
        removed += _delete_owned(tx, grandchild, child_ids)

    result = tx.execute(delete(child).where(child.c[owned.foreign_key].in_(parent_ids)))
    return removed + result.rows_affected


def cascade_delete(
    db: Database,
    resource: Resource,
    ident: Any,
    scope: Optional[Mapping[str, Any]] = None,
) -> int:
    """
    Delete a row and everything it owns inside one transaction.

    Children go first (deepest level first), then the row itself. A missing
    row raises NotFoundError, which rolls the whole transaction back.
    Returns the number of rows removed including the parent.
    """
    parent_ids = select(resource.table.c[resource.id_column]).where(resource.where(ident, scope))

    with db.transaction() as tx:
        removed = 0
        for owned in resource.owned:
            removed += _delete_owned(tx, owned, parent_ids)

        result = tx.execute(delete(resource.table).where(resource.where(ident, scope)))
        if result.rows_affected == 0:
            raise NotFoundError(f"{resource.label} not found")

    logger.info("Deleted %s %s (%d owned rows)", resource.label, ident, removed)
    return removed + result.rows_affected


def fetch_children(runner, table: Table, foreign_key: str, parent_id: Any, *order_by) -> List[Dict[str, Any]]:
    stmt = select(table).where(table.c[foreign_key] == parent_id)
    if order_by:
        stmt = stmt.order_by(*order_by)
    return runner.fetch_many(stmt)


def equals_filters(table: Table, **filters: Any) -> list:
    """Equality clauses for every filter that was actually supplied."""
    return [table.c[name] == value for name, value in filters.items() if value is not None]


def date_range(column, start=None, end=None) -> list:
    if start is not None and end is not None:
        return [column.between(start, end)]
    if start is not None:
        return [column >= start]
    if end is not None:
        return [column <= end]
    return []
