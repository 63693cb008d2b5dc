"""
Atomic upsert utilities using INSERT ... ON CONFLICT

Replaces the check-then-insert pattern for keyed rows in the local store
with a single atomic statement. Works on both SQLite and PostgreSQL, which
share the ON CONFLICT DO UPDATE syntax.

Usage:
    from portfolio.shared.upsert import atomic_upsert

    atomic_upsert(db, LocalStoreEntry, 'key', 'portfolio_projects', {'value': payload})
"""

from typing import Any, Dict, Type

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from portfolio.shared.database import Base

_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def atomic_upsert(
    db: Session,
    model: Type[Base],
    unique_field: str,
    unique_value: Any,
    update_data: Dict[str, Any],
    auto_update_timestamp: bool = True,
    timestamp_field: str = 'updated_at'
) -> None:
    """
    Perform an atomic upsert on a table with a unique constraint.

    Args:
        db: SQLAlchemy database session
        model: SQLAlchemy model class (e.g., LocalStoreEntry)
        unique_field: Name of the unique field (e.g., 'key')
        unique_value: Value for the unique field (e.g., 'portfolio_projects')
        update_data: Dictionary of fields to set (e.g., {'value': '[...]'})
        auto_update_timestamp: If True, automatically update timestamp_field to NOW()
        timestamp_field: Name of timestamp field to auto-update (default: 'updated_at')

    Raises:
        ValueError: If model lacks the unique or timestamp field, or the
            session is bound to an unsupported dialect
    """
    if not hasattr(model, unique_field):
        raise ValueError(f"Model {model.__name__} does not have field '{unique_field}'")

    if auto_update_timestamp and not hasattr(model, timestamp_field):
        raise ValueError(f"Model {model.__name__} does not have field '{timestamp_field}'")

    dialect = db.get_bind().dialect.name
    insert = _DIALECT_INSERTS.get(dialect)
    if insert is None:
        raise ValueError(f"Atomic upsert is not supported on dialect '{dialect}'")

    insert_values = {unique_field: unique_value, **update_data}
    stmt = insert(model).values(**insert_values)

    update_dict = update_data.copy()
    if auto_update_timestamp:
        update_dict[timestamp_field] = func.now()

    stmt = stmt.on_conflict_do_update(
        index_elements=[unique_field],
        set_=update_dict
    )

    db.execute(stmt)
