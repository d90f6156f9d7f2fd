"""
Relational storage collaborator.

A thin table gateway over an async SQLAlchemy session. It is constructed per
request from the injected session and handed to the orchestrators, so tests
can swap in an in-memory double with the same four operations.
"""

from typing import Any, Mapping, Optional, Protocol

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from focusflow.exceptions import PersistenceError
from focusflow.utils.error_handling import safe_execute_query

logger = structlog.get_logger()

# Only these tables and columns can be addressed; identifiers are never taken
# from user input.
TABLE_COLUMNS: dict[str, frozenset[str]] = {
    "lesson_plans": frozenset(
        {
            "id",
            "teacher_id",
            "title",
            "subject",
            "grade_level",
            "original_content",
            "adhd_adapted_content",
            "file_url",
            "created_at",
            "updated_at",
        }
    ),
    "coaching_tips": frozenset(
        {"id", "lesson_plan_id", "tip_text", "tip_type", "timestamp", "created_at"}
    ),
    "break_reminders": frozenset(
        {
            "id",
            "lesson_plan_id",
            "interval_minutes",
            "reminder_text",
            "is_active",
            "created_at",
        }
    ),
    "visualizers": frozenset(
        {
            "id",
            "lesson_plan_id",
            "concept",
            "image_url",
            "grade_level",
            "description",
            "created_at",
        }
    ),
    "teacher_notes": frozenset(
        {
            "id",
            "lesson_plan_id",
            "teacher_id",
            "note_content",
            "note_type",
            "created_at",
        }
    ),
}


class Store(Protocol):
    async def update(
        self, table: str, filters: Mapping[str, Any], fields: Mapping[str, Any]
    ) -> int: ...

    async def insert(self, table: str, fields: Mapping[str, Any]) -> dict[str, Any]: ...

    async def select(
        self,
        table: str,
        filters: Mapping[str, Any],
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]: ...

    async def delete(self, table: str, filters: Mapping[str, Any]) -> int: ...

    async def count(self, table: str, filters: Mapping[str, Any]) -> int: ...


def _check_columns(table: str, columns) -> None:
    allowed = TABLE_COLUMNS.get(table)
    if allowed is None:
        raise PersistenceError(f"Unknown table '{table}'", operation="validate")
    unknown = set(columns) - allowed
    if unknown:
        raise PersistenceError(
            f"Unknown column(s) for {table}: {', '.join(sorted(unknown))}",
            operation="validate",
        )


def _where_clause(filters: Mapping[str, Any], prefix: str = "w_") -> tuple[str, dict]:
    if not filters:
        return "", {}
    conditions = []
    params = {}
    for column, value in filters.items():
        key = f"{prefix}{column}"
        if isinstance(value, (list, tuple, set)):
            conditions.append(f"{column} = ANY(:{key})")
            params[key] = list(value)
        else:
            conditions.append(f"{column} = :{key}")
            params[key] = value
    return " WHERE " + " AND ".join(conditions), params


class LessonStore:
    """Table gateway used by the orchestrators and the read endpoints."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def update(
        self, table: str, filters: Mapping[str, Any], fields: Mapping[str, Any]
    ) -> int:
        """Update matching rows and return how many changed."""
        _check_columns(table, [*filters, *fields])
        if not fields:
            return 0

        assignments = ", ".join(f"{column} = :f_{column}" for column in fields)
        where, params = _where_clause(filters)
        params.update({f"f_{column}": value for column, value in fields.items()})

        result = await safe_execute_query(
            self.db,
            f"UPDATE {table} SET {assignments}{where}",
            params,
            operation_name=f"update_{table}",
            commit=True,
        )
        return result.rowcount

    async def insert(self, table: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored."""
        _check_columns(table, fields)
        columns = list(fields)

        result = await safe_execute_query(
            self.db,
            f"""
            INSERT INTO {table} ({', '.join(columns)})
            VALUES ({', '.join(f':{column}' for column in columns)})
            RETURNING *
            """,
            dict(fields),
            operation_name=f"insert_{table}",
            commit=True,
        )
        return dict(result.mappings().one())

    async def select(
        self,
        table: str,
        filters: Mapping[str, Any],
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        _check_columns(table, [*filters, *([order_by] if order_by else [])])
        where, params = _where_clause(filters)
        order = ""
        if order_by:
            order = f" ORDER BY {order_by} {'DESC' if descending else 'ASC'}"

        result = await safe_execute_query(
            self.db,
            f"SELECT * FROM {table}{where}{order}",
            params,
            operation_name=f"select_{table}",
        )
        return [dict(row) for row in result.mappings().all()]

    async def delete(self, table: str, filters: Mapping[str, Any]) -> int:
        _check_columns(table, filters)
        if not filters:
            raise PersistenceError(
                f"Refusing to delete every row of {table}", operation=f"delete_{table}"
            )
        where, params = _where_clause(filters)

        result = await safe_execute_query(
            self.db,
            f"DELETE FROM {table}{where}",
            params,
            operation_name=f"delete_{table}",
            commit=True,
        )
        return result.rowcount

    async def count(self, table: str, filters: Mapping[str, Any]) -> int:
        _check_columns(table, filters)
        where, params = _where_clause(filters)

        result = await safe_execute_query(
            self.db,
            f"SELECT COUNT(*) FROM {table}{where}",
            params,
            operation_name=f"count_{table}",
        )
        return result.scalar_one()
