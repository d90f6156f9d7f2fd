"""
Error handling utilities for database operations.
"""

from typing import Any, Dict, Optional

import structlog
from sqlalchemy import TextClause, text
from sqlalchemy.ext.asyncio import AsyncSession

from focusflow.exceptions import PersistenceError, extract_sql_error_message

logger = structlog.get_logger()


async def safe_execute_query(
    db: AsyncSession,
    query: str | TextClause,
    params: Optional[Dict[str, Any]] = None,
    operation_name: str = "database_query",
    commit: bool = False,
) -> Any:
    """
    Execute a query, optionally committing it on its own.

    Args:
        db: Database session
        query: SQL query string or text() object
        params: Query parameters
        operation_name: Name of the operation for error messages
        commit: Commit right after executing, so later failures in the same
            request cannot roll this statement back

    Returns:
        Query result

    Raises:
        PersistenceError: If SQL execution fails, with a readable message
    """
    if isinstance(query, str):
        query = text(query)

    try:
        result = await db.execute(query, params or {})
        if commit:
            await db.commit()
        return result
    except Exception as e:
        await db.rollback()
        user_message, technical_details = extract_sql_error_message(e)

        logger.error(
            f"SQL query failed: {operation_name}",
            user_message=user_message,
            technical_details=technical_details,
            query=str(query),
        )

        raise PersistenceError(
            message=user_message,
            operation=operation_name,
            original_error=technical_details,
        ) from e

