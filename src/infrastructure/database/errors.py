"""Translation of SQLAlchemy failures into application exceptions."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)

from core.exceptions import DatabaseConnectionError, DatabaseError, ErrorCode

logger = structlog.get_logger()


@asynccontextmanager
async def translate_db_errors(operation: str, table: str) -> AsyncIterator[None]:
    """Re-raise driver failures as DatabaseError / DatabaseConnectionError.

    Application exceptions raised inside the block pass through untouched.
    """
    try:
        yield
    except (InterfaceError, OSError) as e:
        logger.warning("database_unreachable", operation=operation, table=table, error=str(e))
        raise DatabaseConnectionError(reason=str(e)) from e
    except DBAPIError as e:
        if e.connection_invalidated:
            logger.warning("database_unreachable", operation=operation, table=table, error=str(e))
            raise DatabaseConnectionError(reason=str(e)) from e
        if isinstance(e, IntegrityError):
            raise DatabaseError(
                operation,
                table,
                reason=str(e.orig),
                error_code=ErrorCode.DATABASE_CONSTRAINT,
            ) from e
        raise DatabaseError(
            operation,
            table,
            reason=str(e.orig),
            retryable=isinstance(e, OperationalError),
        ) from e
    except SQLAlchemyError as e:
        raise DatabaseError(operation, table, reason=str(e)) from e
