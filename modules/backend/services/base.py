"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, translate storage failures into
application errors, and log what they do.

Usage:
    from modules.backend.services.base import BaseService

    class NoteService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = NoteRepository(session)

        async def create_note(self, data: NoteCreate, user_id: int) -> Note:
            return await self._execute_db_operation(
                "create_note",
                self.repo.create(user_id=user_id, title=data.title),
            )
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.exceptions import DatabaseError, ValidationError
from modules.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session access
    - Logging context
    - Error wrapping for database operations
    - Common argument checks

    Subclasses should:
    - Call super().__init__(session) in their __init__
    - Initialize repositories in __init__
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
    ) -> T:
        """
        Await a repository call, converting SQLAlchemy errors.

        The driver's error text is logged here and never placed in the
        raised exception, so it cannot reach an API response.

        Args:
            operation: Description of the operation for logging
            coro: Awaitable repository call

        Raises:
            DatabaseError: For constraint violations and any other
                SQLAlchemy failure
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database constraint violation: {operation}")
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}")

    def _validate_non_negative(self, **values: int) -> None:
        """
        Validate that integer arguments are zero or greater.

        Raises:
            ValidationError: Naming every offending argument
        """
        invalid = {
            name: "Must be a non-negative integer"
            for name, value in values.items()
            if isinstance(value, bool) or not isinstance(value, int) or value < 0
        }
        if invalid:
            raise ValidationError("Invalid arguments", details=invalid)

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a service operation at info level with context."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(self, message: str, **context: Any) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
