# hotel_market/services/common/unit_of_work.py
"""
Unit of Work pattern implementation.

Provides transaction management and repository coordination
for the service layer with SQLAlchemy.
"""
from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Callable, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from hotel_market.core.logging import get_logger
from hotel_market.repositories.base.base_repository import BaseRepository

from .errors import ConflictError, StoreError, TransactionError

logger = get_logger(__name__)

TRepository = TypeVar("TRepository", bound=BaseRepository)


def _translate(exc: SQLAlchemyError, action: str) -> StoreError:
    if isinstance(exc, StaleDataError):
        return ConflictError(
            f"Concurrent modification detected during {action}", exc
        )
    return TransactionError(f"Failed to {action} transaction", exc)


class UnitOfWork(AbstractContextManager["UnitOfWork"]):
    """
    Unit of Work pattern for managing database transactions.

    Coordinates repositories and ensures atomic commits/rollbacks.

    Usage:
        >>> with UnitOfWork(session_factory) as uow:
        ...     hotel_repo = uow.get_repo(HotelRepository)
        ...     hotel = hotel_repo.get(hotel_id)
        ...     hotel.name = "New Name"
        ...     uow.commit()  # Explicit commit

    Without an explicit commit the transaction is committed on a clean
    exit (``auto_commit=True``) and rolled back when an exception escapes.
    SQLAlchemy errors escaping the block are re-raised as ``StoreError``.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        auto_commit: bool = True,
        auto_flush: bool = True,
    ) -> None:
        """
        Initialize Unit of Work.

        Args:
            session_factory: Factory function that returns a new Session
            auto_commit: Whether to auto-commit on successful context exit
            auto_flush: Whether to auto-flush changes before queries
        """
        self._session_factory = session_factory
        self._auto_commit = auto_commit
        self._auto_flush = auto_flush

        self.session: Optional[Session] = None
        self._committed: bool = False
        self._rolled_back: bool = False
        self._repo_cache: dict[Type[BaseRepository], BaseRepository] = {}

    # ------------------------------------------------------------------ #
    # Context manager protocol
    # ------------------------------------------------------------------ #

    def __enter__(self) -> "UnitOfWork":
        """Enter the context and initialize session."""
        if self.session is not None:
            raise RuntimeError("UnitOfWork context already entered")

        self.session = self._session_factory()
        self.session.autoflush = self._auto_flush
        self._committed = False
        self._rolled_back = False
        self._repo_cache.clear()

        logger.debug("UnitOfWork session started")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        """Exit the context and handle transaction completion."""
        if self.session is None:
            return False

        try:
            if exc_type is None:
                if self._auto_commit and not self._committed and not self._rolled_back:
                    try:
                        self.session.commit()
                        self._committed = True
                        logger.debug("UnitOfWork auto-committed")
                    except SQLAlchemyError as exc:
                        logger.error(f"Auto-commit failed: {exc}")
                        self.session.rollback()
                        raise _translate(exc, "commit") from exc
            else:
                if not self._rolled_back:
                    self.session.rollback()
                    self._rolled_back = True
                    logger.warning(f"UnitOfWork rolled back due to {exc_type.__name__}")
                if isinstance(exc_val, SQLAlchemyError):
                    raise _translate(exc_val, "complete") from exc_val

        finally:
            self.session.close()
            self.session = None
            self._repo_cache.clear()
            logger.debug("UnitOfWork session closed")

        # Propagate any exception
        return False

    # ------------------------------------------------------------------ #
    # Transaction control
    # ------------------------------------------------------------------ #

    def commit(self) -> None:
        """
        Explicitly commit the current transaction.

        Raises:
            RuntimeError: If called outside of context
            ConflictError: If a concurrent writer updated the same row
            TransactionError: If commit fails for any other reason
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.commit() called outside of context")

        if self._committed:
            logger.warning("commit() called on already-committed transaction")
            return

        if self._rolled_back:
            raise RuntimeError("Cannot commit a rolled-back transaction")

        try:
            self.session.commit()
            self._committed = True
            logger.debug("UnitOfWork explicitly committed")
        except SQLAlchemyError as exc:
            logger.error(f"Commit failed: {exc}")
            self.session.rollback()
            self._rolled_back = True
            raise _translate(exc, "commit") from exc

    def rollback(self) -> None:
        """
        Explicitly roll back the current transaction.

        Raises:
            RuntimeError: If called outside of context
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.rollback() called outside of context")

        if self._rolled_back:
            logger.warning("rollback() called on already-rolled-back transaction")
            return

        try:
            self.session.rollback()
            self._rolled_back = True
            self._committed = False
            logger.debug("UnitOfWork explicitly rolled back")
        except SQLAlchemyError as exc:
            logger.error(f"Rollback failed: {exc}")
            raise TransactionError("Failed to rollback transaction", exc) from exc

    # ------------------------------------------------------------------ #
    # Repository factory
    # ------------------------------------------------------------------ #

    def get_repo(self, repo_cls: Type[TRepository]) -> TRepository:
        """
        Get or create a repository instance bound to this UnitOfWork's session.

        Repositories are cached per UnitOfWork instance for consistency.

        Raises:
            RuntimeError: If called outside of context
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.get_repo() called outside of context")

        if repo_cls in self._repo_cache:
            return self._repo_cache[repo_cls]  # type: ignore

        repo_instance = repo_cls(self.session)
        self._repo_cache[repo_cls] = repo_instance

        logger.debug(f"Created repository: {repo_cls.__name__}")
        return repo_instance  # type: ignore

    # ------------------------------------------------------------------ #
    # Utility properties
    # ------------------------------------------------------------------ #

    @property
    def is_active(self) -> bool:
        """Check if the UnitOfWork is active (has an open session)."""
        return self.session is not None

    @property
    def is_committed(self) -> bool:
        return self._committed

    @property
    def is_rolled_back(self) -> bool:
        return self._rolled_back
