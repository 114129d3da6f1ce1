"""
Base repository with the common data-access operations.

Repositories never commit: the surrounding UnitOfWork owns the
transaction, so every write here only stages changes on the session.
"""

from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from hotel_market.core.logging import get_logger
from hotel_market.models.base.base_model import BaseModel
from hotel_market.models.base.mixins import SoftDeleteMixin

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository bound to one model class and one session.

    Soft-deleted rows are hidden from every read unless
    ``include_deleted=True`` is passed.
    """

    def __init__(self, session: Session, model: Type[ModelType]):
        self.session = session
        self.model = model
        self._is_soft_delete = issubclass(model, SoftDeleteMixin)

    # ==================== Query helpers ====================

    def _base_select(self, include_deleted: bool = False) -> Select:
        stmt = select(self.model)
        if self._is_soft_delete and not include_deleted:
            stmt = stmt.where(self.model.is_deleted.is_(False))
        return stmt

    # ==================== Read Operations ====================

    def get(
        self,
        entity_id: Any,
        *,
        include_deleted: bool = False,
        for_update: bool = False,
    ) -> Optional[ModelType]:
        """
        Fetch one entity by primary key.

        Args:
            entity_id: Primary key value
            include_deleted: Also return soft-deleted rows
            for_update: Lock the row for the rest of the transaction

        Returns:
            The entity or None
        """
        stmt = self._base_select(include_deleted).where(self.model.id == entity_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()

    def list(
        self,
        *filters: Any,
        order_by: Sequence[Any] = (),
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[ModelType]:
        stmt = self._base_select().where(*filters)
        if order_by:
            stmt = stmt.order_by(*order_by)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars().all())

    def count(self, *filters: Any) -> int:
        stmt = (
            select(func.count())
            .select_from(self.model)
            .where(*filters)
        )
        if self._is_soft_delete:
            stmt = stmt.where(self.model.is_deleted.is_(False))
        return int(self.session.execute(stmt).scalar_one())

    # ==================== Write Operations ====================

    def add(self, entity: ModelType) -> ModelType:
        """Stage a new entity and flush so generated values are available."""
        self.session.add(entity)
        self.session.flush()
        logger.debug(f"Staged {self.model.__name__} with id: {entity.id}")
        return entity

    def save(self, entity: ModelType) -> ModelType:
        """Flush pending changes of an already tracked entity."""
        self.session.add(entity)
        self.session.flush()
        return entity

    def delete(self, entity: ModelType) -> None:
        """Hard-delete an entity. Listings use soft delete instead."""
        self.session.delete(entity)
        self.session.flush()
