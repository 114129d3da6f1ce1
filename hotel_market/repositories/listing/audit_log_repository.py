# hotel_market/repositories/listing/audit_log_repository.py
from typing import List

from sqlalchemy.exc import InvalidRequestError
from sqlalchemy.orm import Session

from hotel_market.models.audit import ListingAuditLog
from hotel_market.repositories.base import BaseRepository


class ListingAuditLogRepository(BaseRepository[ListingAuditLog]):
    """Append-only access to the listing audit trail."""

    def __init__(self, session: Session):
        super().__init__(session, ListingAuditLog)

    def append(self, entry: ListingAuditLog) -> ListingAuditLog:
        return self.add(entry)

    def list_for_hotel(self, hotel_id: str) -> List[ListingAuditLog]:
        stmt = (
            self._base_select()
            .where(ListingAuditLog.hotel_id == hotel_id)
            .order_by(ListingAuditLog.created_at.desc(), ListingAuditLog.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    def save(self, entity: ListingAuditLog) -> ListingAuditLog:
        raise InvalidRequestError("listing audit log entries are append-only")

    def delete(self, entity: ListingAuditLog) -> None:
        raise InvalidRequestError("listing audit log entries cannot be deleted")
