# hotel_market/services/listing/listing_lifecycle_service.py
from __future__ import annotations

from typing import Callable, List, Optional, Union

from sqlalchemy.orm import Session

from hotel_market.core.events import EventBus, ListingStatusChanged, event_bus
from hotel_market.core.logging import get_logger
from hotel_market.models.audit import ListingAuditLog
from hotel_market.models.base.enums import (
    SUBMITTABLE_AUDIT_STATUSES,
    AuditAction,
    AuditStatus,
    DecisionOutcome,
    PublishStatus,
)
from hotel_market.models.listing import Hotel
from hotel_market.repositories.listing import HotelRepository, ListingAuditLogRepository
from hotel_market.schemas.listing import AuditContext, ListingResponse
from hotel_market.services.common import UnitOfWork, errors
from hotel_market.services.listing import publish_gate

logger = get_logger(__name__)

# Checked in this order; the first missing one is reported
MANDATORY_FIELDS = ("name", "city", "address", "star_rating")


class ListingLifecycleService:
    """
    Listing state machine.

    - Merchant submits a draft or rejected listing for review
    - Admin approves or rejects a pending listing (audited)
    - Admin toggles an approved listing online / offline
    - Merchant withdraws a listing (soft delete)

    This is the only writer of ``audit_status``, ``publish_status`` and
    the listing audit log. Every precondition is checked before anything
    is mutated, and ``ListingStatusChanged`` is published only after the
    transaction commits.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        bus: Optional[EventBus] = None,
    ) -> None:
        self._session_factory = session_factory
        self._bus = bus or event_bus

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _get_hotel_repo(self, uow: UnitOfWork) -> HotelRepository:
        return uow.get_repo(HotelRepository)

    def _get_audit_repo(self, uow: UnitOfWork) -> ListingAuditLogRepository:
        return uow.get_repo(ListingAuditLogRepository)

    def _load_for_update(self, uow: UnitOfWork, listing_id: str) -> Hotel:
        hotel = self._get_hotel_repo(uow).get(listing_id, for_update=True)
        if hotel is None:
            raise self._rejected(
                errors.NotFoundError("Listing", listing_id),
                listing_id=listing_id,
            )
        return hotel

    def _rejected(self, exc: errors.ServiceError, **context) -> errors.ServiceError:
        logger.warning(
            f"Listing operation refused: {exc.message}",
            extra={"error_type": type(exc).__name__, **context},
        )
        return exc

    def _ensure_owner(self, hotel: Hotel, caller_id: str) -> None:
        if hotel.merchant_id != caller_id:
            raise self._rejected(
                errors.AuthorizationError(
                    "Only the owning merchant may change this listing",
                    required_permission="listing_owner",
                ),
                listing_id=hotel.id,
                caller_id=caller_id,
            )

    def _ensure_complete(self, hotel: Hotel, stage: str = "submitting for review") -> None:
        for field in MANDATORY_FIELDS:
            value = getattr(hotel, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise self._rejected(
                    errors.ValidationError(
                        f"'{field}' is required before {stage}",
                        field=field,
                    ),
                    listing_id=hotel.id,
                )

    def _publish(self, events: List[ListingStatusChanged]) -> None:
        for event in events:
            logger.info(
                f"Listing {event.listing_id} {event.status_field}: "
                f"{event.old_status} -> {event.new_status}",
                extra={
                    "listing_id": event.listing_id,
                    "actor_id": event.actor_id,
                    "old_status": event.old_status,
                    "new_status": event.new_status,
                },
            )
            self._bus.publish(event)

    @staticmethod
    def _to_response(hotel: Hotel) -> ListingResponse:
        return ListingResponse.model_validate(hotel)

    # ------------------------------------------------------------------ #
    # Merchant transitions
    # ------------------------------------------------------------------ #
    def submit_for_review(self, listing_id: str, caller_id: str) -> ListingResponse:
        """
        Move a draft or rejected listing to ``pending``.

        Raises:
            NotFoundError: unknown or withdrawn listing
            AuthorizationError: caller is not the owner
            InvalidStateError: listing is not draft or rejected
            ValidationError: a mandatory field is missing (``field`` names it)
        """
        with UnitOfWork(self._session_factory) as uow:
            hotel = self._load_for_update(uow, listing_id)
            self._ensure_owner(hotel, caller_id)

            if hotel.audit_status not in SUBMITTABLE_AUDIT_STATUSES:
                raise self._rejected(
                    errors.InvalidStateError(
                        f"Cannot submit a listing in '{hotel.audit_status.value}' status",
                        current_state=hotel.audit_status.value,
                    ),
                    listing_id=listing_id,
                )

            self._ensure_complete(hotel)

            old_status = hotel.audit_status
            hotel.audit_status = AuditStatus.PENDING
            hotel.rejection_reason = None

            uow.commit()
            response = self._to_response(hotel)

        self._publish([
            ListingStatusChanged(
                listing_id=listing_id,
                status_field="audit_status",
                old_status=old_status.value,
                new_status=AuditStatus.PENDING.value,
                actor_id=caller_id,
            )
        ])
        return response

    def withdraw(self, listing_id: str, caller_id: str) -> None:
        """
        Soft-delete a listing and take it offline.

        After this every operation on the listing raises ``NotFoundError``.
        """
        with UnitOfWork(self._session_factory) as uow:
            hotel = self._load_for_update(uow, listing_id)
            self._ensure_owner(hotel, caller_id)

            old_publish = hotel.publish_status
            hotel.mark_deleted()
            hotel.publish_status = PublishStatus.OFFLINE

            uow.commit()

        self._publish([
            ListingStatusChanged(
                listing_id=listing_id,
                status_field="publish_status",
                old_status=old_publish.value,
                new_status=PublishStatus.OFFLINE.value,
                actor_id=caller_id,
                withdrawn=True,
            )
        ])

    # ------------------------------------------------------------------ #
    # Admin transitions
    # ------------------------------------------------------------------ #
    def decide(
        self,
        listing_id: str,
        outcome: Union[DecisionOutcome, str],
        reason: Optional[str],
        admin_id: str,
        *,
        context: Optional[AuditContext] = None,
    ) -> ListingResponse:
        """
        Approve or reject a pending listing and record the decision.

        Input is validated before the listing is looked up. The status
        change and its audit entry commit together or not at all.

        Raises:
            ValidationError: unknown outcome, rejection without a reason, or
                approval of a listing missing a mandatory field
            NotFoundError: unknown or withdrawn listing
            InvalidStateError: listing is not pending
        """
        try:
            decision = DecisionOutcome(outcome)
        except ValueError:
            raise self._rejected(
                errors.ValidationError(
                    f"Outcome must be one of: {', '.join(o.value for o in DecisionOutcome)}",
                    field="outcome",
                    details={"outcome": str(outcome)},
                ),
                listing_id=listing_id,
            ) from None

        reason = reason.strip() if reason else None
        if decision == DecisionOutcome.REJECTED and not reason:
            raise self._rejected(
                errors.ValidationError("A reason is required to reject a listing", field="reason"),
                listing_id=listing_id,
            )

        with UnitOfWork(self._session_factory) as uow:
            hotel = self._load_for_update(uow, listing_id)

            if hotel.audit_status != AuditStatus.PENDING:
                raise self._rejected(
                    errors.InvalidStateError(
                        f"Only pending listings can be decided; listing is "
                        f"'{hotel.audit_status.value}'",
                        current_state=hotel.audit_status.value,
                    ),
                    listing_id=listing_id,
                )

            if decision == DecisionOutcome.APPROVED:
                self._ensure_complete(hotel, stage="approval")

            old_status = hotel.audit_status
            old_publish = hotel.publish_status

            if decision == DecisionOutcome.APPROVED:
                hotel.audit_status = AuditStatus.APPROVED
                hotel.rejection_reason = None
                action = AuditAction.APPROVE
            else:
                hotel.audit_status = AuditStatus.REJECTED
                hotel.rejection_reason = reason
                hotel.publish_status = PublishStatus.OFFLINE
                action = AuditAction.REJECT

            self._get_audit_repo(uow).append(
                ListingAuditLog(
                    hotel_id=hotel.id,
                    admin_id=admin_id,
                    action=action,
                    old_status=old_status,
                    new_status=hotel.audit_status,
                    reason=reason,
                    ip_address=context.ip_address if context else None,
                    user_agent=context.user_agent if context else None,
                )
            )

            uow.commit()
            response = self._to_response(hotel)

        events = [
            ListingStatusChanged(
                listing_id=listing_id,
                status_field="audit_status",
                old_status=old_status.value,
                new_status=response.audit_status.value,
                actor_id=admin_id,
            )
        ]
        if old_publish != response.publish_status:
            events.append(
                ListingStatusChanged(
                    listing_id=listing_id,
                    status_field="publish_status",
                    old_status=old_publish.value,
                    new_status=response.publish_status.value,
                    actor_id=admin_id,
                )
            )
        self._publish(events)
        return response

    def toggle_publish(self, listing_id: str, admin_id: str) -> ListingResponse:
        """
        Flip an approved listing between online and offline.

        Raises:
            NotFoundError: unknown or withdrawn listing
            InvalidStateError: listing is not approved
        """
        with UnitOfWork(self._session_factory) as uow:
            hotel = self._load_for_update(uow, listing_id)

            if not publish_gate.can_toggle_publish(hotel):
                raise self._rejected(
                    errors.InvalidStateError(
                        "Only approved listings can be put online or offline",
                        current_state=hotel.audit_status.value,
                    ),
                    listing_id=listing_id,
                )

            old_publish = hotel.publish_status
            hotel.publish_status = (
                PublishStatus.OFFLINE
                if old_publish == PublishStatus.ONLINE
                else PublishStatus.ONLINE
            )

            uow.commit()
            response = self._to_response(hotel)

        self._publish([
            ListingStatusChanged(
                listing_id=listing_id,
                status_field="publish_status",
                old_status=old_publish.value,
                new_status=response.publish_status.value,
                actor_id=admin_id,
            )
        ])
        return response
