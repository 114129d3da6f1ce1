# hotel_market/services/listing/listing_service.py
from __future__ import annotations

from typing import Callable, List, Optional, Union

from sqlalchemy.orm import Session

from hotel_market.core.logging import get_logger
from hotel_market.models.base.enums import (
    EDITABLE_AUDIT_STATUSES,
    AuditStatus,
    PublishStatus,
    ViewerRole,
)
from hotel_market.models.listing import Hotel, HotelImage, RoomType
from hotel_market.repositories.listing import (
    HotelImageRepository,
    HotelRepository,
    RoomTypeRepository,
)
from hotel_market.schemas.listing import (
    ImageCreate,
    ImageResponse,
    ListingCreate,
    ListingResponse,
    ListingSummary,
    ListingUpdate,
    RoomTypeCreate,
    RoomTypeResponse,
    RoomTypeUpdate,
)
from hotel_market.services.common import UnitOfWork, errors
from hotel_market.services.listing.listing_lifecycle_service import MANDATORY_FIELDS
from hotel_market.services.listing import publish_gate

logger = get_logger(__name__)

REQUIRED_LISTING_FIELDS = ("name", "check_in_time", "check_out_time")
REQUIRED_ROOM_TYPE_FIELDS = (
    "name",
    "base_price",
    "discount_rate",
    "max_guests",
    "available_count",
    "is_available",
)


class ListingService:
    """
    Merchant-side listing management.

    - Create a listing (always starts draft / offline)
    - Edit listing details, room types and images while the listing is
      draft, pending or rejected
    - Read a listing with visibility rules applied
    - List a merchant's own listings

    Edits never touch audit or publish status; those belong to
    ListingLifecycleService.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _get_hotel_repo(self, uow: UnitOfWork) -> HotelRepository:
        return uow.get_repo(HotelRepository)

    def _get_room_type_repo(self, uow: UnitOfWork) -> RoomTypeRepository:
        return uow.get_repo(RoomTypeRepository)

    def _get_image_repo(self, uow: UnitOfWork) -> HotelImageRepository:
        return uow.get_repo(HotelImageRepository)

    def _load_editable(self, uow: UnitOfWork, listing_id: str, caller_id: str) -> Hotel:
        hotel = self._get_hotel_repo(uow).get(listing_id, for_update=True)
        if hotel is None:
            raise errors.NotFoundError("Listing", listing_id)

        if hotel.merchant_id != caller_id:
            logger.warning(
                "Edit refused: caller is not the owner",
                extra={"listing_id": listing_id, "caller_id": caller_id},
            )
            raise errors.AuthorizationError(
                "Only the owning merchant may edit this listing",
                required_permission="listing_owner",
            )

        if hotel.audit_status not in EDITABLE_AUDIT_STATUSES:
            logger.warning(
                "Edit refused: listing not editable",
                extra={"listing_id": listing_id, "audit_status": hotel.audit_status.value},
            )
            raise errors.InvalidStateError(
                f"Listing in '{hotel.audit_status.value}' status cannot be edited",
                current_state=hotel.audit_status.value,
            )
        return hotel

    def _ensure_mandatory_kept(self, hotel: Hotel, changes: dict) -> None:
        # once submitted, mandatory fields may change but not be cleared
        for field in MANDATORY_FIELDS:
            if field not in changes:
                continue
            value = changes[field]
            if value is None or (isinstance(value, str) and not value.strip()):
                logger.warning(
                    "Edit refused: mandatory field cleared",
                    extra={"listing_id": hotel.id, "field": field},
                )
                raise errors.ValidationError(
                    f"'{field}' cannot be cleared once the listing has been submitted",
                    field=field,
                )

    @staticmethod
    def _build_room_type(data: RoomTypeCreate) -> RoomType:
        return RoomType(**data.model_dump())

    @staticmethod
    def _build_image(data: ImageCreate, sort_order: int) -> HotelImage:
        payload = data.model_dump()
        payload["sort_order"] = data.sort_order if data.sort_order is not None else sort_order
        return HotelImage(**payload)

    # ------------------------------------------------------------------ #
    # Listing
    # ------------------------------------------------------------------ #
    def create_listing(self, merchant_id: str, data: ListingCreate) -> ListingResponse:
        """Create a draft, offline listing with optional room types and images."""
        payload = data.model_dump(exclude={"room_types", "images"})

        with UnitOfWork(self._session_factory) as uow:
            hotel = Hotel(
                **payload,
                merchant_id=merchant_id,
                audit_status=AuditStatus.DRAFT,
                publish_status=PublishStatus.OFFLINE,
            )
            hotel.room_types = [self._build_room_type(rt) for rt in data.room_types]
            hotel.images = [
                self._build_image(img, index) for index, img in enumerate(data.images)
            ]
            self._get_hotel_repo(uow).add(hotel)

            uow.commit()
            response = ListingResponse.model_validate(hotel)

        logger.info(
            f"Listing {response.id} created",
            extra={"listing_id": response.id, "merchant_id": merchant_id},
        )
        return response

    def update_listing(
        self,
        listing_id: str,
        caller_id: str,
        data: ListingUpdate,
    ) -> ListingResponse:
        """Apply the fields the caller set; audit and publish status are untouched."""
        changes = data.model_dump(exclude_unset=True)
        for key in REQUIRED_LISTING_FIELDS:
            if key in changes and changes[key] is None:
                raise errors.ValidationError(f"'{key}' cannot be cleared", field=key)
        if "facilities" in changes and changes["facilities"] is None:
            changes["facilities"] = []

        with UnitOfWork(self._session_factory) as uow:
            hotel = self._load_editable(uow, listing_id, caller_id)
            if hotel.audit_status != AuditStatus.DRAFT:
                self._ensure_mandatory_kept(hotel, changes)
            for key, value in changes.items():
                setattr(hotel, key, value)

            uow.commit()
            response = ListingResponse.model_validate(hotel)

        logger.info(
            f"Listing {listing_id} updated",
            extra={"listing_id": listing_id, "fields": sorted(changes)},
        )
        return response

    def get_listing(
        self,
        listing_id: str,
        viewer_id: Optional[str] = None,
        viewer_role: Optional[Union[ViewerRole, str]] = None,
    ) -> ListingResponse:
        """
        Read one listing.

        The owner and administrators see any state; everyone else only
        sees publicly visible listings and gets NotFoundError otherwise.
        """
        try:
            role = ViewerRole(viewer_role) if viewer_role else ViewerRole.GUEST
        except ValueError:
            raise errors.ValidationError(
                f"Unknown viewer role '{viewer_role}'", field="viewer_role"
            ) from None

        with UnitOfWork(self._session_factory) as uow:
            hotel = self._get_hotel_repo(uow).get(listing_id)
            if hotel is None:
                raise errors.NotFoundError("Listing", listing_id)

            is_owner = viewer_id is not None and hotel.merchant_id == viewer_id
            if not (is_owner or role == ViewerRole.ADMIN or publish_gate.is_publicly_visible(hotel)):
                raise errors.NotFoundError("Listing", listing_id)

            return ListingResponse.model_validate(hotel)

    def list_my_listings(self, merchant_id: str) -> List[ListingSummary]:
        """All of a merchant's listings, newest first."""
        with UnitOfWork(self._session_factory) as uow:
            hotels = self._get_hotel_repo(uow).list_by_merchant(merchant_id)
            return [ListingSummary.model_validate(h) for h in hotels]

    # ------------------------------------------------------------------ #
    # Room types
    # ------------------------------------------------------------------ #
    def add_room_type(
        self,
        listing_id: str,
        caller_id: str,
        data: RoomTypeCreate,
    ) -> RoomTypeResponse:
        with UnitOfWork(self._session_factory) as uow:
            hotel = self._load_editable(uow, listing_id, caller_id)
            room_type = self._build_room_type(data)
            room_type.hotel_id = hotel.id
            self._get_room_type_repo(uow).add(room_type)

            uow.commit()
            return RoomTypeResponse.model_validate(room_type)

    def update_room_type(
        self,
        listing_id: str,
        room_type_id: str,
        caller_id: str,
        data: RoomTypeUpdate,
    ) -> RoomTypeResponse:
        changes = data.model_dump(exclude_unset=True)

        with UnitOfWork(self._session_factory) as uow:
            self._load_editable(uow, listing_id, caller_id)
            room_type = self._get_room_type_repo(uow).get_for_hotel(listing_id, room_type_id)
            if room_type is None:
                raise errors.NotFoundError("RoomType", room_type_id)

            for key, value in changes.items():
                if value is None and key in REQUIRED_ROOM_TYPE_FIELDS:
                    raise errors.ValidationError(f"'{key}' cannot be cleared", field=key)
                if key == "facilities" and value is None:
                    value = []
                setattr(room_type, key, value)

            uow.commit()
            return RoomTypeResponse.model_validate(room_type)

    def remove_room_type(self, listing_id: str, room_type_id: str, caller_id: str) -> None:
        with UnitOfWork(self._session_factory) as uow:
            self._load_editable(uow, listing_id, caller_id)
            repo = self._get_room_type_repo(uow)
            room_type = repo.get_for_hotel(listing_id, room_type_id)
            if room_type is None:
                raise errors.NotFoundError("RoomType", room_type_id)

            repo.delete(room_type)
            uow.commit()

        logger.info(
            f"Room type {room_type_id} removed",
            extra={"listing_id": listing_id, "room_type_id": room_type_id},
        )

    # ------------------------------------------------------------------ #
    # Images
    # ------------------------------------------------------------------ #
    def add_image(self, listing_id: str, caller_id: str, data: ImageCreate) -> ImageResponse:
        """Attach an image reference; without a sort order it goes last."""
        with UnitOfWork(self._session_factory) as uow:
            hotel = self._load_editable(uow, listing_id, caller_id)
            repo = self._get_image_repo(uow)
            image = self._build_image(data, repo.next_sort_order(hotel.id))
            image.hotel_id = hotel.id
            repo.add(image)

            uow.commit()
            return ImageResponse.model_validate(image)
