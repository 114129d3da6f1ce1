from hotel_market.schemas.listing.audit import AuditContext, AuditLogResponse
from hotel_market.schemas.listing.image import ImageCreate, ImageResponse
from hotel_market.schemas.listing.listing import (
    ListingCreate,
    ListingResponse,
    ListingSummary,
    ListingUpdate,
)
from hotel_market.schemas.listing.public import (
    DiscountSummary,
    FacilityCatalog,
    FacilityOption,
    ListingDetail,
    PricedRoomType,
    PriceRange,
    PublicImage,
    RecommendedListing,
)
from hotel_market.schemas.listing.room_type import (
    RoomTypeCreate,
    RoomTypeResponse,
    RoomTypeUpdate,
)
from hotel_market.schemas.listing.search import (
    CityCount,
    ListingCard,
    ListingSearchCriteria,
    ListingSearchResponse,
    PopularCity,
    PriceBucket,
    PriceRangeStats,
    QuickSearchHotel,
    QuickSearchResult,
)
from hotel_market.schemas.listing.stats import ListingStatusStats

__all__ = [
    "AuditContext",
    "AuditLogResponse",
    "ImageCreate",
    "ImageResponse",
    "ListingCreate",
    "ListingUpdate",
    "ListingSummary",
    "ListingResponse",
    "RoomTypeCreate",
    "RoomTypeUpdate",
    "RoomTypeResponse",
    "PriceRange",
    "DiscountSummary",
    "PricedRoomType",
    "PublicImage",
    "ListingDetail",
    "RecommendedListing",
    "FacilityOption",
    "FacilityCatalog",
    "ListingSearchCriteria",
    "ListingCard",
    "ListingSearchResponse",
    "QuickSearchHotel",
    "CityCount",
    "QuickSearchResult",
    "PopularCity",
    "PriceBucket",
    "PriceRangeStats",
    "ListingStatusStats",
]
