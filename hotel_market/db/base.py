"""SQLAlchemy Base class for all models."""
from hotel_market.models.base.base_model import Base


def import_models() -> None:
    """Import all models to register them with SQLAlchemy."""
    import hotel_market.models  # noqa: F401


__all__ = ["Base", "import_models"]
