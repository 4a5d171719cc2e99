"""
City Explorer Backend — Location ORM Model
============================================

What:  Maps the `location` table, the persistent cache of geocoding results.
Who:   Read and written by SqlLocationStore; tracked by Alembic.

Table Design:
    - id: surrogate integer key
    - search_query: the city string exactly as the user typed it. This is
      the cache key, so it carries a unique constraint and an index.
    - formatted_query: provider display name of the first candidate
    - latitude / longitude: decimal degrees

Rows are written once and never updated or deleted.
"""

from sqlalchemy import Float, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from city_explorer.database import Base


class LocationRecord(Base):
    """A cached geocoding result, keyed by the original search string."""

    __tablename__ = "location"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Case- and whitespace-sensitive: "Seattle" and "seattle " are different keys
    search_query: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        index=True,
        comment="City string as entered by the user (cache key)",
    )

    formatted_query: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Display name returned by the geocoding provider",
    )

    latitude: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Latitude in decimal degrees",
    )

    longitude: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Longitude in decimal degrees",
    )

    __table_args__ = (
        UniqueConstraint("search_query", name="uq_location_search_query"),
    )

    def __repr__(self) -> str:
        return (
            f"<LocationRecord(search_query='{self.search_query}', "
            f"latitude={self.latitude}, longitude={self.longitude})>"
        )
