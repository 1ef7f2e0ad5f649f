"""Database tables / schema"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBHistoricalEvent(Base):
    __tablename__ = "historical_events"
    id: Mapped[str] = mapped_column(primary_key=True)
    year: Mapped[int]
    description: Mapped[str]
    image_url: Mapped[str]
    location_name: Mapped[str]
    latitude: Mapped[float]
    longitude: Mapped[float]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
