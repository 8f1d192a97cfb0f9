from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    MappedAsDataclass,
    mapped_column,
    relationship,
)


class Base(MappedAsDataclass, DeclarativeBase):
    pass


class ServiceModel(Base):
    __tablename__ = "services"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, init=False)

    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    url: Mapped[str] = mapped_column(String(2048), unique=True)

    is_up: Mapped[bool] = mapped_column(Boolean, default=False)
    last_checked_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), default=None)
    status_changed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), default=None)
    response_time_ms: Mapped[Optional[int]] = mapped_column(Integer, default=None)

    state_version: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default_factory=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        init=False,
    )

    changelog_entries: Mapped[list["ChangelogEntryModel"]] = relationship(
        back_populates="service",
        cascade="all, delete-orphan",
        passive_deletes=True,
        default_factory=list,
    )


class ChangelogEntryModel(Base):
    __tablename__ = "status_changelog"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, init=False)
    service_id: Mapped[int] = mapped_column(ForeignKey("services.id", ondelete="CASCADE"), index=True)

    # 0 = down, 1 = up
    previous_status: Mapped[int] = mapped_column(Integer)
    new_status: Mapped[int] = mapped_column(Integer)

    changed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    service: Mapped[ServiceModel] = relationship(back_populates="changelog_entries", init=False)
