"""Declarative base and the table holding serialized game aggregates."""

from datetime import datetime
from typing import ClassVar

from sqlalchemy import CheckConstraint, DateTime, Integer, MetaData, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for conquest tables."""

    metadata = MetaData(
        naming_convention={
            "pk": "pk_%(table_name)s",
            "ck": "ck_%(table_name)s_%(constraint_name)s",
        }
    )
    type_annotation_map: ClassVar[dict] = {
        datetime: DateTime(timezone=True),
    }


class GameRecord(Base):
    """One row per game; the whole aggregate lives in ``snapshot``.

    Attributes:
        id: Game identifier, shared with the domain ``GameID``
        name: Display name, copied from the snapshot for listing
        status: Lifecycle status, copied from the snapshot for filtering
        snapshot: JSON document produced by the repository adapter
        created_at: Set by the database on insert
        updated_at: Refreshed on every save
    """

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="waiting")
    snapshot: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('waiting', 'in_progress', 'finished')",
            name="status",
        ),
    )

    def __repr__(self) -> str:
        return f"<GameRecord(id={self.id}, name='{self.name}', status='{self.status}')>"
