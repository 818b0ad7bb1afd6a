from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )


media_file_tags = Table(
    "media_file_tags",
    Base.metadata,
    Column("media_file_id", ForeignKey("media_files.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True, index=True),
)


class MediaFile(TimestampMixin, Base):
    __tablename__ = "media_files"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    path: Mapped[str] = mapped_column(String)
    hash: Mapped[str] = mapped_column(String, unique=True)  # content address
    width: Mapped[Optional[int]] = mapped_column(Integer)
    height: Mapped[Optional[int]] = mapped_column(Integer)
    mime_type: Mapped[Optional[str]] = mapped_column(String)
    size: Mapped[Optional[int]] = mapped_column(Integer)  # In bytes
    title: Mapped[Optional[str]] = mapped_column(String)
    description: Mapped[Optional[str]] = mapped_column(Text)

    tags: Mapped[List["Tag"]] = relationship(
        secondary=media_file_tags, back_populates="media_files"
    )
    pins: Mapped[List["Pin"]] = relationship(back_populates="media_file")


class Tag(TimestampMixin, Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, unique=True)

    media_files: Mapped[List["MediaFile"]] = relationship(
        secondary=media_file_tags, back_populates="tags"
    )


class Website(TimestampMixin, Base):
    __tablename__ = "websites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(String, unique=True)
    name: Mapped[Optional[str]] = mapped_column(String)

    # Boards (and through them, pins) go with the website. Media files and
    # tags are never reached from here, so they survive.
    boards: Mapped[List["Board"]] = relationship(
        back_populates="website", cascade="all, delete-orphan"
    )


class Board(TimestampMixin, Base):
    __tablename__ = "boards"
    __table_args__ = (
        UniqueConstraint("name", "website_id", name="unique_board_names_per_website"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String)
    description: Mapped[Optional[str]] = mapped_column(Text)
    url: Mapped[Optional[str]] = mapped_column(String)
    parent_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("boards.id", ondelete="SET NULL"), index=True
    )
    website_id: Mapped[int] = mapped_column(
        ForeignKey("websites.id", ondelete="CASCADE"), index=True
    )

    website: Mapped["Website"] = relationship(back_populates="boards")
    parent: Mapped[Optional["Board"]] = relationship(
        back_populates="children", remote_side="Board.id"
    )
    children: Mapped[List["Board"]] = relationship(back_populates="parent")
    pins: Mapped[List["Pin"]] = relationship(
        back_populates="board", cascade="all, delete-orphan"
    )


class Pin(TimestampMixin, Base):
    __tablename__ = "pins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[Optional[str]] = mapped_column(String)
    description: Mapped[Optional[str]] = mapped_column(Text)
    source_url: Mapped[Optional[str]] = mapped_column(String)
    download_status: Mapped[Optional[str]] = mapped_column(String)
    board_id: Mapped[int] = mapped_column(ForeignKey("boards.id", ondelete="CASCADE"), index=True)
    media_file_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("media_files.id", ondelete="SET NULL"), index=True
    )

    board: Mapped["Board"] = relationship(back_populates="pins")
    media_file: Mapped[Optional["MediaFile"]] = relationship(back_populates="pins")
