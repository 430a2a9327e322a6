"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.core.shared_types import Mark, Status


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    board: Mapped[list[str]] = mapped_column(JSON)
    size: Mapped[int]
    current_player: Mapped[str] = mapped_column(default=Mark.X.value)
    winner: Mapped[Optional[str]]
    status: Mapped[str] = mapped_column(default=Status.WAITING.value)
    last_move: Mapped[int] = mapped_column(default=-1)
    history: Mapped[list[int]] = mapped_column(JSON, default=list)
    rematch_requested: Mapped[Optional[str]]
    rematch_accepted: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
