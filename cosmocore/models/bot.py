from uuid import UUID, uuid4
from typing import List

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cosmocore.db.base import Base, TimestampMixin


class Bot(Base, TimestampMixin):
    """Trading bot that signals may later be attributed to."""

    __tablename__ = "bots"

    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Relationships
    signals: Mapped[List["Signal"]] = relationship(
        "Signal",
        back_populates="bot"
    )
