from uuid import UUID, uuid4
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Numeric, String, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cosmocore.db.base import Base


class Signal(Base):
    """Inbound trading signal, one row per accepted webhook call. Append-only."""

    __tablename__ = "signals"

    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4
    )
    bot_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid,
        ForeignKey("bots.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    pair: Mapped[str] = mapped_column(String, nullable=False)
    action: Mapped[str] = mapped_column(String, nullable=False)
    # No fixed precision: NUMERIC stores the value exactly as received
    price: Mapped[Decimal] = mapped_column(Numeric(asdecimal=True), nullable=False)
    source: Mapped[str] = mapped_column(String, nullable=False)
    raw_payload: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql"),
        nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.now(),
        nullable=False,
        index=True
    )

    # Relationships
    bot: Mapped[Optional["Bot"]] = relationship(
        "Bot",
        back_populates="signals",
        foreign_keys=[bot_id]
    )
