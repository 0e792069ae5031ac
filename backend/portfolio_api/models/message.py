"""
Portfolio API - Message Model
==============================

What:  ORM model for the `messages` table: contact-form submissions.
How:   `timestamp` and `read` get their defaults from the storage layer at
       insert time; callers never supply them on create.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, Text, Uuid, false, text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_api.database import Base


class Message(Base):
    __tablename__ = "messages"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )
    read: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    __table_args__ = (
        Index("idx_messages_timestamp", "timestamp"),
    )

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, email={self.email!r}, read={self.read})>"
