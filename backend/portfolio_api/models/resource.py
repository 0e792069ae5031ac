"""
Portfolio API - Resource Model
===============================

What:  ORM model for the `resources` table (downloadable study material,
       slides, PDFs and similar assets shown on the portfolio).
Who:   Used by the resource CollectionService and by Alembic.

Columns:
    - id: UUID assigned at insert
    - title, category, description: free text, nullable
    - file_url: /uploads/<name> when a file accompanied create/update, else NULL
    - created_at: insert time (UTC); lists are returned in this order
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_api.database import Base


class Resource(Base):
    __tablename__ = "resources"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    file_url: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Public path of the uploaded file (/uploads/<name>)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Resource(id={self.id}, title={self.title!r}, file_url={self.file_url!r})>"
