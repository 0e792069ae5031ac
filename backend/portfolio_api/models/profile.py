"""
Portfolio API - Profile Model
==============================

What:  ORM model for the `profile` table, a singleton.
How:   The primary key is a fixed string (PROFILE_KEY). Every write targets
       that key, so the table can never hold more than one row.

Columns are all NOT NULL text defaulting to the empty string, so a freshly
created profile serializes as a record of empty strings.
"""

from sqlalchemy import String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_api.database import Base

PROFILE_KEY = "profile"

# Editable columns, in display order
PROFILE_FIELDS = (
    "full_name",
    "role",
    "about",
    "current_focus",
    "skills",
    "linkedin",
    "github",
    "email",
)


def _text_column() -> Mapped[str]:
    return mapped_column(Text, nullable=False, default="", server_default=text("''"))


class Profile(Base):
    __tablename__ = "profile"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=PROFILE_KEY)
    full_name: Mapped[str] = _text_column()
    role: Mapped[str] = _text_column()
    about: Mapped[str] = _text_column()
    current_focus: Mapped[str] = _text_column()
    skills: Mapped[str] = _text_column()
    linkedin: Mapped[str] = _text_column()
    github: Mapped[str] = _text_column()
    email: Mapped[str] = _text_column()

    def __repr__(self) -> str:
        return f"<Profile(full_name={self.full_name!r}, role={self.role!r})>"
