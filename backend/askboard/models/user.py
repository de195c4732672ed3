"""
AskBoard Backend: User SQLAlchemy Model
========================================

What:  ORM model for the `users` table.
Who:   Read and updated by UserService.

Accounts are created by the login collaborator (out of this service);
this backend only reads profiles and edits the bio.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from askboard.database import Base


class User(Base):
    __tablename__ = "users"

    uid: Mapped[str] = mapped_column(String(64), primary_key=True)

    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)

    bio: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<User(uid='{self.uid}', username='{self.username}')>"
