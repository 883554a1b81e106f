"""
Publisher database model.
"""

from typing import TYPE_CHECKING, List, Optional
from uuid import uuid4

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .content import Article


class Publisher(Base, TimestampMixin):
    """Publisher account model. Publishers own articles."""

    __tablename__ = "publishers"

    # Primary key
    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Basic info
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Authentication
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Callback notified when one of the publisher's articles is read
    webhook_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)

    # Relationships
    articles: Mapped[List["Article"]] = relationship(
        "Article",
        back_populates="publisher",
    )

    def __repr__(self) -> str:
        return f"<Publisher(id={self.id}, email={self.email})>"
