"""User database models."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from analytics_hub.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from analytics_hub.core.database.base import Base, TimestampMixin, UUIDMixin
from analytics_hub.core.permissions.schemas import UserProjection


if TYPE_CHECKING:
    from analytics_hub.core.permissions.models import Role


class User(Base, UUIDMixin, TimestampMixin):
    """User model as seen by the access core.

    The rest of the user record (credentials, profile, terms acceptance)
    belongs to the surrounding application.

    Attributes:
        email: Unique email address
        full_name: User's full name
        is_active: Whether the user may do anything at all
        role_id: The single role the user holds
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    role_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    # Relationships
    role: Mapped["Role | None"] = relationship(
        "Role",
        back_populates="users",
        lazy="selectin",
    )

    def to_projection(self) -> UserProjection:
        """Build the read-only projection used by the permission checker."""
        return UserProjection(
            id=str(self.id),
            is_active=self.is_active,
            role=self.role.to_projection() if self.role is not None else None,
        )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role_id={self.role_id})>"
