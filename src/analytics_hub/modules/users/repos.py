"""User repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from analytics_hub.api.dependencies import DBSession
from analytics_hub.core.permissions.models import Role
from analytics_hub.core.permissions.schemas import UserProjection
from analytics_hub.modules.users.models import User


class UserRepository:
    """Repository for User database operations.

    Besides plain lookups, it materializes the user projection the
    permission checker consumes.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User instance to create

        Returns:
            The created user with ID populated
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get a user by ID with role and permissions loaded.

        Args:
            user_id: The user's UUID

        Returns:
            User if found, None otherwise
        """
        stmt = (
            select(User)
            .where(User.id == user_id)
            .options(selectinload(User.role).selectinload(Role.permissions))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email address."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_projection(self, user_id: UUID) -> UserProjection | None:
        """Load the authorization projection for a user.

        Args:
            user_id: The user's UUID

        Returns:
            The projection, or None when the user does not exist
        """
        user = await self.get_by_id(user_id)
        if user is None:
            return None
        return user.to_projection()

    async def assign_role(self, user: User, role: Role | None) -> User:
        """Point the user at ``role`` (or at no role)."""
        user.role = role
        await self.session.flush()
        return user


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
