"""Pydantic schemas for the user projection consumed by the access core.

The projection is produced by the persistence layer (or any other identity
resolver) and is the only view of a user the permission checker reads.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PermissionRef(BaseModel):
    """A permission granted to a role, referenced by name."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    name: str = Field(..., min_length=1)


class RoleProjection(BaseModel):
    """A role together with the permissions it grants."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str | None = None
    name: str
    is_active: bool = Field(True, validation_alias=AliasChoices("is_active", "isActive"))
    permissions: list[PermissionRef] = Field(default_factory=list)

    def permission_names(self) -> frozenset[str]:
        """Return the role's effective permission set."""
        return frozenset(permission.name for permission in self.permissions)


class UserProjection(BaseModel):
    """The subset of a user record needed for authorization decisions."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    is_active: bool = Field(..., validation_alias=AliasChoices("is_active", "isActive"))
    role: RoleProjection | None = None


class AccessSummary(BaseModel):
    """Response schema describing what the current user may do."""

    user_id: str
    role: str | None
    permissions: list[str]
    is_admin: bool
    is_super_admin: bool
    can_access_admin: bool


class RoleTemplateResponse(BaseModel):
    """Response schema for a resolved role template."""

    name: str
    description: str
    permissions: list[str]
