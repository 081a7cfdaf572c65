# This project was developed with assistance from AI tools.
"""Authentication and authorization schemas."""

import enum

from pydantic import BaseModel, ConfigDict, Field


class ScopeLevel(str, enum.Enum):
    """Record visibility tier. Absence of a level means no access."""

    OWN = "own"
    TEAM = "team"
    ALL = "all"


class DataScope(BaseModel):
    """Per-resource visibility resolved from the caller's permissions."""

    model_config = ConfigDict(frozen=True)

    dashboard: ScopeLevel | None = None
    clients: ScopeLevel | None = None
    proposals: ScopeLevel | None = None
    pipeline: ScopeLevel | None = None


class UserContext(BaseModel):
    """Injected by auth middleware into every authenticated request."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str
    name: str = ""
    role_key: str | None = None
    role_id: str | None = None
    role_name: str | None = None
    team: str | None = None
    permissions: frozenset[str] = frozenset()
    data_scope: DataScope = Field(default_factory=DataScope)


class TokenPayload(BaseModel):
    """Decoded JWT claims. Role and team arrive as custom claims."""

    model_config = ConfigDict(populate_by_name=True)

    sub: str
    email: str = ""
    name: str = ""
    role_key: str | None = Field(default=None, alias="roleKey")
    role_id: str | None = Field(default=None, alias="roleId")
    role_name: str | None = Field(default=None, alias="roleName")
    team: str | None = None
