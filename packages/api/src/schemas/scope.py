# This project was developed with assistance from AI tools.
"""Viewer snapshots consumed by the collection filter."""

from pydantic import BaseModel, ConfigDict


class TeamSnapshot(BaseModel):
    """Team identity and membership as resolved at filter time."""

    model_config = ConfigDict(frozen=True)

    team_id: str
    name: str | None = None
    team_code: str | None = None
    member_ids: frozenset[str] = frozenset()
    member_emails: frozenset[str] = frozenset()


class Viewer(BaseModel):
    """Everything the collection filter knows about the acting identity."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str = ""
    role_key: str | None = None
    team: TeamSnapshot | None = None
    referred_client_ids: frozenset[str] = frozenset()
