# This project was developed with assistance from AI tools.
"""
Credit back-office -- domain models

Roles, users and teams drive access control; registrations (clients) and
proposals are the records scoped by it. Ownership columns on registrations
and proposals are populated inconsistently by the intake flows, so none of
them is authoritative on its own.
"""

import uuid

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum,
    Numeric,
    String,
    Text,
    func,
)

from .database import Base
from .enums import PipelineStatus, ProposalStatus, RegistrationType


def _new_id() -> str:
    return uuid.uuid4().hex


class Role(Base):
    """Named bundle of permission strings, joined to users by ``key``."""

    __tablename__ = "roles"

    id = Column(String(64), primary_key=True, default=_new_id)
    key = Column(String(64), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    permissions = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Role(id={self.id}, key='{self.key}')>"


class User(Base):
    """Back-office user. ``role_key`` is denormalized from the role record."""

    __tablename__ = "users"

    id = Column(String(128), primary_key=True, default=_new_id)
    email = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=True)
    role_id = Column(String(64), nullable=True)
    role_key = Column(String(64), nullable=True, index=True)
    role_name = Column(String(255), nullable=True)
    team = Column(String(64), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"


class Team(Base):
    __tablename__ = "teams"

    id = Column(String(64), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    team_code = Column(String(32), nullable=True, index=True)
    members = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Team(id={self.id}, name='{self.name}')>"


class Registration(Base):
    """Client registration (individual or company) submitted for credit."""

    __tablename__ = "registrations"

    id = Column(String(64), primary_key=True, default=_new_id)
    type = Column(
        Enum(RegistrationType, name="registration_type", native_enum=False),
        nullable=True,
    )
    name = Column(String(255), nullable=True)
    company_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    pipeline_status = Column(
        Enum(PipelineStatus, name="pipeline_status", native_enum=False),
        nullable=True,
    )
    # ownership signals
    user_id = Column(String(128), nullable=True, index=True)
    created_by = Column(String(255), nullable=True, index=True)
    inviter_user_id = Column(String(128), nullable=True, index=True)
    partner_email = Column(String(255), nullable=True)
    team_id = Column(String(64), nullable=True, index=True)
    team_name = Column(String(255), nullable=True)
    team_code = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Registration(id={self.id}, type='{self.type}')>"


class Proposal(Base):
    """Credit proposal raised for a client registration."""

    __tablename__ = "proposals"

    id = Column(String(64), primary_key=True, default=_new_id)
    proposal_number = Column(String(32), nullable=True)
    client_name = Column(String(255), nullable=True)
    desired_credit = Column(Numeric(14, 2), nullable=True)
    status = Column(
        Enum(ProposalStatus, name="proposal_status", native_enum=False),
        nullable=False,
        default=ProposalStatus.PENDING,
    )
    pipeline_status = Column(
        Enum(PipelineStatus, name="pipeline_status", native_enum=False),
        nullable=False,
        default=PipelineStatus.SUBMITTED,
    )
    notes = Column(Text, nullable=True)
    # ownership signals
    client_id = Column(String(128), nullable=True, index=True)
    client_email = Column(String(255), nullable=True)
    user_id = Column(String(128), nullable=True, index=True)
    created_by = Column(String(255), nullable=True, index=True)
    inviter_user_id = Column(String(128), nullable=True, index=True)
    partner_email = Column(String(255), nullable=True)
    team_id = Column(String(64), nullable=True, index=True)
    team_name = Column(String(255), nullable=True)
    team_code = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Proposal(id={self.id}, status='{self.status}')>"
