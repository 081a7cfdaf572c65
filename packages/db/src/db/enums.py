# This project was developed with assistance from AI tools.
"""
Domain enums for the credit origination back-office.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class RoleKey(str, enum.Enum):
    """Stable keys of the built-in roles.

    Role keys are free-form strings in persisted role records; these are the
    ones the system seeds and special-cases.
    """

    ADMIN = "admin"
    MANAGER = "manager"
    PARTNER = "partner"
    CLIENT = "client"


class Collection(str, enum.Enum):
    ROLES = "roles"
    USERS = "users"
    TEAMS = "teams"
    REGISTRATIONS = "registrations"
    PROPOSALS = "proposals"


class RegistrationType(str, enum.Enum):
    PF = "PF"
    PJ = "PJ"


class ProposalStatus(str, enum.Enum):
    PENDING = "pending"
    IN_ANALYSIS = "in_analysis"
    WITH_PENDENCIES = "with_pendencies"
    APPROVED = "approved"
    REJECTED = "rejected"


class PipelineStatus(str, enum.Enum):
    SUBMITTED = "submitted"
    PRE_ANALYSIS = "pre_analysis"
    CREDIT = "credit"
    LEGAL = "legal"
    CONTRACT = "contract"

    @classmethod
    def ordered(cls) -> tuple["PipelineStatus", ...]:
        """Pipeline stages in the order a proposal moves through them."""
        return (cls.SUBMITTED, cls.PRE_ANALYSIS, cls.CREDIT, cls.LEGAL, cls.CONTRACT)
