# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, DatabaseService, get_db, get_db_service
from .enums import (
    Collection,
    PipelineStatus,
    ProposalStatus,
    RegistrationType,
    RoleKey,
)
from .models import Proposal, Registration, Role, Team, User
from .store import (
    DocumentStore,
    SqlDocumentStore,
    UnknownCollectionError,
    UnknownFieldError,
)

__all__ = [
    "Base",
    "DatabaseService",
    "get_db",
    "get_db_service",
    "__version__",
    # Enums
    "Collection",
    "PipelineStatus",
    "ProposalStatus",
    "RegistrationType",
    "RoleKey",
    # Models
    "Proposal",
    "Registration",
    "Role",
    "Team",
    "User",
    # Store
    "DocumentStore",
    "SqlDocumentStore",
    "UnknownCollectionError",
    "UnknownFieldError",
]
