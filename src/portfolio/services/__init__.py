from .admin_auth import AdminAuthService
from .conflicts import Conflict, ConflictChecker
from .entities import ALL_ENTITIES, CONTENT_ENTITIES, EntitySpec
from .mutation import MutationService

__all__ = [
    "AdminAuthService",
    "Conflict",
    "ConflictChecker",
    "ALL_ENTITIES",
    "CONTENT_ENTITIES",
    "EntitySpec",
    "MutationService",
]
