"""Application ports - interfaces for external adapters."""

from schoolauthz.application.ports.permission_cache import PermissionCache
from schoolauthz.application.ports.permission_checker import PermissionChecker
from schoolauthz.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionCache",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
