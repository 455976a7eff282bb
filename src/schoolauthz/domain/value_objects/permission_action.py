"""Actions that can be performed on resources."""

from enum import StrEnum


class PermissionAction(StrEnum):
    """Operation verbs applicable to a resource."""

    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    APPROVE = "approve"
    EXPORT = "export"
