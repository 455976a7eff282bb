"""Domain exceptions."""

from typing import Any


class SchoolAuthzError(Exception):
    """Base exception for schoolauthz."""

    pass


class ValidationError(SchoolAuthzError):
    """A field is outside the permission catalog or otherwise malformed."""

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class DuplicatePermission(SchoolAuthzError):
    """Role already holds the exact (resource, action, scope) tuple."""

    def __init__(self, role, key, existing_id=None) -> None:
        super().__init__(f"Role {role} already has permission {key}")
        self.role = role
        self.key = key
        self.existing_id = existing_id


class DuplicateOverride(SchoolAuthzError):
    """User already has an override on the exact (resource, action, scope) tuple."""

    def __init__(self, user_id: str, key, existing_id=None) -> None:
        super().__init__(f"User {user_id} already has an override on {key}")
        self.user_id = user_id
        self.key = key
        self.existing_id = existing_id


class NotFound(SchoolAuthzError):
    """Requested record was not found."""

    def __init__(self, entity: str, identifier: Any = None) -> None:
        message = f"{entity} not found" if identifier is None else f"{entity} {identifier} not found"
        super().__init__(message)
        self.entity = entity
        self.identifier = identifier


class AuthorizationError(SchoolAuthzError):
    """Acting user lacks the capability for the requested operation."""

    pass
