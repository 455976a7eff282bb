"""Permission catalog - membership tests and parsing against the closed enums."""

from enum import StrEnum
from typing import Any, TypeVar

from schoolauthz.domain.exceptions import ValidationError
from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionKey,
    PermissionResource,
    PermissionScope,
    StaffRole,
)

E = TypeVar("E", bound=StrEnum)


def _is_member(enum_cls: type[StrEnum], value: Any) -> bool:
    if isinstance(value, enum_cls):
        return True
    if not isinstance(value, str):
        return False
    return value in enum_cls._value2member_map_


def is_valid_role(value: Any) -> bool:
    return _is_member(StaffRole, value)


def is_valid_resource(value: Any) -> bool:
    return _is_member(PermissionResource, value)


def is_valid_action(value: Any) -> bool:
    return _is_member(PermissionAction, value)


def is_valid_scope(value: Any) -> bool:
    return _is_member(PermissionScope, value)


def _parse(enum_cls: type[E], field: str, value: Any) -> E:
    if not _is_member(enum_cls, value):
        raise ValidationError(f"Invalid {field}: {value!r}", field=field, value=value)
    return enum_cls(value)


def parse_role(value: Any) -> StaffRole:
    return _parse(StaffRole, "role", value)


def parse_resource(value: Any) -> PermissionResource:
    return _parse(PermissionResource, "resource", value)


def parse_action(value: Any) -> PermissionAction:
    return _parse(PermissionAction, "action", value)


def parse_scope(value: Any) -> PermissionScope:
    return _parse(PermissionScope, "scope", value)


def validate_key(resource: Any, action: Any, scope: Any) -> PermissionKey:
    """Validate all three tuple fields; fail on the first one outside the catalog."""
    return PermissionKey(
        resource=parse_resource(resource),
        action=parse_action(action),
        scope=parse_scope(scope),
    )
