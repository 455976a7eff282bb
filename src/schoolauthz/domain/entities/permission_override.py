"""Permission override entity - per-user grant or deny exception."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionKey,
    PermissionResource,
    PermissionScope,
)


@dataclass(frozen=True)
class PermissionOverride:
    """PermissionOverride - immutable; a change is a delete followed by a fresh create."""

    id: UUID
    user_id: str
    resource: PermissionResource
    action: PermissionAction
    scope: PermissionScope
    granted: bool
    reason: str
    granted_by: str | None
    granted_at: datetime
    expires_at: datetime | None = None

    @property
    def key(self) -> PermissionKey:
        return PermissionKey(resource=self.resource, action=self.action, scope=self.scope)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now
