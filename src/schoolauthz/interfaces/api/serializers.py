"""JSON representations of domain objects."""

from typing import Any

from schoolauthz.application.dto.audit_dto import PermissionAuditView
from schoolauthz.application.dto.role_permission_dto import (
    BulkApplyResult,
    BulkCopyResult,
    RolePermissionsView,
)
from schoolauthz.application.dto.user_permissions_dto import (
    PermissionCheckResult,
    UserPermissionsView,
)
from schoolauthz.domain.entities import PermissionOverride, RolePermission, StaffUser
from schoolauthz.domain.services import EffectivePermission, RolePermissionStats


def role_permission_to_dict(p: RolePermission) -> dict[str, Any]:
    return {
        "id": str(p.id),
        "role": p.role.value,
        "resource": p.resource.value,
        "action": p.action.value,
        "scope": p.scope.value,
        "source": p.source.value,
        "createdAt": p.created_at.isoformat(),
        "updatedAt": p.updated_at.isoformat(),
        "createdBy": p.created_by,
        "updatedBy": p.updated_by,
    }


def override_to_dict(o: PermissionOverride) -> dict[str, Any]:
    return {
        "id": str(o.id),
        "userId": o.user_id,
        "resource": o.resource.value,
        "action": o.action.value,
        "scope": o.scope.value,
        "granted": o.granted,
        "effect": "grant" if o.granted else "deny",
        "reason": o.reason,
        "grantedBy": o.granted_by,
        "grantedAt": o.granted_at.isoformat(),
        "expiresAt": o.expires_at.isoformat() if o.expires_at else None,
    }


def effective_to_dict(e: EffectivePermission) -> dict[str, Any]:
    item = {
        "resource": e.key.resource.value,
        "action": e.key.action.value,
        "scope": e.key.scope.value,
        "source": e.source.value,
    }
    if e.override_id:
        item["overrideId"] = str(e.override_id)
    return item


def stats_to_dict(s: RolePermissionStats) -> dict[str, Any]:
    return {
        "total": s.total,
        "seeded": s.seeded,
        "manual": s.manual,
        "byResource": s.by_resource,
    }


def user_to_dict(u: StaffUser) -> dict[str, Any]:
    return {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "staffRole": u.staff_role.value if u.staff_role else None,
    }


def role_view_to_dict(view: RolePermissionsView) -> dict[str, Any]:
    return {
        "role": view.role.value,
        "permissions": [role_permission_to_dict(p) for p in view.permissions],
        "stats": stats_to_dict(view.stats),
        "affectedUsers": view.affected_users,
    }


def bulk_copy_to_dict(result: BulkCopyResult) -> dict[str, Any]:
    return {
        "sourceRole": result.source_role.value,
        "targetRole": result.target_role.value,
        "summary": result.summary,
        "details": {
            "added": [role_permission_to_dict(p) for p in result.added],
            "skipped": result.skipped,
            "errors": result.errors,
        },
    }


def bulk_apply_to_dict(result: BulkApplyResult) -> dict[str, Any]:
    return {
        "role": result.role.value,
        "summary": result.summary,
        "details": {
            "added": [role_permission_to_dict(p) for p in result.added],
            "removed": [str(pid) for pid in result.removed],
            "skipped": result.skipped,
            "errors": result.errors,
        },
    }


def user_view_to_dict(view: UserPermissionsView) -> dict[str, Any]:
    return {
        "user": user_to_dict(view.user),
        "rolePermissions": [role_permission_to_dict(p) for p in view.role_permissions],
        "overrides": [override_to_dict(o) for o in view.overrides],
        "effectivePermissions": [effective_to_dict(e) for e in view.effective.sorted()],
    }


def check_result_to_dict(r: PermissionCheckResult) -> dict[str, Any]:
    item: dict[str, Any] = {
        "resource": r.resource,
        "action": r.action,
        "scope": r.scope,
        "granted": r.granted,
    }
    if r.source:
        item["source"] = r.source.value
    if r.reason:
        item["reason"] = r.reason
    return item


def audit_to_dict(view: PermissionAuditView) -> dict[str, Any]:
    return {
        "roles": [
            {
                "role": entry.role.value,
                "stats": stats_to_dict(entry.stats),
                "affectedUsers": entry.affected_users,
            }
            for entry in view.roles
        ],
        "overrides": {
            "grants": view.total_grants,
            "denials": view.total_denials,
            "byUser": {
                user_id: {"grants": s.grants, "denials": s.denials}
                for user_id, s in view.overrides_by_user.items()
            },
        },
    }
