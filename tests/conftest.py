"""Pytest fixtures for schoolauthz tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from schoolauthz.domain.entities import PermissionOverride, RolePermission, StaffUser
from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionKey,
    PermissionResource,
    PermissionScope,
    PermissionSource,
    StaffRole,
)


# --- Fake repositories ---


class FakeRolePermissionRepository:
    """In-memory role permission store enforcing tuple uniqueness per role."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, RolePermission] = {}
        # Rows the real store could hold but the catalog no longer accepts.
        self._raw_rows: list[tuple[StaffRole, str, str, str]] = []

    def _find(self, role: StaffRole, key: PermissionKey, exclude: UUID | None = None):
        for p in self._by_id.values():
            if p.role == role and p.key == key and p.id != exclude:
                return p
        return None

    async def get_by_id(self, permission_id: UUID) -> RolePermission | None:
        return self._by_id.get(permission_id)

    async def find(self, role: StaffRole, key: PermissionKey) -> RolePermission | None:
        return self._find(role, key)

    async def list_by_role(self, role: StaffRole) -> list[RolePermission]:
        items = [p for p in self._by_id.values() if p.role == role]
        return sorted(items, key=lambda p: (p.resource.value, p.action.value, p.scope.value))

    async def list_keys_by_role(self, role: StaffRole) -> list[tuple[str, str, str]]:
        keys = [
            (p.resource.value, p.action.value, p.scope.value)
            for p in self._by_id.values()
            if p.role == role
        ]
        keys += [(r, a, s) for row_role, r, a, s in self._raw_rows if row_role == role]
        return sorted(keys)

    async def list_all(self) -> list[RolePermission]:
        return sorted(
            self._by_id.values(),
            key=lambda p: (p.role.value, p.resource.value, p.action.value, p.scope.value),
        )

    async def create_if_absent(self, permission: RolePermission) -> RolePermission | None:
        if self._find(permission.role, permission.key):
            return None
        self._by_id[permission.id] = permission
        return permission

    async def update(self, permission: RolePermission) -> bool:
        if self._find(permission.role, permission.key, exclude=permission.id):
            return False
        self._by_id[permission.id] = permission
        return True

    async def delete(self, permission_id: UUID) -> bool:
        return self._by_id.pop(permission_id, None) is not None

    def add_raw(self, role: StaffRole, resource: str, action: str, scope: str) -> None:
        """Store a tuple without catalog validation (legacy data)."""
        self._raw_rows.append((role, resource, action, scope))

    def add(
        self,
        role: StaffRole,
        resource: PermissionResource,
        action: PermissionAction,
        scope: PermissionScope = PermissionScope.ALL,
        source: PermissionSource = PermissionSource.MANUAL,
    ) -> RolePermission:
        """Insert directly, bypassing use cases (test setup helper)."""
        now = datetime.now(UTC)
        p = RolePermission(
            id=uuid4(),
            role=role,
            resource=resource,
            action=action,
            scope=scope,
            source=source,
            created_at=now,
            updated_at=now,
        )
        self._by_id[p.id] = p
        return p


class FakePermissionOverrideRepository:
    """In-memory override store, unique on (user, resource, action, scope)."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, PermissionOverride] = {}

    async def get_by_id(self, override_id: UUID) -> PermissionOverride | None:
        return self._by_id.get(override_id)

    async def find(self, user_id: str, key: PermissionKey) -> PermissionOverride | None:
        for ov in self._by_id.values():
            if ov.user_id == user_id and ov.key == key:
                return ov
        return None

    async def list_by_user(self, user_id: str) -> list[PermissionOverride]:
        return [ov for ov in self._by_id.values() if ov.user_id == user_id]

    async def list_all(self) -> list[PermissionOverride]:
        return list(self._by_id.values())

    async def create_if_absent(self, override: PermissionOverride) -> PermissionOverride | None:
        if await self.find(override.user_id, override.key):
            return None
        self._by_id[override.id] = override
        return override

    async def delete(self, override_id: UUID) -> bool:
        return self._by_id.pop(override_id, None) is not None

    def add(
        self,
        user_id: str,
        resource: PermissionResource,
        action: PermissionAction,
        scope: PermissionScope = PermissionScope.ALL,
        granted: bool = True,
        expires_at: datetime | None = None,
    ) -> PermissionOverride:
        ov = PermissionOverride(
            id=uuid4(),
            user_id=user_id,
            resource=resource,
            action=action,
            scope=scope,
            granted=granted,
            reason="test",
            granted_by="admin-1",
            granted_at=datetime.now(UTC),
            expires_at=expires_at,
        )
        self._by_id[ov.id] = ov
        return ov


class FakeStaffUserRepository:
    """In-memory staff directory."""

    def __init__(self) -> None:
        self._by_id: dict[str, StaffUser] = {}

    async def get_by_id(self, user_id: str) -> StaffUser | None:
        return self._by_id.get(user_id)

    async def count_by_role(self, role: StaffRole) -> int:
        return sum(1 for u in self._by_id.values() if u.staff_role == role)

    async def count_all_by_role(self) -> dict[StaffRole, int]:
        counts: dict[StaffRole, int] = {}
        for u in self._by_id.values():
            if u.staff_role is not None:
                counts[u.staff_role] = counts.get(u.staff_role, 0) + 1
        return counts

    def add_user(self, user_id: str, role: StaffRole | None, name: str | None = None) -> StaffUser:
        user = StaffUser(id=user_id, staff_role=role, name=name)
        self._by_id[user_id] = user
        return user

    def set_role(self, user_id: str, role: StaffRole | None) -> None:
        self._by_id[user_id] = replace(self._by_id[user_id], staff_role=role)


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.role_permissions = FakeRolePermissionRepository()
        self.overrides = FakePermissionOverrideRepository()
        self.staff_users = FakeStaffUserRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory whose every call yields the same UoW, so state survives across calls."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork with an administrator on record."""
    uow = FakeUnitOfWork()
    uow.staff_users.add_user("admin-1", StaffRole.ADMIN_SYSTEME, name="Admin")
    return uow


@pytest.fixture
def uow_factory(fake_uow):
    """Factory returning async context manager with the shared FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - allows everything by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.check.return_value = True
    mock.check_admin.return_value = True
    return mock
