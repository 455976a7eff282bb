"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from schoolauthz.application.ports.repositories.override_repository import (
    PermissionOverrideRepository,
)
from schoolauthz.application.ports.repositories.role_permission_repository import (
    RolePermissionRepository,
)
from schoolauthz.application.ports.repositories.staff_user_repository import (
    StaffUserRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def role_permissions(self) -> RolePermissionRepository: ...

    @property
    def overrides(self) -> PermissionOverrideRepository: ...

    @property
    def staff_users(self) -> StaffUserRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
