"""Unit tests for the effective permission cache and the permission checker."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from schoolauthz.application.dto.user_permissions_dto import OverrideCreateInput
from schoolauthz.application.use_cases.override.add_permission_override import (
    AddPermissionOverrideUseCase,
)
from schoolauthz.application.use_cases.role_permission.remove_role_permission import (
    RemoveRolePermissionUseCase,
)
from schoolauthz.domain.entities import StaffUser
from schoolauthz.domain.services import EffectivePermissionSet
from schoolauthz.domain.value_objects import (
    PermissionAction as A,
    PermissionResource as R,
    PermissionScope as S,
    StaffRole,
)
from schoolauthz.infrastructure.cache.effective_cache import EffectivePermissionCache
from schoolauthz.infrastructure.permission.permission_checker import SchoolPermissionChecker

from tests.conftest import FakeUnitOfWork, make_uow_factory


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


# --- EffectivePermissionCache ---


def test_cache_entry_expires_after_ttl() -> None:
    clock = FakeClock()
    cache = EffectivePermissionCache(ttl_seconds=10, clock=clock)
    cache.put(StaffUser("u-1", StaffRole.COMPTABLE), EffectivePermissionSet())
    assert cache.get("u-1") is not None
    clock.now += 10
    assert cache.get("u-1") is None
    assert len(cache) == 0


def test_cache_max_age_shortens_ttl() -> None:
    clock = FakeClock()
    cache = EffectivePermissionCache(ttl_seconds=60, clock=clock)
    cache.put(StaffUser("u-1", StaffRole.COMPTABLE), EffectivePermissionSet(), max_age=5)
    clock.now += 6
    assert cache.get("u-1") is None


def test_invalidate_role_drops_every_holder() -> None:
    cache = EffectivePermissionCache(ttl_seconds=60)
    cache.put(StaffUser("u-1", StaffRole.COMPTABLE), EffectivePermissionSet())
    cache.put(StaffUser("u-2", StaffRole.COMPTABLE), EffectivePermissionSet())
    cache.put(StaffUser("u-3", StaffRole.ENSEIGNANT), EffectivePermissionSet())

    cache.invalidate_role(StaffRole.COMPTABLE)

    assert cache.get("u-1") is None
    assert cache.get("u-2") is None
    assert cache.get("u-3") is not None


def test_invalidate_user_only_drops_that_user() -> None:
    cache = EffectivePermissionCache(ttl_seconds=60)
    cache.put(StaffUser("u-1", StaffRole.COMPTABLE), EffectivePermissionSet())
    cache.put(StaffUser("u-2", StaffRole.COMPTABLE), EffectivePermissionSet())
    cache.invalidate_user("u-1")
    assert cache.get("u-1") is None
    assert cache.get("u-2") is not None


def test_zero_ttl_disables_cache() -> None:
    cache = EffectivePermissionCache(ttl_seconds=0)
    cache.put(StaffUser("u-1", StaffRole.COMPTABLE), EffectivePermissionSet())
    assert not cache.enabled
    assert cache.get("u-1") is None


def test_put_after_user_invalidation_is_discarded() -> None:
    cache = EffectivePermissionCache(ttl_seconds=60)
    user = StaffUser("u-1", StaffRole.COMPTABLE)
    version = cache.snapshot("u-1")
    cache.invalidate_user("u-1")
    cache.put(user, EffectivePermissionSet(), version=version)
    assert cache.get("u-1") is None

    cache.put(user, EffectivePermissionSet(), version=cache.snapshot("u-1"))
    assert cache.get("u-1") is not None


def test_put_after_role_invalidation_is_discarded() -> None:
    cache = EffectivePermissionCache(ttl_seconds=60)
    version = cache.snapshot("u-1")
    cache.invalidate_role(StaffRole.COMPTABLE)
    cache.put(StaffUser("u-1", StaffRole.COMPTABLE), EffectivePermissionSet(), version=version)
    assert cache.get("u-1") is None

    # Other roles are unaffected.
    cache.put(StaffUser("u-2", StaffRole.ENSEIGNANT), EffectivePermissionSet(), version=version)
    assert cache.get("u-2") is not None


# --- SchoolPermissionChecker ---


@pytest.fixture
def store() -> FakeUnitOfWork:
    uow = FakeUnitOfWork()
    uow.staff_users.add_user("compta-1", StaffRole.COMPTABLE)
    uow.staff_users.add_user("prof-1", StaffRole.ENSEIGNANT)
    uow.staff_users.add_user("owner-1", StaffRole.PROPRIETAIRE)
    uow.staff_users.add_user("nobody-1", None)
    uow.role_permissions.add(StaffRole.COMPTABLE, R.EXPENSES, A.VIEW)
    uow.role_permissions.add(StaffRole.ENSEIGNANT, R.GRADES, A.UPDATE, S.OWN_CLASSES)
    return uow


@pytest.mark.asyncio
async def test_check_uses_role_baseline(store) -> None:
    checker = SchoolPermissionChecker(make_uow_factory(store))
    assert await checker.check("compta-1", R.EXPENSES, A.VIEW)
    assert not await checker.check("compta-1", R.EXPENSES, A.APPROVE)
    assert await checker.check("prof-1", R.GRADES, A.UPDATE, S.OWN_CLASSES)
    assert not await checker.check("prof-1", R.GRADES, A.UPDATE)


@pytest.mark.asyncio
async def test_unknown_user_and_roleless_user(store) -> None:
    checker = SchoolPermissionChecker(make_uow_factory(store))
    assert not await checker.check("ghost", R.EXPENSES, A.VIEW)
    assert await checker.effective_for("ghost") is None
    effective = await checker.effective_for("nobody-1")
    assert effective is not None and len(effective) == 0


@pytest.mark.asyncio
async def test_roleless_user_gains_grants(store) -> None:
    store.overrides.add("nobody-1", R.SALARY_REPORTS, A.VIEW)
    checker = SchoolPermissionChecker(make_uow_factory(store))
    assert await checker.check("nobody-1", R.SALARY_REPORTS, A.VIEW)


@pytest.mark.asyncio
async def test_check_admin_bootstrap_role_cannot_be_locked_out(store) -> None:
    store.overrides.add("owner-1", R.ROLE_ASSIGNMENT, A.UPDATE, granted=False)
    checker = SchoolPermissionChecker(make_uow_factory(store))
    assert await checker.check_admin("owner-1", R.ROLE_ASSIGNMENT, A.UPDATE)
    assert not await checker.check("owner-1", R.ROLE_ASSIGNMENT, A.UPDATE)


@pytest.mark.asyncio
async def test_check_admin_for_regular_role(store) -> None:
    checker = SchoolPermissionChecker(make_uow_factory(store))
    assert not await checker.check_admin("compta-1", R.ROLE_ASSIGNMENT, A.UPDATE)
    store.overrides.add("compta-1", R.ROLE_ASSIGNMENT, A.UPDATE)
    assert await checker.check_admin("compta-1", R.ROLE_ASSIGNMENT, A.UPDATE)
    assert not await checker.check_admin("ghost", R.ROLE_ASSIGNMENT, A.UPDATE)


@pytest.mark.asyncio
async def test_cached_set_is_reused_until_invalidated(store) -> None:
    cache = EffectivePermissionCache(ttl_seconds=60)
    checker = SchoolPermissionChecker(make_uow_factory(store), cache=cache)
    assert await checker.check("compta-1", R.EXPENSES, A.VIEW)

    store.overrides.add("compta-1", R.EXPENSES, A.VIEW, granted=False)
    assert await checker.check("compta-1", R.EXPENSES, A.VIEW)

    cache.invalidate_user("compta-1")
    assert not await checker.check("compta-1", R.EXPENSES, A.VIEW)


@pytest.mark.asyncio
async def test_cache_not_kept_past_override_expiry(store) -> None:
    clock = FakeClock()
    cache = EffectivePermissionCache(ttl_seconds=3600, clock=clock)
    store.overrides.add(
        "compta-1",
        R.SALARY_REPORTS,
        A.VIEW,
        expires_at=datetime.now(UTC) + timedelta(seconds=30),
    )
    checker = SchoolPermissionChecker(make_uow_factory(store), cache=cache)
    assert await checker.check("compta-1", R.SALARY_REPORTS, A.VIEW)
    clock.now += 31
    assert cache.get("compta-1") is None


def _gate(repo, method: str) -> tuple[asyncio.Event, asyncio.Event]:
    """Make repo.<method> load its result, then wait until released."""
    entered, release = asyncio.Event(), asyncio.Event()
    original = getattr(repo, method)

    async def gated(*args):
        result = await original(*args)
        setattr(repo, method, original)
        entered.set()
        await release.wait()
        return result

    setattr(repo, method, gated)
    return entered, release


@pytest.mark.asyncio
async def test_override_committed_during_load_is_not_masked_by_cache(store) -> None:
    cache = EffectivePermissionCache(ttl_seconds=60)
    factory = make_uow_factory(store)
    checker = SchoolPermissionChecker(factory, cache=cache)
    entered, release = _gate(store.overrides, "list_by_user")

    reader = asyncio.create_task(checker.check("compta-1", R.EXPENSES, A.VIEW))
    await entered.wait()
    await AddPermissionOverrideUseCase(factory, checker, cache).execute(
        "owner-1",
        OverrideCreateInput(
            user_id="compta-1",
            resource="expenses",
            action="view",
            scope="all",
            effect="deny",
            reason="Audit freeze",
        ),
    )
    release.set()

    assert await reader
    assert cache.get("compta-1") is None
    assert not await checker.check("compta-1", R.EXPENSES, A.VIEW)


@pytest.mark.asyncio
async def test_role_change_during_load_is_not_masked_by_cache(store) -> None:
    cache = EffectivePermissionCache(ttl_seconds=60)
    factory = make_uow_factory(store)
    checker = SchoolPermissionChecker(factory, cache=cache)
    (baseline,) = await store.role_permissions.list_by_role(StaffRole.COMPTABLE)
    entered, release = _gate(store.role_permissions, "list_by_role")

    reader = asyncio.create_task(checker.check("compta-1", R.EXPENSES, A.VIEW))
    await entered.wait()
    await RemoveRolePermissionUseCase(factory, checker, cache).execute("owner-1", baseline.id)
    release.set()

    assert await reader
    assert not await checker.check("compta-1", R.EXPENSES, A.VIEW)
