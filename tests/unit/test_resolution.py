"""Unit tests for the resolution engine."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from schoolauthz.domain.entities import PermissionOverride, RolePermission
from schoolauthz.domain.services import (
    EffectiveSource,
    compute_effective,
    has_permission,
)
from schoolauthz.domain.value_objects import (
    PermissionAction as A,
    PermissionKey,
    PermissionResource as R,
    PermissionScope as S,
    PermissionSource,
    StaffRole,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _rp(resource, action, scope=S.ALL, role=StaffRole.COMPTABLE) -> RolePermission:
    return RolePermission(
        id=uuid4(),
        role=role,
        resource=resource,
        action=action,
        scope=scope,
        source=PermissionSource.SEEDED,
        created_at=NOW,
        updated_at=NOW,
    )


def _ov(resource, action, scope=S.ALL, granted=True, expires_at=None) -> PermissionOverride:
    return PermissionOverride(
        id=uuid4(),
        user_id="u-1",
        resource=resource,
        action=action,
        scope=scope,
        granted=granted,
        reason="test",
        granted_by="admin-1",
        granted_at=NOW,
        expires_at=expires_at,
    )


def test_role_only() -> None:
    effective = compute_effective([_rp(R.EXPENSES, A.VIEW)], [])
    assert len(effective) == 1
    entry = effective.get(PermissionKey(R.EXPENSES, A.VIEW, S.ALL))
    assert entry.source == EffectiveSource.ROLE


def test_grant_adds_tuple_with_granted_source() -> None:
    effective = compute_effective([], [_ov(R.SALARY_REPORTS, A.VIEW)])
    assert has_permission(effective, R.SALARY_REPORTS, A.VIEW, S.ALL)
    assert effective.get(PermissionKey(R.SALARY_REPORTS, A.VIEW, S.ALL)).source == (
        EffectiveSource.GRANTED
    )


def test_deny_removes_role_tuple() -> None:
    effective = compute_effective(
        [_rp(R.EXPENSES, A.VIEW), _rp(R.EXPENSES, A.CREATE)],
        [_ov(R.EXPENSES, A.VIEW, granted=False)],
    )
    assert not has_permission(effective, R.EXPENSES, A.VIEW, S.ALL)
    assert has_permission(effective, R.EXPENSES, A.CREATE, S.ALL)


def test_deny_wins_regardless_of_order() -> None:
    grant = _ov(R.GRADES, A.UPDATE)
    deny = _ov(R.GRADES, A.UPDATE, granted=False)
    assert not compute_effective([], [grant, deny]).allows(R.GRADES, A.UPDATE, S.ALL)
    assert not compute_effective([], [deny, grant]).allows(R.GRADES, A.UPDATE, S.ALL)


def test_deny_on_narrower_scope_keeps_broad_grant() -> None:
    effective = compute_effective(
        [_rp(R.STUDENTS, A.VIEW)],
        [_ov(R.STUDENTS, A.VIEW, S.OWN_CLASSES, granted=False)],
    )
    assert effective.allows(R.STUDENTS, A.VIEW, S.OWN_CLASSES)


def test_scope_dominance() -> None:
    effective = compute_effective([_rp(R.STUDENTS, A.VIEW)], [])
    for scope in (S.ALL, S.OWN_LEVEL, S.OWN_CLASSES, S.OWN_CHILDREN, S.OWN):
        assert effective.allows(R.STUDENTS, A.VIEW, scope)


def test_narrow_scope_does_not_satisfy_all() -> None:
    effective = compute_effective([_rp(R.GRADES, A.VIEW, S.OWN_CLASSES)], [])
    assert effective.allows(R.GRADES, A.VIEW, S.OWN_CLASSES)
    assert not effective.allows(R.GRADES, A.VIEW, S.ALL)
    assert not effective.allows(R.GRADES, A.VIEW, S.OWN_LEVEL)


def test_scope_none_never_satisfies() -> None:
    effective = compute_effective([_rp(R.GRADES, A.VIEW, S.NONE)], [])
    assert not effective.allows(R.GRADES, A.VIEW, S.NONE)
    assert not effective.allows(R.GRADES, A.VIEW, S.ALL)


def test_vestigial_deny_is_inert() -> None:
    """A deny on a tuple neither the role nor a grant provides changes nothing."""
    effective = compute_effective(
        [_rp(R.EXPENSES, A.CREATE)],
        [_ov(R.EXPENSES, A.APPROVE, granted=False)],
    )
    assert effective.keys() == {PermissionKey(R.EXPENSES, A.CREATE, S.ALL)}


def test_expired_overrides_are_ignored() -> None:
    expired_deny = _ov(R.EXPENSES, A.VIEW, granted=False, expires_at=NOW - timedelta(hours=1))
    live_grant = _ov(R.SALARY_REPORTS, A.VIEW, expires_at=NOW + timedelta(days=1))
    expired_grant = _ov(R.BANK_TRANSFERS, A.CREATE, expires_at=NOW)
    effective = compute_effective(
        [_rp(R.EXPENSES, A.VIEW)], [expired_deny, live_grant, expired_grant], now=NOW
    )
    assert effective.allows(R.EXPENSES, A.VIEW, S.ALL)
    assert effective.allows(R.SALARY_REPORTS, A.VIEW, S.ALL)
    assert not effective.allows(R.BANK_TRANSFERS, A.CREATE, S.ALL)


def test_sorted_is_deterministic() -> None:
    effective = compute_effective(
        [_rp(R.SALARY_REPORTS, A.VIEW), _rp(R.EXPENSES, A.VIEW), _rp(R.EXPENSES, A.APPROVE)],
        [],
    )
    assert [str(e.key) for e in effective.sorted()] == [
        str(e.key) for e in sorted(effective, key=lambda e: e.key)
    ]
