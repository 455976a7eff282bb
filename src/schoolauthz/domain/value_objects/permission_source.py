"""Provenance of a role permission."""

from enum import StrEnum


class PermissionSource(StrEnum):
    """Whether a role permission came from initial seeding or an administrator."""

    SEEDED = "seeded"
    MANUAL = "manual"
