"""Staff user entity - the subject of authorization checks."""

from dataclasses import dataclass

from schoolauthz.domain.value_objects import StaffRole


@dataclass
class StaffUser:
    """Staff user with an optional staff role."""

    id: str
    staff_role: StaffRole | None
    name: str | None = None
    email: str | None = None
