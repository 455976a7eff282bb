"""Default role baseline used when seeding an empty store.

Academic roles get no financial resources and financial roles get no academic
ones; only the transversal roles cross both branches.
"""

from itertools import product

from schoolauthz.domain.value_objects import (
    PermissionAction as A,
    PermissionKey,
    PermissionResource as R,
    PermissionScope as S,
    StaffRole,
)


def _keys(resource: R, actions: tuple[A, ...], scope: S = S.ALL) -> list[PermissionKey]:
    return [PermissionKey(resource=resource, action=a, scope=scope) for a in actions]


STUDENT_VIEW = [
    *_keys(R.STUDENTS, (A.VIEW,)),
    *_keys(R.STUDENT_ENROLLMENT, (A.VIEW,)),
]

STUDENT_MANAGE = [
    *STUDENT_VIEW,
    *_keys(R.STUDENTS, (A.UPDATE,)),
    *_keys(R.STUDENT_ENROLLMENT, (A.CREATE, A.UPDATE, A.DELETE, A.APPROVE, A.EXPORT)),
]

GRADE_MANAGE = [
    *_keys(R.GRADES, (A.VIEW, A.CREATE, A.UPDATE, A.DELETE)),
    *_keys(R.REPORT_CARDS, (A.EXPORT,)),
]

ATTENDANCE_MANAGE = _keys(R.ATTENDANCE, (A.VIEW, A.CREATE, A.UPDATE))

ACADEMIC_SETUP = [
    *_keys(R.ACADEMIC_YEAR, (A.CREATE, A.UPDATE, A.DELETE)),
    *_keys(R.CLASSES, (A.VIEW, A.UPDATE)),
    *_keys(R.TEACHERS_ASSIGNMENT, (A.CREATE, A.DELETE)),
    *_keys(R.SCHEDULE, (A.VIEW, A.CREATE)),
    *_keys(R.STAFF_ASSIGNMENT, (A.UPDATE,)),
    *_keys(R.CLUB_ENROLLMENT, (A.CREATE,)),
]

ACADEMIC_REPORTS = [
    *_keys(R.ACADEMIC_REPORTS, (A.VIEW,)),
    *_keys(R.ATTENDANCE_REPORTS, (A.VIEW,)),
]

SALARY_HOURS_SUBMIT = _keys(R.SALARY_HOURS, (A.VIEW, A.CREATE, A.UPDATE))

FINANCIAL_CASH = [
    *_keys(R.PAYMENT_RECORDING, (A.CREATE,)),
    *_keys(R.SAFE_EXPENSE, (A.CREATE,)),
    *_keys(R.RECEIPTS, (A.EXPORT,)),
    *_keys(R.SAFE_BALANCE, (A.CREATE, A.UPDATE)),
    *_keys(R.DAILY_VERIFICATION, (A.CREATE,)),
    *_keys(R.EXPENSES, (A.VIEW, A.CREATE, A.APPROVE)),
]

FINANCIAL_REPORTS = _keys(R.FINANCIAL_REPORTS, (A.VIEW,))

FINANCIAL_SALARY = [
    *_keys(R.SALARY_HOURS, (A.VIEW, A.APPROVE)),
    *_keys(R.SALARY_PAYMENTS, (A.VIEW, A.CREATE, A.UPDATE, A.APPROVE)),
    *_keys(R.SALARY_ADVANCES, (A.VIEW, A.CREATE, A.UPDATE)),
    *_keys(R.SALARY_RATES, (A.VIEW,)),
    *_keys(R.SALARY_REPORTS, (A.VIEW,)),
]

SALARY_RATES_ADMIN = _keys(R.SALARY_RATES, (A.VIEW, A.CREATE, A.UPDATE, A.DELETE))

TEACHER_OWN_CLASSES = [
    *_keys(R.STUDENTS, (A.VIEW,), S.OWN_CLASSES),
    *_keys(R.STUDENT_ENROLLMENT, (A.VIEW,), S.OWN_CLASSES),
    *_keys(R.GRADES, (A.VIEW, A.CREATE, A.UPDATE, A.DELETE), S.OWN_CLASSES),
    *_keys(R.ATTENDANCE, (A.VIEW, A.CREATE, A.UPDATE), S.OWN_CLASSES),
    *_keys(R.SCHEDULE, (A.VIEW,), S.OWN_CLASSES),
]

# Roles that hold every (resource, action) with scope "all" and always keep
# the capability to administer permissions.
TRANSVERSAL_ROLES = frozenset({StaffRole.PROPRIETAIRE, StaffRole.ADMIN_SYSTEME})


def _all_keys() -> list[PermissionKey]:
    return [PermissionKey(resource=r, action=a, scope=S.ALL) for r, a in product(R, A)]


DEFAULT_ROLE_PERMISSIONS: dict[StaffRole, list[PermissionKey]] = {
    StaffRole.PROPRIETAIRE: _all_keys(),
    StaffRole.ADMIN_SYSTEME: _all_keys(),
    StaffRole.PROVISEUR: [
        *STUDENT_MANAGE,
        *GRADE_MANAGE,
        *ATTENDANCE_MANAGE,
        *ACADEMIC_SETUP,
        *ACADEMIC_REPORTS,
        *SALARY_HOURS_SUBMIT,
    ],
    StaffRole.CENSEUR: [
        *STUDENT_VIEW,
        *GRADE_MANAGE,
        *SALARY_HOURS_SUBMIT,
        *_keys(R.SCHEDULE, (A.VIEW, A.CREATE)),
        *_keys(R.TEACHERS_ASSIGNMENT, (A.CREATE, A.DELETE)),
        *_keys(R.ATTENDANCE, (A.VIEW,)),
        *_keys(R.ACADEMIC_REPORTS, (A.VIEW,)),
    ],
    StaffRole.SURVEILLANT_GENERAL: [
        *STUDENT_VIEW,
        *ATTENDANCE_MANAGE,
        *_keys(R.ATTENDANCE_REPORTS, (A.VIEW,)),
    ],
    StaffRole.DIRECTEUR: [
        *STUDENT_MANAGE,
        *GRADE_MANAGE,
        *ATTENDANCE_MANAGE,
        *ACADEMIC_SETUP,
        *ACADEMIC_REPORTS,
        *SALARY_HOURS_SUBMIT,
    ],
    StaffRole.SECRETARIAT: [
        *STUDENT_VIEW,
        *_keys(R.STUDENT_ENROLLMENT, (A.CREATE, A.UPDATE, A.EXPORT)),
    ],
    StaffRole.PROFESSEUR_PRINCIPAL: [
        *TEACHER_OWN_CLASSES,
        *_keys(R.REPORT_CARDS, (A.EXPORT,), S.OWN_CLASSES),
    ],
    StaffRole.ENSEIGNANT: list(TEACHER_OWN_CLASSES),
    StaffRole.COORDINATEUR: [
        *FINANCIAL_CASH,
        *FINANCIAL_REPORTS,
        *FINANCIAL_SALARY,
        *SALARY_RATES_ADMIN,
        *_keys(R.BANK_TRANSFERS, (A.VIEW, A.CREATE)),
        *_keys(R.AUDIT_LOGS, (A.VIEW,)),
        *_keys(R.STUDENT_BALANCE, (A.VIEW,)),
    ],
    StaffRole.COMPTABLE: [
        *FINANCIAL_CASH,
        *FINANCIAL_REPORTS,
        *FINANCIAL_SALARY,
        *_keys(R.STUDENT_BALANCE, (A.VIEW,)),
    ],
    StaffRole.AGENT_RECOUVREMENT: [
        *_keys(R.STUDENT_BALANCE, (A.VIEW,)),
        *_keys(R.RECEIPTS, (A.VIEW,)),
    ],
    StaffRole.GARDIEN: [],
}


def default_permissions_for(role: StaffRole) -> list[PermissionKey]:
    """Default keys for a role, de-duplicated in declaration order."""
    return list(dict.fromkeys(DEFAULT_ROLE_PERMISSIONS.get(role, [])))
