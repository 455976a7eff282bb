"""Resources that permissions apply to."""

from enum import StrEnum


class PermissionResource(StrEnum):
    """Closed catalog of school resources."""

    # Academic
    STUDENTS = "students"
    STUDENT_ENROLLMENT = "student_enrollment"
    STUDENT_TRANSFER = "student_transfer"
    STUDENT_DOCUMENTS = "student_documents"
    CLASSES = "classes"
    SUBJECTS = "subjects"
    TEACHERS_ASSIGNMENT = "teachers_assignment"
    STAFF_ASSIGNMENT = "staff_assignment"
    SCHEDULE = "schedule"
    ACADEMIC_YEAR = "academic_year"
    GRADES = "grades"
    GRADE_APPROVAL = "grade_approval"
    REPORT_CARDS = "report_cards"
    ATTENDANCE = "attendance"
    ATTENDANCE_JUSTIFICATION = "attendance_justification"
    DISCIPLINE_RECORDS = "discipline_records"
    SANCTIONS = "sanctions"
    CLUB_ENROLLMENT = "club_enrollment"
    ACADEMIC_REPORTS = "academic_reports"
    ATTENDANCE_REPORTS = "attendance_reports"

    # Financial
    FEE_STRUCTURE = "fee_structure"
    FEE_ASSIGNMENT = "fee_assignment"
    PAYMENT_RECORDING = "payment_recording"
    RECEIPTS = "receipts"
    STUDENT_BALANCE = "student_balance"
    EXPENSES = "expenses"
    SAFE_BALANCE = "safe_balance"
    SAFE_INCOME = "safe_income"
    SAFE_EXPENSE = "safe_expense"
    DAILY_VERIFICATION = "daily_verification"
    BANK_TRANSFERS = "bank_transfers"
    FINANCIAL_REPORTS = "financial_reports"
    FINANCIAL_ANALYTICS = "financial_analytics"
    SALARY_HOURS = "salary_hours"
    SALARY_PAYMENTS = "salary_payments"
    SALARY_ADVANCES = "salary_advances"
    SALARY_RATES = "salary_rates"
    SALARY_REPORTS = "salary_reports"

    # Administration
    STAFF = "staff"
    USER_ACCOUNTS = "user_accounts"
    ROLE_ASSIGNMENT = "role_assignment"
    PERMISSION_OVERRIDES = "permission_overrides"
    AUDIT_LOGS = "audit_logs"
    SCHOOL_SETTINGS = "school_settings"
    SYSTEM_SETTINGS = "system_settings"
    ANNOUNCEMENTS = "announcements"
    SMS = "sms"
    DATA_EXPORT = "data_export"
    REPORTS = "reports"
