"""Example: compute one month's payroll without Flask or a database.

Shows that the attendance fold and the payroll engine are plain functions
over plain records.
"""

from datetime import date

from cafe_backoffice.attendance.summary import get_monthly_attendance_summary, get_working_days_in_month
from cafe_backoffice.payroll.engine import build_payroll_input, generate_payroll_breakdown


def main():
    month = date(2026, 3, 1)
    records = [
        {"date": "2026-03-02", "status": "Present", "overtime_hours": 2, "late_minutes": 10},
        {"date": "2026-03-03", "status": "half day"},
        {"date": "2026-03-04", "status": "Absent"},
        {"date": "2026-03-05", "status": "Present", "overtime_hours": 1.5},
    ]

    summary = get_monthly_attendance_summary(records, month)
    data = build_payroll_input(
        summary,
        working_days=get_working_days_in_month(month),
        base_salary=30000,
        overtime_rate=100,
        bonus=500,
    )
    print(summary)
    print(generate_payroll_breakdown(data))


if __name__ == "__main__":
    main()
