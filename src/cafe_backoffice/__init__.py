"""Cafe back-office package.

Organized by feature modules (attendance, payroll, security, audit, users)
with a thin Flask controller layer over service/repository layers.
"""
