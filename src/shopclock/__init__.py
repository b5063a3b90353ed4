"""Shop attendance and payroll package.

This package is organized by feature modules (staff, attendance, payroll, backup, accounts)
over a namespaced key-value store, with a thin Flask controller layer on top.
"""
