"""HR attendance & leave backend.

This package is organized by feature modules (admins, employees, auth,
attendance, leaves) with a thin Flask controller layer on top of service and
repository layers.
"""
