"""Attendance check-in service.

Feature modules (attendance, reports) sit behind a thin Flask controller layer.
Writes go to Firestore with an in-memory fallback store that mirrors them.
"""
