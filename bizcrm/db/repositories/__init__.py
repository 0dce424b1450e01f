"""
Per-domain repository modules for database access.

Each module exposes plain functions taking a ``Session`` first. Functions
that read owned rows take the caller's ``current_user`` dict and apply the
hierarchy visibility filter from ``bizcrm.db.visibility``.
"""
