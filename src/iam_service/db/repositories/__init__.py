"""
iam_service.db.repositories

Repository package.

Responsibilities:
- Group session-bound data-access repositories for users and roles.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Repositories never commit; `db.identity_store` owns the transaction per call.
