"""
iam_service.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, repositories and the SQL-backed
  Identity Store.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services only see `identity.store.IdentityStore`; this package can be swapped
# for another adapter without touching them.
