"""
iam_service.identity

Identity domain package.

Responsibilities:
- Define the identity/role value types shared by services and adapters.
- Define the Identity Store contract the core depends on.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here imports SQLAlchemy or FastAPI; adapters depend on this package, not the reverse.
