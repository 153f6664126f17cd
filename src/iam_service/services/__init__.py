"""
iam_service.services

Service-layer package.

Responsibilities:
- Auth flow (credential verification -> identity lookup -> token issuance).
- Role-gated user and role administration.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend on the IdentityStore protocol and are tested with AsyncMock stores.
