"""
iam_service.api

API package for the identity service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and request/response models.
- Mapping of domain error kinds to HTTP responses.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + token extraction +
# delegation to services.
