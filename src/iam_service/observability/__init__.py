"""
iam_service.observability

Observability package.

Responsibilities:
- Structured logging setup.
- Request-scoped log context middleware.
"""

# Package marker.
