"""
iam_service.api.routers

Router modules: auth, users, roles, health.
"""

# Package marker.
