"""
vetcare_auth.api

FastAPI application layer.

Responsibilities:
- App factory, dependency wiring, error envelope, and routers.
"""

# Package marker.
