"""
vetcare_auth.auth

Authentication/authorization package.

Responsibilities:
- Bearer token verification (PyJWT).
- Dual-source identity resolution into a typed `Principal`.
- FastAPI auth dependencies (mandatory/optional authentication, RBAC, ownership).
"""

# Package marker.
