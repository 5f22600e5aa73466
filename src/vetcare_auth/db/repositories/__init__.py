"""
vetcare_auth.db.repositories

Repository package.

Responsibilities:
- Group data-access repositories for the identity stores.
"""

# Package marker; repositories are imported directly from submodules.
