"""
vetcare_auth.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide the read-only ORM mapping of the two identity tables.
- Provide engine/session setup and the identity repositories.
"""

# Package marker.
