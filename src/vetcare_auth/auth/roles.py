"""
vetcare_auth.auth.roles

Role vocabulary and per-tier default roles.

All role-defaulting policy lives here so it can be audited in one place.
"""

from __future__ import annotations

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLE_OWNER = "propietario"

# Platform users whose record and token both lack a role.
PRIMARY_DEFAULT_ROLE = ROLE_USER
# Owner accounts have no stored role column; the tier assigns one.
SECONDARY_DEFAULT_ROLE = ROLE_OWNER
