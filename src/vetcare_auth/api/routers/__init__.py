"""
vetcare_auth.api.routers

HTTP routers (health checks and identity endpoints).
"""
