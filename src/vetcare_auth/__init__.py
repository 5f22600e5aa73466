"""
vetcare_auth

Request authentication and authorization for the VetCare clinic API.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
