"""Security utilities.

Re-exports token helpers for convenience.
"""

from src.atogato.core.security.crypto import create_access_token, decode_token

__all__ = [
    "create_access_token",
    "decode_token",
]
