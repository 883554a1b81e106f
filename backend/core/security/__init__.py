"""
Security utilities for authentication and authorization.
"""

from .access import ANONYMOUS, CallerIdentity, ensure_owner, require_publisher
from .password import PasswordHasher
from .tokens import TokenPayload, TokenService, extract_bearer_token

__all__ = [
    "ANONYMOUS",
    "CallerIdentity",
    "PasswordHasher",
    "TokenService",
    "TokenPayload",
    "ensure_owner",
    "extract_bearer_token",
    "require_publisher",
]
