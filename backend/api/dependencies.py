"""
API dependencies for resolving the caller's identity.
"""

import logging
from typing import Annotated

from fastapi import Header

from core.exceptions import InvalidTokenError
from core.security import ANONYMOUS, CallerIdentity, TokenService, extract_bearer_token
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

# Token service instance
token_service = TokenService(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
    access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
)


async def get_caller_identity(
    authorization: Annotated[str | None, Header()] = None,
) -> CallerIdentity:
    """
    Resolve the request's caller from its Authorization header.

    A missing, malformed, expired or tampered token yields an anonymous
    caller rather than an error; operations that need a publisher reject
    anonymous callers themselves.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        return ANONYMOUS

    try:
        publisher_id = token_service.verify_access_token(token)
    except InvalidTokenError as e:
        logger.debug("Ignoring invalid bearer token: %s", e)
        return ANONYMOUS

    return CallerIdentity(publisher_id=publisher_id)
