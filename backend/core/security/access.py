"""
Caller identity and per-operation authorization rules.

Identity is resolved once per request at the API boundary and then passed
explicitly to each service operation, which applies its own rule against
the entity's recorded owner.
"""

from dataclasses import dataclass

from core.exceptions import Forbidden, Unauthenticated


@dataclass(frozen=True)
class CallerIdentity:
    """Who is making the call: a publisher, or nobody."""

    publisher_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.publisher_id is not None


ANONYMOUS = CallerIdentity()


def require_publisher(caller: CallerIdentity) -> str:
    """
    Return the caller's publisher ID.

    Raises:
        Unauthenticated: If the caller is anonymous
    """
    if caller.publisher_id is None:
        raise Unauthenticated("Authentication required")
    return caller.publisher_id


def ensure_owner(caller: CallerIdentity, owner_id: str, action: str = "modify") -> str:
    """
    Check that the caller owns the entity whose owner is ``owner_id``.

    Raises:
        Unauthenticated: If the caller is anonymous
        Forbidden: If the caller is not the owner
    """
    publisher_id = require_publisher(caller)
    if publisher_id != owner_id:
        raise Forbidden(f"Not authorized to {action} this news")
    return publisher_id
