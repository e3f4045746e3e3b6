"""Access guards deciding whether the current caller may modify the catalog.

The store asks its guard before every mutating call and never caches the
answer, so a role change takes effect on the very next operation.
"""

import logging
from collections.abc import Callable
from typing import Protocol

from pricing_catalog.core.config import settings
from pricing_catalog.core.security import decode_token
from pricing_catalog.domain import CatalogEditPolicy
from pricing_catalog.schemas.identity import CallerIdentity

logger = logging.getLogger(__name__)


class AccessGuard(Protocol):
    def can_edit(self) -> bool: ...


def default_edit_policy() -> CatalogEditPolicy:
    return CatalogEditPolicy(editor_roles=settings.editor_roles)


class StaticAccessGuard:
    """Fixed answer, for scripts and tests."""

    def __init__(self, allowed: bool = True):
        self.allowed = allowed

    def can_edit(self) -> bool:
        return self.allowed


class RoleAccessGuard:
    """
    Evaluate the edit policy against the identity of the current caller.

    ``identity_provider`` is called on every check and may return ``None``
    when nobody is signed in.
    """

    def __init__(
        self,
        identity_provider: Callable[[], CallerIdentity | None],
        policy: CatalogEditPolicy | None = None,
    ):
        self.identity_provider = identity_provider
        self.policy = policy or default_edit_policy()

    def can_edit(self) -> bool:
        identity = self.identity_provider()
        if identity is None:
            return False
        return self.policy.can_edit(
            is_authenticated=identity.is_authenticated, role=identity.role
        )


class TokenAccessGuard:
    """
    Evaluate the edit policy against the ``role`` claim of a JWT access token.

    The token is decoded on every check, so an expired token or one replaced
    by a lower-privileged token denies the next mutation.
    """

    def __init__(
        self,
        token_provider: Callable[[], str | None],
        policy: CatalogEditPolicy | None = None,
    ):
        self.token_provider = token_provider
        self.policy = policy or default_edit_policy()

    def can_edit(self) -> bool:
        token = self.token_provider()
        if not token:
            return False

        payload = decode_token(token)
        # Only access tokens identify a caller
        if payload is None or payload.get("type") != "access":
            logger.warning("Rejected catalog token: invalid, expired or not an access token")
            return False

        return self.policy.can_edit(
            is_authenticated=payload.get("sub") is not None, role=payload.get("role")
        )
