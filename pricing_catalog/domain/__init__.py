"""Domain-level policies and business rules.

This package contains logic that defines *what* the business rules are,
independent from *where* they are applied (services, gateways, guards).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CatalogEditPolicy:
    """Defines who may modify the pricing catalog.

    Semantics (intentionally centralized):
    - The caller must be authenticated
    - AND hold one of ``editor_roles``

    Reading the catalog is never restricted by this policy.
    """

    editor_roles: tuple[str, ...]

    def can_edit(self, *, is_authenticated: bool, role: str | None) -> bool:
        return is_authenticated and role is not None and role in self.editor_roles
