"""Session enrichment: resolve a principal id into its effective roles and permissions.

The result is recomputed for every request from the stored assignments, so a role
change takes effect on the next request without reissuing tokens.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from flask import g
from flask_jwt_extended import get_jwt_identity

from salesops.services.stores import AuthzStore, SqlAuthzStore


@dataclass(frozen=True)
class EffectivePrincipal:
    id: int
    roles: FrozenSet[str] = frozenset()
    permissions: FrozenSet[str] = frozenset()
    # Linked sales representative (business attribute, not used for authorization)
    sales_rep_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'roles': sorted(self.roles),
            'permissions': sorted(self.permissions),
            'sales_rep_id': self.sales_rep_id,
        }


def build_effective_principal(store: AuthzStore, user_id: int) -> Optional[EffectivePrincipal]:
    """Return the EffectivePrincipal for user_id, or None for an unknown or inactive user."""
    user = store.get_user(user_id)
    if user is None or user.is_active is False:
        return None
    role_ids = {ur.role_id for ur in store.list_assignments_for_user(user.id)}
    roles = store.get_roles(sorted(role_ids))
    role_names = frozenset(r.name for r in roles)
    permissions = frozenset(p for r in roles for p in (r.permissions or []))
    # Best-effort lookup: no directory entry leaves sales_rep_id unset
    rep = store.find_sales_rep_by_email(user.email) if user.email else None
    return EffectivePrincipal(
        id=user.id,
        roles=role_names,
        permissions=permissions,
        sales_rep_id=rep.id if rep is not None else None,
    )


def current_principal() -> Optional[EffectivePrincipal]:
    """Enrich the JWT identity of the current request (cached on flask.g).

    Assumes verify_jwt_in_request() already ran.
    """
    if 'principal' in g:
        return g.principal
    from salesops import get_db
    ident = get_jwt_identity()
    principal = None
    if ident is not None:
        try:
            user_id = int(ident)
        except (TypeError, ValueError):
            user_id = None
        if user_id is not None:
            principal = build_effective_principal(SqlAuthzStore(get_db()), user_id)
    g.principal = principal
    return principal


__all__ = ['EffectivePrincipal', 'build_effective_principal', 'current_principal']
