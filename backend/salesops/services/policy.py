from __future__ import annotations
from typing import Any, Iterable, List, Optional

from salesops.constants.permissions import WILDCARD, ADMIN_ROLE, SALES_MANAGER_ROLE, SALES_REP_ROLE
from salesops.services.session import EffectivePrincipal

# Predicates are total: a missing principal, an unmet requirement or a malformed argument
# is False, never an exception.


def _members(values: Any) -> Optional[List[Any]]:
    """List the items of a list-like argument; None for None, bare strings and non-iterables."""
    if values is None or isinstance(values, (str, bytes)):
        return None
    try:
        return list(values)
    except TypeError:
        return None


def _granted(principal: EffectivePrincipal, code: Any) -> bool:
    return isinstance(code, str) and code in principal.permissions


def has_role(principal: Optional[EffectivePrincipal], required_roles: Iterable[str]) -> bool:
    if principal is None or not principal.roles:
        return False
    required = _members(required_roles)
    if not required:
        return False
    return any(isinstance(r, str) and r in principal.roles for r in required)


def has_permission(principal: Optional[EffectivePrincipal], permission: str) -> bool:
    if principal is None:
        return False
    return WILDCARD in principal.permissions or _granted(principal, permission)


def has_any_permission(principal: Optional[EffectivePrincipal], permissions: Iterable[str]) -> bool:
    if principal is None:
        return False
    required = _members(permissions)
    if not required:
        return False
    if WILDCARD in principal.permissions:
        return True
    return any(_granted(principal, p) for p in required)


def has_all_permissions(principal: Optional[EffectivePrincipal], permissions: Iterable[str]) -> bool:
    if principal is None:
        return False
    required = _members(permissions)
    if required is None:
        return False
    if WILDCARD in principal.permissions:
        return True
    # a non-str requirement can never be met
    return all(_granted(principal, p) for p in required)


def is_sales_rep(principal: Optional[EffectivePrincipal]) -> bool:
    return has_role(principal, [SALES_REP_ROLE])


def is_admin_or_manager(principal: Optional[EffectivePrincipal]) -> bool:
    return has_role(principal, [ADMIN_ROLE, SALES_MANAGER_ROLE])


def can_edit_sales_rep_profile(principal: Optional[EffectivePrincipal], sales_rep_id: int) -> bool:
    """Admins and managers may edit any profile; a sales rep only their own."""
    if principal is None:
        return False
    if is_admin_or_manager(principal):
        return True
    if is_sales_rep(principal):
        return principal.sales_rep_id is not None and principal.sales_rep_id == sales_rep_id
    return False


__all__ = [
    'has_role', 'has_permission', 'has_any_permission', 'has_all_permissions',
    'is_sales_rep', 'is_admin_or_manager', 'can_edit_sales_rep_profile',
]
