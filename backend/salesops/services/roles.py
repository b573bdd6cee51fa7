from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional

from salesops.constants.permissions import find_invalid_permissions
from salesops.errors import Conflict, InvalidArgument, NotFound
from salesops.models.authz import Role
from salesops.services.stores import AuthzStore

log = logging.getLogger(__name__)

# Distinguishes "field omitted" from an explicit None in partial updates
MISSING: Any = object()


def role_to_dict(role: Role) -> Dict[str, Any]:
    return {
        'id': role.id,
        'name': role.name,
        'description': role.description,
        'permissions': sorted(role.permissions or []),
    }


def _clean_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgument('Role name is required')
    return name.strip()


def _clean_permissions(permissions: Optional[Iterable[str]]) -> List[str]:
    if permissions is None:
        return []
    if isinstance(permissions, str) or not isinstance(permissions, (list, tuple, set, frozenset)):
        raise InvalidArgument('permissions must be a list of strings')
    invalid = find_invalid_permissions(permissions)
    if invalid:
        raise InvalidArgument(f"Invalid permissions: {', '.join(invalid)}")
    return sorted(set(permissions))


class RoleService:
    def __init__(self, store: AuthzStore):
        self.store = store

    def list_roles(self) -> List[Role]:
        return self.store.list_roles()

    def get_role(self, role_id: int) -> Role:
        role = self.store.get_role(role_id)
        if role is None:
            raise NotFound('Role not found')
        return role

    def create_role(self, name, description: Optional[str] = None, permissions: Optional[Iterable[str]] = None) -> Role:
        name = _clean_name(name)
        perms = _clean_permissions(permissions)
        if self.store.find_role_by_name(name) is not None:
            raise Conflict('Role already exists')
        role = self.store.add_role(Role(name=name, description=description, permissions=perms))
        log.info('role created id=%s name=%s permissions=%d', role.id, role.name, len(perms))
        return role

    def update_role(self, role_id: int, name=MISSING, description=MISSING, permissions=MISSING) -> Role:
        """Partial update: only arguments that are supplied change."""
        role = self.get_role(role_id)
        if name is not MISSING:
            name = _clean_name(name)
            other = self.store.find_role_by_name(name)
            if other is not None and other.id != role.id:
                raise Conflict('Role already exists')
        if permissions is not MISSING:
            permissions = _clean_permissions(permissions)
        if name is not MISSING:
            role.name = name
        if description is not MISSING:
            role.description = description
        if permissions is not MISSING:
            role.permissions = permissions
        self.store.save_role(role)
        log.info('role updated id=%s name=%s', role.id, role.name)
        return role

    def delete_role(self, role_id: int) -> None:
        role = self.get_role(role_id)
        in_use = self.store.count_assignments_for_role(role.id)
        if in_use:
            raise Conflict(f'role in use by {in_use} assignment(s); remove them first')
        self.store.delete_role(role)
        log.info('role deleted id=%s name=%s', role_id, role.name)


__all__ = ['RoleService', 'role_to_dict', 'MISSING']
