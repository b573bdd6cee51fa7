from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from salesops.constants.permissions import PROTECTED_ROLES
from salesops.errors import Conflict, InvalidArgument, NotFound
from salesops.models.authz import UserRole
from salesops.services.stores import AuthzStore

log = logging.getLogger(__name__)


class AssignmentService:
    """Grant and revoke roles for principals.

    Assign is strict (duplicate pair -> Conflict) while revoke is idempotent.
    """

    def __init__(self, store: AuthzStore):
        self.store = store

    def assign(self, user_id: int, role_id: int) -> UserRole:
        role = self.store.get_role(role_id)
        if role is None:
            raise NotFound('Role not found')
        if role.name in PROTECTED_ROLES:
            raise InvalidArgument(f'protected role: {role.name!r} can only be granted through onboarding')
        if self.store.get_user(user_id) is None:
            raise NotFound('User not found')
        if self.store.find_assignment(user_id, role_id) is not None:
            raise Conflict('User already has this role')
        ur = self.store.add_assignment(user_id, role_id)
        log.info('role assigned user_id=%s role=%s', user_id, role.name)
        return ur

    def revoke(self, user_id: int, role_id: int) -> bool:
        """Remove the pair if present. Returns whether a row was removed."""
        ur = self.store.find_assignment(user_id, role_id)
        if ur is None:
            return False
        self.store.delete_assignment(ur)
        log.info('role revoked user_id=%s role_id=%s', user_id, role_id)
        return True

    def list_users_with_roles(self, limit: Optional[int] = None, offset: int = 0):
        """Return (rows, total); each row is a user with its resolved roles ordered by name."""
        users, total = self.store.list_users(limit=limit, offset=offset)
        rows: List[Dict[str, Any]] = []
        for u in users:
            role_ids = [ur.role_id for ur in self.store.list_assignments_for_user(u.id)]
            roles = sorted(self.store.get_roles(role_ids), key=lambda r: r.name)
            rows.append({
                'id': u.id,
                'name': u.name,
                'email': u.email,
                'roles': [{'id': r.id, 'name': r.name, 'description': r.description} for r in roles],
            })
        return rows, total


__all__ = ['AssignmentService']
