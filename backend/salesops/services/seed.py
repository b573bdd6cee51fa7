"""Idempotent seeding of role presets and the initial administrator."""
from __future__ import annotations
import logging
from typing import Dict, List, Tuple

from salesops.constants.permissions import ROLE_PRESETS, ADMIN_ROLE
from salesops.models.authz import Role, User
from salesops.services.stores import AuthzStore

log = logging.getLogger(__name__)


def ensure_role_presets(store: AuthzStore) -> int:
    """Create any missing preset roles. Existing roles are left untouched. Returns created count."""
    created = 0
    for name, preset in ROLE_PRESETS.items():
        if store.find_role_by_name(name) is not None:
            continue
        store.add_role(Role(name=name, description=preset['description'], permissions=sorted(set(preset['permissions']))))
        created += 1
    if created:
        log.info('seeded %d preset role(s)', created)
    return created


def ensure_initial_admin(session, store: AuthzStore, email: str, password: str, name: str = 'Admin User') -> Tuple[User, bool]:
    """Ensure a user with email exists and holds the admin role. Returns (user, created)."""
    from sqlalchemy import select
    user = session.execute(select(User).where(User.email==email)).scalar_one_or_none()
    created = False
    if user is None:
        user = User(name=name, email=email, password_hash='')
        user.set_password(password)
        session.add(user)
        session.flush()
        created = True
        log.info('created initial admin user %s', email)
    admin = store.find_role_by_name(ADMIN_ROLE)
    if admin is not None and store.find_assignment(user.id, admin.id) is None:
        store.add_assignment(user.id, admin.id)
    return user, created


def summarize_roles(store: AuthzStore) -> List[Tuple[str, int, List[str]]]:
    rows = []
    for role in store.list_roles():
        perms = sorted(role.permissions or [])
        rows.append((role.name, len(perms), perms[:8]))
    return rows


def build_role_permission_map(store: AuthzStore) -> Dict[str, List[str]]:
    return {r.name: sorted(set(r.permissions or [])) for r in store.list_roles()}


__all__ = ['ensure_role_presets', 'ensure_initial_admin', 'summarize_roles', 'build_role_permission_map']
