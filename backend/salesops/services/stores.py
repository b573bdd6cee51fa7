"""Storage capabilities consumed by the role, assignment and enrichment services.

Services receive an ``AuthzStore`` instead of reaching for the global session, so the
same code runs against SQLAlchemy (``SqlAuthzStore``) or plain dicts (``InMemoryAuthzStore``).

Write methods flush but never commit; the caller owns the transaction boundary.
Uniqueness (role name, user/role pair) is the store's job and surfaces as ``Conflict``.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from itertools import count
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from salesops.errors import Conflict
from salesops.models.authz import Role, User, UserRole
from salesops.models.sales_rep import SalesRepresentative


class AuthzStore(ABC):

    # --- principals ---
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def list_users(self, limit: Optional[int] = None, offset: int = 0) -> Tuple[List[User], int]: ...

    @abstractmethod
    def find_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def add_user(self, user: User) -> User: ...

    # --- roles ---
    @abstractmethod
    def list_roles(self) -> List[Role]: ...

    @abstractmethod
    def get_role(self, role_id: int) -> Optional[Role]: ...

    @abstractmethod
    def get_roles(self, role_ids: Sequence[int]) -> List[Role]: ...

    @abstractmethod
    def find_role_by_name(self, name: str) -> Optional[Role]: ...

    @abstractmethod
    def add_role(self, role: Role) -> Role: ...

    @abstractmethod
    def save_role(self, role: Role) -> Role: ...

    @abstractmethod
    def delete_role(self, role: Role) -> None: ...

    # --- assignments ---
    @abstractmethod
    def count_assignments_for_role(self, role_id: int) -> int: ...

    @abstractmethod
    def find_assignment(self, user_id: int, role_id: int) -> Optional[UserRole]: ...

    @abstractmethod
    def add_assignment(self, user_id: int, role_id: int) -> UserRole: ...

    @abstractmethod
    def delete_assignment(self, assignment: UserRole) -> None: ...

    @abstractmethod
    def list_assignments_for_user(self, user_id: int) -> List[UserRole]: ...

    # --- sales representative directory ---
    @abstractmethod
    def find_sales_rep_by_email(self, email: str) -> Optional[SalesRepresentative]: ...

    @abstractmethod
    def add_sales_rep(self, rep: SalesRepresentative) -> SalesRepresentative: ...


class SqlAuthzStore(AuthzStore):
    def __init__(self, session):
        self.session = session

    def _flush(self, conflict_message: str):
        try:
            self.session.flush()
        except IntegrityError:
            self.session.rollback()
            raise Conflict(conflict_message)

    def get_user(self, user_id):
        return self.session.get(User, user_id)

    def list_users(self, limit=None, offset=0):
        total = self.session.execute(select(func.count(User.id))).scalar_one()
        q = select(User).order_by(User.id.asc()).offset(offset)
        if limit is not None:
            q = q.limit(limit)
        return list(self.session.execute(q).scalars()), total

    def find_user_by_email(self, email):
        return self.session.execute(select(User).where(User.email==email)).scalar_one_or_none()

    def add_user(self, user):
        self.session.add(user)
        self._flush(f'user {user.email!r} already exists')
        return user

    def list_roles(self):
        return list(self.session.execute(select(Role).order_by(Role.name.asc())).scalars())

    def get_role(self, role_id):
        return self.session.get(Role, role_id)

    def get_roles(self, role_ids):
        if not role_ids:
            return []
        return list(self.session.execute(select(Role).where(Role.id.in_(list(role_ids)))).scalars())

    def find_role_by_name(self, name):
        return self.session.execute(select(Role).where(Role.name==name)).scalar_one_or_none()

    def add_role(self, role):
        self.session.add(role)
        self._flush(f'role {role.name!r} already exists')
        return role

    def save_role(self, role):
        self._flush(f'role {role.name!r} already exists')
        return role

    def delete_role(self, role):
        self.session.delete(role)
        self._flush('role in use')

    def count_assignments_for_role(self, role_id):
        return self.session.execute(select(func.count(UserRole.id)).where(UserRole.role_id==role_id)).scalar_one()

    def find_assignment(self, user_id, role_id):
        return self.session.execute(
            select(UserRole).where(UserRole.user_id==user_id, UserRole.role_id==role_id)
        ).scalar_one_or_none()

    def add_assignment(self, user_id, role_id):
        ur = UserRole(user_id=user_id, role_id=role_id)
        self.session.add(ur)
        self._flush('user already has this role')
        return ur

    def delete_assignment(self, assignment):
        self.session.delete(assignment)
        self.session.flush()

    def list_assignments_for_user(self, user_id):
        return list(self.session.execute(select(UserRole).where(UserRole.user_id==user_id)).scalars())

    def find_sales_rep_by_email(self, email):
        return self.session.execute(
            select(SalesRepresentative).where(SalesRepresentative.email==email)
        ).scalar_one_or_none()

    def add_sales_rep(self, rep):
        self.session.add(rep)
        self._flush(f'sales representative {rep.email!r} already exists')
        return rep


class InMemoryAuthzStore(AuthzStore):
    """Dict-backed store; model instances are used as plain attribute holders."""

    def __init__(self):
        self.users: Dict[int, User] = {}
        self.roles: Dict[int, Role] = {}
        self.assignments: Dict[Tuple[int, int], UserRole] = {}
        self.sales_reps: Dict[str, SalesRepresentative] = {}
        self._ids = count(1)

    def find_user_by_email(self, email):
        for u in self.users.values():
            if u.email == email:
                return u
        return None

    def add_user(self, user: User) -> User:
        if self.find_user_by_email(user.email) is not None:
            raise Conflict(f'user {user.email!r} already exists')
        if user.id is None:
            user.id = next(self._ids)
        if user.is_active is None:
            user.is_active = True
        self.users[user.id] = user
        return user

    def get_user(self, user_id):
        return self.users.get(user_id)

    def list_users(self, limit=None, offset=0):
        rows = [self.users[k] for k in sorted(self.users)]
        total = len(rows)
        rows = rows[offset:]
        if limit is not None:
            rows = rows[:limit]
        return rows, total

    def list_roles(self):
        return sorted(self.roles.values(), key=lambda r: r.name)

    def get_role(self, role_id):
        return self.roles.get(role_id)

    def get_roles(self, role_ids):
        return [self.roles[rid] for rid in role_ids if rid in self.roles]

    def find_role_by_name(self, name):
        for r in self.roles.values():
            if r.name == name:
                return r
        return None

    def add_role(self, role):
        if self.find_role_by_name(role.name) is not None:
            raise Conflict(f'role {role.name!r} already exists')
        role.id = next(self._ids)
        self.roles[role.id] = role
        return role

    def save_role(self, role):
        other = self.find_role_by_name(role.name)
        if other is not None and other.id != role.id:
            raise Conflict(f'role {role.name!r} already exists')
        self.roles[role.id] = role
        return role

    def delete_role(self, role):
        if self.count_assignments_for_role(role.id):
            raise Conflict('role in use')
        self.roles.pop(role.id, None)

    def count_assignments_for_role(self, role_id):
        return sum(1 for (_, rid) in self.assignments if rid == role_id)

    def find_assignment(self, user_id, role_id):
        return self.assignments.get((user_id, role_id))

    def add_assignment(self, user_id, role_id):
        if (user_id, role_id) in self.assignments:
            raise Conflict('user already has this role')
        ur = UserRole(id=next(self._ids), user_id=user_id, role_id=role_id)
        self.assignments[(user_id, role_id)] = ur
        return ur

    def delete_assignment(self, assignment):
        self.assignments.pop((assignment.user_id, assignment.role_id), None)

    def list_assignments_for_user(self, user_id):
        return [ur for (uid, _), ur in self.assignments.items() if uid == user_id]

    def find_sales_rep_by_email(self, email):
        return self.sales_reps.get(email)

    def add_sales_rep(self, rep):
        if rep.email in self.sales_reps:
            raise Conflict(f'sales representative {rep.email!r} already exists')
        rep.id = next(self._ids)
        self.sales_reps[rep.email] = rep
        return rep


__all__ = ['AuthzStore', 'SqlAuthzStore', 'InMemoryAuthzStore']
