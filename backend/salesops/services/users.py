from __future__ import annotations
import logging
from typing import Any, Dict

from salesops.errors import Conflict, InvalidArgument
from salesops.models.authz import User
from salesops.services.stores import AuthzStore

log = logging.getLogger(__name__)


def user_to_dict(user: User) -> Dict[str, Any]:
    return {'id': user.id, 'name': user.name, 'email': user.email}


def _required(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f'{field} is required')
    return value.strip()


class UserService:
    """Administrative creation of principals. Roles are granted separately."""

    def __init__(self, store: AuthzStore):
        self.store = store

    def create_user(self, name, email, password) -> User:
        name = _required(name, 'name')
        email = _required(email, 'email')
        # the password is hashed as given; surrounding whitespace is significant
        if not isinstance(password, str) or not password:
            raise InvalidArgument('password is required')
        if self.store.find_user_by_email(email) is not None:
            raise Conflict('User with this email already exists')
        user = User(name=name, email=email, password_hash='', is_active=True)
        user.set_password(password)
        user = self.store.add_user(user)
        log.info('user created id=%s email=%s', user.id, email)
        return user


__all__ = ['UserService', 'user_to_dict']
