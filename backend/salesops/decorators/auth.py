from functools import wraps
from flask import abort
from flask_jwt_extended import verify_jwt_in_request
from salesops.services.policy import has_all_permissions, has_any_permission, has_role
from salesops.services.session import current_principal


def _guard(check, description: str):
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            principal = current_principal()
            if principal is None:
                abort(401, description='Unknown or inactive user')
            if not check(principal):
                abort(403, description=description)
            return fn(*args, **kwargs)
        return wrapper
    return outer


def require_permissions(*codes: str):
    return _guard(lambda p: has_all_permissions(p, codes), 'Missing permission')


def require_any_permission(*codes: str):
    return _guard(lambda p: has_any_permission(p, codes), 'Missing permission')


def require_roles(*names: str):
    return _guard(lambda p: has_role(p, names), 'Missing role')


def require_login(fn):
    return _guard(lambda p: True, '')(fn)
