from flask import Blueprint, request, abort
from salesops import get_db
from salesops.config.pagination import normalize_pagination
from salesops.constants.permissions import PERMISSIONS as P, ADMIN_ROLE, SUPER_ADMIN_ROLE, get_all_permissions, get_permissions_by_category
from salesops.decorators.auth import require_permissions, require_roles, require_login
from salesops.services.assignments import AssignmentService
from salesops.services.onboarding import onboard_sales_rep
from salesops.services.roles import RoleService, role_to_dict, MISSING
from salesops.services.session import current_principal
from salesops.services.stores import SqlAuthzStore
from salesops.services.users import UserService, user_to_dict

iam_bp = Blueprint('iam', __name__)


def _store():
    return SqlAuthzStore(get_db())


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        abort(400, description='JSON object body required')
    return data


def _int_field(data, key):
    raw = data.get(key)
    if raw is None:
        abort(400, description=f'{key} required')
    # bool is an int subclass; floats and "1.5" must not be truncated
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().isdecimal():
        return int(raw.strip())
    abort(400, description=f'{key} must be int')


@iam_bp.get('/auth/me')
@require_login
def me():
    return current_principal().to_dict()


@iam_bp.get('/permissions')
@require_permissions(P['ROLES_VIEW'])
def list_permissions():
    return {
        'data': get_all_permissions(),
        'by_category': get_permissions_by_category(),
    }


@iam_bp.get('/roles')
@require_permissions(P['ROLES_VIEW'])
def list_roles():
    roles = RoleService(_store()).list_roles()
    return {'data': [role_to_dict(r) for r in roles]}


@iam_bp.post('/roles')
@require_permissions(P['ROLES_CREATE'])
def create_role():
    data = _json_body()
    session = get_db()
    role = RoleService(SqlAuthzStore(session)).create_role(
        data.get('name'),
        description=data.get('description'),
        permissions=data.get('permissions'),
    )
    session.commit()
    return role_to_dict(role), 201


@iam_bp.put('/roles/<int:role_id>')
@require_permissions(P['ROLES_EDIT'])
def update_role(role_id: int):
    data = _json_body()
    session = get_db()
    role = RoleService(SqlAuthzStore(session)).update_role(
        role_id,
        name=data['name'] if 'name' in data else MISSING,
        description=data['description'] if 'description' in data else MISSING,
        permissions=data['permissions'] if 'permissions' in data else MISSING,
    )
    session.commit()
    return role_to_dict(role)


@iam_bp.delete('/roles/<int:role_id>')
@require_permissions(P['ROLES_DELETE'])
def delete_role(role_id: int):
    session = get_db()
    RoleService(SqlAuthzStore(session)).delete_role(role_id)
    session.commit()
    return {'status': 'deleted'}


@iam_bp.get('/users')
@require_roles(ADMIN_ROLE, SUPER_ADMIN_ROLE)
def list_users():
    try:
        limit, offset = normalize_pagination(request.args.get('limit'), request.args.get('offset'))
    except ValueError as e:
        abort(400, description=str(e))
    rows, total = AssignmentService(_store()).list_users_with_roles(limit=limit, offset=offset)
    return {
        'data': rows,
        'pagination': {
            'total': total,
            'limit': limit,
            'offset': offset,
            'returned': len(rows)
        }
    }


@iam_bp.post('/users')
@require_roles(ADMIN_ROLE, SUPER_ADMIN_ROLE)
def create_user():
    data = _json_body()
    session = get_db()
    user = UserService(SqlAuthzStore(session)).create_user(
        data.get('name'), data.get('email'), data.get('password'),
    )
    session.commit()
    return user_to_dict(user), 201


@iam_bp.post('/users/<int:user_id>/roles')
@require_permissions(P['ROLES_ASSIGN'])
def assign_role(user_id: int):
    role_id = _int_field(_json_body(), 'role_id')
    session = get_db()
    ur = AssignmentService(SqlAuthzStore(session)).assign(user_id, role_id)
    session.commit()
    return {'user_id': ur.user_id, 'role_id': ur.role_id}, 201


@iam_bp.delete('/users/<int:user_id>/roles/<int:role_id>')
@require_permissions(P['ROLES_ASSIGN'])
def revoke_role(user_id: int, role_id: int):
    session = get_db()
    removed = AssignmentService(SqlAuthzStore(session)).revoke(user_id, role_id)
    session.commit()
    return {'success': True, 'removed': removed}


@iam_bp.post('/users/<int:user_id>/sales-rep')
@require_permissions(P['SALES_REPS_CREATE'])
def onboard(user_id: int):
    data = _json_body()
    session = get_db()
    rep = onboard_sales_rep(SqlAuthzStore(session), user_id, phone=data.get('phone'))
    session.commit()
    return {'id': rep.id, 'name': rep.name, 'email': rep.email, 'phone': rep.phone}, 201
