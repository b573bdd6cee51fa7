"""Central enum-like definitions to avoid typos in permission/role strings.
Extend cautiously; never rename codes silently. Roles store these literals and would lose access.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List

WILDCARD = '*'

PERMISSIONS = {
    # Clients
    'CLIENTS_VIEW': 'clients:view',
    'CLIENTS_CREATE': 'clients:create',
    'CLIENTS_EDIT': 'clients:edit',
    'CLIENTS_DELETE': 'clients:delete',
    # Products
    'PRODUCTS_VIEW': 'products:view',
    'PRODUCTS_CREATE': 'products:create',
    'PRODUCTS_EDIT': 'products:edit',
    'PRODUCTS_DELETE': 'products:delete',
    # Sales
    'SALES_VIEW': 'sales:view',
    'SALES_CREATE': 'sales:create',
    'SALES_EDIT': 'sales:edit',
    'SALES_DELETE': 'sales:delete',
    # Users
    'USERS_VIEW': 'users:view',
    'USERS_CREATE': 'users:create',
    'USERS_EDIT': 'users:edit',
    'USERS_DELETE': 'users:delete',
    # Roles
    'ROLES_VIEW': 'roles:view',
    'ROLES_CREATE': 'roles:create',
    'ROLES_EDIT': 'roles:edit',
    'ROLES_DELETE': 'roles:delete',
    'ROLES_ASSIGN': 'roles:assign',
    # Dashboard
    'DASHBOARD_VIEW': 'dashboard:view',
    'DASHBOARD_ADMIN': 'dashboard:admin',
    # Weekly reports
    'REPORTS_VIEW': 'reports:view',
    'REPORTS_CREATE': 'reports:create',
    'REPORTS_EDIT': 'reports:edit',
    'REPORTS_DELETE': 'reports:delete',
    # Sales representatives
    'SALES_REPS_VIEW': 'sales_reps:view',
    'SALES_REPS_CREATE': 'sales_reps:create',
    'SALES_REPS_EDIT': 'sales_reps:edit',
    'SALES_REPS_DELETE': 'sales_reps:delete',
}

P = PERMISSIONS


@dataclass(frozen=True)
class PermissionInfo:
    value: str
    label: str
    category: str


PERMISSION_CATALOG: List[PermissionInfo] = [
    PermissionInfo(P['CLIENTS_VIEW'], 'View Clients', 'Clients'),
    PermissionInfo(P['CLIENTS_CREATE'], 'Create Clients', 'Clients'),
    PermissionInfo(P['CLIENTS_EDIT'], 'Edit Clients', 'Clients'),
    PermissionInfo(P['CLIENTS_DELETE'], 'Delete Clients', 'Clients'),
    PermissionInfo(P['PRODUCTS_VIEW'], 'View Products', 'Products'),
    PermissionInfo(P['PRODUCTS_CREATE'], 'Create Products', 'Products'),
    PermissionInfo(P['PRODUCTS_EDIT'], 'Edit Products', 'Products'),
    PermissionInfo(P['PRODUCTS_DELETE'], 'Delete Products', 'Products'),
    PermissionInfo(P['SALES_VIEW'], 'View Sales', 'Sales'),
    PermissionInfo(P['SALES_CREATE'], 'Create Sales', 'Sales'),
    PermissionInfo(P['SALES_EDIT'], 'Edit Sales', 'Sales'),
    PermissionInfo(P['SALES_DELETE'], 'Delete Sales', 'Sales'),
    PermissionInfo(P['SALES_REPS_VIEW'], 'View Sales Reps', 'Sales Reps'),
    PermissionInfo(P['SALES_REPS_CREATE'], 'Create Sales Reps', 'Sales Reps'),
    PermissionInfo(P['SALES_REPS_EDIT'], 'Edit Sales Reps', 'Sales Reps'),
    PermissionInfo(P['SALES_REPS_DELETE'], 'Delete Sales Reps', 'Sales Reps'),
    PermissionInfo(P['USERS_VIEW'], 'View Users', 'Users'),
    PermissionInfo(P['USERS_CREATE'], 'Create Users', 'Users'),
    PermissionInfo(P['USERS_EDIT'], 'Edit Users', 'Users'),
    PermissionInfo(P['USERS_DELETE'], 'Delete Users', 'Users'),
    PermissionInfo(P['ROLES_VIEW'], 'View Roles', 'Roles'),
    PermissionInfo(P['ROLES_CREATE'], 'Create Roles', 'Roles'),
    PermissionInfo(P['ROLES_EDIT'], 'Edit Roles', 'Roles'),
    PermissionInfo(P['ROLES_DELETE'], 'Delete Roles', 'Roles'),
    PermissionInfo(P['ROLES_ASSIGN'], 'Assign Roles', 'Roles'),
    PermissionInfo(P['DASHBOARD_VIEW'], 'View Dashboard', 'Dashboard'),
    PermissionInfo(P['DASHBOARD_ADMIN'], 'Admin Dashboard', 'Dashboard'),
    PermissionInfo(P['REPORTS_VIEW'], 'View Reports', 'Reports'),
    PermissionInfo(P['REPORTS_CREATE'], 'Create Reports', 'Reports'),
    PermissionInfo(P['REPORTS_EDIT'], 'Edit Reports', 'Reports'),
    PermissionInfo(P['REPORTS_DELETE'], 'Delete Reports', 'Reports'),
]

ALL_PERMISSION_CODES = tuple(p.value for p in PERMISSION_CATALOG)
_KNOWN = frozenset(ALL_PERMISSION_CODES)


def get_all_permissions() -> List[Dict[str, str]]:
    return [{'value': p.value, 'label': p.label, 'category': p.category} for p in PERMISSION_CATALOG]


def get_permissions_by_category() -> Dict[str, List[Dict[str, str]]]:
    """Group the catalog by category, keeping catalog order inside each group."""
    grouped: Dict[str, List[Dict[str, str]]] = {}
    for p in PERMISSION_CATALOG:
        grouped.setdefault(p.category, []).append({'value': p.value, 'label': p.label})
    return grouped


def is_known_permission(code: str) -> bool:
    return code == WILDCARD or code in _KNOWN


def find_invalid_permissions(codes: Iterable[str]) -> List[str]:
    return sorted({str(c) for c in codes if not (isinstance(c, str) and is_known_permission(c))})


# --- Role names ---
ADMIN_ROLE = 'admin'
SUPER_ADMIN_ROLE = 'super_admin'
SALES_MANAGER_ROLE = 'sales_manager'
SALES_REP_ROLE = 'sales_rep'
VIEWER_ROLE = 'viewer'

# Only grantable through the sales-rep onboarding flow
PROTECTED_ROLES = frozenset({SALES_REP_ROLE})

ROLE_PRESETS: Dict[str, Dict[str, object]] = {
    ADMIN_ROLE: {
        'description': 'Full system administrator with all permissions',
        'permissions': list(ALL_PERMISSION_CODES),
    },
    SALES_MANAGER_ROLE: {
        'description': 'Sales manager with client and sales management permissions',
        'permissions': [
            P['CLIENTS_VIEW'], P['CLIENTS_CREATE'], P['CLIENTS_EDIT'],
            P['PRODUCTS_VIEW'],
            P['SALES_VIEW'], P['SALES_CREATE'], P['SALES_EDIT'],
            P['DASHBOARD_VIEW'],
            P['REPORTS_VIEW'], P['REPORTS_CREATE'],
            P['SALES_REPS_VIEW'], P['SALES_REPS_CREATE'], P['SALES_REPS_EDIT'], P['SALES_REPS_DELETE'],
        ],
    },
    SALES_REP_ROLE: {
        'description': 'Sales representative with limited client and sales permissions',
        'permissions': [
            P['CLIENTS_VIEW'], P['CLIENTS_CREATE'],
            P['PRODUCTS_VIEW'],
            P['SALES_VIEW'], P['SALES_CREATE'],
            P['DASHBOARD_VIEW'],
            P['SALES_REPS_VIEW'],
        ],
    },
    VIEWER_ROLE: {
        'description': 'Read-only access to dashboard and reports',
        'permissions': [
            P['CLIENTS_VIEW'], P['PRODUCTS_VIEW'], P['SALES_VIEW'], P['DASHBOARD_VIEW'], P['REPORTS_VIEW'],
        ],
    },
}
