from salesops.constants.permissions import (
    PERMISSIONS, PERMISSION_CATALOG, ALL_PERMISSION_CODES, ROLE_PRESETS, PROTECTED_ROLES, SALES_REP_ROLE, WILDCARD,
    get_all_permissions, get_permissions_by_category, is_known_permission, find_invalid_permissions,
)


def test_catalog_matches_permission_constants():
    assert set(ALL_PERMISSION_CODES) == set(PERMISSIONS.values())
    assert len(ALL_PERMISSION_CODES) == len(set(ALL_PERMISSION_CODES))
    for code in ALL_PERMISSION_CODES:
        resource, _, action = code.partition(':')
        assert resource and action, code


def test_grouping_preserves_every_entry():
    grouped = get_permissions_by_category()
    flattened = [item['value'] for items in grouped.values() for item in items]
    assert sorted(flattened) == sorted(ALL_PERMISSION_CODES)
    assert grouped['Roles'][-1] == {'value': 'roles:assign', 'label': 'Assign Roles'}
    assert len(get_all_permissions()) == len(PERMISSION_CATALOG)


def test_wildcard_and_unknown_codes():
    assert is_known_permission(WILDCARD)
    assert is_known_permission('clients:edit')
    assert not is_known_permission('clients:fly')
    assert find_invalid_permissions(['clients:view', 'bogus', '*', 'bogus', 7]) == ['7', 'bogus']


def test_presets_only_reference_registry_codes():
    for name, preset in ROLE_PRESETS.items():
        assert find_invalid_permissions(preset['permissions']) == [], name
    assert SALES_REP_ROLE in PROTECTED_ROLES
