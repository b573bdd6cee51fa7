from __future__ import annotations
import logging
from typing import Optional

from salesops.constants.permissions import SALES_REP_ROLE
from salesops.errors import NotFound
from salesops.models.sales_rep import SalesRepresentative
from salesops.services.stores import AuthzStore

log = logging.getLogger(__name__)


def onboard_sales_rep(store: AuthzStore, user_id: int, phone: Optional[str] = None) -> SalesRepresentative:
    """Make an existing user a sales representative.

    This is the only path that grants the protected sales_rep role. Re-running it for an
    already onboarded user returns the existing directory entry.
    """
    user = store.get_user(user_id)
    if user is None:
        raise NotFound('User not found')
    role = store.find_role_by_name(SALES_REP_ROLE)
    if role is None:
        raise NotFound(f'{SALES_REP_ROLE} role not found')
    if store.find_assignment(user.id, role.id) is None:
        store.add_assignment(user.id, role.id)
        log.info('sales_rep role granted user_id=%s', user.id)
    rep = store.find_sales_rep_by_email(user.email)
    if rep is None:
        rep = store.add_sales_rep(SalesRepresentative(name=user.name, email=user.email, phone=phone, is_active=True))
        log.info('sales representative created id=%s email=%s', rep.id, rep.email)
    return rep


__all__ = ['onboard_sales_rep']
