from .authz import Base, Role, User, UserRole
from .sales_rep import SalesRepresentative


def create_schema(engine):
    Base.metadata.create_all(bind=engine, checkfirst=True)


__all__ = ['Base', 'Role', 'User', 'UserRole', 'SalesRepresentative', 'create_schema']
