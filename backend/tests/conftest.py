import os, sys, pytest
# Ensure backend directory is on path so 'salesops' and 'tests' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from salesops import create_app, get_db
from salesops.models import create_schema
from salesops.services.stores import InMemoryAuthzStore


@pytest.fixture(scope='session', autouse=True)
def app_instance():
    app = create_app({'DATABASE_URL': 'sqlite+pysqlite:///:memory:', 'JWT_SECRET_KEY': 'test-secret-key-with-enough-length'})
    with app.app_context():
        create_schema(get_db().get_bind())
    yield app


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()


@pytest.fixture()
def store():
    return InMemoryAuthzStore()
