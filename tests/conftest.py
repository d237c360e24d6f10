import os
import sys

# Make the repository root importable so tests can `import lifeflow`
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from lifeflow.db import init_db, make_session_factory
from lifeflow.datastore import DataStore
from lifeflow.services.auth_service import AuthClient


def sqlite_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'lifeflow-test.db'}"


@pytest_asyncio.fixture
async def store(tmp_path):
    # NullPool: every session gets a fresh connection, so gathered calls
    # and different event loops never share one
    engine = create_async_engine(sqlite_url(tmp_path), poolclass=NullPool)
    await init_db(engine)
    yield DataStore(make_session_factory(engine))
    await engine.dispose()


@pytest_asyncio.fixture
async def auth(store):
    client = AuthClient(store)
    await client.login("ada@example.com", display_name="Ada")
    return client


@pytest.fixture
def user_id(auth):
    return auth.user.id
