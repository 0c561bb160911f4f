import os
import sys
import tempfile
from pathlib import Path
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Configure test environment before the package builds its engine
os.environ.setdefault('DATABASE_URL', f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'socialnet_test.db'}")
os.environ.setdefault('JWT_SECRET', 'test-secret')
os.environ.setdefault('PASSWORD_HASH_ROUNDS', '4')

# Ensure the package root is on sys.path when pytest changes CWD to this tests dir
HERE = Path(__file__).resolve()
PKG_ROOT = HERE.parents[2]
if str(PKG_ROOT) not in sys.path:
    sys.path.insert(0, str(PKG_ROOT))

from socialnet.dependencies import get_service  # noqa: E402
from socialnet.main import app  # noqa: E402
from socialnet.repositories.memory import InMemoryStore  # noqa: E402
from .helpers import memory_service, sqlite_service  # noqa: E402


@pytest.fixture
def store():
    return InMemoryStore()


@pytest_asyncio.fixture
async def sql_service(tmp_path):
    """SocialService over a fresh SQLite database file."""
    async with sqlite_service(tmp_path / 'social.db') as svc:
        yield svc


@pytest_asyncio.fixture(params=['memory', 'sql'])
async def service(request, tmp_path):
    """Runs a test once against each store implementation."""
    if request.param == 'memory':
        yield memory_service()
    else:
        async with sqlite_service(tmp_path / 'social.db') as svc:
            yield svc


@pytest_asyncio.fixture
async def api_service():
    svc = memory_service()
    app.dependency_overrides[get_service] = lambda: svc
    yield svc
    app.dependency_overrides.pop(get_service, None)


@pytest_asyncio.fixture
async def client(api_service):
    async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as ac:
        yield ac
