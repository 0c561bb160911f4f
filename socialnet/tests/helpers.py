from contextlib import asynccontextmanager
from sqlalchemy import pool
from socialnet.dependencies import build_sql_service
from socialnet.entities import User
from socialnet.models import Base, create_engine_for, create_session_factory
from socialnet.repositories.memory import (
    InMemoryStore,
    MemoryUserRepository,
    MemoryFriendshipRepository,
    MemoryMessageRepository,
    MemoryBlogRepository,
)
from socialnet.services import SocialService


def memory_service(store: InMemoryStore = None, users=None) -> SocialService:
    if store is None:
        store = InMemoryStore()
    return SocialService(
        users=users or MemoryUserRepository(store),
        friendships=MemoryFriendshipRepository(store),
        messages=MemoryMessageRepository(store),
        blogs=MemoryBlogRepository(store),
    )


@asynccontextmanager
async def sqlite_engine(path):
    engine = create_engine_for(f"sqlite+aiosqlite:///{path}", poolclass=pool.NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@asynccontextmanager
async def sqlite_service(path):
    async with sqlite_engine(path) as engine:
        yield build_sql_service(create_session_factory(engine))


async def register(service: SocialService, username: str, password: str = 'pass', admin: bool = False) -> User:
    user = User(username=username, password=password, first_name=username.title(), last_name='Test', is_admin=admin)
    assert await service.add_user(user)
    return user
