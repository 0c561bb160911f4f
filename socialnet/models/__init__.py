from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine
from sqlalchemy.orm import declarative_base, sessionmaker
from ..config import database_url

Base = declarative_base()


def create_engine_for(url, **kwargs) -> AsyncEngine:
    """Build an async engine; SQLite connections get foreign keys switched on
    so the ON DELETE CASCADE rules hold there too."""
    eng = create_async_engine(url, future=True, echo=False, **kwargs)
    if eng.dialect.name == 'sqlite':
        @event.listens_for(eng.sync_engine, 'connect')
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute('PRAGMA foreign_keys=ON')
            cursor.close()
    return eng


def create_session_factory(eng: AsyncEngine):
    return sessionmaker(eng, class_=AsyncSession, expire_on_commit=False)


engine = create_engine_for(database_url())
AsyncSessionLocal = create_session_factory(engine)

# Import models to register tables
from .users import User  # noqa: F401,E402
from .friendships import Friendship  # noqa: F401,E402
from .messages import Message  # noqa: F401,E402
from .blog_entries import BlogEntry  # noqa: F401,E402
