import pytest
from sqlalchemy import select
from socialnet.entities import User, SendFailure
from socialnet.models import create_engine_for, create_session_factory
from socialnet.models.friendships import Friendship as FriendshipRow
from socialnet.repositories.sql import (
    SqlUserRepository,
    SqlFriendshipRepository,
    SqlMessageRepository,
    SqlBlogRepository,
)
from socialnet.services import SocialService
from .helpers import sqlite_engine, register


@pytest.mark.asyncio
@pytest.mark.parametrize('first,second', [('Ann', 'Zack'), ('Zack', 'ann')])
async def test_friend_rows_are_stored_in_canonical_order(tmp_path, first, second):
    async with sqlite_engine(tmp_path / 'social.db') as engine:
        sessions = create_session_factory(engine)
        users = SqlUserRepository(sessions)
        friends = SqlFriendshipRepository(sessions)
        for name in (second, first):
            assert await users.add_user(User(name, 'hash'))

        assert await friends.add_friendship(second, first)
        assert await friends.add_friendship(first, second) is False

        async with sessions() as session:
            rows = (await session.execute(select(FriendshipRow))).scalars().all()
        assert [(r.friend1, r.friend2) for r in rows] == [(first, second)]


@pytest.mark.asyncio
async def test_duplicate_username_is_caught_by_the_store(tmp_path):
    async with sqlite_engine(tmp_path / 'social.db') as engine:
        users = SqlUserRepository(create_session_factory(engine))
        assert await users.add_user(User('Ann', 'hash'))
        assert await users.add_user(User('Ann', 'other')) is False
        assert (await users.get_user('Ann')).password == 'hash'


@pytest.mark.asyncio
async def test_unreachable_store_gives_failure_values(tmp_path):
    broken = create_engine_for(f"sqlite+aiosqlite:///{tmp_path / 'no-such-dir' / 'db.sqlite'}")
    sessions = create_session_factory(broken)
    try:
        users = SqlUserRepository(sessions)
        friends = SqlFriendshipRepository(sessions)
        messages = SqlMessageRepository(sessions)
        blogs = SqlBlogRepository(sessions)

        assert await users.get_user('Ann') is None
        assert await users.add_user(User('Ann', 'hash')) is False
        assert await users.remove_user('Ann') is False
        assert await friends.find_friendships('Ann') == []
        assert await friends.get_friendship('Ann', 'Zack') is None
        assert await messages.list_all() == []
        assert await messages.create_message('Ann', 'Zack', 's', 'b') is None
        assert await messages.mark_read(1, 'Zack') is False
        assert await blogs.add_entry('Ann', 't', 'c') is None
        assert await blogs.list_all() == []
    finally:
        await broken.dispose()


@pytest.mark.asyncio
async def test_insert_failure_after_gate_is_store_failure(tmp_path):
    broken = create_engine_for(f"sqlite+aiosqlite:///{tmp_path / 'no-such-dir' / 'db.sqlite'}")
    try:
        async with sqlite_engine(tmp_path / 'social.db') as engine:
            sessions = create_session_factory(engine)
            service = SocialService(
                users=SqlUserRepository(sessions),
                friendships=SqlFriendshipRepository(sessions),
                messages=SqlMessageRepository(create_session_factory(broken)),
                blogs=SqlBlogRepository(sessions),
            )
            await register(service, 'Ann')
            await register(service, 'Zack')
            assert await service.add_friendship('Ann', 'Zack')

            outcome = await service.send_message('Ann', 'Zack', 'Hi', 'body1')
            assert outcome is SendFailure.STORE_FAILURE
            assert outcome.code == 0
    finally:
        await broken.dispose()
