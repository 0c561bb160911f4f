"""
Relational repositories backed by SQLAlchemy's async ORM.

Each call opens its own session and closes it before returning. Store faults
(constraint violations, lost connections) are logged here and turned into
None / False / [] so they never reach the request layer.
"""
import logging
from typing import List, Optional
from sqlalchemy import select, update, delete, or_, and_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from ..models import AsyncSessionLocal
from ..models.users import User as UserRow
from ..models.friendships import Friendship as FriendshipRow
from ..models.messages import Message as MessageRow
from ..models.blog_entries import BlogEntry as BlogEntryRow
from ..entities import User, Friendship, Message, BlogEntry, canonical_pair
from .base import UserRepository, FriendshipRepository, MessageRepository, BlogRepository

logger = logging.getLogger(__name__)

STORE_ERRORS = (SQLAlchemyError, OSError)


def _to_user(row: UserRow) -> User:
    return User(
        username=row.username,
        password=row.password,
        first_name=row.first_name,
        last_name=row.last_name,
        is_admin=bool(row.is_admin),
    )


def _to_message(row: MessageRow) -> Message:
    return Message(
        message_id=row.message_id,
        sender=row.sender,
        recipient=row.recipient,
        subject=row.subject,
        body=row.body,
        read_status=bool(row.read_status),
        deleted_for_sender=bool(row.deleted_for_sender),
        deleted_for_recipient=bool(row.deleted_for_recipient),
        timestamp=row.date_sent,
    )


def _to_entry(row: BlogEntryRow) -> BlogEntry:
    return BlogEntry(entry_id=row.entry_id, username=row.username, title=row.title, content=row.content)


class _SqlRepository:
    def __init__(self, session_factory=None):
        self._session = session_factory or AsyncSessionLocal


class SqlUserRepository(_SqlRepository, UserRepository):

    async def get_user(self, username: str) -> Optional[User]:
        try:
            async with self._session() as session:
                q = await session.execute(select(UserRow).where(UserRow.username == username))
                row = q.scalars().first()
                return _to_user(row) if row else None
        except STORE_ERRORS as e:
            logger.error(f"get_user failed for {username}: {e}")
            return None

    async def add_user(self, user: User) -> bool:
        async with self._session() as session:
            try:
                session.add(UserRow(
                    username=user.username,
                    password=user.password,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    is_admin=user.is_admin,
                ))
                await session.commit()
                return True
            except IntegrityError as e:
                await session.rollback()
                logger.error(f"Integrity constraint failed adding user {user.username}: {e.orig}")
                return False
            except STORE_ERRORS as e:
                logger.error(f"add_user failed for {user.username}: {e}")
                return False

    async def remove_user(self, username: str) -> bool:
        async with self._session() as session:
            try:
                res = await session.execute(delete(UserRow).where(UserRow.username == username))
                await session.commit()
                return res.rowcount > 0
            except STORE_ERRORS as e:
                logger.error(f"remove_user failed for {username}: {e}")
                return False


class SqlFriendshipRepository(_SqlRepository, FriendshipRepository):

    async def _load_users(self, session, usernames) -> dict:
        res = await session.execute(select(UserRow).where(UserRow.username.in_(set(usernames))))
        return {row.username: _to_user(row) for row in res.scalars().all()}

    async def add_friendship(self, username1: str, username2: str) -> bool:
        a, b = canonical_pair(username1, username2)
        async with self._session() as session:
            try:
                session.add(FriendshipRow(friend1=a, friend2=b))
                await session.commit()
                return True
            except IntegrityError as e:
                # already friends, or one of them does not exist
                await session.rollback()
                logger.error(f"Integrity constraint failed adding friendship {a}/{b}: {e.orig}")
                return False
            except STORE_ERRORS as e:
                logger.error(f"add_friendship failed for {a}/{b}: {e}")
                return False

    async def remove_friendship(self, username1: str, username2: str) -> bool:
        a, b = canonical_pair(username1, username2)
        async with self._session() as session:
            try:
                res = await session.execute(
                    delete(FriendshipRow).where(FriendshipRow.friend1 == a, FriendshipRow.friend2 == b)
                )
                await session.commit()
                return res.rowcount > 0
            except STORE_ERRORS as e:
                logger.error(f"remove_friendship failed for {a}/{b}: {e}")
                return False

    async def remove_user_friends(self, username: str) -> bool:
        async with self._session() as session:
            try:
                res = await session.execute(
                    delete(FriendshipRow).where(
                        or_(FriendshipRow.friend1 == username, FriendshipRow.friend2 == username)
                    )
                )
                await session.commit()
                return res.rowcount > 0
            except STORE_ERRORS as e:
                logger.error(f"remove_user_friends failed for {username}: {e}")
                return False

    async def find_friendships(self, username: str) -> List[Friendship]:
        try:
            async with self._session() as session:
                res = await session.execute(
                    select(FriendshipRow).where(
                        or_(FriendshipRow.friend1 == username, FriendshipRow.friend2 == username)
                    ).order_by(FriendshipRow.friend1, FriendshipRow.friend2)
                )
                rows = res.scalars().all()
                if not rows:
                    return []
                users = await self._load_users(session, [username] + [r.friend1 for r in rows] + [r.friend2 for r in rows])
                return [Friendship(users[r.friend1], users[r.friend2]) for r in rows]
        except STORE_ERRORS as e:
            logger.error(f"find_friendships failed for {username}: {e}")
            return []

    async def get_friendship(self, username1: str, username2: str) -> Optional[Friendship]:
        a, b = canonical_pair(username1, username2)
        try:
            async with self._session() as session:
                res = await session.execute(
                    select(FriendshipRow).where(FriendshipRow.friend1 == a, FriendshipRow.friend2 == b)
                )
                if res.scalars().first() is None:
                    return None
                users = await self._load_users(session, (a, b))
                return Friendship(users[a], users[b])
        except STORE_ERRORS as e:
            logger.error(f"get_friendship failed for {a}/{b}: {e}")
            return None


class SqlMessageRepository(_SqlRepository, MessageRepository):
    NEWEST_FIRST = (MessageRow.date_sent.desc(), MessageRow.message_id.desc())

    async def _list(self, *criteria) -> List[Message]:
        try:
            async with self._session() as session:
                res = await session.execute(select(MessageRow).where(*criteria).order_by(*self.NEWEST_FIRST))
                return [_to_message(row) for row in res.scalars().all()]
        except STORE_ERRORS as e:
            logger.error(f"Listing messages failed: {e}")
            return []

    async def _flag(self, message_id: int, party_column, party: str, **values) -> bool:
        async with self._session() as session:
            try:
                res = await session.execute(
                    update(MessageRow)
                    .where(and_(MessageRow.message_id == message_id, party_column == party))
                    .values(**values)
                )
                await session.commit()
                return res.rowcount == 1
            except STORE_ERRORS as e:
                logger.error(f"Updating message {message_id} ({', '.join(values)}) failed: {e}")
                return False

    async def get_message(self, message_id: int) -> Optional[Message]:
        try:
            async with self._session() as session:
                res = await session.execute(select(MessageRow).where(MessageRow.message_id == message_id))
                row = res.scalars().first()
                return _to_message(row) if row else None
        except STORE_ERRORS as e:
            logger.error(f"get_message failed for {message_id}: {e}")
            return None

    async def list_sent(self, sender: str) -> List[Message]:
        return await self._list(MessageRow.sender == sender, MessageRow.deleted_for_sender.is_(False))

    async def list_received(self, recipient: str) -> List[Message]:
        return await self._list(MessageRow.recipient == recipient, MessageRow.deleted_for_recipient.is_(False))

    async def list_all(self) -> List[Message]:
        return await self._list()

    async def create_message(self, sender: str, recipient: str, subject: str, body: str) -> Optional[int]:
        async with self._session() as session:
            try:
                m = MessageRow(sender=sender, recipient=recipient, subject=subject, body=body)
                session.add(m)
                await session.commit()
                await session.refresh(m)
                return m.message_id
            except IntegrityError as e:
                await session.rollback()
                logger.error(f"Integrity constraint failed adding message {sender}->{recipient}: {e.orig}")
                return None
            except STORE_ERRORS as e:
                logger.error(f"create_message failed for {sender}->{recipient}: {e}")
                return None

    async def mark_read(self, message_id: int, recipient: str) -> bool:
        return await self._flag(message_id, MessageRow.recipient, recipient, read_status=True)

    async def delete_for_sender(self, message_id: int, sender: str) -> bool:
        return await self._flag(message_id, MessageRow.sender, sender, deleted_for_sender=True)

    async def delete_for_recipient(self, message_id: int, recipient: str) -> bool:
        return await self._flag(message_id, MessageRow.recipient, recipient, deleted_for_recipient=True)


class SqlBlogRepository(_SqlRepository, BlogRepository):

    async def _first(self, *criteria) -> Optional[BlogEntry]:
        try:
            async with self._session() as session:
                res = await session.execute(
                    select(BlogEntryRow).where(*criteria).order_by(BlogEntryRow.entry_id.asc()).limit(1)
                )
                row = res.scalars().first()
                return _to_entry(row) if row else None
        except STORE_ERRORS as e:
            logger.error(f"Blog entry lookup failed: {e}")
            return None

    async def _list(self, *criteria) -> List[BlogEntry]:
        try:
            async with self._session() as session:
                res = await session.execute(
                    select(BlogEntryRow).where(*criteria).order_by(BlogEntryRow.entry_id.desc())
                )
                return [_to_entry(row) for row in res.scalars().all()]
        except STORE_ERRORS as e:
            logger.error(f"Listing blog entries failed: {e}")
            return []

    async def add_entry(self, username: str, title: str, content: str) -> Optional[int]:
        async with self._session() as session:
            try:
                entry = BlogEntryRow(username=username, title=title, content=content)
                session.add(entry)
                await session.commit()
                await session.refresh(entry)
                return entry.entry_id
            except IntegrityError as e:
                await session.rollback()
                logger.error(f"Integrity constraint failed adding blog entry for {username}: {e.orig}")
                return None
            except STORE_ERRORS as e:
                logger.error(f"add_entry failed for {username}: {e}")
                return None

    async def remove_entry(self, entry_id: int) -> bool:
        async with self._session() as session:
            try:
                res = await session.execute(delete(BlogEntryRow).where(BlogEntryRow.entry_id == entry_id))
                await session.commit()
                return res.rowcount > 0
            except STORE_ERRORS as e:
                logger.error(f"remove_entry failed for {entry_id}: {e}")
                return False

    async def get_entry(self, entry_id: int) -> Optional[BlogEntry]:
        return await self._first(BlogEntryRow.entry_id == entry_id)

    async def find_by_title(self, title: str) -> Optional[BlogEntry]:
        return await self._first(BlogEntryRow.title == title)

    async def find_by_author(self, username: str) -> List[BlogEntry]:
        return await self._list(BlogEntryRow.username == username)

    async def list_all(self) -> List[BlogEntry]:
        return await self._list()
