"""
In-memory repositories sharing one `InMemoryStore`.

The store mirrors the relational schema's guarantees: unique usernames,
foreign keys on every username reference and ON DELETE CASCADE from users.
"""
from dataclasses import replace
from datetime import datetime, timezone
from itertools import count
from typing import Dict, List, Optional, Set, Tuple
from ..entities import User, Friendship, Message, BlogEntry, canonical_pair
from .base import UserRepository, FriendshipRepository, MessageRepository, BlogRepository


class InMemoryStore:
    def __init__(self):
        self.users: Dict[str, User] = {}
        self.friends: Set[Tuple[str, str]] = set()
        self.messages: Dict[int, Message] = {}
        self.entries: Dict[int, BlogEntry] = {}
        self._message_ids = count(1)
        self._entry_ids = count(1)

    def next_message_id(self) -> int:
        return next(self._message_ids)

    def next_entry_id(self) -> int:
        return next(self._entry_ids)

    def delete_user(self, username: str) -> bool:
        if self.users.pop(username, None) is None:
            return False
        self.friends = {pair for pair in self.friends if username not in pair}
        self.messages = {
            mid: m for mid, m in self.messages.items()
            if username not in (m.sender, m.recipient)
        }
        self.entries = {eid: e for eid, e in self.entries.items() if e.username != username}
        return True


class _MemoryRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store


class MemoryUserRepository(_MemoryRepository, UserRepository):

    async def get_user(self, username: str) -> Optional[User]:
        return self.store.users.get(username)

    async def add_user(self, user: User) -> bool:
        if user.username in self.store.users:
            return False
        self.store.users[user.username] = user
        return True

    async def remove_user(self, username: str) -> bool:
        return self.store.delete_user(username)


class MemoryFriendshipRepository(_MemoryRepository, FriendshipRepository):

    def _pair_to_friendship(self, pair) -> Friendship:
        return Friendship(self.store.users[pair[0]], self.store.users[pair[1]])

    async def add_friendship(self, username1: str, username2: str) -> bool:
        pair = canonical_pair(username1, username2)
        if pair in self.store.friends:
            return False
        if not all(name in self.store.users for name in pair):
            return False
        self.store.friends.add(pair)
        return True

    async def remove_friendship(self, username1: str, username2: str) -> bool:
        pair = canonical_pair(username1, username2)
        if pair not in self.store.friends:
            return False
        self.store.friends.discard(pair)
        return True

    async def remove_user_friends(self, username: str) -> bool:
        before = len(self.store.friends)
        self.store.friends = {pair for pair in self.store.friends if username not in pair}
        return len(self.store.friends) < before

    async def find_friendships(self, username: str) -> List[Friendship]:
        return [self._pair_to_friendship(pair) for pair in sorted(self.store.friends) if username in pair]

    async def get_friendship(self, username1: str, username2: str) -> Optional[Friendship]:
        pair = canonical_pair(username1, username2)
        if pair not in self.store.friends:
            return None
        return self._pair_to_friendship(pair)


class MemoryMessageRepository(_MemoryRepository, MessageRepository):

    def _update(self, message_id: int, party_field: str, party: str, **values) -> bool:
        m = self.store.messages.get(message_id)
        if m is None or getattr(m, party_field) != party:
            return False
        self.store.messages[message_id] = replace(m, **values)
        return True

    async def get_message(self, message_id: int) -> Optional[Message]:
        return self.store.messages.get(message_id)

    async def list_sent(self, sender: str) -> List[Message]:
        return sorted(m for m in self.store.messages.values() if m.sender == sender and not m.deleted_for_sender)

    async def list_received(self, recipient: str) -> List[Message]:
        return sorted(
            m for m in self.store.messages.values() if m.recipient == recipient and not m.deleted_for_recipient
        )

    async def list_all(self) -> List[Message]:
        return sorted(self.store.messages.values())

    async def create_message(self, sender: str, recipient: str, subject: str, body: str) -> Optional[int]:
        if sender not in self.store.users or recipient not in self.store.users:
            return None
        message_id = self.store.next_message_id()
        self.store.messages[message_id] = Message(
            message_id=message_id,
            sender=sender,
            recipient=recipient,
            subject=subject,
            body=body,
            timestamp=datetime.now(timezone.utc),
        )
        return message_id

    async def mark_read(self, message_id: int, recipient: str) -> bool:
        return self._update(message_id, 'recipient', recipient, read_status=True)

    async def delete_for_sender(self, message_id: int, sender: str) -> bool:
        return self._update(message_id, 'sender', sender, deleted_for_sender=True)

    async def delete_for_recipient(self, message_id: int, recipient: str) -> bool:
        return self._update(message_id, 'recipient', recipient, deleted_for_recipient=True)


class MemoryBlogRepository(_MemoryRepository, BlogRepository):

    async def add_entry(self, username: str, title: str, content: str) -> Optional[int]:
        if username not in self.store.users:
            return None
        entry_id = self.store.next_entry_id()
        self.store.entries[entry_id] = BlogEntry(entry_id=entry_id, username=username, title=title, content=content)
        return entry_id

    async def remove_entry(self, entry_id: int) -> bool:
        return self.store.entries.pop(entry_id, None) is not None

    async def get_entry(self, entry_id: int) -> Optional[BlogEntry]:
        return self.store.entries.get(entry_id)

    async def find_by_title(self, title: str) -> Optional[BlogEntry]:
        matches = [e for e in self.store.entries.values() if e.title == title]
        return min(matches, key=lambda e: e.entry_id) if matches else None

    async def find_by_author(self, username: str) -> List[BlogEntry]:
        return sorted(e for e in self.store.entries.values() if e.username == username)

    async def list_all(self) -> List[BlogEntry]:
        return sorted(self.store.entries.values())
