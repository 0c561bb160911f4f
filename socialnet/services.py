"""
Business rules for users, friendships, messages and blog entries.

`SocialService` only talks to the repository interfaces, so any store that
implements them (relational or in-memory) can sit underneath it.
"""
import logging
from dataclasses import replace
from typing import List, Optional
from .auth import hash_password, verify_password
from .core import MESSAGE_SENDS
from .entities import User, Friendship, Message, BlogEntry, MessageSent, SendFailure, SendOutcome
from .repositories import UserRepository, FriendshipRepository, MessageRepository, BlogRepository

logger = logging.getLogger(__name__)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class SocialService:

    def __init__(
        self,
        users: UserRepository,
        friendships: FriendshipRepository,
        messages: MessageRepository,
        blogs: BlogRepository,
    ):
        self.users = users
        self.friendships = friendships
        self.messages = messages
        self.blogs = blogs

    # users

    async def find_user_by_username(self, username: str) -> Optional[User]:
        return await self.users.get_user(username)

    async def find_user_by_username_password(self, username: str, password: str) -> Optional[User]:
        user = await self.users.get_user(username)
        if not user or not verify_password(password, user.password):
            return None
        return user

    async def login(self, username: str, password: str) -> Optional[User]:
        if _blank(username) or _blank(password):
            return None
        return await self.find_user_by_username_password(username, password)

    async def check_if_user_is_admin(self, username: str) -> bool:
        user = await self.users.get_user(username)
        return bool(user and user.is_admin)

    async def add_user(self, user: User) -> bool:
        """Register `user`, whose password is given in plaintext.

        The username is looked up first so an existing account is reported
        as a failure without being touched; the store's unique key backs this
        up if two registrations race.
        """
        if _blank(user.username) or _blank(user.password):
            return False
        if await self.users.get_user(user.username) is not None:
            return False
        return await self.users.add_user(replace(user, password=hash_password(user.password)))

    async def remove_user(self, username: str) -> bool:
        return await self.users.remove_user(username)

    # friendships

    async def add_friendship(self, username1: str, username2: str) -> bool:
        if username1 == username2:
            return False
        return await self.friendships.add_friendship(username1, username2)

    async def remove_friendship(self, username1: str, username2: str) -> bool:
        return await self.friendships.remove_friendship(username1, username2)

    async def remove_user_friends(self, username: str) -> bool:
        return await self.friendships.remove_user_friends(username)

    async def find_friendships_by_username(self, username: str) -> List[Friendship]:
        return await self.friendships.find_friendships(username)

    async def check_friendship_status(self, username1: str, username2: str) -> Optional[Friendship]:
        return await self.friendships.get_friendship(username1, username2)

    # messages

    async def send_message(self, sender: str, recipient: str, subject: str, body: str) -> SendOutcome:
        """Send a message between two friends.

        Checks run in a fixed order: both parties must exist
        (PARTY_MISSING), then they must be friends (NOT_FRIENDS), and only
        then is the row written (STORE_FAILURE if that fails).
        """
        outcome = await self._send(sender, recipient, subject, body)
        label = 'sent' if isinstance(outcome, MessageSent) else outcome.name.lower()
        MESSAGE_SENDS.labels(outcome=label).inc()
        logger.info({'msg': 'message_send', 'sender': sender, 'recipient': recipient, 'outcome': label})
        return outcome

    async def _send(self, sender, recipient, subject, body) -> SendOutcome:
        if await self.users.get_user(sender) is None or await self.users.get_user(recipient) is None:
            return SendFailure.PARTY_MISSING
        if await self.friendships.get_friendship(sender, recipient) is None:
            return SendFailure.NOT_FRIENDS
        message_id = await self.messages.create_message(sender, recipient, subject, body)
        if not message_id:
            return SendFailure.STORE_FAILURE
        return MessageSent(message_id)

    async def get_message_by_id(self, message_id: int) -> Optional[Message]:
        return await self.messages.get_message(message_id)

    async def get_sent_messages_for_user(self, sender: str) -> List[Message]:
        return await self.messages.list_sent(sender)

    async def get_received_messages_for_user(self, recipient: str) -> List[Message]:
        return await self.messages.list_received(recipient)

    async def get_all_messages(self) -> List[Message]:
        return await self.messages.list_all()

    async def mark_message_as_read(self, message_id: int, recipient: str) -> bool:
        return await self.messages.mark_read(message_id, recipient)

    async def delete_message_for_sender(self, message_id: int, sender: str) -> bool:
        return await self.messages.delete_for_sender(message_id, sender)

    async def delete_message_for_recipient(self, message_id: int, recipient: str) -> bool:
        return await self.messages.delete_for_recipient(message_id, recipient)

    # blog entries

    async def add_blog_entry(self, username: str, title: str, content: str) -> Optional[int]:
        return await self.blogs.add_entry(username, title, content)

    async def remove_blog_entry(self, entry_id: int) -> bool:
        return await self.blogs.remove_entry(entry_id)

    async def find_blog_entry_by_id(self, entry_id: int) -> Optional[BlogEntry]:
        return await self.blogs.get_entry(entry_id)

    async def find_blog_entry_by_title(self, title: str) -> Optional[BlogEntry]:
        return await self.blogs.find_by_title(title)

    async def find_blog_entries_by_author(self, username: str) -> List[BlogEntry]:
        return await self.blogs.find_by_author(username)

    async def find_all_blog_entries(self) -> List[BlogEntry]:
        return await self.blogs.list_all()
