from abc import ABC, abstractmethod
from typing import List, Optional
from ..entities import User, Friendship, Message, BlogEntry


class UserRepository(ABC):
    """Storage of user accounts, keyed by username."""

    @abstractmethod
    async def get_user(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    async def add_user(self, user: User) -> bool:
        """Insert the user as given (password already hashed).

        Returns False when the row could not be written, including a
        duplicate username.
        """
        pass

    @abstractmethod
    async def remove_user(self, username: str) -> bool:
        """Delete the user and, through the store's cascade, everything that
        references it. Returns True if a row was deleted."""
        pass


class FriendshipRepository(ABC):

    @abstractmethod
    async def add_friendship(self, username1: str, username2: str) -> bool:
        pass

    @abstractmethod
    async def remove_friendship(self, username1: str, username2: str) -> bool:
        pass

    @abstractmethod
    async def remove_user_friends(self, username: str) -> bool:
        pass

    @abstractmethod
    async def find_friendships(self, username: str) -> List[Friendship]:
        pass

    @abstractmethod
    async def get_friendship(self, username1: str, username2: str) -> Optional[Friendship]:
        pass


class MessageRepository(ABC):

    @abstractmethod
    async def get_message(self, message_id: int) -> Optional[Message]:
        pass

    @abstractmethod
    async def list_sent(self, sender: str) -> List[Message]:
        """Messages from `sender` that the sender has not deleted, newest first."""
        pass

    @abstractmethod
    async def list_received(self, recipient: str) -> List[Message]:
        """Messages to `recipient` that the recipient has not deleted, newest first."""
        pass

    @abstractmethod
    async def list_all(self) -> List[Message]:
        pass

    @abstractmethod
    async def create_message(self, sender: str, recipient: str, subject: str, body: str) -> Optional[int]:
        """Insert a message stamped with the store's current time.

        Returns the generated id, or None if nothing was written.
        """
        pass

    @abstractmethod
    async def mark_read(self, message_id: int, recipient: str) -> bool:
        pass

    @abstractmethod
    async def delete_for_sender(self, message_id: int, sender: str) -> bool:
        pass

    @abstractmethod
    async def delete_for_recipient(self, message_id: int, recipient: str) -> bool:
        pass


class BlogRepository(ABC):

    @abstractmethod
    async def add_entry(self, username: str, title: str, content: str) -> Optional[int]:
        pass

    @abstractmethod
    async def remove_entry(self, entry_id: int) -> bool:
        pass

    @abstractmethod
    async def get_entry(self, entry_id: int) -> Optional[BlogEntry]:
        pass

    @abstractmethod
    async def find_by_title(self, title: str) -> Optional[BlogEntry]:
        """First stored entry with exactly this title; later duplicates are ignored."""
        pass

    @abstractmethod
    async def find_by_author(self, username: str) -> List[BlogEntry]:
        pass

    @abstractmethod
    async def list_all(self) -> List[BlogEntry]:
        pass
