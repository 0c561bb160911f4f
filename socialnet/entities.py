"""
Plain value objects handed out by the repositories.

Rows live in the store; these are per-call copies and carry no session state.
Usernames compare case-sensitively by code point.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Union


@dataclass(frozen=True, order=True)
class User:
    """Identity, equality and ordering are by username only."""
    username: str
    password: str = field(default='', repr=False, compare=False)
    first_name: Optional[str] = field(default=None, compare=False)
    last_name: Optional[str] = field(default=None, compare=False)
    is_admin: bool = field(default=False, compare=False)


@dataclass(frozen=True)
class Friendship:
    """Unordered pair of users, always held with the smaller username first.

    Friendship(a, b) == Friendship(b, a) and both hash the same. A pair of
    identical users is left as given.
    """
    user1: User
    user2: User

    def __post_init__(self):
        if self.user1 > self.user2:
            first, second = self.user2, self.user1
            object.__setattr__(self, 'user1', first)
            object.__setattr__(self, 'user2', second)

    @property
    def usernames(self) -> Tuple[str, str]:
        return self.user1.username, self.user2.username

    def involves(self, username: str) -> bool:
        return username in self.usernames

    def other(self, username: str) -> User:
        """Return the member of the pair that is not `username`."""
        if username == self.user1.username:
            return self.user2
        if username == self.user2.username:
            return self.user1
        raise ValueError(f'{username} is not part of this friendship')


def canonical_pair(username1: str, username2: str) -> Tuple[str, str]:
    return (username1, username2) if username1 <= username2 else (username2, username1)


@dataclass(frozen=True)
class Message:
    message_id: int
    sender: str = field(compare=False)
    recipient: str = field(compare=False)
    subject: str = field(compare=False)
    body: str = field(compare=False)
    read_status: bool = field(default=False, compare=False)
    deleted_for_sender: bool = field(default=False, compare=False)
    deleted_for_recipient: bool = field(default=False, compare=False)
    timestamp: Optional[datetime] = field(default=None, compare=False)

    def __lt__(self, other: 'Message'):
        # newest first; same-second sends fall back to the later id
        if not isinstance(other, Message):
            return NotImplemented
        return (self.timestamp, self.message_id) > (other.timestamp, other.message_id)


@dataclass(frozen=True)
class BlogEntry:
    entry_id: int
    username: str = field(compare=False)
    title: Optional[str] = field(default=None, compare=False)
    content: Optional[str] = field(default=None, compare=False)

    def __lt__(self, other: 'BlogEntry'):
        if not isinstance(other, BlogEntry):
            return NotImplemented
        return self.entry_id > other.entry_id


class SendFailure(Enum):
    """Reasons a message could not be sent, keyed by the legacy status code."""
    NOT_FRIENDS = -1
    PARTY_MISSING = -2
    STORE_FAILURE = 0

    @property
    def code(self) -> int:
        return self.value


@dataclass(frozen=True)
class MessageSent:
    message_id: int

    @property
    def code(self) -> int:
        return self.message_id


SendOutcome = Union[MessageSent, SendFailure]
