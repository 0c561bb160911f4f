from .base import UserRepository, FriendshipRepository, MessageRepository, BlogRepository  # noqa: F401
