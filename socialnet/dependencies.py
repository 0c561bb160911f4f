from .services import SocialService
from .repositories.sql import SqlUserRepository, SqlFriendshipRepository, SqlMessageRepository, SqlBlogRepository

SERVICE = None


def build_sql_service(session_factory=None) -> SocialService:
    return SocialService(
        users=SqlUserRepository(session_factory),
        friendships=SqlFriendshipRepository(session_factory),
        messages=SqlMessageRepository(session_factory),
        blogs=SqlBlogRepository(session_factory),
    )


def get_service() -> SocialService:
    global SERVICE
    if SERVICE is None:
        SERVICE = build_sql_service()
    return SERVICE
