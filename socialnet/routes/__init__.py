from fastapi import APIRouter
from .users import router as users_router
from .friends import router as friends_router
from .messages import router as messages_router
from .blog import router as blog_router

router = APIRouter()
router.include_router(users_router, prefix='/users', tags=['users'])
router.include_router(friends_router, prefix='/friends', tags=['friends'])
router.include_router(messages_router, prefix='/messages', tags=['messages'])
router.include_router(blog_router, prefix='/blog', tags=['blog'])
