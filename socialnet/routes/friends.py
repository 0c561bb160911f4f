import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from ..schemas.friendships import FriendshipOut, AreFriendsOut
from ..schemas.users import ActionOkOut
from ..auth import get_current_user
from ..dependencies import get_service
from ..services import SocialService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get('/', response_model=List[FriendshipOut])
async def my_friendships(
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    return await service.find_friendships_by_username(current_user['username'])


@router.post('/{username}', response_model=ActionOkOut, status_code=status.HTTP_201_CREATED)
async def befriend(
    username: str,
    response: Response,
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    me = current_user['username']
    if await service.add_friendship(me, username):
        logger.info({'msg': 'friendship_added', 'users': [me, username]})
        return {'ok': True}
    response.status_code = status.HTTP_409_CONFLICT
    return {'ok': False, 'message': 'friendshipFailed'}


@router.delete('/{username}', response_model=ActionOkOut)
async def unfriend(
    username: str,
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    if not await service.remove_friendship(current_user['username'], username):
        raise HTTPException(404, 'Friendship not found')
    return {'ok': True}


@router.get('/{username}/status', response_model=AreFriendsOut)
async def friendship_status(
    username: str,
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    friendship = await service.check_friendship_status(current_user['username'], username)
    return {'friends': friendship is not None}
