import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Form, Response, status
from ..schemas.users import RegisterOut, LoginOut, UserOut, AdminCheckOut, ActionOkOut
from ..auth import create_access_token, get_current_user
from ..core import REGISTRATIONS
from ..dependencies import get_service
from ..entities import User
from ..services import SocialService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post('/register', response_model=RegisterOut, status_code=status.HTTP_201_CREATED)
async def register(
    response: Response,
    username: str = Form(''),
    password: str = Form(''),
    first_name: Optional[str] = Form(None, alias='firstName'),
    last_name: Optional[str] = Form(None, alias='lastName'),
    # self-service admin flag, kept from the legacy register form
    is_admin: bool = Form(False, alias='isAdmin'),
    service: SocialService = Depends(get_service),
):
    user = User(
        username=username,
        password=password,
        first_name=first_name,
        last_name=last_name,
        is_admin=is_admin,
    )
    if await service.add_user(user):
        REGISTRATIONS.labels(result='success').inc()
        logger.info({'msg': 'user_registered', 'username': username})
        return {'view': 'registerSuccess', 'user': UserOut.model_validate(user)}

    REGISTRATIONS.labels(result='failed').inc()
    logger.info({'msg': 'register_failed', 'username': username})
    response.status_code = status.HTTP_409_CONFLICT
    return {'view': 'registerFailed', 'message': f'Could not register {username!r}'}


@router.post('/login', response_model=LoginOut)
async def login(
    response: Response,
    username: str = Form(''),
    password: str = Form(''),
    service: SocialService = Depends(get_service),
):
    if not username.strip() or not password.strip():
        response.status_code = status.HTTP_400_BAD_REQUEST
        return {'view': 'error', 'message': 'Username and password are required'}

    user = await service.login(username, password)
    if not user:
        logger.info({'msg': 'login_failed', 'username': username})
        response.status_code = status.HTTP_401_UNAUTHORIZED
        return {'view': 'loginFailed', 'message': 'No such username/password'}

    token = create_access_token({'sub': user.username})
    return {
        'view': 'loginSuccessful',
        'access_token': token,
        'user': UserOut.model_validate(user),
    }


@router.get('/me', response_model=UserOut)
async def me(
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    user = await service.find_user_by_username(current_user['username'])
    if not user:
        raise HTTPException(404, 'User not found')
    return user


@router.get('/{username}', response_model=UserOut)
async def get_user(username: str, service: SocialService = Depends(get_service)):
    user = await service.find_user_by_username(username)
    if not user:
        raise HTTPException(404, 'User not found')
    return user


@router.get('/{username}/is-admin', response_model=AdminCheckOut)
async def is_admin(username: str, service: SocialService = Depends(get_service)):
    return {'username': username, 'is_admin': await service.check_if_user_is_admin(username)}


@router.delete('/{username}', response_model=ActionOkOut)
async def remove_user(
    username: str,
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    actor = current_user['username']
    if actor != username and not await service.check_if_user_is_admin(actor):
        raise HTTPException(403, 'Only admins can remove other users')
    if not await service.remove_user(username):
        raise HTTPException(404, 'User not found')
    logger.info({'msg': 'user_removed', 'username': username, 'by': actor})
    return {'ok': True}
