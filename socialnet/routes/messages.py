from fastapi import APIRouter, Depends, HTTPException, Form, Response, status
from typing import List
from ..schemas.messages import MessageOut, SendOut
from ..schemas.users import ActionOkOut
from ..auth import get_current_user
from ..dependencies import get_service
from ..entities import MessageSent, SendFailure
from ..services import SocialService

router = APIRouter()

FAILURE_VIEWS = {
    SendFailure.NOT_FRIENDS: (status.HTTP_403_FORBIDDEN, 'notFriends', 'You can only message your friends'),
    SendFailure.PARTY_MISSING: (status.HTTP_404_NOT_FOUND, 'userNotFound', 'Sender or recipient does not exist'),
    SendFailure.STORE_FAILURE: (status.HTTP_500_INTERNAL_SERVER_ERROR, 'sendFailed', 'Message could not be sent'),
}


@router.post('/', response_model=SendOut, status_code=status.HTTP_201_CREATED)
async def send(
    response: Response,
    recipient: str = Form(...),
    subject: str = Form(...),
    body: str = Form(...),
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    outcome = await service.send_message(current_user['username'], recipient, subject, body)
    if isinstance(outcome, MessageSent):
        return {'view': 'messageSent', 'message_id': outcome.message_id, 'code': outcome.code}
    status_code, view, message = FAILURE_VIEWS[outcome]
    response.status_code = status_code
    return {'view': view, 'message': message, 'code': outcome.code}


@router.get('/sent', response_model=List[MessageOut])
async def sent(
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    return await service.get_sent_messages_for_user(current_user['username'])


@router.get('/received', response_model=List[MessageOut])
async def received(
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    return await service.get_received_messages_for_user(current_user['username'])


@router.get('/all', response_model=List[MessageOut])
async def all_messages(
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    if not await service.check_if_user_is_admin(current_user['username']):
        raise HTTPException(403, 'Admins only')
    return await service.get_all_messages()


@router.get('/{message_id}', response_model=MessageOut)
async def message_detail(
    message_id: int,
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    m = await service.get_message_by_id(message_id)
    # only the two parties may look at a message, whatever its delete flags
    if not m or current_user['username'] not in (m.sender, m.recipient):
        raise HTTPException(404, 'Message not found')
    return m


@router.post('/{message_id}/read', response_model=ActionOkOut)
async def mark_read(
    message_id: int,
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    return {'ok': await service.mark_message_as_read(message_id, current_user['username'])}


@router.delete('/{message_id}/sent', response_model=ActionOkOut)
async def delete_sent(
    message_id: int,
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    return {'ok': await service.delete_message_for_sender(message_id, current_user['username'])}


@router.delete('/{message_id}/received', response_model=ActionOkOut)
async def delete_received(
    message_id: int,
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    return {'ok': await service.delete_message_for_recipient(message_id, current_user['username'])}
