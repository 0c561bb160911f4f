from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
from ..schemas.blog import BlogEntryIn, BlogEntryOut
from ..schemas.users import ActionOkOut
from ..auth import get_current_user
from ..dependencies import get_service
from ..services import SocialService

router = APIRouter()


@router.post('/', response_model=BlogEntryOut, status_code=status.HTTP_201_CREATED)
async def create(
    payload: BlogEntryIn,
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    entry_id = await service.add_blog_entry(current_user['username'], payload.title, payload.content)
    if entry_id is None:
        raise HTTPException(400, 'Blog entry could not be added')
    return await service.find_blog_entry_by_id(entry_id)


@router.get('/', response_model=List[BlogEntryOut])
async def all_entries(service: SocialService = Depends(get_service)):
    return await service.find_all_blog_entries()


@router.get('/search', response_model=BlogEntryOut)
async def search(title: str, service: SocialService = Depends(get_service)):
    entry = await service.find_blog_entry_by_title(title)
    if not entry:
        raise HTTPException(404, 'No entry with that title')
    return entry


@router.get('/author/{username}', response_model=List[BlogEntryOut])
async def by_author(username: str, service: SocialService = Depends(get_service)):
    return await service.find_blog_entries_by_author(username)


@router.get('/{entry_id}', response_model=BlogEntryOut)
async def get_entry(entry_id: int, service: SocialService = Depends(get_service)):
    entry = await service.find_blog_entry_by_id(entry_id)
    if not entry:
        raise HTTPException(404, 'Blog entry not found')
    return entry


@router.delete('/{entry_id}', response_model=ActionOkOut)
async def remove(
    entry_id: int,
    current_user: dict = Depends(get_current_user),
    service: SocialService = Depends(get_service),
):
    entry = await service.find_blog_entry_by_id(entry_id)
    if not entry:
        raise HTTPException(404, 'Blog entry not found')
    actor = current_user['username']
    if entry.username != actor and not await service.check_if_user_is_admin(actor):
        raise HTTPException(403, 'Only the author or an admin can remove this entry')
    return {'ok': await service.remove_blog_entry(entry_id)}
