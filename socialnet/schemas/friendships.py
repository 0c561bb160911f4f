from pydantic import BaseModel
from .users import UserOut

class FriendshipOut(BaseModel):
    user1: UserOut
    user2: UserOut

    class Config:
        from_attributes = True

class AreFriendsOut(BaseModel):
    friends: bool
