from pydantic import BaseModel
from typing import Optional

class UserOut(BaseModel):
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_admin: bool = False

    class Config:
        from_attributes = True

class OutcomeOut(BaseModel):
    """Named outcome of a request, plus whatever it attaches."""
    view: str
    message: Optional[str] = None

class RegisterOut(OutcomeOut):
    user: Optional[UserOut] = None

class LoginOut(OutcomeOut):
    access_token: Optional[str] = None
    token_type: str = 'bearer'
    user: Optional[UserOut] = None

class AdminCheckOut(BaseModel):
    username: str
    is_admin: bool

class ActionOkOut(BaseModel):
    ok: bool = True
    message: Optional[str] = None
