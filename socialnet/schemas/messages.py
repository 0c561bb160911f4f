from pydantic import BaseModel
from datetime import datetime
from typing import Optional

class MessageOut(BaseModel):
    message_id: int
    sender: str
    recipient: str
    subject: str
    body: str
    read_status: bool
    deleted_for_sender: bool
    deleted_for_recipient: bool
    timestamp: Optional[datetime] = None

    class Config:
        from_attributes = True

class SendOut(BaseModel):
    view: str
    message: Optional[str] = None
    message_id: Optional[int] = None
    # legacy status: the id on success, -1 not friends, -2 unknown user, 0 store failure
    code: int
