from pydantic import BaseModel
from typing import Optional

class BlogEntryIn(BaseModel):
    title: str
    content: str

class BlogEntryOut(BaseModel):
    entry_id: int
    username: str
    title: Optional[str] = None
    content: Optional[str] = None

    class Config:
        from_attributes = True
