from sqlalchemy import Column, Integer, String, ForeignKey
from . import Base

class BlogEntry(Base):
    __tablename__ = 'blog_entries'
    entry_id = Column('entryID', Integer, primary_key=True, autoincrement=True)
    username = Column(String(20), ForeignKey('users.username', ondelete='CASCADE'), index=True, nullable=False)
    title = Column(String(150), nullable=True)
    content = Column(String(600), nullable=True)
