from sqlalchemy import Column, String, ForeignKey, CheckConstraint
from . import Base

class Friendship(Base):
    __tablename__ = 'friends'
    # canonical order: friend1 <= friend2, compared by code point
    friend1 = Column(String(20), ForeignKey('users.username', ondelete='CASCADE'), primary_key=True)
    friend2 = Column(String(20), ForeignKey('users.username', ondelete='CASCADE'), primary_key=True, index=True)
    __table_args__ = (
        CheckConstraint('friend1 <= friend2 COLLATE "C"', name='ck_friends_canonical_order').ddl_if(dialect='postgresql'),
        CheckConstraint('friend1 <= friend2', name='ck_friends_canonical_order').ddl_if(dialect='sqlite'),
    )
