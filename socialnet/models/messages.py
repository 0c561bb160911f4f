from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, false, func
from . import Base

class Message(Base):
    __tablename__ = 'messages'
    message_id = Column('messageID', Integer, primary_key=True, autoincrement=True)
    sender = Column(String(20), ForeignKey('users.username', ondelete='CASCADE'), index=True, nullable=False)
    recipient = Column(String(20), ForeignKey('users.username', ondelete='CASCADE'), index=True, nullable=False)
    subject = Column(String(100), nullable=False)
    body = Column(String(500), nullable=False)
    read_status = Column('readStatus', Boolean, nullable=False, default=False, server_default=false())
    deleted_for_sender = Column('deletedForSender', Boolean, nullable=False, default=False, server_default=false())
    deleted_for_recipient = Column('deletedForRecipient', Boolean, nullable=False, default=False, server_default=false())
    date_sent = Column('dateSent', DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
