from sqlalchemy import Column, String, Boolean, false
from . import Base

class User(Base):
    __tablename__ = 'users'
    username = Column(String(20), primary_key=True)
    # bcrypt hash, never the plaintext
    password = Column(String(255), nullable=False)
    first_name = Column('firstName', String(20), nullable=True)
    last_name = Column('lastName', String(30), nullable=True)
    is_admin = Column('isAdmin', Boolean, nullable=False, default=False, server_default=false())
