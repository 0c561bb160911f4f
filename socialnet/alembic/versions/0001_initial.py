"""initial

Revision ID: 0001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    # friend order is by code point, whatever the database collation
    collate = ' COLLATE "C"' if op.get_context().dialect.name == 'postgresql' else ''
    op.create_table('users',
        sa.Column('username', sa.String(20), primary_key=True),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('firstName', sa.String(20), nullable=True),
        sa.Column('lastName', sa.String(30), nullable=True),
        sa.Column('isAdmin', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_table('friends',
        sa.Column('friend1', sa.String(20), sa.ForeignKey('users.username', ondelete='CASCADE'), primary_key=True),
        sa.Column('friend2', sa.String(20), sa.ForeignKey('users.username', ondelete='CASCADE'), primary_key=True),
        sa.CheckConstraint(f'friend1 <= friend2{collate}', name='ck_friends_canonical_order'),
    )
    op.create_index('ix_friends_friend2', 'friends', ['friend2'])
    op.create_table('messages',
        sa.Column('messageID', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('sender', sa.String(20), sa.ForeignKey('users.username', ondelete='CASCADE'), nullable=False),
        sa.Column('recipient', sa.String(20), sa.ForeignKey('users.username', ondelete='CASCADE'), nullable=False),
        sa.Column('subject', sa.String(100), nullable=False),
        sa.Column('body', sa.String(500), nullable=False),
        sa.Column('readStatus', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('deletedForSender', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('deletedForRecipient', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('dateSent', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_messages_sender', 'messages', ['sender'])
    op.create_index('ix_messages_recipient', 'messages', ['recipient'])
    op.create_index('ix_messages_dateSent', 'messages', ['dateSent'])
    op.create_table('blog_entries',
        sa.Column('entryID', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(20), sa.ForeignKey('users.username', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(150), nullable=True),
        sa.Column('content', sa.String(600), nullable=True),
    )
    op.create_index('ix_blog_entries_username', 'blog_entries', ['username'])

def downgrade():
    op.drop_table('blog_entries')
    op.drop_table('messages')
    op.drop_table('friends')
    op.drop_table('users')
