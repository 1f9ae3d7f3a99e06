"""create users, tables and games

Revision ID: 4c1e9a7d2b10
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c1e9a7d2b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nickname', sa.String(length=10), nullable=False),
        sa.Column('target', sa.Integer(), nullable=False, server_default='25'),
        sa.Column('wins', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('losses', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('users') as batch_op:
        batch_op.create_index(batch_op.f('ix_users_nickname'), ['nickname'], unique=True)

    op.create_table(
        'tables',
        sa.Column('table_num', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='available'),
        sa.Column('player1', sa.String(length=10), nullable=True),
        sa.Column('player2', sa.String(length=10), nullable=True),
        sa.Column('score1', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('score2', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('target1', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('target2', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('color1', sa.String(length=16), nullable=True),
        sa.Column('color2', sa.String(length=16), nullable=True),
        sa.Column('current_turn', sa.String(length=8), nullable=True),
        sa.Column('inning', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('table_num'),
    )

    op.create_table(
        'games',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('table_num', sa.Integer(), nullable=False),
        sa.Column('player1', sa.String(length=10), nullable=True),
        sa.Column('player2', sa.String(length=10), nullable=True),
        sa.Column('score1', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('score2', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('winner', sa.String(length=10), nullable=True),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('games') as batch_op:
        batch_op.create_index(batch_op.f('ix_games_table_num'), ['table_num'], unique=False)


def downgrade():
    with op.batch_alter_table('games') as batch_op:
        batch_op.drop_index(batch_op.f('ix_games_table_num'))
    op.drop_table('games')
    op.drop_table('tables')
    with op.batch_alter_table('users') as batch_op:
        batch_op.drop_index(batch_op.f('ix_users_nickname'))
    op.drop_table('users')
