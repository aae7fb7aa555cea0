"""create leaderboard table

Revision ID: 5a7c9e2b41d0
Revises:
Create Date: 2025-09-14 10:20:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5a7c9e2b41d0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)

    # Databases created by hand before migrations existed already have the table
    if 'leaderboard' in set(insp.get_table_names()):
        return

    op.create_table(
        'leaderboard',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('score', sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_leaderboard_name'), 'leaderboard', ['name'], unique=True)


def downgrade():
    op.drop_index(op.f('ix_leaderboard_name'), table_name='leaderboard')
    op.drop_table('leaderboard')
