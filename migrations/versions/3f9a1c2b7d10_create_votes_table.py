"""create votes table

Revision ID: 3f9a1c2b7d10
Revises: 
Create Date: 2026-02-14 18:21:07.412904

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f9a1c2b7d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if 'votes' not in inspector.get_table_names():
        op.create_table(
            'votes',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('comic_id', sa.String(length=64), nullable=False),
            sa.Column('visitor_id', sa.String(length=64), nullable=False),
        )
        # one vote per visitor per comic
        op.create_index('ix_votes_comic_visitor', 'votes', ['comic_id', 'visitor_id'], unique=True)


def downgrade():
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if 'votes' in inspector.get_table_names():
        op.drop_index('ix_votes_comic_visitor', table_name='votes')
        op.drop_table('votes')
