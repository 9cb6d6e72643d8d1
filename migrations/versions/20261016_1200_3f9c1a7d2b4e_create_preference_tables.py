"""create_preference_tables

Revision ID: 3f9c1a7d2b4e
Revises:
Create Date: 2026-10-16 12:00:00.000000+00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f9c1a7d2b4e'
down_revision = None
branch_labels = None
depends_on = None


SCOPED_TABLES = ('COR_MODULE_PREFERENCE', 'COR_ROLE_PREFERENCE', 'COR_USER_PREFERENCE')


def _pk_column():
    return sa.Column(
        'C_ID', sa.Integer(),
        sa.ForeignKey('COR_PREFERENCE.C_ID', ondelete='CASCADE'),
        primary_key=True,
    )


def upgrade():
    # Shared base table, one row per preference of any scope
    op.create_table(
        'COR_PREFERENCE',
        sa.Column('C_ID', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('C_DTYPE', sa.String(31), nullable=False),
        sa.Column('C_VALUE', sa.String(255), nullable=True),
        sa.Column('C_BINVALUE', sa.LargeBinary(), nullable=True),
        sa.Column('C_FLOAT_VALUE', sa.Float(), nullable=True),
        sa.Column('C_DESCRIPTION', sa.Text(), nullable=True),
        sa.Column('C_MINIMUM', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('C_MAXIMUM', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('C_FROM_FILE', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('C_VERSION', sa.Integer(), nullable=False),
    )

    op.create_table(
        'COR_APP_PREFERENCE',
        _pk_column(),
        sa.Column('C_TYPE', sa.String(20), nullable=False),
        sa.Column('C_KEY', sa.String(255), nullable=False),
        sa.UniqueConstraint('C_TYPE', 'C_KEY', name='UQ_APP_PREFERENCE'),
    )

    for table in SCOPED_TABLES:
        op.create_table(
            table,
            _pk_column(),
            sa.Column('C_TYPE', sa.String(20), nullable=False),
            sa.Column('C_OWNER', sa.String(255), nullable=False),
            sa.Column('C_KEY', sa.String(255), nullable=False),
            sa.UniqueConstraint(
                'C_TYPE', 'C_OWNER', 'C_KEY',
                name='UQ_' + table.replace('COR_', ''),
            ),
        )


def downgrade():
    for table in reversed(SCOPED_TABLES):
        op.drop_table(table)
    op.drop_table('COR_APP_PREFERENCE')
    op.drop_table('COR_PREFERENCE')
