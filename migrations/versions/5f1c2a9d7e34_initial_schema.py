"""Initial schema: genealogical records, users and former countries

Revision ID: 5f1c2a9d7e34
Revises:
Create Date: 2026-10-19 09:12:40.118302

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5f1c2a9d7e34'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'Individual',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('municipality_of_birth', sa.String(length=128), nullable=True),
        sa.Column('state_of_birth', sa.String(length=64), nullable=True),
        sa.Column('country_of_birth', sa.String(length=64), nullable=True),
        sa.Column('date_of_death', sa.Date(), nullable=True),
        sa.Column('municipality_of_death', sa.String(length=128), nullable=True),
        sa.Column('state_of_death', sa.String(length=64), nullable=True),
        sa.Column('country_of_death', sa.String(length=64), nullable=True),
        sa.Column('gender', sa.String(length=64), nullable=True),
        sa.Column('bio', sa.String(length=5000), nullable=True),
        sa.Column('image', sa.Integer(), nullable=True),
        sa.Column('create_at', sa.BigInteger(), nullable=True),
        sa.Column('private', sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'Former_countries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('date_from', sa.Date(), nullable=False),
        sa.Column('date_to', sa.Date(), nullable=False),
        sa.Column('modern_location', sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_former_countries_name', 'Former_countries', ['name'])

    # Records owned by an Individual
    op.create_table(
        'Image',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('individual_id', sa.Integer(), nullable=False),
        sa.Column('url', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['individual_id'], ['Individual.id']),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'Name',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('individual_id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=256), nullable=False),
        sa.Column('middle_name', sa.String(length=256), nullable=True),
        sa.Column('last_name', sa.String(length=256), nullable=False),
        sa.Column('suffix', sa.String(length=256), nullable=True),
        sa.Column('reason_for_change', sa.String(length=256), nullable=True),
        sa.Column('date_from', sa.Date(), nullable=True),
        sa.Column('date_to', sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(['individual_id'], ['Individual.id']),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'Occupation',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('individual_id', sa.Integer(), nullable=False),
        sa.Column('occupation', sa.String(length=256), nullable=False),
        sa.Column('occupation_start', sa.Date(), nullable=True),
        sa.Column('occupation_end', sa.Date(), nullable=True),
        sa.Column('employer', sa.String(length=256), nullable=True),
        sa.Column('country', sa.String(length=256), nullable=True),
        sa.Column('state', sa.String(length=256), nullable=True),
        sa.Column('municipality', sa.String(length=256), nullable=True),
        sa.ForeignKeyConstraint(['individual_id'], ['Individual.id']),
        sa.PrimaryKeyConstraint('id')
    )

    # Edges between Individuals
    op.create_table(
        'Parent_of',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('parent_id', sa.Integer(), nullable=False),
        sa.Column('child_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['parent_id'], ['Individual.id']),
        sa.ForeignKeyConstraint(['child_id'], ['Individual.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_parent_of_parent', 'Parent_of', ['parent_id'])
    op.create_index('idx_parent_of_child', 'Parent_of', ['child_id'])

    op.create_table(
        'Married_to',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('spouse_1_id', sa.Integer(), nullable=False),
        sa.Column('spouse_2_id', sa.Integer(), nullable=True),
        sa.Column('marriage_date', sa.Date(), nullable=False),
        sa.Column('marriage_end_date', sa.Date(), nullable=True),
        sa.Column('reason_for_end', sa.String(length=256), nullable=True),
        sa.ForeignKeyConstraint(['spouse_1_id'], ['Individual.id']),
        sa.ForeignKeyConstraint(['spouse_2_id'], ['Individual.id']),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'Sibling_to',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sibling_1_id', sa.Integer(), nullable=False),
        sa.Column('sibling_2_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['sibling_1_id'], ['Individual.id']),
        sa.ForeignKeyConstraint(['sibling_2_id'], ['Individual.id']),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'User',
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('individual_id', sa.Integer(), nullable=True),
        sa.Column('email_confirm_code', sa.String(length=32), nullable=True),
        sa.Column('password_reset', sa.String(length=32), nullable=True),
        sa.Column('password_reset_issued', sa.BigInteger(), nullable=True),
        sa.Column('email_confirm', sa.Boolean(), nullable=True),
        sa.Column('login_count', sa.Integer(), nullable=True),
        sa.Column('first_failed_login', sa.BigInteger(), nullable=True),
        sa.Column('timestamp', sa.BigInteger(), nullable=True),
        sa.Column('cooldown', sa.BigInteger(), nullable=True),
        sa.Column('profile_complete', sa.Boolean(), nullable=True),
        sa.ForeignKeyConstraint(['individual_id'], ['Individual.id']),
        sa.PrimaryKeyConstraint('email')
    )


def downgrade():
    op.drop_table('User')
    op.drop_table('Sibling_to')
    op.drop_table('Married_to')
    op.drop_index('idx_parent_of_child', table_name='Parent_of')
    op.drop_index('idx_parent_of_parent', table_name='Parent_of')
    op.drop_table('Parent_of')
    op.drop_table('Occupation')
    op.drop_table('Name')
    op.drop_table('Image')
    op.drop_index('idx_former_countries_name', table_name='Former_countries')
    op.drop_table('Former_countries')
    op.drop_table('Individual')
