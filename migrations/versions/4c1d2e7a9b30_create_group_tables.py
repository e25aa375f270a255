"""create_group_tables

Revision ID: 4c1d2e7a9b30
Revises:
Create Date: 2026-10-19 09:12:05.114302

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d2e7a9b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles, groups and group_members with RLS."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profiles_user_id', 'profiles', ['user_id'], unique=True)

    op.create_table('groups',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('owner_id', sa.UUID(), nullable=False),
        sa.Column('join_code', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['owner_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('join_code', name='uq_groups_join_code'),
    )
    op.create_index('ix_groups_owner_id', 'groups', ['owner_id'], unique=False)

    op.create_table('group_members',
        sa.Column('group_id', sa.UUID(), nullable=False),
        sa.Column('member_id', sa.UUID(), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('joined_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['member_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('group_id', 'member_id'),
    )
    op.create_index('ix_group_members_member_id', 'group_members', ['member_id'], unique=False)

    op.execute("ALTER TABLE profiles ENABLE ROW LEVEL SECURITY;")
    op.execute("ALTER TABLE groups ENABLE ROW LEVEL SECURITY;")
    op.execute("ALTER TABLE group_members ENABLE ROW LEVEL SECURITY;")

    op.execute("""
        CREATE POLICY profiles_select_own ON profiles
            FOR SELECT USING (user_id = (SELECT auth.uid()));
    """)

    # Any signed-in user may probe join codes; owners create their own groups.
    op.execute("""
        CREATE POLICY groups_select ON groups
            FOR SELECT USING ((SELECT auth.uid()) IS NOT NULL);
    """)
    op.execute("""
        CREATE POLICY groups_insert_owner ON groups
            FOR INSERT WITH CHECK (
                owner_id IN (SELECT id FROM profiles WHERE user_id = (SELECT auth.uid()))
            );
    """)
    op.execute("""
        CREATE POLICY groups_delete_owner ON groups
            FOR DELETE USING (
                owner_id IN (SELECT id FROM profiles WHERE user_id = (SELECT auth.uid()))
            );
    """)

    op.execute("""
        CREATE POLICY group_members_select ON group_members
            FOR SELECT USING (
                member_id IN (SELECT id FROM profiles WHERE user_id = (SELECT auth.uid()))
                OR group_id IN (
                    SELECT g.id FROM groups g
                    JOIN profiles p ON p.id = g.owner_id
                    WHERE p.user_id = (SELECT auth.uid())
                )
            );
    """)
    op.execute("""
        CREATE POLICY group_members_insert_self ON group_members
            FOR INSERT WITH CHECK (
                member_id IN (SELECT id FROM profiles WHERE user_id = (SELECT auth.uid()))
            );
    """)


def downgrade() -> None:
    """Drop group tables and RLS policies."""
    op.execute("DROP POLICY IF EXISTS group_members_insert_self ON group_members;")
    op.execute("DROP POLICY IF EXISTS group_members_select ON group_members;")
    op.execute("DROP POLICY IF EXISTS groups_delete_owner ON groups;")
    op.execute("DROP POLICY IF EXISTS groups_insert_owner ON groups;")
    op.execute("DROP POLICY IF EXISTS groups_select ON groups;")
    op.execute("DROP POLICY IF EXISTS profiles_select_own ON profiles;")

    op.drop_index('ix_group_members_member_id', table_name='group_members')
    op.drop_table('group_members')
    op.drop_index('ix_groups_owner_id', table_name='groups')
    op.drop_table('groups')
    op.drop_index('ix_profiles_user_id', table_name='profiles')
    op.drop_table('profiles')
