"""Initial schema: users, catalog, series, rosters, recordings, subscriptions

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_SUBSCRIBER_TYPES = ("New recordings", "Series announcements")


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def upgrade() -> None:
    """Create initial schema and seed subscriber types."""
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("hashed_pwd", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=50), nullable=True),
        sa.Column("fname", sa.String(length=100), nullable=False),
        sa.Column("lname", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("user_id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_table(
        "institutions",
        sa.Column("inst_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("inst_id", name="pk_institutions"),
        sa.UniqueConstraint("name", name="uq_institutions_name"),
    )
    op.create_table(
        "topics",
        sa.Column("topic_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("topic_id", name="pk_topics"),
        sa.UniqueConstraint("name", name="uq_topics_name"),
    )
    op.create_table(
        "user_institution_assoc",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("inst_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.user_id"], ondelete="CASCADE",
            name="fk_user_institution_assoc_user_id_users",
        ),
        sa.ForeignKeyConstraint(
            ["inst_id"], ["institutions.inst_id"], ondelete="CASCADE",
            name="fk_user_institution_assoc_inst_id_institutions",
        ),
        sa.PrimaryKeyConstraint("user_id", "inst_id", name="pk_user_institution_assoc"),
    )
    op.create_table(
        "admins",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.user_id"], ondelete="CASCADE",
            name="fk_admins_user_id_users",
        ),
        sa.PrimaryKeyConstraint("user_id", name="pk_admins"),
    )
    op.create_table(
        "rebbeim",
        sa.Column("rebbi_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=50), nullable=True),
        sa.Column("fname", sa.String(length=100), nullable=False),
        sa.Column("lname", sa.String(length=100), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.user_id"], ondelete="SET NULL",
            name="fk_rebbeim_user_id_users",
        ),
        sa.PrimaryKeyConstraint("rebbi_id", name="pk_rebbeim"),
    )
    op.create_table(
        "shiur_series",
        sa.Column("series_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("rebbi_id", sa.Integer(), nullable=False),
        sa.Column("topic_id", sa.Integer(), nullable=False),
        sa.Column("inst_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "requires_permission", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column("sns_topic_arn", sa.String(length=512), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["rebbi_id"], ["rebbeim.rebbi_id"], name="fk_shiur_series_rebbi_id_rebbeim"
        ),
        sa.ForeignKeyConstraint(
            ["topic_id"], ["topics.topic_id"], name="fk_shiur_series_topic_id_topics"
        ),
        sa.ForeignKeyConstraint(
            ["inst_id"], ["institutions.inst_id"],
            name="fk_shiur_series_inst_id_institutions",
        ),
        sa.PrimaryKeyConstraint("series_id", name="pk_shiur_series"),
    )
    op.create_index("ix_shiur_series_rebbi_id", "shiur_series", ["rebbi_id"])
    op.create_index("ix_shiur_series_topic_id", "shiur_series", ["topic_id"])
    op.create_index("ix_shiur_series_inst_id", "shiur_series", ["inst_id"])

    for table, pk, constraint in (
        ("gabbaim", "gabbai_id", "uq_gabbaim_user_series"),
        ("shiur_participants", "participant_id", "uq_shiur_participants_user_series"),
    ):
        op.create_table(
            table,
            sa.Column(pk, sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("series_id", sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(
                ["user_id"], ["users.user_id"], ondelete="CASCADE",
                name=f"fk_{table}_user_id_users",
            ),
            sa.ForeignKeyConstraint(
                ["series_id"], ["shiur_series.series_id"], ondelete="CASCADE",
                name=f"fk_{table}_series_id_shiur_series",
            ),
            sa.PrimaryKeyConstraint(pk, name=f"pk_{table}"),
            sa.UniqueConstraint("user_id", "series_id", name=constraint),
        )
        op.create_index(f"ix_{table}_series_id", table, ["series_id"])

    op.create_table(
        "users_pending_approval_to_series",
        sa.Column("pending_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("series_id", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.user_id"], ondelete="CASCADE",
            name="fk_users_pending_approval_to_series_user_id_users",
        ),
        sa.ForeignKeyConstraint(
            ["series_id"], ["shiur_series.series_id"], ondelete="CASCADE",
            name="fk_users_pending_approval_to_series_series_id_shiur_series",
        ),
        sa.PrimaryKeyConstraint("pending_id", name="pk_users_pending_approval_to_series"),
        sa.UniqueConstraint(
            "user_id", "series_id", name="uq_pending_participant_user_series"
        ),
    )
    op.create_index(
        "ix_pending_participant_series_id",
        "users_pending_approval_to_series",
        ["series_id"],
    )
    op.create_table(
        "series_pending_approval",
        sa.Column("pending_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("series_id", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["series_id"], ["shiur_series.series_id"], ondelete="CASCADE",
            name="fk_series_pending_approval_series_id_shiur_series",
        ),
        sa.PrimaryKeyConstraint("pending_id", name="pk_series_pending_approval"),
        sa.UniqueConstraint("series_id", name="uq_series_pending_approval_series_id"),
    )
    op.create_table(
        "shiur_recordings",
        sa.Column("recording_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("series_id", sa.Integer(), nullable=False),
        sa.Column("s3_file_path", sa.String(length=1024), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("recorded_at", sa.DateTime(), nullable=False),
        *(
            sa.Column(f"keyword_{i}", sa.String(length=100), nullable=False)
            for i in range(1, 7)
        ),
        sa.Column("description", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["series_id"], ["shiur_series.series_id"], ondelete="CASCADE",
            name="fk_shiur_recordings_series_id_shiur_series",
        ),
        sa.PrimaryKeyConstraint("recording_id", name="pk_shiur_recordings"),
    )
    op.create_index(
        "ix_shiur_recordings_series_recorded",
        "shiur_recordings",
        ["series_id", "recorded_at"],
    )
    op.create_table(
        "favorite_shiurim",
        sa.Column("favorite_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("recording_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.user_id"], ondelete="CASCADE",
            name="fk_favorite_shiurim_user_id_users",
        ),
        sa.ForeignKeyConstraint(
            ["recording_id"], ["shiur_recordings.recording_id"], ondelete="CASCADE",
            name="fk_favorite_shiurim_recording_id_shiur_recordings",
        ),
        sa.PrimaryKeyConstraint("favorite_id", name="pk_favorite_shiurim"),
        sa.UniqueConstraint(
            "user_id", "recording_id", name="uq_favorite_shiurim_user_recording"
        ),
    )
    subscriber_types = op.create_table(
        "subscriber_types",
        sa.Column("type_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("type_id", name="pk_subscriber_types"),
        sa.UniqueConstraint("name", name="uq_subscriber_types_name"),
    )
    op.create_table(
        "subscribers",
        sa.Column("subscriber_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("series_id", sa.Integer(), nullable=False),
        sa.Column("subscription_type_id", sa.Integer(), nullable=False),
        sa.Column("sns_subscription_arn", sa.String(length=512), nullable=True),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.user_id"], ondelete="CASCADE",
            name="fk_subscribers_user_id_users",
        ),
        sa.ForeignKeyConstraint(
            ["series_id"], ["shiur_series.series_id"], ondelete="CASCADE",
            name="fk_subscribers_series_id_shiur_series",
        ),
        sa.ForeignKeyConstraint(
            ["subscription_type_id"], ["subscriber_types.type_id"],
            name="fk_subscribers_subscription_type_id_subscriber_types",
        ),
        sa.PrimaryKeyConstraint("subscriber_id", name="pk_subscribers"),
    )
    op.create_index(
        "ix_subscribers_user_series", "subscribers", ["user_id", "series_id"]
    )

    op.bulk_insert(subscriber_types, [{"name": n} for n in DEFAULT_SUBSCRIBER_TYPES])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_index("ix_subscribers_user_series", table_name="subscribers")
    op.drop_table("subscribers")
    op.drop_table("subscriber_types")
    op.drop_table("favorite_shiurim")
    op.drop_index("ix_shiur_recordings_series_recorded", table_name="shiur_recordings")
    op.drop_table("shiur_recordings")
    op.drop_table("series_pending_approval")
    op.drop_index(
        "ix_pending_participant_series_id", table_name="users_pending_approval_to_series"
    )
    op.drop_table("users_pending_approval_to_series")
    for table in ("shiur_participants", "gabbaim"):
        op.drop_index(f"ix_{table}_series_id", table_name=table)
        op.drop_table(table)
    for index in (
        "ix_shiur_series_inst_id",
        "ix_shiur_series_topic_id",
        "ix_shiur_series_rebbi_id",
    ):
        op.drop_index(index, table_name="shiur_series")
    op.drop_table("shiur_series")
    op.drop_table("rebbeim")
    op.drop_table("admins")
    op.drop_table("user_institution_assoc")
    op.drop_table("topics")
    op.drop_table("institutions")
    op.drop_table("users")
