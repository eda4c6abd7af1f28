# alembic/versions/0001_initial.py
"""tablas iniciales: users, photos, ratings, comments

Revision ID: 0001_initial
Revises:
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _ts(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(16), nullable=False),
        sa.Column("username", sa.String(30), nullable=True),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("bio", sa.String(150), nullable=False),
        sa.Column("avatar_url", sa.String(500), nullable=False),
        sa.Column("website", sa.String(255), nullable=False),
        _ts("created_at"),
        _ts("updated_at"),
        sa.UniqueConstraint("username"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "photos",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("creator_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("caption", sa.UnicodeText(), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("people", sa.JSON().with_variant(postgresql.JSONB(), "postgresql"), nullable=False),
        sa.Column("media_url", sa.String(1000), nullable=False),
        sa.Column("media_type", sa.String(8), nullable=False),
        sa.Column("thumbnail_url", sa.String(1000), nullable=False),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_photos_id", "photos", ["id"])
    op.create_index("ix_photos_creator_id", "photos", ["creator_id"])
    op.create_index("ix_photos_created_at", "photos", ["created_at"])

    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("photo_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE")),
        sa.Column("value", sa.Integer(), nullable=False),
        _ts("created_at"),
        _ts("updated_at"),
        sa.UniqueConstraint("photo_id", "user_id", name="uq_rating_photo_user"),
        sa.CheckConstraint("value >= 1 AND value <= 5", name="ck_rating_value"),
    )
    op.create_index("ix_ratings_id", "ratings", ["id"])
    op.create_index("ix_ratings_photo_id", "ratings", ["photo_id"])
    op.create_index("ix_ratings_user_id", "ratings", ["user_id"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("photo_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE")),
        sa.Column("text", sa.Text(), nullable=False),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_comments_id", "comments", ["id"])
    op.create_index("ix_comments_photo_id", "comments", ["photo_id"])
    op.create_index("ix_comments_user_id", "comments", ["user_id"])


def downgrade() -> None:
    op.drop_table("comments")
    op.drop_table("ratings")
    op.drop_table("photos")
    op.drop_table("users")
