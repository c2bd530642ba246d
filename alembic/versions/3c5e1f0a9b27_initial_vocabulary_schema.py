"""initial vocabulary schema

Revision ID: 3c5e1f0a9b27
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c5e1f0a9b27"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

WORD_STATUSES = ("unmarked", "unknown", "known")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("verification_code", sa.String(length=6), nullable=False),
        sa.Column("check_status", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_users_email"), ["email"], unique=True)

    op.create_table(
        "verification_codes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(length=6), nullable=False),
        sa.Column("is_used", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("used_by_email", sa.String(length=255), nullable=True),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    with op.batch_alter_table("verification_codes", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_verification_codes_code"), ["code"], unique=True)
        batch_op.create_index(batch_op.f("ix_verification_codes_is_used"), ["is_used"], unique=False)
        batch_op.create_index(batch_op.f("ix_verification_codes_created_at"), ["created_at"], unique=False)

    op.create_table(
        "words",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("local_id", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("subcategory", sa.String(length=50), nullable=False),
        sa.Column("word", sa.String(length=100), nullable=False),
        sa.Column("meaning", sa.Text(), nullable=False),
        sa.Column("phonetic", sa.String(length=100), nullable=False),
        sa.Column("audio", sa.String(length=255), nullable=True),
        sa.Column("part_of_speech", sa.JSON(), nullable=False),
        sa.Column("example", sa.Text(), nullable=False),
        sa.Column("example_cn", sa.Text(), nullable=False),
        sa.Column("example_audio", sa.String(length=255), nullable=True),
        sa.UniqueConstraint("category", "subcategory", "local_id", name="uq_words_business_key"),
    )
    with op.batch_alter_table("words", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_words_local_id"), ["local_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_words_category"), ["category"], unique=False)
        batch_op.create_index(batch_op.f("ix_words_subcategory"), ["subcategory"], unique=False)

    op.create_table(
        "word_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("category_name", sa.String(length=100), nullable=False),
        sa.Column("subcategory", sa.String(length=50), nullable=False),
        sa.Column("subcategory_name", sa.String(length=100), nullable=False),
        sa.UniqueConstraint("category", "subcategory", name="uq_word_categories_category_subcategory"),
    )
    with op.batch_alter_table("word_categories", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_word_categories_category"), ["category"], unique=False)
        batch_op.create_index(batch_op.f("ix_word_categories_subcategory"), ["subcategory"], unique=False)

    op.create_table(
        "custom_words",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("local_id", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("subcategory", sa.String(length=50), nullable=False),
        sa.Column("word", sa.String(length=100), nullable=False),
        sa.Column("meaning", sa.Text(), nullable=False),
        sa.Column("example", sa.Text(), nullable=True),
        sa.Column("example_cn", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "category", "subcategory", "local_id", name="uq_custom_words_business_key"),
    )
    with op.batch_alter_table("custom_words", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_custom_words_user_id"), ["user_id"], unique=False)
        batch_op.create_index("ix_custom_words_user_subcategory", ["user_id", "subcategory"], unique=False)

    op.create_table(
        "custom_word_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("category_name", sa.String(length=100), nullable=False),
        sa.Column("subcategory", sa.String(length=50), nullable=False),
        sa.Column("subcategory_name", sa.String(length=100), nullable=False),
        sa.Column("emoji", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "subcategory", name="uq_custom_word_categories_user_subcategory"),
        sa.UniqueConstraint("user_id", "category", "subcategory", name="uq_custom_word_categories_user_key"),
    )
    with op.batch_alter_table("custom_word_categories", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_custom_word_categories_user_id"), ["user_id"], unique=False)

    op.create_table(
        "user_words",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("word_category", sa.String(length=50), nullable=False),
        sa.Column("word_subcategory", sa.String(length=50), nullable=False),
        sa.Column("word_id", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*WORD_STATUSES, name="word_status", native_enum=False),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "user_id", "word_category", "word_subcategory", "word_id",
            name="uq_user_words_user_business_key",
        ),
    )
    with op.batch_alter_table("user_words", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_user_words_user_id"), ["user_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_user_words_updated_at"), ["updated_at"], unique=False)
        batch_op.create_index("ix_user_words_user_status", ["user_id", "status"], unique=False)
        batch_op.create_index(
            "ix_user_words_user_category", ["user_id", "word_category", "word_subcategory"], unique=False
        )
        batch_op.create_index(
            "ix_user_words_user_status_subcategory", ["user_id", "status", "word_subcategory"], unique=False
        )

    op.create_table(
        "user_word_mistakes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_word_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("mistake_date", sa.String(length=10), nullable=False),
        sa.ForeignKeyConstraint(["user_word_id"], ["user_words.id"], ondelete="CASCADE"),
    )
    with op.batch_alter_table("user_word_mistakes", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_user_word_mistakes_user_word_id"), ["user_word_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_user_word_mistakes_mistake_date"), ["mistake_date"], unique=False)


def downgrade() -> None:
    op.drop_table("user_word_mistakes")
    op.drop_table("user_words")
    op.drop_table("custom_word_categories")
    op.drop_table("custom_words")
    op.drop_table("word_categories")
    op.drop_table("words")
    op.drop_table("verification_codes")
    op.drop_table("users")
