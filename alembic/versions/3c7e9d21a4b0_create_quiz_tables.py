"""create question bank, quiz, result and user tables

Revision ID: 3c7e9d21a4b0
Revises:
Create Date: 2025-10-20
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3c7e9d21a4b0"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "question_import",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("filename", sa.String(500), nullable=False),
        sa.Column("uploaded_by", sa.String(255), nullable=True),
        sa.Column("inserted", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("skipped", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "uploaded_at", sa.DateTime(timezone=True), server_default=sa.func.now()
        ),
    )
    op.create_index("ix_question_import_uploaded_at", "question_import", ["uploaded_at"])

    op.create_table(
        "question",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("question", sa.Text(), nullable=False, unique=True),
        sa.Column("options", sa.JSON(), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=False, server_default=""),
        sa.Column("source", sa.String(20), nullable=False, server_default="manual"),
        sa.Column(
            "batch_id",
            sa.String(32),
            sa.ForeignKey("question_import.id"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_question_category", "question", ["category"])
    op.create_index("ix_question_batch_id", "question", ["batch_id"])
    op.create_index("ix_question_created_at", "question", ["created_at"])

    op.create_table(
        "quiz",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("categories", sa.JSON(), nullable=False),
        sa.Column("num_questions", sa.Integer(), nullable=False),
        sa.Column("question_ids", sa.JSON(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column(
            "certificate_enabled", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column(
            "certificate_template", sa.String(255), nullable=False, server_default=""
        ),
        sa.Column(
            "certificate_passing_score", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_quiz_created_at", "quiz", ["created_at"])

    # quiz_id and user_id are plain references: results outlive both
    op.create_table(
        "result",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("quiz_id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(32), nullable=True),
        sa.Column("student_name", sa.String(255), nullable=False),
        sa.Column("question_order", sa.JSON(), nullable=False),
        sa.Column("answers", sa.JSON(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("total_questions", sa.Integer(), nullable=False),
        sa.Column("correct_answers", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("wrong_answers", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("time_taken", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("attempted_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_result_quiz_id", "result", ["quiz_id"])
    op.create_index("ix_result_user_id", "result", ["user_id"])
    op.create_index("ix_result_student_name", "result", ["student_name"])
    op.create_index("ix_result_attempted_at", "result", ["attempted_at"])

    op.create_table(
        "user",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("username", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="student"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_user_username", "user", ["username"], unique=True)
    op.create_index("ix_user_created_at", "user", ["created_at"])


def downgrade() -> None:
    op.drop_table("user")
    op.drop_table("result")
    op.drop_table("quiz")
    op.drop_table("question")
    op.drop_table("question_import")
