"""
Initial schema: users, series, episodes, exams, questions, options, submissions.

- Episode order is unique per series (`uq_episodes_series_order`).
- At most one exam per episode (`uq_exams_episode_id`).
- Submissions are append-only; several rows per (user, exam) are allowed.
"""

from alembic import op
import sqlalchemy as sa

# Revision identifiers, used by Alembic.
revision = "20251019_01_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


user_role = sa.Enum("SUPER_ADMIN", "USER_ADMIN", "USER", name="user_role")
episode_status = sa.Enum(
    "PUBLISHED", "PENDING_APPROVAL", "PENDING_DELETION", "PRIVATE", "DRAFT", name="episode_status"
)
exam_status = sa.Enum("DRAFT", "ACTIVE", "INACTIVE", name="exam_status")


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("role", user_role, server_default="USER", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("length(email) > 0", name="ck_users_email_not_blank"),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_email_lower", "users", [sa.text("lower(email)")])

    # --- series ---
    op.create_table(
        "series",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("author_id", sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], name="fk_series_author_id_users", ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id", name="pk_series"),
        sa.UniqueConstraint("title", name="uq_series_title"),
    )
    op.create_index("ix_series_author_id", "series", ["author_id"])

    # --- episodes ---
    op.create_table(
        "episodes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("series_id", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.String(length=36), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("order_in_series", sa.Integer(), nullable=False),
        sa.Column("status", episode_status, server_default="PUBLISHED", nullable=False),
        sa.Column("is_locked_by_default", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("requires_exam_to_unlock", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("order_in_series >= 1", name="ck_episodes_order_ge_1"),
        sa.ForeignKeyConstraint(["series_id"], ["series.id"], name="fk_episodes_series_id_series", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], name="fk_episodes_author_id_users", ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id", name="pk_episodes"),
        sa.UniqueConstraint("series_id", "order_in_series", name="uq_episodes_series_order"),
    )
    op.create_index("ix_episodes_series_id", "episodes", ["series_id"])
    op.create_index("ix_episodes_author_id", "episodes", ["author_id"])
    op.create_index("ix_episodes_series_status", "episodes", ["series_id", "status"])

    # --- exams ---
    op.create_table(
        "exams",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("episode_id", sa.Integer(), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", exam_status, server_default="DRAFT", nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("attempts_allowed", sa.Integer(), server_default="1", nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("attempts_allowed >= 0", name="ck_exams_attempts_nonneg"),
        sa.CheckConstraint(
            "(end_date IS NULL) OR (start_date IS NULL) OR (end_date >= start_date)",
            name="ck_exams_window_order",
        ),
        sa.ForeignKeyConstraint(["episode_id"], ["episodes.id"], name="fk_exams_episode_id_episodes", ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id", name="pk_exams"),
        sa.UniqueConstraint("episode_id", name="uq_exams_episode_id"),
    )

    # --- questions / options ---
    op.create_table(
        "questions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("exam_id", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("is_multiple_choice", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.CheckConstraint("points >= 1", name="ck_questions_points_ge_1"),
        sa.ForeignKeyConstraint(["exam_id"], ["exams.id"], name="fk_questions_exam_id_exams", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_questions"),
    )
    op.create_index("ix_questions_exam_id", "questions", ["exam_id"])

    op.create_table(
        "question_options",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("question_id", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("is_correct", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.ForeignKeyConstraint(
            ["question_id"], ["questions.id"], name="fk_question_options_question_id_questions", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_question_options"),
    )
    op.create_index("ix_question_options_question_id", "question_options", ["question_id"])

    # --- exam_submissions ---
    op.create_table(
        "exam_submissions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("exam_id", sa.Integer(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("time_taken_seconds", sa.Integer(), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("score >= 0", name="ck_exam_submissions_score_nonneg"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_exam_submissions_user_id_users", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["exam_id"], ["exams.id"], name="fk_exam_submissions_exam_id_exams", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_exam_submissions"),
    )
    op.create_index("ix_exam_submissions_user_exam", "exam_submissions", ["user_id", "exam_id"])


def downgrade() -> None:
    op.drop_index("ix_exam_submissions_user_exam", table_name="exam_submissions")
    op.drop_table("exam_submissions")
    op.drop_index("ix_question_options_question_id", table_name="question_options")
    op.drop_table("question_options")
    op.drop_index("ix_questions_exam_id", table_name="questions")
    op.drop_table("questions")
    op.drop_table("exams")
    op.drop_index("ix_episodes_series_status", table_name="episodes")
    op.drop_index("ix_episodes_author_id", table_name="episodes")
    op.drop_index("ix_episodes_series_id", table_name="episodes")
    op.drop_table("episodes")
    op.drop_index("ix_series_author_id", table_name="series")
    op.drop_table("series")
    op.drop_index("ix_users_email_lower", table_name="users")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_type in (exam_status, episode_status, user_role):
        enum_type.drop(bind, checkfirst=True)
