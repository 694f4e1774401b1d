"""
Exam answers: the options selected in each submission.

- One row per selected option; multiple-choice questions may have several.
- Rows go away with their submission, question or option.
"""

from alembic import op
import sqlalchemy as sa

# Revision identifiers, used by Alembic.
revision = "20251019_02_exam_answers"
down_revision = "20251019_01_initial_schema"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "exam_answers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("submission_id", sa.Integer(), nullable=False),
        sa.Column("question_id", sa.Integer(), nullable=False),
        sa.Column("selected_option_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["submission_id"],
            ["exam_submissions.id"],
            name="fk_exam_answers_submission_id_exam_submissions",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["question_id"], ["questions.id"], name="fk_exam_answers_question_id_questions", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["selected_option_id"],
            ["question_options.id"],
            name="fk_exam_answers_selected_option_id_question_options",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_exam_answers"),
    )
    op.create_index("ix_exam_answers_submission_id", "exam_answers", ["submission_id"])


def downgrade() -> None:
    op.drop_index("ix_exam_answers_submission_id", table_name="exam_answers")
    op.drop_table("exam_answers")
