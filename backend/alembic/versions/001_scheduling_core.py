# backend/alembic/versions/001_scheduling_core.py
"""Scheduling core: students, subjects, availability windows, lessons, study topics

Revision ID: 001_scheduling_core
Revises:
Create Date: 2025-02-01 00:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_scheduling_core"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _create_extension_prefer_extensions_schema(extension_name: str) -> None:
    """Create extension using extensions schema when available."""

    bind = op.get_bind()
    if bind is None or bind.dialect.name != "postgresql":
        return

    op.execute(
        f"""
        DO $$
        DECLARE
            extensions_schema_exists BOOLEAN;
            extension_installed BOOLEAN;
        BEGIN
            SELECT EXISTS (
                SELECT 1 FROM pg_namespace WHERE nspname = 'extensions'
            ) INTO extensions_schema_exists;

            SELECT EXISTS (
                SELECT 1 FROM pg_extension WHERE extname = '{extension_name}'
            ) INTO extension_installed;

            IF NOT extension_installed THEN
                IF extensions_schema_exists THEN
                    EXECUTE 'CREATE EXTENSION IF NOT EXISTS {extension_name} WITH SCHEMA extensions';
                ELSE
                    EXECUTE 'CREATE EXTENSION IF NOT EXISTS {extension_name}';
                END IF;
            END IF;
        END
        $$;
        """
    )


def upgrade() -> None:
    """Create the scheduling tables."""
    print("Creating scheduling core tables...")

    bind = op.get_bind()
    is_postgres = bind is not None and bind.dialect.name == "postgresql"

    op.create_table(
        "students",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("grade_level", sa.String(32), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "subjects",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("color", sa.String(16), nullable=False, server_default="#4f46e5"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_subjects_name"),
    )

    print("Creating availability_windows table...")
    op.create_table(
        "availability_windows",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_availability_day_of_week"),
        sa.CheckConstraint("start_time < end_time", name="ck_availability_time_order"),
    )
    op.create_index(
        "idx_availability_windows_day_start",
        "availability_windows",
        ["day_of_week", "start_time"],
    )

    print("Creating lessons table...")
    op.create_table(
        "lessons",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("starts_at", sa.DateTime(), nullable=False),
        sa.Column("ends_at", sa.DateTime(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("student_id", sa.String(26), nullable=False),
        sa.Column("subject_id", sa.String(26), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="scheduled"),
        sa.Column("value", sa.Numeric(10, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("content_covered", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"]),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.id"]),
        sa.CheckConstraint(
            "status IN ('scheduled', 'confirmed', 'completed', 'cancelled')",
            name="ck_lessons_status",
        ),
        sa.CheckConstraint("duration_minutes >= 15", name="ck_lessons_min_duration"),
        sa.CheckConstraint("value >= 0", name="ck_lessons_value_non_negative"),
        sa.CheckConstraint("ends_at > starts_at", name="ck_lessons_interval_order"),
    )
    op.create_index("idx_lessons_starts_at", "lessons", ["starts_at"])
    op.create_index("idx_lessons_student_starts_at", "lessons", ["student_id", "starts_at"])

    if is_postgres:
        _create_extension_prefer_extensions_schema("btree_gist")
        op.execute(
            """
            ALTER TABLE lessons
              ADD CONSTRAINT lessons_no_overlap
              EXCLUDE USING gist (
                tsrange(starts_at, ends_at, '[)') WITH &&
              )
              WHERE (status <> 'cancelled')
            """
        )

    op.create_table(
        "study_topics",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("subject_id", sa.String(26), nullable=False),
        sa.Column("grade_level", sa.String(32), nullable=False),
        sa.Column("difficulty", sa.String(10), nullable=False, server_default="medium"),
        sa.Column("student_id", sa.String(26), nullable=True),
        sa.Column("studied", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.id"]),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"]),
    )
    op.create_index("ix_study_topics_student_id", "study_topics", ["student_id"])

    print("Scheduling core tables created")


def downgrade() -> None:
    """Drop the scheduling tables."""
    print("Dropping scheduling core tables...")

    op.drop_index("ix_study_topics_student_id", table_name="study_topics")
    op.drop_table("study_topics")

    bind = op.get_bind()
    if bind is not None and bind.dialect.name == "postgresql":
        op.execute("ALTER TABLE lessons DROP CONSTRAINT IF EXISTS lessons_no_overlap")
    op.drop_index("idx_lessons_student_starts_at", table_name="lessons")
    op.drop_index("idx_lessons_starts_at", table_name="lessons")
    op.drop_table("lessons")

    op.drop_index("idx_availability_windows_day_start", table_name="availability_windows")
    op.drop_table("availability_windows")
    op.drop_table("subjects")
    op.drop_table("students")
