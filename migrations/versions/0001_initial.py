"""initial

Revision ID: 0001_initial
Revises:
Create Date: 2025-01-06 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


class GUID(sa.TypeDecorator):
    impl = sa.CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import UUID

            return dialect.type_descriptor(UUID(as_uuid=True))
        return dialect.type_descriptor(sa.CHAR(36))


def upgrade() -> None:
    op.create_table(
        "store_groups",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "stores",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("group_id", GUID(), sa.ForeignKey("store_groups.id"), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_stores_group_id", "stores", ["group_id"], unique=False)

    op.create_table(
        "users",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=50), nullable=False, server_default="department_manager"),
        sa.Column("store_id", GUID(), sa.ForeignKey("stores.id"), nullable=True),
        sa.Column("store_group_id", GUID(), sa.ForeignKey("store_groups.id"), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_store_id", "users", ["store_id"], unique=False)
    op.create_index("ix_users_store_group_id", "users", ["store_group_id"], unique=False)

    op.create_table(
        "user_store_access",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("user_id", GUID(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("store_id", GUID(), sa.ForeignKey("stores.id"), nullable=False),
        sa.Column("granted_by", GUID(), nullable=True),
        sa.Column("granted_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("user_id", "store_id", name="uq_user_store_access"),
    )
    op.create_index("ix_user_store_access_user_id", "user_store_access", ["user_id"], unique=False)
    op.create_index("ix_user_store_access_store_id", "user_store_access", ["store_id"], unique=False)

    op.create_table(
        "departments",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("store_id", GUID(), sa.ForeignKey("stores.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("department_type", sa.String(length=100), nullable=True),
        sa.Column("manager_id", GUID(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("store_id", "name", name="uq_departments_store_name"),
    )
    op.create_index("ix_departments_store_id", "departments", ["store_id"], unique=False)

    op.create_table(
        "user_department_access",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("user_id", GUID(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("department_id", GUID(), sa.ForeignKey("departments.id"), nullable=False),
        sa.Column("granted_by", GUID(), nullable=True),
        sa.Column("granted_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("user_id", "department_id", name="uq_user_department_access"),
    )
    op.create_index("ix_user_department_access_user_id", "user_department_access", ["user_id"], unique=False)
    op.create_index(
        "ix_user_department_access_department_id", "user_department_access", ["department_id"], unique=False
    )

    op.create_table(
        "kpi_definitions",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("department_id", GUID(), sa.ForeignKey("departments.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("metric_type", sa.String(length=20), nullable=False, server_default="unit"),
        sa.Column("target_value", sa.Float(), nullable=True),
        sa.Column("target_direction", sa.String(length=10), nullable=False, server_default="above"),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("assigned_to", GUID(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_kpi_definitions_department_id", "kpi_definitions", ["department_id"], unique=False)

    op.create_table(
        "scorecard_entries",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("kpi_id", GUID(), sa.ForeignKey("kpi_definitions.id"), nullable=False),
        sa.Column("entry_type", sa.String(length=10), nullable=False, server_default="weekly"),
        sa.Column("week_start_date", sa.Date(), nullable=True),
        sa.Column("month", sa.String(length=7), nullable=True),
        sa.Column("actual_value", sa.Float(), nullable=True),
        sa.Column("variance", sa.Float(), nullable=True),
        sa.Column("status", sa.String(length=10), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", GUID(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("kpi_id", "week_start_date", name="uq_scorecard_entries_kpi_week"),
        sa.UniqueConstraint("kpi_id", "month", name="uq_scorecard_entries_kpi_month"),
    )
    op.create_index("ix_scorecard_entries_kpi_id", "scorecard_entries", ["kpi_id"], unique=False)

    op.create_table(
        "rocks",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("department_id", GUID(), sa.ForeignKey("departments.id"), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("quarter", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("assigned_to", GUID(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("progress_percentage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="on_track"),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_rocks_department_id", "rocks", ["department_id"], unique=False)
    op.create_index("ix_rocks_department_period", "rocks", ["department_id", "year", "quarter"], unique=False)

    op.create_table(
        "todos",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("department_id", GUID(), sa.ForeignKey("departments.id"), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("assigned_to", GUID(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("created_by", GUID(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_todos_department_id", "todos", ["department_id"], unique=False)
    op.create_index("ix_todos_department_status", "todos", ["department_id", "status"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_todos_department_status", table_name="todos")
    op.drop_index("ix_todos_department_id", table_name="todos")
    op.drop_table("todos")
    op.drop_index("ix_rocks_department_period", table_name="rocks")
    op.drop_index("ix_rocks_department_id", table_name="rocks")
    op.drop_table("rocks")
    op.drop_index("ix_scorecard_entries_kpi_id", table_name="scorecard_entries")
    op.drop_table("scorecard_entries")
    op.drop_index("ix_kpi_definitions_department_id", table_name="kpi_definitions")
    op.drop_table("kpi_definitions")
    op.drop_index("ix_user_department_access_department_id", table_name="user_department_access")
    op.drop_index("ix_user_department_access_user_id", table_name="user_department_access")
    op.drop_table("user_department_access")
    op.drop_index("ix_departments_store_id", table_name="departments")
    op.drop_table("departments")
    op.drop_index("ix_user_store_access_store_id", table_name="user_store_access")
    op.drop_index("ix_user_store_access_user_id", table_name="user_store_access")
    op.drop_table("user_store_access")
    op.drop_index("ix_users_store_group_id", table_name="users")
    op.drop_index("ix_users_store_id", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    op.drop_index("ix_stores_group_id", table_name="stores")
    op.drop_table("stores")
    op.drop_table("store_groups")
