"""Create offices table

Revision ID: 0001_create_offices
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_create_offices"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CHECKLIST_COLUMNS = (
    "pantry_checklist",
    "restrooms_checklist",
    "meeting_rooms_checklist",
    "events_checklist",
    "premises_checklist",
)


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if "offices" in inspector.get_table_names():
        return
    op.create_table(
        "offices",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("office_name", sa.String(length=255), nullable=False),
        sa.Column("department", sa.String(length=255)),
        sa.Column("contact_person", sa.String(length=255)),
        sa.Column("contact_email", sa.String(length=255)),
        sa.Column("total_employees", sa.Integer()),
        sa.Column("notes", sa.Text()),
        *[
            sa.Column(name, sa.JSON(), nullable=False, server_default=sa.text("'{}'"))
            for name in CHECKLIST_COLUMNS
        ],
        sa.Column(
            "completion_percent",
            sa.Integer(),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "certification_tier",
            sa.String(length=32),
            nullable=False,
            server_default="Not Certified",
        ),
        sa.Column("certificate_date", sa.Date()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )


def downgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if "offices" not in inspector.get_table_names():
        return
    op.drop_table("offices")
