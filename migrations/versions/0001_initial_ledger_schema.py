"""initial ledger schema: chart of accounts, periods, journal, audit

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

account_type_enum = sa.Enum(
    "ASSET", "LIABILITY", "EQUITY", "REVENUE", "EXPENSE",
    name="account_type_enum",
)
normal_balance_enum = sa.Enum("DEBIT", "CREDIT", name="normal_balance_enum")
source_type_enum = sa.Enum(
    "MANUAL", "SYSTEM", "DISPOSAL", "DEPRECIATION", "REVERSAL",
    "INVOICE", "BILL", "PAYMENT", "ADJUSTMENT",
    name="source_type_enum",
)
entry_status_enum = sa.Enum(
    "DRAFT", "POSTED", "REVERSED", "LOCKED", name="entry_status_enum"
)
period_status_enum = sa.Enum("OPEN", "CLOSED", "LOCKED", name="period_status_enum")


def upgrade() -> None:
    op.create_table(
        "gl_accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("account_type", account_type_enum, nullable=False),
        sa.Column("normal_balance", normal_balance_enum, nullable=False),
        sa.Column("is_control_account", sa.Boolean(), nullable=False),
        sa.Column("control_module", sa.String(50), nullable=True),
        sa.Column("is_locked", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("code", name="uq_gl_accounts_code"),
    )

    op.create_table(
        "fiscal_periods",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", period_status_enum, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("name", name="uq_fiscal_periods_name"),
        sa.CheckConstraint(
            "start_date <= end_date", name="ck_fiscal_periods_date_order"
        ),
    )
    op.create_index(
        "ix_fiscal_periods_start_date", "fiscal_periods", ["start_date"]
    )
    op.create_index("ix_fiscal_periods_end_date", "fiscal_periods", ["end_date"])

    op.create_table(
        "document_sequences",
        sa.Column("name", sa.String(50), primary_key=True),
        sa.Column("next_value", sa.BigInteger(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    # Seed the journal counter so the first post only has to lock it
    op.execute(
        "INSERT INTO document_sequences (name, next_value, updated_at) "
        "VALUES ('journal_entry', 1, CURRENT_TIMESTAMP)"
    )

    op.create_table(
        "journal_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("external_id", sa.Uuid(), nullable=False),
        sa.Column("sequence_number", sa.Integer(), nullable=False),
        sa.Column("entry_date", sa.Date(), nullable=False),
        sa.Column("memo", sa.Text(), nullable=False),
        sa.Column("source_type", source_type_enum, nullable=False),
        sa.Column("source_id", sa.String(100), nullable=True),
        sa.Column("status", entry_status_enum, nullable=False),
        sa.Column("is_reversal", sa.Boolean(), nullable=False),
        sa.Column(
            "reverses_entry_id", sa.Integer(),
            sa.ForeignKey("journal_entries.id"), nullable=True,
        ),
        sa.Column(
            "reversed_by_entry_id", sa.Integer(),
            sa.ForeignKey("journal_entries.id"), nullable=True,
        ),
        sa.Column(
            "fiscal_period_id", sa.Integer(),
            sa.ForeignKey("fiscal_periods.id"), nullable=True,
        ),
        sa.Column("posted_by", sa.String(100), nullable=True),
        sa.Column("posted_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("external_id", name="uq_journal_entries_external_id"),
        sa.UniqueConstraint(
            "source_type", "source_id", name="uq_journal_entries_source"
        ),
    )
    op.create_index(
        "ix_journal_entries_sequence_number", "journal_entries",
        ["sequence_number"], unique=True,
    )
    op.create_index(
        "ix_journal_entries_entry_date", "journal_entries", ["entry_date"]
    )
    op.create_index(
        "ix_journal_entries_fiscal_period_id", "journal_entries",
        ["fiscal_period_id"],
    )

    op.create_table(
        "journal_lines",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "entry_id", sa.Integer(),
            sa.ForeignKey("journal_entries.id"), nullable=False,
        ),
        sa.Column("line_number", sa.Integer(), nullable=False),
        sa.Column(
            "gl_account_id", sa.Integer(),
            sa.ForeignKey("gl_accounts.id"), nullable=False,
        ),
        sa.Column("debit", sa.Numeric(19, 4), nullable=False),
        sa.Column("credit", sa.Numeric(19, 4), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("cost_center", sa.String(50), nullable=True),
        sa.Column("department", sa.String(50), nullable=True),
        sa.CheckConstraint("debit >= 0", name="ck_journal_lines_debit_non_negative"),
        sa.CheckConstraint("credit >= 0", name="ck_journal_lines_credit_non_negative"),
        sa.CheckConstraint(
            "NOT (debit > 0 AND credit > 0)", name="ck_journal_lines_single_side"
        ),
    )
    op.create_index("ix_journal_lines_entry_id", "journal_lines", ["entry_id"])
    op.create_index(
        "ix_journal_lines_gl_account_id", "journal_lines", ["gl_account_id"]
    )

    op.create_table(
        "audit_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_type", sa.String(100), nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("actor_id", sa.String(100), nullable=True),
        sa.Column("details", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_audit_log_entity_id", "audit_log", ["entity_id"])


def downgrade() -> None:
    op.drop_index("ix_audit_log_entity_id", table_name="audit_log")
    op.drop_table("audit_log")
    op.drop_index("ix_journal_lines_gl_account_id", table_name="journal_lines")
    op.drop_index("ix_journal_lines_entry_id", table_name="journal_lines")
    op.drop_table("journal_lines")
    op.drop_index("ix_journal_entries_fiscal_period_id", table_name="journal_entries")
    op.drop_index("ix_journal_entries_entry_date", table_name="journal_entries")
    op.drop_index("ix_journal_entries_sequence_number", table_name="journal_entries")
    op.drop_table("journal_entries")
    op.drop_table("document_sequences")
    op.drop_index("ix_fiscal_periods_end_date", table_name="fiscal_periods")
    op.drop_index("ix_fiscal_periods_start_date", table_name="fiscal_periods")
    op.drop_table("fiscal_periods")
    op.drop_table("gl_accounts")

    bind = op.get_bind()
    for enum_type in (
        period_status_enum,
        entry_status_enum,
        source_type_enum,
        normal_balance_enum,
        account_type_enum,
    ):
        enum_type.drop(bind, checkfirst=True)
