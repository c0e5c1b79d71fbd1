"""
Ledger query engine: read projections over committed entries.

Balances are never stored. They are always derived from the
journal lines, which guarantees they are correct as long as
the lines are correct.

Sign convention, applied in every view:
    DEBIT-normal accounts:  balance = debits - credits
    CREDIT-normal accounts: balance = credits - debits

Lines count when their entry is POSTED, REVERSED or LOCKED.
A reversed entry stays in the ledger next to its reversal, and
the two cancel out.
"""

from decimal import Decimal
from itertools import groupby

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from general_ledger.models.enums import NormalBalance, COMMITTED_STATUSES
from general_ledger.models.gl_account import GLAccount
from general_ledger.models.journal_entry import JournalEntry
from general_ledger.models.journal_line import JournalLine
from general_ledger.schemas.ledger import AccountSummary, LedgerRow
from general_ledger.services.chart_of_accounts import ChartOfAccounts


def signed_amount(
    normal_balance: NormalBalance, debit: Decimal, credit: Decimal
) -> Decimal:
    """Effect of a debit/credit pair on an account's balance."""
    if normal_balance == NormalBalance.DEBIT:
        return debit - credit
    return credit - debit


def _decimal(value) -> Decimal:
    return Decimal(str(value or 0))


class LedgerQuery:
    """Pure reads. Never locks, never writes."""

    def __init__(self, db: Session):
        self.db = db
        self.chart = ChartOfAccounts(db)

    def _committed_lines(self):
        return (
            select(
                JournalLine.id,
                JournalLine.gl_account_id,
                JournalLine.debit,
                JournalLine.credit,
            )
            .join(JournalEntry, JournalLine.entry_id == JournalEntry.id)
            .where(JournalEntry.status.in_(COMMITTED_STATUSES))
            .subquery()
        )

    def account_summary(self) -> list[AccountSummary]:
        """Totals and balance for every account, ordered by code."""
        lines = self._committed_lines()
        rows = self.db.execute(
            select(
                GLAccount,
                func.coalesce(func.sum(lines.c.debit), 0),
                func.coalesce(func.sum(lines.c.credit), 0),
                func.count(lines.c.id),
            )
            .outerjoin(lines, lines.c.gl_account_id == GLAccount.id)
            .group_by(GLAccount.id)
            .order_by(GLAccount.code)
        ).all()

        summaries = []
        for account, total_debit, total_credit, line_count in rows:
            total_debit = _decimal(total_debit)
            total_credit = _decimal(total_credit)
            summaries.append(AccountSummary(
                account_id=account.id,
                code=account.code,
                name=account.name,
                account_type=account.account_type,
                normal_balance=account.normal_balance,
                is_control_account=account.is_control_account,
                total_debit=total_debit,
                total_credit=total_credit,
                balance=signed_amount(
                    account.normal_balance, total_debit, total_credit
                ),
                line_count=line_count,
            ))
        return summaries

    def account_ledger(self, account_id: int) -> list[LedgerRow]:
        """
        Every committed entry touching the account, oldest first,
        with a running balance.

        Ordered by entry date, then by sequence number, so entries
        on the same day appear in commit order.
        """
        account = self.chart.get_account(account_id)

        results = self.db.execute(
            select(JournalEntry, JournalLine)
            .join(JournalLine, JournalLine.entry_id == JournalEntry.id)
            .where(
                JournalLine.gl_account_id == account_id,
                JournalEntry.status.in_(COMMITTED_STATUSES),
            )
            .order_by(
                JournalEntry.entry_date,
                JournalEntry.sequence_number,
                JournalLine.line_number,
            )
        ).all()

        ledger = []
        running = Decimal("0")
        for entry, pairs in groupby(results, key=lambda r: r[0]):
            lines = [line for _, line in pairs]
            debit = sum((_decimal(line.debit) for line in lines), Decimal("0"))
            credit = sum((_decimal(line.credit) for line in lines), Decimal("0"))
            running += signed_amount(account.normal_balance, debit, credit)

            descriptions = [line.description for line in lines if line.description]
            ledger.append(LedgerRow(
                entry_id=entry.id,
                sequence_number=entry.sequence_number,
                entry_date=entry.entry_date,
                memo=entry.memo,
                source_type=entry.source_type,
                status=entry.status,
                description="; ".join(descriptions) or entry.memo,
                debit=debit,
                credit=credit,
                running_balance=running,
            ))
        return ledger

    def account_balance(self, account_id: int) -> Decimal:
        """Balance of a single account."""
        account = self.chart.get_account(account_id)

        total_debit, total_credit = self.db.execute(
            select(
                func.coalesce(func.sum(JournalLine.debit), 0),
                func.coalesce(func.sum(JournalLine.credit), 0),
            )
            .join(JournalEntry, JournalLine.entry_id == JournalEntry.id)
            .where(
                JournalLine.gl_account_id == account_id,
                JournalEntry.status.in_(COMMITTED_STATUSES),
            )
        ).one()

        return signed_amount(
            account.normal_balance, _decimal(total_debit), _decimal(total_credit)
        )

    def check_integrity(self) -> dict:
        """
        Verify the whole ledger balances.

        Total debits across all committed lines must equal total
        credits. A non-zero difference means an entry was written
        around the posting engine.
        """
        lines = self._committed_lines()
        total_debits, total_credits = self.db.execute(
            select(
                func.coalesce(func.sum(lines.c.debit), 0),
                func.coalesce(func.sum(lines.c.credit), 0),
            )
        ).one()

        total_debits = _decimal(total_debits)
        total_credits = _decimal(total_credits)
        difference = total_debits - total_credits
        return {
            "total_debits": total_debits,
            "total_credits": total_credits,
            "difference": difference,
            "is_balanced": difference == 0,
        }
