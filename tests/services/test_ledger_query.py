"""
Tests for the LedgerQuery read projections.
"""

from datetime import date
from decimal import Decimal

import pytest

from general_ledger.exceptions import AccountNotFoundError, EntryValidationError
from general_ledger.models.enums import EntryStatus, NormalBalance
from general_ledger.schemas.journal import JournalEntryDraft, JournalLineDraft
from general_ledger.services.ledger_query import LedgerQuery, signed_amount
from general_ledger.services.posting_engine import PostingEngine
from general_ledger.services.reversal_engine import ReversalEngine


def post(db_session, actor, entry_date, memo, *lines):
    """Post from (account_code, debit, credit) tuples."""
    return PostingEngine(db_session).post(JournalEntryDraft(
        entry_date=entry_date,
        memo=memo,
        lines=[
            JournalLineDraft(
                account_code=code,
                debit=Decimal(str(debit)),
                credit=Decimal(str(credit)),
            )
            for code, debit, credit in lines
        ],
    ), actor)


def by_code(summary):
    return {row.code: row for row in summary}


class TestSignedAmount:

    def test_debit_normal(self):
        assert signed_amount(NormalBalance.DEBIT, Decimal("10"), Decimal("3")) == 7

    def test_credit_normal(self):
        assert signed_amount(NormalBalance.CREDIT, Decimal("10"), Decimal("3")) == -7


class TestAccountSummary:

    def test_every_account_listed_even_without_lines(self, db_session, chart):
        summary = LedgerQuery(db_session).account_summary()

        assert [row.code for row in summary] == ["1000", "1200", "4000", "6000"]
        assert all(row.balance == 0 and row.line_count == 0 for row in summary)

    def test_totals_and_signed_balances(self, db_session, chart, open_year, actor):
        post(db_session, actor, date(2025, 1, 5), "Sale",
             ("1000", 1000, 0), ("4000", 0, 1000))
        post(db_session, actor, date(2025, 1, 6), "Rent",
             ("6000", 300, 0), ("1000", 0, 300))

        rows = by_code(LedgerQuery(db_session).account_summary())

        assert rows["1000"].total_debit == Decimal("1000")
        assert rows["1000"].total_credit == Decimal("300")
        assert rows["1000"].balance == Decimal("700")
        assert rows["1000"].line_count == 2
        assert rows["4000"].balance == Decimal("1000")
        assert rows["6000"].balance == Decimal("300")
        assert rows["1200"].line_count == 0

    def test_rejected_entry_never_appears(self, db_session, chart, open_year, actor):
        with pytest.raises(EntryValidationError):
            post(db_session, actor, date(2025, 1, 5), "Bad",
                 ("1000", 500, 0), ("4000", 0, 400))

        query = LedgerQuery(db_session)
        rows = by_code(query.account_summary())
        assert rows["1000"].line_count == 0
        assert rows["4000"].line_count == 0
        assert query.account_ledger(chart["1000"].id) == []
        assert query.account_ledger(chart["4000"].id) == []

    def test_reversed_entries_still_count(self, db_session, chart, open_year, actor):
        entry = post(db_session, actor, date(2025, 1, 5), "Sale",
                     ("1000", 1000, 0), ("4000", 0, 1000))
        ReversalEngine(db_session).reverse(entry.id, actor)

        rows = by_code(LedgerQuery(db_session).account_summary())
        assert rows["1000"].line_count == 2
        assert rows["1000"].total_debit == rows["1000"].total_credit
        assert rows["1000"].balance == 0


class TestAccountLedger:

    def test_running_balance(self, db_session, chart, open_year, actor):
        post(db_session, actor, date(2025, 1, 5), "Sale",
             ("1000", 1000, 0), ("4000", 0, 1000))
        post(db_session, actor, date(2025, 1, 6), "Rent",
             ("6000", 300, 0), ("1000", 0, 300))
        post(db_session, actor, date(2025, 1, 7), "Sale",
             ("1000", 50, 0), ("4000", 0, 50))

        ledger = LedgerQuery(db_session).account_ledger(chart["1000"].id)

        assert [row.running_balance for row in ledger] == [
            Decimal("1000"), Decimal("700"), Decimal("750"),
        ]

    def test_credit_normal_running_balance(self, db_session, chart, open_year, actor):
        post(db_session, actor, date(2025, 1, 5), "Sale",
             ("1000", 1000, 0), ("4000", 0, 1000))
        post(db_session, actor, date(2025, 1, 9), "Refund",
             ("4000", 200, 0), ("1000", 0, 200))

        ledger = LedgerQuery(db_session).account_ledger(chart["4000"].id)
        assert [row.running_balance for row in ledger] == [
            Decimal("1000"), Decimal("800"),
        ]

    def test_ordered_by_date_then_sequence(self, db_session, chart, open_year, actor):
        late = post(db_session, actor, date(2025, 2, 1), "Late",
                    ("1000", 10, 0), ("4000", 0, 10))
        early = post(db_session, actor, date(2025, 1, 1), "Early",
                     ("1000", 20, 0), ("4000", 0, 20))
        same_day = post(db_session, actor, date(2025, 2, 1), "Same day",
                        ("1000", 30, 0), ("4000", 0, 30))

        ledger = LedgerQuery(db_session).account_ledger(chart["1000"].id)

        assert [row.entry_id for row in ledger] == [early.id, late.id, same_day.id]

    def test_lines_on_same_account_are_combined(
        self, db_session, chart, open_year, actor
    ):
        post(db_session, actor, date(2025, 1, 5), "Split receipt",
             ("1000", 60, 0), ("1000", 40, 0), ("4000", 0, 100))

        ledger = LedgerQuery(db_session).account_ledger(chart["1000"].id)

        assert len(ledger) == 1
        assert ledger[0].debit == Decimal("100")

    def test_description_falls_back_to_memo(
        self, db_session, chart, open_year, actor
    ):
        post(db_session, actor, date(2025, 1, 5), "Sale",
             ("1000", 10, 0), ("4000", 0, 10))

        row = LedgerQuery(db_session).account_ledger(chart["1000"].id)[0]
        assert row.description == "Sale"
        assert row.status == EntryStatus.POSTED

    def test_final_running_balance_matches_summary(
        self, db_session, chart, open_year, actor
    ):
        post(db_session, actor, date(2025, 1, 5), "Sale",
             ("1000", "1000.50", 0), ("4000", 0, "1000.50"))
        rent = post(db_session, actor, date(2025, 1, 6), "Rent",
                    ("6000", 300, 0), ("1000", 0, 300))
        ReversalEngine(db_session).reverse(rent.id, actor)
        post(db_session, actor, date(2025, 1, 3), "Back-dated sale",
             ("1000", "0.25", 0), ("4000", 0, "0.25"))

        query = LedgerQuery(db_session)
        rows = by_code(query.account_summary())
        for code in ("1000", "4000", "6000"):
            ledger = query.account_ledger(chart[code].id)
            assert ledger[-1].running_balance == rows[code].balance
            assert query.account_balance(chart[code].id) == rows[code].balance

    def test_unknown_account(self, db_session):
        with pytest.raises(AccountNotFoundError):
            LedgerQuery(db_session).account_ledger(999)


class TestIntegrity:

    def test_empty_ledger_is_balanced(self, db_session):
        report = LedgerQuery(db_session).check_integrity()
        assert report["is_balanced"] is True
        assert report["difference"] == 0

    def test_ledger_balances_after_posts_and_reversals(
        self, db_session, chart, open_year, actor
    ):
        entry = post(db_session, actor, date(2025, 1, 5), "Sale",
                     ("1000", 1000, 0), ("4000", 0, 1000))
        post(db_session, actor, date(2025, 1, 6), "Rent",
             ("6000", 300, 0), ("1000", 0, 300))
        ReversalEngine(db_session).reverse(entry.id, actor)

        report = LedgerQuery(db_session).check_integrity()

        assert report["is_balanced"] is True
        assert report["total_debits"] == Decimal("2300")
        assert report["total_credits"] == Decimal("2300")
