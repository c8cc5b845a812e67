"""Tests for ledger posting, transfers and dividends."""

from datetime import date
from decimal import Decimal

import pytest

from cosmic_ledger.domain.constants import INVESTMENT_CATEGORY, TRANSFER_CATEGORY
from cosmic_ledger.domain.errors import (
    AccountNotFoundError,
    AccountOwnershipError,
    InsufficientFundsError,
    LedgerValidationError,
    SplitMismatchError,
)
from cosmic_ledger.domain.models import (
    Account,
    AccountType,
    Asset,
    AssetType,
    ExpenseShare,
    PaymentShare,
    Transaction,
    TransactionType,
)
from cosmic_ledger.domain.services.posting import (
    changed_accounts,
    index_accounts,
    log_dividend,
    post_transaction,
    repost_transaction,
    reverse_transaction,
    transfer_funds,
)

DAY = date(2024, 6, 1)


def _build_accounts() -> dict[str, Account]:
    return index_accounts(
        [
            Account(
                "chk", "Checking", AccountType.CHECKING, Decimal("1000"), ("alice",)
            ),
            Account(
                "sav", "Savings", AccountType.SAVINGS, Decimal("200"), ("alice",)
            ),
            Account("bob-chk", "Bob", AccountType.CHECKING, Decimal("50"), ("bob",)),
            Account(
                "team-chk",
                "Team",
                AccountType.CHECKING,
                Decimal("300"),
                (),
                "team-1",
            ),
        ]
    )


def _build_expense(amount="100", **overrides) -> Transaction:
    value = Decimal(amount)
    values = {
        "id": "tx-1",
        "description": "Concert",
        "amount": value,
        "type": TransactionType.EXPENSE,
        "category": "Fun",
        "date": DAY,
        "payment_shares": (PaymentShare("alice", "chk", value),),
        "expense_shares": (ExpenseShare("alice", value),),
    }
    values.update(overrides)
    return Transaction(**values)


def test_post_expense_debits_and_income_credits() -> None:
    """Expenses lower and income raises the payment account balance."""
    accounts = _build_accounts()
    income = Transaction(
        id="tx-2",
        description="Salary",
        amount=Decimal("500"),
        type=TransactionType.INCOME,
        category="Salary",
        date=DAY,
        payment_shares=(PaymentShare("alice", "sav", Decimal("500")),),
    )

    after_expense = post_transaction(_build_expense(), accounts)
    after_income = post_transaction(income, after_expense)

    assert after_income["chk"].balance == Decimal("900")
    assert after_income["sav"].balance == Decimal("700")
    assert accounts["chk"].balance == Decimal("1000")


def test_post_then_reverse_restores_balances() -> None:
    """Reversing a posting returns every balance to where it started."""
    accounts = _build_accounts()
    transaction = _build_expense(
        amount="90",
        payment_shares=(
            PaymentShare("alice", "chk", Decimal("60")),
            PaymentShare("bob", "bob-chk", Decimal("30")),
        ),
        expense_shares=(
            ExpenseShare("alice", Decimal("45")),
            ExpenseShare("bob", Decimal("45")),
        ),
    )

    restored = reverse_transaction(
        transaction, post_transaction(transaction, accounts)
    )

    assert restored == accounts


def test_post_is_all_or_nothing() -> None:
    """A share on an unknown account leaves every balance untouched."""
    accounts = _build_accounts()
    transaction = _build_expense(
        payment_shares=(
            PaymentShare("alice", "chk", Decimal("50")),
            PaymentShare("alice", "missing", Decimal("50")),
        )
    )

    with pytest.raises(AccountNotFoundError):
        post_transaction(transaction, accounts)

    assert accounts == _build_accounts()


def test_post_rejects_foreign_account_and_bad_split() -> None:
    """Drawing on another user's account or an unbalanced split fails."""
    accounts = _build_accounts()

    with pytest.raises(AccountOwnershipError):
        post_transaction(
            _build_expense(
                payment_shares=(PaymentShare("alice", "bob-chk", Decimal("100")),)
            ),
            accounts,
        )
    with pytest.raises(SplitMismatchError):
        post_transaction(
            _build_expense(
                payment_shares=(PaymentShare("alice", "chk", Decimal("99")),)
            ),
            accounts,
        )


def test_repost_applies_only_the_difference() -> None:
    """Editing an amount moves the balance by the difference."""
    accounts = post_transaction(_build_expense(), _build_accounts())

    updated = repost_transaction(
        _build_expense(), _build_expense(amount="150"), accounts
    )

    assert updated["chk"].balance == Decimal("850")
    assert changed_accounts(accounts, updated) == (updated["chk"],)


def test_repost_can_move_between_accounts() -> None:
    """Changing the payment account restores the old one."""
    accounts = post_transaction(_build_expense(), _build_accounts())
    moved = _build_expense(
        payment_shares=(PaymentShare("alice", "sav", Decimal("100")),)
    )

    updated = repost_transaction(_build_expense(), moved, accounts)

    assert updated["chk"].balance == Decimal("1000")
    assert updated["sav"].balance == Decimal("100")


def test_transfer_books_out_and_in_records() -> None:
    """A transfer moves money and generates a matching record pair."""
    result = transfer_funds(
        _build_accounts(),
        "alice",
        "chk",
        "sav",
        Decimal("250"),
        on=DAY,
        transaction_ids=("tx-out", "tx-in"),
    )

    outgoing, incoming = result.transactions
    assert result.accounts["chk"].balance == Decimal("750")
    assert result.accounts["sav"].balance == Decimal("450")
    assert outgoing.type == TransactionType.EXPENSE
    assert outgoing.description == "Transfer to Savings"
    assert incoming.type == TransactionType.INCOME
    assert incoming.description == "Transfer from Checking"
    assert {outgoing.category, incoming.category} == {TRANSFER_CATEGORY}


def test_settle_up_moves_balances_without_records() -> None:
    """A settle-up produces no transactions."""
    result = transfer_funds(
        _build_accounts(),
        "alice",
        "sav",
        "chk",
        Decimal("200"),
        on=DAY,
        settle_up=True,
    )

    assert result.transactions == ()
    assert result.accounts["sav"].balance == Decimal("0")
    assert result.accounts["chk"].balance == Decimal("1200")


def test_transfer_rejections() -> None:
    """Overdrafts, self-transfers and foreign accounts are refused."""
    accounts = _build_accounts()
    ids = ("tx-out", "tx-in")

    with pytest.raises(InsufficientFundsError):
        transfer_funds(
            accounts, "alice", "sav", "chk", Decimal("201"),
            on=DAY, transaction_ids=ids,
        )
    with pytest.raises(LedgerValidationError):
        transfer_funds(
            accounts, "alice", "chk", "chk", Decimal("1"),
            on=DAY, transaction_ids=ids,
        )
    with pytest.raises(AccountOwnershipError):
        transfer_funds(
            accounts, "alice", "chk", "bob-chk", Decimal("1"),
            on=DAY, transaction_ids=ids,
        )


def test_log_dividend_credits_account_as_passive_income() -> None:
    """Dividends post passive investment income linked to the stock."""
    stock = Asset(
        id="stk",
        name="Acme",
        value=Decimal("2000"),
        asset_type=AssetType.STOCK,
        ticker="ACME",
    )

    book, transaction = log_dividend(
        stock,
        Decimal("25"),
        "chk",
        "alice",
        _build_accounts(),
        on=DAY,
        transaction_id="tx-div",
    )

    assert book["chk"].balance == Decimal("1025")
    assert transaction.is_passive is True
    assert transaction.category == INVESTMENT_CATEGORY
    assert transaction.asset_id == "stk"
    assert transaction.description == "Dividend from Acme (ACME)"


def test_team_dividend_requires_team_account() -> None:
    """A team stock pays into a team account only."""
    stock = Asset(
        id="stk",
        name="Acme",
        value=Decimal("2000"),
        asset_type=AssetType.STOCK,
        team_id="team-1",
    )

    with pytest.raises(AccountOwnershipError):
        log_dividend(
            stock, Decimal("10"), "chk", "alice", _build_accounts(),
            on=DAY, transaction_id="tx-div",
        )
    book, transaction = log_dividend(
        stock, Decimal("10"), "team-chk", "alice", _build_accounts(),
        on=DAY, transaction_id="tx-div",
    )

    assert book["team-chk"].balance == Decimal("310")
    assert transaction.team_id == "team-1"


def test_dividend_rejects_non_stock() -> None:
    """Only stocks pay dividends."""
    house = Asset(id="h", name="House", value=Decimal("1"))

    with pytest.raises(LedgerValidationError):
        log_dividend(
            house, Decimal("10"), "chk", "alice", _build_accounts(),
            on=DAY, transaction_id="tx-div",
        )
