"""Applying the outcome of a cosmic event to a user's ledger."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from cosmic_ledger.domain.constants import COSMIC_EVENT_CATEGORY
from cosmic_ledger.domain.errors import (
    InsufficientFundsError,
    LedgerValidationError,
)
from cosmic_ledger.domain.models import (
    Account,
    AccountType,
    EventOutcome,
    ExpenseShare,
    PaymentShare,
    SoleOwnership,
    Transaction,
    TransactionType,
    User,
)
from cosmic_ledger.domain.services.posting import post_transaction

CASH_ACCOUNT_TYPES = (AccountType.CHECKING, AccountType.CASH)


@dataclass(frozen=True)
class EventResult:
    """Outcome of applying an event.

    Attributes:
        user: User with the event recorded in their statement.
        accounts: Account book after the cash change.
        transaction: Generated record, None when no cash moved.
    """

    user: User
    accounts: dict[str, Account]
    transaction: Transaction | None = None


def find_cash_account(
    user: User,
    accounts: Mapping[str, Account],
) -> Account | None:
    """Return the user's first checking or cash account, with its live balance."""
    for account in user.accounts:
        current = accounts.get(account.id, account)
        if current.account_type in CASH_ACCOUNT_TYPES:
            return current
    return None


def describe_event(message: str) -> str:
    """Return the headline of an event message, up to the first ``!``."""
    headline = message.split("!")[0].strip()
    return headline or message.strip() or "Cosmic event"


def apply_event_outcome(
    user: User,
    outcome: EventOutcome,
    accounts: Mapping[str, Account],
    *,
    on: date,
    transaction_id: str,
    asset_id: str,
) -> EventResult:
    """Apply an event's cash change and grant its asset.

    Args:
        user: User who played the event.
        outcome: Cash change and asset granted by the event.
        accounts: Account book keyed by id.
        on: Booking date.
        transaction_id: Id of the generated record.
        asset_id: Id given to the granted asset.

    Returns:
        EventResult: Updated user and account book.

    Raises:
        LedgerValidationError: When cash moves but the user has no checking
            or cash account.
        InsufficientFundsError: When a loss would overdraw that account.
    """
    book = dict(accounts)
    statement = user.statement
    transaction = None

    change = outcome.cash_change or Decimal("0")
    if change:
        account = find_cash_account(user, accounts)
        if account is None:
            raise LedgerValidationError(
                "No cash or checking account to apply the event to"
            )
        if account.balance + change < 0:
            raise InsufficientFundsError(account.id, account.balance, -change)
        amount = abs(change)
        transaction = Transaction(
            id=transaction_id,
            description=describe_event(outcome.message),
            amount=amount,
            type=TransactionType.INCOME if change > 0 else TransactionType.EXPENSE,
            category=COSMIC_EVENT_CATEGORY,
            date=on,
            payment_shares=(PaymentShare(user.id, account.id, amount),),
            expense_shares=(
                () if change > 0 else (ExpenseShare(user.id, amount),)
            ),
        )
        book = post_transaction(transaction, book)
        statement = statement.with_transaction(transaction)

    if outcome.new_asset is not None:
        granted = replace(
            outcome.new_asset,
            id=asset_id,
            ownership=SoleOwnership(),
            team_id=None,
        )
        statement = statement.with_asset(granted)

    return EventResult(
        user=user.with_statement(statement),
        accounts=book,
        transaction=transaction,
    )


__all__ = [
    "CASH_ACCOUNT_TYPES",
    "EventResult",
    "find_cash_account",
    "describe_event",
    "apply_event_outcome",
]
