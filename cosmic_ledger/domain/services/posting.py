"""Ledger posting: applying transactions to account balances.

Every posting is all-or-nothing. Account references are checked before any
balance is computed, and the caller's mapping is never modified; a new
mapping is returned instead.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from cosmic_ledger.domain.constants import INVESTMENT_CATEGORY, TRANSFER_CATEGORY
from cosmic_ledger.domain.errors import (
    AccountNotFoundError,
    AccountOwnershipError,
    InsufficientFundsError,
    LedgerValidationError,
)
from cosmic_ledger.domain.models import (
    Account,
    Asset,
    AssetType,
    ExpenseShare,
    PaymentShare,
    Transaction,
    TransactionType,
)
from cosmic_ledger.domain.services.validation import (
    validate_payment_accounts,
    validate_transaction,
)


@dataclass(frozen=True)
class TransferResult:
    """Outcome of moving money between two of a user's accounts.

    Attributes:
        accounts: Account book after the move.
        transactions: Generated outgoing and incoming records; empty for a
            settle-up.
    """

    accounts: dict[str, Account]
    transactions: tuple[Transaction, ...] = ()


def index_accounts(*groups: Iterable[Account]) -> dict[str, Account]:
    """Return accounts keyed by id; later groups win on duplicate ids."""
    book: dict[str, Account] = {}
    for group in groups:
        for account in group:
            book[account.id] = account
    return book


def post_transaction(
    transaction: Transaction,
    accounts: Mapping[str, Account],
) -> dict[str, Account]:
    """Apply a transaction to the balances of its payment accounts.

    Income credits each payment share's account; expense debits it.

    Args:
        transaction: Validated transaction to post.
        accounts: Account book keyed by id.

    Returns:
        dict[str, Account]: New account book with updated balances.

    Raises:
        LedgerValidationError: When the transaction is inconsistent.
        AccountNotFoundError: When a payment account is unknown.
        AccountOwnershipError: When a payment account is not usable.
    """
    validate_transaction(transaction)
    validate_payment_accounts(transaction, accounts)
    return _apply(transaction, accounts, Decimal("1"))


def reverse_transaction(
    transaction: Transaction,
    accounts: Mapping[str, Account],
) -> dict[str, Account]:
    """Undo a previously posted transaction.

    Reversal only checks that the accounts still exist, so a stored record
    can always be backed out exactly as it was posted.

    Raises:
        AccountNotFoundError: When a payment account no longer exists.
    """
    for share in transaction.payment_shares:
        if share.account_id not in accounts:
            raise AccountNotFoundError(share.account_id)
    return _apply(transaction, accounts, Decimal("-1"))


def repost_transaction(
    previous: Transaction,
    updated: Transaction,
    accounts: Mapping[str, Account],
) -> dict[str, Account]:
    """Reverse the stored version of a transaction, then post its update."""
    reversed_book = reverse_transaction(previous, accounts)
    return post_transaction(updated, reversed_book)


def changed_accounts(
    before: Mapping[str, Account],
    after: Mapping[str, Account],
) -> tuple[Account, ...]:
    """Return accounts of ``after`` whose balance differs from ``before``."""
    return tuple(
        account
        for account_id, account in after.items()
        if account_id not in before
        or before[account_id].balance != account.balance
    )


def _apply(
    transaction: Transaction,
    accounts: Mapping[str, Account],
    sign: Decimal,
) -> dict[str, Account]:
    direction = Decimal("1") if transaction.is_income else Decimal("-1")
    book = dict(accounts)
    for share in transaction.payment_shares:
        account = book[share.account_id]
        book[share.account_id] = account.with_balance(
            account.balance + sign * direction * share.amount
        )
    return book


def transfer_funds(
    accounts: Mapping[str, Account],
    user_id: str,
    from_account_id: str,
    to_account_id: str,
    amount: Decimal,
    *,
    on: date,
    transaction_ids: tuple[str, str] | None = None,
    settle_up: bool = False,
) -> TransferResult:
    """Move money between two accounts the user can use.

    A regular transfer books an outgoing expense and an incoming income in
    the transfer category. A settle-up moves the balances only.

    Args:
        accounts: Account book keyed by id.
        user_id: User moving the money.
        from_account_id: Source account.
        to_account_id: Destination account.
        amount: Positive amount to move.
        on: Booking date of the generated records.
        transaction_ids: Ids for the outgoing and incoming records; required
            unless ``settle_up`` is set.
        settle_up: Move balances without generating records.

    Returns:
        TransferResult: New account book and generated records.

    Raises:
        LedgerValidationError: On a non-positive amount or identical accounts.
        InsufficientFundsError: When the source cannot cover the amount.
    """
    if amount <= 0:
        raise LedgerValidationError("Transfer amount must be positive")
    if from_account_id == to_account_id:
        raise LedgerValidationError("Cannot transfer to the same account")
    source = _usable_account(accounts, from_account_id, user_id)
    destination = _usable_account(accounts, to_account_id, user_id)
    if source.balance < amount:
        raise InsufficientFundsError(source.id, source.balance, amount)

    if settle_up:
        book = dict(accounts)
        book[source.id] = source.with_balance(source.balance - amount)
        book[destination.id] = destination.with_balance(
            destination.balance + amount
        )
        return TransferResult(accounts=book)

    if transaction_ids is None:
        raise LedgerValidationError("Transfer records need ids")
    out_id, in_id = transaction_ids
    outgoing = Transaction(
        id=out_id,
        description=f"Transfer to {destination.name}",
        amount=amount,
        type=TransactionType.EXPENSE,
        category=TRANSFER_CATEGORY,
        date=on,
        payment_shares=(PaymentShare(user_id, source.id, amount),),
        expense_shares=(ExpenseShare(user_id, amount),),
    )
    incoming = Transaction(
        id=in_id,
        description=f"Transfer from {source.name}",
        amount=amount,
        type=TransactionType.INCOME,
        category=TRANSFER_CATEGORY,
        date=on,
        payment_shares=(PaymentShare(user_id, destination.id, amount),),
    )
    book = post_transaction(outgoing, accounts)
    book = post_transaction(incoming, book)
    return TransferResult(accounts=book, transactions=(outgoing, incoming))


def _usable_account(
    accounts: Mapping[str, Account],
    account_id: str,
    user_id: str,
) -> Account:
    account = accounts.get(account_id)
    if account is None:
        raise AccountNotFoundError(account_id)
    if not account.is_usable_by(user_id):
        raise AccountOwnershipError(
            f"Account {account_id} is not owned by user {user_id}"
        )
    return account


def build_dividend(
    stock: Asset,
    amount: Decimal,
    account: Account,
    user_id: str,
    *,
    on: date,
    transaction_id: str,
) -> Transaction:
    """Return the passive income record for a dividend paid by a stock.

    Raises:
        LedgerValidationError: When the asset is not a stock or the amount
            is not positive.
        AccountOwnershipError: When a team stock pays into a non-team
            account, or a personal stock into an account of someone else.
    """
    if stock.asset_type != AssetType.STOCK:
        raise LedgerValidationError(f"{stock.name} is not a stock")
    if amount <= 0:
        raise LedgerValidationError("Dividend amount must be positive")
    if stock.team_id is not None:
        if account.team_id != stock.team_id:
            raise AccountOwnershipError(
                f"Account {account.id} does not belong to team {stock.team_id}"
            )
    elif user_id not in account.owner_ids:
        raise AccountOwnershipError(
            f"Account {account.id} is not owned by user {user_id}"
        )

    label = f"{stock.name} ({stock.ticker})" if stock.ticker else stock.name
    return Transaction(
        id=transaction_id,
        description=f"Dividend from {label}",
        amount=amount,
        type=TransactionType.INCOME,
        category=INVESTMENT_CATEGORY,
        date=on,
        payment_shares=(PaymentShare(user_id, account.id, amount),),
        is_passive=True,
        team_id=stock.team_id,
        asset_id=stock.id,
    )


def log_dividend(
    stock: Asset,
    amount: Decimal,
    account_id: str,
    user_id: str,
    accounts: Mapping[str, Account],
    *,
    on: date,
    transaction_id: str,
) -> tuple[dict[str, Account], Transaction]:
    """Book and post a dividend into the receiving account.

    Returns:
        tuple: New account book and the generated income record.
    """
    account = accounts.get(account_id)
    if account is None:
        raise AccountNotFoundError(account_id)
    transaction = build_dividend(
        stock,
        amount,
        account,
        user_id,
        on=on,
        transaction_id=transaction_id,
    )
    return post_transaction(transaction, accounts), transaction


__all__ = [
    "TransferResult",
    "index_accounts",
    "post_transaction",
    "reverse_transaction",
    "repost_transaction",
    "changed_accounts",
    "transfer_funds",
    "build_dividend",
    "log_dividend",
]
