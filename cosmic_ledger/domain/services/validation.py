"""Domain validation for transactions and holdings."""

from collections.abc import Mapping
from decimal import Decimal

from cosmic_ledger.domain.constants import (
    FULL_OWNERSHIP_PERCENTAGE,
    OWNERSHIP_TOLERANCE,
    SPLIT_TOLERANCE,
)
from cosmic_ledger.domain.errors import (
    AccountNotFoundError,
    AccountOwnershipError,
    LedgerValidationError,
    OwnershipSharesError,
    SplitMismatchError,
)
from cosmic_ledger.domain.models import (
    Account,
    ExplicitShares,
    Holding,
    TeamEqualSplit,
    Transaction,
)
from cosmic_ledger.utils.decimal_utils import within_tolerance


def validate_transaction(transaction: Transaction) -> None:
    """Reject transactions whose amounts or shares are inconsistent.

    Args:
        transaction: Transaction about to be posted.

    Raises:
        LedgerValidationError: On a non-positive amount, a negative share,
            missing payment shares or a passive expense.
        SplitMismatchError: When payment shares, or the expense shares of an
            expense, do not sum to the amount within 0.01.
    """
    if transaction.amount <= 0:
        raise LedgerValidationError("Transaction amount must be positive")
    if not transaction.description.strip():
        raise LedgerValidationError("Transaction description is required")
    if not transaction.category.strip():
        raise LedgerValidationError("Transaction category is required")
    if transaction.is_passive and not transaction.is_income:
        raise LedgerValidationError("Only income can be marked passive")
    if not transaction.payment_shares:
        raise LedgerValidationError(
            "Transaction needs at least one payment share"
        )
    shares = (*transaction.payment_shares, *transaction.expense_shares)
    if any(share.amount < 0 for share in shares):
        raise LedgerValidationError("Share amounts cannot be negative")

    payment_total = sum(
        (share.amount for share in transaction.payment_shares),
        Decimal("0"),
    )
    if not within_tolerance(payment_total, transaction.amount, SPLIT_TOLERANCE):
        raise SplitMismatchError(
            transaction.id,
            "Payment",
            transaction.amount,
            payment_total,
        )
    if transaction.is_expense and transaction.expense_shares:
        expense_total = sum(
            (share.amount for share in transaction.expense_shares),
            Decimal("0"),
        )
        if not within_tolerance(
            expense_total,
            transaction.amount,
            SPLIT_TOLERANCE,
        ):
            raise SplitMismatchError(
                transaction.id,
                "Expense",
                transaction.amount,
                expense_total,
            )


def validate_payment_accounts(
    transaction: Transaction,
    accounts: Mapping[str, Account],
) -> None:
    """Check that every payment share draws on a usable account.

    Raises:
        AccountNotFoundError: When a referenced account is unknown.
        AccountOwnershipError: When the account belongs neither to the
            share's user nor to the transaction's team.
    """
    for share in transaction.payment_shares:
        account = accounts.get(share.account_id)
        if account is None:
            raise AccountNotFoundError(share.account_id)
        if not account.is_usable_by(share.user_id, transaction.team_id):
            raise AccountOwnershipError(
                f"Account {share.account_id} is not owned by user "
                f"{share.user_id} or team {transaction.team_id}"
            )


def validate_holding(item: Holding) -> None:
    """Check a holding's ownership before it is saved.

    Raises:
        LedgerValidationError: On a negative value or balance, or a team tag
            that disagrees with a team split.
        OwnershipSharesError: When explicit percentages are out of range or
            do not sum to 100 within 0.1.
    """
    if item.amount < 0:
        raise LedgerValidationError(f"{item.name} cannot be negative")
    ownership = item.ownership
    if isinstance(ownership, TeamEqualSplit) and ownership.team_id != item.team_id:
        raise LedgerValidationError(
            f"{item.name} is split across team {ownership.team_id} "
            f"but tagged with team {item.team_id}"
        )
    if isinstance(ownership, ExplicitShares) and not ownership.prorated:
        validate_ownership_shares(ownership)


def validate_ownership_shares(ownership: ExplicitShares) -> None:
    """Check explicit ownership percentages sum to 100."""
    if not ownership.shares:
        raise OwnershipSharesError("Explicit ownership needs at least one share")
    for share in ownership.shares:
        if share.percentage < 0 or share.percentage > FULL_OWNERSHIP_PERCENTAGE:
            raise OwnershipSharesError(
                f"Ownership percentage out of range for {share.user_id}: "
                f"{share.percentage}"
            )
    total = sum((share.percentage for share in ownership.shares), Decimal("0"))
    if not within_tolerance(total, FULL_OWNERSHIP_PERCENTAGE, OWNERSHIP_TOLERANCE):
        raise OwnershipSharesError(
            f"Ownership percentages sum to {total}, expected 100"
        )


__all__ = [
    "validate_transaction",
    "validate_payment_accounts",
    "validate_holding",
    "validate_ownership_shares",
]
