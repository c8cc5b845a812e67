"""Savings goal contributions."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from cosmic_ledger.domain.constants import GOALS_CATEGORY
from cosmic_ledger.domain.errors import (
    AccountNotFoundError,
    AccountOwnershipError,
    GoalNotFoundError,
    InsufficientFundsError,
    LedgerValidationError,
)
from cosmic_ledger.domain.models import (
    Account,
    ExpenseShare,
    PaymentShare,
    Transaction,
    TransactionType,
    User,
)
from cosmic_ledger.domain.services.posting import post_transaction


@dataclass(frozen=True)
class GoalContribution:
    """Outcome of a goal contribution.

    Attributes:
        user: User with the updated goal and the contribution recorded.
        accounts: Account book after the payment.
        transaction: Generated expense record.
    """

    user: User
    accounts: dict[str, Account]
    transaction: Transaction


def contribute_to_goal(
    user: User,
    goal_id: str,
    amount: Decimal,
    from_account_id: str,
    accounts: Mapping[str, Account],
    *,
    on: date,
    transaction_id: str,
) -> GoalContribution:
    """Pay into a goal from one of the user's accounts.

    Raises:
        GoalNotFoundError: When the user has no such goal.
        AccountNotFoundError: When the source account is unknown.
        AccountOwnershipError: When the user does not own the account.
        LedgerValidationError: On a non-positive amount.
        InsufficientFundsError: When the account cannot cover the amount.
    """
    goal = user.find_goal(goal_id)
    if goal is None:
        raise GoalNotFoundError(goal_id)
    if amount <= 0:
        raise LedgerValidationError("Contribution amount must be positive")
    account = accounts.get(from_account_id)
    if account is None:
        raise AccountNotFoundError(from_account_id)
    if not account.is_usable_by(user.id):
        raise AccountOwnershipError(
            f"Account {from_account_id} is not owned by user {user.id}"
        )
    if account.balance < amount:
        raise InsufficientFundsError(account.id, account.balance, amount)

    transaction = Transaction(
        id=transaction_id,
        description=f"Contribution to goal: {goal.name}",
        amount=amount,
        type=TransactionType.EXPENSE,
        category=GOALS_CATEGORY,
        date=on,
        payment_shares=(PaymentShare(user.id, account.id, amount),),
        expense_shares=(ExpenseShare(user.id, amount),),
    )
    book = post_transaction(transaction, accounts)

    updated_goal = replace(goal, current_amount=goal.current_amount + amount)
    goals = tuple(updated_goal if g.id == goal_id else g for g in user.goals)
    updated_user = replace(
        user,
        goals=goals,
        statement=user.statement.with_transaction(transaction),
    )
    return GoalContribution(
        user=updated_user,
        accounts=book,
        transaction=transaction,
    )


__all__ = ["GoalContribution", "contribute_to_goal"]
