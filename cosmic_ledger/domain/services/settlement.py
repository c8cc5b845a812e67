"""Shared-expense settlement: each user's net position against the group."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from cosmic_ledger.domain.constants import SETTLEMENT_TOLERANCE
from cosmic_ledger.domain.models import NetBalance, Team, Transaction, User
from cosmic_ledger.utils.decimal_utils import round_money


def compute_net_balances(
    all_users: Sequence[User],
    teams: Iterable[Team],
) -> list[NetBalance]:
    """Net every shared expense into one balance per user.

    Payers are credited with what they fronted and participants are debited
    with what they consumed. Only expenses that list expense shares take
    part, each counted once however many statements hold it.

    Args:
        all_users: Users to report, in output order.
        teams: Teams whose statements are scanned.

    Returns:
        list[NetBalance]: Amounts rounded to cents, positive when the group
        owes the user and negative when the user owes the group. Users within
        0.01 of zero are left out.
    """
    balances = {user.id: Decimal("0") for user in all_users}
    for transaction in _shared_expenses(all_users, teams):
        for payment in transaction.payment_shares:
            if payment.user_id in balances:
                balances[payment.user_id] += payment.amount
        for expense in transaction.expense_shares:
            if expense.user_id in balances:
                balances[expense.user_id] -= expense.amount

    rounded = {user_id: round_money(amount) for user_id, amount in balances.items()}
    return [
        NetBalance(user_id=user_id, amount=amount)
        for user_id, amount in rounded.items()
        if abs(amount) > SETTLEMENT_TOLERANCE
    ]


def _shared_expenses(
    all_users: Sequence[User],
    teams: Iterable[Team],
) -> list[Transaction]:
    unique: dict[str, Transaction] = {}
    statements = [team.statement for team in teams]
    statements.extend(user.statement for user in all_users)
    for statement in statements:
        for transaction in statement.transactions:
            if transaction.is_expense and transaction.expense_shares:
                unique[transaction.id] = transaction
    return list(unique.values())


def summarize_position(
    balances: Iterable[NetBalance],
    user_id: str,
) -> tuple[Decimal, Decimal]:
    """Return what the group owes the user and what the user owes the group."""
    amount = next(
        (balance.amount for balance in balances if balance.user_id == user_id),
        Decimal("0"),
    )
    return max(amount, Decimal("0")), max(-amount, Decimal("0"))


__all__ = ["compute_net_balances", "summarize_position"]
