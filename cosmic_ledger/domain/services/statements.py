"""Statement merging and transaction placement across users and teams."""

from collections.abc import Iterable, Mapping
from dataclasses import replace
from decimal import Decimal

from cosmic_ledger.domain.constants import FULL_OWNERSHIP_PERCENTAGE
from cosmic_ledger.domain.errors import TeamNotFoundError, UserNotFoundError
from cosmic_ledger.domain.models import (
    ExplicitShares,
    FinancialStatement,
    Holding,
    OwnershipShare,
    SoleOwnership,
    Team,
    TeamEqualSplit,
    Transaction,
    User,
)
from cosmic_ledger.domain.services.ownership import team_split_amount
from cosmic_ledger.domain.services.validation import validate_holding


def merge_effective_statement(
    user: User,
    teams: Iterable[Team],
) -> FinancialStatement:
    """Return the user's statement combined with their teams' statements.

    Team transactions are included as-is. Team holdings are scaled to the
    user's equal share and relabeled as owned solely by the user at that
    percentage. Duplicate ids keep the last record seen. Inputs are never
    modified.

    Args:
        user: User whose view is built.
        teams: Candidate teams; only those listing the user are merged.

    Returns:
        FinancialStatement: The user's effective statement.
    """
    transactions = {t.id: t for t in user.statement.transactions}
    assets = {a.id: a for a in user.statement.assets}
    liabilities = {item.id: item for item in user.statement.liabilities}

    for team in teams:
        if not team.has_member(user.id):
            continue
        for transaction in team.statement.transactions:
            transactions[transaction.id] = transaction
        for asset in team.statement.assets:
            assets[asset.id] = _prorate(asset, team, user.id)
        for liability in team.statement.liabilities:
            liabilities[liability.id] = _prorate(liability, team, user.id)

    return FinancialStatement(
        transactions=tuple(transactions.values()),
        assets=tuple(assets.values()),
        liabilities=tuple(liabilities.values()),
    )


def _prorate(item: Holding, team: Team, user_id: str) -> Holding:
    percentage = FULL_OWNERSHIP_PERCENTAGE / Decimal(team.member_count)
    ownership = ExplicitShares(
        shares=(OwnershipShare(user_id, percentage),),
        prorated=True,
    )
    return item.with_amount(
        team_split_amount(item.amount, team, user_id),
        ownership,
    )


def find_transaction(
    transaction_id: str,
    users: Mapping[str, User],
    teams: Mapping[str, Team],
) -> Transaction | None:
    """Return the stored transaction with the id from any statement."""
    for holder in (*teams.values(), *users.values()):
        found = holder.statement.find_transaction(transaction_id)
        if found is not None:
            return found
    return None


def remove_transaction(
    transaction_id: str,
    users: Mapping[str, User],
    teams: Mapping[str, Team],
) -> tuple[dict[str, User], dict[str, Team]]:
    """Drop a transaction from every statement that holds it.

    Returns:
        tuple: Users and teams whose statements changed, keyed by id.
    """
    changed_users = {
        user_id: user.with_statement(
            user.statement.without_transaction(transaction_id)
        )
        for user_id, user in users.items()
        if user.statement.find_transaction(transaction_id) is not None
    }
    changed_teams = {
        team_id: team.with_statement(
            team.statement.without_transaction(transaction_id)
        )
        for team_id, team in teams.items()
        if team.statement.find_transaction(transaction_id) is not None
    }
    return changed_users, changed_teams


def place_transaction(
    transaction: Transaction,
    acting_user_id: str,
    users: Mapping[str, User],
    teams: Mapping[str, Team],
) -> tuple[dict[str, User], dict[str, Team]]:
    """Store a transaction in the statements that should hold it.

    A team transaction lives in its team's statement only. A personal one
    is copied into the statement of the acting user and of every user named
    in its shares, so each participant sees it in their own view.

    Raises:
        TeamNotFoundError: When the transaction's team is not available.
        UserNotFoundError: When a participant is not available.

    Returns:
        tuple: Users and teams whose statements changed, keyed by id.
    """
    if transaction.team_id is not None:
        team = teams.get(transaction.team_id)
        if team is None:
            raise TeamNotFoundError(transaction.team_id)
        placed = team.with_statement(team.statement.with_transaction(transaction))
        return {}, {team.id: placed}

    holder_ids = dict.fromkeys((acting_user_id, *transaction.participant_ids()))
    changed_users: dict[str, User] = {}
    for user_id in holder_ids:
        user = users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        changed_users[user_id] = user.with_statement(
            user.statement.with_transaction(transaction)
        )
    return changed_users, {}


def place_holding(
    item: Holding,
    acting_user_id: str,
    users: Mapping[str, User],
    teams: Mapping[str, Team],
) -> tuple[dict[str, User], dict[str, Team]]:
    """Store an asset or liability in the statement that owns it.

    A team-tagged holding goes to the team statement, split equally across
    members. Anything else goes to the acting user's statement.

    Raises:
        TeamNotFoundError: When the holding's team is not available.
        UserNotFoundError: When the acting user is not available.

    Returns:
        tuple: Users and teams whose statements changed, keyed by id.
    """
    if item.team_id is not None:
        team = teams.get(item.team_id)
        if team is None:
            raise TeamNotFoundError(item.team_id)
        if isinstance(item.ownership, SoleOwnership):
            item = replace(item, ownership=TeamEqualSplit(team.id))
        validate_holding(item)
        placed = team.with_statement(team.statement.with_holding(item))
        return {}, {team.id: placed}

    user = users.get(acting_user_id)
    if user is None:
        raise UserNotFoundError(acting_user_id)
    validate_holding(item)
    return {user.id: user.with_statement(user.statement.with_holding(item))}, {}


__all__ = [
    "merge_effective_statement",
    "find_transaction",
    "remove_transaction",
    "place_transaction",
    "place_holding",
]
