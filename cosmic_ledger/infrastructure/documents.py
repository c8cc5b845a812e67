"""JSON document codec for ledger records.

Documents use camelCase keys. Decimals are stored as strings and dates as
ISO strings so that amounts round-trip exactly. Keys whose value is None are
left out.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping

from cosmic_ledger.domain.models import (
    Account,
    AccountType,
    Asset,
    AssetType,
    Budget,
    ExpenseShare,
    ExplicitShares,
    FinancialStatement,
    Goal,
    Liability,
    OwnershipMode,
    OwnershipShare,
    PaymentShare,
    Team,
    Transaction,
    TransactionType,
    User,
    resolve_ownership_mode,
)
from cosmic_ledger.utils.decimal_utils import coerce_decimal

Document = dict[str, Any]


def _money(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def _optional_decimal(value) -> Decimal | None:
    return None if value is None else coerce_decimal(value)


def _optional_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _compact(document: Document) -> Document:
    return {key: value for key, value in document.items() if value is not None}


def encode_transaction(transaction: Transaction) -> Document:
    return _compact(
        {
            "id": transaction.id,
            "description": transaction.description,
            "amount": _money(transaction.amount),
            "type": transaction.type.value,
            "category": transaction.category,
            "date": transaction.date.isoformat(),
            "paymentShares": [
                {
                    "userId": share.user_id,
                    "accountId": share.account_id,
                    "amount": _money(share.amount),
                }
                for share in transaction.payment_shares
            ],
            "expenseShares": [
                {"userId": share.user_id, "amount": _money(share.amount)}
                for share in transaction.expense_shares
            ],
            "isPassive": transaction.is_passive or None,
            "teamId": transaction.team_id,
            "receiptUrl": transaction.receipt_url,
            "assetId": transaction.asset_id,
        }
    )


def decode_transaction(document: Mapping[str, Any]) -> Transaction:
    return Transaction(
        id=document.get("id"),
        description=document.get("description", ""),
        amount=coerce_decimal(document.get("amount")),
        type=TransactionType(document["type"]),
        category=document.get("category", ""),
        date=date.fromisoformat(document["date"]),
        payment_shares=tuple(
            PaymentShare(
                user_id=share["userId"],
                account_id=share["accountId"],
                amount=coerce_decimal(share.get("amount")),
            )
            for share in document.get("paymentShares") or ()
        ),
        expense_shares=tuple(
            ExpenseShare(
                user_id=share["userId"],
                amount=coerce_decimal(share.get("amount")),
            )
            for share in document.get("expenseShares") or ()
        ),
        is_passive=bool(document.get("isPassive", False)),
        team_id=document.get("teamId"),
        receipt_url=document.get("receiptUrl"),
        asset_id=document.get("assetId"),
    )


def _encode_shares(ownership: OwnershipMode) -> list[Document] | None:
    if not isinstance(ownership, ExplicitShares):
        return None
    return [
        {"userId": share.user_id, "percentage": _money(share.percentage)}
        for share in ownership.shares
    ]


def _decode_ownership(document: Mapping[str, Any]) -> OwnershipMode:
    shares = [
        OwnershipShare(
            user_id=share["userId"],
            percentage=coerce_decimal(share.get("percentage")),
        )
        for share in document.get("shares") or ()
    ]
    return resolve_ownership_mode(shares, document.get("teamId"))


def encode_asset(asset: Asset) -> Document:
    return _compact(
        {
            "id": asset.id,
            "name": asset.name,
            "type": asset.asset_type.value,
            "value": _money(asset.value),
            "monthlyCashflow": _money(asset.monthly_cashflow),
            "shares": _encode_shares(asset.ownership),
            "teamId": asset.team_id,
            "ticker": asset.ticker,
            "numberOfShares": _money(asset.number_of_shares),
            "purchasePrice": _money(asset.purchase_price),
            "takeProfit": _money(asset.take_profit),
            "stopLoss": _money(asset.stop_loss),
            "strategy": asset.strategy,
        }
    )


def decode_asset(document: Mapping[str, Any]) -> Asset:
    return Asset(
        id=document["id"],
        name=document.get("name", ""),
        value=coerce_decimal(document.get("value")),
        asset_type=AssetType(document.get("type", AssetType.CASH.value)),
        ownership=_decode_ownership(document),
        team_id=document.get("teamId"),
        monthly_cashflow=coerce_decimal(document.get("monthlyCashflow")),
        ticker=document.get("ticker"),
        number_of_shares=_optional_decimal(document.get("numberOfShares")),
        purchase_price=_optional_decimal(document.get("purchasePrice")),
        take_profit=_optional_decimal(document.get("takeProfit")),
        stop_loss=_optional_decimal(document.get("stopLoss")),
        strategy=document.get("strategy"),
    )


def encode_liability(liability: Liability) -> Document:
    return _compact(
        {
            "id": liability.id,
            "name": liability.name,
            "balance": _money(liability.balance),
            "interestRate": _money(liability.interest_rate),
            "monthlyPayment": _money(liability.monthly_payment),
            "shares": _encode_shares(liability.ownership),
            "teamId": liability.team_id,
        }
    )


def decode_liability(document: Mapping[str, Any]) -> Liability:
    return Liability(
        id=document["id"],
        name=document.get("name", ""),
        balance=coerce_decimal(document.get("balance")),
        ownership=_decode_ownership(document),
        team_id=document.get("teamId"),
        interest_rate=coerce_decimal(document.get("interestRate")),
        monthly_payment=coerce_decimal(document.get("monthlyPayment")),
    )


def encode_statement(statement: FinancialStatement) -> Document:
    return {
        "transactions": [encode_transaction(t) for t in statement.transactions],
        "assets": [encode_asset(a) for a in statement.assets],
        "liabilities": [encode_liability(item) for item in statement.liabilities],
    }


def decode_statement(document: Mapping[str, Any] | None) -> FinancialStatement:
    document = document or {}
    return FinancialStatement(
        transactions=tuple(
            decode_transaction(t) for t in document.get("transactions") or ()
        ),
        assets=tuple(decode_asset(a) for a in document.get("assets") or ()),
        liabilities=tuple(
            decode_liability(item) for item in document.get("liabilities") or ()
        ),
    )


def encode_account(account: Account) -> Document:
    return _compact(
        {
            "id": account.id,
            "name": account.name,
            "type": account.account_type.value,
            "balance": _money(account.balance),
            "ownerIds": list(account.owner_ids),
            "teamId": account.team_id,
        }
    )


def decode_account(document: Mapping[str, Any]) -> Account:
    return Account(
        id=document["id"],
        name=document.get("name", ""),
        account_type=AccountType(document.get("type", AccountType.CHECKING.value)),
        balance=coerce_decimal(document.get("balance")),
        owner_ids=tuple(document.get("ownerIds") or ()),
        team_id=document.get("teamId"),
    )


def _encode_goal(goal: Goal) -> Document:
    return _compact(
        {
            "id": goal.id,
            "name": goal.name,
            "targetAmount": _money(goal.target_amount),
            "currentAmount": _money(goal.current_amount),
            "deadline": goal.deadline.isoformat() if goal.deadline else None,
        }
    )


def _decode_goal(document: Mapping[str, Any]) -> Goal:
    return Goal(
        id=document["id"],
        name=document.get("name", ""),
        target_amount=coerce_decimal(document.get("targetAmount")),
        current_amount=coerce_decimal(document.get("currentAmount")),
        deadline=_optional_date(document.get("deadline")),
    )


def encode_user(user: User) -> Document:
    """Encode a user document; accounts live in their own collection."""
    return _compact(
        {
            "id": user.id,
            "name": user.name,
            "avatar": user.avatar,
            "email": user.email,
            "teamIds": list(user.team_ids),
            "financialStatement": encode_statement(user.statement),
            "budgets": [
                {
                    "month": budget.month,
                    "limits": {
                        category: _money(limit)
                        for category, limit in budget.limits.items()
                    },
                }
                for budget in user.budgets
            ],
            "goals": [_encode_goal(goal) for goal in user.goals],
            "achievements": sorted(user.achievements),
        }
    )


def decode_user(
    document: Mapping[str, Any],
    accounts: Iterable[Account] = (),
) -> User:
    """Decode a user document and attach the accounts it owns."""
    return User(
        id=document["id"],
        name=document.get("name", ""),
        avatar=document.get("avatar", ""),
        email=document.get("email"),
        statement=decode_statement(document.get("financialStatement")),
        accounts=tuple(accounts),
        team_ids=tuple(document.get("teamIds") or ()),
        budgets=tuple(
            Budget(
                month=budget["month"],
                limits={
                    category: coerce_decimal(limit)
                    for category, limit in (budget.get("limits") or {}).items()
                },
            )
            for budget in document.get("budgets") or ()
        ),
        goals=tuple(_decode_goal(goal) for goal in document.get("goals") or ()),
        achievements=frozenset(document.get("achievements") or ()),
    )


def encode_team(team: Team) -> Document:
    """Encode a team document; accounts live in their own collection."""
    return {
        "id": team.id,
        "name": team.name,
        "memberIds": list(team.member_ids),
        "financialStatement": encode_statement(team.statement),
        "goals": [_encode_goal(goal) for goal in team.goals],
    }


def decode_team(
    document: Mapping[str, Any],
    accounts: Iterable[Account] = (),
) -> Team:
    """Decode a team document and attach its accounts."""
    return Team(
        id=document["id"],
        name=document.get("name", ""),
        member_ids=tuple(dict.fromkeys(document.get("memberIds") or ())),
        statement=decode_statement(document.get("financialStatement")),
        accounts=tuple(accounts),
        goals=tuple(_decode_goal(goal) for goal in document.get("goals") or ()),
    )


__all__ = [
    "Document",
    "encode_transaction",
    "decode_transaction",
    "encode_asset",
    "decode_asset",
    "encode_liability",
    "decode_liability",
    "encode_statement",
    "decode_statement",
    "encode_account",
    "decode_account",
    "encode_user",
    "decode_user",
    "encode_team",
    "decode_team",
]
