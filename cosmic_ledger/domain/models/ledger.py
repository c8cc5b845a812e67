"""Domain models for ledger records: transactions, holdings and accounts."""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class AssetType(str, Enum):
    """Kinds of assets a statement can hold."""

    STOCK = "STOCK"
    REAL_ESTATE = "REAL_ESTATE"
    CASH = "CASH"


class AccountType(str, Enum):
    """Kinds of money accounts."""

    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"
    CREDIT_CARD = "CREDIT_CARD"
    INVESTMENT = "INVESTMENT"
    RRSP = "RRSP"
    TFSA = "TFSA"
    CASH = "CASH"


@dataclass(frozen=True)
class PaymentShare:
    """Portion of a transaction funded or received through one account."""

    user_id: str
    account_id: str
    amount: Decimal


@dataclass(frozen=True)
class ExpenseShare:
    """Portion of an expense's cost borne by one user."""

    user_id: str
    amount: Decimal


@dataclass(frozen=True)
class Transaction:
    """Immutable ledger record; edits replace the whole record.

    Attributes:
        id: Document id, None until the transaction is first saved.
        amount: Positive total amount.
        payment_shares: Who funded or received the money, and from where.
        expense_shares: Who bears the cost of an expense.
        team_id: Team whose statement holds the record, if any.
        asset_id: Originating asset for dividends.
    """

    id: str | None
    description: str
    amount: Decimal
    type: TransactionType
    category: str
    date: date
    payment_shares: tuple[PaymentShare, ...] = ()
    expense_shares: tuple[ExpenseShare, ...] = ()
    is_passive: bool = False
    team_id: str | None = None
    receipt_url: str | None = None
    asset_id: str | None = None

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    def payment_share_for(self, user_id: str) -> Decimal | None:
        """Return the user's total payment share, or None without an entry."""
        amounts = [s.amount for s in self.payment_shares if s.user_id == user_id]
        if not amounts:
            return None
        return sum(amounts, Decimal("0"))

    def expense_share_for(self, user_id: str) -> Decimal | None:
        """Return the user's total expense share, or None without an entry."""
        amounts = [s.amount for s in self.expense_shares if s.user_id == user_id]
        if not amounts:
            return None
        return sum(amounts, Decimal("0"))

    def participant_ids(self) -> tuple[str, ...]:
        """Return user ids named in payment or expense shares, in order."""
        seen: dict[str, None] = {}
        for share in self.payment_shares:
            seen.setdefault(share.user_id)
        for share in self.expense_shares:
            seen.setdefault(share.user_id)
        return tuple(seen)


@dataclass(frozen=True)
class OwnershipShare:
    """Percentage of a holding owned by one user."""

    user_id: str
    percentage: Decimal


@dataclass(frozen=True)
class SoleOwnership:
    """Holding fully owned by the holder of the statement."""


@dataclass(frozen=True)
class ExplicitShares:
    """Holding split by explicit percentages.

    ``prorated`` marks holdings whose value was already scaled to the listed
    user's share, so they count in full for that user.
    """

    shares: tuple[OwnershipShare, ...]
    prorated: bool = False

    def percentage_for(self, user_id: str) -> Decimal:
        for share in self.shares:
            if share.user_id == user_id:
                return share.percentage
        return Decimal("0")


@dataclass(frozen=True)
class TeamEqualSplit:
    """Holding split equally across the members of a team."""

    team_id: str


OwnershipMode = SoleOwnership | ExplicitShares | TeamEqualSplit


def resolve_ownership_mode(
    shares: tuple[OwnershipShare, ...] | list[OwnershipShare] | None,
    team_id: str | None,
) -> OwnershipMode:
    """Pick the ownership mode for a holding from its raw fields.

    Args:
        shares: Explicit ownership shares, if any.
        team_id: Team tag of the holding, if any.

    Returns:
        OwnershipMode: Explicit shares first, then team split, else sole.
    """
    if shares:
        return ExplicitShares(shares=tuple(shares))
    if team_id:
        return TeamEqualSplit(team_id=team_id)
    return SoleOwnership()


@dataclass(frozen=True)
class Asset:
    """Something of value held in a statement."""

    id: str
    name: str
    value: Decimal
    asset_type: AssetType = AssetType.CASH
    ownership: OwnershipMode = field(default_factory=SoleOwnership)
    team_id: str | None = None
    monthly_cashflow: Decimal = Decimal("0")
    ticker: str | None = None
    number_of_shares: Decimal | None = None
    purchase_price: Decimal | None = None
    take_profit: Decimal | None = None
    stop_loss: Decimal | None = None
    strategy: str | None = None

    @property
    def amount(self) -> Decimal:
        return self.value

    def with_amount(self, amount: Decimal, ownership: OwnershipMode) -> "Asset":
        return replace(self, value=amount, ownership=ownership)


@dataclass(frozen=True)
class Liability:
    """Debt carried in a statement."""

    id: str
    name: str
    balance: Decimal
    ownership: OwnershipMode = field(default_factory=SoleOwnership)
    team_id: str | None = None
    interest_rate: Decimal = Decimal("0")
    monthly_payment: Decimal = Decimal("0")

    @property
    def amount(self) -> Decimal:
        return self.balance

    def with_amount(
        self,
        amount: Decimal,
        ownership: OwnershipMode,
    ) -> "Liability":
        return replace(self, balance=amount, ownership=ownership)


Holding = Asset | Liability


@dataclass(frozen=True)
class FinancialStatement:
    """Transactions and holdings owned by one user or one team."""

    transactions: tuple[Transaction, ...] = ()
    assets: tuple[Asset, ...] = ()
    liabilities: tuple[Liability, ...] = ()

    def find_transaction(self, transaction_id: str) -> Transaction | None:
        for transaction in self.transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def find_asset(self, asset_id: str) -> Asset | None:
        for asset in self.assets:
            if asset.id == asset_id:
                return asset
        return None

    def with_transaction(self, transaction: Transaction) -> "FinancialStatement":
        """Return a copy holding the transaction, replacing any same-id record."""
        kept = tuple(t for t in self.transactions if t.id != transaction.id)
        if len(kept) == len(self.transactions):
            return replace(self, transactions=self.transactions + (transaction,))
        transactions = tuple(
            transaction if t.id == transaction.id else t
            for t in self.transactions
        )
        return replace(self, transactions=transactions)

    def without_transaction(self, transaction_id: str) -> "FinancialStatement":
        return replace(
            self,
            transactions=tuple(
                t for t in self.transactions if t.id != transaction_id
            ),
        )

    def find_liability(self, liability_id: str) -> Liability | None:
        for liability in self.liabilities:
            if liability.id == liability_id:
                return liability
        return None

    def with_asset(self, asset: Asset) -> "FinancialStatement":
        kept = tuple(a for a in self.assets if a.id != asset.id)
        return replace(self, assets=kept + (asset,))

    def with_liability(self, liability: Liability) -> "FinancialStatement":
        kept = tuple(d for d in self.liabilities if d.id != liability.id)
        return replace(self, liabilities=kept + (liability,))

    def with_holding(self, item: Asset | Liability) -> "FinancialStatement":
        if isinstance(item, Liability):
            return self.with_liability(item)
        return self.with_asset(item)


@dataclass(frozen=True)
class Account:
    """Money account whose balance only moves through ledger postings."""

    id: str
    name: str
    account_type: AccountType
    balance: Decimal
    owner_ids: tuple[str, ...] = ()
    team_id: str | None = None

    def is_usable_by(self, user_id: str, team_id: str | None = None) -> bool:
        """Return True when the user owns the account or the team does."""
        if user_id in self.owner_ids:
            return True
        return team_id is not None and self.team_id == team_id

    def with_balance(self, balance: Decimal) -> "Account":
        return replace(self, balance=balance)


__all__ = [
    "TransactionType",
    "AssetType",
    "AccountType",
    "PaymentShare",
    "ExpenseShare",
    "Transaction",
    "OwnershipShare",
    "SoleOwnership",
    "ExplicitShares",
    "TeamEqualSplit",
    "OwnershipMode",
    "resolve_ownership_mode",
    "Asset",
    "Liability",
    "Holding",
    "FinancialStatement",
    "Account",
]
