"""Domain error taxonomy for ledger operations.

Validation errors reject an operation before any state is produced and are
meant to be shown verbatim to the user who initiated it. Reference errors
abort the single operation in progress when an id cannot be resolved.
"""


class LedgerError(Exception):
    """Base class for every ledger failure."""


class LedgerValidationError(LedgerError, ValueError):
    """Input rejected before any mutation is computed."""


class SplitMismatchError(LedgerValidationError):
    """Payment or expense shares do not add up to the transaction amount."""

    def __init__(
        self,
        transaction_id: str | None,
        share_kind: str,
        expected,
        actual,
    ) -> None:
        self.transaction_id = transaction_id
        self.share_kind = share_kind
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{share_kind} shares sum to {actual} but the transaction "
            f"amount is {expected}"
        )


class OwnershipSharesError(LedgerValidationError):
    """Ownership percentages of a shared holding do not sum to 100."""


class AccountOwnershipError(LedgerValidationError):
    """A payment share draws on an account its user may not use."""


class InsufficientFundsError(LedgerValidationError):
    """A source account cannot cover the requested amount."""

    def __init__(self, account_id: str, balance, amount) -> None:
        self.account_id = account_id
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"Insufficient funds in account {account_id}: "
            f"balance {balance}, requested {amount}"
        )


class LedgerReferenceError(LedgerError, LookupError):
    """An id referenced by an operation does not resolve."""

    kind = "Entity"

    def __init__(self, entity_id: str) -> None:
        self.entity_id = entity_id
        super().__init__(f"{self.kind} not found: {entity_id}")


class UserNotFoundError(LedgerReferenceError):
    kind = "User"


class TeamNotFoundError(LedgerReferenceError):
    kind = "Team"


class AccountNotFoundError(LedgerReferenceError):
    kind = "Account"


class TransactionNotFoundError(LedgerReferenceError):
    kind = "Transaction"


class AssetNotFoundError(LedgerReferenceError):
    kind = "Asset"


class GoalNotFoundError(LedgerReferenceError):
    kind = "Goal"


__all__ = [
    "LedgerError",
    "LedgerValidationError",
    "SplitMismatchError",
    "OwnershipSharesError",
    "AccountOwnershipError",
    "InsufficientFundsError",
    "LedgerReferenceError",
    "UserNotFoundError",
    "TeamNotFoundError",
    "AccountNotFoundError",
    "TransactionNotFoundError",
    "AssetNotFoundError",
    "GoalNotFoundError",
]
