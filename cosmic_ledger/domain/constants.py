"""Domain constants for ledger computations."""

from decimal import Decimal

SPLIT_TOLERANCE = Decimal("0.01")
OWNERSHIP_TOLERANCE = Decimal("0.1")
SETTLEMENT_TOLERANCE = Decimal("0.01")
FULL_OWNERSHIP_PERCENTAGE = Decimal("100")

TRANSFER_CATEGORY = "Transfer"
INVESTMENT_CATEGORY = "Investment"
GOALS_CATEGORY = "Goals"
COSMIC_EVENT_CATEGORY = "Cosmic Event"

# Categories that move money between a user's own accounts.
NON_REPORTING_CATEGORIES = (TRANSFER_CATEGORY,)

ACHIEVEMENT_FIRST_TRANSACTION = "FIRST_TRANSACTION"
ACHIEVEMENT_FIRST_INVESTMENT = "FIRST_INVESTMENT"
ACHIEVEMENT_FIRST_TEAM = "FIRST_TEAM"
ACHIEVEMENT_DEBT_FREE = "DEBT_FREE"

ALL_ACHIEVEMENTS = (
    ACHIEVEMENT_FIRST_TRANSACTION,
    ACHIEVEMENT_FIRST_INVESTMENT,
    ACHIEVEMENT_FIRST_TEAM,
    ACHIEVEMENT_DEBT_FREE,
)


__all__ = [
    "SPLIT_TOLERANCE",
    "OWNERSHIP_TOLERANCE",
    "SETTLEMENT_TOLERANCE",
    "FULL_OWNERSHIP_PERCENTAGE",
    "TRANSFER_CATEGORY",
    "INVESTMENT_CATEGORY",
    "GOALS_CATEGORY",
    "COSMIC_EVENT_CATEGORY",
    "NON_REPORTING_CATEGORIES",
    "ACHIEVEMENT_FIRST_TRANSACTION",
    "ACHIEVEMENT_FIRST_INVESTMENT",
    "ACHIEVEMENT_FIRST_TEAM",
    "ACHIEVEMENT_DEBT_FREE",
    "ALL_ACHIEVEMENTS",
]
