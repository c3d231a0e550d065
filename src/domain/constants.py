"""Domain constants for the retail ledger."""

from decimal import Decimal

CASHOUT_TYPES = (
    "COGS",
    "OPEX",
    "REMITTANCE",
)

OVERALL_CATEGORY = "Overall"

UNCATEGORIZED_SOURCE = "Uncategorized"

UNCLASSIFIED_LABEL = "Other"

DEFAULT_LOW_STOCK_THRESHOLD = Decimal("10")

DEFAULT_CASH_RISK_CEILING = Decimal("50000")

DEFAULT_CURRENCY_CODE = "PHP"

DEFAULT_EXPIRY_WINDOW_DAYS = 30

DEFAULT_CLASSIFICATIONS = (
    ("Utilities", "Lightbulb"),
    ("Rent & Lease", "Store"),
    ("Supplier Payment", "Truck"),
    ("Salaries", "User"),
    ("Maintenance", "Wrench"),
    ("Internet/Comm", "Wifi"),
    ("Supplies", "Coffee"),
    ("Marketing", "Briefcase"),
    ("Taxes & Permits", "ShieldCheck"),
)

DEFAULT_CLASSIFICATION_ICON = "Store"

BATCH_DEFAULT_NOTE = "Batch Update"


__all__ = [
    "CASHOUT_TYPES",
    "OVERALL_CATEGORY",
    "UNCATEGORIZED_SOURCE",
    "UNCLASSIFIED_LABEL",
    "DEFAULT_LOW_STOCK_THRESHOLD",
    "DEFAULT_CASH_RISK_CEILING",
    "DEFAULT_CURRENCY_CODE",
    "DEFAULT_EXPIRY_WINDOW_DAYS",
    "DEFAULT_CLASSIFICATIONS",
    "DEFAULT_CLASSIFICATION_ICON",
    "BATCH_DEFAULT_NOTE",
]
