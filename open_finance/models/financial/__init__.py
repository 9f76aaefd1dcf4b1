"""Financial domain models."""

from open_finance.models.financial.account import Account, Company
from open_finance.models.financial.enums import (
    AccountSubType,
    AccountType,
    CompletedAuthorisedPaymentIndicator,
    ConsentStatus,
    CreditDebitIndicator,
    Permission,
    PermissionCategory,
    PersonType,
    TransactionType,
)
from open_finance.models.financial.transaction import Counterparty, Transaction
from open_finance.models.financial.values import (
    AccountId,
    Amount,
    BranchCode,
    CompeCode,
    TransactionId,
)

__all__ = [
    "Account",
    "AccountId",
    "AccountSubType",
    "AccountType",
    "Amount",
    "BranchCode",
    "Company",
    "CompeCode",
    "CompletedAuthorisedPaymentIndicator",
    "ConsentStatus",
    "Counterparty",
    "CreditDebitIndicator",
    "Permission",
    "PermissionCategory",
    "PersonType",
    "Transaction",
    "TransactionId",
    "TransactionType",
]
