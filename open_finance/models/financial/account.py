"""Account model for financial domain."""

import re
from dataclasses import dataclass, field

from open_finance.exceptions import AccountValidationError
from open_finance.models.financial.enums import AccountSubType, AccountType
from open_finance.models.financial.values import AccountId, BranchCode, CompeCode

_CNPJ_RE = re.compile(r"^\d{14}$")
_ACCOUNT_NUMBER_RE = re.compile(r"^\d{8,20}$")


@dataclass(frozen=True)
class Company:
    """Institution that owns an account (brand name and CNPJ)."""

    name: str
    cnpj: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise AccountValidationError("Brand name cannot be blank")
        if len(self.name) > 80:
            raise AccountValidationError("Brand name must not exceed 80 characters")
        if not _CNPJ_RE.match(self.cnpj or ""):
            raise AccountValidationError("Company CNPJ must contain exactly 14 digits")


@dataclass(frozen=True, eq=False)
class Account:
    """Bank account exposed through the accounts API.

    Account types:
    - CONTA_DEPOSITO_A_VISTA: checking account
    - CONTA_POUPANCA: savings account
    - CONTA_PAGAMENTO_PRE_PAGA: prepaid payment account, the only type
      without a branch

    Raises
    ------
    AccountValidationError
        If a prepaid account carries a branch code, any other type lacks
        one, or a field is malformed.
    """

    account_id: AccountId
    type: AccountType
    subtype: AccountSubType
    company: Company
    compe_code: CompeCode
    number: str
    check_digit: str
    branch_code: BranchCode | None = None
    currency: str = field(default="BRL")

    def __post_init__(self) -> None:
        if not isinstance(self.type, AccountType):
            raise AccountValidationError("Account type cannot be null")
        if not isinstance(self.subtype, AccountSubType):
            raise AccountValidationError("Account subtype cannot be null")

        if self.is_prepaid and self.branch_code is not None:
            raise AccountValidationError("Pre-paid accounts cannot have a branch code")
        if not self.is_prepaid and self.branch_code is None:
            raise AccountValidationError("Non pre-paid accounts must have a branch code")

        if not _ACCOUNT_NUMBER_RE.match(self.number or ""):
            raise AccountValidationError("Account number must contain 8 to 20 digits")
        if not self.check_digit or len(self.check_digit) != 1:
            raise AccountValidationError("Check digit must be exactly 1 character")

    @property
    def is_prepaid(self) -> bool:
        return self.type is AccountType.CONTA_PAGAMENTO_PRE_PAGA

    @property
    def is_savings(self) -> bool:
        return self.type is AccountType.CONTA_POUPANCA

    @property
    def is_checking(self) -> bool:
        return self.type is AccountType.CONTA_DEPOSITO_A_VISTA

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self.account_id == other.account_id

    def __hash__(self) -> int:
        return hash(self.account_id)
