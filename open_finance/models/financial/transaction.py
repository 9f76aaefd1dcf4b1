"""Transaction model for financial domain."""

import re
from dataclasses import dataclass
from datetime import datetime

from open_finance.exceptions import TransactionValidationError
from open_finance.models.financial.enums import (
    CompletedAuthorisedPaymentIndicator,
    CreditDebitIndicator,
    PersonType,
    TransactionType,
)
from open_finance.models.financial.values import (
    AccountId,
    Amount,
    BranchCode,
    CompeCode,
    TransactionId,
)

_TAX_ID_RE = re.compile(r"^\d{11}$|^\d{14}$")
_ACCOUNT_NUMBER_RE = re.compile(r"^\d{8,20}$")

CPF_LENGTH = 11
CNPJ_LENGTH = 14


@dataclass(frozen=True)
class Counterparty:
    """Other side of a transaction.

    A CPF (11 digits) identifies a natural person and a CNPJ (14 digits)
    a legal entity; the person type, when given, must agree with it.
    """

    tax_id: str | None = None
    person_type: PersonType | None = None
    compe_code: CompeCode | None = None
    branch_code: BranchCode | None = None
    number: str | None = None
    check_digit: str | None = None

    def __post_init__(self) -> None:
        if self.tax_id is not None and not _TAX_ID_RE.match(self.tax_id):
            raise TransactionValidationError("Counterparty CPF/CNPJ must be 11 or 14 digits")

        if self.tax_id is not None and self.person_type is not None:
            if len(self.tax_id) == CPF_LENGTH and self.person_type is not PersonType.PESSOA_NATURAL:
                raise TransactionValidationError("CPF requires PESSOA_NATURAL person type")
            if len(self.tax_id) == CNPJ_LENGTH and self.person_type is not PersonType.PESSOA_JURIDICA:
                raise TransactionValidationError("CNPJ requires PESSOA_JURIDICA person type")

        if self.number is not None and not _ACCOUNT_NUMBER_RE.match(self.number):
            raise TransactionValidationError("Counterparty number must contain 8 to 20 digits")
        if self.check_digit is not None and len(self.check_digit) != 1:
            raise TransactionValidationError("Counterparty check digit must be exactly 1 character")


@dataclass(frozen=True, eq=False)
class Transaction:
    """Account transaction received from the upstream data source.

    The amount is always positive; direction lives in ``credit_debit``.
    Identity is only stable while the transaction is effective: processing
    and future-dated entries may be replaced upstream under a new id.
    """

    transaction_id: TransactionId
    account_id: AccountId
    status: CompletedAuthorisedPaymentIndicator
    credit_debit: CreditDebitIndicator
    transaction_type: TransactionType
    name: str
    amount: Amount
    timestamp: datetime
    counterparty: Counterparty | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise TransactionValidationError("Transaction name cannot be blank")
        if len(self.name) > 200:
            raise TransactionValidationError("Transaction name must not exceed 200 characters")

        if self.transaction_type is TransactionType.FOLHA_PAGAMENTO and self.counterparty_tax_id is None:
            raise TransactionValidationError(
                "Counterparty CPF/CNPJ is mandatory for FOLHA_PAGAMENTO transactions"
            )

        if not self.amount.is_positive():
            raise TransactionValidationError("Transaction amount must be positive")

    @property
    def counterparty_tax_id(self) -> str | None:
        return self.counterparty.tax_id if self.counterparty else None

    @property
    def has_counterparty(self) -> bool:
        return self.counterparty_tax_id is not None

    @property
    def is_credit(self) -> bool:
        return self.credit_debit is CreditDebitIndicator.CREDITO

    @property
    def is_debit(self) -> bool:
        return self.credit_debit is CreditDebitIndicator.DEBITO

    @property
    def is_completed(self) -> bool:
        return self.status is CompletedAuthorisedPaymentIndicator.TRANSACAO_EFETIVADA

    @property
    def is_processing(self) -> bool:
        return self.status is CompletedAuthorisedPaymentIndicator.TRANSACAO_PROCESSANDO

    @property
    def is_future(self) -> bool:
        return self.status is CompletedAuthorisedPaymentIndicator.LANCAMENTO_FUTURO

    @property
    def effective_amount(self) -> Amount:
        """Amount signed by direction: positive for credits, negative for debits."""
        return self.amount if self.is_credit else self.amount.negate()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.transaction_id == other.transaction_id

    def __hash__(self) -> int:
        return hash(self.transaction_id)
