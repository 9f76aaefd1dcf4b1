"""Transaction generator for the accounts API."""

import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterator

from open_finance.generators.base import BaseGenerator
from open_finance.generators.pool import FakerPool
from open_finance.models.financial import (
    Account,
    Amount,
    BranchCode,
    CompeCode,
    CompletedAuthorisedPaymentIndicator,
    Counterparty,
    CreditDebitIndicator,
    PersonType,
    Transaction,
    TransactionId,
    TransactionType,
)


class TransactionGenerator(BaseGenerator):
    """Generate synthetic account transactions."""

    TRANSACTION_TYPES = [
        TransactionType.PIX,
        TransactionType.CARTAO,
        TransactionType.BOLETO,
        TransactionType.TED,
        TransactionType.SAQUE,
        TransactionType.DEPOSITO,
        TransactionType.FOLHA_PAGAMENTO,
        TransactionType.TARIFA_SERVICOS_AVULSOS,
    ]
    TRANSACTION_WEIGHTS = [0.40, 0.20, 0.10, 0.08, 0.07, 0.05, 0.05, 0.05]

    STATUSES = list(CompletedAuthorisedPaymentIndicator)
    STATUS_WEIGHTS = [0.90, 0.05, 0.05]

    DEBIT_TYPES = {
        TransactionType.BOLETO,
        TransactionType.SAQUE,
        TransactionType.CARTAO,
        TransactionType.TARIFA_SERVICOS_AVULSOS,
    }
    CREDIT_TYPES = {TransactionType.DEPOSITO, TransactionType.FOLHA_PAGAMENTO}

    def __init__(self, seed: int | None = None, pool: FakerPool | None = None) -> None:
        super().__init__(seed, pool=pool)

    def generate(
        self,
        account: Account,
        transaction_type: TransactionType | None = None,
    ) -> Transaction:
        """Generate a single transaction for an account.

        Payroll credits always carry the employer's CNPJ as counterparty.
        """
        tx_type = transaction_type or random.choices(
            self.TRANSACTION_TYPES, weights=self.TRANSACTION_WEIGHTS, k=1
        )[0]

        if tx_type in self.DEBIT_TYPES:
            direction = CreditDebitIndicator.DEBITO
        elif tx_type in self.CREDIT_TYPES:
            direction = CreditDebitIndicator.CREDITO
        else:
            direction = random.choice(list(CreditDebitIndicator))

        # Amount based on Pareto distribution
        amount = random.paretovariate(1.5) * 50
        amount = min(amount, 50000)
        amount = round(amount, 2)

        counterparty = None
        name = tx_type.value.replace("_", " ").title()
        if tx_type is TransactionType.FOLHA_PAGAMENTO:
            employer = self.pool.company()
            counterparty = Counterparty(
                tax_id=self.pool.cnpj_raw(), person_type=PersonType.PESSOA_JURIDICA
            )
            name = f"Salario {employer}"[:200]
        elif tx_type in (TransactionType.PIX, TransactionType.TED):
            person = self.pool.name()
            counterparty = Counterparty(
                tax_id=self.pool.cpf_raw(),
                person_type=PersonType.PESSOA_NATURAL,
                compe_code=CompeCode(f"{random.randint(1, 999):03d}"),
                branch_code=BranchCode(f"{random.randint(1, 9999):04d}"),
                number=f"{random.randint(0, 10**10 - 1):010d}",
                check_digit=str(random.randint(0, 9)),
            )
            preposition = "de" if direction is CreditDebitIndicator.CREDITO else "para"
            name = f"{tx_type.value} {preposition} {person}"[:200]

        return Transaction(
            transaction_id=TransactionId(self.pool.uuid()),
            account_id=account.account_id,
            status=random.choices(self.STATUSES, weights=self.STATUS_WEIGHTS, k=1)[0],
            credit_debit=direction,
            transaction_type=tx_type,
            name=name,
            amount=Amount(max(Decimal(str(amount)), Decimal("0.01")), account.currency),
            timestamp=datetime.now(timezone.utc) - timedelta(
                days=random.randint(0, 90),
                hours=random.randint(0, 23),
                minutes=random.randint(0, 59),
            ),
            counterparty=counterparty,
        )

    def generate_for_account(self, account: Account, count: int) -> Iterator[Transaction]:
        """Yield ``count`` transactions for ``account``."""
        for _ in range(count):
            yield self.generate(account)
