"""Account generator for the accounts API."""

import random
from typing import Iterator

from open_finance.generators.base import BaseGenerator
from open_finance.generators.pool import FakerPool
from open_finance.models.financial import (
    Account,
    AccountId,
    AccountSubType,
    AccountType,
    BranchCode,
    Company,
    CompeCode,
)


class AccountGenerator(BaseGenerator):
    """Generate synthetic Open Finance accounts.

    Account types:
    - CONTA_DEPOSITO_A_VISTA: checking account (~65%)
    - CONTA_POUPANCA: savings account (~25%)
    - CONTA_PAGAMENTO_PRE_PAGA: prepaid account, never has a branch (~10%)
    """

    ACCOUNT_TYPES = list(AccountType)
    ACCOUNT_TYPE_WEIGHTS = [0.65, 0.25, 0.10]

    SUBTYPES = list(AccountSubType)
    SUBTYPE_WEIGHTS = [0.80, 0.12, 0.08]

    BANK_CODES = {
        "001": "Banco do Brasil",
        "033": "Santander",
        "104": "Caixa Econômica Federal",
        "237": "Bradesco",
        "341": "Itaú",
        "260": "Nubank",
        "077": "Inter",
        "336": "C6 Bank",
    }

    def __init__(self, seed: int | None = None, pool: FakerPool | None = None) -> None:
        super().__init__(seed, pool=pool)

    def generate(self, account_type: AccountType | None = None) -> Account:
        """Generate a single account.

        Parameters
        ----------
        account_type : AccountType | None
            Force a type; drawn from ``ACCOUNT_TYPE_WEIGHTS`` when omitted.

        Returns
        -------
        Account
            Generated account.
        """
        if account_type is None:
            account_type = random.choices(
                self.ACCOUNT_TYPES, weights=self.ACCOUNT_TYPE_WEIGHTS, k=1
            )[0]
        compe_code = random.choice(list(self.BANK_CODES.keys()))
        prepaid = account_type is AccountType.CONTA_PAGAMENTO_PRE_PAGA

        return Account(
            account_id=AccountId(self.pool.uuid()),
            type=account_type,
            subtype=random.choices(self.SUBTYPES, weights=self.SUBTYPE_WEIGHTS, k=1)[0],
            company=Company(name=self.BANK_CODES[compe_code], cnpj=self.pool.cnpj_raw()),
            compe_code=CompeCode(compe_code),
            branch_code=None if prepaid else BranchCode(f"{random.randint(1, 9999):04d}"),
            number=f"{random.randint(0, 10**12 - 1):012d}",
            check_digit=str(random.randint(0, 9)),
        )

    def generate_batch(
        self, count: int, account_type: AccountType | None = None
    ) -> Iterator[Account]:
        """Yield ``count`` accounts."""
        for _ in range(count):
            yield self.generate(account_type)
