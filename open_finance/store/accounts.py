"""In-memory account provider with referential integrity."""

import threading
from dataclasses import dataclass, field

from open_finance.exceptions import ReferentialIntegrityError
from open_finance.models.financial import Account, AccountId, AccountType, Transaction


@dataclass
class InMemoryAccountProvider:
    """Accounts grouped per consent, transactions indexed per account.

    Accounts keep insertion order inside each consent, which is the order
    ``fetch`` pages through. An account may be shared by several consents.
    """

    accounts: dict[AccountId, Account] = field(default_factory=dict)
    transactions: list[Transaction] = field(default_factory=list)

    # Relationship indexes
    _consent_accounts: dict[str, list[AccountId]] = field(default_factory=dict)
    _account_transactions: dict[AccountId, list[int]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def add_account(self, consent_id: str, account: Account) -> None:
        """Add an account and link it to a consent."""
        with self._lock:
            self.accounts[account.account_id] = account
            linked = self._consent_accounts.setdefault(consent_id, [])
            if account.account_id not in linked:
                linked.append(account.account_id)
            self._account_transactions.setdefault(account.account_id, [])

    def add_transaction(self, transaction: Transaction) -> None:
        """Add a transaction to the store."""
        with self._lock:
            if transaction.account_id not in self.accounts:
                raise ReferentialIntegrityError(
                    f"Account {transaction.account_id} not found"
                )
            idx = len(self.transactions)
            self.transactions.append(transaction)
            self._account_transactions[transaction.account_id].append(idx)

    def _filtered(self, consent_id: str, account_type: AccountType | None) -> list[Account]:
        with self._lock:
            accounts = [self.accounts[a] for a in self._consent_accounts.get(consent_id, [])]
        if account_type is None:
            return accounts
        return [a for a in accounts if a.type is account_type]

    def fetch(
        self,
        consent_id: str,
        account_type: AccountType | None,
        zero_based_page: int,
        page_size: int,
    ) -> list[Account]:
        """Return one page of the consent's accounts, optionally filtered by type."""
        if zero_based_page < 0 or page_size < 1:
            raise ValueError("page must be >= 0 and page_size >= 1")
        start = zero_based_page * page_size
        return self._filtered(consent_id, account_type)[start:start + page_size]

    def count(self, consent_id: str, account_type: AccountType | None) -> int:
        return len(self._filtered(consent_id, account_type))

    def get_consent_accounts(self, consent_id: str) -> list[Account]:
        return self._filtered(consent_id, None)

    def get_account_transactions(self, account_id: AccountId) -> list[Transaction]:
        """Get all transactions for an account."""
        with self._lock:
            if account_id not in self.accounts:
                raise ReferentialIntegrityError(f"Account {account_id} not found")
            return [self.transactions[i] for i in self._account_transactions[account_id]]

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        with self._lock:
            return {
                "consents": len(self._consent_accounts),
                "accounts": len(self.accounts),
                "transactions": len(self.transactions),
            }
