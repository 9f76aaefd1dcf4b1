"""Interfaces the accounts pipeline consumes.

Implementations are free to be remote clients or in-process objects; the
pipeline only relies on these signatures and on ``is_valid`` never
reporting a false positive.
"""

from typing import Any, Protocol

from open_finance.models.financial import Account, AccountType


class RateLimitService(Protocol):
    def is_within_limit(self, identifier: str, endpoint: str) -> bool: ...

    def record(self, identifier: str, endpoint: str) -> None: ...

    def remaining(self, identifier: str, endpoint: str) -> int: ...


class ConsentService(Protocol):
    def is_valid(self, consent_id: str) -> bool: ...

    def has_permission(self, consent_id: str, permission: str) -> bool: ...


class PaginationKeyService(Protocol):
    def is_valid(self, key: str) -> bool: ...

    def generate(self, request_identifier: str, page: int, page_size: int) -> str: ...


class AccountProvider(Protocol):
    def fetch(
        self,
        consent_id: str,
        account_type: AccountType | None,
        zero_based_page: int,
        page_size: int,
    ) -> list[Account]: ...

    def count(self, consent_id: str, account_type: AccountType | None) -> int: ...


class EventSink(Protocol):
    def publish(self, event: Any) -> None: ...


class OperationalLimitService(Protocol):
    def is_within_limit(self, consent_id: str, organization_id: str, endpoint: str) -> bool: ...

    def record(self, consent_id: str, organization_id: str, endpoint: str) -> None: ...
