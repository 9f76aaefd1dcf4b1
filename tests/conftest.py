"""Pytest configuration and fixtures."""

from typing import Callable

import pytest

from open_finance.models.financial import (
    Account,
    AccountId,
    AccountSubType,
    AccountType,
    BranchCode,
    Company,
    CompeCode,
    Permission,
)
from open_finance.pagination import PaginationLinkBuilder
from open_finance.services import (
    InMemoryConsentRegistry,
    SignedPaginationKeyService,
    SlidingWindowRateLimiter,
)
from open_finance.store import InMemoryAccountProvider

BASE_URL = "https://api.banco.com.br"
ACCOUNTS_PATH = "/open-banking/accounts/v2/accounts"


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sample_company() -> Company:
    """Sample account owner."""
    return Company(name="Banco Teste", cnpj="12345678000190")


@pytest.fixture
def account_factory(sample_company: Company) -> Callable[..., Account]:
    """Build valid accounts with predictable ids (``acc-001``, ``acc-002``...)."""

    def build(index: int, account_type: AccountType = AccountType.CONTA_DEPOSITO_A_VISTA) -> Account:
        prepaid = account_type is AccountType.CONTA_PAGAMENTO_PRE_PAGA
        return Account(
            account_id=AccountId(f"acc-{index:03d}"),
            type=account_type,
            subtype=AccountSubType.INDIVIDUAL,
            company=sample_company,
            compe_code=CompeCode("001"),
            branch_code=None if prepaid else BranchCode("6272"),
            number=f"{index:08d}",
            check_digit="4",
        )

    return build


@pytest.fixture
def provider_factory(
    account_factory: Callable[..., Account],
) -> Callable[[int], InMemoryAccountProvider]:
    """Build a provider holding ``count`` checking accounts for consent ``c1``."""

    def build(count: int, consent_id: str = "c1") -> InMemoryAccountProvider:
        provider = InMemoryAccountProvider()
        for i in range(1, count + 1):
            provider.add_account(consent_id, account_factory(i))
        return provider

    return build


@pytest.fixture
def consents() -> InMemoryConsentRegistry:
    """Registry with consent ``c1`` of organization ``o1`` allowed to read accounts."""
    registry = InMemoryConsentRegistry()
    registry.grant("c1", "o1", [Permission.ACCOUNTS_READ, Permission.RESOURCES_READ])
    return registry


@pytest.fixture
def key_service() -> SignedPaginationKeyService:
    """Pagination key service with a test secret."""
    return SignedPaginationKeyService(secret="test-secret", ttl_minutes=60)


@pytest.fixture
def rate_limiter() -> SlidingWindowRateLimiter:
    """Rate limiter with room for every test request."""
    return SlidingWindowRateLimiter(limit=100, window_seconds=60)


@pytest.fixture
def link_builder() -> PaginationLinkBuilder:
    """Link builder for the public accounts endpoint."""
    return PaginationLinkBuilder(BASE_URL, ACCOUNTS_PATH)
