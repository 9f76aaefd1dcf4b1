#!/usr/bin/env python3
"""List accounts through the accounts API against in-memory sample data.

Seeds an in-memory provider with generated accounts for one consent, wires
the reference rate limiter, consent registry and pagination key service,
then calls ``AccountsApi.list_accounts`` and prints the response.

Example::

    python scripts/list_accounts.py --accounts 25 --page 2 --page-size 10
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from open_finance.api import AccountsApi
from open_finance.config import OpenFinanceConfig
from open_finance.generators import AccountGenerator, FakerPool, TransactionGenerator
from open_finance.logging import setup_logging
from open_finance.models.financial import Permission
from open_finance.services import InMemoryConsentRegistry
from open_finance.sinks import create_sink
from open_finance.store import InMemoryAccountProvider

logger = logging.getLogger(__name__)


def seed_provider(
    consent_id: str, accounts: int, transactions: int, seed: int
) -> InMemoryAccountProvider:
    """Generate accounts and transactions for one consent."""
    pool = FakerPool(seed=seed)
    account_gen = AccountGenerator(seed=seed, pool=pool)
    transaction_gen = TransactionGenerator(seed=seed, pool=pool)

    provider = InMemoryAccountProvider()
    for account in account_gen.generate_batch(accounts):
        provider.add_account(consent_id, account)
        for transaction in transaction_gen.generate_for_account(account, transactions):
            provider.add_transaction(transaction)
    logger.info("Seeded provider: %s", provider.summary())
    return provider


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="List accounts from generated sample data"
    )
    parser.add_argument("--consent-id", default="c1", help="Consent ID (default: c1)")
    parser.add_argument(
        "--organization-id", default="o1", help="Organization ID (default: o1)"
    )
    parser.add_argument(
        "--interaction-id", default=None, help="x-fapi-interaction-id (default: random)"
    )
    parser.add_argument(
        "--accounts",
        type=int,
        default=25,
        help="Number of accounts to generate (default: 25)",
    )
    parser.add_argument(
        "--transactions",
        type=int,
        default=5,
        help="Transactions generated per account (default: 5)",
    )
    parser.add_argument("--page", default="1", help="Page number (default: 1)")
    parser.add_argument("--page-size", default=None, help="Page size (default: from config)")
    parser.add_argument(
        "--account-type",
        default=None,
        help="Filter, e.g. CONTA_DEPOSITO_A_VISTA",
    )
    parser.add_argument("--pagination-key", default=None, help="Pagination key to resend")
    parser.add_argument(
        "--no-permission",
        action="store_true",
        help="Grant the consent without ACCOUNTS_READ",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    args = parser.parse_args()

    config = OpenFinanceConfig.from_env()
    setup_logging(config.log_level, config.log_format)

    provider = seed_provider(args.consent_id, args.accounts, args.transactions, args.seed)

    permissions = [Permission.RESOURCES_READ]
    if not args.no_permission:
        permissions.append(Permission.ACCOUNTS_READ)
    consents = InMemoryConsentRegistry()
    consents.grant(args.consent_id, args.organization_id, permissions)

    sink = create_sink(config)
    try:
        api = AccountsApi.from_config(config, provider, consents, event_sink=sink)
        response = api.list_accounts(
            consent_id=args.consent_id,
            organization_id=args.organization_id,
            interaction_id=args.interaction_id,
            page=args.page,
            page_size=args.page_size,
            account_type=args.account_type,
            pagination_key=args.pagination_key,
        )
    finally:
        sink.close()

    print(f"\nHTTP {response.status_code}")
    for name, value in response.headers.items():
        print(f"{name}: {value}")
    print(json.dumps(response.body, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
