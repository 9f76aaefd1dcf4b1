"""Data stores for open-finance."""

from open_finance.store.accounts import InMemoryAccountProvider

__all__ = ["InMemoryAccountProvider"]
