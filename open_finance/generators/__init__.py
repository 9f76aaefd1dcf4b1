"""Synthetic data generators for demos and tests."""

from open_finance.generators.account import AccountGenerator
from open_finance.generators.pool import FakerPool
from open_finance.generators.transaction import TransactionGenerator

__all__ = ["AccountGenerator", "FakerPool", "TransactionGenerator"]
