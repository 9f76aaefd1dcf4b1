"""Pre-generated value pools for fast data generation.

Replaces per-call Faker invocations with O(1) random.choice() lookups
from pre-populated pools.

Usage::

    pool = FakerPool(seed=42)
    name = pool.name()          # random.choice from the name pool
    uid  = pool.uuid()          # batch-generated via os.urandom
    cpf  = pool.cpf_raw()       # check-digit valid CPF, 11 digits
"""

from __future__ import annotations

import os
import random
import uuid as _uuid

from faker import Faker


class UUIDPool:
    """Batch-generated UUIDs using os.urandom for minimal syscall overhead.

    Parameters
    ----------
    batch_size : int
        Number of UUIDs to generate per batch (default 1024).
    """

    __slots__ = ("_batch_size", "_pool", "_index")

    def __init__(self, batch_size: int = 1024) -> None:
        self._batch_size = batch_size
        self._pool: list[str] = []
        self._index = 0
        self._refill()

    def _refill(self) -> None:
        """Generate a new batch of UUIDs."""
        raw = os.urandom(16 * self._batch_size)
        self._pool = [
            str(_uuid.UUID(bytes=raw[i : i + 16], version=4))
            for i in range(0, len(raw), 16)
        ]
        self._index = 0

    def next(self) -> str:
        """Return next UUID string, refilling pool when exhausted."""
        if self._index >= len(self._pool):
            self._refill()
        val = self._pool[self._index]
        self._index += 1
        return val


def generate_cpf() -> str:
    """Generate a valid Brazilian CPF (11 digits) using pure arithmetic."""
    digits = [random.randint(0, 9) for _ in range(9)]
    # First check digit
    total = sum(d * w for d, w in zip(digits, range(10, 1, -1)))
    d1 = 11 - (total % 11)
    digits.append(0 if d1 >= 10 else d1)
    # Second check digit
    total = sum(d * w for d, w in zip(digits, range(11, 1, -1)))
    d2 = 11 - (total % 11)
    digits.append(0 if d2 >= 10 else d2)
    return "".join(str(d) for d in digits)


def generate_cnpj() -> str:
    """Generate a valid Brazilian CNPJ (14 digits), headquarters branch 0001."""
    digits = [random.randint(0, 9) for _ in range(8)] + [0, 0, 0, 1]
    # First check digit
    weights1 = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
    total = sum(d * w for d, w in zip(digits, weights1))
    d1 = 11 - (total % 11)
    digits.append(0 if d1 >= 10 else d1)
    # Second check digit
    weights2 = [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
    total = sum(d * w for d, w in zip(digits, weights2))
    d2 = 11 - (total % 11)
    digits.append(0 if d2 >= 10 else d2)
    return "".join(str(d) for d in digits)


class FakerPool:
    """Pre-generated pools of Faker values for fast random selection.

    Parameters
    ----------
    locale : str
        Faker locale (default ``pt_BR``).
    seed : int | None
        Random seed for reproducibility.
    pool_sizes : dict[str, int] | None
        Override default pool sizes per field.
    """

    DEFAULT_SIZES: dict[str, int] = {
        "name": 500,
        "company": 100,
        "cpf": 1000,
        "cnpj": 500,
    }

    def __init__(
        self,
        locale: str = "pt_BR",
        seed: int | None = None,
        pool_sizes: dict[str, int] | None = None,
    ) -> None:
        sizes = {**self.DEFAULT_SIZES, **(pool_sizes or {})}
        fake = Faker(locale)
        if seed is not None:
            fake.seed_instance(seed)
            random.seed(seed)

        self._names: list[str] = [fake.name() for _ in range(sizes["name"])]
        # Brand names are capped at 80 characters
        self._companies: list[str] = [fake.company()[:80] for _ in range(sizes["company"])]
        self._cpfs_raw: list[str] = [generate_cpf() for _ in range(sizes["cpf"])]
        self._cnpjs_raw: list[str] = [generate_cnpj() for _ in range(sizes["cnpj"])]

        self._uuid_pool = UUIDPool()

    # --- Public accessors (O(1) random.choice) ---

    def uuid(self) -> str:
        """Return a unique UUID4 string."""
        return self._uuid_pool.next()

    def name(self) -> str:
        """Return a random full name."""
        return random.choice(self._names)

    def company(self) -> str:
        """Return a random company name."""
        return random.choice(self._companies)

    def cpf_raw(self) -> str:
        """Return a random unformatted CPF (11 digits)."""
        return random.choice(self._cpfs_raw)

    def cnpj_raw(self) -> str:
        """Return a random unformatted CNPJ (14 digits)."""
        return random.choice(self._cnpjs_raw)
