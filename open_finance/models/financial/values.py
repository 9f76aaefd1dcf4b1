"""Value objects for the financial domain.

All value objects are frozen dataclasses validated in ``__post_init__``;
two instances are equal when their values are equal.
"""

import re
import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from open_finance.exceptions import (
    CurrencyMismatchError,
    InvalidAmountError,
    InvalidIdentifierError,
)

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9-]{0,99}$")
_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")
AMOUNT_SCALE = Decimal("0.0001")


def _normalize_identifier(kind: str, value: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidIdentifierError(f"{kind} cannot be null or empty")
    normalized = str(value).strip()
    if not _IDENTIFIER_RE.match(normalized):
        raise InvalidIdentifierError(f"Invalid {kind} format: {value!r}")
    return normalized


@dataclass(frozen=True)
class AccountId:
    """Opaque account identifier (1-100 alphanumerics or dashes)."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _normalize_identifier("account ID", self.value))

    @classmethod
    def unique(cls) -> "AccountId":
        """Generate a fresh identifier."""
        return cls(uuid.uuid4().hex)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TransactionId:
    """Opaque transaction identifier (1-100 alphanumerics or dashes)."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "value", _normalize_identifier("transaction ID", self.value)
        )

    def __str__(self) -> str:
        return self.value


def _digits_code(kind: str, value: str, length: int) -> str:
    if value is None or not str(value).strip():
        raise InvalidIdentifierError(f"{kind} cannot be null or empty")
    normalized = str(value).strip()
    if len(normalized) != length or not normalized.isdigit():
        raise InvalidIdentifierError(f"Invalid {kind} format: {value!r}")
    return normalized


@dataclass(frozen=True)
class BranchCode:
    """Bank branch (agência) code, exactly 4 digits."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _digits_code("branch code", self.value, 4))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CompeCode:
    """COMPE clearing code of an institution, exactly 3 digits."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _digits_code("COMPE code", self.value, 3))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Amount:
    """Monetary amount with an ISO-4217 currency, fixed at 4 decimal places.

    Parameters
    ----------
    value : Decimal | int | str
        Amount value. Strings are parsed as decimals; floats are rejected
        because they cannot represent cents exactly.
    currency : str
        ISO-4217 code, e.g. ``"BRL"``.
    """

    value: Decimal
    currency: str = "BRL"

    def __post_init__(self) -> None:
        if self.currency is None:
            raise InvalidAmountError("Currency cannot be null")
        if not _CURRENCY_RE.match(str(self.currency)):
            raise InvalidAmountError(f"Invalid currency code: {self.currency!r}")
        object.__setattr__(self, "value", self._coerce(self.value))

    @staticmethod
    def _coerce(value: object) -> Decimal:
        if value is None:
            raise InvalidAmountError("Amount value cannot be null")
        if isinstance(value, (bool, float)):
            raise InvalidAmountError(f"Unsupported amount type: {type(value).__name__}")
        if isinstance(value, str):
            if not value.strip():
                raise InvalidAmountError("Amount value cannot be empty")
            try:
                value = Decimal(value.strip())
            except InvalidOperation as exc:
                raise InvalidAmountError(f"Invalid amount format: {value!r}") from exc
        elif isinstance(value, int):
            value = Decimal(value)
        if not isinstance(value, Decimal) or not value.is_finite():
            raise InvalidAmountError(f"Invalid amount: {value!r}")
        return value.quantize(AMOUNT_SCALE, rounding=ROUND_HALF_UP)

    @classmethod
    def zero(cls, currency: str = "BRL") -> "Amount":
        return cls(Decimal(0), currency)

    def _check_currency(self, other: "Amount") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                f"Cannot operate on amounts with different currencies: "
                f"{self.currency} and {other.currency}"
            )

    def add(self, other: "Amount") -> "Amount":
        self._check_currency(other)
        return Amount(self.value + other.value, self.currency)

    def subtract(self, other: "Amount") -> "Amount":
        self._check_currency(other)
        return Amount(self.value - other.value, self.currency)

    def multiply(self, multiplier: Decimal | int) -> "Amount":
        return Amount(self.value * Decimal(multiplier), self.currency)

    def negate(self) -> "Amount":
        return Amount(-self.value, self.currency)

    def is_greater_than(self, other: "Amount") -> bool:
        self._check_currency(other)
        return self.value > other.value

    def is_greater_than_or_equal(self, other: "Amount") -> bool:
        self._check_currency(other)
        return self.value >= other.value

    def is_less_than(self, other: "Amount") -> bool:
        self._check_currency(other)
        return self.value < other.value

    def is_zero(self) -> bool:
        return self.value == 0

    def is_positive(self) -> bool:
        return self.value > 0

    def is_negative(self) -> bool:
        return self.value < 0

    def __str__(self) -> str:
        return f"{self.value} {self.currency}"
