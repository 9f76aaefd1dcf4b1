"""Pagination state and navigation links for list endpoints."""

import math
from dataclasses import dataclass
from urllib.parse import quote_plus, urlparse

from open_finance.exceptions import DomainValidationError
from open_finance.models.financial.enums import AccountType


def calculate_total_pages(total_records: int, page_size: int) -> int:
    """Number of pages needed for ``total_records``; zero when there are none."""
    if total_records < 0:
        raise ValueError("total_records cannot be negative")
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    if total_records == 0:
        return 0
    return math.ceil(total_records / page_size)


@dataclass(frozen=True)
class PaginationLinks:
    self_link: str
    first: str | None = None
    prev: str | None = None
    next: str | None = None
    last: str | None = None

    def as_dict(self) -> dict[str, str]:
        """Links keyed by their wire name, absent links omitted."""
        links = {
            "self": self.self_link,
            "first": self.first,
            "prev": self.prev,
            "next": self.next,
            "last": self.last,
        }
        return {name: url for name, url in links.items() if url is not None}


@dataclass(frozen=True)
class PaginationInfo:
    """Pagination state computed for a single request.

    Raises
    ------
    DomainValidationError
        If the self link is missing, a total is negative, or the page or
        page size is below 1.
    """

    total_records: int
    total_pages: int
    current_page: int
    page_size: int
    links: PaginationLinks
    pagination_key: str | None = None

    def __post_init__(self) -> None:
        if self.links is None or not self.links.self_link:
            raise DomainValidationError("Self link is required")
        if self.total_records < 0:
            raise DomainValidationError("Total records cannot be negative")
        if self.total_pages < 0:
            raise DomainValidationError("Total pages cannot be negative")
        if self.current_page < 1:
            raise DomainValidationError("Current page must be at least 1")
        if self.page_size < 1:
            raise DomainValidationError("Page size must be at least 1")

    @property
    def is_first_page(self) -> bool:
        return self.current_page == 1

    @property
    def is_last_page(self) -> bool:
        return self.current_page >= self.total_pages

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1


class PaginationLinkBuilder:
    """Build the self/first/prev/next/last links of a listing.

    Parameters
    ----------
    base_url : str
        Scheme and host of the public API; a trailing slash is ignored.
    path : str
        Endpoint path appended to ``base_url``.
    """

    def __init__(self, base_url: str, path: str) -> None:
        self.base_url = base_url.rstrip("/")
        self.path = path

    def is_valid_base_url(self) -> bool:
        parsed = urlparse(self.base_url)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)

    def _url(
        self,
        page: int,
        page_size: int,
        account_type: AccountType | None,
        pagination_key: str | None,
    ) -> str:
        query = f"page={page}&page-size={page_size}"
        if account_type is not None:
            query += f"&accountType={quote_plus(account_type.value)}"
        if pagination_key:
            query += f"&pagination-key={quote_plus(pagination_key)}"
        return f"{self.base_url}{self.path}?{query}"

    def build(
        self,
        page: int,
        page_size: int,
        account_type: AccountType | None,
        pagination_key: str | None,
        total_pages: int,
    ) -> PaginationLinks:
        def url(target: int) -> str:
            return self._url(target, page_size, account_type, pagination_key)

        has_pages = total_pages != 0
        return PaginationLinks(
            self_link=url(page),
            first=url(1) if has_pages and page != 1 else None,
            prev=url(page - 1) if has_pages and page > 1 else None,
            next=url(page + 1) if has_pages and page < total_pages else None,
            last=url(total_pages) if has_pages and page != total_pages else None,
        )
