"""Exposed operations and wire mapping."""

from open_finance.api.accounts import AccountsApi, ApiResponse
from open_finance.api.mapper import (
    format_request_date_time,
    to_account_data,
    to_account_list_response,
    to_error_response,
)

__all__ = [
    "AccountsApi",
    "ApiResponse",
    "format_request_date_time",
    "to_account_data",
    "to_account_list_response",
    "to_error_response",
]
