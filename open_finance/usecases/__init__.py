"""Request pipelines of the API."""

from open_finance.usecases.accounts import (
    AccountsRequestContext,
    GetAccountsInput,
    GetAccountsOutput,
    GetAccountsUseCase,
)

__all__ = [
    "AccountsRequestContext",
    "GetAccountsInput",
    "GetAccountsOutput",
    "GetAccountsUseCase",
]
