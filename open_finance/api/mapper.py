"""Render use case outputs and errors into Open Finance wire envelopes."""

from datetime import datetime, timezone
from typing import Any

from open_finance.exceptions import RequestError
from open_finance.models.financial import Account
from open_finance.usecases.accounts import GetAccountsOutput

REQUEST_DATE_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_request_date_time(moment: datetime) -> str:
    """RFC-3339 UTC timestamp with second precision, e.g. ``2024-01-15T10:30:00Z``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime(REQUEST_DATE_TIME_FORMAT)


def to_account_data(account: Account) -> dict[str, Any]:
    data: dict[str, Any] = {
        "accountId": str(account.account_id),
        "brandName": account.company.name,
        "companyCnpj": account.company.cnpj,
        "type": account.type.value,
        "subtype": account.subtype.value,
        "compeCode": str(account.compe_code),
    }
    if account.branch_code is not None:
        data["branchCode"] = str(account.branch_code)
    data["number"] = account.number
    data["checkDigit"] = account.check_digit
    return data


def to_account_list_response(output: GetAccountsOutput) -> dict[str, Any]:
    """Build the ``{data, links, meta}`` envelope of an accounts page.

    Accounts keep the order the provider returned them in; links that do
    not apply to the page are omitted.
    """
    pagination = output.pagination
    return {
        "data": [to_account_data(account) for account in output.accounts],
        "links": pagination.links.as_dict(),
        "meta": {
            "totalRecords": pagination.total_records,
            "totalPages": pagination.total_pages,
            "requestDateTime": format_request_date_time(output.request_date_time),
        },
    }


def to_error_response(error: Exception, request_date_time: datetime) -> dict[str, Any]:
    """Build the ``{errors, meta}`` envelope for a failed request.

    Errors outside the :class:`RequestError` family are reported as a
    generic internal error without leaking their message.
    """
    if isinstance(error, RequestError):
        code, title, detail = error.code, error.title, str(error) or error.title
    else:
        code, title = RequestError.code, RequestError.title
        detail = "An unexpected error occurred"
    return {
        "errors": [{"code": code, "title": title, "detail": detail}],
        "meta": {"requestDateTime": format_request_date_time(request_date_time)},
    }
