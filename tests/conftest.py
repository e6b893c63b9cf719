"""Shared test fixtures for the athena-stream package."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from athena_stream._client import AthenaClient
from athena_stream._types import QueryExecutionHandle, QueryState, ResultPage


def execution_response(
    state: str,
    *,
    query_execution_id: str = "qe-123",
    output_location: str | None = None,
    reason: str | None = None,
    category: int | None = None,
    error_type: int | None = None,
) -> dict[str, Any]:
    """Build a boto3 ``get_query_execution`` response."""
    status: dict[str, Any] = {"State": state}
    if reason is not None:
        status["StateChangeReason"] = reason
    if category is not None or error_type is not None:
        status["AthenaError"] = {}
        if category is not None:
            status["AthenaError"]["ErrorCategory"] = category
        if error_type is not None:
            status["AthenaError"]["ErrorType"] = error_type
    execution: dict[str, Any] = {"QueryExecutionId": query_execution_id, "Status": status}
    if output_location is not None:
        execution["ResultConfiguration"] = {"OutputLocation": output_location}
    return {"QueryExecution": execution}


def results_response(
    columns: list[str],
    rows: list[list[str | None]],
    next_token: str | None = None,
) -> dict[str, Any]:
    """Build a boto3 ``get_query_results`` response."""
    response: dict[str, Any] = {
        "ResultSet": {
            "Rows": [
                {"Data": [{} if v is None else {"VarCharValue": v} for v in row]}
                for row in rows
            ],
            "ResultSetMetadata": {
                "ColumnInfo": [{"Name": c, "Label": c, "Type": "varchar"} for c in columns],
            },
        },
    }
    if next_token is not None:
        response["NextToken"] = next_token
    return response


def handle(
    state: QueryState,
    *,
    output_location: str | None = "s3://bucket/path",
    reason: str | None = None,
    category: int | None = None,
    error_type: int | None = None,
) -> QueryExecutionHandle:
    return QueryExecutionHandle(
        id="qe-123",
        state=state,
        output_location=output_location,
        failure_reason=reason,
        error_category=category,
        error_type=error_type,
    )


def three_pages() -> list[ResultPage]:
    """A synthetic three-page result: header + 5 data rows."""
    columns = ("id", "name")
    return [
        ResultPage("tok-1", columns, (("id", "name"), ("1", "a"), ("2", "b"))),
        ResultPage("tok-2", columns, (("3", "c"), ("4", "d"))),
        ResultPage(None, columns, (("5", "e"),)),
    ]


@pytest.fixture()
def boto_client() -> MagicMock:
    """A stand-in for ``boto3.client("athena")``."""
    mock_client = MagicMock()
    mock_client.start_query_execution.return_value = {"QueryExecutionId": "qe-123"}
    return mock_client


@pytest.fixture()
def athena_client() -> MagicMock:
    """An :class:`AthenaClient` with async methods mocked out."""
    mock_client = MagicMock(spec=AthenaClient)
    mock_client.start_query = AsyncMock(return_value="qe-123")
    mock_client.get_query_status = AsyncMock()
    mock_client.get_results_page = AsyncMock()
    return mock_client


@pytest.fixture()
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    """Make the poll loop's sleeps return immediately and record them."""
    sleep = AsyncMock()
    monkeypatch.setattr("athena_stream.runner.asyncio.sleep", sleep)
    return sleep
