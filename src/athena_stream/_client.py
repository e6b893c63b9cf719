"""Asynchronous wrapper around the boto3 Athena client."""

from __future__ import annotations

import asyncio
from typing import Any

import boto3

from athena_stream._types import QueryExecutionHandle, QueryState, ResultPage


class AthenaClient:
    """Thin asynchronous wrapper around a boto3 ``athena`` client.

    boto3 calls block, so each one is dispatched to a worker thread with
    :func:`asyncio.to_thread`.  Responses are decoded into the package's own
    types here; nothing else in the package looks at raw boto3 payloads.
    Botocore exceptions are not caught.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def create(
        cls,
        *,
        region: str | None = None,
        session: boto3.session.Session | None = None,
    ) -> AthenaClient:
        """Build a client from *session* (or boto3's default credential chain)."""
        session = session if session is not None else boto3.session.Session()
        return cls(session.client("athena", region_name=region))

    @property
    def boto_client(self) -> Any:
        return self._client

    # ------------------------------------------------------------------
    # Query execution endpoints
    # ------------------------------------------------------------------

    async def start_query(
        self,
        sql: str,
        work_group: str,
        result_reuse_max_age: int | None = None,
    ) -> str:
        """Submit *sql* and return the ``QueryExecutionId``."""
        params: dict[str, Any] = {"QueryString": sql, "WorkGroup": work_group}
        if result_reuse_max_age is not None:
            params["ResultReuseConfiguration"] = {
                "ResultReuseByAgeConfiguration": {
                    "Enabled": True,
                    "MaxAgeInMinutes": result_reuse_max_age,
                },
            }
        response = await asyncio.to_thread(self._client.start_query_execution, **params)
        return str(response["QueryExecutionId"])

    async def get_query_status(self, query_execution_id: str) -> QueryExecutionHandle:
        """Fetch the current status of a query execution."""
        response = await asyncio.to_thread(
            self._client.get_query_execution, QueryExecutionId=query_execution_id
        )
        return _decode_execution(query_execution_id, response)

    async def get_results_page(
        self,
        query_execution_id: str,
        next_token: str | None = None,
    ) -> ResultPage:
        """Fetch one page of results; *next_token* selects the page."""
        params: dict[str, Any] = {"QueryExecutionId": query_execution_id}
        if next_token is not None:
            params["NextToken"] = next_token
        response = await asyncio.to_thread(self._client.get_query_results, **params)
        return _decode_page(response)


# ----------------------------------------------------------------------
# Response decoding
# ----------------------------------------------------------------------


def _decode_execution(query_execution_id: str, response: dict[str, Any]) -> QueryExecutionHandle:
    """Convert a ``GetQueryExecution`` response to a :class:`QueryExecutionHandle`."""
    execution: dict[str, Any] = response.get("QueryExecution", {})
    status: dict[str, Any] = execution.get("Status", {})
    error: dict[str, Any] = status.get("AthenaError", {})
    result_configuration: dict[str, Any] = execution.get("ResultConfiguration", {})

    return QueryExecutionHandle(
        id=execution.get("QueryExecutionId", query_execution_id),
        state=QueryState(status.get("State", QueryState.QUEUED.value)),
        output_location=result_configuration.get("OutputLocation"),
        failure_reason=status.get("StateChangeReason"),
        error_category=error.get("ErrorCategory"),
        error_type=error.get("ErrorType"),
    )


def _decode_page(response: dict[str, Any]) -> ResultPage:
    """Convert a ``GetQueryResults`` response to a :class:`ResultPage`.

    Cells without ``VarCharValue`` are SQL ``NULL`` and decode to ``None``.
    """
    result_set: dict[str, Any] = response.get("ResultSet", {})
    column_info: list[dict[str, Any]] = result_set.get("ResultSetMetadata", {}).get("ColumnInfo", [])
    rows = tuple(
        tuple(cell.get("VarCharValue") for cell in row.get("Data", []))
        for row in result_set.get("Rows", [])
    )
    return ResultPage(
        next_token=response.get("NextToken"),
        column_names=tuple(col.get("Label", col.get("Name", "")) for col in column_info),
        rows=rows,
    )
