"""Query lifecycle: submit, poll until terminal, hand back a result stream."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import boto3

from athena_stream._client import AthenaClient
from athena_stream._config import (
    DEFAULT_REGION,
    DEFAULT_RESULT_REUSE_MAX_AGE,
    DEFAULT_WORK_GROUP,
)
from athena_stream._types import QueryExecutionHandle, QueryState
from athena_stream.exceptions import QueryFailure, QueryRunnerFailure
from athena_stream.result import ResultStream

_logger = logging.getLogger("athena_stream")

# Poll delays, in seconds.
INITIAL_POLL_DELAY = 0.1
MIN_POLL_DELAY = 2.0
POLL_DELAY_GROWTH = 1.2


def next_poll_delay(delay: float) -> float:
    """Return the delay to wait before the poll after one that waited *delay*.

    The growth term is raised to the 2 s floor and capped there, so the
    schedule is 0.1 s once and 2 s for every poll after that.
    """
    return min(max(delay * POLL_DELAY_GROWTH, MIN_POLL_DELAY), MIN_POLL_DELAY)


class QueryRunner:
    """Runs SQL statements on Athena and streams back their results.

    Configuration is fixed at construction.  A runner holds no per-query
    state, so one instance (and one underlying boto3 client) may serve many
    concurrent :meth:`run` calls.

    Parameters
    ----------
    region : str, optional
        Athena region.  Defaults to ``AWS_REGION`` / ``AWS_DEFAULT_REGION``.
    session : boto3.session.Session, optional
        Session supplying credentials.  Defaults to boto3's credential chain.
    work_group : str
        Work group queries are billed and governed under.  Defaults to
        ``ATHENA_WORK_GROUP`` or ``"primary"``.
    result_reuse_max_age : int, optional
        When set, Athena may return a previous result of the same query that
        is younger than this many minutes instead of running it again.
    logger : logging.Logger, optional
        Receives debug records for the query lifecycle.  Defaults to the
        ``athena_stream`` logger, which is silent unless configured.
    client : AthenaClient or boto3 Athena client, optional
        Pre-built client; *region* and *session* are ignored when given.
    """

    def __init__(
        self,
        *,
        region: str | None = DEFAULT_REGION,
        session: boto3.session.Session | None = None,
        work_group: str = DEFAULT_WORK_GROUP,
        result_reuse_max_age: int | None = DEFAULT_RESULT_REUSE_MAX_AGE,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        client: Any = None,
    ) -> None:
        if result_reuse_max_age is not None and (
            isinstance(result_reuse_max_age, bool)
            or not isinstance(result_reuse_max_age, int)
            or result_reuse_max_age < 0
        ):
            raise ValueError(
                f"result_reuse_max_age must be a non-negative number of minutes, "
                f"got {result_reuse_max_age!r}"
            )
        if client is None:
            self._client = AthenaClient.create(region=region, session=session)
        elif isinstance(client, AthenaClient):
            self._client = client
        else:
            self._client = AthenaClient(client)
        self._work_group = work_group
        self._result_reuse_max_age = result_reuse_max_age
        self._logger = logger if logger is not None else _logger

    @property
    def client(self) -> AthenaClient:
        return self._client

    @property
    def work_group(self) -> str:
        return self._work_group

    @property
    def result_reuse_max_age(self) -> int | None:
        return self._result_reuse_max_age

    # ------------------------------------------------------------------
    # Query execution
    # ------------------------------------------------------------------

    async def run(self, sql: str) -> ResultStream:
        """Run *sql* and return a stream over its rows once it has succeeded.

        Raises :class:`QueryFailure` when Athena reports the query as failed
        or cancelled.  There is no timeout; wrap the call in
        :func:`asyncio.wait_for` to impose one.
        """
        if not sql or not sql.strip():
            raise ValueError("sql must be a non-empty string")

        query_execution_id = await self._client.start_query(
            sql, self._work_group, self._result_reuse_max_age
        )
        self._logger.debug("Query execution %s started", query_execution_id)

        execution = await self._wait_for_completion(query_execution_id)

        if execution.state == QueryState.SUCCEEDED:
            return ResultStream(self._client, execution, self._logger)
        raise _failure_from(execution)

    async def query(self, sql: str) -> ResultStream:
        """Alias for :meth:`run`."""
        return await self.run(sql)

    async def _wait_for_completion(self, query_execution_id: str) -> QueryExecutionHandle:
        started_at = time.monotonic()
        delay = INITIAL_POLL_DELAY

        while True:
            await asyncio.sleep(delay)
            delay = next_poll_delay(delay)
            execution = await self._client.get_query_status(query_execution_id)
            self._logger.debug(
                "Query execution %s has status %s after %.1f s",
                query_execution_id,
                execution.state.value,
                time.monotonic() - started_at,
            )
            if execution.is_terminal:
                return execution

    def __repr__(self) -> str:
        return f"<QueryRunner work_group={self._work_group!r}>"


def _failure_from(execution: QueryExecutionHandle) -> Exception:
    """Classify a ``FAILED``/``CANCELLED`` execution as an exception."""
    if execution.failure_reason is None:
        return QueryRunnerFailure("Query failed but could not retrieve status")
    return QueryFailure(
        execution.failure_reason,
        category=execution.error_category,
        type=execution.error_type,
        query_execution_id=execution.id,
        state=execution.state,
    )
