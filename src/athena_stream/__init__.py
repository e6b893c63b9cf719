"""athena-stream — run SQL on Amazon Athena and stream the rows back.

Quick start::

    import asyncio
    import athena_stream

    async def main() -> None:
        runner = athena_stream.connect(work_group="analytics")
        stream = await runner.run("SELECT * FROM events LIMIT 10")
        async for row in stream:
            print(row.as_dict())

    asyncio.run(main())
"""

from __future__ import annotations

import logging

import boto3

from athena_stream._client import AthenaClient
from athena_stream._config import (
    DEFAULT_REGION,
    DEFAULT_RESULT_REUSE_MAX_AGE,
    DEFAULT_WORK_GROUP,
)
from athena_stream._types import (
    TERMINAL_STATES,
    QueryExecutionHandle,
    QueryState,
    ResultPage,
    Row,
)
from athena_stream._version import __version__
from athena_stream.exceptions import (
    AthenaStreamError,
    FailureKind,
    QueryFailure,
    QueryRunnerFailure,
    StreamConsumedError,
)
from athena_stream.result import ResultStream
from athena_stream.runner import QueryRunner, next_poll_delay

logging.getLogger("athena_stream").addHandler(logging.NullHandler())


def connect(
    *,
    region: str | None = DEFAULT_REGION,
    session: boto3.session.Session | None = None,
    work_group: str = DEFAULT_WORK_GROUP,
    result_reuse_max_age: int | None = DEFAULT_RESULT_REUSE_MAX_AGE,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> QueryRunner:
    """Create a :class:`QueryRunner` backed by a new boto3 Athena client.

    Parameters
    ----------
    region : str, optional
        Athena region.  Defaults to ``AWS_REGION`` env var.
    session : boto3.session.Session, optional
        Credentials source.  Defaults to boto3's default credential chain.
    work_group : str
        Defaults to ``ATHENA_WORK_GROUP`` env var, or ``"primary"``.
    result_reuse_max_age : int, optional
        Minutes.  Defaults to ``ATHENA_RESULT_REUSE_MAX_AGE`` env var.
    logger : logging.Logger, optional
        Destination for lifecycle debug records.
    """
    return QueryRunner(
        region=region,
        session=session,
        work_group=work_group,
        result_reuse_max_age=result_reuse_max_age,
        logger=logger,
    )


__all__ = [
    "__version__",
    "connect",
    "QueryRunner",
    "ResultStream",
    "AthenaClient",
    "next_poll_delay",
    "QueryState",
    "TERMINAL_STATES",
    "QueryExecutionHandle",
    "ResultPage",
    "Row",
    "AthenaStreamError",
    "FailureKind",
    "QueryFailure",
    "QueryRunnerFailure",
    "StreamConsumedError",
]
