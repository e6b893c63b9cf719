"""Exception hierarchy for the athena-stream package.

Every error raised by the package carries a :class:`FailureKind` tag, so
callers can either ``except`` a specific class or match on ``err.kind``::

    try:
        stream = await runner.run(sql)
    except AthenaStreamError as err:
        match err.kind:
            case FailureKind.QUERY_FAILURE:
                ...

Errors coming from boto3/botocore (throttling, access denied, ...) are not
wrapped and propagate unchanged.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from athena_stream._types import QueryState


class FailureKind(enum.Enum):
    QUERY_FAILURE = "query_failure"
    RUNNER_FAILURE = "runner_failure"
    STREAM_CONSUMED = "stream_consumed"


class AthenaStreamError(Exception):
    """Base exception for all athena-stream errors."""

    kind: FailureKind = FailureKind.RUNNER_FAILURE

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class QueryFailure(AthenaStreamError):
    """Raised when Athena reports a query as ``FAILED`` or ``CANCELLED``.

    ``category`` and ``type`` are Athena's numeric ``ErrorCategory`` and
    ``ErrorType`` codes, passed through as-is; either may be ``None``.
    """

    kind = FailureKind.QUERY_FAILURE

    def __init__(
        self,
        reason: str,
        *,
        category: int | None = None,
        type: int | None = None,
        query_execution_id: str | None = None,
        state: QueryState | None = None,
    ) -> None:
        super().__init__(reason)
        self.category = category
        self.type = type
        self.query_execution_id = query_execution_id
        self.state = state


class QueryRunnerFailure(AthenaStreamError):
    """Raised when a query ended without a retrievable status detail."""

    kind = FailureKind.RUNNER_FAILURE


class StreamConsumedError(AthenaStreamError):
    """Raised when a :class:`~athena_stream.result.ResultStream` is iterated twice."""

    kind = FailureKind.STREAM_CONSUMED
