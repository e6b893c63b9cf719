"""Internal types and constants for the athena-stream package."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class QueryState(enum.Enum):
    """State of an Athena query execution."""

    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @classmethod
    def _missing_(cls, value: object) -> QueryState | None:
        # single-L spelling used by some Athena clients and docs
        if value == "CANCELED":
            return cls.CANCELLED
        return None

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset({
    QueryState.SUCCEEDED,
    QueryState.FAILED,
    QueryState.CANCELLED,
})


@dataclass(frozen=True)
class QueryExecutionHandle:
    """Snapshot of one query execution as last reported by Athena.

    A new handle is decoded from every status poll; handles are never
    updated in place.
    """

    id: str
    state: QueryState
    output_location: str | None = None
    failure_reason: str | None = None
    error_category: int | None = None
    error_type: int | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal


@dataclass(frozen=True)
class ResultPage:
    """One page of ``GetQueryResults`` output."""

    next_token: str | None
    column_names: tuple[str, ...]
    rows: tuple[tuple[str | None, ...], ...]

    @property
    def has_more(self) -> bool:
        return self.next_token is not None


@dataclass(frozen=True)
class Row:
    """A single result row.

    ``values`` holds Athena's string rendering of each cell; SQL ``NULL``
    is ``None``.
    """

    column_names: tuple[str, ...]
    values: tuple[str | None, ...]

    def as_dict(self) -> dict[str, str | None]:
        return dict(zip(self.column_names, self.values))
