"""Streaming result set for a completed Athena query."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

import pyarrow as pa

from athena_stream._client import AthenaClient
from athena_stream._types import QueryExecutionHandle, Row
from athena_stream.exceptions import StreamConsumedError

_logger = logging.getLogger("athena_stream")


def _rows_to_table(column_names: tuple[str, ...], rows: list[Row]) -> pa.Table:
    """Convert rows to a :class:`pyarrow.Table` of string columns."""
    if not column_names:
        return pa.table({})

    arrays: dict[str, list[str | None]] = {col: [] for col in column_names}
    for row in rows:
        for col, value in zip(column_names, row.values):
            arrays[col].append(value)

    return pa.table({col: pa.array(values, type=pa.string()) for col, values in arrays.items()})


class ResultStream:
    """Rows of a completed query, fetched lazily one page at a time.

    Iterate with ``async for``.  Athena repeats the column header as the first
    row of the first page; that row is dropped, once, and every other row is
    yielded in order.  Pages are requested strictly in sequence and only when
    the previous page's rows have been consumed.

    A stream can be iterated once.  Iterating it again raises
    :class:`~athena_stream.exceptions.StreamConsumedError`.
    """

    def __init__(
        self,
        client: AthenaClient,
        execution: QueryExecutionHandle,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self._client = client
        self._execution = execution
        self._logger = logger if logger is not None else _logger
        self._column_names: tuple[str, ...] | None = None
        self._consumed = False

    @property
    def query_execution_id(self) -> str:
        return self._execution.id

    @property
    def output_location(self) -> str | None:
        """S3 location Athena wrote the query results to."""
        return self._execution.output_location

    @property
    def execution(self) -> QueryExecutionHandle:
        return self._execution

    @property
    def column_names(self) -> tuple[str, ...] | None:
        """Column names, or ``None`` until the first page has been fetched."""
        return self._column_names

    @property
    def consumed(self) -> bool:
        return self._consumed

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def __aiter__(self) -> AsyncIterator[Row]:
        if self._consumed:
            raise StreamConsumedError(
                f"Results of query execution {self._execution.id} have already been iterated"
            )
        self._consumed = True
        return self._iter_rows()

    async def _iter_rows(self) -> AsyncIterator[Row]:
        header_skipped = False
        next_token: str | None = None
        while True:
            page = await self._client.get_results_page(self._execution.id, next_token)
            self._logger.debug(
                "Query execution %s loaded %d rows (has %smore pages)",
                self._execution.id,
                len(page.rows),
                "" if page.has_more else "no ",
            )
            self._column_names = page.column_names
            rows = page.rows
            if not header_skipped:
                rows = rows[1:]
                header_skipped = True
            for values in rows:
                yield Row(page.column_names, values)
            if not page.has_more:
                return
            next_token = page.next_token

    # ------------------------------------------------------------------
    # Materialisation
    # ------------------------------------------------------------------

    async def fetchall(self) -> list[Row]:
        """Consume the stream and return every row."""
        return [row async for row in self]

    async def to_arrow_table(self) -> pa.Table:
        """Consume the stream into a :class:`pyarrow.Table` of string columns."""
        rows = await self.fetchall()
        return _rows_to_table(self._column_names or (), rows)

    async def to_pandas(self) -> Any:
        """Consume the stream into a :class:`pandas.DataFrame`.

        Raises :class:`ImportError` if *pandas* is not installed.
        """
        try:
            import pandas  # noqa: F401
        except ImportError:
            raise ImportError(
                "pandas is required for to_pandas(). "
                "Install it with: pip install athena-stream[pandas]"
            ) from None
        table = await self.to_arrow_table()
        return table.to_pandas()

    def __repr__(self) -> str:
        return (
            f"<ResultStream query_execution_id={self._execution.id!r} "
            f"output_location={self.output_location!r}>"
        )
