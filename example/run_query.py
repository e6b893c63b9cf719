from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv


def _load_env(env_path: str | None = None) -> None:
    """Load environment variables so that athena_stream uses those defaults.

    If *env_path* is given, only that file is loaded.  Otherwise, the
    ``.env`` at the repo root and the one in the current directory are
    loaded (current directory wins).
    """

    if env_path is not None:
        load_dotenv(Path(env_path).resolve(), override=True)
        return

    here = Path(__file__).resolve()
    repo_root = here.parent.parent

    load_dotenv(repo_root / ".env")
    load_dotenv(override=True)


async def _run(sql: str, limit: int | None) -> None:
    # Import after env is loaded so the package picks up the variables
    import athena_stream

    runner = athena_stream.connect()
    try:
        stream = await runner.run(sql)
    except athena_stream.QueryFailure as err:
        raise SystemExit(f"Query failed ({err.category}/{err.type}): {err}") from err

    print("results written to", stream.output_location)
    count = 0
    async for row in stream:
        print(row.as_dict())
        count += 1
        if limit is not None and count >= limit:
            break


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Run a SQL query on Athena and print the rows")
    parser.add_argument("query", help="SQL query to execute")
    parser.add_argument("--limit", type=int, default=None, help="Stop after this many rows")
    parser.add_argument("--env", default=None, help="Path to .env file (default: .env in repo root / cwd)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log query lifecycle events")
    args = parser.parse_args()

    _load_env(args.env)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(message)s")
        logging.getLogger("botocore").setLevel(logging.WARNING)

    asyncio.run(_run(args.query, args.limit))


if __name__ == "__main__":
    main()
