"""Runner defaults.

Values are read from environment variables so deployments can pick a work
group or region without changing code. A ``.env`` file in the current
working directory is loaded automatically when this module is imported.
Arguments passed to :class:`~athena_stream.runner.QueryRunner` always take
precedence over these defaults.

Environment variables
---------------------
ATHENA_WORK_GROUP             Work group queries run under (default: primary)
ATHENA_RESULT_REUSE_MAX_AGE   Reuse results younger than this many minutes
                              (default: unset, result reuse disabled)
AWS_REGION                    Region of the Athena endpoint; falls back to
                              AWS_DEFAULT_REGION, then to boto3's own lookup
"""

from __future__ import annotations

import os as _os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_WORK_GROUP: str = _os.environ.get("ATHENA_WORK_GROUP", "primary")
_reuse_env: str = _os.environ.get("ATHENA_RESULT_REUSE_MAX_AGE", "").strip()
DEFAULT_RESULT_REUSE_MAX_AGE: int | None = int(_reuse_env) if _reuse_env else None
DEFAULT_REGION: str | None = (
    _os.environ.get("AWS_REGION") or _os.environ.get("AWS_DEFAULT_REGION") or None
)
