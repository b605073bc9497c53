import os

from .utils import MAX_HISTORY_BLOCKS

DEFAULT_READ_LIMIT = MAX_HISTORY_BLOCKS
DEFAULT_EXCHANGE_TIMEOUT = 1.0
DEFAULT_DATABASE_PATH = "scan_history.db"


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


def resolve_read_limit() -> int:
    value = _env("SUICA_READ_LIMIT")
    if not value:
        return DEFAULT_READ_LIMIT
    try:
        limit = int(value)
    except ValueError as exc:
        raise ValueError(f"SUICA_READ_LIMIT is not an integer: {value!r}") from exc
    if not 1 <= limit <= MAX_HISTORY_BLOCKS:
        raise ValueError(
            f"SUICA_READ_LIMIT must be between 1 and {MAX_HISTORY_BLOCKS}."
        )
    return limit


def resolve_exchange_timeout() -> float:
    value = _env("SUICA_EXCHANGE_TIMEOUT")
    if not value:
        return DEFAULT_EXCHANGE_TIMEOUT
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ValueError(f"SUICA_EXCHANGE_TIMEOUT is not a number: {value!r}") from exc
    if timeout <= 0:
        raise ValueError("SUICA_EXCHANGE_TIMEOUT must be positive.")
    return timeout


def resolve_database_path() -> str:
    return _env("SUICA_HISTORY_DB") or DEFAULT_DATABASE_PATH
