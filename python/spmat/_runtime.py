import logging
import os

logger = logging.getLogger(__name__)

MATMUL_METHODS = ("rowcol", "dense")
ENV_MATMUL_METHOD = "SPMAT_MATMUL_METHOD"

_current_method = "rowcol"
_warned_env = None


def set_matmul_method(name: str) -> None:
    global _current_method
    if name not in MATMUL_METHODS:
        raise ValueError(f"matmul method must be one of {MATMUL_METHODS}, got {name!r}")
    _current_method = name


def get_matmul_method() -> str:
    global _warned_env
    # If user set env externally, honor it
    env = os.environ.get(ENV_MATMUL_METHOD)
    if env:
        env = env.strip().lower()
        if env in MATMUL_METHODS:
            return env
        if env != _warned_env:
            logger.warning(f"Ignoring invalid {ENV_MATMUL_METHOD}={env!r}")
            _warned_env = env
    return _current_method
