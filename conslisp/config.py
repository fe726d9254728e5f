from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List

# Defaults
DEFAULT_PROMPT = "L> "
DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = {"1", "true", "yes", "on"}


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def flag_from_env(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def get_prompt() -> str:
    return os.environ.get("CONSLISP_PROMPT", DEFAULT_PROMPT)


def get_echo() -> bool:
    """Echo each parsed tree before its result."""
    return flag_from_env("CONSLISP_ECHO")


def get_log_level() -> str:
    return os.environ.get("CONSLISP_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def get_prelude_paths() -> List[Path]:
    return paths_from_env("CONSLISP_PRELUDE_PATH", [])
