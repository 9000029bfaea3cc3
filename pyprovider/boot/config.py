"""Runtime settings for the demo entry points."""

from __future__ import annotations

import dataclasses
import os
from typing import Mapping, Optional

ENV_PREFIX = "PYPROVIDER_"


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"expected an integer, got {value!r}") from None


@dataclasses.dataclass(frozen=True)
class Settings:
    """Settings for ``run_web`` / the terminal runner.

    Parameters
    ----------
    host : str
        Interface the web server binds to.
    port : int
        Port the web server listens on.
    fps : int
        Render loop polling rate of the ``AppRunner``.
    trace : bool
        Record render traces (``:trace`` in the terminal).
    """

    host: str = "127.0.0.1"
    port: int = 8000
    fps: int = 20
    trace: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            host=env.get(f"{ENV_PREFIX}HOST", defaults.host),
            port=_env_int(env.get(f"{ENV_PREFIX}PORT"), defaults.port),
            fps=_env_int(env.get(f"{ENV_PREFIX}FPS"), defaults.fps),
            trace=_env_bool(env.get(f"{ENV_PREFIX}TRACE"), defaults.trace),
        )
