import math
import os
import re
from dataclasses import dataclass
from typing import Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """Seconds in a duration such as ``5``, ``500ms`` or ``1m30s``.

    A bare number is taken as seconds. Negative durations are rejected.
    """
    text = str(value).strip()
    try:
        seconds = float(text)
    except ValueError:
        pos, seconds = 0, 0.0
        while pos < len(text):
            m = _DURATION_PART.match(text, pos)
            if m is None:
                raise ValueError(f"invalid duration {value!r}") from None
            seconds += float(m.group(1)) * _DURATION_UNITS[m.group(2)]
            pos = m.end()
        if not text:
            raise ValueError("empty duration") from None
    if not math.isfinite(seconds):
        raise ValueError(f"invalid duration {value!r}")
    if seconds < 0:
        raise ValueError(f"duration must not be negative, got {value!r}")
    return seconds


def _env(name: str, default=None):
    return os.getenv(f"LANBROADCAST_{name}", default)


@dataclass
class Config:
    port: int = 25565
    motd: str = ""
    interval: float = 5.0
    address: Optional[str] = None
    interface: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def load():
        """Defaults overridden by LANBROADCAST_* environment variables.

        Raises ValueError naming the variable when one holds a bad value.
        """
        cfg = Config()
        try:
            port = int(_env("PORT", cfg.port))
        except ValueError:
            raise ValueError(f"LANBROADCAST_PORT: not an integer: {_env('PORT')!r}") from None
        if port <= 0:
            raise ValueError(f"LANBROADCAST_PORT: must be positive, got {port}")

        try:
            interval = parse_duration(_env("INTERVAL", cfg.interval))
        except ValueError as e:
            raise ValueError(f"LANBROADCAST_INTERVAL: {e}") from None

        log_level = _env("LOG_LEVEL", cfg.log_level).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"LANBROADCAST_LOG_LEVEL: {log_level!r} is not one of {', '.join(LOG_LEVELS)}"
            )

        return Config(
            port=port,
            motd=_env("MOTD", cfg.motd),
            interval=interval,
            address=_env("ADDRESS") or None,
            interface=_env("INTERFACE") or None,
            log_level=log_level,
            log_file=_env("LOG_FILE") or None,
        )
