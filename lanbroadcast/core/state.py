from enum import Enum
from threading import RLock
from typing import Tuple

DEFAULT_INTERVAL = 5.0


class BroadcastStatus(str, Enum):
    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"


class BroadcastSettings:
    """Display name, advertised port and send interval, guarded by one lock."""

    def __init__(self, port: int, motd: str = "", interval: float = 0):
        self._lock = RLock()
        self._port = port
        self._motd = motd
        self._interval = 0.0
        self.set_interval(interval)

    @property
    def port(self) -> int:
        with self._lock:
            return self._port

    @property
    def motd(self) -> str:
        with self._lock:
            return self._motd

    def set_motd(self, motd: str):
        with self._lock:
            self._motd = motd

    @property
    def interval(self) -> float:
        with self._lock:
            return self._interval or DEFAULT_INTERVAL

    def set_interval(self, seconds: float):
        if seconds < 0:
            raise ValueError(f"interval must not be negative, got {seconds}")
        with self._lock:
            self._interval = float(seconds)

    def snapshot(self) -> Tuple[str, int]:
        with self._lock:
            return self._motd, self._port
