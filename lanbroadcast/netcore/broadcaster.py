import ipaddress
import logging
import threading
from typing import Optional, Tuple, Union

from lanbroadcast.core.errors import (
    BroadcastStateError,
    InvalidAddressError,
    InvalidPortError,
    SendFailure,
)
from lanbroadcast.core.state import BroadcastSettings, BroadcastStatus
from lanbroadcast.netcore.netutils import (
    MCAST_GRP,
    MCAST_PORT,
    get_host_addr,
    make_multicast_sender,
)
from lanbroadcast.netcore.protocol import encode_announcement

LOG = logging.getLogger(__name__)

Address = Union[str, ipaddress.IPv4Address, None]


def _parse_bind_address(ip: Address) -> Optional[ipaddress.IPv4Address]:
    if ip is None or isinstance(ip, ipaddress.IPv4Address):
        return ip
    try:
        return ipaddress.IPv4Address(str(ip).strip())
    except ValueError:
        raise InvalidAddressError(str(ip)) from None


class LANBroadcast:
    """Announces a server on the LAN by multicasting its MOTD and port.

    An instance is single-use: ``broadcast()`` may run once, and ``close()``
    ends it for good.
    """

    def __init__(
        self,
        ip: Address = None,
        port: int = 25565,
        motd: str = "",
        *,
        iface: Optional[str] = None,
        resolver=get_host_addr,
        sock_factory=make_multicast_sender,
    ):
        # port 0 is not a real port
        if port <= 0:
            raise InvalidPortError(str(port))

        addr = _parse_bind_address(ip)
        if addr is None or addr.is_unspecified or addr.is_loopback:
            self._bind_ip = resolver(iface)
        else:
            self._bind_ip = str(addr)

        self._settings = BroadcastSettings(port=port, motd=motd)
        self._lifecycle_lock = threading.Lock()
        self._cancel = threading.Event()
        self._status = BroadcastStatus.CREATED

        self._sock = sock_factory(self._bind_ip)
        self._target: Tuple[str, int] = (MCAST_GRP, MCAST_PORT)
        LOG.debug(f"LAN broadcaster bound to {self._bind_ip}")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    @property
    def bind_address(self) -> str:
        return self._bind_ip

    @property
    def target(self) -> Tuple[str, int]:
        return self._target

    @property
    def status(self) -> BroadcastStatus:
        with self._lifecycle_lock:
            return self._status

    @property
    def port(self) -> int:
        return self._settings.port

    @property
    def motd(self) -> str:
        return self._settings.motd

    @property
    def interval(self) -> float:
        return self._settings.interval

    def set_motd(self, message: str):
        """Set the message of the day."""
        self._settings.set_motd(message)

    def set_interval(self, seconds: float):
        """Set the interval between broadcasts in seconds; 0 restores the default."""
        self._settings.set_interval(seconds)

    def start(self) -> threading.Thread:
        """Run the broadcast on a daemon thread.

        The instance is RUNNING once this returns, so a ``close()`` that
        follows immediately stops the thread instead of racing it.
        """
        self._begin()
        t = threading.Thread(target=self._run, name="lan-broadcast", daemon=True)
        try:
            t.start()
        except RuntimeError:
            self._finish()
            raise
        return t

    def broadcast(self):
        """Broadcast to the LAN until ``close()`` is called. Blocks."""
        self._begin()
        self._run()

    def _begin(self):
        with self._lifecycle_lock:
            if self._status is not BroadcastStatus.CREATED:
                raise BroadcastStateError(
                    f"Tried to start a LAN broadcast that is {self._status.value}"
                )
            self._status = BroadcastStatus.RUNNING

    def _run(self):
        LOG.info(f"Broadcasting to {self._target[0]}:{self._target[1]} from {self._bind_ip}")
        try:
            while not self._wait(self._settings.interval):
                try:
                    self._send_packet()
                except SendFailure as e:
                    LOG.warning(f"Error sending LAN broadcast: {e}")
        finally:
            self._finish()

    def _finish(self):
        with self._lifecycle_lock:
            self._sock.close()
            self._status = BroadcastStatus.STOPPED
        LOG.info("LAN broadcast stopped")

    def close(self):
        """Stop the broadcast. Does not block and may be called more than once."""
        with self._lifecycle_lock:
            self._cancel.set()
            if self._status is BroadcastStatus.CREATED:
                # no loop owns the socket yet
                self._sock.close()
                self._status = BroadcastStatus.STOPPED

    def _wait(self, timeout: float) -> bool:
        """Block for one tick; True once cancellation was requested."""
        return self._cancel.wait(timeout)

    def _send_packet(self):
        motd, port = self._settings.snapshot()
        try:
            data = encode_announcement(motd, port)
        except UnicodeEncodeError as e:
            raise SendFailure(f"cannot encode MOTD: {e}") from e
        try:
            n = self._sock.sendto(data, self._target)
        except OSError as e:
            raise SendFailure(str(e)) from e
        if n != len(data):
            raise SendFailure(f"short write: sent {n} of {len(data)} bytes")
