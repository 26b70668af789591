import socket
import threading
from collections import namedtuple
from types import SimpleNamespace

import pytest

from lanbroadcast.netcore import netutils
from lanbroadcast.netcore.broadcaster import LANBroadcast

snicaddr = namedtuple("snicaddr", "family address netmask broadcast ptp")
snicstats = namedtuple("snicstats", "isup duplex speed mtu flags")


def inet(address, netmask="255.255.255.0"):
    return snicaddr(socket.AF_INET, address, netmask, None, None)


def inet6(address):
    return snicaddr(socket.AF_INET6, address, None, None, None)


def stats(isup=True, flags="up,broadcast,running,multicast"):
    return snicstats(isup, 0, 1000, 1500, flags)


LOOPBACK = ([inet("127.0.0.1", "255.0.0.0"), inet6("::1")], stats(flags="up,loopback,running"))


class FakeSocket:
    def __init__(self, short=0, error=None):
        self.sent = []
        self.closed = 0
        self.short = short
        self.error = error
        self.sent_event = threading.Event()

    def sendto(self, data, addr):
        if self.closed:
            raise OSError("socket is closed")
        self.sent.append((data, addr))
        self.sent_event.set()
        if self.error:
            raise self.error
        return len(data) - self.short

    def close(self):
        self.closed += 1


class SteppedBroadcast(LANBroadcast):
    """Counts ticks instead of sleeping and closes itself after ``ticks`` of them."""

    def __init__(self, *args, ticks=1, on_tick=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.ticks = ticks
        self.on_tick = on_tick
        self.waits = []

    def _wait(self, timeout):
        self.waits.append(timeout)
        if self.on_tick:
            self.on_tick(self, len(self.waits))
        if len(self.waits) > self.ticks:
            self.close()
        return super()._wait(0)


@pytest.fixture
def fake_socket():
    return FakeSocket()


@pytest.fixture
def make_lan(fake_socket):
    def _make(ip="192.168.1.10", port=25565, motd="", cls=LANBroadcast, **kwargs):
        kwargs.setdefault("sock_factory", lambda bind_ip: fake_socket)
        return cls(ip, port, motd, **kwargs)

    return _make


@pytest.fixture
def interfaces(monkeypatch):
    """Replace psutil's view of the host with ``{name: (addrs, stats)}``."""

    def _install(table):
        fake = SimpleNamespace(
            net_if_addrs=lambda: {name: a for name, (a, _) in table.items() if a is not None},
            net_if_stats=lambda: {name: s for name, (_, s) in table.items() if s is not None},
        )
        monkeypatch.setattr(netutils, "psutil", fake)

    return _install
