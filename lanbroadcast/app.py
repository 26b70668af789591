import argparse
import ipaddress
import logging
import sys

from lanbroadcast.core.errors import BroadcastError
from lanbroadcast.netcore.broadcaster import LANBroadcast
from lanbroadcast.settings.config import LOG_LEVELS, Config, parse_duration
from lanbroadcast.utils.logging_config import setup_logging

LOG = logging.getLogger("lanbroadcast")


def _host_address(value: str) -> str:
    try:
        ip = ipaddress.IPv4Address(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a valid IPv4 address") from None
    if ip.is_loopback or ip.is_unspecified:
        raise argparse.ArgumentTypeError("The provided IP is not valid.")
    return str(ip)


def _positive_int(value: str) -> int:
    port = int(value)
    if port <= 0:
        raise argparse.ArgumentTypeError("port must be a positive integer")
    return port


def _interval(value: str) -> float:
    try:
        return parse_duration(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser(cfg: Config) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lanbroadcast",
        description="Announce a server to Minecraft clients on the local network.",
    )
    p.add_argument("--port", type=_positive_int, default=cfg.port,
                   help="The port of the server")
    p.add_argument("--motd", default=cfg.motd, help="The MOTD to display")
    p.add_argument("--interval", type=_interval, default=cfg.interval,
                   help="Time between broadcasts, e.g. 5, 5s, 500ms or 1m30s")
    p.add_argument("--address", type=_host_address, default=cfg.address,
                   help="The address of the host network. Detected automatically if omitted")
    p.add_argument("--interface", default=cfg.interface,
                   help="Only look for a host address on this interface")
    p.add_argument("--log-level", default=cfg.log_level, type=str.upper,
                   choices=LOG_LEVELS)
    p.add_argument("--log-file", default=cfg.log_file)
    return p


def main(argv=None) -> int:
    try:
        cfg = Config.load()
    except ValueError as e:
        build_parser(Config()).error(str(e))
    args = build_parser(cfg).parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        lan = LANBroadcast(args.address, args.port, args.motd, iface=args.interface)
    except BroadcastError as e:
        LOG.error(str(e))
        return 1
    lan.set_interval(args.interval)

    thread = lan.start()
    LOG.info("Started broadcasting to LAN")
    try:
        while thread.is_alive():
            thread.join(0.5)
    except KeyboardInterrupt:
        LOG.info("Received Ctrl+C exiting")
    finally:
        lan.close()
        thread.join()
    return 0


if __name__ == "__main__":
    sys.exit(main())
