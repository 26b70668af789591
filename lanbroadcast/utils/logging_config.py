import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    fmt = logging.Formatter(FORMAT)

    root = logging.getLogger()
    root.setLevel(level)

    if not any(getattr(h, "_lanbroadcast", False) for h in root.handlers):
        ch = logging.StreamHandler()
        ch.setFormatter(fmt)
        ch._lanbroadcast = True
        root.addHandler(ch)

    if log_file and not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        fh = RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=5, encoding="utf-8")
        fh.setFormatter(fmt)
        root.addHandler(fh)
