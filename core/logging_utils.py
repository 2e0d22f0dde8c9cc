import logging
import os
from logging.handlers import RotatingFileHandler

from core import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_file: str | None = None, level: str | None = None) -> logging.Logger:
    """
    Configure the root app logger:
    - Console shows `level` and above (INFO by default).
    - Log file keeps DEBUG and above.

    Safe to call more than once (Streamlit reruns the script on every event).
    """
    log_file = log_file or config.LOG_FILE
    level = (level or config.LOG_LEVEL).upper()

    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    root = logging.getLogger("clinic")
    root.setLevel(logging.DEBUG)

    fmt = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    fh = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    fh.setFormatter(fmt)
    fh.setLevel(logging.DEBUG)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    ch.setLevel(getattr(logging, level, logging.INFO))

    for handler in list(root.handlers):
        handler.close()
    root.handlers.clear()
    root.addHandler(fh)
    root.addHandler(ch)

    return root


def get_logger(name: str) -> logging.Logger:
    """Child of the `clinic` logger, so module logs reach setup_logging handlers."""
    return logging.getLogger(f"clinic.{name}")
