# bookstore/utils/logging.py
import logging
import sys

from bookstore.utils.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _root_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    return handler


_root = logging.getLogger("bookstore")
if not _root.handlers:
    _root.addHandler(_root_handler())
    _root.setLevel(LOG_LEVEL)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
