import logging
import os
from datetime import datetime
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _make_log_dir(path: Union[str, os.PathLike]) -> str:
    os.makedirs(path, exist_ok=True)
    return str(path)


def _file_handler(log_dir: Union[str, os.PathLike]) -> logging.Handler:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    logfile = os.path.join(_make_log_dir(log_dir), f"run_{timestamp}.log")
    handler = logging.FileHandler(logfile, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(name: str = __name__, level: int = logging.INFO,
                  log_dir: Optional[Union[str, os.PathLike]] = None) -> logging.Logger:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler()])
    root.setLevel(level)
    if log_dir is not None and _attached_file_handler(log_dir) is None:
        root.addHandler(_file_handler(log_dir))
    return logging.getLogger(name)


def _attached_file_handler(log_dir: Union[str, os.PathLike]) -> Optional[logging.FileHandler]:
    target = os.path.abspath(log_dir)
    for handler in logging.getLogger().handlers:
        if isinstance(handler, logging.FileHandler) and os.path.dirname(handler.baseFilename) == target:
            return handler
    return None
