"""Append-only activity log of sessions and script runs."""

import itertools
import logging
import sys
from pathlib import Path
from typing import Optional, Union

ACTIVITY_FORMAT = "[%(asctime)s] %(message)s"
ACTIVITY_DATEFMT = "%Y-%m-%d %H:%M:%S"

_instances = itertools.count()


class ActivityLog:
    """Timestamped record of what the user launched.

    Writes go through a private, non-propagating logger with its own level
    and file handler, so the record is kept when diagnostic logging is off.
    Problems opening or writing the file are reported on stderr and never
    interrupt the UI.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._logger = logging.getLogger(f"{__name__}.{next(_instances)}")
        self._logger.propagate = False
        self._logger.setLevel(logging.INFO)
        self._handler: Optional[logging.Handler] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(self.path, encoding="utf-8")
        except OSError as e:
            print(f"Failed to open activity log {self.path}: {e}", file=sys.stderr)
            self._logger.addHandler(logging.NullHandler())
        else:
            handler.setFormatter(logging.Formatter(ACTIVITY_FORMAT, datefmt=ACTIVITY_DATEFMT))
            self._logger.addHandler(handler)
            self._handler = handler

    def record(self, action: str) -> None:
        self._logger.info(action)

    def close(self) -> None:
        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None
