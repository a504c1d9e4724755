#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 14:02:17 krylon>
#
# /data/code/python/newswall/src/newswall/common.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.common

(c) 2026 Benjamin Walkenhorst

Bits and pieces used throughout the application: the base directory, logging,
the root of our exception hierarchy.
"""


import logging
import logging.handlers
import os
import pathlib
import sys
from datetime import datetime, timezone
from threading import Lock
from typing import Final, Optional, Union

AppName: Final[str] = "newswall"
AppVersion: Final[str] = "0.1.0"
Debug: bool = True
TimeFmt: Final[str] = "%Y-%m-%d %H:%M:%S"


class NewswallError(Exception):
    """Base class for application specific exceptions."""


class Path:
    """Holds the paths of folders and files used by the application."""

    __slots__ = ["__base"]

    __base: pathlib.Path

    def __init__(self, root: Union[str, pathlib.Path]) -> None:
        self.__base = pathlib.Path(root)

    def base(self, path: Optional[Union[str, pathlib.Path]] = None) -> pathlib.Path:
        """Return the base directory. If path is given, set the base directory first."""
        if path is not None:
            self.__base = pathlib.Path(path)
        return self.__base

    @property
    def log(self) -> pathlib.Path:
        """Return the path of the log file."""
        return self.__base.joinpath(f"{AppName.lower()}.log")

    @property
    def config(self) -> pathlib.Path:
        """Return the path of the configuration file."""
        return self.__base.joinpath(f"{AppName.lower()}.json")


path: Path = Path(os.path.expanduser(f"~/.{AppName.lower()}.d"))

_lock: Final[Lock] = Lock()


def set_basedir(folder: Union[str, pathlib.Path]) -> None:
    """Set the base directory and make sure it exists."""
    path.base(folder)
    init_app()


def init_app() -> None:
    """Create the application's base directory if it does not exist."""
    folder: Final[pathlib.Path] = path.base()
    if not folder.is_dir():
        folder.mkdir(parents=True, exist_ok=True)


def get_logger(name: str, terminal: bool = True) -> logging.Logger:
    """Create and return a logger with the given name."""
    with _lock:
        init_app()
        log = logging.getLogger(name)
        if log.handlers:
            return log

        log.setLevel(logging.DEBUG if Debug else logging.INFO)
        log.propagate = False

        fmt: Final[logging.Formatter] = logging.Formatter(
            "%(asctime)s (%(name)-16s / line %(lineno)-4d) - " +
            "%(levelname)-8s %(message)s")

        fh = logging.handlers.RotatingFileHandler(path.log,
                                                  maxBytes=8 << 20,
                                                  backupCount=3,
                                                  encoding="utf-8")
        fh.setFormatter(fmt)
        log.addHandler(fh)

        if terminal:
            ch = logging.StreamHandler(sys.stderr)
            ch.setFormatter(fmt)
            ch.setLevel(logging.INFO)
            log.addHandler(ch)

        return log


def parse_iso_date(s: str) -> datetime:
    """Parse an ISO 8601 timestamp. Naive timestamps are assumed to be UTC."""
    stamp: datetime = datetime.fromisoformat(s.strip())
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp.astimezone(timezone.utc)

# Local Variables: #
# python-indent: 4 #
# End: #
