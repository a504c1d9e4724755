#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-20 14:55:30 krylon>
#
# /data/code/python/newswall/src/newswall/wall.py
# created on 20. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.wall

(c) 2026 Benjamin Walkenhorst

Wall ties the pieces together: it loads the pool, hands it to the Rotator,
and reloads it every so often.
"""


import logging
from threading import Event, Lock, Thread
from typing import Any, Final, Optional

from newswall import common
from newswall.aggregator import Aggregator
from newswall.config import Config
from newswall.fetcher import Fetcher, SourceFetchError
from newswall.model import Item, Layout, RotationState
from newswall.rotation import Rotator
from newswall.slots import SlotAllocator


class Wall:
    """Wall is the news wall as a whole."""

    __slots__ = [
        "log",
        "lock",
        "cfg",
        "aggregator",
        "rotator",
        "allocator",
        "_active",
        "_wakeup",
        "_reloader",
    ]

    log: logging.Logger
    lock: Lock
    cfg: Config
    aggregator: Aggregator
    rotator: Rotator
    allocator: SlotAllocator
    _active: bool
    _wakeup: Event
    _reloader: Optional[Thread]

    def __init__(self, cfg: Config, fetcher: Optional[Fetcher] = None) -> None:
        self.log = common.get_logger("wall")
        self.lock = Lock()
        self.cfg = cfg
        if fetcher is None:
            fetcher = Fetcher(timeout=cfg.fetch_timeout, limit=2 * cfg.preload_count)
        self.aggregator = Aggregator(cfg.sources,
                                     cfg.preload_count,
                                     cfg.total_displayed,
                                     fetcher)
        self.rotator = Rotator(cfg.total_displayed,
                               cfg.rotation_interval,
                               cfg.transition_delay)
        self.allocator = SlotAllocator(cfg.regions)
        self._active = False
        self._wakeup = Event()
        self._reloader = None

    @property
    def active(self) -> bool:
        """Return the Wall's active flag."""
        with self.lock:
            return self._active

    @active.setter
    def active(self, value: bool) -> None:
        """Set the Wall's active flag."""
        with self.lock:
            self._active = value

    def reload(self) -> tuple[Item, ...]:
        """Build a fresh pool and start rotating through it."""
        pool: Final[tuple[Item, ...]] = self.aggregator.load()
        with self.lock:
            # A stopped Wall must not start rotating again.
            if self._wakeup.is_set():
                self.log.debug("Wall was stopped during reload, discarding %d items.",
                               len(pool))
                return pool
            self.rotator.replace_pool(pool, self.aggregator.loading)
        failed: Final[dict[str, SourceFetchError]] = self.aggregator.fetcher.failures
        if len(failed) > 0:
            self.log.info("%d of %d feeds failed: %s",
                          len(failed),
                          len(self.cfg.sources),
                          ", ".join(sorted(failed)))
        return pool

    def start(self) -> None:
        """Load the pool, then keep reloading it in the background."""
        self.log.debug("Wall is starting.")
        self.active = True
        self._wakeup.clear()
        self.reload()

        if self.cfg.refresh_interval > 0:
            self._reloader = Thread(name="Reloader", target=self._reload_loop, daemon=True)
            self._reloader.start()

    def stop(self) -> None:
        """Stop reloading and rotating."""
        self.log.debug("Wall is stopping.")
        with self.lock:
            self._active = False
            self._wakeup.set()
        if self._reloader is not None:
            self._reloader.join()
            self._reloader = None
        self.rotator.stop()

    def _reload_loop(self) -> None:
        self.log.debug("Reload loop is starting up.")
        while not self._wakeup.wait(self.cfg.refresh_interval):
            if not self.active:
                break
            self.reload()
        self.log.debug("Reload loop is quitting.")

    def layout(self) -> Layout:
        """Return what should be on display right now."""
        state: Final[RotationState] = self.rotator.state
        return self.allocator.allocate(self.rotator.pool, state.offset, state.phase)

    def status(self) -> dict[str, Any]:
        """Return a summary of the Wall's state."""
        state: Final[RotationState] = self.rotator.state
        return {
            "app": f"{common.AppName} {common.AppVersion}",
            "sources": len(self.cfg.sources),
            "pool": len(self.aggregator.pool),
            "loading": self.aggregator.loading,
            "offset": state.offset,
            "phase": state.phase.string,
            "failed": {name: str(err) for name, err in self.aggregator.fetcher.failures.items()},
        }

# Local Variables: #
# python-indent: 4 #
# End: #
