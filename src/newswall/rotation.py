#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-20 09:12:48 krylon>
#
# /data/code/python/newswall/src/newswall/rotation.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.rotation

(c) 2026 Benjamin Walkenhorst
"""


import logging
import threading
import time
from datetime import timedelta
from threading import Event, Lock, Thread
from typing import Final, Optional, Union

from newswall import common
from newswall.model import Item, Phase, RotationState


def _seconds(val: Union[int, float, timedelta], name: str) -> float:
    match val:
        case int(x) | float(x):
            return float(x)
        case timedelta() as x:
            return x.total_seconds()
        case _:
            cname = val.__class__.__name__
            raise ValueError(f"{name} must be a number (of seconds) or a timedelta, not a {cname}")


class Rotator:
    """Rotator moves the display window through the pool at regular intervals.

    Each rotation first enters the Fading phase, and after a short delay
    advances the offset and goes back to Displaying.
    """

    __slots__ = [
        "log",
        "lock",
        "interval",
        "delay",
        "step",
        "_pool",
        "_offset",
        "_phase",
        "_gen",
        "_stop",
        "_worker",
    ]

    log: logging.Logger
    lock: Lock
    interval: float
    delay: float
    step: int
    _pool: tuple[Item, ...]
    _offset: int
    _phase: Phase
    _gen: int
    _stop: Event
    _worker: Optional[Thread]

    def __init__(self,
                 step: int,
                 interval: Union[int, float, timedelta] = 120,
                 delay: Union[int, float, timedelta] = 0.5) -> None:
        self.log = common.get_logger("rotator")
        self.lock = Lock()
        self.interval = _seconds(interval, "Interval")
        self.delay = _seconds(delay, "Delay")
        if step <= 0:
            raise ValueError(f"Step must be positive, not {step}")
        if not 0 <= self.delay < self.interval:
            raise ValueError(
                f"Transition delay ({self.delay}s) must be shorter than the interval ({self.interval}s)")
        self.step = step
        self._pool = ()
        self._offset = 0
        self._phase = Phase.Idle
        self._gen = 0
        self._stop = Event()
        self._worker = None

    @property
    def state(self) -> RotationState:
        """Return a snapshot of the current offset and phase."""
        with self.lock:
            return RotationState(offset=self._offset, phase=self._phase)

    @property
    def pool(self) -> tuple[Item, ...]:
        """Return the pool we are rotating over."""
        with self.lock:
            return self._pool

    def ready(self, pool: tuple[Item, ...], loading: bool = False) -> bool:
        """Return True if the pool is large enough to rotate through."""
        return not loading and len(pool) >= 2 * self.step

    def replace_pool(self, pool: tuple[Item, ...], loading: bool = False) -> None:
        """Install a new pool and start over from the beginning.

        Rotation only begins once loading is done and the pool holds at least
        two windows' worth of Items.
        """
        self.stop()
        with self.lock:
            self._pool = tuple(pool)
            self._offset = 0
            self._phase = Phase.Idle

        if not self.ready(pool, loading):
            self.log.info("Pool has %d items, need %d to rotate. Staying idle.",
                          len(pool),
                          2 * self.step)
            return

        self.start()

    def start(self) -> bool:
        """Start rotating. Return False if we are already rotating or the pool is too small."""
        with self.lock:
            if self._phase != Phase.Idle or not self.ready(self._pool):
                return False
            self._gen += 1
            self._phase = Phase.Displaying
            self._stop = Event()
            self._worker = Thread(name="Rotator",
                                  target=self._loop,
                                  args=(self._gen, self._stop),
                                  daemon=True)
            self._worker.start()
        self.log.debug("Rotating through %d items every %.1f seconds.",
                       len(self._pool),
                       self.interval)
        return True

    def stop(self) -> None:
        """Stop rotating. The offset is left alone."""
        with self.lock:
            self._gen += 1
            self._stop.set()
            worker: Final[Optional[Thread]] = self._worker
            self._worker = None
            if self._phase != Phase.Idle:
                self._phase = Phase.Idle

        if worker is not None and worker is not threading.current_thread():
            worker.join()

    def fade(self, gen: Optional[int] = None) -> bool:
        """Enter the Fading phase. Return True if we did."""
        with self.lock:
            if gen is not None and gen != self._gen:
                return False
            if self._phase != Phase.Displaying:
                return False
            self._phase = Phase.Fading
            return True

    def commit(self, gen: Optional[int] = None) -> bool:
        """Advance the offset to the next window and go back to Displaying."""
        with self.lock:
            if gen is not None and gen != self._gen:
                return False
            if self._phase != Phase.Fading:
                return False
            self._offset += self.step
            if self._offset >= len(self._pool):
                self._offset = 0
            self._phase = Phase.Displaying
            offset: Final[int] = self._offset

        self.log.debug("Window now starts at offset %d", offset)
        return True

    def tick(self) -> bool:
        """Perform one complete rotation right away, skipping the delay."""
        return self.fade() and self.commit()

    def _loop(self, gen: int, stop: Event) -> None:
        due: float = time.monotonic() + self.interval
        while not stop.wait(max(0.0, due - time.monotonic())):
            if not self.fade(gen):
                break
            if stop.wait(self.delay):
                break
            if not self.commit(gen):
                break
            due += self.interval
        self.log.debug("Rotation loop %d is done.", gen)

# Local Variables: #
# python-indent: 4 #
# End: #
