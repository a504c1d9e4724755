#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 20:14:36 krylon>
#
# /data/code/python/newswall/src/newswall/aggregator.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.aggregator

(c) 2026 Benjamin Walkenhorst

The Aggregator fetches all feeds in parallel and builds the pool of Items
the display window rotates over.
"""


import logging
from collections.abc import Iterable, Sequence
from threading import Lock, Thread
from typing import Final, Optional

from newswall import common
from newswall.fetcher import Fetcher
from newswall.model import FeedSource, Item


def merge(batches: Iterable[Iterable[Optional[Item]]]) -> list[Item]:
    """Concatenate the batches, skipping anything that is not a complete Item."""
    return [x for b in batches for x in b
            if x is not None and x.complete and x.published is not None]


def sort_items(items: Iterable[Item]) -> list[Item]:
    """Sort the Items, newest first. Items with the same timestamp keep their order."""
    return sorted(items, key=lambda x: x.published, reverse=True)


def partition_media(items: Iterable[Item]) -> tuple[list[Item], list[Item]]:
    """Split the Items into those with and those without media."""
    with_media: list[Item] = []
    without_media: list[Item] = []
    for i in items:
        if i.has_media:
            with_media.append(i)
        else:
            without_media.append(i)
    return with_media, without_media


def interleave(first: Sequence[Item], second: Sequence[Item], limit: int) -> list[Item]:
    """Take Items from first and second in turns, until limit Items are collected.

    Once one of the two runs dry, the rest is taken from the other.
    """
    res: list[Item] = []
    i: int = 0
    j: int = 0
    while len(res) < limit and (i < len(first) or j < len(second)):
        if i < len(first):
            res.append(first[i])
            i += 1
        if len(res) < limit and j < len(second):
            res.append(second[j])
            j += 1
    return res


def build_pool(batches: Iterable[Iterable[Optional[Item]]],
               preload_count: int,
               total_displayed: int) -> tuple[Item, ...]:
    """Turn the Items from all feeds into a pool.

    If balancing Items with and without media leaves us with too few to fill
    the display, we fall back to the plain sorted list.
    """
    ordered: Final[list[Item]] = sort_items(merge(batches))
    with_media, without_media = partition_media(ordered)
    balanced: Final[list[Item]] = interleave(with_media, without_media, preload_count)

    if len(balanced) <= total_displayed:
        return tuple(ordered[:preload_count])
    return tuple(balanced)


class Aggregator:
    """Aggregator owns the pool of Items."""

    __slots__ = [
        "log",
        "lock",
        "sources",
        "fetcher",
        "preload_count",
        "total_displayed",
        "_pool",
        "_loading",
    ]

    log: logging.Logger
    lock: Lock
    sources: tuple[FeedSource, ...]
    fetcher: Fetcher
    preload_count: int
    total_displayed: int
    _pool: tuple[Item, ...]
    _loading: bool

    def __init__(self,
                 sources: Iterable[FeedSource],
                 preload_count: int,
                 total_displayed: int,
                 fetcher: Optional[Fetcher] = None) -> None:
        self.log = common.get_logger("aggregator")
        self.lock = Lock()
        self.sources = tuple(sources)
        self.preload_count = preload_count
        self.total_displayed = total_displayed
        self.fetcher = fetcher if fetcher is not None else Fetcher(limit=2 * preload_count)
        self._pool = ()
        self._loading = True

    @property
    def pool(self) -> tuple[Item, ...]:
        """Return the current pool."""
        with self.lock:
            return self._pool

    @property
    def loading(self) -> bool:
        """Return True while the pool is being (re-)built."""
        with self.lock:
            return self._loading

    def load(self) -> tuple[Item, ...]:
        """Fetch all feeds, build a new pool, and return it."""
        with self.lock:
            self._loading = True

        results: list[list[Item]] = [[] for _ in self.sources]
        workers: list[Thread] = []

        for idx, src in enumerate(self.sources):
            w: Thread = Thread(name=f"Fetcher{idx+1:02d}",
                               target=self._fetch_one,
                               args=(src, results, idx),
                               daemon=True)
            w.start()
            workers.append(w)

        for w in workers:
            w.join()

        pool: Final[tuple[Item, ...]] = build_pool(results,
                                                   self.preload_count,
                                                   self.total_displayed)
        self.log.info("Loaded %d items from %d feeds, pool holds %d items.",
                      sum(len(r) for r in results),
                      len(self.sources),
                      len(pool))

        with self.lock:
            self._pool = pool
            self._loading = False
        return pool

    def _fetch_one(self, src: FeedSource, results: list[list[Item]], idx: int) -> None:
        results[idx] = self.fetcher.fetch(src)

# Local Variables: #
# python-indent: 4 #
# End: #
