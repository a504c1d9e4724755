#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 18:31:55 krylon>
#
# /data/code/python/newswall/src/newswall/fetcher.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.fetcher

(c) 2026 Benjamin Walkenhorst

Fetcher downloads a single feed and hands it to the normalizer.
"""


import logging
from collections.abc import Callable
from threading import Lock
from typing import Final, Optional, Union

import requests
from bs4 import BeautifulSoup

from newswall import common
from newswall.model import FeedSource, Item
from newswall.normalizer import normalize, qname

Transport = Callable[[str, float], Union[str, bytes]]

feed_roots: Final[frozenset[str]] = frozenset(("rss", "feed", "rdf:RDF"))
user_agent: Final[str] = f"{common.AppName}/{common.AppVersion}"


class SourceFetchError(common.NewswallError):
    """Downloading or parsing a feed failed."""

    def __init__(self, source: str, msg: str) -> None:
        super().__init__(f"{source}: {msg}")
        self.source = source


def http_get(url: str, timeout: float) -> bytes:
    """Download the document at url. Give up after timeout seconds."""
    res = requests.get(url,
                       timeout=timeout,
                       headers={
                           "User-Agent": user_agent,
                           "Accept": "application/rss+xml, application/atom+xml, text/xml;q=0.9, */*;q=0.5",
                       })
    res.raise_for_status()
    return res.content


def parse_document(raw: Union[str, bytes], source: str = "") -> BeautifulSoup:
    """Parse raw XML into a document tree. Raise SourceFetchError if it is not a feed."""
    doc: Final[BeautifulSoup] = BeautifulSoup(raw, "xml")
    root = doc.find(True)
    if root is None:
        raise SourceFetchError(source, "Document is empty or not XML")
    if qname(root) not in feed_roots:
        raise SourceFetchError(source, f"Document is not a feed, root element is <{qname(root)}>")
    return doc


class Fetcher:
    """Fetcher downloads RSS/Atom feeds and turns them into Items.

    A Fetcher never raises: if anything goes wrong, the error is logged and
    remembered, and the feed yields no Items.
    """

    __slots__ = [
        "log",
        "lock",
        "transport",
        "timeout",
        "limit",
        "_failures",
    ]

    log: logging.Logger
    lock: Lock
    transport: Transport
    timeout: float
    limit: int
    _failures: dict[str, SourceFetchError]

    def __init__(self,
                 timeout: float = 15.0,
                 limit: int = 0,
                 transport: Optional[Transport] = None) -> None:
        self.log = common.get_logger("fetcher")
        self.lock = Lock()
        self.transport = transport if transport is not None else http_get
        self.timeout = timeout
        self.limit = limit
        self._failures = {}

    @property
    def failures(self) -> dict[str, SourceFetchError]:
        """Return the most recent error for each feed whose last fetch failed."""
        with self.lock:
            return dict(self._failures)

    def fetch(self, src: FeedSource) -> list[Item]:
        """Fetch a feed and return its Items."""
        self.log.debug("Fetch %s (%s)", src.name, src.url)
        try:
            raw = self._download(src)
            doc = parse_document(raw, src.name)
            items: list[Item] = normalize(doc, src.name, self.limit)
        except SourceFetchError as err:
            self._record(err)
            return []
        except Exception as err:  # pylint: disable-msg=W0718
            cname: Final[str] = err.__class__.__name__
            self._record(SourceFetchError(src.name, f"{cname}: {err}"))
            return []

        with self.lock:
            self._failures.pop(src.name, None)
        self.log.debug("Got %d items from %s", len(items), src.name)
        return items

    def _download(self, src: FeedSource) -> Union[str, bytes]:
        try:
            return self.transport(src.url, self.timeout)
        except requests.RequestException as err:
            cname: Final[str] = err.__class__.__name__
            raise SourceFetchError(src.name, f"{cname} fetching {src.url}: {err}") from err

    def _record(self, err: SourceFetchError) -> None:
        self.log.error("Failed to fetch feed %s", err)
        with self.lock:
            self._failures[err.source] = err

# Local Variables: #
# python-indent: 4 #
# End: #
