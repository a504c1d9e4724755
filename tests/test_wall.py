#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-22 13:44:19 krylon>
#
# /data/code/python/newswall/tests/test_wall.py
# created on 22. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.test_wall

(c) 2026 Benjamin Walkenhorst
"""

import email.utils
import json
import os
import shutil
import time
import unittest
from datetime import datetime, timedelta, timezone
from threading import Event, Thread
from typing import Any, Final, Optional

import requests

from newswall import common
from newswall.config import Config
from newswall.fetcher import Fetcher
from newswall.model import FeedSource, Layout, Phase, Region
from newswall.wall import Wall
from newswall.web import WebUI

test_dir: Final[str] = os.path.join(
    "/tmp",
    datetime.now().strftime(f"{common.AppName.lower()}_test_wall_%Y%m%d_%H%M%S"))

epoch: Final[datetime] = datetime(2026, 10, 1, tzinfo=timezone.utc)


def mkfeed(prefix: str, times: list[int], media: bool = False) -> bytes:
    """Create an RSS document with one item per timestamp (in hours after the epoch)."""
    items: list[str] = []
    for t in times:
        stamp = email.utils.format_datetime(epoch + timedelta(hours=t))
        enc = f'<enclosure url="https://img.example.com/{prefix}{t}.jpg"/>' if media else ""
        items.append(f"<item><title>{prefix}{t}</title>"
                     f"<link>https://example.com/{prefix}{t}</link>"
                     f"<pubDate>{stamp}</pubDate>{enc}</item>")
    return ('<rss version="2.0"><channel>' + "".join(items) + "</channel></rss>").encode()


class TestWall(unittest.TestCase):
    """Test the Wall as a whole."""

    @classmethod
    def setUpClass(cls) -> None:
        """Prepare the testing environment."""
        common.set_basedir(test_dir)

    @classmethod
    def tearDownClass(cls) -> None:
        """Clean up afterwards."""
        shutil.rmtree(test_dir, ignore_errors=True)

    def _wall(self, docs: dict[str, Optional[bytes]], sizes: tuple[int, ...]) -> Wall:
        def transport(url: str, _timeout: float) -> bytes:
            doc = docs[url]
            if doc is None:
                raise requests.ConnectionError(f"Cannot reach {url}")
            return doc

        cfg: Final[Config] = Config(
            sources=[FeedSource(name=url.split("/")[2], url=url) for url in docs],
            regions=[Region(name=n, size=s) for n, s in zip("abcd", sizes)],
            refresh_interval=0,
        )
        cfg.validate()
        fetcher: Final[Fetcher] = Fetcher(timeout=1, limit=2 * cfg.preload_count, transport=transport)
        return Wall(cfg, fetcher)

    def test_01_end_to_end(self) -> None:
        """Test loading two feeds and rotating through them."""
        wall: Final[Wall] = self._wall({
            "https://a.example.com/rss": mkfeed("t", [5, 3, 1]),
            "https://b.example.com/rss": mkfeed("t", [4, 2]),
        }, (1, 1, 1, 1))
        # With four regions of one each, five items are too few to rotate.
        try:
            wall.start()
            layout: Layout = wall.layout()
            self.assertEqual([s.item.title for s in layout.slots], ["t5", "t4", "t3", "t2"])
            self.assertEqual(layout.phase, Phase.Idle)
            self.assertFalse(wall.rotator.tick())
        finally:
            wall.stop()

    def test_02_rotate(self) -> None:
        """Test that the layout follows the rotation."""
        wall: Final[Wall] = self._wall({
            "https://a.example.com/rss": mkfeed("a", list(range(10))),
            "https://b.example.com/rss": mkfeed("b", list(range(10)), True),
        }, (1, 1, 1, 1))
        try:
            wall.start()
            first: Final[Layout] = wall.layout()
            self.assertEqual(first.phase, Phase.Displaying)
            # Items with and without images take turns.
            self.assertEqual([s.item.title for s in first.slots], ["b9", "a9", "b8", "a8"])

            self.assertTrue(wall.rotator.tick())
            second: Final[Layout] = wall.layout()
            self.assertEqual(second.offset, 4)
            self.assertEqual([s.item.title for s in second.slots], ["b7", "a7", "b6", "a6"])

            wall.reload()
            self.assertEqual(wall.layout().offset, 0)
        finally:
            wall.stop()

    def test_03_all_down(self) -> None:
        """Test that with every feed down we show placeholders and nothing breaks."""
        wall: Final[Wall] = self._wall({
            f"https://dead{i}.example.com/rss": None for i in range(3)
        }, (2, 1, 2, 3))
        try:
            wall.start()
            layout: Final[Layout] = wall.layout()
            self.assertEqual(len(layout.slots), 8)
            self.assertTrue(all(s.item.is_placeholder for s in layout.slots))

            status: Final[dict[str, Any]] = wall.status()
            self.assertEqual(status["pool"], 0)
            self.assertFalse(status["loading"])
            self.assertEqual(status["phase"], "idle")
            self.assertEqual(len(status["failed"]), 3)
        finally:
            wall.stop()

    def test_04_web(self) -> None:
        """Test the data the web interface hands out."""
        wall: Final[Wall] = self._wall({
            "https://a.example.com/rss": mkfeed("a", list(range(6))),
        }, (1, 1, 1, 1))
        try:
            wall.start()
            ui: Final[WebUI] = WebUI(wall)
            res: Final[dict[str, Any]] = ui.window_data()
            self.assertTrue(res["status"])
            payload = res["payload"]
            self.assertEqual(list(payload["regions"]), ["a", "b", "c", "d"])
            self.assertEqual(payload["regions"]["a"][0]["title"], "a5")
            self.assertEqual(payload["regions"]["a"][0]["key"], "0:https://example.com/a5")
            # Must survive the trip to JSON.
            self.assertIsInstance(json.dumps(res), str)
        finally:
            wall.stop()

    def test_05_stop_while_reloading(self) -> None:
        """Test that a Wall stopped in the middle of a reload stays stopped."""
        docs: Final[dict[str, bytes]] = {
            "https://a.example.com/rss": mkfeed("a", list(range(10))),
            "https://b.example.com/rss": mkfeed("b", list(range(10))),
        }
        slow: Final[Event] = Event()
        entered: Final[Event] = Event()
        gate: Final[Event] = Event()

        def transport(url: str, _timeout: float) -> bytes:
            if slow.is_set():
                entered.set()
                gate.wait(5)
            return docs[url]

        cfg: Final[Config] = Config(
            sources=[FeedSource(name=url.split("/")[2], url=url) for url in docs],
            regions=[Region(name=n, size=1) for n in "abcd"],
            refresh_interval=0.2,
        )
        cfg.validate()
        wall: Final[Wall] = Wall(cfg, Fetcher(timeout=1, transport=transport))
        stopper: Final[Thread] = Thread(name="Stopper", target=wall.stop, daemon=True)

        try:
            wall.start()
            slow.set()
            self.assertEqual(wall.rotator.state.phase, Phase.Displaying)

            # The Reloader is now stuck in the middle of a download.
            self.assertTrue(entered.wait(5))
            stopper.start()
            deadline: Final[float] = time.monotonic() + 5
            while wall.active and time.monotonic() < deadline:
                time.sleep(0.01)
            self.assertFalse(wall.active)

            gate.set()
            stopper.join(5)
            self.assertFalse(stopper.is_alive())
            self.assertEqual(wall.rotator.state.phase, Phase.Idle)
            self.assertFalse(wall.rotator.tick())
        finally:
            gate.set()
            if not stopper.is_alive():
                wall.stop()


# Local Variables: #
# python-indent: 4 #
# End: #
