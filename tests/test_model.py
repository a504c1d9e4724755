#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-22 15:20:03 krylon>
#
# /data/code/python/newswall/tests/test_model.py
# created on 22. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.test_model

(c) 2026 Benjamin Walkenhorst
"""

import unittest
from dataclasses import FrozenInstanceError, dataclass
from datetime import datetime, timezone
from typing import Final

from newswall.model import Item, Layout, Phase, Placeholder, Slot


@dataclass(slots=True)
class DescTestCase:
    """A test case for stripping HTML from descriptions."""

    raw: str
    plain: str


class TestItem(unittest.TestCase):
    """Test the Item class."""

    def test_plain_description(self) -> None:
        """Test getting the description without markup."""
        cases: Final[list[DescTestCase]] = [
            DescTestCase("", ""),
            DescTestCase("Just text", "Just text"),
            DescTestCase("<p>Some <b>bold</b>\n  words</p>", "Some bold words"),
            DescTestCase("<img src='x.jpg'/>Caption", "Caption"),
        ]

        for i, c in enumerate(cases):
            with self.subTest(i=i):
                item = Item(title="x",
                            link="https://example.com/",
                            description=c.raw,
                            source_name="test",
                            published=datetime.now(timezone.utc))
                self.assertEqual(item.plain_description, c.plain)

    def test_media(self) -> None:
        """Test has_media."""
        now: Final[datetime] = datetime.now(timezone.utc)
        with_img = Item(title="a", link="l", media_url="https://example.com/a.jpg",
                        source_name="s", published=now)
        without = Item(title="b", link="l", source_name="s", published=now)
        empty = Item(title="c", link="l", media_url="", source_name="s", published=now)
        self.assertTrue(with_img.has_media)
        self.assertFalse(without.has_media)
        self.assertFalse(empty.has_media)

    def test_immutable(self) -> None:
        """Test that Items cannot be modified."""
        item = Item(title="a", link="l", source_name="s", published=datetime.now(timezone.utc))
        with self.assertRaises(FrozenInstanceError):
            item.title = "b"  # type: ignore

    def test_placeholder(self) -> None:
        """Test the placeholder Item."""
        self.assertTrue(Placeholder.is_placeholder)
        self.assertEqual(Placeholder.title, "updating")
        self.assertEqual(Placeholder.link, "#")
        self.assertEqual(Placeholder.source_name, "system")
        self.assertFalse(Placeholder.has_media)


class TestLayout(unittest.TestCase):
    """Test the Layout."""

    def test_as_dict(self) -> None:
        """Test turning a Layout into a dict."""
        item = Item(title="Headline",
                    link="https://example.com/1",
                    description="<i>Body</i>",
                    source_name="Example",
                    published=datetime(2026, 10, 22, 12, 0, tzinfo=timezone.utc))
        layout = Layout(offset=4,
                        phase=Phase.Fading,
                        regions={"top": (Slot(key="0:x", position=0, item=item), ),
                                 "bottom": (Slot(key="1:#", position=1, item=Placeholder), )})
        d = layout.as_dict()
        self.assertEqual(d["offset"], 4)
        self.assertEqual(d["phase"], "fading")
        self.assertEqual(list(d["regions"]), ["top", "bottom"])
        top = d["regions"]["top"][0]
        self.assertEqual(top["title"], "Headline")
        self.assertEqual(top["description"], "Body")
        self.assertEqual(top["source"], "Example")
        self.assertEqual(top["published"], "2026-10-22T12:00:00+00:00")
        self.assertEqual(top["key"], "0:x")
        self.assertEqual(d["regions"]["bottom"][0]["link"], "#")


# Local Variables: #
# python-indent: 4 #
# End: #
