#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 16:20:41 krylon>
#
# /data/code/python/newswall/src/newswall/model.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.model

(c) 2026 Benjamin Walkenhorst
"""


from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Final, Optional

from bs4 import BeautifulSoup

from newswall import common


@dataclass(kw_only=True, slots=True, frozen=True)
class FeedSource:
    """FeedSource is an RSS/Atom feed we get our news from."""

    name: str
    url: str


@dataclass(kw_only=True, slots=True, frozen=True)
class Item:
    """Item is a news item from an RSS feed, normalized."""

    title: str
    link: str
    description: str = ""
    media_url: Optional[str] = None
    source_name: str
    published: datetime

    @property
    def complete(self) -> bool:
        """Return True if the Item carries a title and a link."""
        return self.title != "" and self.link != ""

    @property
    def has_media(self) -> bool:
        """Return True if the Item has an image or some other media attached."""
        return bool(self.media_url)

    @property
    def is_placeholder(self) -> bool:
        """Return True if the Item is the stand-in used to fill empty slots."""
        return self is Placeholder or \
            (self.link == Placeholder.link and self.source_name == Placeholder.source_name)

    @property
    def stamp_str(self) -> str:
        """Return the Item's timestamp as a properly formatted string."""
        return self.published.strftime(common.TimeFmt)

    @property
    def plain_description(self) -> str:
        """Return a copy of the Item's description stripped of all HTML elements."""
        if self.description == "":
            return ""
        soup = BeautifulSoup(self.description, "html.parser")
        plain: Final[str] = " ".join(soup.get_text().split())
        return plain

    def as_dict(self) -> dict[str, Any]:
        """Return the Item as a dict suitable for serializing to JSON."""
        return {
            "title": self.title,
            "link": self.link,
            "description": self.plain_description,
            "media_url": self.media_url,
            "source": self.source_name,
            "published": self.published.isoformat(),
        }


Placeholder: Final[Item] = Item(
    title="updating",
    link="#",
    source_name="system",
    published=datetime.fromtimestamp(0, tz=timezone.utc),
)


class Phase(IntEnum):
    """Phase is the stage the rotation of the display window is in."""

    Idle = 0
    Displaying = 1
    Fading = 2

    @property
    def string(self) -> str:
        """Return the lowercase name of the Phase."""
        return self.name.lower()


@dataclass(kw_only=True, slots=True, frozen=True)
class RotationState:
    """A snapshot of where the rotation currently stands."""

    offset: int = 0
    phase: Phase = Phase.Idle


@dataclass(kw_only=True, slots=True, frozen=True)
class Region:
    """Region is a named area of the layout that holds a fixed number of Items."""

    name: str
    size: int


@dataclass(kw_only=True, slots=True, frozen=True)
class Slot:
    """Slot is one Item placed at a specific position in the display window."""

    key: str
    position: int
    item: Item


@dataclass(kw_only=True, slots=True)
class Layout:
    """Layout is the display window, split up into its regions."""

    offset: int = 0
    phase: Phase = Phase.Idle
    regions: dict[str, tuple[Slot, ...]] = field(default_factory=dict)

    @property
    def slots(self) -> list[Slot]:
        """Return all Slots in layout order."""
        return [s for r in self.regions.values() for s in r]

    def as_dict(self) -> dict[str, Any]:
        """Return the Layout as a dict suitable for serializing to JSON."""
        return {
            "offset": self.offset,
            "phase": self.phase.string,
            "regions": {
                name: [{"key": s.key, "position": s.position} | s.item.as_dict()
                       for s in slots]
                for name, slots in self.regions.items()
            },
        }

# Local Variables: #
# python-indent: 4 #
# End: #
