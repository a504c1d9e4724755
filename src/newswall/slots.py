#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-20 10:03:22 krylon>
#
# /data/code/python/newswall/src/newswall/slots.py
# created on 20. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.slots

(c) 2026 Benjamin Walkenhorst
"""


from collections.abc import Iterable, Sequence
from typing import Final

from newswall.model import Item, Layout, Phase, Placeholder, Region, Slot


class SlotAllocator:
    """SlotAllocator cuts the display window out of the pool and distributes it across the Regions."""

    __slots__ = ["regions"]

    regions: tuple[Region, ...]

    def __init__(self, regions: Iterable[Region]) -> None:
        self.regions = tuple(regions)
        if len(self.regions) == 0:
            raise ValueError("SlotAllocator needs at least one Region")
        for r in self.regions:
            if r.size <= 0:
                raise ValueError(f"Region {r.name} has invalid size {r.size}")

    @property
    def total(self) -> int:
        """Return the number of Items displayed at once."""
        return sum(r.size for r in self.regions)

    def window(self, pool: Sequence[Item], offset: int) -> list[Item]:
        """Return the Items to display, starting at offset.

        If the pool holds enough Items, the window wraps around to the
        beginning. Otherwise each Item is shown once and the rest is padded
        with placeholders.
        """
        total: Final[int] = self.total
        if len(pool) == 0:
            return [Placeholder] * total

        start: Final[int] = offset % len(pool)
        if len(pool) < total:
            items = list(pool[start:]) + list(pool[:start])
            return items + [Placeholder] * (total - len(items))

        return [pool[(start + i) % len(pool)] for i in range(total)]

    def allocate(self,
                 pool: Sequence[Item],
                 offset: int,
                 phase: Phase = Phase.Idle) -> Layout:
        """Split the display window into the Regions."""
        items: Final[list[Item]] = self.window(pool, offset)
        layout: Layout = Layout(offset=offset, phase=phase)
        pos: int = 0

        for r in self.regions:
            layout.regions[r.name] = tuple(
                Slot(key=f"{pos+i}:{item.link}", position=pos+i, item=item)
                for i, item in enumerate(items[pos:pos+r.size]))
            pos += r.size

        return layout

# Local Variables: #
# python-indent: 4 #
# End: #
