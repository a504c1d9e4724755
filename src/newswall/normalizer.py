#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 17:48:03 krylon>
#
# /data/code/python/newswall/src/newswall/normalizer.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.normalizer

(c) 2026 Benjamin Walkenhorst

Turn the entries of a parsed RSS or Atom document into Items.

RSS and Atom disagree on what most things are called, so for every field of
an Item we look at a short list of candidate elements. Entries that lack a
title, a link or a usable timestamp are dropped.
"""


import email.utils
import logging
from collections.abc import Iterable, Iterator
from datetime import datetime, timezone
from typing import Final, Optional

from bs4 import BeautifulSoup, Tag

from newswall import common
from newswall.model import Item

entry_names: Final[tuple[str, ...]] = ("item", "entry")
date_names: Final[tuple[str, ...]] = ("pubDate", "updated", "published", "dc:date")

# Feeds may bind these namespaces to any prefix they like, so elements from
# them are named by this table instead. None means no prefix.
namespaces: Final[dict[str, Optional[str]]] = {
    "http://www.w3.org/2005/Atom": None,
    "http://purl.org/atom/ns#": None,
    "http://purl.org/rss/1.0/": None,
    "http://search.yahoo.com/mrss/": "media",
    "http://search.yahoo.com/mrss": "media",
    "http://purl.org/dc/elements/1.1/": "dc",
    "http://www.w3.org/1999/02/22-rdf-syntax-ns#": "rdf",
    "http://purl.org/rss/1.0/modules/content/": "content",
}


class ItemValidationError(common.NewswallError):
    """An entry lacks one of the fields an Item cannot do without."""


class DateParseError(common.NewswallError):
    """A timestamp could not be made sense of."""


def qname(tag: Tag) -> str:
    """Return the name of the element including its namespace prefix, if any.

    For the namespaces we know, the prefix comes from the namespace URI, not
    from the document, so <a:feed xmlns:a="http://www.w3.org/2005/Atom"> is
    just "feed". Elements from other namespaces keep the document's prefix.
    """
    name: Final[str] = tag.name.split(":")[-1]
    prefix: Optional[str] = tag.prefix or None
    if tag.namespace in namespaces:
        prefix = namespaces[tag.namespace]
    elif ":" in tag.name:
        return tag.name
    if prefix is None:
        return name
    return f"{prefix}:{name}"


def elements(node: Tag, names: Iterable[str]) -> Iterator[Tag]:
    """Yield all elements below node whose qualified name is one of names, in document order.

    Unprefixed names only match unprefixed elements, so looking for "title"
    will not turn up a media:title.
    """
    wanted: Final[frozenset[str]] = frozenset(names)
    for tag in node.find_all(True):
        if qname(tag) in wanted:
            yield tag


def first(node: Tag, *names: str) -> Optional[Tag]:
    """Return the first element below node matching one of names, or None."""
    for tag in elements(node, names):
        return tag
    return None


def text_of(node: Tag, *names: str) -> str:
    """Return the text of the first non-empty element called like one of names.

    The names are tried in order, so text_of(x, "a", "b") only looks at b
    if there is no a with any text in it.
    """
    for name in names:
        for tag in elements(node, (name, )):
            txt = tag.get_text().strip()
            if txt != "":
                return txt
    return ""


def parse_date(raw: str) -> datetime:
    """Parse an RFC 822 or ISO 8601 timestamp and return it in UTC."""
    txt: Final[str] = raw.strip()
    if txt == "":
        raise DateParseError("Timestamp is empty")

    try:
        stamp: datetime = email.utils.parsedate_to_datetime(txt)
    except (TypeError, ValueError, IndexError):
        try:
            return common.parse_iso_date(txt)
        except ValueError as err:
            raise DateParseError(f"Cannot parse timestamp '{txt}'") from err

    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp.astimezone(timezone.utc)


def entry_link(entry: Tag) -> str:
    """Find the link of an entry.

    Atom puts it in the href attribute, RSS in the element text. If neither
    yields anything, the guid or id serve as a stand-in.
    """
    links: Final[list[Tag]] = list(elements(entry, ("link", )))
    with_href: Final[list[Tag]] = [x for x in links if x.get("href")]

    for link in with_href:
        if link.get("rel", "alternate") == "alternate":
            return str(link["href"]).strip()
    if len(with_href) > 0:
        return str(with_href[0]["href"]).strip()

    return text_of(entry, "link", "guid", "id")


def media_url(entry: Tag) -> Optional[str]:
    """Find the URL of an image or other media attached to the entry."""
    for enc in elements(entry, ("enclosure", )):
        if enc.get("url"):
            return str(enc["url"])

    for mc in elements(entry, ("media:content", "content")):
        url = mc.get("url") or mc.get("src")
        if url:
            return str(url)

    for link in elements(entry, ("link", )):
        if not link.get("href"):
            continue
        if link.get("rel") == "enclosure" or str(link.get("type", "")).startswith("image"):
            return str(link["href"])

    for thumb in elements(entry, ("media:thumbnail", )):
        if thumb.get("url"):
            return str(thumb["url"])

    return None


def normalize_entry(entry: Tag, source_name: str) -> Item:
    """Turn a single RSS item or Atom entry into an Item."""
    title: Final[str] = text_of(entry, "title")
    if title == "":
        raise ItemValidationError("Entry has no title")

    link: Final[str] = entry_link(entry)
    if link == "":
        raise ItemValidationError(f"Entry '{title}' has no link")

    stamp: str = ""
    for name in date_names:
        stamp = text_of(entry, name)
        if stamp != "":
            break
    else:
        raise DateParseError(f"Entry '{title}' carries no timestamp")

    return Item(
        title=title,
        link=link,
        description=text_of(entry, "description", "summary", "content"),
        media_url=media_url(entry),
        source_name=source_name,
        published=parse_date(stamp),
    )


def normalize(doc: BeautifulSoup, source_name: str, limit: int = 0) -> list[Item]:
    """Return the Items found in a parsed feed document.

    At most limit Items are returned, unless limit is zero or less.
    """
    log: Final[logging.Logger] = common.get_logger("normalizer")
    items: list[Item] = []
    dropped: int = 0

    for entry in elements(doc, entry_names):
        if 0 < limit <= len(items):
            log.debug("Reached limit of %d items for %s, ignoring the rest.",
                      limit,
                      source_name)
            break
        try:
            items.append(normalize_entry(entry, source_name))
        except ItemValidationError as err:
            dropped += 1
            log.debug("Dropping incomplete entry from %s: %s", source_name, err)
        except DateParseError as err:
            dropped += 1
            log.debug("Dropping entry from %s with bad timestamp: %s", source_name, err)

    log.debug("Got %d items from %s, dropped %d.", len(items), source_name, dropped)
    return items

# Local Variables: #
# python-indent: 4 #
# End: #
