#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-20 11:37:09 krylon>
#
# /data/code/python/newswall/src/newswall/config.py
# created on 20. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.config

(c) 2026 Benjamin Walkenhorst

The configuration lives in a JSON file. Every key is optional, anything left
out is taken from the defaults below.
"""


import json
import pathlib
from dataclasses import dataclass, field
from typing import Any, Final, Optional, Union

from newswall import common
from newswall.model import FeedSource, Region

region_count: Final[int] = 4

default_sources: Final[list[FeedSource]] = [
    FeedSource(name="ANSA", url="https://www.ansa.it/sito/notizie/topnews/topnews_rss.xml"),
    FeedSource(name="BBC World", url="http://feeds.bbci.co.uk/news/world/rss.xml"),
]

default_regions: Final[list[Region]] = [
    Region(name="bottom_left", size=6),
    Region(name="top_right", size=1),
    Region(name="middle_right", size=6),
    Region(name="bottom_right", size=9),
]


class ConfigError(common.NewswallError):
    """The configuration is broken."""


@dataclass(kw_only=True, slots=True)
class Config:
    """Config holds the feeds to read and the knobs to tune the display."""

    sources: list[FeedSource] = field(default_factory=lambda: list(default_sources))
    regions: list[Region] = field(default_factory=lambda: list(default_regions))
    preload_factor: int = 5
    rotation_interval: float = 120.0  # seconds
    transition_delay: float = 0.5  # seconds
    refresh_interval: float = 1800.0  # seconds, 0 means never
    fetch_timeout: float = 15.0  # seconds

    @property
    def total_displayed(self) -> int:
        """Return the number of Items shown at once."""
        return sum(r.size for r in self.regions)

    @property
    def preload_count(self) -> int:
        """Return the maximum size of the pool."""
        return self.total_displayed * self.preload_factor

    def validate(self) -> None:
        """Raise a ConfigError if the configuration makes no sense."""
        if len(self.sources) == 0:
            raise ConfigError("No feeds are configured")
        for src in self.sources:
            if src.name == "" or src.url == "":
                raise ConfigError(f"Feed needs a name and a URL: {src}")
        if len(self.regions) != region_count:
            raise ConfigError(f"Layout needs {region_count} regions, not {len(self.regions)}")
        names: Final[set[str]] = {r.name for r in self.regions}
        if len(names) != len(self.regions):
            raise ConfigError("Region names must be unique")
        for r in self.regions:
            if r.size <= 0:
                raise ConfigError(f"Region {r.name} has invalid size {r.size}")
        if self.preload_factor < 1:
            raise ConfigError(f"preload_factor must be at least 1, not {self.preload_factor}")
        if self.rotation_interval <= 0:
            raise ConfigError("rotation_interval must be positive")
        if not 0 <= self.transition_delay < self.rotation_interval:
            raise ConfigError("transition_delay must be shorter than rotation_interval")
        if self.refresh_interval < 0:
            raise ConfigError("refresh_interval must not be negative")
        if self.fetch_timeout <= 0:
            raise ConfigError("fetch_timeout must be positive")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Config':
        """Create a Config from a dict, as read from a JSON file."""
        cfg: Config = cls()
        try:
            if "sources" in data:
                cfg.sources = [FeedSource(name=str(s["name"]), url=str(s["url"]))
                               for s in data["sources"]]
            if "regions" in data:
                cfg.regions = [Region(name=str(r["name"]), size=int(r["size"]))
                               for r in data["regions"]]
            if "preload_factor" in data:
                cfg.preload_factor = int(data["preload_factor"])
            for key in ("rotation_interval",
                        "transition_delay",
                        "refresh_interval",
                        "fetch_timeout"):
                if key in data:
                    setattr(cfg, key, float(data[key]))
        except (KeyError, TypeError, ValueError) as err:
            cname: Final[str] = err.__class__.__name__
            raise ConfigError(f"Invalid configuration: {cname} {err}") from err

        cfg.validate()
        return cfg


def load(path: Optional[Union[str, pathlib.Path]] = None) -> Config:
    """Load the configuration file.

    If no path is given, we look in the base directory. If that file does not
    exist, the defaults are used.
    """
    explicit: Final[bool] = path is not None
    cfg_path: Final[pathlib.Path] = pathlib.Path(path) if path is not None else common.path.config

    if not cfg_path.exists():
        if explicit:
            raise ConfigError(f"Configuration file {cfg_path} does not exist")
        cfg = Config()
        cfg.validate()
        return cfg

    try:
        with open(cfg_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as err:
        cname: Final[str] = err.__class__.__name__
        raise ConfigError(f"Cannot read {cfg_path}: {cname} {err}") from err

    if not isinstance(data, dict):
        raise ConfigError(f"{cfg_path} must contain a JSON object")

    return Config.from_dict(data)

# Local Variables: #
# python-indent: 4 #
# End: #
