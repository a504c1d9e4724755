#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-20 16:41:12 krylon>
#
# /data/code/python/newswall/src/newswall/web.py
# created on 20. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.web

(c) 2026 Benjamin Walkenhorst

Hand the current display window to whoever draws it, as JSON.
"""


import json
import logging
import traceback
from datetime import datetime
from typing import Any, Final

import bottle
from bottle import Bottle, response

from newswall import common
from newswall.wall import Wall


class WebUI:
    """Present the Wall's contents to the renderer."""

    __slots__ = [
        "log",
        "wall",
        "host",
        "port",
        "app",
    ]

    log: logging.Logger
    wall: Wall
    host: str
    port: int
    app: Bottle

    def __init__(self,
                 wall: Wall,
                 host: str = "localhost",
                 port: int = 4107) -> None:
        self.log = common.get_logger("web")

        self.log.info("Web interface is coming up...")

        self.wall = wall
        self.host = host
        self.port = port

        bottle.debug(common.Debug)
        self.app = Bottle()
        self.app.route("/window", callback=self._handle_window)
        self.app.route("/status", callback=self._handle_status)

    def run(self) -> None:
        """Run the web server."""
        self.app.run(host=self.host, port=self.port, debug=common.Debug, quiet=not common.Debug)

    def window_data(self) -> dict[str, Any]:
        """Return the current layout, wrapped up for the client."""
        res: dict[str, Any] = {
            "status": False,
            "message": "",
            "timestamp": datetime.now().strftime(common.TimeFmt),
        }
        try:
            res["payload"] = self.wall.layout().as_dict()
            res["status"] = True
            res["message"] = "ACK"
        except Exception as err:  # pylint: disable-msg=W0718
            cname: Final[str] = err.__class__.__name__
            tb: Final[str] = "\n".join(traceback.format_exception(err))
            msg = f"{cname} while computing the layout: {err}\n{tb}"
            self.log.error(msg)
            res["message"] = msg
        return res

    def _handle_window(self) -> str:
        """Return the current display window."""
        res: Final[dict[str, Any]] = self.window_data()
        response.set_header("Cache-Control", "no-store, max-age=0")
        response.set_header("Content-Type", "application/json")
        return json.dumps(res)

    def _handle_status(self) -> str:
        """Return some information on the state of the Wall."""
        res: Final[dict[str, Any]] = self.wall.status()
        response.set_header("Cache-Control", "no-store, max-age=0")
        response.set_header("Content-Type", "application/json")
        return json.dumps(res)

# Local Variables: #
# python-indent: 4 #
# End: #
