#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-20 18:09:44 krylon>
#
# /data/code/python/newswall/src/newswall/main.py
# created on 20. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the newswall news display. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
newswall.main

(c) 2026 Benjamin Walkenhorst
"""


import argparse
import json
import logging
import pathlib
import signal
import sys
from threading import Thread

from newswall import common, config
from newswall.config import Config, ConfigError
from newswall.wall import Wall
from newswall.web import WebUI


def main() -> None:
    """Run the newswall application."""
    argp: argparse.ArgumentParser = argparse.ArgumentParser()
    argp.add_argument("-b", "--basedir",
                      type=pathlib.Path,
                      default=common.path.base(),
                      help="The directory to store application-specific files in")
    argp.add_argument("-c", "--config",
                      type=pathlib.Path,
                      help="The configuration file (defaults to newswall.json in the basedir)")
    argp.add_argument("-a", "--address",
                      default="localhost",
                      help="The IP address(es) or hostname to listen on")
    argp.add_argument("-p", "--port",
                      type=int,
                      default=4107,
                      help="The port for the web interface to listen on")
    argp.add_argument("-o", "--once",
                      action="store_true",
                      help="Load the feeds once, print the display window as JSON, and exit")

    args = argp.parse_args()

    common.set_basedir(args.basedir)
    lg: logging.Logger = common.get_logger("main")

    try:
        cfg: Config = config.load(args.config)
    except ConfigError as err:
        lg.error("Cannot load configuration: %s", err)
        sys.exit(1)

    wall: Wall = Wall(cfg)

    if args.once:
        wall.reload()
        wall.rotator.stop()
        json.dump(wall.layout().as_dict(), sys.stdout, indent=2)
        print()
        return

    wall.start()

    srv = WebUI(wall, args.address, args.port)
    t = Thread(target=srv.run, daemon=True)
    t.start()

    try:
        signal.pause()
    except KeyboardInterrupt:
        print("Quitting now, bye!")

    wall.stop()

    print("So long, and thanks for all the fish.")


if __name__ == '__main__':
    main()


# Local Variables: #
# python-indent: 4 #
# End: #
