#!/usr/bin/env python3
"""
codeserve - serve a directory, highlighting source files in the browser

Usage:
    python run.py                             # ./ on port 3000
    python run.py -dir ./src -port 9001
    python run.py -disable-cache=true -open=false
"""

import logging
import sys

from app import create_app
from serving.config import parse_args
from serving.supervisor import serve


def configure_logging(level=logging.INFO):
    logging.basicConfig(
        level=level,
        format='[%(asctime)s] %(levelname)s %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )


def main(argv=None):
    configure_logging()
    config = parse_args(argv)
    return serve(config, create_app(config))


if __name__ == "__main__":
    sys.exit(main())
