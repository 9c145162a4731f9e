"""Logging setup for Terminal Heist tools.

Log records go to stderr so command output on stdout stays machine-readable.
"""
import logging
import sys
from typing import Optional, TextIO


def configure_logging(debug: bool = False, stream: Optional[TextIO] = None) -> None:
    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s [%(levelname)5s] %(name)s: %(message)s"
    logging.basicConfig(level=level, format=fmt, stream=stream or sys.stderr)
