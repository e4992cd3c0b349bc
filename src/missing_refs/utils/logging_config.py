"""Logging setup - everything goes to stderr so stdout stays clean for reports and MCP stdio."""

import logging
import sys


def setup_logging(verbose: bool = False, debug: bool = False):
    """
    Setup logging to stderr.

    ERROR only by default (MCP), INFO with verbose, DEBUG with debug, which
    also logs one line per finding.
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr, force=True)
