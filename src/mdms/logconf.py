"""Logging setup for command-line runs"""

import logging
import sys


LOG_FORMAT = "%(asctime)s | %(levelname)-5s | %(module)s | %(message)s"


def init(level: str = "WARNING") -> None:
    """Configure root logger once per run."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
