# Licensed under the Apache License, Version 2.0
import logging
import os
import sys

LOG_LEVEL_ENV = "TREEAUDIT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging() -> None:
    """Timestamped diagnostics on stderr; stdout carries only report lines."""
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def apply_verbosity(verbose: bool = False, quiet: bool = False) -> None:
    """--verbose wins over --quiet; with neither, the environment level stays."""
    root = logging.getLogger()
    if verbose:
        root.setLevel(logging.DEBUG)
    elif quiet:
        root.setLevel(logging.ERROR)
