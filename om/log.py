"""Package logger for om."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("om")


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr through rich.

    INFO and above when *verbose*, WARNING and above otherwise.  Safe to call
    more than once: the previous handler is replaced.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO if verbose else logging.WARNING)
    logger.propagate = False
