"""Process-wide logging setup used by the CLI."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the root logger at ``level``."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
