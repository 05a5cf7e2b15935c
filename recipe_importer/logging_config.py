"""
Logging setup for the import service and maintenance scripts.

Call `configure_logging()` once at startup, then log from each module with:

    import logging
    logger = logging.getLogger(__name__)

    logger.info("Fetched via proxy server", extra={"url": url})

Fields passed through ``extra`` are appended to the line as ``key=value``
pairs, so a failed import shows the URL it was working on.
"""

import logging
import sys

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class ExtraFieldsFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields after the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = {k: v for k, v in vars(record).items() if k not in _RESERVED_ATTRS}
        if not fields:
            return line

        suffix = " ".join(f"{key}={value!r}" for key, value in sorted(fields.items()))
        # Keep the traceback, if any, at the end
        head, sep, tail = line.partition("\n")
        return f"{head} {suffix}{sep}{tail}"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stdout handler on the root logger."""
    fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt = "%Y-%m-%dT%H:%M:%S"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ExtraFieldsFormatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # Replace rather than stack handlers when called more than once
    root.handlers = [handler]

    # Page fetches and the dev server are chatty at INFO
    for name in ("urllib3", "requests", "werkzeug", "bs4"):
        logging.getLogger(name).setLevel(logging.WARNING)
