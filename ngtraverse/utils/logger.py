import logging
import os
from contextlib import contextmanager

_LOGGER_NAME = "ngtraverse"


def get_logger(name=None):
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(verbose=None):
    if verbose is None:
        verbose = os.environ.get("NGTRAVERSE_DEBUG", "").lower() in ("true", "1", "yes")
    level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        if not isinstance(handler, DiagnosticCollector):
            logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[ngtraverse] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)
    return logger


class DiagnosticCollector(logging.Handler):
    """Keeps every WARNING-or-above record emitted during extraction."""

    def __init__(self, level=logging.WARNING):
        super().__init__(level)
        self.records = []

    def emit(self, record):
        self.records.append(record)

    @property
    def messages(self):
        return [record.getMessage() for record in self.records]


@contextmanager
def collect_diagnostics():
    logger = logging.getLogger(_LOGGER_NAME)
    collector = DiagnosticCollector()
    logger.addHandler(collector)
    try:
        yield collector
    finally:
        logger.removeHandler(collector)
