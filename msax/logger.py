import logging
import sys


class CustomFormatter(logging.Formatter):
    grey = "\x1b[38;20m"
    yellow = "\x1b[33;20m"
    reset = "\x1b[0m"
    _format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    FORMATS = {
        logging.DEBUG: grey + _format + reset,
        logging.INFO: grey + _format + reset,
        logging.WARNING: yellow + _format + reset,
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno, self._format)
        return logging.Formatter(log_fmt).format(record)


def get_logger(name="msax", level=logging.WARNING, stream=None):
    logger = logging.getLogger(name)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    # stdout is reserved for the symbols
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(CustomFormatter())
    logger.addHandler(handler)

    return logger
