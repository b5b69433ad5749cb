"""Logging and terminal color setup for git-walker."""

import logging
import sys

LOGGER_NAME = "git-walker"

ANSI_CODES = {
    "RESET": "\033[0m",
    "BOLD": "\033[1m",
    "DIM": "\033[2m",
    "RED": "\033[31m",
    "GREEN": "\033[32m",
    "YELLOW": "\033[33m",
    "CYAN": "\033[36m",
    "WHITE": "\033[37m",
    "BG_RED": "\033[41m",
}


class Colors:
    """Current ANSI codes, blank strings once colors are disabled.

    The CLI calls ``Colors.init()`` once; output code reads the attributes
    at print time.
    """

    RESET: str
    BOLD: str
    DIM: str
    RED: str
    GREEN: str
    YELLOW: str
    CYAN: str
    WHITE: str
    BG_RED: str

    @classmethod
    def enable(cls):
        for name, code in ANSI_CODES.items():
            setattr(cls, name, code)

    @classmethod
    def disable(cls):
        for name in ANSI_CODES:
            setattr(cls, name, "")

    @classmethod
    def init(cls):
        """Turn colors off when stdout is not a terminal."""
        if not sys.stdout.isatty():
            cls.disable()

    @classmethod
    def paint(cls, text: str, *codes: str) -> str:
        return f"{''.join(codes)}{text}{cls.RESET}"


Colors.enable()


class ColoredFormatter(logging.Formatter):
    """Formatter coloring the level name, and the message for warnings and up."""

    LEVEL_COLORS = {
        logging.DEBUG: "DIM",
        logging.INFO: "CYAN",
        logging.WARNING: "YELLOW",
        logging.ERROR: "RED",
        logging.CRITICAL: "BG_RED",
    }

    def format(self, record):
        # Looked up at format time so Colors.disable() takes effect
        color = getattr(Colors, self.LEVEL_COLORS.get(record.levelno, "RESET"))
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = Colors.paint(record.levelname, color)
        if record.levelno >= logging.WARNING:
            record.msg = Colors.paint(record.getMessage(), color)
            record.args = None
        return super().format(record)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Set up the git-walker logger.

    Args:
        verbose: If True, show DEBUG level messages with level prefix.
                 If False, show INFO+ messages without prefix.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()
    logger.propagate = False

    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    # stdout keeps log lines ordered with the per-commit results
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    fmt = "%(levelname)s %(message)s" if verbose else "%(message)s"
    handler.setFormatter(ColoredFormatter(fmt))

    logger.addHandler(handler)
    return logger
